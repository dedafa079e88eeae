"""Deployment pipeline for the TokenRegistry / TokenFactory pair."""

import logging

from .constants import TOKEN_FACTORY, TOKEN_REGISTRY, VERIFICATION_CONFIRMATIONS
from .exceptions import ReceiptNotFoundError
from .interfaces import DeployedContract, Deployer, Verifier
from .types import (
    DeploymentTarget,
    NetworkContext,
    PipelineOutcome,
    PipelineResult,
    PipelineStatus,
    PipelineStep,
    VerificationStatus,
)

logger = logging.getLogger(__name__)


class DeploymentPipeline:
    """
    Deploys TokenRegistry and TokenFactory, links them and verifies both.

    Steps run strictly in order and the first fatal failure ends the run.
    Nothing already deployed is rolled back: a failed outcome carries the
    addresses that made it on chain.
    """

    def __init__(
        self,
        deployer: Deployer,
        verifier: Verifier,
        network: NetworkContext,
        uniswap_v3_factory: str,
        weth: str,
        confirmations: int = VERIFICATION_CONFIRMATIONS,
    ):
        """
        Initialize the pipeline.

        Args:
            deployer: Deploys contracts and sends transactions
            verifier: Publishes source code to the block explorer
            network: Target network; local networks skip confirmations and verification
            uniswap_v3_factory: Uniswap V3 factory address on the target network
            weth: Wrapped native token address on the target network
            confirmations: Confirmations to wait for before verifying
        """
        self.deployer = deployer
        self.verifier = verifier
        self.network = network
        self.uniswap_v3_factory = uniswap_v3_factory
        self.weth = weth
        self.confirmations = confirmations

    def run(self) -> PipelineOutcome:
        """
        Execute the pipeline.

        Returns:
            PipelineOutcome; FAILED outcomes hold the partial result, the failing
            step and the error that ended the run
        """
        result = PipelineResult()
        step = PipelineStep.RESOLVE_SIGNER
        logger.info("Starting deployment on %s (chain %d)", self.network.name, self.network.chain_id)

        try:
            signer = self.deployer.signer()
            logger.info("Deploying contracts with the account: %s", signer)

            step = PipelineStep.DEPLOY_REGISTRY
            registry_target = DeploymentTarget(TOKEN_REGISTRY)
            registry = self._deploy(registry_target)
            result = PipelineResult(token_registry=registry.address)

            step = PipelineStep.DEPLOY_FACTORY
            factory_target = DeploymentTarget(
                TOKEN_FACTORY, (registry.address, self.uniswap_v3_factory, self.weth)
            )
            factory = self._deploy(factory_target)
            result = PipelineResult(token_registry=registry.address, token_factory=factory.address)

            step = PipelineStep.LINK
            logger.info("Setting %s in %s...", TOKEN_FACTORY, TOKEN_REGISTRY)
            registry.transact("setTokenFactory", factory.address)
            logger.info("%s set in %s", TOKEN_FACTORY, TOKEN_REGISTRY)

            if self.network.is_local:
                logger.info("Local network %s: skipping confirmations and verification", self.network.name)
                verification = {
                    TOKEN_REGISTRY: VerificationStatus.SKIPPED,
                    TOKEN_FACTORY: VerificationStatus.SKIPPED,
                }
            else:
                step = PipelineStep.AWAIT_CONFIRMATIONS
                self._await_confirmations(registry, factory)

                step = PipelineStep.VERIFY
                verification = {
                    TOKEN_REGISTRY: self._verify(registry_target, registry.address),
                    TOKEN_FACTORY: self._verify(factory_target, factory.address),
                }
        except Exception as e:
            logger.error("Deployment failed at step '%s': %s", step.value, e)
            if result.token_registry is not None:
                logger.error("Partial deployment left on chain: %s", result.as_dict())
            return PipelineOutcome(
                status=PipelineStatus.FAILED,
                result=result,
                failed_step=step,
                error=e,
            )

        logger.info("Deployment completed!")
        return PipelineOutcome(
            status=PipelineStatus.SUCCEEDED,
            result=result,
            verification=verification,
        )

    def _deploy(self, target: DeploymentTarget) -> DeployedContract:
        logger.info("Deploying %s...", target.name)
        contract = self.deployer.deploy(target)
        logger.info("%s deployed to: %s", target.name, contract.address)
        return contract

    def _await_confirmations(self, *contracts: DeployedContract) -> None:
        logger.info("Waiting for %d block confirmations...", self.confirmations)
        for contract in contracts:
            receipt = contract.creation_receipt
            if receipt is None:
                raise ReceiptNotFoundError(
                    f"No creation receipt for contract at {contract.address}"
                )
            receipt.wait(self.confirmations)

    def _verify(self, target: DeploymentTarget, address: str) -> VerificationStatus:
        """Verify one contract; failures are logged and never raised."""
        logger.info("Verifying %s at %s...", target.name, address)
        try:
            status = self.verifier.verify(target.name, address, target.constructor_args)
        except Exception as e:
            logger.warning("Verification of %s at %s failed: %s", target.name, address, e)
            return VerificationStatus.FAILED

        logger.info("%s verification: %s", target.name, status.value)
        return status


def deploy(
    deployer: Deployer,
    verifier: Verifier,
    network: NetworkContext,
    uniswap_v3_factory: str,
    weth: str,
) -> PipelineOutcome:
    """Run the deployment pipeline once with default settings."""
    return DeploymentPipeline(deployer, verifier, network, uniswap_v3_factory, weth).run()

