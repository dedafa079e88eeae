"""Capabilities consumed by the deployment pipeline and the smoke test."""

from typing import Any, Dict, List, Optional, Protocol, Sequence

from .types import DeploymentTarget, VerificationStatus


class TransactionReceipt(Protocol):
    """A mined transaction."""

    transaction_hash: str
    block_number: int

    def wait(self, confirmations: int) -> None:
        """Block until the transaction has at least ``confirmations`` confirmations."""
        ...

    def events(self, event_name: str) -> List[Dict[str, Any]]:
        """Return the decoded arguments of every ``event_name`` log in the receipt."""
        ...


class DeployedContract(Protocol):
    """A contract with an assigned address."""

    address: str
    creation_receipt: Optional[TransactionReceipt]  # None when attached to an existing address

    def transact(self, function: str, *args: Any, value: int = 0) -> TransactionReceipt:
        """Send a state-changing call and block until it is mined."""
        ...

    def call(self, function: str, *args: Any) -> Any:
        ...


class Deployer(Protocol):
    """Creates contracts and attaches to existing ones."""

    def signer(self) -> str:
        """
        Address of the deploying account.

        Raises:
            AccountNotFoundError: If no account is configured
        """
        ...

    def deploy(self, target: DeploymentTarget, value: int = 0) -> DeployedContract:
        """Deploy ``target`` and block until the creation transaction is mined."""
        ...

    def at(self, contract_name: str, address: str) -> DeployedContract:
        ...


class Verifier(Protocol):
    """Publishes contract source to a block explorer."""

    def verify(
        self, contract_name: str, address: str, constructor_args: Sequence[Any]
    ) -> VerificationStatus:
        """
        Verify source for a deployed contract.

        Returns:
            VerificationStatus.VERIFIED or VerificationStatus.ALREADY_VERIFIED

        Raises:
            VerificationError: If the explorer rejects or fails the request
        """
        ...
