"""Block explorer source verification for launchpad-deployments library."""

import json
import logging
import time
from typing import Any, Dict, Optional, Sequence

import requests
from eth_abi import encode

from .artifacts import ArtifactStore
from .config import DeploymentSettings
from .exceptions import VerificationError
from .types import VerificationStatus

logger = logging.getLogger(__name__)

PENDING_MARKER = "pending in queue"
ALREADY_VERIFIED_MARKER = "already verified"
PASS_MARKER = "pass - verified"


def encode_constructor_args(types: Sequence[str], args: Sequence[Any]) -> str:
    """
    ABI-encode constructor arguments the way Etherscan expects them.

    Args:
        types: Constructor input types, e.g. ["address", "address", "address"]
        args: Values used at deployment time

    Returns:
        Hex string without 0x prefix (empty for constructors without inputs)

    Raises:
        VerificationError: If the number of arguments does not match the constructor
    """
    if len(types) != len(args):
        raise VerificationError(
            f"Constructor takes {len(types)} arguments, {len(args)} given"
        )
    if not types:
        return ""
    return encode(list(types), list(args)).hex()


class EtherscanVerifier:
    """Verifies contracts through an Etherscan-compatible API (e.g. BaseScan)."""

    def __init__(
        self,
        api_url: Optional[str],
        api_key: Optional[str],
        artifacts: ArtifactStore,
        poll_interval: float = 5.0,
        max_status_checks: int = 20,
    ):
        """
        Initialize the verifier.

        Args:
            api_url: Explorer API endpoint, e.g. https://api-sepolia.basescan.org/api
            api_key: Explorer API key
            artifacts: Source of ABIs and compiler inputs
            poll_interval: Seconds between verification status checks
            max_status_checks: Status checks before giving up on a pending submission
        """
        self.api_url = api_url
        self.api_key = api_key
        self.artifacts = artifacts
        self.poll_interval = poll_interval
        self.max_status_checks = max_status_checks

    @classmethod
    def from_settings(cls, settings: DeploymentSettings) -> "EtherscanVerifier":
        return cls(
            settings.explorer_api_url,
            settings.explorer_api_key,
            ArtifactStore(settings.artifacts_dir),
        )

    def verify(
        self, contract_name: str, address: str, constructor_args: Sequence[Any]
    ) -> VerificationStatus:
        """
        Submit source code for a deployed contract and wait for the result.

        Args:
            contract_name: Artifact name, e.g. "TokenFactory"
            address: Deployed contract address
            constructor_args: Exactly the arguments used at deployment time

        Returns:
            VerificationStatus.VERIFIED or VerificationStatus.ALREADY_VERIFIED

        Raises:
            VerificationError: If configuration is missing, the explorer rejects
                the submission, or a network error occurs
        """
        if not self.api_url:
            raise VerificationError("No block explorer API configured for this network")
        if not self.api_key:
            raise VerificationError("Block explorer API key required: set $ETHERSCAN_API_KEY")

        artifact = self.artifacts.load(contract_name)
        build_info = self.artifacts.build_info(contract_name)

        payload = {
            "apikey": self.api_key,
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": address,
            "sourceCode": json.dumps(build_info.input),
            "codeformat": "solidity-standard-json-input",
            "contractname": artifact.fully_qualified_name,
            "compilerversion": f"v{build_info.solc_long_version}",
            # Etherscan's parameter name is misspelled
            "constructorArguements": encode_constructor_args(
                artifact.constructor_input_types(), constructor_args
            ),
        }

        result = self._request("POST", payload)
        if result.get("status") != "1":
            message = str(result.get("result", ""))
            if ALREADY_VERIFIED_MARKER in message.lower():
                logger.info("%s at %s is already verified", contract_name, address)
                return VerificationStatus.ALREADY_VERIFIED
            raise VerificationError(f"Verification submission rejected: {message}")

        guid = result["result"]
        logger.debug("Verification of %s submitted with guid %s", contract_name, guid)
        return self._await_status(guid)

    def _await_status(self, guid: str) -> VerificationStatus:
        params = {
            "apikey": self.api_key,
            "module": "contract",
            "action": "checkverifystatus",
            "guid": guid,
        }

        for _ in range(self.max_status_checks):
            time.sleep(self.poll_interval)
            message = str(self._request("GET", params).get("result", ""))
            lowered = message.lower()

            if PENDING_MARKER in lowered:
                continue
            if PASS_MARKER in lowered:
                return VerificationStatus.VERIFIED
            if ALREADY_VERIFIED_MARKER in lowered:
                return VerificationStatus.ALREADY_VERIFIED
            raise VerificationError(f"Verification failed: {message}")

        raise VerificationError(
            f"Verification {guid} still pending after {self.max_status_checks} checks"
        )

    def _request(self, method: str, data: Dict[str, Any]) -> Dict[str, Any]:
        try:
            if method == "POST":
                response = requests.post(self.api_url, data=data, timeout=30)
            else:
                response = requests.get(self.api_url, params=data, timeout=30)

            # Check for HTTP errors
            if response.status_code != 200:
                raise VerificationError(
                    f"Explorer request failed with status {response.status_code}"
                )

            return response.json()

        except ValueError as e:
            raise VerificationError(f"Explorer returned invalid JSON: {e}") from e
        except requests.RequestException as e:
            raise VerificationError(f"Network error during explorer call: {e}") from e
