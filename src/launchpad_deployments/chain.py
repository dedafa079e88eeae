"""web3.py implementation of the deployer capability."""

import logging
import time
from typing import Any, Dict, List, Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import Web3
from web3.contract import Contract
from web3.exceptions import ContractLogicError, TransactionNotFound
from web3.logs import DISCARD

from .artifacts import ArtifactStore
from .config import DeploymentSettings
from .exceptions import AccountNotFoundError, EventNotFoundError, TransactionRevertedError
from .types import DeploymentTarget

logger = logging.getLogger(__name__)


class Web3Receipt:
    """Mined transaction receipt, able to wait for further confirmations."""

    def __init__(
        self,
        w3: Web3,
        receipt: Dict[str, Any],
        contract: Optional[Contract] = None,
        poll_interval: float = 2.0,
    ):
        self._w3 = w3
        self._receipt = receipt
        self._contract = contract
        self._poll_interval = poll_interval
        self.transaction_hash: str = Web3.to_hex(receipt["transactionHash"])
        self.block_number: int = receipt["blockNumber"]

    def confirmations(self) -> int:
        """Number of blocks from the transaction's block to the chain head, inclusive."""
        return max(0, self._w3.eth.block_number - self.block_number + 1)

    def wait(self, confirmations: int) -> None:
        while True:
            current = self.confirmations()
            if current >= confirmations:
                return
            logger.debug(
                "%s has %d/%d confirmations", self.transaction_hash, current, confirmations
            )
            time.sleep(self._poll_interval)

    def events(self, event_name: str) -> List[Dict[str, Any]]:
        """
        Decode ``event_name`` logs emitted by the contract this receipt belongs to.

        Raises:
            EventNotFoundError: If the event is not declared in the contract ABI
        """
        if self._contract is None or not any(
            item.get("type") == "event" and item.get("name") == event_name
            for item in self._contract.abi
        ):
            raise EventNotFoundError(f"Event '{event_name}' not found in contract ABI")

        event = getattr(self._contract.events, event_name)()
        return [dict(log["args"]) for log in event.process_receipt(self._receipt, errors=DISCARD)]


class Web3Contract:
    """A deployed contract reachable through a Web3Deployer."""

    def __init__(
        self,
        deployer: "Web3Deployer",
        contract: Contract,
        creation_receipt: Optional[Web3Receipt] = None,
    ):
        self._deployer = deployer
        self._contract = contract
        self.address: str = contract.address
        self.creation_receipt = creation_receipt

    def transact(self, function: str, *args: Any, value: int = 0) -> Web3Receipt:
        bound = getattr(self._contract.functions, function)(*args)
        label = f"{function} on {self.address}"
        tx = self._deployer.build(bound, value, label)
        return self._deployer.send(tx, self._contract, label)

    def call(self, function: str, *args: Any) -> Any:
        return getattr(self._contract.functions, function)(*args).call()


class Web3Deployer:
    """
    Deploys Hardhat-compiled contracts over JSON-RPC.

    Transactions are signed with ``account`` when given, otherwise sent with
    ``eth_sendTransaction`` from the node's first unlocked account. Node
    accounts are only used when ``allow_node_accounts`` is set (local Hardhat
    nodes). Every send blocks until the receipt is available; there is no
    client-side timeout.
    """

    def __init__(
        self,
        w3: Web3,
        artifacts: ArtifactStore,
        account: Optional[LocalAccount] = None,
        gas_price: Optional[int] = None,
        poll_interval: float = 2.0,
        allow_node_accounts: bool = True,
    ):
        self.w3 = w3
        self.artifacts = artifacts
        self.account = account
        self.gas_price = gas_price
        self.poll_interval = poll_interval
        self.allow_node_accounts = allow_node_accounts
        self._sender: Optional[str] = None

    @classmethod
    def from_settings(cls, settings: DeploymentSettings) -> "Web3Deployer":
        w3 = Web3(Web3.HTTPProvider(settings.rpc_url))
        account = Account.from_key(settings.private_key) if settings.private_key else None
        return cls(
            w3,
            ArtifactStore(settings.artifacts_dir),
            account=account,
            gas_price=settings.gas_price,
            allow_node_accounts=settings.network.is_local,
        )

    def signer(self) -> str:
        """
        Address of the deploying account.

        Raises:
            AccountNotFoundError: If no private key is set and node accounts are
                not allowed or the node has none
        """
        if self._sender is not None:
            return self._sender

        if self.account is not None:
            self._sender = self.account.address
        elif not self.allow_node_accounts:
            raise AccountNotFoundError("No deployer account: set PRIVATE_KEY for this network")
        else:
            accounts = self.w3.eth.accounts
            if not accounts:
                raise AccountNotFoundError(
                    "No deployer account: set PRIVATE_KEY or use a node with unlocked accounts"
                )
            self._sender = accounts[0]
        return self._sender

    def deploy(self, target: DeploymentTarget, value: int = 0) -> Web3Contract:
        artifact = self.artifacts.load(target.name)
        factory = self.w3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        tx = self.build(factory.constructor(*target.constructor_args), value, label=target.name)
        receipt = self._mine(tx, target.name)

        contract = self.w3.eth.contract(address=receipt["contractAddress"], abi=artifact.abi)
        creation = Web3Receipt(self.w3, receipt, contract, self.poll_interval)
        return Web3Contract(self, contract, creation)

    def at(self, contract_name: str, address: str) -> Web3Contract:
        artifact = self.artifacts.load(contract_name)
        contract = self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=artifact.abi)
        return Web3Contract(self, contract)

    def build(self, bound: Any, value: int, label: str) -> Dict[str, Any]:
        """
        Build a transaction for a bound constructor or contract function.

        Raises:
            TransactionRevertedError: If gas estimation shows the call would revert
        """
        sender = self.signer()
        params: Dict[str, Any] = {
            "from": sender,
            "value": value,
            "nonce": self.w3.eth.get_transaction_count(sender, "pending"),
        }
        if self.gas_price is not None:
            params["gasPrice"] = self.gas_price

        try:
            return bound.build_transaction(params)
        except ContractLogicError as e:
            raise TransactionRevertedError(f"{label} would revert: {e}") from e

    def send(
        self, tx: Dict[str, Any], contract: Optional[Contract] = None, label: str = "transaction"
    ) -> Web3Receipt:
        """Submit a built transaction and block until it is mined successfully."""
        receipt = self._mine(tx, label)
        return Web3Receipt(self.w3, receipt, contract, self.poll_interval)

    def wait_for_receipt(self, tx_hash: Any) -> Dict[str, Any]:
        while True:
            try:
                return self.w3.eth.get_transaction_receipt(tx_hash)
            except TransactionNotFound:
                time.sleep(self.poll_interval)

    def _submit(self, tx: Dict[str, Any]) -> Any:
        if self.account is not None:
            signed = self.account.sign_transaction(tx)
            tx_hash = self.w3.eth.send_raw_transaction(signed.raw_transaction)
        else:
            tx_hash = self.w3.eth.send_transaction(tx)
        logger.debug("Sent transaction %s", Web3.to_hex(tx_hash))
        return tx_hash

    def _mine(self, tx: Dict[str, Any], label: str) -> Dict[str, Any]:
        receipt = self.wait_for_receipt(self._submit(tx))
        if receipt["status"] == 0:
            tx_hash = Web3.to_hex(receipt["transactionHash"])
            raise TransactionRevertedError(f"{label} reverted in {tx_hash}", tx_hash)
        return receipt
