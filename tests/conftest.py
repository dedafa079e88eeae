"""Shared pytest fixtures for launchpad-deployments tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pytest

from launchpad_deployments.types import DeploymentTarget, NetworkContext, VerificationStatus

REGISTRY_ADDRESS = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
FACTORY_ADDRESS = "0xe7f1725e7734ce288f8367e1bb143e90bb3f0512"
DEPLOYER_ADDRESS = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"


class FakeReceipt:
    """Receipt that records confirmation waits."""

    def __init__(self, log: List[Tuple], label: str, events: Optional[Dict[str, List[Dict]]] = None):
        self._log = log
        self.label = label
        self.transaction_hash = f"0x{label}"
        self.block_number = 1
        self._events = events or {}
        self.fail_wait: Optional[Exception] = None

    def wait(self, confirmations: int) -> None:
        self._log.append(("wait", self.label, confirmations))
        if self.fail_wait is not None:
            raise self.fail_wait

    def events(self, event_name: str) -> List[Dict[str, Any]]:
        return list(self._events.get(event_name, []))


class FakeContract:
    """Deployed contract that records transactions and answers calls from a table."""

    def __init__(self, log: List[Tuple], name: str, address: str, creation_receipt=None):
        self._log = log
        self.name = name
        self.address = address
        self.creation_receipt = creation_receipt
        self.fail_transact: Optional[Exception] = None
        self.transaction_events: Dict[str, List[Dict]] = {}
        self.call_results: Dict[str, Any] = {}

    def transact(self, function: str, *args: Any, value: int = 0) -> FakeReceipt:
        self._log.append(("transact", self.name, function, args, value))
        if self.fail_transact is not None:
            raise self.fail_transact
        return FakeReceipt(self._log, function, self.transaction_events)

    def call(self, function: str, *args: Any) -> Any:
        self._log.append(("call", self.name, function, args))
        return self.call_results[function]


class FakeDeployer:
    """Deployer capability backed by in-memory contracts."""

    addresses = {"TokenRegistry": REGISTRY_ADDRESS, "TokenFactory": FACTORY_ADDRESS}

    def __init__(self, log: List[Tuple]):
        self._log = log
        self.fail_signer: Optional[Exception] = None
        self.fail_deploy: Dict[str, Exception] = {}
        self.fail_transact: Dict[str, Exception] = {}
        self.contracts: Dict[str, FakeContract] = {}
        self.targets: Dict[str, DeploymentTarget] = {}

    def signer(self) -> str:
        self._log.append(("signer",))
        if self.fail_signer is not None:
            raise self.fail_signer
        return DEPLOYER_ADDRESS

    def deploy(self, target: DeploymentTarget, value: int = 0) -> FakeContract:
        self._log.append(("deploy", target.name, target.constructor_args))
        if target.name in self.fail_deploy:
            raise self.fail_deploy[target.name]

        contract = self.contracts.get(target.name) or FakeContract(
            self._log, target.name, self.addresses[target.name]
        )
        contract.creation_receipt = FakeReceipt(self._log, f"create-{target.name}")
        contract.fail_transact = self.fail_transact.get(target.name)
        self.contracts[target.name] = contract
        self.targets[target.name] = target
        return contract

    def at(self, contract_name: str, address: str) -> FakeContract:
        self._log.append(("at", contract_name, address))
        if contract_name not in self.contracts:
            self.contracts[contract_name] = FakeContract(self._log, contract_name, address)
        return self.contracts[contract_name]


class FakeVerifier:
    """Verifier capability; a result may be a status or an exception to raise."""

    def __init__(self, log: List[Tuple]):
        self._log = log
        self.results: Dict[str, Any] = {}

    def verify(self, contract_name: str, address: str, constructor_args) -> VerificationStatus:
        self._log.append(("verify", contract_name, address, tuple(constructor_args)))
        result = self.results.get(contract_name, VerificationStatus.VERIFIED)
        if isinstance(result, Exception):
            raise result
        return result


@pytest.fixture
def call_log() -> List[Tuple]:
    """Ordered record of every capability call made during a test."""
    return []


@pytest.fixture
def deployer(call_log: List[Tuple]) -> FakeDeployer:
    return FakeDeployer(call_log)


@pytest.fixture
def verifier(call_log: List[Tuple]) -> FakeVerifier:
    return FakeVerifier(call_log)


@pytest.fixture
def local_network() -> NetworkContext:
    return NetworkContext(name="hardhat", chain_id=31337, is_local=True)


@pytest.fixture
def remote_network() -> NetworkContext:
    return NetworkContext(name="baseSepolia", chain_id=84532, is_local=False)


REGISTRY_ABI = [
    {"inputs": [], "stateMutability": "nonpayable", "type": "constructor"},
    {
        "inputs": [{"internalType": "address", "name": "_tokenFactory", "type": "address"}],
        "name": "setTokenFactory",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function",
    },
]

FACTORY_ABI = [
    {
        "inputs": [
            {"internalType": "address", "name": "_tokenRegistry", "type": "address"},
            {"internalType": "address", "name": "_uniswapV3Factory", "type": "address"},
            {"internalType": "address", "name": "_weth", "type": "address"},
        ],
        "stateMutability": "nonpayable",
        "type": "constructor",
    },
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "tokenAddress", "type": "address"},
            {"indexed": True, "internalType": "address", "name": "creator", "type": "address"},
        ],
        "name": "TokenCreated",
        "type": "event",
    },
]


def _write_artifact(artifacts_dir: Path, name: str, abi: List[Dict], bytecode: str) -> None:
    contract_dir = artifacts_dir / "contracts" / f"{name}.sol"
    contract_dir.mkdir(parents=True, exist_ok=True)
    with open(contract_dir / f"{name}.json", "w") as f:
        json.dump(
            {
                "_format": "hh-sol-artifact-1",
                "contractName": name,
                "sourceName": f"contracts/{name}.sol",
                "abi": abi,
                "bytecode": bytecode,
                "deployedBytecode": bytecode,
            },
            f,
        )
    with open(contract_dir / f"{name}.dbg.json", "w") as f:
        json.dump({"_format": "hh-sol-dbg-1", "buildInfo": "../../build-info/abc123.json"}, f)


@pytest.fixture
def artifacts_dir(tmp_path: Path) -> Path:
    """Create a minimal Hardhat artifacts directory for both contracts."""
    root = tmp_path / "artifacts"
    _write_artifact(root, "TokenRegistry", REGISTRY_ABI, "0x6080604052")
    _write_artifact(root, "TokenFactory", FACTORY_ABI, "0x6080604053")

    build_info_dir = root / "build-info"
    build_info_dir.mkdir(parents=True)
    with open(build_info_dir / "abc123.json", "w") as f:
        json.dump(
            {
                "_format": "hh-sol-build-info-1",
                "solcVersion": "0.8.20",
                "solcLongVersion": "0.8.20+commit.a1b79de6",
                "input": {
                    "language": "Solidity",
                    "sources": {"contracts/TokenRegistry.sol": {"content": "// registry"}},
                    "settings": {"optimizer": {"enabled": True, "runs": 200}},
                },
            },
            f,
        )
    return root
