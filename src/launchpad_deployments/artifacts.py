"""Hardhat compilation artifact loading for launchpad-deployments library."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .exceptions import ArtifactNotFoundError, DefectiveArtifactError


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled contract, as written by `hardhat compile`."""

    contract_name: str
    source_name: str  # e.g., "contracts/TokenRegistry.sol"
    abi: List[Dict[str, Any]]
    bytecode: str

    @property
    def fully_qualified_name(self) -> str:
        return f"{self.source_name}:{self.contract_name}"

    def constructor_input_types(self) -> List[str]:
        """ABI types of the constructor inputs, in order (empty without a constructor)."""
        for item in self.abi:
            if item.get("type") == "constructor":
                return [_canonical_type(i) for i in item.get("inputs", [])]
        return []


@dataclass(frozen=True)
class BuildInfo:
    """Compiler input and version for the compilation that produced an artifact."""

    solc_long_version: str  # e.g., "0.8.20+commit.a1b79de6"
    input: Dict[str, Any]  # Solidity standard JSON input


def _canonical_type(param: Dict[str, Any]) -> str:
    """Expand tuple types into their component form, e.g. "(address,uint256)[]"."""
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(_canonical_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


class ArtifactStore:
    """Reads contract artifacts from a Hardhat artifacts directory."""

    def __init__(self, artifacts_dir: Union[Path, str]):
        """
        Initialize the store.

        Args:
            artifacts_dir: Hardhat `artifacts` directory
        """
        self.artifacts_dir = Path(artifacts_dir)
        self._artifacts: Dict[str, ContractArtifact] = {}
        self._build_infos: Dict[str, BuildInfo] = {}

    def artifact_path(self, contract_name: str) -> Path:
        """
        Locate the artifact for a contract.

        Looks at contracts/<Name>.sol/<Name>.json first, then anywhere under
        the artifacts directory (contracts declared in differently named files).

        Raises:
            ArtifactNotFoundError: If no artifact exists for the contract
        """
        conventional = self.artifacts_dir / "contracts" / f"{contract_name}.sol" / f"{contract_name}.json"
        if conventional.exists():
            return conventional

        matches = sorted(
            p for p in self.artifacts_dir.glob(f"**/{contract_name}.json") if "build-info" not in p.parts
        )
        if not matches:
            raise ArtifactNotFoundError(
                f"Artifact for '{contract_name}' not found in {self.artifacts_dir}. "
                "Run `npx hardhat compile` first."
            )
        return matches[0]

    def load(self, contract_name: str) -> ContractArtifact:
        """
        Load a compiled contract.

        Raises:
            ArtifactNotFoundError: If no artifact exists for the contract
            DefectiveArtifactError: If the artifact has no deployable bytecode
        """
        if contract_name in self._artifacts:
            return self._artifacts[contract_name]

        path = self.artifact_path(contract_name)
        with open(path) as f:
            data = json.load(f)

        bytecode = data.get("bytecode")
        if not bytecode or bytecode == "0x":
            # Interfaces and abstract contracts compile without bytecode
            raise DefectiveArtifactError(f"Artifact has no bytecode: {path}")

        artifact = ContractArtifact(
            contract_name=data.get("contractName", contract_name),
            source_name=data["sourceName"],
            abi=data["abi"],
            bytecode=bytecode,
        )
        self._artifacts[contract_name] = artifact
        return artifact

    def build_info(self, contract_name: str) -> BuildInfo:
        """
        Load the build info referenced by a contract's debug file (<Name>.dbg.json).

        Raises:
            ArtifactNotFoundError: If the artifact or its build info is missing
            DefectiveArtifactError: If the debug file has no build info reference
        """
        if contract_name in self._build_infos:
            return self._build_infos[contract_name]

        dbg_path = self.artifact_path(contract_name).with_suffix(".dbg.json")
        if not dbg_path.exists():
            raise ArtifactNotFoundError(f"Debug file not found: {dbg_path}")

        with open(dbg_path) as f:
            reference: Optional[str] = json.load(f).get("buildInfo")
        if not reference:
            raise DefectiveArtifactError(f"Missing buildInfo reference in {dbg_path}")

        # Reference is relative to the debug file's directory
        build_info_path = (dbg_path.parent / reference).resolve()
        if not build_info_path.exists():
            raise ArtifactNotFoundError(f"Build info not found: {build_info_path}")

        with open(build_info_path) as f:
            data = json.load(f)

        build_info = BuildInfo(solc_long_version=data["solcLongVersion"], input=data["input"])
        self._build_infos[contract_name] = build_info
        return build_info
