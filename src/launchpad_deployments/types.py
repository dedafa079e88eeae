"""Data types and dataclasses for launchpad-deployments library."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class NetworkContext:
    """Identifies the chain a run targets."""

    name: str  # e.g., "baseSepolia"
    chain_id: int
    is_local: bool  # Local networks skip confirmations and verification


@dataclass(frozen=True)
class DeploymentTarget:
    """A contract to deploy and the constructor arguments to deploy it with."""

    name: str  # Artifact name, e.g., "TokenRegistry"
    constructor_args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class PipelineResult:
    """Addresses produced by a pipeline run (either may be missing on failure)."""

    token_registry: Optional[str] = None
    token_factory: Optional[str] = None

    @property
    def complete(self) -> bool:
        return self.token_registry is not None and self.token_factory is not None

    def as_dict(self) -> Dict[str, Optional[str]]:
        """Serialise using the contract role names."""
        return {
            "tokenRegistry": self.token_registry,
            "tokenFactory": self.token_factory,
        }


class PipelineStep(Enum):
    """
    Steps of the deployment pipeline, in execution order.

    Value strings are used in log lines and CLI output.
    """

    RESOLVE_SIGNER = "resolve-signer"
    DEPLOY_REGISTRY = "deploy-registry"
    DEPLOY_FACTORY = "deploy-factory"
    LINK = "link"
    AWAIT_CONFIRMATIONS = "await-confirmations"
    VERIFY = "verify"


class PipelineStatus(Enum):
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class VerificationStatus(Enum):
    """Outcome of a source verification attempt."""

    VERIFIED = "verified"
    ALREADY_VERIFIED = "already-verified"
    FAILED = "failed"
    SKIPPED = "skipped"  # Local network, nothing attempted


@dataclass(frozen=True)
class PipelineOutcome:
    """
    Tagged result of a pipeline run.

    On failure, ``result`` holds whatever was deployed before the failing step
    so an operator can resume by hand instead of redeploying everything.
    """

    status: PipelineStatus
    result: PipelineResult
    failed_step: Optional[PipelineStep] = None
    error: Optional[BaseException] = None
    verification: Dict[str, VerificationStatus] = field(default_factory=dict)

    @property
    def succeeded(self) -> bool:
        return self.status is PipelineStatus.SUCCEEDED

    @property
    def exit_code(self) -> int:
        return 0 if self.succeeded else 1


@dataclass(frozen=True)
class TokenInfo:
    """Token record stored by TokenRegistry."""

    name: str
    symbol: str
    creator: str  # Checksummed address
    is_clanker: bool
    created_at: datetime  # UTC
    metadata_uri: str
    verified: bool

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "symbol": self.symbol,
            "creator": self.creator,
            "isClanker": self.is_clanker,
            "createdAt": self.created_at.isoformat(),
            "metadataURI": self.metadata_uri,
            "verified": self.verified,
        }
