"""
launchpad-deployments: deploy, link and verify the TokenRegistry / TokenFactory pair
"""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    AccountNotFoundError,
    ArtifactNotFoundError,
    DefectiveArtifactError,
    DeploymentError,
    EventNotFoundError,
    NetworkNotFoundError,
    ReceiptNotFoundError,
    TokenNotRegisteredError,
    TransactionRevertedError,
    VerificationError,
)
from .pipeline import DeploymentPipeline, deploy
from .smoke import SmokeTestParams, SmokeTestReport, run_smoke_test
from .types import (
    DeploymentTarget,
    NetworkContext,
    PipelineOutcome,
    PipelineResult,
    PipelineStatus,
    PipelineStep,
    TokenInfo,
    VerificationStatus,
)

try:
    __version__ = version("launchpad-deployments")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "DeploymentPipeline",
    "deploy",
    "run_smoke_test",
    "SmokeTestParams",
    "SmokeTestReport",
    "DeploymentTarget",
    "NetworkContext",
    "PipelineOutcome",
    "PipelineResult",
    "PipelineStatus",
    "PipelineStep",
    "TokenInfo",
    "VerificationStatus",
    "DeploymentError",
    "NetworkNotFoundError",
    "AccountNotFoundError",
    "ArtifactNotFoundError",
    "DefectiveArtifactError",
    "TransactionRevertedError",
    "ReceiptNotFoundError",
    "EventNotFoundError",
    "TokenNotRegisteredError",
    "VerificationError",
]
