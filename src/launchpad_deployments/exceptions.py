"""Custom exception classes for launchpad-deployments library."""


class DeploymentError(Exception):
    """Base exception for deployment-related errors."""

    pass


class NetworkNotFoundError(DeploymentError, ValueError):
    """Raised when requested network is not configured."""

    pass


class AccountNotFoundError(DeploymentError, LookupError):
    """Raised when no signing account is available for the network."""

    pass


class ArtifactNotFoundError(DeploymentError, FileNotFoundError):
    """Raised when a compiled contract artifact is not found."""

    pass


class DefectiveArtifactError(DeploymentError, ValueError):
    """Raised when an artifact is missing bytecode or its build info."""

    pass


class TransactionRevertedError(DeploymentError, RuntimeError):
    """Raised when a transaction is mined with a failed status."""

    def __init__(self, message: str, transaction_hash: str = ""):
        super().__init__(message)
        self.transaction_hash = transaction_hash


class ReceiptNotFoundError(DeploymentError, LookupError):
    """Raised when a deployed contract has no creation receipt to confirm."""

    pass


class EventNotFoundError(DeploymentError, ValueError):
    """Raised when an expected event is absent from a transaction receipt."""

    pass


class TokenNotRegisteredError(DeploymentError, LookupError):
    """Raised when TokenRegistry holds no record for a token address."""

    pass


class VerificationError(DeploymentError, RuntimeError):
    """Raised when the block explorer rejects or fails a verification."""

    pass
