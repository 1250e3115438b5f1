"""Exception hierarchy for the address audit."""


class AuditError(Exception):
    """Base class for all audit errors."""


class ConfigurationError(AuditError):
    """Required setting is missing or invalid. Raised before any network call."""


class ExternalServiceError(AuditError):
    """Blockfrost answered with a non-success status or could not be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TransientServiceError(ExternalServiceError):
    """Rate limit, server error or transport failure. Worth retrying."""


class RetrievalError(AuditError):
    """Transaction list for an address could not be retrieved. Fatal for the run."""
