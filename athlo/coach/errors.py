"""Error types for the coaching core.

Only ConfigurationError and ContextValidationError are allowed to reach
callers. BackendError and TransportError are raised inside a provider and
converted to a degraded response at the operation boundary.
"""


class ConfigurationError(Exception):
    """Raised at construction time when the backend selection is unknown."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        self.message = message or f"Unsupported coaching provider: {key!r}"
        super().__init__(self.message)


class ContextValidationError(ValueError):
    """Raised when a context window configuration is invalid."""


class BackendError(Exception):
    """Raised when the backend answers with an error or an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        self.message = message
        super().__init__(message)


class TransportError(Exception):
    """Raised when the backend cannot be reached (network failure, timeout)."""
