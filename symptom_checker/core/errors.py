"""
Relay errors for clean API error handling.

Every error the relay surfaces to a caller is a RelayError: the API maps it to
the single failure shape {"error": message} with the error's status code.
Degraded dependencies (web search) and best-effort ones (log store) never
raise these.
"""


class RelayError(Exception):
    """Base class for failures that abort a relay request."""

    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class MessageRequiredError(RelayError):
    """Raised when the request has no usable message. Rejected before any external call."""

    status_code = 400

    def __init__(self, message: str = "Message is required.") -> None:
        super().__init__(message)


class ConfigurationError(RelayError):
    """Raised when a required provider credential is missing."""

    status_code = 500


class InferenceError(RelayError):
    """Raised when the inference provider fails or returns an unusable completion."""

    status_code = 502
