"""Error types for the Trends Slack Bot."""


class RelayError(Exception):
    """Base class for failures that end the handling of one request."""


class ConfigurationError(RelayError):
    """Raised when required process configuration is missing or invalid."""


class DecodeError(RelayError):
    """Raised when the inbound request body cannot be decoded."""


class ExtractionError(RelayError):
    """Raised when no region code can be derived from the message text."""


class FetchError(RelayError):
    """Raised when the trends feed cannot be fetched or decoded.

    Attributes:
        kind: "transport" when the GET did not complete, "decode" when the
            body is not a usable RSS document
    """

    def __init__(self, message: str, kind: str = "transport"):
        super().__init__(message)
        self.kind = kind


class PostError(RelayError):
    """Raised when the message post to Slack fails.

    Attributes:
        kind: "transport" for network failures, "http" for non-2xx
            responses, "api" when Slack answers with ``"ok": false``
        api_error: Slack's error code when kind is "api"
    """

    def __init__(self, message: str, kind: str = "transport", api_error: str | None = None):
        super().__init__(message)
        self.kind = kind
        self.api_error = api_error
