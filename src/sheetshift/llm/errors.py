"""Failure taxonomy for calls to the text-generation service."""


class InferenceError(Exception):
    """Base class for inference failures."""

    pass


class ConfigurationError(InferenceError):
    """Raised when the inference service is not configured (no API key)."""

    pass


class TransportError(InferenceError):
    """Raised on network failure or a non-success HTTP status."""

    def __init__(self, message: str, status_code: int = None):
        self.status_code = status_code
        super().__init__(message)


class EmptyResponseError(InferenceError):
    """Raised when the call succeeded but carried no text."""

    pass


class ExtractionError(InferenceError):
    """Raised when no JSON object can be found in the response text."""

    pass


class DecodeError(InferenceError):
    """Raised when the JSON object is invalid or has the wrong structure."""

    pass
