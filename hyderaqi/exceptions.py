"""
Exception types for the HyderAQI dashboard core.

Remote-call failures are split by cause so callers can tell a missing
configuration apart from a transport problem or a malformed response.
"""


class HyderAQIError(Exception):
    """Base class for all errors raised by this package."""


class ServiceUnavailableError(HyderAQIError):
    """The LLM service cannot make remote calls (mock mode or no client)."""


class InferenceError(HyderAQIError):
    """The remote inference call itself failed (network, auth, quota)."""


class ResponseFormatError(HyderAQIError):
    """The remote service answered with text that is not a JSON object."""


class SchemaValidationError(HyderAQIError):
    """A decoded response is missing a required field or has a wrong type."""


class InsightRequestError(HyderAQIError):
    """
    Raised by InsightRequestor.request_insights when insights could not be obtained.

    The underlying error is available as ``__cause__`` and ``cause``.
    """

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause
