"""Error taxonomy for the food detection pipeline.

Every failure the pipeline can produce is a ``DetectionError`` carrying the
HTTP status it maps to, a stable machine-readable ``code`` and a short
human-readable ``error`` string. The request handler converts these into the
JSON error envelope.
"""


class DetectionError(Exception):
    """Base error for the detection pipeline."""

    status_code: int = 500
    code: str = "internal_error"
    error: str = "Failed to detect food items"

    def __init__(
        self, message: str | None = None, *, details: str | None = None
    ) -> None:
        super().__init__(message or self.error)
        self.details = details

    @property
    def message(self) -> str:
        """Return the exception text."""
        return str(self)


class MalformedRequest(DetectionError):
    """The request body is not a usable multipart upload."""

    status_code = 400
    code = "malformed_request"
    error = "Invalid multipart request"


class MissingImage(MalformedRequest):
    """The multipart body has no ``image`` part."""

    code = "missing_image"
    error = "No image provided"


class MethodNotAllowed(DetectionError):
    """The endpoint does not accept the request method."""

    status_code = 405
    code = "method_not_allowed"
    error = "Method not allowed"


class PayloadTooLarge(DetectionError):
    """The upload exceeds the configured size cap."""

    status_code = 413
    code = "payload_too_large"
    error = "Image is too large"


class ConfigurationError(DetectionError):
    """Required configuration is missing."""

    status_code = 500
    code = "configuration_error"
    error = "Detection service is not configured"


class UpstreamTimeout(DetectionError):
    """The detection provider did not answer in time."""

    status_code = 504
    code = "upstream_timeout"
    error = "Detection provider timed out"


class UpstreamUnreachable(DetectionError):
    """The detection provider could not be reached."""

    status_code = 503
    code = "upstream_unreachable"
    error = "Detection provider is unreachable"


class UpstreamError(DetectionError):
    """The detection provider answered with a non-2xx status."""

    code = "upstream_error"
    error = "Detection provider returned an error"

    def __init__(
        self, status_code: int, status_text: str, *, details: str | None = None
    ) -> None:
        super().__init__(
            f"Detection provider returned {status_code} {status_text}".strip(),
            details=details,
        )
        self.status_code = status_code
        self.status_text = status_text


class InternalError(DetectionError):
    """Unexpected failure inside the pipeline."""
