"""Error taxonomy for the annotation client."""


class AnnotationError(RuntimeError):
    """Base class for every error raised by the annotation client."""


class InvalidConfigError(AnnotationError, ValueError):
    """Raised when an option value is outside its whitelist."""


class InvalidArgumentError(AnnotationError, TypeError):
    """Raised when a helper receives input of the wrong shape."""


class TransportError(AnnotationError):
    """Raised when no HTTP response could be obtained."""


class ApiError(AnnotationError):
    """Raised when the service answers with an error status."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ParseError(AnnotationError):
    """Raised when a successful response body cannot be normalized."""
