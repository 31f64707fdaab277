class QueueServiceError(RuntimeError):
    """Base class for errors surfaced to callers of the queue service."""

    reason = "queue_error"


class ValidationError(QueueServiceError):
    """Raised when required input is missing, empty or not an allowed value."""

    reason = "validation_error"


class NotFoundError(QueueServiceError):
    """Raised when an operation references an id that does not exist."""

    reason = "not_found"


class StoreError(QueueServiceError):
    """Raised when the underlying store fails (I/O errors, corrupted data)."""

    reason = "store_error"
