"""Custom exceptions for the memos web client."""


class MemosWebError(Exception):
    """Base exception for the memos web client."""

    pass


class NotFoundError(MemosWebError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: int | str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f"{resource_type} with id {resource_id} not found")


class ValidationError(MemosWebError):
    """
    Raised when user input violates a filter invariant.

    ``code`` is a stable, user-facing message key such as ``title-required``.
    """

    def __init__(self, code: str, field: str | None = None):
        self.code = code
        self.field = field
        super().__init__(code)


class IncompleteClauseError(ValidationError):
    """Raised when a clause is appended while the previous one has no value."""

    def __init__(self) -> None:
        super().__init__("fill-previous", field="value")


class PersistenceError(MemosWebError):
    """Raised when a shortcut or tag write/read fails in the backing store."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class ConfigurationError(MemosWebError):
    """Raised when there's a configuration issue."""

    pass
