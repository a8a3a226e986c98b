"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested file or path does not exist or cannot be read."""


class ConflictError(DomainError):
    """Domain conflict, such as a transaction identifier collision."""


class StorageError(DomainError):
    """Failed read or write against the generated store."""


def source_unreadable(path: str, reason: object) -> str:
    """Return message for a source file that cannot be read."""
    return f"failed to read source file {path}: {reason}"


def file_unreadable(path: str, reason: object) -> str:
    """Return message for a ledger file that cannot be read."""
    return f"failed to read file {path}: {reason}"


def txn_id_collision(txn_id: str) -> str:
    """Return message when a freshly generated identifier is already seen."""
    return f"generated txn id collided: {txn_id}; retry"


def invalid_manual_field(field_name: str, value: object) -> str:
    """Return message for an invalid manual transaction field."""
    return f"invalid {field_name}: {value!r}"
