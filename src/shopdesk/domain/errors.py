"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """A draft failed pre-submit validation.

    Attributes:
        field_errors: Mapping of field name to a human-readable problem
    """

    def __init__(self, field_errors: dict[str, str]):
        self.field_errors = dict(field_errors)
        details = "; ".join(f"{name}: {problem}" for name, problem in self.field_errors.items())
        super().__init__(f"Invalid input ({details})")


class NotFoundError(DomainError):
    """Requested record does not exist in its collection."""


class GatewayError(DomainError):
    """The remote store rejected or failed an operation."""


class ConfigurationError(DomainError):
    """Startup configuration is missing or invalid."""


def record_not_found(collection: str, record_id: str) -> str:
    """Return message for a missing record."""
    return f"No record '{record_id}' in {collection}"


def purchase_not_found(purchase_id: str) -> str:
    """Return message for a missing embedded purchase."""
    return f"Purchase '{purchase_id}' not found"


def unknown_collection(collection: str) -> str:
    """Return message for an unknown collection name."""
    return f"Unknown collection '{collection}'"


def missing_setting(name: str) -> str:
    """Return message for a missing startup setting."""
    return f"{name} is not set"
