"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidArgumentError(ValidationError):
    """Query parameter outside its accepted range."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def partner_not_found(partner_id: int) -> str:
    """Return message for missing partner."""
    return f"Partner {partner_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"Category {category_id} not found"


def invoice_not_found(invoice_id: int) -> str:
    """Return message for missing invoice."""
    return f"Invoice {invoice_id} not found"


def duplicate_document_number(document_number: str) -> str:
    """Return message for duplicate partner document number."""
    return f"Partner with document number '{document_number}' already exists"


def duplicate_category_name(name: str) -> str:
    """Return message for duplicate category name."""
    return f"Category with name '{name}' already exists"


def duplicate_username(username: str) -> str:
    """Return message for duplicate username."""
    return f"User with username '{username}' already exists"


def invalid_choice(field: str, value: object, choices: list[str]) -> str:
    """Return message for a value outside an enumerated set."""
    return f"Invalid {field} '{value}'. Expected one of: {', '.join(choices)}"


def invalid_status_transition(invoice_id: int, current: str, target: str) -> str:
    """Return message when an invoice cannot move to a new status."""
    return f"Invoice {invoice_id} is {current} and cannot be marked {target}"
