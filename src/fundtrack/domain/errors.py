"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed precondition in domain logic."""


class InvalidTransitionError(ValidationError):
    """Requested purchase state change is not part of the workflow."""


class AuthorizationError(DomainError):
    """Role or ownership check failed."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations or a lost update."""


class StoreFailure(DomainError):
    """The relational store rejected the operation."""


class StorageError(DomainError):
    """Base class for blob storage errors."""


class StorageDegraded(StorageError):
    """Blob storage is missing or misconfigured; uploads are skipped."""


class StorageFailure(StorageError):
    """Blob upload failed for a reason other than misconfiguration."""


def purchase_not_found(purchase_id: int) -> str:
    """Return message for missing purchase."""
    return f"Purchase {purchase_id} not found"


def income_not_found(income_id: int) -> str:
    """Return message for missing income record."""
    return f"Income record {income_id} not found"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(kind: str, category_id: int) -> str:
    """Return message for missing category by ID."""
    return f"{kind.capitalize()} category {category_id} not found"


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def invitation_not_found(invitation_id: int) -> str:
    """Return message for missing invitation."""
    return f"Invitation {invitation_id} not found"


def invalid_transition(purchase_id: int, current: str, target: str) -> str:
    """Return message for a state change outside the workflow."""
    return f"Purchase {purchase_id} cannot move from '{current}' to '{target}'"


def not_signed_in() -> str:
    """Return message when no identity is available."""
    return "You must be signed in to perform this action"
