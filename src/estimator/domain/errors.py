"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested project, section or item does not exist."""


class MalformedRecord(DomainError):
    """A stored project record cannot be interpreted even leniently."""


class StoreUnavailable(Exception):
    """The project store could not be reached or failed to complete a call."""


class OwnershipConflict(StoreUnavailable):
    """The store holds the project under another user and refuses to hand it over."""


def project_not_found(reference: str) -> str:
    """Return message for missing project."""
    return f"Project '{reference}' not found"


def section_not_found(reference: str, project_name: str) -> str:
    """Return message for missing section."""
    return f"Section '{reference}' not found in project '{project_name}'"


def item_not_found(reference: str, section_name: str) -> str:
    """Return message for missing item."""
    return f"Item '{reference}' not found in section '{section_name}'"
