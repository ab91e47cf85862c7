"""
Exception hierarchy raised by the contact service.

All business-rule failures derive from ``ContactAppError`` so the
HTTP layer can map them in one place (see ``core.errors``).
"""

from typing import Optional
from uuid import UUID


class ContactAppError(Exception):
    """Base class for all contact application errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ContactAlreadyExistsError(ContactAppError):
    """Raised when a contact would violate mobile uniqueness."""

    def __init__(self, message: str) -> None:
        super().__init__(message)

    @classmethod
    def for_field(cls, field: str, value: str) -> "ContactAlreadyExistsError":
        return cls(f"Contact with {field} {value} already exists")


class ContactNotFoundError(ContactAppError):
    """Raised when a contact is missing or no longer active."""

    def __init__(self, message: Optional[str] = None, contact_id: Optional[UUID] = None) -> None:
        if message is None:
            message = f"Contact not found with id: {contact_id}"
        super().__init__(message)
        self.contact_id = contact_id
