"""
Pydantic models for contact data.

``ContactBase`` holds the user-editable fields and their validation
rules; ``ContactCreate`` and ``ContactUpdate`` are the request bodies
and ``ContactRead`` extends the base with the stored ``id`` and
``deleted`` flag for responses.  Clients may send ``id`` or
``deleted`` in a request body; both are ignored.
"""

import re
from datetime import date
from typing import Any
from uuid import UUID

from email_validator import EmailNotValidError, validate_email
from pydantic import AliasChoices, BaseModel, Field, ValidationInfo, field_validator


MOBILE_PATTERN = re.compile(r"[0-9]{10}")

# Messages used when a required field is absent or blank.
REQUIRED_MESSAGES = {
    "name": "Name is required",
    "email": "Email is required",
    "mobile": "Mobile is required",
    "dob": "Date of birth is required",
}


class ContactBase(BaseModel):
    name: str = Field(..., description="Full name of the contact", examples=["John Doe"])
    email: str = Field(..., description="Email address of the contact", examples=["john.doe@example.com"])
    mobile: str = Field(..., description="Mobile phone number (10 digits)", examples=["1234567890"])
    dob: date = Field(
        ...,
        description="Date of birth",
        examples=["1990-01-15"],
        validation_alias=AliasChoices("dob", "dateOfBirth"),
    )

    model_config = {
        "populate_by_name": True,
    }

    @field_validator("name", "email", "mobile", "dob", mode="before")
    @classmethod
    def _required(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError(REQUIRED_MESSAGES[info.field_name])
        return value

    @field_validator("mobile")
    @classmethod
    def _mobile_digits(cls, value: str) -> str:
        if not MOBILE_PATTERN.fullmatch(value):
            raise ValueError("Mobile must be 10 digits")
        return value

    @field_validator("email")
    @classmethod
    def _email_format(cls, value: str) -> str:
        # Shape check only; the address is stored exactly as sent.
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise ValueError("Invalid email format") from None
        return value


class ContactCreate(ContactBase):
    """Schema for creating a contact."""
    pass


class ContactUpdate(ContactBase):
    """Schema for replacing the editable fields of a contact."""
    pass


class ContactRead(ContactBase):
    """Schema for reading a contact from the API."""

    id: UUID = Field(..., examples=["123e4567-e89b-12d3-a456-426614174000"])
    deleted: bool = Field(False, description="Soft delete flag", examples=[False])

    model_config = {
        "from_attributes": True,
        "populate_by_name": True,
    }
