"""
Contact endpoints for API v1.

These routes expose CRUD, batch creation and search for contacts.
Request bodies are validated by the pydantic schemas before the
service runs; business-rule failures raised by ``ContactService`` are
turned into 404/409 responses by the handlers in ``core.errors``.

``/search`` and ``/health`` are declared before ``/{contact_id}`` so
they are not captured by the id route.  The collection routes answer both
with and without the trailing slash, so neither form is redirected.
"""

import logging
from typing import Any, Dict, List
from uuid import UUID

from fastapi import APIRouter, Path, Query, Response, status
from fastapi.responses import PlainTextResponse

from contact_directory_api.app.core.exceptions import ContactNotFoundError
from contact_directory_api.app.schemas.contact import ContactCreate, ContactRead, ContactUpdate
from contact_directory_api.app.schemas.error import ErrorResponse, ValidationErrorResponse
from contact_directory_api.app.services.contact_service import ContactService


logger = logging.getLogger(__name__)

router = APIRouter()


_CONTACT_EXAMPLE = {
    "id": "123e4567-e89b-12d3-a456-426614174000",
    "name": "John Doe",
    "email": "john.doe@example.com",
    "mobile": "1234567890",
    "dob": "1990-01-15",
    "deleted": False,
}

_SECOND_CONTACT_EXAMPLE = {
    "id": "987fcdeb-51a2-43d1-b789-123456789abc",
    "name": "Jane Smith",
    "email": "jane.smith@example.com",
    "mobile": "0987654321",
    "dob": "1985-05-20",
    "deleted": False,
}


def _error_example(model: type, status_code: int, description: str, example: Dict[str, Any]) -> Dict[int, Dict[str, Any]]:
    return {
        status_code: {
            "model": model,
            "description": description,
            "content": {"application/json": {"example": {"timestamp": "2024-01-01T10:00:00", **example}}},
        }
    }


_VALIDATION_RESPONSE = _error_example(
    ValidationErrorResponse,
    status.HTTP_400_BAD_REQUEST,
    "Invalid input data or validation error",
    {
        "status": 400,
        "error": "Validation Failed",
        "message": "Invalid input data",
        "validationErrors": {"mobile": "Mobile must be 10 digits", "email": "Invalid email format"},
    },
)

_NOT_FOUND_RESPONSE = _error_example(
    ErrorResponse,
    status.HTTP_404_NOT_FOUND,
    "Contact not found or deleted",
    {
        "status": 404,
        "error": "Contact Not Found",
        "message": "Contact not found with id: 123e4567-e89b-12d3-a456-426614174000",
    },
)

_CONFLICT_RESPONSE = _error_example(
    ErrorResponse,
    status.HTTP_409_CONFLICT,
    "Contact with this mobile number already exists",
    {
        "status": 409,
        "error": "Contact Already Exists",
        "message": "Contact with mobile 1234567890 already exists",
    },
)


@router.post("", response_model=ContactRead, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post(
    "/",
    response_model=ContactRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new contact",
    description="Creates a new contact with the provided information. Mobile number must be unique.",
    responses={
        status.HTTP_201_CREATED: {
            "description": "Contact created successfully",
            "content": {"application/json": {"example": _CONTACT_EXAMPLE}},
        },
        **_VALIDATION_RESPONSE,
        **_CONFLICT_RESPONSE,
    },
)
async def create_contact(contact_in: ContactCreate) -> ContactRead:
    logger.info("Creating new contact with mobile: %s", contact_in.mobile)
    return await ContactService.create_contact(contact_in)


@router.post(
    "/batch",
    response_model=List[ContactRead],
    status_code=status.HTTP_201_CREATED,
    summary="Create multiple contacts in batch",
    description=(
        "Creates multiple contacts in a single operation. All mobile numbers must be "
        "unique within the batch and among existing contacts; otherwise nothing is created."
    ),
    responses={
        status.HTTP_201_CREATED: {
            "description": "All contacts created successfully",
            "content": {"application/json": {"example": [_CONTACT_EXAMPLE, _SECOND_CONTACT_EXAMPLE]}},
        },
        **_VALIDATION_RESPONSE,
        **_error_example(
            ErrorResponse,
            status.HTTP_409_CONFLICT,
            "Duplicate mobile numbers found in batch or existing in database",
            {
                "status": 409,
                "error": "Contact Already Exists",
                "message": "Mobile numbers already exist: 1234567890, 0987654321",
            },
        ),
    },
)
async def create_contacts(contacts_in: List[ContactCreate]) -> List[ContactRead]:
    logger.info("Creating %s contacts in batch", len(contacts_in))
    return await ContactService.create_contacts(contacts_in)


@router.get("", response_model=List[ContactRead], include_in_schema=False)
@router.get(
    "/",
    response_model=List[ContactRead],
    summary="List all active contacts",
)
async def get_all_contacts() -> List[ContactRead]:
    logger.info("Retrieving all contacts")
    return await ContactService.get_all_contacts()


@router.get(
    "/search",
    response_model=List[ContactRead],
    summary="Search contacts",
    description=(
        "Searches active contacts by name, email, or mobile number. "
        "The search is case-insensitive and supports partial matches."
    ),
    responses={
        status.HTTP_200_OK: {
            "description": "Search completed successfully",
            "content": {"application/json": {"example": [_CONTACT_EXAMPLE]}},
        },
    },
)
async def search_contacts(
    q: str = Query(..., description="Search term to match against name, email, or mobile", examples=["john"]),
) -> List[ContactRead]:
    logger.info("Searching contacts with term: %s", q)
    return await ContactService.search_contacts(q)


@router.get("/health", response_class=PlainTextResponse, summary="Health check")
async def health() -> str:
    """Liveness probe; does not touch the database."""
    return "Contact Service is running"


@router.get(
    "/{contact_id}",
    response_model=ContactRead,
    summary="Get contact by ID",
    description="Retrieves a specific active contact by its unique identifier.",
    responses={
        status.HTTP_200_OK: {
            "description": "Contact found successfully",
            "content": {"application/json": {"example": _CONTACT_EXAMPLE}},
        },
        **_NOT_FOUND_RESPONSE,
    },
)
async def get_contact(
    contact_id: UUID = Path(..., description="Unique identifier of the contact"),
) -> ContactRead:
    logger.info("Retrieving contact with ID: %s", contact_id)
    contact = await ContactService.get_contact_by_id(contact_id)
    if contact is None:
        raise ContactNotFoundError(contact_id=contact_id)
    return contact


@router.put(
    "/{contact_id}",
    response_model=ContactRead,
    summary="Update an existing contact",
    description="Replaces name, email, mobile and date of birth of an active contact.",
    responses={**_VALIDATION_RESPONSE, **_NOT_FOUND_RESPONSE, **_CONFLICT_RESPONSE},
)
async def update_contact(contact_id: UUID, contact_in: ContactUpdate) -> ContactRead:
    logger.info("Updating contact with ID: %s", contact_id)
    return await ContactService.update_contact(contact_id, contact_in)


@router.delete(
    "/{contact_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Soft delete a contact",
    responses={**_NOT_FOUND_RESPONSE},
)
async def delete_contact(contact_id: UUID) -> Response:
    logger.info("Deleting contact with ID: %s", contact_id)
    await ContactService.delete_contact(contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
