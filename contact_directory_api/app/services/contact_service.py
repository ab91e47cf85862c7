"""
Business logic for contacts.

``ContactService`` enforces the rules around creation, mutation and
soft deletion of contacts:

* a mobile number is unique among active (non-deleted) contacts; a
  deleted contact's number may be reused;
* a batch is validated completely before anything is written, so it
  is stored entirely or not at all;
* a deleted contact cannot be read, updated or deleted again.

Each method runs inside a single ``core.db.transaction``.  The service
checks uniqueness before writing; the partial unique index created by
the migrations is what guarantees it when two requests race, and an
``sqlite3.IntegrityError`` from that index is reported as the same
``ContactAlreadyExistsError``.
"""

from __future__ import annotations

import logging
import sqlite3
from collections import Counter
from typing import List, Optional
from uuid import UUID

from contact_directory_api.app.core.db import transaction
from contact_directory_api.app.core.exceptions import ContactAlreadyExistsError, ContactNotFoundError
from contact_directory_api.app.repositories.contact_repository import ContactRepository
from contact_directory_api.app.schemas.contact import ContactCreate, ContactRead, ContactUpdate


logger = logging.getLogger(__name__)


class ContactService:
    """Service class for managing contacts."""

    @classmethod
    async def create_contact(cls, data: ContactCreate) -> ContactRead:
        """Create a contact whose mobile is not used by any active contact.

        Raises ``ContactAlreadyExistsError`` naming the mobile otherwise.
        """
        logger.info("Creating new contact with mobile: %s", data.mobile)
        try:
            with transaction() as conn:
                repo = ContactRepository(conn)
                if repo.exists_active_by_mobile(data.mobile):
                    logger.warning("Contact creation failed - mobile %s already exists", data.mobile)
                    raise ContactAlreadyExistsError.for_field("mobile", data.mobile)
                contact = repo.insert(data)
        except sqlite3.IntegrityError as exc:
            logger.warning("Contact creation failed - mobile %s taken concurrently", data.mobile)
            raise ContactAlreadyExistsError.for_field("mobile", data.mobile) from exc
        logger.info("Successfully created contact with ID: %s and mobile: %s", contact.id, contact.mobile)
        return ContactRead.model_validate(contact)

    @classmethod
    async def create_contacts(cls, items: List[ContactCreate]) -> List[ContactRead]:
        """Create several contacts atomically.

        The batch is rejected as a whole when two items share a mobile
        number, or when any mobile already belongs to an active contact
        (the error lists every such number in input order).  Created
        contacts are returned in input order.
        """
        logger.info("Creating %s contacts in batch", len(items))
        mobiles = [item.mobile for item in items]
        duplicates = [mobile for mobile, count in Counter(mobiles).items() if count > 1]
        if duplicates:
            logger.warning("Batch creation failed - duplicate mobile numbers in the batch: %s", duplicates)
            raise ContactAlreadyExistsError("Duplicate mobile numbers found in the batch")

        try:
            with transaction() as conn:
                repo = ContactRepository(conn)
                existing = [mobile for mobile in mobiles if repo.exists_active_by_mobile(mobile)]
                if existing:
                    logger.warning("Batch creation failed - mobile numbers already exist: %s", existing)
                    raise ContactAlreadyExistsError("Mobile numbers already exist: " + ", ".join(existing))
                contacts = repo.insert_many(items)
        except sqlite3.IntegrityError as exc:
            logger.warning("Batch creation failed - a mobile number was taken concurrently")
            raise ContactAlreadyExistsError("Mobile numbers already exist among active contacts") from exc

        logger.info("Successfully created %s contacts in batch", len(contacts))
        return [ContactRead.model_validate(contact) for contact in contacts]

    @classmethod
    async def get_contact_by_id(cls, contact_id: UUID) -> Optional[ContactRead]:
        """Return the active contact with ``contact_id`` or ``None``.

        Missing and deleted contacts are indistinguishable to the caller.
        """
        logger.debug("Retrieving contact by ID: %s", contact_id)
        with transaction(readonly=True) as conn:
            contact = ContactRepository(conn).get_by_id(contact_id)
        if contact is None or contact.deleted:
            logger.debug("Contact not found or deleted with ID: %s", contact_id)
            return None
        return ContactRead.model_validate(contact)

    @classmethod
    async def get_all_contacts(cls) -> List[ContactRead]:
        logger.debug("Retrieving all active contacts")
        with transaction(readonly=True) as conn:
            contacts = ContactRepository(conn).find_active()
        logger.info("Retrieved %s active contacts", len(contacts))
        return [ContactRead.model_validate(contact) for contact in contacts]

    @classmethod
    async def update_contact(cls, contact_id: UUID, data: ContactUpdate) -> ContactRead:
        """Replace name, email, mobile and date of birth of an active contact.

        Raises ``ContactNotFoundError`` when the contact is missing or
        deleted, and ``ContactAlreadyExistsError`` when the new mobile
        belongs to another active contact.
        """
        logger.info("Updating contact with ID: %s and mobile: %s", contact_id, data.mobile)
        try:
            with transaction() as conn:
                repo = ContactRepository(conn)
                contact = repo.get_by_id(contact_id)
                if contact is None:
                    logger.warning("Contact not found with ID: %s", contact_id)
                    raise ContactNotFoundError(contact_id=contact_id)
                if contact.deleted:
                    logger.warning("Attempted to update deleted contact with ID: %s", contact_id)
                    raise ContactNotFoundError(f"Cannot update deleted contact with id: {contact_id}", contact_id)
                if contact.mobile != data.mobile and repo.exists_active_by_mobile(data.mobile):
                    logger.warning("Contact update failed - mobile %s already exists", data.mobile)
                    raise ContactAlreadyExistsError.for_field("mobile", data.mobile)

                contact.name = data.name
                contact.email = data.email
                contact.mobile = data.mobile
                contact.dob = data.dob
                repo.update(contact)
        except sqlite3.IntegrityError as exc:
            logger.warning("Contact update failed - mobile %s taken concurrently", data.mobile)
            raise ContactAlreadyExistsError.for_field("mobile", data.mobile) from exc
        logger.info("Successfully updated contact with ID: %s", contact_id)
        return ContactRead.model_validate(contact)

    @classmethod
    async def delete_contact(cls, contact_id: UUID) -> None:
        """Soft delete an active contact.

        Deleting is not idempotent: a second call raises
        ``ContactNotFoundError``.
        """
        logger.info("Soft deleting contact with ID: %s", contact_id)
        with transaction() as conn:
            repo = ContactRepository(conn)
            contact = repo.get_by_id(contact_id)
            if contact is None:
                logger.warning("Contact not found with ID: %s", contact_id)
                raise ContactNotFoundError(contact_id=contact_id)
            if contact.deleted:
                logger.warning("Attempted to delete already deleted contact with ID: %s", contact_id)
                raise ContactNotFoundError(f"Contact already deleted with id: {contact_id}", contact_id)
            contact.deleted = True
            repo.update(contact)
        logger.info("Successfully soft deleted contact with ID: %s", contact_id)

    @classmethod
    async def search_contacts(cls, term: str) -> List[ContactRead]:
        """Return active contacts whose name, email or mobile contains ``term``."""
        logger.debug("Searching contacts with term: %s", term)
        with transaction(readonly=True) as conn:
            contacts = ContactRepository(conn).search_active(term)
        logger.info("Search completed for term '%s' - found %s contacts", term, len(contacts))
        return [ContactRead.model_validate(contact) for contact in contacts]
