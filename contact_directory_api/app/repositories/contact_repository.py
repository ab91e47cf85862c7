"""
Data access for the ``contacts`` table.

``ContactRepository`` wraps a single connection handed out by
``core.db.transaction`` so that every query issued during one service
operation shares the same transaction.  Queries that concern active
contacts all filter through ``ACTIVE`` so the soft-delete rule lives in
one place.

All statements use parameterized queries.
"""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional
from uuid import UUID

from contact_directory_api.app.schemas.contact import ContactBase


ACTIVE = "deleted = 0"

_COLUMNS = "id, name, email, mobile, dob, deleted"


@dataclass
class Contact:
    """A stored contact row."""

    id: UUID
    name: str
    email: str
    mobile: str
    dob: date
    deleted: bool = False


def _like_pattern(term: str) -> str:
    """Build a LIKE pattern matching ``term`` as a literal substring."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ContactRepository:
    """Persistence operations for contacts over one open connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def insert(self, data: ContactBase) -> Contact:
        """Insert an active contact and return it with its generated id."""
        contact = Contact(
            id=uuid.uuid4(),
            name=data.name,
            email=data.email,
            mobile=data.mobile,
            dob=data.dob,
            deleted=False,
        )
        self.conn.execute(
            f"INSERT INTO contacts ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
            self._to_params(contact),
        )
        return contact

    def insert_many(self, items: Iterable[ContactBase]) -> List[Contact]:
        """Insert several contacts, preserving input order."""
        contacts = [
            Contact(
                id=uuid.uuid4(),
                name=item.name,
                email=item.email,
                mobile=item.mobile,
                dob=item.dob,
                deleted=False,
            )
            for item in items
        ]
        self.conn.executemany(
            f"INSERT INTO contacts ({_COLUMNS}) VALUES (?, ?, ?, ?, ?, ?)",
            [self._to_params(contact) for contact in contacts],
        )
        return contacts

    def get_by_id(self, contact_id: UUID) -> Optional[Contact]:
        """Return the contact with ``contact_id`` whether deleted or not."""
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM contacts WHERE id = ?",
            (str(contact_id),),
        ).fetchone()
        return self._row_to_contact(row) if row else None

    def find_active(self) -> List[Contact]:
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM contacts WHERE {ACTIVE} ORDER BY rowid"
        ).fetchall()
        return [self._row_to_contact(row) for row in rows]

    def update(self, contact: Contact) -> Contact:
        """Write every mutable column of ``contact`` back to its row."""
        self.conn.execute(
            """
            UPDATE contacts
            SET name = ?, email = ?, mobile = ?, dob = ?, deleted = ?, updated_at = CURRENT_TIMESTAMP
            WHERE id = ?
            """,
            (
                contact.name,
                contact.email,
                contact.mobile,
                contact.dob.isoformat(),
                int(contact.deleted),
                str(contact.id),
            ),
        )
        return contact

    def exists_active_by_mobile(self, mobile: str) -> bool:
        row = self.conn.execute(
            f"SELECT 1 FROM contacts WHERE mobile = ? AND {ACTIVE} LIMIT 1",
            (mobile,),
        ).fetchone()
        return row is not None

    def exists_active_by_email(self, email: str) -> bool:
        row = self.conn.execute(
            f"SELECT 1 FROM contacts WHERE email = ? AND {ACTIVE} LIMIT 1",
            (email,),
        ).fetchone()
        return row is not None

    def search_active(self, term: str) -> List[Contact]:
        """Return active contacts whose name, email or mobile contains ``term``.

        Name and email are compared case-insensitively, with Unicode
        case folding (``casefold`` is registered by ``core.db``); the
        mobile number is compared as stored.
        """
        folded = _like_pattern(term.casefold())
        rows = self.conn.execute(
            f"""
            SELECT {_COLUMNS} FROM contacts
            WHERE (casefold(name) LIKE ? ESCAPE '\\'
                   OR casefold(email) LIKE ? ESCAPE '\\'
                   OR mobile LIKE ? ESCAPE '\\')
              AND {ACTIVE}
            ORDER BY rowid
            """,
            (folded, folded, _like_pattern(term)),
        ).fetchall()
        return [self._row_to_contact(row) for row in rows]

    @staticmethod
    def _to_params(contact: Contact) -> tuple:
        return (
            str(contact.id),
            contact.name,
            contact.email,
            contact.mobile,
            contact.dob.isoformat(),
            int(contact.deleted),
        )

    @staticmethod
    def _row_to_contact(row: sqlite3.Row) -> Contact:
        """Convert a database row to a ``Contact``."""
        return Contact(
            id=UUID(row["id"]),
            name=row["name"],
            email=row["email"],
            mobile=row["mobile"],
            dob=date.fromisoformat(row["dob"]),
            deleted=bool(row["deleted"]),
        )
