"""
Database abstraction for contacts: SQLAlchemy and an in-memory test implementation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Protocol

from sqlalchemy import Column, Integer, String, create_engine, delete, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker


class ContactNotFoundError(LookupError):
    """Raised when no contact row matches the requested id."""

    def __init__(self, contact_id: int):
        super().__init__(f"contact {contact_id} not found")
        self.contact_id = contact_id


class DbClient(Protocol):
    """Interface for contact data access."""

    def list_contacts(self) -> list["ContactRecord"]:
        ...

    def get_contact(self, contact_id: int) -> "ContactRecord":
        ...

    def create_contact(
        self, name: str, phone: str, owner_id: Optional[int] = None
    ) -> "ContactRecord":
        ...

    def update_contact(
        self, contact_id: int, name: str, phone: str
    ) -> "ContactRecord":
        ...

    def delete_contact(self, contact_id: int) -> None:
        ...


@dataclass
class ContactRecord:
    id: int
    name: str
    phone: str
    owner_id: Optional[int] = None


class InMemoryDbClient:
    """Simple in-memory database for development and tests."""

    def __init__(self):
        self.contacts: Dict[int, ContactRecord] = {}
        self._next_id = 1

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.contacts.clear()
        self._next_id = 1

    def list_contacts(self) -> list[ContactRecord]:
        return [self.contacts[key] for key in sorted(self.contacts)]

    def get_contact(self, contact_id: int) -> ContactRecord:
        record = self.contacts.get(contact_id)
        if record is None:
            raise ContactNotFoundError(contact_id)
        return record

    def create_contact(
        self, name: str, phone: str, owner_id: Optional[int] = None
    ) -> ContactRecord:
        record = ContactRecord(
            id=self._next_id, name=name, phone=phone, owner_id=owner_id
        )
        self.contacts[record.id] = record
        self._next_id += 1
        return record

    def update_contact(
        self, contact_id: int, name: str, phone: str
    ) -> ContactRecord:
        record = self.get_contact(contact_id)
        record.name = name
        record.phone = phone
        return record

    def delete_contact(self, contact_id: int) -> None:
        if self.contacts.pop(contact_id, None) is None:
            raise ContactNotFoundError(contact_id)


class SqlDbClient:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DB_URL is required for SqlDbClient")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_record(self, row: "ContactRow") -> ContactRecord:
        return ContactRecord(
            id=row.id,
            name=row.name,
            phone=row.phone,
            owner_id=row.owner_id,
        )

    def list_contacts(self) -> list[ContactRecord]:
        with self.Session() as session:
            rows = session.execute(
                select(ContactRow).order_by(ContactRow.id.asc())
            ).scalars()
            return [self._to_record(row) for row in rows]

    def get_contact(self, contact_id: int) -> ContactRecord:
        with self.Session() as session:
            row = session.get(ContactRow, contact_id)
            if not row:
                raise ContactNotFoundError(contact_id)
            return self._to_record(row)

    def create_contact(
        self, name: str, phone: str, owner_id: Optional[int] = None
    ) -> ContactRecord:
        with self.Session() as session:
            row = ContactRow(name=name, phone=phone, owner_id=owner_id)
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_record(row)

    def update_contact(
        self, contact_id: int, name: str, phone: str
    ) -> ContactRecord:
        with self.Session() as session:
            row = session.get(ContactRow, contact_id)
            if not row:
                raise ContactNotFoundError(contact_id)
            row.name = name
            row.phone = phone
            session.commit()
            session.refresh(row)
            return self._to_record(row)

    def delete_contact(self, contact_id: int) -> None:
        with self.Session() as session:
            result = session.execute(
                delete(ContactRow).where(ContactRow.id == contact_id)
            )
            session.commit()
            if not result.rowcount:
                raise ContactNotFoundError(contact_id)


Base = declarative_base()


class ContactRow(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    owner_id = Column(Integer, nullable=True, index=True)
