"""
Pydantic schemas for the contacts API and mapping from stored records.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from contacts_api.db import ContactRecord


class ContactPayload(BaseModel):
    name: str
    phone: str


class ContactResponse(BaseModel):
    id: int
    name: str
    phone: str
    owner_id: Optional[int] = None


class ErrorResponse(BaseModel):
    error: str


class MessageResponse(BaseModel):
    message: str


class UserResponse(BaseModel):
    sub: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None


def to_contact_response(record: ContactRecord) -> ContactResponse:
    return ContactResponse(
        id=record.id,
        name=record.name,
        phone=record.phone,
        owner_id=record.owner_id,
    )
