"""
HTTP routes for the contacts resource.
"""

from __future__ import annotations

import logging
import re
from typing import Iterator, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Response, UploadFile
from fastapi.responses import StreamingResponse

from contacts_api.db import ContactNotFoundError, DbClient
from contacts_api.dependencies import get_db_client, get_storage_client
from contacts_api.schemas import (
    ContactPayload,
    ContactResponse,
    ErrorResponse,
    MessageResponse,
    to_contact_response,
)
from contacts_api.storage import DEFAULT_CONTENT_TYPE, ObjectStream, StorageClient
from contacts_api.validation import validate_contact_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/contacts", tags=["contacts"])

MAX_AVATAR_MB = 10
MAX_AVATAR_SIZE = MAX_AVATAR_MB * 1024 * 1024

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def parse_contact_id(raw: str) -> int:
    """Parse a base-10 path id within the signed 32-bit range, or fail with 400."""
    if not _ID_PATTERN.fullmatch(raw):
        raise HTTPException(status_code=400, detail="Invalid contact ID")
    value = int(raw)
    if value < INT32_MIN or value > INT32_MAX:
        raise HTTPException(status_code=400, detail="Invalid contact ID")
    return value


def avatar_key(contact_id: int) -> str:
    return str(contact_id)


def require_storage_client(
    storage: Optional[StorageClient] = Depends(get_storage_client),
) -> StorageClient:
    if storage is None:
        raise HTTPException(status_code=503, detail="Avatar storage is not configured")
    return storage


@router.get(
    "",
    response_model=list[ContactResponse],
    response_model_exclude_none=True,
    include_in_schema=False,
)
@router.get(
    "/",
    response_model=list[ContactResponse],
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def list_contacts(db: DbClient = Depends(get_db_client)):
    try:
        contacts = db.list_contacts()
    except Exception:
        logger.exception("Listing contacts failed")
        raise HTTPException(status_code=500, detail="Failed to list contacts")
    return [to_contact_response(contact) for contact in contacts or []]


@router.get(
    "/{contact_id}",
    response_model=ContactResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def get_contact(contact_id: str, db: DbClient = Depends(get_db_client)):
    parsed_id = parse_contact_id(contact_id)
    try:
        contact = db.get_contact(parsed_id)
    except ContactNotFoundError:
        raise HTTPException(status_code=404, detail="Contact not found")
    except Exception:
        logger.exception("Fetching contact %s failed", parsed_id)
        raise HTTPException(status_code=500, detail="Failed to fetch contact")
    return to_contact_response(contact)


@router.post(
    "",
    response_model=ContactResponse,
    response_model_exclude_none=True,
    status_code=201,
    include_in_schema=False,
)
@router.post(
    "/",
    response_model=ContactResponse,
    response_model_exclude_none=True,
    status_code=201,
    responses=ERROR_RESPONSES,
)
def create_contact(payload: ContactPayload, db: DbClient = Depends(get_db_client)):
    validate_contact_payload(payload)
    try:
        contact = db.create_contact(payload.name, payload.phone)
    except Exception:
        logger.exception("Creating contact failed")
        raise HTTPException(status_code=500, detail="Failed to create contact")
    return to_contact_response(contact)


@router.put(
    "/{contact_id}",
    response_model=ContactResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
def update_contact(
    contact_id: str,
    payload: ContactPayload,
    db: DbClient = Depends(get_db_client),
):
    """
    Replace name and phone of a contact.

    A missing row is reported like any other store failure (500).
    """
    parsed_id = parse_contact_id(contact_id)
    validate_contact_payload(payload)
    try:
        contact = db.update_contact(parsed_id, payload.name, payload.phone)
    except Exception:
        logger.exception("Updating contact %s failed", parsed_id)
        raise HTTPException(status_code=500, detail="Updating contact failed.")
    return to_contact_response(contact)


@router.delete("/{contact_id}", status_code=204, responses=ERROR_RESPONSES)
def delete_contact(contact_id: str, db: DbClient = Depends(get_db_client)):
    parsed_id = parse_contact_id(contact_id)
    try:
        db.delete_contact(parsed_id)
    except ContactNotFoundError:
        raise HTTPException(status_code=404, detail="Contact not found")
    except Exception:
        logger.exception("Deleting contact %s failed", parsed_id)
        raise HTTPException(status_code=500, detail="Failed to delete contact")
    return Response(status_code=204)


@router.put(
    "/{contact_id}/avatar", response_model=MessageResponse, responses=ERROR_RESPONSES
)
async def upload_contact_avatar(
    contact_id: str,
    avatar: UploadFile | None = File(None),
    storage: StorageClient = Depends(require_storage_client),
):
    key = avatar_key(parse_contact_id(contact_id))
    if avatar is None:
        raise HTTPException(status_code=400, detail="Invalid avatar file provided")

    try:
        # One byte past the limit is enough to reject without buffering the rest.
        data = await avatar.read(MAX_AVATAR_SIZE + 1)
    except Exception:
        logger.exception("Reading avatar upload for contact %s failed", contact_id)
        raise HTTPException(status_code=500, detail="Failed to read avatar file")
    finally:
        await avatar.close()

    if not data:
        raise HTTPException(status_code=400, detail="Avatar file is empty")
    if len(data) > MAX_AVATAR_SIZE:
        raise HTTPException(
            status_code=400,
            detail=f"Avatar size cannot exceed {MAX_AVATAR_MB}MB",
        )

    content_type = avatar.content_type or DEFAULT_CONTENT_TYPE
    try:
        storage.upload(key, data, content_type)
    except Exception:
        logger.exception("Uploading avatar for contact %s failed", contact_id)
        raise HTTPException(status_code=500, detail="Could not upload avatar")
    return MessageResponse(message="Avatar uploaded")


def _stream_object(stream: ObjectStream, key: str) -> Iterator[bytes]:
    try:
        yield from stream.iter_chunks()
    except Exception:
        # Status and headers are already sent.
        logger.exception("Error streaming avatar %s to client", key)
    finally:
        stream.close()


@router.get(
    "/{contact_id}/avatar",
    response_class=StreamingResponse,
    responses={404: {"model": ErrorResponse}},
)
def download_contact_avatar(
    contact_id: str,
    storage: StorageClient = Depends(require_storage_client),
):
    try:
        key = avatar_key(parse_contact_id(contact_id))
    except HTTPException:
        raise HTTPException(status_code=404, detail="Avatar not found.") from None
    try:
        stream = storage.get_stream(key)
    except Exception as exc:
        logger.info("Avatar %s not available: %s", key, exc)
        raise HTTPException(status_code=404, detail="Avatar not found.")

    headers = {"Content-Disposition": "inline"}
    if stream.content_length is not None:
        headers["Content-Length"] = str(stream.content_length)
    return StreamingResponse(
        _stream_object(stream, key),
        media_type=stream.content_type or DEFAULT_CONTENT_TYPE,
        headers=headers,
    )
