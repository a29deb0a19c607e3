from typing import Any
from uuid import uuid4
import json
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.orm import sessionmaker

from ..core.config import Settings, get_settings
from ..core.db import get_session_factory
from ..core.errors import ContactStorageError, ContactValidationError, StorageErrorKind
from ..schemas.contact import ContactCreatedOut, ContactErrorOut, ContactSubmission
from ..services.intake import intake_contact

router = APIRouter(tags=["contact"])
logger = logging.getLogger(__name__)

REQUIRED_NAMES_MESSAGE = "First name and last name are required"
GENERIC_FAILURE_MESSAGE = "Failed to add contact"

# kind -> (error, details shown in production; None means raw error in dev only)
STORAGE_ERROR_MESSAGES = {
    StorageErrorKind.VALUE_TOO_LONG: (
        "One of the fields is too long",
        "Please check that phone numbers, names, and other fields are not excessively long. "
        "Phone numbers should be under 50 characters.",
    ),
    StorageErrorKind.DUPLICATE_KEY: (
        "This person may already exist in the database",
        None,
    ),
    StorageErrorKind.NOT_NULL: (
        "Missing required information",
        "First name and last name are required.",
    ),
    StorageErrorKind.UNKNOWN: (GENERIC_FAILURE_MESSAGE, None),
}


def build_error_body(kind: StorageErrorKind, raw_message: str, settings: Settings) -> dict:
    """
    Map a classified failure onto the user-facing error body.

    Raw driver text is only exposed outside production.
    """
    error, details = STORAGE_ERROR_MESSAGES[kind]
    if details is None:
        details = "An unexpected error occurred while saving the contact." if settings.is_production else raw_message

    body = ContactErrorOut(
        error=error,
        details=details,
        debug_info=None if settings.is_production else raw_message,
    )
    return body.model_dump(exclude_none=True)


@router.options("/contact")
def contact_preflight():
    return Response(status_code=200)


@router.api_route("/contact", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"], include_in_schema=False)
def contact_method_not_allowed():
    return JSONResponse(status_code=405, content={"error": "Method not allowed"})


async def read_json_object(request: Request) -> dict[str, Any] | None:
    """
    Decode the request body as a JSON object.

    An empty body counts as an empty object. Returns None when the body is not
    valid JSON or is not an object.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        return None
    return payload if isinstance(payload, dict) else None


@router.post("/contact", response_model=ContactCreatedOut, status_code=200)
async def create_contact(
    request: Request,
    session_factory: sessionmaker = Depends(get_session_factory),
    settings: Settings = Depends(get_settings),
):
    request_id = str(uuid4())

    payload = await read_json_object(request)
    if payload is None:
        return JSONResponse(status_code=400, content={"error": REQUIRED_NAMES_MESSAGE})

    try:
        submission = ContactSubmission.model_validate(payload)
    except ValidationError:
        return JSONResponse(status_code=400, content={"error": REQUIRED_NAMES_MESSAGE})

    logger.info(
        "Received contact submission",
        extra={
            "request_id": request_id,
            "step": "create_contact",
            "has_company": bool(submission.company),
        },
    )

    try:
        # intake_contact holds a blocking DB session
        result = await run_in_threadpool(
            intake_contact,
            submission,
            session_factory=session_factory,
            settings=settings,
            request_id=request_id,
        )
    except ContactValidationError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})
    except ContactStorageError as e:
        return JSONResponse(
            status_code=500,
            content=build_error_body(e.kind, str(e), settings),
        )
    except Exception as e:
        logger.exception(
            "Unexpected error processing contact: %s", e,
            extra={"request_id": request_id, "step": "create_contact"},
        )
        return JSONResponse(
            status_code=500,
            content=build_error_body(StorageErrorKind.UNKNOWN, str(e), settings),
        )

    return ContactCreatedOut(
        person_id=result.person_id,
        organization_id=result.organization_id,
        message=result.message,
    )
