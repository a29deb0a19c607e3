from __future__ import annotations

from typing import Any
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from ..models.person import (
    EMAIL_MAX_LEN,
    FIRST_NAME_MAX_LEN,
    FULL_NAME_MAX_LEN,
    LAST_NAME_MAX_LEN,
    PHONE_MAX_LEN,
    Person,
)
from ..schemas.contact import ContactSubmission

logger = logging.getLogger(__name__)


def truncate_field(value: Any, max_length: int) -> str:
    """Trim ``value`` and cut it to the column limit. Missing values become ""."""
    if value is None or value == "":
        return ""
    s = str(value).strip()
    return s[:max_length]


def create_person(db: Session, submission: ContactSubmission) -> UUID:
    first_name = truncate_field(submission.first_name, FIRST_NAME_MAX_LEN)
    last_name = truncate_field(submission.last_name, LAST_NAME_MAX_LEN)

    person = Person(
        first_name=first_name,
        last_name=last_name,
        # Built from the truncated parts, never the raw submission
        full_name=truncate_field(f"{first_name} {last_name}", FULL_NAME_MAX_LEN),
        email=truncate_field(submission.email, EMAIL_MAX_LEN),
        phone=truncate_field(submission.phone, PHONE_MAX_LEN),
        mobile_phone=truncate_field(submission.mobile_phone or submission.phone, PHONE_MAX_LEN),
        notes=submission.notes or "",
        is_active=True,
        date_of_birth=None,
    )
    db.add(person)
    db.flush()

    logger.info(
        "Created person",
        extra={"step": "create_person", "person_id": str(person.id)},
    )
    return person.id
