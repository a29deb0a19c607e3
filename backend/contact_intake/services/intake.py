from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional
from uuid import UUID, uuid4
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..core.config import Settings, get_settings
from ..core.db import SessionLocal
from ..core.errors import ContactStorageError, ContactValidationError
from ..schemas.contact import ContactSubmission
from .link_writer import link_organization_to_issues, link_person_to_organization
from .organization_resolver import resolve_organization
from .person_writer import create_person

logger = logging.getLogger(__name__)


@dataclass
class ContactIntakeResult:
    person_id: UUID
    organization_id: Optional[UUID]
    message: str


def intake_contact(
    submission: ContactSubmission,
    *,
    session_factory: Callable[[], Session] = SessionLocal,
    settings: Settings | None = None,
    request_id: str | None = None,
) -> ContactIntakeResult:
    """
    Record one contact submission atomically.

    Steps, all on one session/transaction:
    1. Resolve or create the organization (only when a company was given)
    2. Create the person
    3. Link person -> organization, then organization -> issues

    Any failure rolls back every step. The session is always closed, which
    returns its connection to the pool.
    """
    if not submission.has_required_names:
        raise ContactValidationError("First name and last name are required")

    settings = settings or get_settings()
    request_id = request_id or str(uuid4())
    log_extra = {"request_id": request_id}

    db = session_factory()
    try:
        organization_id: UUID | None = None
        if submission.company and submission.company.strip():
            organization_id = resolve_organization(db, submission.company, settings=settings)

        person_id = create_person(db, submission)

        if organization_id is not None:
            link_person_to_organization(
                db,
                person_id,
                organization_id,
                submission,
                dedupe=settings.DEDUPE_PERSON_ORGANIZATION_LINKS,
            )
            if submission.issue_areas:
                link_organization_to_issues(
                    db,
                    organization_id,
                    submission.issue_areas,
                    category=settings.DEFAULT_ISSUE_CATEGORY,
                )

        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        error = ContactStorageError.from_exception(e)
        logger.exception(
            "Contact intake failed, transaction rolled back",
            extra={**log_extra, "step": "intake_contact", "error_kind": error.kind.value},
        )
        raise error from e
    except Exception:
        # logged by the caller
        db.rollback()
        raise
    finally:
        db.close()

    logger.info(
        "Contact intake committed",
        extra={
            **log_extra,
            "step": "intake_contact",
            "person_id": str(person_id),
            "organization_id": str(organization_id) if organization_id else None,
        },
    )
    return ContactIntakeResult(
        person_id=person_id,
        organization_id=organization_id,
        message=f"Successfully added {submission.first_name.strip()} {submission.last_name.strip()}",
    )
