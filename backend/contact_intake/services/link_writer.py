from __future__ import annotations

from uuid import UUID
import logging

from sqlalchemy.orm import Session

from ..models.organization_issue import OrganizationIssue
from ..models.person_organization import JOB_TITLE_MAX_LEN, PersonOrganization
from ..schemas.contact import ContactSubmission
from .issue_resolver import parse_issue_areas, resolve_issue
from .person_writer import truncate_field

logger = logging.getLogger(__name__)


def link_person_to_organization(
    db: Session,
    person_id: UUID,
    organization_id: UUID,
    submission: ContactSubmission,
    *,
    dedupe: bool = False,
) -> UUID:
    """
    Record that the person works at the organization.

    Always inserts unless ``dedupe`` is set, in which case an existing link
    for the same pair is returned instead.
    """
    if dedupe:
        existing = (
            db.query(PersonOrganization.id)
            .filter(
                PersonOrganization.person_id == person_id,
                PersonOrganization.organization_id == organization_id,
            )
            .first()
        )
        if existing:
            return existing.id

    link = PersonOrganization(
        person_id=person_id,
        organization_id=organization_id,
        job_title=truncate_field(submission.job_title or submission.role, JOB_TITLE_MAX_LEN),
        notes=submission.org_notes or submission.notes or "",
        is_primary=True,
        is_current=True,
        is_primary_contact=False,
        handles_areas=[],
    )
    db.add(link)
    db.flush()

    logger.info(
        "Linked person to organization",
        extra={
            "step": "link_person_to_organization",
            "person_id": str(person_id),
            "organization_id": str(organization_id),
        },
    )
    return link.id


def link_organization_to_issues(
    db: Session,
    organization_id: UUID,
    issue_areas: str | None,
    *,
    category: str | None = None,
) -> list[UUID]:
    """
    Link the organization to each parsed issue once. Returns new link ids.

    ``category`` is used for issues that have to be created.
    """
    created: list[UUID] = []
    for issue_name in parse_issue_areas(issue_areas):
        issue_id = resolve_issue(db, issue_name, category=category)

        already_linked = (
            db.query(OrganizationIssue.id)
            .filter(
                OrganizationIssue.organization_id == organization_id,
                OrganizationIssue.issue_id == issue_id,
            )
            .first()
        )
        if already_linked:
            continue

        link = OrganizationIssue(
            organization_id=organization_id,
            issue_id=issue_id,
            priority=0,
            notes="",
        )
        db.add(link)
        db.flush()
        created.append(link.id)

        logger.info(
            "Linked organization to issue",
            extra={
                "step": "link_organization_to_issues",
                "organization_id": str(organization_id),
                "issue_id": str(issue_id),
            },
        )
    return created
