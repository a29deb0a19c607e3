from __future__ import annotations

from uuid import UUID
import logging
import re

from sqlalchemy import func
from sqlalchemy.orm import Session

from ..core.config import get_settings
from ..models.issue import Issue

logger = logging.getLogger(__name__)

_ISSUE_SEPARATORS_RE = re.compile(r"[,;\n]")


def parse_issue_areas(text: str | None) -> list[str]:
    """
    Split free-text issue areas on commas, semicolons and newlines.

    Exact repeats are dropped; case variants ("Housing", "housing") are kept
    and resolved independently.
    """
    if not text or not text.strip():
        return []
    names = (segment.strip() for segment in _ISSUE_SEPARATORS_RE.split(text))
    return list(dict.fromkeys(name for name in names if name))


def resolve_issue(db: Session, issue_name: str, *, category: str | None = None) -> UUID:
    name = issue_name.strip()
    if not name:
        raise ValueError("Issue name must not be blank")

    existing = (
        db.query(Issue.id)
        .filter(func.lower(Issue.name) == name.lower())
        .order_by(Issue.created_at.asc(), Issue.id.asc())
        .first()
    )
    if existing:
        return existing.id

    issue = Issue(
        name=name,
        category=category or get_settings().DEFAULT_ISSUE_CATEGORY,
        description="",
        external_id=None,
    )
    db.add(issue)
    db.flush()

    logger.info(
        "Created issue",
        extra={"step": "resolve_issue", "issue_id": str(issue.id)},
    )
    return issue.id
