from __future__ import annotations

from uuid import UUID
import logging

from sqlalchemy import String, func, or_
from sqlalchemy.orm import Session

from ..core.config import Settings, get_settings
from ..models.organization import Organization
from .name_normalizer import match_tokens, normalize_org_name, squash

logger = logging.getLogger(__name__)


def _db_normalized_name():
    """
    SQL-side approximation of the normalizer: lowercase, strip
    non-alphanumerics, collapse whitespace. It does not expand abbreviations
    or strip corporate suffixes.
    """
    stripped = func.regexp_replace(func.lower(Organization.name), r"[^a-z0-9\s]", "", "g", type_=String)
    return func.lower(func.regexp_replace(stripped, r"\s+", " ", "g", type_=String), type_=String)


def _db_squashed_name():
    return func.regexp_replace(func.lower(Organization.name), r"[^a-z0-9]", "", "g", type_=String)


def _oldest_first(query):
    return query.order_by(Organization.created_at.asc(), Organization.id.asc())


def find_organization(db: Session, raw_name: str, *, settings: Settings | None = None) -> UUID | None:
    """
    Look up an existing organization for a submitted company name.

    Tries, in order: case-insensitive match on the submitted name or its
    normalized key, the SQL-side normalized name, then (if enabled) a scan of
    likely candidates compared with the full normalizer.
    """
    settings = settings or get_settings()
    trimmed = raw_name.strip()
    key = normalize_org_name(trimmed)

    names = {trimmed.lower()}
    if key:
        names.add(key)
    row = _oldest_first(
        db.query(Organization.id).filter(func.lower(Organization.name).in_(sorted(names)))
    ).first()
    if row:
        return row.id

    if not key:
        return None

    row = _oldest_first(
        db.query(Organization.id).filter(_db_normalized_name() == key)
    ).first()
    if row:
        return row.id

    if not settings.ORG_MATCH_CANDIDATE_SCAN:
        return None

    squashed = _db_squashed_name()
    conditions = [squashed.like(f"%{token}%") for token in match_tokens(trimmed, key)]
    # short names ("AB", "3M") yield no tokens; also try rows starting with the key
    squashed_key = squash(key)
    if squashed_key:
        conditions.append(squashed.like(f"{squashed_key}%"))
    if not conditions:
        return None

    candidates = _oldest_first(
        db.query(Organization.id, Organization.name).filter(or_(*conditions))
    ).limit(settings.ORG_MATCH_CANDIDATE_LIMIT)

    for candidate in candidates:
        if normalize_org_name(candidate.name) == key:
            return candidate.id
    return None


def resolve_organization(db: Session, raw_name: str, *, settings: Settings | None = None) -> UUID:
    """
    Return the id of the organization matching ``raw_name``, creating it if
    none exists. New rows keep the submitted name for display.
    """
    trimmed = (raw_name or "").strip()
    if not trimmed:
        raise ValueError("Organization name must not be blank")

    existing_id = find_organization(db, trimmed, settings=settings)
    if existing_id is not None:
        logger.info(
            "Matched existing organization",
            extra={"step": "resolve_organization", "organization_id": str(existing_id)},
        )
        return existing_id

    organization = Organization(name=trimmed, is_active=True, is_client=False)
    db.add(organization)
    db.flush()

    logger.info(
        "Created organization",
        extra={"step": "resolve_organization", "organization_id": str(organization.id)},
    )
    return organization.id
