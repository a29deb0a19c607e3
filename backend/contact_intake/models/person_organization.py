from sqlalchemy import Column, String, Text, Boolean, DateTime, ForeignKey, JSON
from sqlalchemy.dialects.postgresql import UUID, ARRAY
from datetime import datetime
import uuid
from ..core.db import Base

JOB_TITLE_MAX_LEN = 200


class PersonOrganization(Base):
    """
    Person <-> organization association.

    There is deliberately no unique constraint on (person_id, organization_id):
    repeated submissions for the same pair each get their own row unless
    DEDUPE_PERSON_ORGANIZATION_LINKS is enabled.
    """
    __tablename__ = "people_personorganization"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    person_id = Column(UUID(as_uuid=True), ForeignKey("people_person.id"), index=True, nullable=False)
    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations_organization.id"),
        index=True,
        nullable=False,
    )

    job_title = Column(String(JOB_TITLE_MAX_LEN), nullable=False, default="")
    department = Column(String(200), nullable=False, default="")
    is_primary = Column(Boolean, nullable=False, default=False)
    is_current = Column(Boolean, nullable=False, default=True)

    work_email = Column(String(254), nullable=False, default="")
    work_phone = Column(String(50), nullable=False, default="")
    work_phone_extension = Column(String(20), nullable=False, default="")
    direct_dial = Column(String(50), nullable=False, default="")
    notes = Column(Text, nullable=False, default="")

    is_primary_contact = Column(Boolean, nullable=False, default=False)
    # text[] in Postgres; JSON list elsewhere (tests run on SQLite)
    handles_areas = Column(ARRAY(Text).with_variant(JSON(), "sqlite"), nullable=False, default=list)

    assistant_name = Column(String(200), nullable=False, default="")
    assistant_email = Column(String(254), nullable=False, default="")
    assistant_phone = Column(String(50), nullable=False, default="")
