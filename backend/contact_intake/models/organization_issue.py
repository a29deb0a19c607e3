from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.dialects.postgresql import UUID
from datetime import datetime
import uuid
from ..core.db import Base


class OrganizationIssue(Base):
    __tablename__ = "organizations_organizationissue"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    organization_id = Column(
        UUID(as_uuid=True),
        ForeignKey("organizations_organization.id"),
        index=True,
        nullable=False,
    )
    issue_id = Column(UUID(as_uuid=True), ForeignKey("organizations_issue.id"), index=True, nullable=False)
    priority = Column(Integer, nullable=False, default=0)
    notes = Column(Text, nullable=False, default="")
