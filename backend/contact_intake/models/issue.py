from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.dialects.postgresql import UUID
from datetime import datetime
import uuid
from ..core.db import Base


class Issue(Base):
    __tablename__ = "organizations_issue"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    name = Column(String(200), nullable=False, index=True)
    category = Column(String(100), nullable=False, default="General")
    description = Column(Text, nullable=False, default="")
    external_id = Column(String(100), nullable=True)
