from sqlalchemy import Column, String, Text, Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID
from datetime import datetime
import uuid
from ..core.db import Base


class Organization(Base):
    __tablename__ = "organizations_organization"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    name = Column(String(255), nullable=False, index=True)  # display name, as submitted
    legal_name = Column(String(255), nullable=False, default="")
    description = Column(Text, nullable=False, default="")

    email = Column(String(254), nullable=False, default="")
    phone = Column(String(50), nullable=False, default="")
    website = Column(String(200), nullable=False, default="")
    address_line_1 = Column(String(255), nullable=False, default="")
    address_line_2 = Column(String(255), nullable=False, default="")
    city = Column(String(100), nullable=False, default="")
    state_province = Column(String(100), nullable=False, default="")
    postal_code = Column(String(20), nullable=False, default="")
    country = Column(String(100), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")

    industry = Column(String(100), nullable=False, default="")
    size = Column(String(50), nullable=False, default="")
    notes = Column(Text, nullable=False, default="")
    actions = Column(Text, nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)
    is_client = Column(Boolean, nullable=False, default=False)
