from sqlalchemy import Column, String, Text, Boolean, Date, DateTime
from sqlalchemy.dialects.postgresql import UUID
from datetime import datetime
import uuid
from ..core.db import Base

FIRST_NAME_MAX_LEN = 150
LAST_NAME_MAX_LEN = 150
EMAIL_MAX_LEN = 254
PHONE_MAX_LEN = 50
FULL_NAME_MAX_LEN = 255


class Person(Base):
    __tablename__ = "people_person"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    first_name = Column(String(FIRST_NAME_MAX_LEN), nullable=False)
    last_name = Column(String(LAST_NAME_MAX_LEN), nullable=False)
    middle_name = Column(String(150), nullable=False, default="")
    full_name = Column(String(FULL_NAME_MAX_LEN), nullable=False)
    title = Column(String(100), nullable=False, default="")

    email = Column(String(EMAIL_MAX_LEN), nullable=False, default="")
    phone = Column(String(PHONE_MAX_LEN), nullable=False, default="")
    mobile_phone = Column(String(PHONE_MAX_LEN), nullable=False, default="")
    linkedin_url = Column(String(200), nullable=False, default="")
    twitter_handle = Column(String(100), nullable=False, default="")

    personal_address_line_1 = Column(String(255), nullable=False, default="")
    personal_address_line_2 = Column(String(255), nullable=False, default="")
    personal_city = Column(String(100), nullable=False, default="")
    personal_state_province = Column(String(100), nullable=False, default="")
    personal_postal_code = Column(String(20), nullable=False, default="")
    personal_country = Column(String(100), nullable=False, default="")

    notes = Column(Text, nullable=False, default="")
    is_active = Column(Boolean, nullable=False, default=True)
    date_of_birth = Column(Date, nullable=True)
