# backend/contact_intake/schemas/contact.py
from uuid import UUID

from pydantic import BaseModel, ConfigDict, field_validator

_TEXT_FIELDS = (
    "first_name",
    "last_name",
    "email",
    "phone",
    "mobile_phone",
    "company",
    "job_title",
    "role",
    "issue_areas",
    "notes",
    "org_notes",
)


class ContactSubmission(BaseModel):
    """One contact as posted by the intake form. Unknown keys are ignored."""

    model_config = ConfigDict(extra="ignore")

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    mobile_phone: str | None = None
    company: str | None = None
    job_title: str | None = None
    role: str | None = None
    issue_areas: str | None = None
    notes: str | None = None
    org_notes: str | None = None

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def _coerce_text(cls, v):
        if v is None:
            return None
        # Form builders sometimes post phone numbers as JSON numbers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if isinstance(v, str):
            return v if v.strip() else None
        return v

    @property
    def has_required_names(self) -> bool:
        return bool(self.first_name) and bool(self.last_name)


class ContactCreatedOut(BaseModel):
    success: bool = True
    person_id: UUID
    organization_id: UUID | None = None
    message: str


class ContactErrorOut(BaseModel):
    error: str
    details: str | None = None
    debug_info: str | None = None
