"""Typed contracts for the five dashboard record types.

``*Form`` models describe what a screen submits and only coerce types: blank
strings become ``None`` (or the field default), numbers and dates are parsed.
Row models describe what the gateway hands back, including flattened
relation aliases such as ``client_name``.
"""
from __future__ import annotations

from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Optional
from urllib.parse import quote

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic_core import PydanticUndefined


class ClientType(str, Enum):
    INDIVIDUAL = "individual"
    BUSINESS = "business"
    ORGANIZATION = "organization"


class ServiceStatus(str, Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    ON_HOLD = "on_hold"


class DocumentType(str, Enum):
    TAX_RETURN = "tax_return"
    FINANCIAL_STATEMENT = "financial_statement"
    RECEIPT = "receipt"
    CONTRACT = "contract"
    OTHER = "other"


class AppointmentStatus(str, Enum):
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    RESCHEDULED = "rescheduled"


class InquiryStatus(str, Enum):
    NEW = "new"
    RESPONDED = "responded"
    IN_PROGRESS = "in_progress"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# --- submitted forms ---------------------------------------------------------


class FormModel(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _blank_is_default(cls, value: Any, info: ValidationInfo) -> Any:
        if isinstance(value, str) and not value.strip():
            default = cls.model_fields[info.field_name].default
            return None if default is PydanticUndefined else default
        return value

    def payload(self) -> dict[str, Any]:
        """Every field, blanks included, in the shape the tables store."""
        return self.model_dump(mode="json")


class ClientForm(FormModel):
    name: str
    client_type: ClientType = ClientType.INDIVIDUAL
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pan_number: Optional[str] = None
    registration_number: Optional[str] = None
    notes: Optional[str] = None


class ServiceForm(FormModel):
    service_name: str
    client_id: str
    status: ServiceStatus = ServiceStatus.PENDING
    description: Optional[str] = None
    amount: Optional[float] = Field(default=None, ge=0)
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    completion_date: Optional[date] = None
    notes: Optional[str] = None


class AppointmentForm(FormModel):
    title: str
    appointment_date: datetime
    duration_minutes: int = Field(default=60, ge=15)
    status: AppointmentStatus = AppointmentStatus.SCHEDULED
    client_id: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None

    @field_validator("appointment_date")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # datetime-local inputs carry no offset; they are taken as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class DocumentForm(FormModel):
    name: Optional[str] = None
    document_type: DocumentType = DocumentType.OTHER
    client_id: Optional[str] = None
    service_id: Optional[str] = None


class DocumentCreate(BaseModel):
    name: str
    file_path: str
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    document_type: DocumentType = DocumentType.OTHER
    client_id: Optional[str] = None
    service_id: Optional[str] = None


class InquiryForm(FormModel):
    name: str
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    message: str
    phone: Optional[str] = None
    subject: Optional[str] = None


class InquiryStatusUpdate(BaseModel):
    status: InquiryStatus
    responded_at: Optional[datetime] = None

    @classmethod
    def responded(cls) -> InquiryStatusUpdate:
        return cls(status=InquiryStatus.RESPONDED, responded_at=utcnow())


# --- rows returned by the gateway -------------------------------------------


class Row(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str


class Profile(Row):
    full_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None


class Client(Row):
    name: str
    client_type: ClientType = ClientType.INDIVIDUAL
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pan_number: Optional[str] = None
    registration_number: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class ClientOption(Row):
    name: str


class Service(Row):
    service_name: str
    client_id: str
    status: ServiceStatus = ServiceStatus.PENDING
    description: Optional[str] = None
    amount: Optional[float] = None
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    completion_date: Optional[date] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    client_name: Optional[str] = None


class ServiceOption(Row):
    service_name: str


class Document(Row):
    name: str
    file_path: str
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    document_type: DocumentType = DocumentType.OTHER
    client_id: Optional[str] = None
    service_id: Optional[str] = None
    uploaded_at: Optional[datetime] = None
    client_name: Optional[str] = None
    service_name: Optional[str] = None


class Appointment(Row):
    title: str
    appointment_date: datetime
    duration_minutes: int = 60
    status: str = AppointmentStatus.SCHEDULED.value
    client_id: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    client_name: Optional[str] = None


class ContactInquiry(Row):
    name: str
    email: str
    message: str
    phone: Optional[str] = None
    subject: Optional[str] = None
    status: str = InquiryStatus.NEW.value
    created_at: Optional[datetime] = None
    responded_at: Optional[datetime] = None

    @property
    def reply_link(self) -> str:
        subject = quote(f"Re: {self.subject or 'Your inquiry'}")
        return f"mailto:{self.email}?subject={subject}"
