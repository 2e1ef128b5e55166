from __future__ import annotations

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from taxsathi.models import (
    AppointmentForm,
    ClientForm,
    ClientType,
    ContactInquiry,
    DocumentForm,
    InquiryForm,
    InquiryStatus,
    InquiryStatusUpdate,
    Service,
    ServiceForm,
)


def test_client_form_blank_strings_become_none():
    form = ClientForm.model_validate(
        {"name": "Acme Traders", "client_type": "business", "email": "", "pan_number": "  "}
    )
    payload = form.payload()
    assert payload["name"] == "Acme Traders"
    assert payload["client_type"] == "business"
    assert payload["email"] is None
    assert payload["pan_number"] is None


def test_client_form_blank_type_falls_back_to_default():
    form = ClientForm.model_validate({"name": "Ram", "client_type": ""})
    assert form.client_type is ClientType.INDIVIDUAL


def test_client_form_requires_name():
    with pytest.raises(ValidationError):
        ClientForm.model_validate({"name": "   "})


def test_client_form_ignores_unknown_fields():
    form = ClientForm.model_validate({"name": "Acme", "user_id": "spoof"})
    assert "user_id" not in form.payload()


def test_service_form_parses_amount_and_dates():
    form = ServiceForm.model_validate(
        {
            "service_name": "Annual audit",
            "client_id": "c1",
            "amount": "15000.50",
            "start_date": "2025-01-15",
            "due_date": "",
        }
    )
    assert form.amount == 15000.5
    assert form.start_date == date(2025, 1, 15)
    assert form.due_date is None
    assert form.payload()["start_date"] == "2025-01-15"


def test_service_form_rejects_negative_amount():
    with pytest.raises(ValidationError):
        ServiceForm.model_validate({"service_name": "Audit", "client_id": "c1", "amount": "-1"})


def test_service_form_requires_client():
    with pytest.raises(ValidationError):
        ServiceForm.model_validate({"service_name": "Audit", "client_id": ""})


def test_appointment_form_naive_datetime_is_utc():
    form = AppointmentForm.model_validate(
        {"title": "Tax review", "appointment_date": "2025-03-01T10:30", "duration_minutes": ""}
    )
    assert form.appointment_date == datetime(2025, 3, 1, 10, 30, tzinfo=timezone.utc)
    assert form.duration_minutes == 60
    assert form.payload()["status"] == "scheduled"


def test_appointment_form_converts_offsets_to_utc():
    form = AppointmentForm.model_validate(
        {"title": "Call", "appointment_date": "2025-03-01T10:30:00+05:45"}
    )
    assert form.appointment_date == datetime(2025, 3, 1, 4, 45, tzinfo=timezone.utc)


def test_appointment_form_minimum_duration():
    with pytest.raises(ValidationError):
        AppointmentForm.model_validate(
            {"title": "Quick", "appointment_date": "2025-03-01T10:30", "duration_minutes": "5"}
        )


def test_document_form_defaults():
    form = DocumentForm.model_validate({"name": "", "client_id": "", "service_id": ""})
    assert form.name is None
    assert form.client_id is None
    assert form.document_type.value == "other"


@pytest.mark.parametrize("email", ["not-an-email", "two@@at.test", "spaces in@x.test"])
def test_inquiry_form_rejects_bad_email(email):
    with pytest.raises(ValidationError):
        InquiryForm.model_validate({"name": "Ram", "email": email, "message": "Hi"})


def test_inquiry_form_requires_message():
    with pytest.raises(ValidationError):
        InquiryForm.model_validate({"name": "Ram", "email": "ram@example.com", "message": ""})


def test_responded_update_sets_timestamp():
    update = InquiryStatusUpdate.responded()
    assert update.status is InquiryStatus.RESPONDED
    assert update.responded_at.tzinfo is not None
    assert update.model_dump(mode="json")["status"] == "responded"


def test_service_row_carries_client_name():
    row = Service.model_validate(
        {
            "id": "s1",
            "user_id": "u1",
            "service_name": "Bookkeeping",
            "client_id": "c1",
            "status": "in_progress",
            "created_at": "2025-01-01T00:00:00.000Z",
            "client_name": "Acme Traders",
        }
    )
    assert row.client_name == "Acme Traders"
    assert row.created_at.tzinfo is not None


def test_inquiry_reply_link_quotes_subject():
    inquiry = ContactInquiry(
        id="i1", name="Ram", email="ram@example.com", message="Hi", subject="VAT & PAN"
    )
    assert inquiry.reply_link == "mailto:ram@example.com?subject=Re%3A%20VAT%20%26%20PAN"


def test_inquiry_reply_link_without_subject():
    inquiry = ContactInquiry(id="i1", name="Ram", email="ram@example.com", message="Hi")
    assert inquiry.reply_link.startswith("mailto:ram@example.com?subject=Re%3A%20Your%20inquiry")
