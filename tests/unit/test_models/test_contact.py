"""Tests for Contact model."""

import pytest
from pydantic import ValidationError
from sharpchoice.models.contact import Contact
from tests.utils.factories import create_contact_payload


@pytest.mark.unit
def test_contact_valid():
    contact = Contact.model_validate(create_contact_payload(name="Ann Lee", email="ann@example.com"))

    assert contact.opt_in is True
    assert contact.to_record()["email"] == "ann@example.com"


@pytest.mark.unit
@pytest.mark.parametrize("opt_in", [False, "true", 1, "yes", None])
def test_contact_requires_opt_in_exactly_true(opt_in):
    """Consent must be the JSON boolean true."""
    with pytest.raises(ValidationError):
        Contact.model_validate(create_contact_payload(opt_in=opt_in))


@pytest.mark.unit
def test_contact_missing_opt_in():
    payload = create_contact_payload()
    del payload["opt_in"]

    with pytest.raises(ValidationError):
        Contact.model_validate(payload)


@pytest.mark.unit
@pytest.mark.parametrize("field", ["name", "email", "message"])
def test_contact_blank_fields_rejected(field):
    with pytest.raises(ValidationError):
        Contact.model_validate(create_contact_payload(**{field: "  "}))


@pytest.mark.unit
def test_contact_message_sanitized():
    contact = Contact.model_validate(create_contact_payload(message=" Hi <script>steal()</script> "))

    assert contact.message == "Hi &lt;script&gt;steal()&lt;/script&gt;"
