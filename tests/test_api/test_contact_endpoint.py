"""Tests for the contact form endpoint."""

import pytest
from api.contact import handler
from sharpchoice.utils.errors import EmailDeliveryError
from tests.utils.assertions import assert_error_response, assert_json_response
from tests.utils.factories import create_contact_payload
from tests.utils.helpers import call_handler


@pytest.mark.unit
def test_contact_success(fake_supabase, mock_send_email):
    response = call_handler(handler, "POST", "/api/contact", create_contact_payload())

    assert assert_json_response(response) == {"success": True}
    assert len(fake_supabase.tables["contacts"]) == 1
    assert mock_send_email.await_count == 2


@pytest.mark.unit
def test_contact_without_consent(fake_supabase, mock_send_email):
    response = call_handler(handler, "POST", "/api/contact", create_contact_payload(opt_in=False))

    assert_error_response(response, 400, "All fields are required, including privacy consent.")
    assert "contacts" not in fake_supabase.tables


@pytest.mark.unit
def test_contact_malformed_json(fake_supabase, mock_send_email):
    response = call_handler(handler, "POST", "/api/contact", "{not json")

    assert_error_response(response, 400, "Request body must be valid JSON")


@pytest.mark.unit
def test_contact_email_failure_is_generic_500(fake_supabase, mock_send_email):
    mock_send_email.side_effect = EmailDeliveryError("Resend rejected email (403): domain not verified")

    response = call_handler(handler, "POST", "/api/contact", create_contact_payload())

    assert_error_response(response, 500, "Failed to send message")
    assert len(fake_supabase.tables["contacts"]) == 1


@pytest.mark.unit
def test_contact_store_failure_is_generic_500(fake_supabase, mock_send_email):
    fake_supabase.fail_with = RuntimeError("relation \"contacts\" does not exist")

    response = call_handler(handler, "POST", "/api/contact", create_contact_payload())

    assert_error_response(response, 500, "Failed to send message")
    mock_send_email.assert_not_awaited()


@pytest.mark.unit
def test_contact_echoes_correlation_id(fake_supabase, mock_send_email):
    response = call_handler(
        handler, "POST", "/api/contact", create_contact_payload(),
        headers={"X-Correlation-ID": "req_abc123"},
    )

    assert response["headers"]["X-Correlation-ID"] == "req_abc123"
