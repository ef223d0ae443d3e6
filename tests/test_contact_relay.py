# =============================================================================
# tests/test_contact_relay.py - Contact Email Relay Tests
# =============================================================================
# Exercises POST /v1/send-contact-email against a stubbed Resend API:
# - internal notification first, confirmation second
# - only the internal notification can fail the request
# - config and body validation happen before any outbound call
#
# Run with: pytest tests/test_contact_relay.py -v
# =============================================================================

import json

import httpx
import pytest

from ideal_properties.core.email_relay import (
    CONFIRMATION_SUBJECT,
    build_internal_email,
    parse_submission,
)
from ideal_properties.core.exceptions import ValidationError
from ideal_properties.models.contact import ContactSubmission

ENDPOINT = "/v1/send-contact-email"
VALID_BODY = {"name": "A", "email": "a@b.com", "message": "hi"}
BROWSER_PREFLIGHT = {"Origin": "https://site.example", "Access-Control-Request-Method": "POST"}


def sent_payload(request: httpx.Request) -> dict:
    return json.loads(request.content)


# =============================================================================
# Success Path
# =============================================================================

class TestSuccessfulRelay:

    def test_sends_internal_then_confirmation(self, client, upstream):
        upstream.respond(200, {"id": "email-1"}).respond(200, {"id": "email-2"})

        response = client.post(ENDPOINT, json=VALID_BODY)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert upstream.call_count == 2

        internal, confirmation = (sent_payload(r) for r in upstream.requests)
        assert internal["to"] == ["inbox@idealproperties.test"]
        assert confirmation["to"] == ["a@b.com"]

    def test_internal_email_content(self, client, upstream):
        upstream.respond(200).respond(200)

        client.post(ENDPOINT, json={**VALID_BODY, "phone": " 555-0100 "})

        request = upstream.requests[0]
        payload = sent_payload(request)
        assert request.method == "POST"
        assert str(request.url) == "https://api.resend.com/emails"
        assert request.headers["Authorization"] == "Bearer re_test_key"
        assert payload["subject"] == "New contact form submission from A"
        assert payload["reply_to"] == "a@b.com"
        assert payload["from"] == "iDeal Properties <inbox@idealproperties.test>"
        assert payload["text"] == (
            "New contact form submission from A.\n\n"
            "Email: a@b.com\n"
            "Phone: 555-0100\n\n"
            "Message:\nhi"
        )

    def test_confirmation_email_content(self, client, upstream):
        upstream.respond(200).respond(200)

        client.post(ENDPOINT, json=VALID_BODY)

        payload = sent_payload(upstream.requests[1])
        assert payload["subject"] == CONFIRMATION_SUBJECT
        assert "reply_to" not in payload
        assert payload["text"].startswith("Hi A,")
        assert "Your message:\nhi" in payload["text"]
        assert "inbox@idealproperties.test" in payload["text"]

    def test_fields_are_trimmed(self, client, upstream):
        upstream.respond(200).respond(200)

        client.post(ENDPOINT, json={"name": "  Ana  ", "email": " ana@b.com ", "message": "\nhello\n"})

        internal = sent_payload(upstream.requests[0])
        assert internal["subject"] == "New contact form submission from Ana"
        assert internal["reply_to"] == "ana@b.com"
        assert internal["text"].endswith("Message:\nhello")

    def test_configured_from_address_is_used(self, client, upstream, override_settings):
        override_settings(contact_from_email="hello@idealproperties.test", contact_brand_name="EstateHub")
        upstream.respond(200).respond(200)

        client.post(ENDPOINT, json=VALID_BODY)

        assert sent_payload(upstream.requests[0])["from"] == "EstateHub <hello@idealproperties.test>"


# =============================================================================
# Partial Failure
# =============================================================================

class TestDeliveryFailures:

    def test_internal_rejection_returns_502_with_provider_body(self, client, upstream):
        upstream.respond(500, text='{"message":"domain not verified"}')

        response = client.post(ENDPOINT, json=VALID_BODY)

        assert response.status_code == 502
        assert response.json() == {
            "error": "Failed to send internal email.",
            "resend": '{"message":"domain not verified"}',
        }
        # Confirmation is never attempted
        assert upstream.call_count == 1

    def test_internal_rejection_carries_cors_header(self, client, upstream):
        upstream.respond(422, text="bad")

        response = client.post(ENDPOINT, json=VALID_BODY)

        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_confirmation_rejection_still_succeeds(self, client, upstream):
        upstream.respond(200).respond(500, text="mailbox unavailable")

        response = client.post(ENDPOINT, json=VALID_BODY)

        assert response.status_code == 200
        assert response.json() == {"success": True}
        assert upstream.call_count == 2

    def test_confirmation_transport_error_still_succeeds(self, client, upstream):
        upstream.respond(200).fail(httpx.ConnectError("connection refused"))

        response = client.post(ENDPOINT, json=VALID_BODY)

        assert response.status_code == 200
        assert response.json() == {"success": True}

    def test_internal_transport_error_is_unexpected(self, client, upstream):
        upstream.fail(httpx.ReadTimeout("timed out"))

        response = client.post(ENDPOINT, json=VALID_BODY)

        assert response.status_code == 500
        assert response.json() == {"error": "An unexpected error occurred."}
        assert upstream.call_count == 1


# =============================================================================
# Validation and Configuration
# =============================================================================

class TestRejectedBeforeNetwork:

    @pytest.mark.parametrize("missing", ["name", "email", "message"])
    def test_missing_required_field(self, client, upstream, missing):
        body = {key: value for key, value in VALID_BODY.items() if key != missing}

        response = client.post(ENDPOINT, json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields."}
        assert upstream.call_count == 0

    def test_blank_required_field(self, client, upstream):
        response = client.post(ENDPOINT, json={**VALID_BODY, "name": "   "})

        assert response.status_code == 400
        assert response.json() == {"error": "Missing required fields."}
        assert upstream.call_count == 0

    def test_unparseable_body(self, client, upstream):
        response = client.post(ENDPOINT, content=b"{not json", headers={"Content-Type": "application/json"})

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body."}
        assert upstream.call_count == 0

    @pytest.mark.parametrize("body", [["A", "a@b.com", "hi"], {"name": 42, "email": "a@b.com", "message": "hi"}])
    def test_wrongly_shaped_body(self, client, upstream, body):
        response = client.post(ENDPOINT, json=body)

        assert response.status_code == 400
        assert response.json() == {"error": "Invalid request body."}
        assert upstream.call_count == 0

    @pytest.mark.parametrize("missing", ["resend_api_key", "contact_recipient_email"])
    def test_incomplete_configuration(self, client, upstream, override_settings, missing):
        override_settings(**{missing: None})

        response = client.post(ENDPOINT, json=VALID_BODY)

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "Server email configuration is incomplete."
        assert "RESEND_API_KEY" in body["hint"]
        assert upstream.call_count == 0

    def test_configuration_checked_before_body(self, client, upstream, override_settings):
        override_settings(resend_api_key=None)

        response = client.post(ENDPOINT, content=b"garbage")

        assert response.status_code == 500
        assert upstream.call_count == 0


# =============================================================================
# HTTP Surface
# =============================================================================

class TestHttpSurface:

    def test_preflight(self, client, upstream):
        response = client.options(ENDPOINT)

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert upstream.call_count == 0

    def test_browser_preflight(self, client, upstream):
        response = client.options(ENDPOINT, headers=BROWSER_PREFLIGHT)

        assert response.status_code == 200
        assert response.content == b""
        assert response.headers["Access-Control-Allow-Origin"] == "*"
        assert response.headers["Access-Control-Allow-Methods"] == "GET, POST, OPTIONS"
        assert "Access-Control-Allow-Credentials" not in response.headers
        assert upstream.call_count == 0

    def test_cross_origin_post_allows_any_origin(self, client, upstream):
        upstream.respond(200).respond(200)

        response = client.post(ENDPOINT, json=VALID_BODY, headers={"Origin": "https://site.example"})

        assert response.status_code == 200
        assert response.headers["Access-Control-Allow-Origin"] == "*"

    def test_other_methods_not_allowed(self, client, upstream):
        response = client.get(ENDPOINT)

        assert response.status_code == 405
        assert upstream.call_count == 0


# =============================================================================
# Unit Tests
# =============================================================================

class TestParseSubmission:

    def test_blank_phone_becomes_none(self):
        submission = parse_submission({**VALID_BODY, "phone": "  "})
        assert submission.phone is None

    def test_non_object_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_submission("hello")
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Invalid request body."

    def test_missing_phone_shows_na(self, settings):
        email = build_internal_email(ContactSubmission(name="A", email="a@b.com", message="hi"), settings)
        assert "Phone: N/A" in email["text"]
