"""
Contact form relay.

Delivers a contact submission to the business inbox through the Resend
email API, then sends a best-effort confirmation to the visitor.

Only the internal notification is business critical: if Resend rejects it
the whole request fails and the raw provider body is returned to the caller.
A failed confirmation is logged and otherwise ignored. There are no
retries, so a client that resubmits gets duplicate emails.
"""

import httpx
import logging
from typing import Dict, Any, List, Optional
from pydantic import ValidationError as SchemaError

from ideal_properties.core.config import Settings
from ideal_properties.core.exceptions import ConfigurationError, UpstreamRejected, ValidationError
from ideal_properties.models.contact import ContactRequest, ContactSubmission, EmailDeliveryResult

logger = logging.getLogger(__name__)

CONFIG_HINT = "Check RESEND_API_KEY, CONTACT_RECIPIENT_EMAIL, CONTACT_FROM_EMAIL in the server environment."
CONFIRMATION_SUBJECT = "We’ve received your message ✅"


def check_email_config(settings: Settings) -> None:
    """
    Fail fast when the relay cannot possibly deliver mail.

    Raises:
        ConfigurationError: if the API key, recipient or sender address is missing
    """
    if settings.resend_api_key and settings.contact_recipient_email and settings.effective_from_email:
        return

    logger.error(
        "Missing email env vars: "
        f"has_resend_key={bool(settings.resend_api_key)}, "
        f"has_recipient={bool(settings.contact_recipient_email)}, "
        f"has_from={bool(settings.effective_from_email)}"
    )
    raise ConfigurationError(
        "Server email configuration is incomplete.",
        extra={"hint": CONFIG_HINT},
    )


def parse_submission(payload: Any) -> ContactSubmission:
    """
    Turn a decoded JSON body into a ContactSubmission.

    Args:
        payload: Whatever the request body decoded to

    Returns:
        ContactSubmission: trimmed fields, phone is None when blank

    Raises:
        ValidationError: body is not an object of strings, or a required field is blank
    """
    if not isinstance(payload, dict):
        raise ValidationError("Invalid request body.")

    try:
        request = ContactRequest(**payload)
    except SchemaError:
        raise ValidationError("Invalid request body.")

    name = (request.name or "").strip()
    email = (request.email or "").strip()
    phone = (request.phone or "").strip()
    message = (request.message or "").strip()

    if not name or not email or not message:
        raise ValidationError("Missing required fields.")

    return ContactSubmission(name=name, email=email, phone=phone or None, message=message)


def build_internal_email(submission: ContactSubmission, settings: Settings) -> Dict[str, Any]:
    text = (
        f"New contact form submission from {submission.name}.\n\n"
        f"Email: {submission.email}\n"
        f"Phone: {submission.phone or 'N/A'}\n\n"
        f"Message:\n{submission.message}"
    )
    return {
        "from": settings.brand_from,
        "to": [settings.contact_recipient_email],
        "subject": f"New contact form submission from {submission.name}",
        "reply_to": submission.email,
        "text": text,
    }


def build_confirmation_email(submission: ContactSubmission, settings: Settings) -> Dict[str, Any]:
    brand = settings.contact_brand_name
    text = (
        f"Hi {submission.name},\n\n"
        f"Thank you for contacting {brand}. We’ve received your message and one of our agents will get back to you shortly.\n\n"
        f"Your message:\n{submission.message}\n\n"
        f"If this is urgent, you can also reach us at {settings.contact_recipient_email}.\n\n"
        f"Best regards,\n"
        f"{brand} Team"
    )
    return {
        "from": settings.brand_from,
        "to": [submission.email],
        "subject": CONFIRMATION_SUBJECT,
        "text": text,
    }


async def send_email(client: httpx.AsyncClient, settings: Settings, email: Dict[str, Any]) -> EmailDeliveryResult:
    """
    Send one email through the Resend API.

    Transport errors propagate; a non-2xx answer is reported in the result.
    """
    response = await client.post(
        settings.resend_api_url,
        json=email,
        headers={
            "Authorization": f"Bearer {settings.resend_api_key}",
            "Content-Type": "application/json",
        },
        timeout=settings.upstream_timeout_seconds,
    )
    return EmailDeliveryResult(
        success=response.is_success,
        status_code=response.status_code,
        body=response.text,
    )


async def send_confirmation(client: httpx.AsyncClient, settings: Settings, submission: ContactSubmission) -> Optional[EmailDeliveryResult]:
    """Courtesy email to the visitor. Never raises."""
    try:
        result = await send_email(client, settings, build_confirmation_email(submission, settings))
    except httpx.HTTPError as e:
        logger.error(f"Resend confirmation email error: {str(e)}")
        return None

    if not result.success:
        logger.error(f"Resend confirmation email error: {result.status_code} {result.body}")
    return result


async def relay_contact_submission(client: httpx.AsyncClient, settings: Settings, submission: ContactSubmission) -> List[EmailDeliveryResult]:
    """
    Deliver the internal notification, then the confirmation.

    Returns:
        list: delivery results in send order

    Raises:
        UpstreamRejected: Resend rejected the internal notification
    """
    internal = await send_email(client, settings, build_internal_email(submission, settings))
    if not internal.success:
        logger.error(f"Resend internal email error: {internal.status_code} {internal.body}")
        raise UpstreamRejected(
            "Failed to send internal email.",
            status_code=502,
            extra={"resend": internal.body},
        )

    logger.info(f"📧 Contact submission from {submission.email} delivered to inbox")

    results = [internal]
    confirmation = await send_confirmation(client, settings, submission)
    if confirmation is not None:
        results.append(confirmation)
    return results
