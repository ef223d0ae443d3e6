"""
Contact form endpoint.

Relays a website contact submission to the business inbox and sends the
visitor a confirmation. See ``ideal_properties.core.email_relay``.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
import httpx
import logging

from ideal_properties.core.config import Settings, get_settings
from ideal_properties.core.cors import CORS_HEADERS, preflight_response
from ideal_properties.core.email_relay import check_email_config, parse_submission, relay_contact_submission
from ideal_properties.core.exceptions import FunctionError, UnexpectedError, ValidationError
from ideal_properties.core.http_client import get_http_client

router = APIRouter()
logger = logging.getLogger(__name__)


@router.options("/send-contact-email")
async def send_contact_email_preflight():
    return preflight_response()


@router.post("/send-contact-email")
async def send_contact_email(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Deliver a contact form submission.

    Body: ``{"name": str, "email": str, "phone"?: str, "message": str}``

    Returns:
        dict: ``{"success": true}`` once the inbox notification was accepted
    """
    check_email_config(settings)

    try:
        payload = await request.json()
    except ValueError as e:
        logger.error(f"Invalid JSON payload: {str(e)}")
        raise ValidationError("Invalid request body.")

    submission = parse_submission(payload)

    try:
        await relay_contact_submission(client, settings, submission)
    except FunctionError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error while sending email: {str(e)}")
        raise UnexpectedError("An unexpected error occurred.")

    return JSONResponse({"success": True}, headers=CORS_HEADERS)
