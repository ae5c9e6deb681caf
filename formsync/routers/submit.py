"""Landing page form submission endpoint (Keap sync)"""
from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from typing import Optional
import httpx
import logging

from formsync.config import Settings, get_settings
from formsync.middleware.cors import CORS_HEADERS
from formsync.models.submission import SubmissionResponse
from formsync.services.keap_client import KeapClient
from formsync.services.submission_service import (
    SubmissionRejected,
    is_bot_submission,
    sync_submission,
    validate_submission,
)

logger = logging.getLogger(__name__)
router = APIRouter()

GENERIC_FAILURE = "Failed to submit form. Please try again."


def get_keap_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for outbound Keap calls; None uses the network"""
    return None


def get_notification_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for the notification email; None uses the network"""
    return None


def envelope(status_code: int, success: bool, message: Optional[str] = None, contact_id: Optional[str] = None) -> JSONResponse:
    body = SubmissionResponse(success=success, message=message, contact_id=contact_id)
    return JSONResponse(status_code=status_code, content=body.to_body(), headers=CORS_HEADERS)


@router.options("/keap-submit")
async def submit_preflight():
    """Answer cross-origin preflight with an empty 200"""
    return Response(status_code=200, headers=CORS_HEADERS)


@router.api_route("/keap-submit", methods=["GET", "HEAD", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def submit_method_not_allowed():
    return envelope(405, False, "Method not allowed")


@router.post("/keap-submit", response_model=SubmissionResponse, response_model_exclude_none=True)
async def submit_form(
    request: Request,
    settings: Settings = Depends(get_settings),
    keap_transport: Optional[httpx.AsyncBaseTransport] = Depends(get_keap_transport),
    notification_transport: Optional[httpx.AsyncBaseTransport] = Depends(get_notification_transport)
):
    """Handle workshop / corporate form submission (PUBLIC endpoint)"""
    if not settings.keap_access_token:
        logger.error("KEAP_ACCESS_TOKEN not set in environment variables")
        return envelope(500, False, "Server configuration error")

    try:
        data = await request.json()
    except ValueError:
        return envelope(400, False, "Invalid request body")
    if not isinstance(data, dict):
        return envelope(400, False, "Invalid request body")

    if is_bot_submission(data):
        logger.info("Dropping submission with filled honeypot field")
        return envelope(200, True)

    try:
        validate_submission(data)
    except SubmissionRejected as e:
        return envelope(400, False, str(e))

    try:
        async with KeapClient(
            settings.keap_access_token,
            base_url=settings.keap_base_url,
            timeout=settings.keap_timeout_seconds,
            transport=keap_transport
        ) as keap:
            result = await sync_submission(data, settings, keap, notification_transport=notification_transport)

    except Exception as e:
        logger.error(f"Keap submission error: {e}")
        message = f"{GENERIC_FAILURE} ({e})" if settings.expose_error_details else GENERIC_FAILURE
        return envelope(500, False, message)

    return envelope(200, True, "Form submitted successfully", contact_id=result.contact_id)
