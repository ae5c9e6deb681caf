"""Owner notification email for new form submissions (via Resend)"""
import html
import httpx
from typing import Any, Dict, Optional
import logging
from pydantic import ValidationError

from formsync.config import Settings
from formsync.models.notification import EmailNotification
from formsync.models.submission import FormType

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"

SUBJECTS = {
    FormType.WORKSHOP: "New Workshop Registration",
    FormType.CORPORATE: "New Corporate Contact Form Submission",
}


def _display(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        value = ", ".join(str(item) for item in value)
    if value is None or not str(value).strip():
        return "N/A"
    return html.escape(str(value))


def build_notification(data: Dict[str, Any], form_type: FormType, settings: Settings) -> EmailNotification:
    """Render the notification email for a submission"""
    name = data.get("name") or " ".join(
        part for part in (data.get("first-name"), data.get("last-name")) if part
    )

    rows = [("Name", name), ("Email", data.get("email"))]
    if form_type == FormType.WORKSHOP:
        rows += [
            ("Role(s)", data.get("role")),
            ("What they hope to learn", data.get("questions")),
        ]
    else:
        rows += [
            ("Organization", data.get("organization")),
            ("Phone", data.get("phone")),
            ("Interested in", data.get("interest")),
            ("Challenges", data.get("challenges")),
            ("Preferred contact", data.get("contact-method")),
        ]

    details = "\n".join(
        f"<p><strong>{label}:</strong> {_display(value)}</p>" for label, value in rows
    )
    html_content = f"""
        <h2>You have a new form submission</h2>
        {details}
        """

    return EmailNotification(
        to_email=settings.notification_to_email,
        subject=SUBJECTS[form_type],
        html_content=html_content,
        from_address=settings.notification_from
    )


async def send_submission_notification(
    data: Dict[str, Any],
    form_type: FormType,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None
) -> bool:
    """
    Email the site owner about a submission that reached the CRM

    Args:
        data: Submission payload
        form_type: Workshop or corporate
        settings: Resend key and addresses
        transport: Optional httpx transport (tests)

    Returns:
        True if Resend accepted the email. Failures are logged, not raised,
        since the contact has already been written.
    """
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY not set, skipping email notification")
        return False

    try:
        email = build_notification(data, form_type, settings)
    except ValidationError as e:
        logger.error(f"Notification email not built, check NOTIFICATION_TO_EMAIL: {e}")
        return False

    try:
        async with httpx.AsyncClient(transport=transport, timeout=settings.keap_timeout_seconds) as client:
            response = await client.post(
                RESEND_API_URL,
                headers={
                    "Authorization": f"Bearer {settings.resend_api_key}",
                    "Content-Type": "application/json"
                },
                json={
                    "from": email.from_address,
                    "to": [email.to_email],
                    "subject": email.subject,
                    "html": email.html_content
                }
            )

        if response.status_code == 200:
            logger.info(f"Notification email sent for {form_type.value} submission")
            return True

        logger.error(f"Notification email failed: {response.status_code} - {response.text}")
        return False

    except httpx.HTTPError as e:
        logger.error(f"Notification email error: {e}")
        return False
