"""Form submission → Keap contact upsert"""
import httpx
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging

from formsync.config import Settings
from formsync.models.submission import FormType
from formsync.services.contact_mapper import build_contact
from formsync.services.keap_client import KeapAPIError, KeapClient
from formsync.services.notification_service import send_submission_notification
from formsync.utils.validation import HONEYPOT_FIELD, has_text, is_valid_email

logger = logging.getLogger(__name__)


class SubmissionRejected(Exception):
    """Submission failed request validation (maps to 400)"""


@dataclass
class SyncResult:
    contact_id: str
    form_type: FormType
    created: bool


def is_bot_submission(data: Dict[str, Any]) -> bool:
    """A filled-in honeypot field marks an automated submission"""
    value = data.get(HONEYPOT_FIELD)
    return value not in (None, "", [])


def validate_submission(data: Dict[str, Any]) -> None:
    """
    Check the identity fields the CRM needs

    Raises:
        SubmissionRejected: If name or email is missing, or email is malformed
    """
    has_name = has_text(data.get("name")) or (
        has_text(data.get("first-name")) and has_text(data.get("last-name"))
    )
    if not has_name or not has_text(data.get("email")):
        raise SubmissionRejected("Name and email are required")

    if not is_valid_email(data["email"]):
        raise SubmissionRejected("Invalid email address")


async def sync_submission(
    data: Dict[str, Any],
    settings: Settings,
    keap: KeapClient,
    notification_transport: Optional[httpx.AsyncBaseTransport] = None
) -> SyncResult:
    """
    Upsert the submitter as a Keap contact and tag it

    Steps run strictly in order: search by email, update or create,
    apply the form's tag, then notify. Nothing is retried.

    Args:
        data: Validated submission payload
        settings: Field/tag IDs and notification settings
        keap: Open Keap client
        notification_transport: Optional httpx transport for the email step

    Returns:
        SyncResult with the resolved contact ID

    Raises:
        KeapAPIError: On any failed CRM call or a create without an ID
        httpx.HTTPError: On transport failures
    """
    draft = build_contact(data, settings)

    existing = await keap.find_contact_by_email(draft.email)

    if existing:
        contact_id = existing.get("id")
        if contact_id is None or contact_id == "":
            raise KeapAPIError("Keap search returned a contact without an id")
        await keap.update_contact(contact_id, draft.contact)
        created = False
        logger.info(f"Updated Keap contact {contact_id} from {draft.form_type.value} form")
    else:
        created_contact = await keap.create_contact(draft.contact)
        contact_id = created_contact.get("id")
        created = True
        logger.info(f"Created Keap contact {contact_id} from {draft.form_type.value} form")

    if contact_id is None or contact_id == "":
        raise KeapAPIError("Failed to create/update contact in Keap")

    if draft.tag_ids:
        await keap.apply_tags(contact_id, draft.tag_ids)
        logger.info(f"Applied tags {draft.tag_ids} to Keap contact {contact_id}")

    await send_submission_notification(data, draft.form_type, settings, transport=notification_transport)

    return SyncResult(contact_id=str(contact_id), form_type=draft.form_type, created=created)
