"""Form submission flow and UI feedback state"""
from enum import Enum
from typing import Any, Dict, Mapping, Optional
import httpx
import logging
import warnings

from formsync.client.form_state import FormState
from formsync.client.payload import Payload

logger = logging.getLogger(__name__)

ENDPOINT_PATH = "/.netlify/functions/keap-submit"


class FormSubmissionError(Exception):
    """Submission did not reach the CRM"""


class SubmissionStatus(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    ERROR = "error"


class ProxiedTransport:
    """POST the payload as JSON to the submit endpoint"""

    def __init__(self, endpoint_url: str, client: Optional[httpx.AsyncClient] = None):
        self.endpoint_url = endpoint_url
        self._client = client

    @classmethod
    def for_site(cls, site_url: str, client: Optional[httpx.AsyncClient] = None) -> "ProxiedTransport":
        """Transport for the submit endpoint of the site at site_url"""
        return cls(f"{site_url.rstrip('/')}{ENDPOINT_PATH}", client=client)

    async def send(self, payload: Payload) -> Dict[str, Any]:
        if self._client is not None:
            response = await self._client.post(self.endpoint_url, json=payload)
        else:
            async with httpx.AsyncClient() as client:
                response = await client.post(self.endpoint_url, json=payload)

        try:
            result = response.json()
        except ValueError:
            result = {}
        if not isinstance(result, dict):
            result = {}

        if not response.is_success or not result.get("success"):
            raise FormSubmissionError(result.get("message") or "Form submission failed")
        return result


class DirectFormTransport:
    """
    POST form-encoded fields straight to a Keap-hosted form URL

    Deprecated: the hosted form gives no structured answer, so only the
    HTTP status is checked. Prefer ProxiedTransport.
    """

    def __init__(
        self,
        form_url: str,
        field_map: Optional[Mapping[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None
    ):
        warnings.warn(
            "DirectFormTransport is deprecated, submit through the JSON endpoint instead",
            DeprecationWarning,
            stacklevel=2
        )
        self.form_url = form_url
        self.field_map = dict(field_map or {})
        self._client = client

    async def send(self, payload: Payload) -> Dict[str, Any]:
        form_data = {self.field_map.get(key, key): value for key, value in payload.items()}

        if self._client is not None:
            response = await self._client.post(self.form_url, data=form_data)
        else:
            async with httpx.AsyncClient(follow_redirects=True) as client:
                response = await client.post(self.form_url, data=form_data)

        if not response.is_success:
            raise FormSubmissionError(f"Hosted form rejected submission ({response.status_code})")
        return {"success": True}


class FormSubmitter:
    """
    Drives one form through idle -> submitting -> success | error

    The attributes mirror what the page shows: whether the submit control
    is enabled, the button label, which panel is visible and which element
    was scrolled into view.
    """

    BUTTON_LABEL = "Submit"
    LOADING_LABEL = "Submitting..."

    def __init__(self, form: FormState, transport):
        self.form = form
        self.transport = transport
        self.status = SubmissionStatus.IDLE
        self.submit_enabled = True
        self.button_label = self.BUTTON_LABEL
        self.success_visible = False
        self.error_visible = False
        self.error_message: Optional[str] = None
        self.scrolled_to: Optional[str] = None
        self.last_result: Optional[Dict[str, Any]] = None

    async def submit(self) -> SubmissionStatus:
        if self.status == SubmissionStatus.SUBMITTING:
            return self.status

        # Bots get no feedback and no request
        if self.form.is_bot():
            logger.info("Honeypot filled, dropping submission")
            return self.status

        self.success_visible = False
        self.error_visible = False

        if not self.form.validate_all():
            self.error_visible = True
            return self.status

        self.status = SubmissionStatus.SUBMITTING
        self.submit_enabled = False
        self.button_label = self.LOADING_LABEL

        try:
            self.last_result = await self.transport.send(self.form.payload())
        except Exception as e:
            logger.error(f"Form submission error: {e}")
            self.status = SubmissionStatus.ERROR
            self.error_message = str(e)
            self.error_visible = True
            self.success_visible = False
            self.scrolled_to = "form-error"
        else:
            self.status = SubmissionStatus.SUCCESS
            self.error_message = None
            self.success_visible = True
            self.error_visible = False
            self.form.reset()
            self.scrolled_to = "form-success"
        finally:
            self.submit_enabled = True
            self.button_label = self.BUTTON_LABEL

        return self.status
