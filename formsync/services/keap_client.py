"""Keap (Infusionsoft) REST API client"""
import httpx
from typing import Any, Dict, List, Optional
import logging

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.infusionsoft.com/crm/rest/v2"


class KeapAPIError(Exception):
    """Non-2xx response (or unusable body) from the Keap API"""

    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class KeapClient:
    """
    Thin async wrapper over the Keap contact endpoints

    Opens one httpx.AsyncClient per use; nothing is shared between requests.

    Usage:
        async with KeapClient(token, base_url) as keap:
            contact = await keap.find_contact_by_email("jane@x.com")
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={
                "Authorization": f"Bearer {access_token}",
                "Content-Type": "application/json"
            }
        )

    async def __aenter__(self) -> "KeapClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        response = await self._client.request(method, path, params=params, json=json)

        if not response.is_success:
            logger.error(f"Keap API error on {method} {path}: {response.status_code} - {response.text}")
            raise KeapAPIError(
                f"Keap API error ({response.status_code}): {response.text}",
                status_code=response.status_code,
                body=response.text
            )

        # Tag application and some updates answer with an empty body
        if not response.content:
            return {}
        return response.json()

    async def find_contact_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Return the first contact matching email exactly, or None"""
        result = await self._request("GET", "/contacts", params={"email": email})
        contacts = result.get("contacts") or []
        if not contacts:
            return None
        if len(contacts) > 1:
            logger.warning(f"{len(contacts)} Keap contacts share an email, using the first")
        return contacts[0]

    async def create_contact(self, contact: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/contacts", json=contact)

    async def update_contact(self, contact_id: str, contact: Dict[str, Any]) -> Dict[str, Any]:
        """Partial update (PATCH) of an existing contact"""
        return await self._request("PATCH", f"/contacts/{contact_id}", json=contact)

    async def apply_tags(self, contact_id: str, tag_ids: List[int]) -> Dict[str, Any]:
        return await self._request("POST", f"/contacts/{contact_id}/tags", json={"tagIds": tag_ids})
