"""Identity provider access (Clerk backend API)."""

import logging
from typing import Any, Optional, Protocol

import httpx

from homeaway.core.config import settings
from homeaway.core.exceptions import IdentityProviderError
from homeaway.schemas.identity_schema import Identity

logger = logging.getLogger(__name__)

ONBOARDED_FLAG = "hasProfile"


class IdentityStore(Protocol):
    """What the actions need from the identity provider."""

    async def get_identity(self, subject_id: str) -> Optional[Identity]:
        ...

    async def mark_onboarded(self, subject_id: str) -> None:
        ...


def identity_from_clerk_user(user: dict[str, Any]) -> Identity:
    """Build an Identity from a Clerk user object."""
    emails = user.get("email_addresses") or []
    primary_id = user.get("primary_email_address_id")
    email = next(
        (e.get("email_address") for e in emails if e.get("id") == primary_id),
        emails[0].get("email_address") if emails else "",
    )
    private_metadata = user.get("private_metadata") or {}
    return Identity(
        id=user["id"],
        email=email or "",
        image_url=user.get("image_url"),
        has_profile=bool(private_metadata.get(ONBOARDED_FLAG, False)),
    )


class ClerkIdentityStore:
    """IdentityStore backed by the Clerk backend API."""

    def __init__(
        self,
        api_url: str | None = None,
        secret_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_url = (api_url or settings.CLERK_API_URL).rstrip("/")
        self.secret_key = secret_key or settings.CLERK_SECRET_KEY
        self.timeout = timeout
        self.transport = transport

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.secret_key}",
            "Content-Type": "application/json",
        }

    async def get_identity(self, subject_id: str) -> Optional[Identity]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(
                    f"{self.api_url}/users/{subject_id}",
                    headers=self._headers(),
                )
        except httpx.HTTPError as e:
            logger.error(f"Identity lookup failed for {subject_id}: {e}")
            raise IdentityProviderError(str(e))

        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            logger.error(f"Identity lookup failed for {subject_id}: status {response.status_code}")
            raise IdentityProviderError(f"status {response.status_code}")
        return identity_from_clerk_user(response.json())

    async def mark_onboarded(self, subject_id: str) -> None:
        """Set the private hasProfile flag. Clerk merges metadata, so this is idempotent."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.patch(
                    f"{self.api_url}/users/{subject_id}/metadata",
                    headers=self._headers(),
                    json={"private_metadata": {ONBOARDED_FLAG: True}},
                )
        except httpx.HTTPError as e:
            logger.error(f"Failed to mark {subject_id} onboarded: {e}")
            raise IdentityProviderError(str(e))

        if response.status_code >= 400:
            logger.error(f"Failed to mark {subject_id} onboarded: status {response.status_code}")
            raise IdentityProviderError(f"status {response.status_code}")
        logger.info(f"Marked identity {subject_id} as onboarded")
