"""Client for the Alfresco "Sites" REST API of the document management system.

A thin typed wrapper over ``httpx.AsyncClient``. The base URL, client name
and credentials come from configuration; one instance is created at
application start-up and closed on shutdown.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx
from fastapi import Request

from patient_service.config import settings

logger = logging.getLogger(__name__)


class SitesApiClient:
    """
    Async client for Alfresco site operations.

    HTTP error statuses are raised as ``httpx.HTTPStatusError``; transport
    failures as ``httpx.RequestError``. There is no retry.

    Example:
        client = SitesApiClient.from_settings()
        try:
            sites = await client.list_sites(max_items=10)
        finally:
            await client.aclose()
    """

    def __init__(
        self,
        base_url: str,
        name: str = "dmsCore",
        username: str | None = None,
        password: str | None = None,
        timeout: float = 15.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize SitesApiClient.

        Args:
            base_url: Alfresco public API root, e.g.
                ``http://host/alfresco/api/-default-/public/alfresco/versions/1``.
            name: Logical client name, used in log messages.
            username: Basic auth user. No auth header is sent when None.
            password: Basic auth password.
            timeout: Per-request timeout in seconds.
            transport: Optional transport override (tests).
        """
        self.name = name
        self.base_url = base_url.rstrip("/")
        auth = httpx.BasicAuth(username, password or "") if username else None
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            auth=auth,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(cls) -> SitesApiClient:
        """Build a client from application settings."""
        return cls(
            base_url=settings.dms_core_url,
            name=settings.dms_core_name,
            username=settings.dms_core_username,
            password=settings.dms_core_password,
            timeout=settings.dms_core_timeout,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_sites(self, skip_count: int = 0, max_items: int = 100) -> dict[str, Any]:
        """List sites visible to the authenticated user."""
        return await self._request(
            "GET", "/sites", params={"skipCount": skip_count, "maxItems": max_items}
        )

    async def get_site(self, site_id: str) -> dict[str, Any]:
        """Get a single site."""
        return await self._request("GET", f"/sites/{quote(site_id, safe='')}")

    async def create_site(self, site_body: dict[str, Any]) -> dict[str, Any]:
        """Create a site.

        Args:
            site_body: Alfresco SiteBodyCreate, e.g.
                ``{"id": "patient-42", "title": "Patient 42", "visibility": "PRIVATE"}``.
        """
        return await self._request("POST", "/sites", json=site_body)

    async def update_site(self, site_id: str, site_body: dict[str, Any]) -> dict[str, Any]:
        """Update title, description or visibility of a site."""
        return await self._request("PUT", f"/sites/{quote(site_id, safe='')}", json=site_body)

    async def delete_site(self, site_id: str, permanent: bool = False) -> None:
        """Delete a site, moving it to the trashcan unless ``permanent``."""
        await self._request(
            "DELETE",
            f"/sites/{quote(site_id, safe='')}",
            params={"permanent": str(permanent).lower()},
        )

    async def list_site_containers(self, site_id: str) -> dict[str, Any]:
        """List the containers (document library, wiki, ...) of a site."""
        return await self._request("GET", f"/sites/{quote(site_id, safe='')}/containers")

    async def list_site_members(self, site_id: str) -> dict[str, Any]:
        """List the members of a site."""
        return await self._request("GET", f"/sites/{quote(site_id, safe='')}/members")

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        logger.debug("%s %s %s%s", self.name, method, self.base_url, path)
        response = await self._client.request(method, path, params=params, json=json)
        response.raise_for_status()
        if response.status_code == 204 or not response.content:
            return None
        return response.json()


def get_sites_client(request: Request) -> SitesApiClient:
    """FastAPI dependency returning the process-wide client from app state."""
    return request.app.state.sites_client
