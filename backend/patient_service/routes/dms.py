"""Document-management (Alfresco) browsing routes.

Read-only pass-through to the Sites API client. Upstream failures are
rendered as 502 by the ``httpx.HTTPError`` exception handler.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from patient_service.clients.dms_core import SitesApiClient, get_sites_client

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dms", tags=["dms"])


@router.get("/sites")
async def list_sites(
    skip_count: int = Query(0, ge=0, alias="skipCount"),
    max_items: int = Query(100, ge=1, alias="maxItems"),
    client: SitesApiClient = Depends(get_sites_client),
) -> dict[str, Any]:
    logger.debug("REST request to list DMS sites")
    return await client.list_sites(skip_count=skip_count, max_items=max_items)


@router.get("/sites/{site_id}")
async def get_site(
    site_id: str,
    client: SitesApiClient = Depends(get_sites_client),
) -> dict[str, Any]:
    logger.debug("REST request to get DMS site : %s", site_id)
    return await client.get_site(site_id)
