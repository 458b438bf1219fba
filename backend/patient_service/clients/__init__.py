"""Clients for external services."""

from patient_service.clients.dms_core import SitesApiClient, get_sites_client

__all__ = ["SitesApiClient", "get_sites_client"]
