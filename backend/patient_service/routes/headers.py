"""Alert and pagination response headers.

Alert headers tell the client UI which translated notification to show
after a create, update or delete; pagination headers carry the total count
and RFC 5988 ``Link`` relations for page navigation.
"""

from urllib.parse import quote_plus

from patient_service.config import settings
from patient_service.schemas.pagination import Page


def _alert_header(name: str) -> str:
    return f"X-{settings.application_name}-{name}"


def create_alert(message: str, param: str) -> dict[str, str]:
    return {
        _alert_header("alert"): message,
        _alert_header("params"): param,
    }


def create_entity_creation_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{settings.application_name}.{entity_name}.created", param)


def create_entity_update_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{settings.application_name}.{entity_name}.updated", param)


def create_entity_deletion_alert(entity_name: str, param: str) -> dict[str, str]:
    return create_alert(f"{settings.application_name}.{entity_name}.deleted", param)


def create_failure_alert(entity_name: str, error_key: str) -> dict[str, str]:
    return {
        _alert_header("error"): f"error.{error_key}",
        _alert_header("params"): entity_name,
    }


def generate_pagination_headers(page: Page, base_url: str) -> dict[str, str]:
    """Build ``X-Total-Count`` and ``Link`` headers for a page of results."""
    return _pagination_headers(page, base_url, suffix="")


def generate_search_pagination_headers(query: str, page: Page, base_url: str) -> dict[str, str]:
    """Like ``generate_pagination_headers``, with the query kept in every link."""
    return _pagination_headers(page, base_url, suffix=f"&query={quote_plus(query)}")


def _pagination_headers(page: Page, base_url: str, suffix: str) -> dict[str, str]:
    links = []
    if page.page + 1 < page.total_pages:
        links.append(_link(base_url, page.page + 1, page.size, suffix, "next"))
    if page.page > 0:
        links.append(_link(base_url, page.page - 1, page.size, suffix, "prev"))
    last_page = page.total_pages - 1 if page.total_pages > 0 else 0
    links.append(_link(base_url, last_page, page.size, suffix, "last"))
    links.append(_link(base_url, 0, page.size, suffix, "first"))
    return {
        "X-Total-Count": str(page.total),
        "Link": ",".join(links),
    }


def _link(base_url: str, page: int, size: int, suffix: str, rel: str) -> str:
    return f'<{base_url}?page={page}&size={size}{suffix}>; rel="{rel}"'
