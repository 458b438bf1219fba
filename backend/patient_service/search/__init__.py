"""Search-index mirror of the record store."""

from patient_service.search.index import SearchIndex
from patient_service.search.registry import IndexConfig, get_index, register_index

__all__ = ["IndexConfig", "SearchIndex", "get_index", "register_index"]
