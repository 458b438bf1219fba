"""Search index configuration.

Each index names the DTO fields whose values are flattened into the
searchable ``content`` of a search document. The full DTO is stored
alongside as the document source.
"""

from dataclasses import dataclass, field
from typing import Any

from patient_service.constants import MEDICAL_CASE_INDEX, PATIENT_INDEX


@dataclass(frozen=True)
class IndexConfig:
    """Configuration for one search index.

    Args:
        name: Index name, stored on every document of the index.
        fields: Source keys whose values are indexed for free-text search.
    """

    name: str
    fields: tuple[str, ...] = field(default_factory=tuple)

    def extract_content(self, source: dict[str, Any]) -> str:
        """Build the lower-cased searchable text for a document source."""
        values = [source.get(name) for name in self.fields]
        return " ".join(str(v) for v in values if v is not None and v != "").lower()


_registry: dict[str, IndexConfig] = {}


def register_index(config: IndexConfig) -> None:
    """Register (or replace) an index configuration."""
    _registry[config.name] = config


def get_index(name: str) -> IndexConfig:
    """Get an index configuration by name.

    Raises:
        KeyError: If no index with that name is registered.
    """
    try:
        return _registry[name]
    except KeyError:
        raise KeyError(f"Search index '{name}' is not registered") from None


def all_indexes() -> dict[str, IndexConfig]:
    return _registry.copy()


register_index(
    IndexConfig(
        name=MEDICAL_CASE_INDEX,
        fields=("dmsId", "location", "createdDate", "patientId"),
    )
)
register_index(
    IndexConfig(
        name=PATIENT_INDEX,
        fields=("idpCode", "phoneNumber", "location", "dmsId", "dob", "createdDate"),
    )
)
