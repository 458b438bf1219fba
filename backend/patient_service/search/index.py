"""Free-text search over the search document mirror.

Documents are kept in the ``search_document`` table, one row per indexed
record. A query is split on whitespace and every term must occur, case
insensitively, in the document content. A blank query matches the whole
index.

The index is only as fresh as the last call to ``index``/``remove``: the
service layer is responsible for calling them after every store write.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Select, and_, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from patient_service.models.search import SearchDocument
from patient_service.repositories.base import InvalidSortError
from patient_service.schemas.pagination import Page, Pageable
from patient_service.search.registry import get_index

logger = logging.getLogger(__name__)

# The store id is the only sortable property of a search hit
_SORTABLE = {"id"}


class SearchIndex:
    """
    Search-index collaborator over the ``search_document`` table.

    Example:
        async with async_session_maker() as session:
            search_index = SearchIndex(session)
            await search_index.index("medical_case", 42, dto.model_dump(mode="json", by_alias=True))
            page = await search_index.search("medical_case", "ward a", Pageable(size=10))
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize SearchIndex.

        Args:
            session: Async SQLAlchemy session for database queries.
        """
        self._session = session

    async def index(self, index_name: str, document_id: int, source: dict[str, Any]) -> None:
        """Insert or replace the document for ``document_id``.

        Args:
            index_name: Registered index name.
            document_id: Id of the source record in the store.
            source: JSON-compatible DTO dump (camelCase keys).
        """
        config = get_index(index_name)
        document = SearchDocument(
            index_name=index_name,
            document_id=document_id,
            content=config.extract_content(source),
            source=source,
            indexed_at=datetime.now(timezone.utc),
        )
        await self._session.merge(document)
        await self._session.flush()
        logger.debug("Indexed %s/%s", index_name, document_id)

    async def remove(self, index_name: str, document_id: int) -> None:
        """Remove a document. Removing an absent document is a no-op."""
        await self._session.execute(
            delete(SearchDocument).where(
                SearchDocument.index_name == index_name,
                SearchDocument.document_id == document_id,
            )
        )
        logger.debug("Removed %s/%s from index", index_name, document_id)

    async def clear(self, index_name: str) -> int:
        """Remove every document of an index.

        Returns:
            Number of documents removed.
        """
        result = await self._session.execute(
            delete(SearchDocument).where(SearchDocument.index_name == index_name)
        )
        return result.rowcount or 0

    async def search(self, index_name: str, query: str, pageable: Pageable) -> Page[dict[str, Any]]:
        """
        Find documents whose content contains every term of ``query``.

        Args:
            index_name: Registered index name.
            query: Free text; terms are whitespace separated.
            pageable: Page request. Only ``id`` may be used as sort property.

        Returns:
            Page of stored document sources.

        Raises:
            InvalidSortError: If a sort property other than ``id`` is requested.
        """
        get_index(index_name)
        terms = [term.lower() for term in query.split()]

        conditions = [SearchDocument.index_name == index_name]
        conditions.extend(SearchDocument.content.contains(term, autoescape=True) for term in terms)
        where = and_(*conditions)

        count_result = await self._session.execute(
            select(func.count()).select_from(SearchDocument).where(where)
        )
        total = count_result.scalar() or 0

        stmt = self._apply_ordering(select(SearchDocument).where(where), pageable)
        stmt = stmt.offset(pageable.offset).limit(pageable.size)
        result = await self._session.execute(stmt)
        documents = result.scalars().all()

        logger.debug(
            "Search %s for %r matched %d documents (returning %d)",
            index_name,
            query,
            total,
            len(documents),
        )
        return Page(
            content=[dict(doc.source) for doc in documents],
            total=total,
            page=pageable.page,
            size=pageable.size,
            sort=pageable.sort,
        )

    def _apply_ordering(
        self, stmt: Select[tuple[SearchDocument]], pageable: Pageable
    ) -> Select[tuple[SearchDocument]]:
        if not pageable.sort:
            return stmt.order_by(SearchDocument.document_id.asc())
        for order in pageable.sort:
            if order.property not in _SORTABLE:
                raise InvalidSortError(f"Cannot sort search results by '{order.property}'")
        column = SearchDocument.document_id
        return stmt.order_by(column.desc() if pageable.sort[0].descending else column.asc())
