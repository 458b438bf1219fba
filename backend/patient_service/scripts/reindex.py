"""Rebuild the search index from the record store.

Clears the selected indexes and re-indexes every stored record, repairing
any divergence between the store and the search mirror.

Usage:
    python -m patient_service.scripts.reindex [--index medical_case|patient] [--batch-size 200]
"""

import argparse
import asyncio

from sqlalchemy import text

from patient_service.constants import MEDICAL_CASE_INDEX, PATIENT_INDEX
from patient_service.database import async_session_maker, engine
from patient_service.repositories.medical_case import MedicalCaseRepository
from patient_service.repositories.patient import PatientRepository
from patient_service.schemas.pagination import Pageable
from patient_service.search.index import SearchIndex
from patient_service.services.mappers import medical_case_to_dto, patient_to_dto, to_index_source

_SOURCES = {
    MEDICAL_CASE_INDEX: (MedicalCaseRepository, medical_case_to_dto),
    PATIENT_INDEX: (PatientRepository, patient_to_dto),
}


async def verify_connection() -> bool:
    """Verify the database connection is working."""
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        print("  Database: connected")
    except Exception as e:
        print(f"  Database: FAILED - {e}")
        return False
    return True


async def reindex(session, index_name: str, batch_size: int = 200) -> int:
    """
    Re-index every record of one index from the store.

    Args:
        session: Async session; the caller commits.
        index_name: Index to rebuild.
        batch_size: Records read per page.

    Returns:
        Number of documents indexed.
    """
    repository_class, to_dto = _SOURCES[index_name]
    repository = repository_class(session)
    search_index = SearchIndex(session)

    await search_index.clear(index_name)

    indexed = 0
    page_number = 0
    while True:
        page = await repository.find_all(Pageable(page=page_number, size=batch_size))
        for entity in page.content:
            dto = to_dto(entity)
            await search_index.index(index_name, dto.id, to_index_source(dto))
            indexed += 1
        if page_number + 1 >= page.total_pages:
            break
        page_number += 1
    return indexed


async def reindex_all(index_names: list[str], batch_size: int) -> dict[str, int]:
    stats: dict[str, int] = {}
    if not await verify_connection():
        raise RuntimeError("Database connection verification failed")

    for index_name in index_names:
        print(f"\n  Rebuilding {index_name}...")
        async with async_session_maker() as session:
            stats[index_name] = await reindex(session, index_name, batch_size)
            await session.commit()
        print(f"    Documents: {stats[index_name]}")

    await engine.dispose()
    return stats


def main() -> None:
    """Main entry point for the reindex script."""
    parser = argparse.ArgumentParser(description="Rebuild the search index from the record store")
    parser.add_argument(
        "--index",
        choices=sorted(_SOURCES),
        action="append",
        help="Index to rebuild (repeatable, default: all)",
    )
    parser.add_argument("--batch-size", type=int, default=200)
    args = parser.parse_args()

    print("=" * 50)
    print("Patient Service Search Reindex")
    print("=" * 50)

    stats = asyncio.run(reindex_all(args.index or sorted(_SOURCES), args.batch_size))

    print("\n" + "=" * 50)
    print("Summary")
    print("=" * 50)
    for index_name, count in stats.items():
        print(f"  {index_name}: {count}")
    print("\nReindex complete!")


if __name__ == "__main__":
    main()
