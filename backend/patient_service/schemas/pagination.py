"""Paging request and paged result types shared by repositories and services."""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")

SORT_ASC = "asc"
SORT_DESC = "desc"


@dataclass(frozen=True)
class SortOrder:
    """Ordering on a single property."""

    property: str
    direction: str = SORT_ASC

    @property
    def descending(self) -> bool:
        return self.direction == SORT_DESC


@dataclass(frozen=True)
class Pageable:
    """Page request: zero-based page index, page size and ordering.

    Attributes:
        page: Zero-based page index.
        size: Maximum number of items on the page.
        sort: Orderings applied in sequence. Empty means store order (by id).
    """

    page: int = 0
    size: int = 20
    sort: tuple[SortOrder, ...] = ()

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    """A bounded slice of a larger collection plus paging metadata."""

    content: list[T]
    total: int
    page: int
    size: int
    sort: tuple[SortOrder, ...] = field(default=())

    @property
    def total_pages(self) -> int:
        if self.size <= 0:
            return 1
        return -(-self.total // self.size)

    def map(self, func) -> "Page":
        """Return a page with ``func`` applied to each item, same metadata."""
        return Page(
            content=[func(item) for item in self.content],
            total=self.total,
            page=self.page,
            size=self.size,
            sort=self.sort,
        )


def parse_sort(values: list[str] | None) -> tuple[SortOrder, ...]:
    """Parse ``sort`` query values of the form ``property[,asc|desc]``.

    Raises:
        ValueError: If a direction other than asc/desc is given.
    """
    orders: list[SortOrder] = []
    for value in values or []:
        parts = [p.strip() for p in value.split(",") if p.strip()]
        if not parts:
            continue
        direction = SORT_ASC
        if len(parts) > 1:
            direction = parts[-1].lower()
            if direction not in (SORT_ASC, SORT_DESC):
                raise ValueError(f"Invalid sort direction: {parts[-1]}")
            parts = parts[:-1]
        for prop in parts:
            orders.append(SortOrder(property=prop, direction=direction))
    return tuple(orders)
