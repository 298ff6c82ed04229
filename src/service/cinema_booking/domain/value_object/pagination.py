from typing import Generic, List, TypeVar

import attrs


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

T = TypeVar('T')


@attrs.frozen
class PageRequest:
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def of(cls, page: int | None, limit: int | None) -> 'PageRequest':
        """page < 1 falls back to 1, limit outside [1, 100] falls back to 10."""
        page = page if page is not None and page >= 1 else DEFAULT_PAGE
        limit = limit if limit is not None and 1 <= limit <= MAX_LIMIT else DEFAULT_LIMIT
        return cls(page=page, limit=limit)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def total_pages(self, total: int) -> int:
        return (total + self.limit - 1) // self.limit


@attrs.frozen
class PaginatedResult(Generic[T]):
    data: List[T]
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, *, data: List[T], total: int, page_request: PageRequest) -> 'PaginatedResult[T]':
        return cls(
            data=data,
            page=page_request.page,
            limit=page_request.limit,
            total=total,
            total_pages=page_request.total_pages(total),
        )
