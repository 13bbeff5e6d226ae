from typing import Generic, Optional, Sequence, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for transfer objects: snake_case in Python, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def total_pages_for(total_count: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    if total_count <= 0:
        return 0
    return (total_count + page_size - 1) // page_size


class PaginatedResult(CamelModel, Generic[T]):
    """A page of items plus the metadata a client needs to navigate the rest."""

    items: list[T]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def create(
        cls,
        items: Sequence[T],
        *,
        total_count: int,
        page: int,
        page_size: int,
    ) -> "PaginatedResult[T]":
        total_pages = total_pages_for(total_count, page_size)
        return cls(
            items=list(items),
            total_count=total_count,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_previous_page=page > 1,
            has_next_page=page < total_pages,
        )


class ProblemDetails(CamelModel):
    title: str
    status: int
    detail: Optional[str] = None
    errors: Optional[dict[str, list[str]]] = None


class HealthStatus(CamelModel):
    status: str
    database: str
