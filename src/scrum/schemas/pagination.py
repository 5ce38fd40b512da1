"""Pagination schemas for offset-based pagination."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response.

    `total` counts every item matching the query, not just this page.
    """

    items: list[T]
    total: int = Field(description="Total number of matching items.")
    page: int = Field(description="Current 1-based page number.")
    page_size: int
    has_more: bool = Field(
        default=False,
        description="Whether there are more items after this page.",
    )

    @classmethod
    def build(cls, items: list[T], total: int, page: int, page_size: int) -> "PaginatedResponse[T]":
        return cls(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            has_more=page * page_size < total,
        )
