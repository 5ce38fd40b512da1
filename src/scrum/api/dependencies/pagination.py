"""Pagination query parameters."""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Query


@dataclass
class PageParams:
    page: int
    page_size: int


def get_page_params(
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    page_size: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 20,
) -> PageParams:
    return PageParams(page=page, page_size=page_size)


Page = Annotated[PageParams, Depends(get_page_params)]
