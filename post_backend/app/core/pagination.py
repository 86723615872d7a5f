"""
Pagination query parameters shared by list endpoints.
"""

from dataclasses import dataclass

from fastapi import Query

from post_backend.app.core.config import settings


@dataclass
class PageParams:
    page: int
    page_size: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def page_params(
    page: int = Query(1, ge=1, description="Page number"),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size, description="Items per page"),
) -> PageParams:
    return PageParams(page=page, page_size=page_size)
