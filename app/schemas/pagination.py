from pydantic import BaseModel, Field
from typing import Callable, Generic, List, TypeVar

from app.domain import Page

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Schema for one page of results"""
    data: List[T]
    total: int = Field(..., description="Total items across all pages", examples=[150])
    page: int = Field(..., description="Current page", examples=[1])
    limit: int = Field(..., description="Items per page", examples=[10])
    total_pages: int = Field(..., description="Total pages available", examples=[15])
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def from_page(cls, page: Page, convert: Callable) -> "PaginatedResponse":
        return cls(
            data=[convert(item) for item in page.data],
            total=page.total,
            page=page.page,
            limit=page.limit,
            total_pages=page.total_pages,
            has_previous_page=page.has_previous_page,
            has_next_page=page.has_next_page,
        )
