from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from ptj.repository import PaginatedList

T = TypeVar("T")


class Envelope(BaseModel, Generic[T]):
    success: bool = True
    message: str | None = None
    data: T | None = None


class ErrorEnvelope(BaseModel):
    success: bool = False
    message: str
    errors: list[str] = Field(default_factory=list)


class Page(BaseModel, Generic[T]):
    items: list[T]
    page_number: int
    page_size: int
    total_count: int
    total_pages: int
    has_previous_page: bool
    has_next_page: bool

    @classmethod
    def build(cls, paginated: PaginatedList, item_model: type[BaseModel]) -> "Page[Any]":
        return cls(
            items=[item_model.model_validate(item) for item in paginated.items],
            page_number=paginated.page_number,
            page_size=paginated.page_size,
            total_count=paginated.total_count,
            total_pages=paginated.total_pages,
            has_previous_page=paginated.has_previous_page,
            has_next_page=paginated.has_next_page,
        )
