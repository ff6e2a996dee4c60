"""Pagination result model."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """One page of a listing plus the total across all pages.

    ``total`` comes from a separate count query and may lag ``items`` under
    concurrent writes.
    """

    items: list[T] = Field(default_factory=list, description="Entities on this page")
    total: int = Field(description="Number of matching entities")
    page: int = Field(description="Effective 1-based page number")
    page_size: int = Field(description="Effective page size")
