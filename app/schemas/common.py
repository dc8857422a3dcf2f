import math
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.core.config import settings
from app.schemas.enums import SortDirection


def _is_blank(value: Any) -> bool:
    return isinstance(value, str) and not value.strip()


def strip_blanks(data: Any) -> Any:
    """Drop empty strings (and lists made only of them) from a raw mapping."""
    if not isinstance(data, Mapping):
        return data
    cleaned = {}
    for key, value in data.items():
        if isinstance(value, list):
            value = [item for item in value if not _is_blank(item)]
            if not value:
                continue
        elif _is_blank(value):
            continue
        cleaned[key] = value
    return cleaned


class FormModel(BaseModel):
    """Base for anything decoded from a query string or an HTML form.

    An empty field is treated exactly like a missing one, so optional values
    fall back to None and required ones fail validation.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    @model_validator(mode="before")
    @classmethod
    def _blank_means_absent(cls, data):
        return strip_blanks(data)


def split_list(value: Any) -> Any:
    """Accept a repeated field, a single value or a comma separated string."""
    if value is None:
        return []
    items = value if isinstance(value, list) else [value]
    out: list[str] = []
    for item in items:
        if isinstance(item, str):
            out.extend(part.strip() for part in item.split(",") if part.strip())
        else:
            out.append(item)
    return out


class Pagination(BaseModel):
    page_number: int = 1
    page_size: int = Field(default_factory=lambda: settings.DEFAULT_PAGE_SIZE)

    @field_validator("page_number")
    @classmethod
    def _clamp_page_number(cls, v: int) -> int:
        return min(max(1, v), settings.MAX_PAGE_NUMBER)

    @field_validator("page_size")
    @classmethod
    def _clamp_page_size(cls, v: int) -> int:
        return min(max(1, v), settings.MAX_PAGE_SIZE)

    @property
    def limit(self) -> int:
        return self.page_size

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size


class Sort(BaseModel):
    sort_by: str = ""
    sort_direction: SortDirection = SortDirection.ASC


class QueryInfo(BaseModel):
    num_pages: int = 0
    num_items: int = 0

    @classmethod
    def build(cls, num_items: int, page_size: int) -> "QueryInfo":
        num_pages = math.ceil(num_items / page_size) if num_items > 0 else 0
        return cls(num_pages=num_pages, num_items=num_items)


class Page(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    items: list[Any] = []
    pagination: Pagination = Pagination()
    query_info: QueryInfo = QueryInfo()


class PageQuery(FormModel):
    """Pagination parameters of nested sub-lists."""

    page_number: int = Field(default=1, le=settings.MAX_PAGE_NUMBER)
    page_size: Optional[int] = None

    @property
    def pagination(self) -> Pagination:
        if self.page_size is None:
            return Pagination(page_number=self.page_number)
        return Pagination(page_number=self.page_number, page_size=self.page_size)


class ListQuery(PageQuery):
    """Pagination and sorting shared by every filtered list."""

    sort_by: str = ""
    sort_direction: SortDirection = SortDirection.ASC

    @property
    def sort(self) -> Sort:
        return Sort(sort_by=self.sort_by, sort_direction=self.sort_direction)
