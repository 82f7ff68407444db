"""
Pagination contract models.
"""

import re
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt

_LAYER_PAGE_PARAM = re.compile(r"^page_(.+)$")


class PaginationConfig(BaseModel):
    """Pagination settings on a collection binding."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = False
    mode: Literal["pages", "load_more"] = "pages"
    items_per_page: int | None = Field(default=None, ge=1)

    @property
    def is_paged(self) -> bool:
        """Only page-mode pagination windows the fetch server-side."""
        return self.enabled and self.mode == "pages"


class PaginationMeta(BaseModel):
    """Pagination state of one collection layer, read by client hydration."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    layer_id: str = Field(alias="layerId")
    collection_id: str = Field(alias="collectionId")
    current_page: int = Field(alias="currentPage")
    total_pages: int = Field(alias="totalPages")
    total_items: int = Field(alias="totalItems")
    items_per_page: int = Field(alias="itemsPerPage")

    @property
    def is_first_page(self) -> bool:
        return self.current_page <= 1

    @property
    def is_last_page(self) -> bool:
        return self.current_page >= self.total_pages


class PaginationContext(BaseModel):
    """Requested page numbers, derived from the request by the caller."""

    page_numbers: dict[str, PositiveInt] = Field(
        default_factory=dict, description="Page number per collection layer ID"
    )
    default_page: PositiveInt | None = Field(default=None, description="Page for all other layers")

    def page_for(self, layer_id: str) -> int:
        """Per-layer page, else the page-wide default, else 1."""
        if layer_id in self.page_numbers:
            return self.page_numbers[layer_id]
        if self.default_page is not None:
            return self.default_page
        return 1

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "PaginationContext":
        """
        Build a context from query parameters.

        `page=N` sets the default page; `page_{layerId}=N` targets one layer.
        Values that are not positive integers are ignored.
        """
        page_numbers: dict[str, int] = {}
        default_page: int | None = None

        for key, raw in params.items():
            page = _parse_page(raw)
            if page is None:
                continue
            if key == "page":
                default_page = page
            elif match := _LAYER_PAGE_PARAM.match(key):
                page_numbers[match.group(1)] = page

        return cls(page_numbers=page_numbers, default_page=default_page)


def _parse_page(raw: Any) -> int | None:
    try:
        page = int(str(raw))
    except ValueError:
        return None
    return page if page >= 1 else None
