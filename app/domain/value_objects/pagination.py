"""Pagination value objects - immutable and validated."""
import math
from dataclasses import dataclass
from typing import Optional

from app.core.errors import ValidationError

MAX_CITIES_PAGE_SIZE = 20


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return None
    return value.strip()


@dataclass(frozen=True)
class CityQuery:
    """Normalized city listing request.

    Filters are trimmed (blank means "no filter") and ``page_size`` is clamped
    to ``max_page_size`` regardless of what the caller asked for.
    """
    name_filter: Optional[str] = None
    search_text: Optional[str] = None
    page_number: int = 1
    page_size: int = 10
    max_page_size: int = MAX_CITIES_PAGE_SIZE

    def __post_init__(self):
        errors = {}
        if self.page_number < 1:
            errors["pageNumber"] = [f"Page number must be at least 1, got {self.page_number}"]
        if self.page_size < 1:
            errors["pageSize"] = [f"Page size must be at least 1, got {self.page_size}"]
        if errors:
            raise ValidationError(errors)
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "name_filter", _clean(self.name_filter))
        object.__setattr__(self, "search_text", _clean(self.search_text))
        object.__setattr__(self, "page_size", min(self.page_size, self.max_page_size))

    @property
    def skip(self) -> int:
        return self.page_size * (self.page_number - 1)

    @property
    def take(self) -> int:
        return self.page_size


@dataclass(frozen=True)
class PaginationMetadata:
    """Immutable description of a filtered, paginated result set."""
    total_item_count: int
    total_page_count: int
    current_page: int
    page_size: int

    def to_dict(self) -> dict:
        """Convert to the camelCase shape of the X-Pagination header."""
        return {
            "totalItemCount": self.total_item_count,
            "totalPageCount": self.total_page_count,
            "pageSize": self.page_size,
            "currentPage": self.current_page,
        }


def build_pagination_metadata(total_item_count: int, query: CityQuery) -> PaginationMetadata:
    """Build metadata for the filtered-but-unpaginated count."""
    return PaginationMetadata(
        total_item_count=total_item_count,
        total_page_count=math.ceil(total_item_count / query.page_size),
        current_page=query.page_number,
        page_size=query.page_size,
    )
