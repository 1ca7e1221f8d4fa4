"""Filtering and pagination plan for city listings.

The SQLAlchemy repository expresses the same plan as SQL; this module is the
in-memory rendition and the single place that defines the ordering.
"""
from typing import Iterable, List, Tuple

from app.domain.entities.city import City
from app.domain.value_objects.pagination import (
    CityQuery,
    PaginationMetadata,
    build_pagination_metadata,
)


def city_sort_key(city: City) -> Tuple[str, int]:
    """Name ascending with ID as the tie-break, so pages are reproducible."""
    return (city.name, city.id or 0)


def matches_name(city: City, query: CityQuery) -> bool:
    return query.name_filter is None or city.name == query.name_filter


def matches_search(city: City, query: CityQuery) -> bool:
    if query.search_text is None:
        return True
    if query.search_text in city.name:
        return True
    return city.description is not None and query.search_text in city.description


def filter_cities(cities: Iterable[City], query: CityQuery) -> List[City]:
    """Apply the exact-name filter, then the free-text search, then order."""
    candidates = [c for c in cities if matches_name(c, query)]
    candidates = [c for c in candidates if matches_search(c, query)]
    return sorted(candidates, key=city_sort_key)


def plan_city_page(cities: Iterable[City], query: CityQuery) -> Tuple[List[City], PaginationMetadata]:
    """Return one page of matching cities plus metadata for the whole match set.

    Pages past the end are empty; the metadata is still computed from the
    full filtered set.
    """
    filtered = filter_cities(cities, query)
    metadata = build_pagination_metadata(len(filtered), query)
    page = filtered[query.skip:query.skip + query.take]
    return page, metadata
