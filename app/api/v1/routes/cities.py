"""City API routes - thin layer delegating to the city info service."""
import json
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, Query, Response

from app.api.v1.schemas.city_schemas import (
    CitySchema,
    CityWithoutPointsOfInterestSchema,
    to_city_schema,
    to_city_summary_schema,
)
from app.application.services.city_info_service import CityInfoService
from app.config import Settings, get_settings
from app.core.dependencies import get_city_info_service
from app.domain.value_objects.pagination import CityQuery

router = APIRouter(prefix="/cities", tags=["cities"])


@router.get("", response_model=List[CityWithoutPointsOfInterestSchema])
async def get_cities(
    response: Response,
    name: Optional[str] = None,
    search_query: Optional[str] = Query(None, alias="searchQuery"),
    page_number: int = Query(1, alias="pageNumber", ge=1),
    page_size: Optional[int] = Query(None, alias="pageSize", ge=1),
    service: CityInfoService = Depends(get_city_info_service),
    settings: Settings = Depends(get_settings),
):
    """
    List cities, filtered and paginated.

    Pagination metadata is returned in the X-Pagination header.
    """
    query = CityQuery(
        name_filter=name,
        search_text=search_query,
        page_number=page_number,
        page_size=page_size or settings.DEFAULT_PAGE_SIZE,
        max_page_size=settings.MAX_CITIES_PAGE_SIZE,
    )
    cities, metadata = await service.query_cities(query)
    response.headers["X-Pagination"] = json.dumps(metadata.to_dict())
    return [to_city_summary_schema(c) for c in cities]


@router.get(
    "/{city_id}",
    response_model=None,
    responses={200: {"model": CitySchema}},
)
async def get_city(
    city_id: int,
    include_points_of_interest: bool = Query(False, alias="includePointsOfInterest"),
    service: CityInfoService = Depends(get_city_info_service),
) -> Union[CitySchema, CityWithoutPointsOfInterestSchema]:
    """Get one city, with its points of interest when requested."""
    city = await service.get_city(city_id, include_points_of_interest)
    if include_points_of_interest:
        return to_city_schema(city)
    return to_city_summary_schema(city)
