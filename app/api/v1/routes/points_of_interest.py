"""Point of interest API routes - thin layer delegating to the city info service.
Follows Single Responsibility Principle - only handles HTTP concerns."""
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response, status

from app.api.dependencies import verify_bearer_token
from app.api.v1.schemas.city_schemas import (
    PointOfInterestForCreationSchema,
    PointOfInterestForUpdateSchema,
    PointOfInterestSchema,
    to_point_of_interest_schema,
)
from app.application.services.city_info_service import CityInfoService
from app.core.dependencies import get_city_info_service

router = APIRouter(
    prefix="/cities/{city_id}/pointsofinterest",
    tags=["points of interest"],
    dependencies=[Depends(verify_bearer_token)],
)


@router.get("", response_model=List[PointOfInterestSchema])
async def get_points_of_interest(
    city_id: int,
    service: CityInfoService = Depends(get_city_info_service),
):
    points = await service.list_points_of_interest(city_id)
    return [to_point_of_interest_schema(p) for p in points]


@router.get("/{point_id}", response_model=PointOfInterestSchema, name="get_point_of_interest")
async def get_point_of_interest(
    city_id: int,
    point_id: int,
    service: CityInfoService = Depends(get_city_info_service),
):
    point = await service.get_point_of_interest(city_id, point_id)
    return to_point_of_interest_schema(point)


@router.post("", response_model=PointOfInterestSchema, status_code=status.HTTP_201_CREATED)
async def create_point_of_interest(
    city_id: int,
    body: PointOfInterestForCreationSchema,
    request: Request,
    response: Response,
    service: CityInfoService = Depends(get_city_info_service),
):
    """Create a point of interest; the Location header points at the new resource."""
    point = await service.create_point_of_interest(city_id, body.name, body.description)
    response.headers["Location"] = str(
        request.url_for("get_point_of_interest", city_id=city_id, point_id=point.id)
    )
    return to_point_of_interest_schema(point)


@router.put("/{point_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_point_of_interest(
    city_id: int,
    point_id: int,
    body: PointOfInterestForUpdateSchema,
    service: CityInfoService = Depends(get_city_info_service),
):
    """Replace both name and description."""
    await service.update_point_of_interest(city_id, point_id, body.name, body.description)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


PATCH_DOCUMENT_BODY = {
    "requestBody": {
        "required": True,
        "content": {
            media_type: {"schema": {"type": "array", "items": {"type": "object"}}}
            for media_type in ("application/json", "application/json-patch+json")
        },
    }
}


@router.patch(
    "/{point_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    openapi_extra=PATCH_DOCUMENT_BODY,
)
async def partially_update_point_of_interest(
    city_id: int,
    point_id: int,
    request: Request,
    service: CityInfoService = Depends(get_city_info_service),
):
    """
    Apply a JSON Patch document.

    The raw body is handed to the service, which decodes it only after the
    city and point of interest are found.

    Example body: [{"op": "replace", "path": "/name", "value": "Updated name"}]
    """
    raw_document = await request.body()
    await service.partially_update_point_of_interest(city_id, point_id, raw_document)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{point_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_point_of_interest(
    city_id: int,
    point_id: int,
    background_tasks: BackgroundTasks,
    service: CityInfoService = Depends(get_city_info_service),
):
    await service.delete_point_of_interest(city_id, point_id, schedule=background_tasks.add_task)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
