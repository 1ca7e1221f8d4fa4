"""City info service - the only entry point the API layer calls.

Each public method is one unit of work: check the city, check the point of
interest, validate, mutate, commit. The repository passed in must be fresh
for every request.
"""
import logging
from typing import Any, Callable, List, Optional, Tuple

from app.application.ports.mail import MailService
from app.application.services.patch_applicator import apply_patch
from app.core.errors import NotFoundError, StoreFailureError, ValidationError
from app.domain.entities.city import City
from app.domain.entities.point_of_interest import (
    PointOfInterest,
    PointOfInterestForUpdate,
    validate_point_of_interest_fields,
)
from app.domain.repositories.city_info_repository import CityInfoRepository
from app.domain.value_objects.pagination import CityQuery, PaginationMetadata

logger = logging.getLogger(__name__)


class CityInfoService:
    """Orchestrates existence checks, repository calls and patching."""

    def __init__(self, repository: CityInfoRepository, mail_service: MailService):
        self._repo = repository
        self._mail_service = mail_service

    # ------------------------------------------------------------------ cities

    async def list_cities(self) -> List[City]:
        return await self._repo.list_cities()

    async def query_cities(self, query: CityQuery) -> Tuple[List[City], PaginationMetadata]:
        return await self._repo.query_cities(query)

    async def get_city(self, city_id: int, include_points_of_interest: bool = False) -> City:
        city = await self._repo.get_city(city_id, include_points_of_interest)
        if city is None:
            raise NotFoundError(f"City with id {city_id} wasn't found")
        return city

    # ------------------------------------------------------- points of interest

    async def list_points_of_interest(self, city_id: int) -> List[PointOfInterest]:
        await self._ensure_city_exists(city_id)
        return await self._repo.list_points_of_interest(city_id)

    async def get_point_of_interest(self, city_id: int, point_id: int) -> PointOfInterest:
        await self._ensure_city_exists(city_id)
        return await self._get_point_or_raise(city_id, point_id)

    async def create_point_of_interest(
        self, city_id: int, name: Optional[str], description: Optional[str] = None
    ) -> PointOfInterest:
        """Create a point of interest; its ID is assigned by the store."""
        await self._ensure_city_exists(city_id)
        self._validate(name, description)

        point = PointOfInterest(id=None, name=name, description=description)
        await self._repo.add_point_of_interest(city_id, point)
        await self._commit()

        logger.info(f"Created point of interest {point.id} for city {city_id}")
        return point

    async def update_point_of_interest(
        self, city_id: int, point_id: int, name: Optional[str], description: Optional[str]
    ) -> None:
        """Replace every updatable field of a point of interest."""
        await self._ensure_city_exists(city_id)
        point = await self._get_point_or_raise(city_id, point_id)
        self._validate(name, description)

        PointOfInterestForUpdate(name=name, description=description).apply_to(point)
        await self._commit()

    async def partially_update_point_of_interest(
        self, city_id: int, point_id: int, patch_document: Any
    ) -> PointOfInterest:
        """Apply a JSON Patch document to a point of interest."""
        await self._ensure_city_exists(city_id)
        point = await self._get_point_or_raise(city_id, point_id)

        apply_patch(point, patch_document)
        await self._commit()
        return point

    async def delete_point_of_interest(
        self, city_id: int, point_id: int, schedule: Optional[Callable[..., Any]] = None
    ) -> None:
        """Delete a point of interest, then notify by mail.

        When ``schedule`` is given (e.g. ``BackgroundTasks.add_task``) the mail is
        handed to it instead of being sent before returning.
        """
        await self._ensure_city_exists(city_id)
        point = await self._get_point_or_raise(city_id, point_id)

        self._repo.delete_point_of_interest(point)
        await self._commit()

        subject = "Point of interest deleted"
        message = f"Point of interest {point.name} with id {point.id} was deleted."
        if schedule is not None:
            schedule(self._notify, subject, message)
        else:
            self._notify(subject, message)

    # ----------------------------------------------------------------- helpers

    async def _ensure_city_exists(self, city_id: int) -> None:
        if not await self._repo.city_exists(city_id):
            logger.info(f"City with id {city_id} wasn't found when accessing points of interest")
            raise NotFoundError(f"City with id {city_id} wasn't found")

    async def _get_point_or_raise(self, city_id: int, point_id: int) -> PointOfInterest:
        point = await self._repo.get_point_of_interest(city_id, point_id)
        if point is None:
            logger.info(f"Point of interest {point_id} wasn't found in city {city_id}")
            raise NotFoundError(f"Point of interest with id {point_id} wasn't found")
        return point

    @staticmethod
    def _validate(name: Optional[str], description: Optional[str]) -> None:
        errors = validate_point_of_interest_fields(name, description)
        if errors:
            raise ValidationError(errors)

    async def _commit(self) -> None:
        if not await self._repo.commit():
            logger.error("Store rejected the commit")
            raise StoreFailureError("A problem happened while handling your request.")

    def _notify(self, subject: str, message: str) -> None:
        # fire-and-forget: the delete is already committed
        try:
            self._mail_service.send(subject, message)
        except Exception as e:
            logger.error(f"Failed to send notification '{subject}': {e}")
