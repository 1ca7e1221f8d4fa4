"""City info repository interface - abstraction for data access."""
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from app.domain.entities.city import City
from app.domain.entities.point_of_interest import PointOfInterest
from app.domain.value_objects.pagination import CityQuery, PaginationMetadata


class CityInfoRepository(ABC):
    """Repository interface for cities and their points of interest.

    One instance is one unit of work: ``add_point_of_interest`` and
    ``delete_point_of_interest`` only stage changes, and field assignments on
    entities returned by this instance are tracked. Nothing reaches the store
    until ``commit`` is called.
    """

    @abstractmethod
    async def list_cities(self) -> List[City]:
        """List all cities ordered by name, without points of interest."""
        pass

    @abstractmethod
    async def query_cities(self, query: CityQuery) -> Tuple[List[City], PaginationMetadata]:
        """Filter, order and paginate cities."""
        pass

    @abstractmethod
    async def get_city(self, city_id: int, include_points_of_interest: bool = False) -> Optional[City]:
        """Get city by ID, optionally with its points of interest."""
        pass

    @abstractmethod
    async def city_exists(self, city_id: int) -> bool:
        """Check whether a city exists without loading it."""
        pass

    @abstractmethod
    async def list_points_of_interest(self, city_id: int) -> List[PointOfInterest]:
        """List the points of interest of a city ordered by ID."""
        pass

    @abstractmethod
    async def get_point_of_interest(self, city_id: int, point_id: int) -> Optional[PointOfInterest]:
        """Get a point of interest belonging to the given city."""
        pass

    @abstractmethod
    async def add_point_of_interest(self, city_id: int, point: PointOfInterest) -> None:
        """Stage a new point of interest under a city.

        Raises:
            NotFoundError: if the city does not exist
        """
        pass

    @abstractmethod
    def delete_point_of_interest(self, point: PointOfInterest) -> None:
        """Stage removal of a point of interest."""
        pass

    @abstractmethod
    async def commit(self) -> bool:
        """Apply all staged changes atomically.

        Returns:
            True if the store accepted the write, False otherwise
        """
        pass
