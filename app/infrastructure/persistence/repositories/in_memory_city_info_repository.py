"""In-memory implementation of CityInfoRepository.
Follows Liskov Substitution Principle - can replace any CityInfoRepository."""
from typing import Dict, List, Optional, Tuple

from app.application.services.city_query_planner import city_sort_key, plan_city_page
from app.core.errors import NotFoundError
from app.domain.entities.city import City
from app.domain.entities.point_of_interest import PointOfInterest
from app.domain.repositories.city_info_repository import CityInfoRepository
from app.domain.value_objects.pagination import CityQuery, PaginationMetadata
from app.infrastructure.persistence.repositories.in_memory_city_store import InMemoryCityStore


def _fields(point: PointOfInterest) -> Tuple[str, Optional[str]]:
    return (point.name, point.description)


class InMemoryCityInfoRepository(CityInfoRepository):
    """Unit of work over a shared InMemoryCityStore.

    Points of interest handed out are tracked by ID, so repeated reads return
    the same object, and field changes made on it are written by ``commit``.
    """

    def __init__(self, store: InMemoryCityStore):
        self._store = store
        self._tracked: Dict[int, PointOfInterest] = {}
        self._snapshots: Dict[int, Tuple[str, Optional[str]]] = {}
        self._added: List[PointOfInterest] = []
        self._removed: Dict[int, PointOfInterest] = {}

    def _track(self, point: PointOfInterest) -> PointOfInterest:
        if point.id not in self._tracked:
            self._tracked[point.id] = point
            self._snapshots[point.id] = _fields(point)
        return self._tracked[point.id]

    async def list_cities(self) -> List[City]:
        return sorted(self._store.cities(), key=city_sort_key)

    async def query_cities(self, query: CityQuery) -> Tuple[List[City], PaginationMetadata]:
        return plan_city_page(self._store.cities(), query)

    async def get_city(self, city_id: int, include_points_of_interest: bool = False) -> Optional[City]:
        city = self._store.city(city_id)
        if city and include_points_of_interest:
            city.points_of_interest = await self.list_points_of_interest(city_id)
        return city

    async def city_exists(self, city_id: int) -> bool:
        return self._store.has_city(city_id)

    async def list_points_of_interest(self, city_id: int) -> List[PointOfInterest]:
        return [
            self._track(p)
            for p in self._store.points_for_city(city_id)
            if p.id not in self._removed
        ]

    async def get_point_of_interest(self, city_id: int, point_id: int) -> Optional[PointOfInterest]:
        if point_id in self._removed:
            return None
        point = self._tracked.get(point_id) or self._store.point(point_id)
        if point is None or point.city_id != city_id:
            return None
        return self._track(point)

    async def add_point_of_interest(self, city_id: int, point: PointOfInterest) -> None:
        if not self._store.has_city(city_id):
            raise NotFoundError(f"City with id {city_id} wasn't found")
        point.city_id = city_id
        self._added.append(point)

    def delete_point_of_interest(self, point: PointOfInterest) -> None:
        if point.id is None:
            self._added = [p for p in self._added if p is not point]
            return
        self._removed[point.id] = point

    async def commit(self) -> bool:
        updates = [
            p for p in self._tracked.values()
            if p.id not in self._removed and _fields(p) != self._snapshots[p.id]
        ]
        accepted = self._store.apply(self._added, updates, list(self._removed.values()))
        if accepted:
            for point in updates:
                self._snapshots[point.id] = _fields(point)
            for point in self._added:
                self._track(point)
            for point_id in self._removed:
                self._tracked.pop(point_id, None)
                self._snapshots.pop(point_id, None)
        self._added = []
        self._removed = {}
        return accepted
