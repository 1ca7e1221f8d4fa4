"""Process-wide in-memory catalog shared by in-memory units of work.

Constructed once at startup and injected; never looked up globally.
"""
import logging
import threading
from dataclasses import replace
from typing import Dict, List, Optional

from app.domain.entities.city import City
from app.domain.entities.point_of_interest import PointOfInterest

logger = logging.getLogger(__name__)


class InMemoryCityStore:
    """Holds committed cities and points of interest.

    Reads hand out copies, so callers never share mutable state with the
    store. ``apply`` is the only write path and holds the lock for the whole
    change set.
    """

    def __init__(self):
        self._cities: Dict[int, City] = {}
        self._points: Dict[int, PointOfInterest] = {}
        self._highest_city_id = 0
        # never lowered, so a deleted id is never issued again
        self._highest_point_id = 0
        self._lock = threading.Lock()

    # ------------------------------------------------------------------ seeding

    def add_city(self, city: City) -> City:
        """Administratively create a city together with its points of interest.

        IDs already set on the city or its points are kept (seed data);
        missing ones are assigned.
        """
        if not city.is_valid():
            raise ValueError("Invalid city")
        with self._lock:
            city_id = city.id if city.id is not None else self._highest_city_id + 1
            if city_id in self._cities:
                raise ValueError(f"City with id {city_id} already exists")
            self._highest_city_id = max(self._highest_city_id, city_id)
            self._cities[city_id] = replace(city, id=city_id, points_of_interest=[])

            for point in city.points_of_interest:
                if not point.is_valid():
                    raise ValueError(f"Invalid point of interest '{point.name}'")
                point_id = point.id if point.id is not None else self._next_point_id()
                if point_id in self._points:
                    raise ValueError(f"Point of interest with id {point_id} already exists")
                self._points[point_id] = replace(point, id=point_id, city_id=city_id)
        return self.city(city_id)

    # -------------------------------------------------------------------- reads

    def cities(self) -> List[City]:
        return [replace(c, points_of_interest=[]) for c in self._cities.values()]

    def city(self, city_id: int) -> Optional[City]:
        city = self._cities.get(city_id)
        return replace(city, points_of_interest=[]) if city else None

    def has_city(self, city_id: int) -> bool:
        return city_id in self._cities

    def points_for_city(self, city_id: int) -> List[PointOfInterest]:
        points = [p for p in self._points.values() if p.city_id == city_id]
        return [replace(p) for p in sorted(points, key=lambda p: p.id)]

    def point(self, point_id: int) -> Optional[PointOfInterest]:
        point = self._points.get(point_id)
        return replace(point) if point else None

    # ------------------------------------------------------------------- writes

    def _next_point_id(self) -> int:
        self._highest_point_id = max([self._highest_point_id, *self._points.keys()]) + 1
        return self._highest_point_id

    def apply(
        self,
        additions: List[PointOfInterest],
        updates: List[PointOfInterest],
        removals: List[PointOfInterest],
    ) -> bool:
        """Apply one unit of work atomically.

        Assigns IDs to ``additions`` in place. Returns False, changing nothing,
        when an addition targets a missing city or an update targets a point
        that no longer exists.
        """
        with self._lock:
            for point in additions:
                if point.city_id not in self._cities:
                    logger.warning(f"Rejected commit: city {point.city_id} does not exist")
                    return False
            removed_ids = {p.id for p in removals}
            for point in updates:
                if point.id not in removed_ids and point.id not in self._points:
                    logger.warning(f"Rejected commit: point of interest {point.id} no longer exists")
                    return False

            for point_id in removed_ids:
                self._points.pop(point_id, None)
            for point in updates:
                if point.id not in removed_ids:
                    self._points[point.id] = replace(point)
            for point in additions:
                point.id = self._next_point_id()
                self._points[point.id] = replace(point)
        return True
