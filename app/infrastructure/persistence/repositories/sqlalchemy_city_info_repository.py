"""SQLAlchemy implementation of CityInfoRepository."""
import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy import and_, exists, func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Query, Session, selectinload

from app.core.errors import NotFoundError
from app.domain.entities.city import City as CityEntity
from app.domain.entities.point_of_interest import PointOfInterest as PointOfInterestEntity
from app.domain.repositories.city_info_repository import CityInfoRepository
from app.domain.value_objects.pagination import (
    CityQuery,
    PaginationMetadata,
    build_pagination_metadata,
)
from app.infrastructure.persistence import models

logger = logging.getLogger(__name__)


def _to_point_entity(row: models.PointOfInterest) -> PointOfInterestEntity:
    return PointOfInterestEntity(
        id=row.id,
        city_id=row.city_id,
        name=row.name,
        description=row.description,
    )


def _to_city_entity(row: models.City, points: Optional[List[PointOfInterestEntity]] = None) -> CityEntity:
    return CityEntity(
        id=row.id,
        name=row.name,
        description=row.description,
        points_of_interest=points or [],
    )


MYSQL_BINARY_COLLATION = "utf8mb4_bin"


def _case_sensitive(column, dialect_name: str):
    # default MySQL collations compare case-insensitively
    if dialect_name in ("mysql", "mariadb"):
        return column.collate(MYSQL_BINARY_COLLATION)
    return column


def _equals(column, text: str, dialect_name: str):
    return _case_sensitive(column, dialect_name) == text


def _contains(column, text: str, dialect_name: str):
    # instr is case-sensitive on SQLite, unlike LIKE
    return func.instr(_case_sensitive(column, dialect_name), text) > 0


class SQLAlchemyCityInfoRepository(CityInfoRepository):
    """City info repository using SQLAlchemy; one session per unit of work."""

    def __init__(self, session: Session):
        self.session = session
        self._tracked: Dict[int, Tuple[PointOfInterestEntity, models.PointOfInterest]] = {}
        self._added: List[PointOfInterestEntity] = []
        self._removed: Dict[int, PointOfInterestEntity] = {}

    def _track(self, row: models.PointOfInterest) -> PointOfInterestEntity:
        if row.id not in self._tracked:
            self._tracked[row.id] = (_to_point_entity(row), row)
        return self._tracked[row.id][0]

    def _filtered_cities(self, query: CityQuery) -> Query:
        dialect_name = self.session.get_bind().dialect.name
        q = self.session.query(models.City)
        if query.name_filter:
            q = q.filter(_equals(models.City.name, query.name_filter, dialect_name))
        if query.search_text:
            q = q.filter(
                or_(
                    _contains(models.City.name, query.search_text, dialect_name),
                    and_(
                        models.City.description.isnot(None),
                        _contains(models.City.description, query.search_text, dialect_name),
                    ),
                )
            )
        return q

    async def list_cities(self) -> List[CityEntity]:
        rows = self.session.query(models.City).order_by(models.City.name, models.City.id).all()
        return [_to_city_entity(r) for r in rows]

    async def query_cities(self, query: CityQuery) -> Tuple[List[CityEntity], PaginationMetadata]:
        filtered = self._filtered_cities(query)
        total = filtered.count()
        rows = (
            filtered
            .order_by(models.City.name, models.City.id)
            .offset(query.skip)
            .limit(query.take)
            .all()
        )
        return [_to_city_entity(r) for r in rows], build_pagination_metadata(total, query)

    async def get_city(self, city_id: int, include_points_of_interest: bool = False) -> Optional[CityEntity]:
        q = self.session.query(models.City).filter(models.City.id == city_id)
        if not include_points_of_interest:
            row = q.first()
            return _to_city_entity(row) if row else None

        row = q.options(selectinload(models.City.points_of_interest)).first()
        if not row:
            return None
        points = [
            self._track(p)
            for p in row.points_of_interest
            if p.id not in self._removed
        ]
        return _to_city_entity(row, points)

    async def city_exists(self, city_id: int) -> bool:
        return bool(self.session.query(exists().where(models.City.id == city_id)).scalar())

    async def list_points_of_interest(self, city_id: int) -> List[PointOfInterestEntity]:
        rows = (
            self.session.query(models.PointOfInterest)
            .filter(models.PointOfInterest.city_id == city_id)
            .order_by(models.PointOfInterest.id)
            .all()
        )
        return [self._track(r) for r in rows if r.id not in self._removed]

    async def get_point_of_interest(self, city_id: int, point_id: int) -> Optional[PointOfInterestEntity]:
        if point_id in self._removed:
            return None
        row = (
            self.session.query(models.PointOfInterest)
            .filter(
                models.PointOfInterest.city_id == city_id,
                models.PointOfInterest.id == point_id,
            )
            .first()
        )
        return self._track(row) if row else None

    async def add_point_of_interest(self, city_id: int, point: PointOfInterestEntity) -> None:
        if not await self.city_exists(city_id):
            raise NotFoundError(f"City with id {city_id} wasn't found")
        point.city_id = city_id
        self._added.append(point)

    def delete_point_of_interest(self, point: PointOfInterestEntity) -> None:
        if point.id is None:
            self._added = [p for p in self._added if p is not point]
            return
        self._removed[point.id] = point

    async def commit(self) -> bool:
        new_rows = []
        try:
            for point_id, (entity, row) in self._tracked.items():
                if point_id in self._removed:
                    self.session.delete(row)
                    continue
                row.name = entity.name
                row.description = entity.description
            for point_id in self._removed:
                if point_id not in self._tracked:
                    self.session.query(models.PointOfInterest).filter(
                        models.PointOfInterest.id == point_id
                    ).delete(synchronize_session=False)
            for entity in self._added:
                row = models.PointOfInterest(
                    city_id=entity.city_id,
                    name=entity.name,
                    description=entity.description,
                )
                self.session.add(row)
                new_rows.append((entity, row))
            self.session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Commit failed, rolling back: {e}")
            self.session.rollback()
            self._added = []
            self._removed = {}
            return False

        for entity, row in new_rows:
            entity.id = row.id
            self._tracked[row.id] = (entity, row)
        for point_id in self._removed:
            self._tracked.pop(point_id, None)
        self._added = []
        self._removed = {}
        return True
