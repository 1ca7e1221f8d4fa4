"""Contract tests run against both repository implementations."""
import pytest
from sqlalchemy.dialects import mysql, sqlite

from app.core.errors import NotFoundError
from app.domain.entities.city import City
from app.domain.entities.point_of_interest import PointOfInterest
from app.domain.value_objects.pagination import CityQuery
from app.infrastructure.persistence.repositories.in_memory_city_info_repository import (
    InMemoryCityInfoRepository,
)
from app.infrastructure.persistence.repositories.in_memory_city_store import InMemoryCityStore
from app.infrastructure.persistence import models
from app.infrastructure.persistence.repositories.sqlalchemy_city_info_repository import (
    MYSQL_BINARY_COLLATION,
    SQLAlchemyCityInfoRepository,
    _contains,
    _equals,
)


@pytest.fixture(params=["in_memory", "sqlalchemy"])
def unit_of_work(request):
    """Factory for fresh repositories over one shared, seeded store."""
    if request.param == "in_memory":
        store = request.getfixturevalue("city_store")
        yield lambda: InMemoryCityInfoRepository(store)
        return

    session_factory = request.getfixturevalue("test_session_factory")
    sessions = []

    def factory():
        session = session_factory()
        sessions.append(session)
        return SQLAlchemyCityInfoRepository(session)

    yield factory
    for session in sessions:
        session.close()


@pytest.mark.asyncio
class TestReads:
    """Test read operations."""

    async def test_list_cities_by_name(self, unit_of_work):
        cities = await unit_of_work().list_cities()
        assert [c.name for c in cities] == ["Antwerp", "New York City", "Paris"]
        assert all(c.points_of_interest == [] for c in cities)

    async def test_query_cities_filters_and_pages(self, unit_of_work):
        cities, metadata = await unit_of_work().query_cities(CityQuery(search_text="one with", page_size=2))
        assert [c.name for c in cities] == ["Antwerp", "New York City"]
        assert metadata.total_item_count == 3
        assert metadata.total_page_count == 2

    async def test_query_cities_search_is_case_sensitive(self, unit_of_work):
        cities, metadata = await unit_of_work().query_cities(CityQuery(search_text="paris"))
        assert cities == []
        assert metadata.total_item_count == 0

    async def test_query_cities_exact_name(self, unit_of_work):
        cities, _ = await unit_of_work().query_cities(CityQuery(name_filter=" Paris "))
        assert [c.id for c in cities] == [2]

    async def test_query_cities_beyond_last_page(self, unit_of_work):
        cities, metadata = await unit_of_work().query_cities(CityQuery(page_number=5, page_size=2))
        assert cities == []
        assert metadata.total_item_count == 3
        assert metadata.current_page == 5

    async def test_get_city_with_and_without_children(self, unit_of_work):
        repo = unit_of_work()
        summary = await repo.get_city(2)
        full = await repo.get_city(2, include_points_of_interest=True)
        assert summary.points_of_interest == []
        assert [p.id for p in full.points_of_interest] == [20, 21]
        assert await repo.get_city(99) is None

    async def test_city_exists(self, unit_of_work):
        repo = unit_of_work()
        assert await repo.city_exists(1) is True
        assert await repo.city_exists(99) is False

    async def test_list_points_of_interest(self, unit_of_work):
        repo = unit_of_work()
        assert [p.id for p in await repo.list_points_of_interest(2)] == [20, 21]
        assert await repo.list_points_of_interest(3) == []

    async def test_get_point_of_interest_requires_matching_city(self, unit_of_work):
        repo = unit_of_work()
        assert (await repo.get_point_of_interest(2, 20)).name == "Eiffel Tower"
        assert await repo.get_point_of_interest(1, 20) is None


@pytest.mark.asyncio
class TestUnitOfWork:
    """Test staging and commit."""

    async def test_add_is_invisible_until_commit(self, unit_of_work):
        repo = unit_of_work()
        point = PointOfInterest(id=None, name="Zoo")
        await repo.add_point_of_interest(1, point)

        assert point.id is None
        assert len(await unit_of_work().list_points_of_interest(1)) == 1

        assert await repo.commit() is True
        assert point.id == 22
        assert point.city_id == 1
        assert [p.id for p in await unit_of_work().list_points_of_interest(1)] == [10, 22]

    async def test_add_to_missing_city_raises(self, unit_of_work):
        repo = unit_of_work()
        with pytest.raises(NotFoundError):
            await repo.add_point_of_interest(99, PointOfInterest(id=None, name="Orphan"))
        assert await repo.commit() is True
        assert await unit_of_work().list_points_of_interest(99) == []

    async def test_in_place_changes_are_committed(self, unit_of_work):
        repo = unit_of_work()
        point = await repo.get_point_of_interest(1, 10)
        point.name = "Cathedral of Our Lady"
        assert await repo.commit() is True

        stored = await unit_of_work().get_point_of_interest(1, 10)
        assert stored.name == "Cathedral of Our Lady"

    async def test_uncommitted_changes_are_dropped(self, unit_of_work):
        repo = unit_of_work()
        point = await repo.get_point_of_interest(1, 10)
        point.name = "Never saved"

        stored = await unit_of_work().get_point_of_interest(1, 10)
        assert stored.name == "Cathedral"

    async def test_delete_is_idempotent_within_a_unit(self, unit_of_work):
        repo = unit_of_work()
        point = await repo.get_point_of_interest(2, 21)
        repo.delete_point_of_interest(point)
        repo.delete_point_of_interest(point)

        assert await repo.get_point_of_interest(2, 21) is None
        assert await repo.commit() is True
        assert [p.id for p in await unit_of_work().list_points_of_interest(2)] == [20]

    async def test_deleted_ids_are_not_reissued(self, unit_of_work):
        repo = unit_of_work()
        point = PointOfInterest(id=None, name="Zoo")
        await repo.add_point_of_interest(1, point)
        await repo.commit()

        repo = unit_of_work()
        repo.delete_point_of_interest(await repo.get_point_of_interest(1, point.id))
        await repo.commit()

        repo = unit_of_work()
        replacement = PointOfInterest(id=None, name="Aquarium")
        await repo.add_point_of_interest(1, replacement)
        await repo.commit()
        assert replacement.id == point.id + 1


@pytest.mark.asyncio
class TestInMemoryIdentity:
    """Identity assignment specific to the in-memory catalog."""

    async def test_next_id_is_max_existing_plus_one(self):
        store = InMemoryCityStore()
        store.add_city(City(id=1, name="Antwerp", points_of_interest=[
            PointOfInterest(id=10, name="Cathedral"),
        ]))
        repo = InMemoryCityInfoRepository(store)
        zoo = PointOfInterest(id=None, name="Zoo")
        await repo.add_point_of_interest(1, zoo)
        await repo.commit()

        assert zoo.id == 11
        assert len(store.points_for_city(1)) == 2


class TestInMemoryStore:
    """Administrative seeding of the in-memory catalog."""

    def test_store_rejects_duplicate_ids(self):
        store = InMemoryCityStore()
        store.add_city(City(id=1, name="Antwerp"))
        with pytest.raises(ValueError):
            store.add_city(City(id=1, name="Ghent"))

    def test_store_assigns_city_ids(self):
        store = InMemoryCityStore()
        first = store.add_city(City(id=None, name="Antwerp"))
        second = store.add_city(City(id=None, name="Ghent"))
        assert (first.id, second.id) == (1, 2)


@pytest.mark.asyncio
class TestSQLAlchemyCommitFailure:
    """The SQLAlchemy repository reports store rejections as False."""

    async def test_rejected_commit_returns_false_and_writes_nothing(self, test_session_factory):
        session = test_session_factory()
        repo = SQLAlchemyCityInfoRepository(session)
        # bypasses service validation; the NOT NULL constraint rejects it
        await repo.add_point_of_interest(1, PointOfInterest(id=None, name=None))
        assert await repo.commit() is False
        session.close()

        check = SQLAlchemyCityInfoRepository(test_session_factory())
        assert [p.id for p in await check.list_points_of_interest(1)] == [10]


class TestCaseSensitiveFilters:
    """Name and search filters compare case-sensitively on every dialect."""

    def test_mysql_uses_binary_collation(self):
        equals = str(_equals(models.City.name, "Paris", "mysql").compile(dialect=mysql.dialect()))
        contains = str(_contains(models.City.description, "tower", "mysql").compile(dialect=mysql.dialect()))
        assert f"COLLATE {MYSQL_BINARY_COLLATION}" in equals
        assert f"COLLATE {MYSQL_BINARY_COLLATION}" in contains

    def test_sqlite_keeps_default_collation(self):
        equals = str(_equals(models.City.name, "Paris", "sqlite").compile(dialect=sqlite.dialect()))
        contains = str(_contains(models.City.name, "Par", "sqlite").compile(dialect=sqlite.dialect()))
        assert "COLLATE" not in equals
        assert "instr" in contains.lower()
