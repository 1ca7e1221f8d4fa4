"""Database initialization - runs on backend startup."""
import logging

from sqlalchemy.exc import SQLAlchemyError

from app.infrastructure.persistence import models
from app.infrastructure.persistence.db import Base, SessionLocal, engine
from app.infrastructure.persistence.repositories.in_memory_city_store import InMemoryCityStore
from app.infrastructure.persistence.seed_data import demo_cities

logger = logging.getLogger(__name__)


def initialize_database(seed: bool = True) -> bool:
    """Create the schema and, when the catalog is empty, load the demo cities.

    Returns:
        bool: True if the database is ready, False otherwise
    """
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        logger.error(f"Error creating database schema: {e}")
        return False

    if not seed:
        logger.info("✅ Database schema initialized successfully")
        return True

    session = SessionLocal()
    try:
        if session.query(models.City).count() == 0:
            for city in demo_cities():
                session.add(models.City(
                    id=city.id,
                    name=city.name,
                    description=city.description,
                    points_of_interest=[
                        models.PointOfInterest(id=p.id, name=p.name, description=p.description)
                        for p in city.points_of_interest
                    ],
                ))
            session.commit()
            logger.info("Seeded demo cities")
        logger.info("✅ Database schema initialized successfully")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Error seeding database: {e}")
        session.rollback()
        return False
    finally:
        session.close()


def build_in_memory_store(seed: bool = True) -> InMemoryCityStore:
    """Create the process-wide in-memory catalog."""
    store = InMemoryCityStore()
    if seed:
        for city in demo_cities():
            store.add_city(city)
        logger.info(f"Seeded in-memory catalog with {len(store.cities())} cities")
    return store
