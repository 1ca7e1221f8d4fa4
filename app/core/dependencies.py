"""Dependency injection for FastAPI routes.
Routes depend on the service; the service depends on repository abstractions."""
from functools import lru_cache
from typing import Generator

from fastapi import Depends, Request

from app.application.ports.mail import MailService
from app.application.services.city_info_service import CityInfoService
from app.config import Settings, get_settings
from app.core.notifications import build_mail_service
from app.core.security import CredentialVerifier, DemoCredentialVerifier
from app.domain.repositories.city_info_repository import CityInfoRepository
from app.infrastructure.persistence.db import SessionLocal
from app.infrastructure.persistence.repositories.in_memory_city_info_repository import (
    InMemoryCityInfoRepository,
)
from app.infrastructure.persistence.repositories.in_memory_city_store import InMemoryCityStore
from app.infrastructure.persistence.repositories.sqlalchemy_city_info_repository import (
    SQLAlchemyCityInfoRepository,
)


def get_in_memory_store(request: Request) -> InMemoryCityStore:
    """The catalog created by the application lifespan."""
    return request.app.state.city_store


def get_city_info_repository(
    store: InMemoryCityStore = Depends(get_in_memory_store),
    settings: Settings = Depends(get_settings),
) -> Generator[CityInfoRepository, None, None]:
    """Fresh unit of work for every request.

    - Default: in-memory catalog shared by the process
    - If USE_DB_REPOS=true: SQLAlchemy repository over a per-request session
    """
    if not settings.USE_DB_REPOS:
        yield InMemoryCityInfoRepository(store)
        return

    session = SessionLocal()
    try:
        yield SQLAlchemyCityInfoRepository(session)
    finally:
        session.close()


@lru_cache()
def _cached_mail_service() -> MailService:
    return build_mail_service(get_settings())


def get_mail_service() -> MailService:
    return _cached_mail_service()


def get_city_info_service(
    repository: CityInfoRepository = Depends(get_city_info_repository),
    mail_service: MailService = Depends(get_mail_service),
) -> CityInfoService:
    return CityInfoService(repository=repository, mail_service=mail_service)


def get_credential_verifier() -> CredentialVerifier:
    return DemoCredentialVerifier()
