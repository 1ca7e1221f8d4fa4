"""Pydantic schemas for the city and point of interest API.

Conversion from domain entities is explicit, one function per response shape.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.domain.entities.city import City
from app.domain.entities.point_of_interest import PointOfInterest


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Response Schemas
class PointOfInterestSchema(CamelModel):
    """Point of interest as returned to clients."""
    id: int
    name: str
    description: Optional[str] = None


class CityWithoutPointsOfInterestSchema(CamelModel):
    """City summary, children not loaded."""
    id: int
    name: str
    description: Optional[str] = None


class CitySchema(CityWithoutPointsOfInterestSchema):
    """City with its points of interest."""
    number_of_points_of_interest: int = 0
    points_of_interest: List[PointOfInterestSchema] = Field(default_factory=list)


# Request Schemas
class PointOfInterestForCreationSchema(CamelModel):
    """Body of a create request; field rules are enforced by the service."""
    name: Optional[str] = None
    description: Optional[str] = None


class PointOfInterestForUpdateSchema(PointOfInterestForCreationSchema):
    """Body of a full replace request."""


class AuthenticationRequestSchema(CamelModel):
    user_name: Optional[str] = None
    password: Optional[str] = None


def to_point_of_interest_schema(point: PointOfInterest) -> PointOfInterestSchema:
    return PointOfInterestSchema(id=point.id, name=point.name, description=point.description)


def to_city_summary_schema(city: City) -> CityWithoutPointsOfInterestSchema:
    return CityWithoutPointsOfInterestSchema(id=city.id, name=city.name, description=city.description)


def to_city_schema(city: City) -> CitySchema:
    return CitySchema(
        id=city.id,
        name=city.name,
        description=city.description,
        number_of_points_of_interest=city.number_of_points_of_interest,
        points_of_interest=[to_point_of_interest_schema(p) for p in city.points_of_interest],
    )
