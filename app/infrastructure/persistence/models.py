"""SQLAlchemy models for the city catalog."""
from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from app.domain.entities.point_of_interest import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH
from app.infrastructure.persistence.db import Base


class City(Base):
    __tablename__ = "cities"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(50), nullable=False, index=True)
    description = Column(String(200))

    points_of_interest = relationship(
        "PointOfInterest",
        back_populates="city",
        cascade="all, delete-orphan",
        order_by="PointOfInterest.id",
    )


class PointOfInterest(Base):
    __tablename__ = "points_of_interest"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False, index=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH))

    city = relationship("City", back_populates="points_of_interest")
