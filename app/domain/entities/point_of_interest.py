"""PointOfInterest domain entity - pure business logic."""
from dataclasses import dataclass
from typing import Dict, List, Optional

NAME_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 200


def validate_point_of_interest_fields(
    name: Optional[str], description: Optional[str]
) -> Dict[str, List[str]]:
    """Check the updatable fields against the creation rules.

    Returns a mapping of field name to error messages; empty when valid.
    """
    errors: Dict[str, List[str]] = {}
    if name is None or not name.strip():
        errors.setdefault("name", []).append("You should provide a name value.")
    elif len(name) > NAME_MAX_LENGTH:
        errors.setdefault("name", []).append(
            f"The name must be at most {NAME_MAX_LENGTH} characters."
        )
    if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
        errors.setdefault("description", []).append(
            f"The description must be at most {DESCRIPTION_MAX_LENGTH} characters."
        )
    return errors


@dataclass
class PointOfInterest:
    """Point of interest owned by exactly one city.

    ``id`` is assigned by the repository on commit; ``city_id`` is set when
    the point is staged and never reassigned.
    """
    id: Optional[int]
    name: str
    description: Optional[str] = None
    city_id: Optional[int] = None

    def validation_errors(self) -> Dict[str, List[str]]:
        return validate_point_of_interest_fields(self.name, self.description)

    def is_valid(self) -> bool:
        """Validate point of interest business rules."""
        return not self.validation_errors()


@dataclass
class PointOfInterestForUpdate:
    """Mutable projection of the fields a client may change."""
    name: Optional[str]
    description: Optional[str] = None

    @classmethod
    def from_entity(cls, point: PointOfInterest) -> "PointOfInterestForUpdate":
        return cls(name=point.name, description=point.description)

    def validation_errors(self) -> Dict[str, List[str]]:
        return validate_point_of_interest_fields(self.name, self.description)

    def apply_to(self, point: PointOfInterest) -> None:
        """Copy the updatable fields back onto a live entity."""
        point.name = self.name
        point.description = self.description
