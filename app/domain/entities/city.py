"""City domain entity - pure business logic."""
from dataclasses import dataclass, field
from typing import List, Optional

from app.domain.entities.point_of_interest import PointOfInterest


@dataclass
class City:
    """City domain entity.

    ``points_of_interest`` is only populated when the children were explicitly
    requested; it is ordered by point id.
    """
    id: Optional[int]
    name: str
    description: Optional[str] = None
    points_of_interest: List[PointOfInterest] = field(default_factory=list)

    def is_valid(self) -> bool:
        """Validate city business rules."""
        return bool(self.name and self.name.strip())

    @property
    def number_of_points_of_interest(self) -> int:
        return len(self.points_of_interest)
