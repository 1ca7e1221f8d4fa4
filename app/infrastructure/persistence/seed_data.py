"""Demo catalog loaded into empty stores at startup."""
from typing import List

from app.domain.entities.city import City
from app.domain.entities.point_of_interest import PointOfInterest


def demo_cities() -> List[City]:
    """Return fresh entities each call; stores take ownership of them."""
    return [
        City(
            id=1,
            name="New York City",
            description="The one with that big park.",
            points_of_interest=[
                PointOfInterest(id=1, name="Central Park",
                                description="The most visited urban park in the United States."),
                PointOfInterest(id=2, name="Empire State Building",
                                description="A 102-story skyscraper located in Midtown Manhattan."),
            ],
        ),
        City(
            id=2,
            name="Antwerp",
            description="The one with the cathedral that was never really finished.",
            points_of_interest=[
                PointOfInterest(id=3, name="Cathedral of Our Lady",
                                description="A Gothic style cathedral, conceived by architects Jan and Pieter Appelmans."),
                PointOfInterest(id=4, name="Antwerp Central Station",
                                description="The finest example of railway architecture in Belgium."),
            ],
        ),
        City(
            id=3,
            name="Paris",
            description="The one with that big tower.",
            points_of_interest=[
                PointOfInterest(id=5, name="Eiffel Tower",
                                description="A wrought iron lattice tower on the Champ de Mars, named after engineer Gustave Eiffel."),
                PointOfInterest(id=6, name="The Louvre",
                                description="The world's largest museum."),
            ],
        ),
    ]
