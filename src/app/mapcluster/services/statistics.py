from dataclasses import dataclass
from typing import List, Sequence

from app.models.point import GeolocatedItem


@dataclass
class MapStatistics:
    located_photos: int
    distinct_locations: int
    specific_addresses: int
    decades: int


def compute_map_statistics(items: Sequence[GeolocatedItem], decades: List[int]) -> MapStatistics:
    """Summary counters shown under the map."""
    return MapStatistics(
        located_photos=len(items),
        distinct_locations=len({item.payload.get("location") for item in items}),
        specific_addresses=sum(1 for item in items if item.payload.get("address")),
        decades=len(decades),
    )
