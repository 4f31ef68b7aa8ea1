from dataclasses import dataclass, field
from typing import List, Literal, Tuple, Union

from app.models.point import GeolocatedItem

Position = Tuple[float, float]


@dataclass(frozen=True)
class ClusterGroup:
    """Items sharing proximity to a common seed.

    ``center`` is the seed's position, not a centroid of the members.
    Members are stored as a tuple; a finished group never changes.
    """

    center: Position
    members: Tuple[GeolocatedItem, ...]

    def __post_init__(self):
        object.__setattr__(self, "members", tuple(self.members))

    @property
    def count(self) -> int:
        return len(self.members)

    @property
    def seed(self) -> GeolocatedItem:
        return self.members[0]


@dataclass(frozen=True)
class IndividualMarker:
    item: GeolocatedItem
    position: Position
    type: Literal["individual"] = field(default="individual", init=False)

    @property
    def items(self) -> List[GeolocatedItem]:
        return [self.item]


@dataclass(frozen=True)
class ClusterMarker:
    cluster: ClusterGroup
    position: Position
    type: Literal["cluster"] = field(default="cluster", init=False)

    @property
    def count(self) -> int:
        return self.cluster.count

    @property
    def items(self) -> List[GeolocatedItem]:
        return list(self.cluster.members)


ClusteredMarker = Union[IndividualMarker, ClusterMarker]


def group_to_marker(group: ClusterGroup) -> ClusteredMarker:
    """A group of one renders as a plain pin, never as a badge."""
    if group.count == 1:
        return IndividualMarker(item=group.seed, position=group.center)
    return ClusterMarker(cluster=group, position=group.center)
