from abc import ABC, abstractmethod
from typing import List, Sequence

from app.mapcluster.markers import ClusteredMarker
from app.models.point import GeolocatedItem


class MarkerClusterer(ABC):
    """Abstract base class for a map marker clustering strategy."""

    @abstractmethod
    def cluster(self, points: Sequence[GeolocatedItem], zoom: float) -> List[ClusteredMarker]:
        """
        Partitions points into individual and cluster markers for a zoom level.

        Args:
            points: Geolocated items with valid numeric coordinates.
            zoom: Current map zoom level; larger means more detail.

        Returns:
            A list of markers. Every input item is wrapped by exactly one marker.
        """
        raise NotImplementedError()

    @abstractmethod
    def radius(self, zoom: float) -> float:
        """Proximity radius in coordinate degrees used at the given zoom."""
        raise NotImplementedError()

    def clusters_at(self, zoom: float) -> bool:
        """Determines whether points are grouped at all at the given zoom."""
        return True
