from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass
class GeolocatedItem:
    id: str
    latitude: float
    longitude: float
    payload: Dict[str, Any] = field(default_factory=dict)  # opaque display data

    @property
    def position(self) -> Tuple[float, float]:
        return (self.latitude, self.longitude)
