from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class ClusteringConfig:
    # (min_zoom, radius in degrees), highest zoom first
    radius_tiers: List[Tuple[float, float]] = field(default_factory=lambda: [
        (15, 0.0001),
        (13, 0.0005),
        (11, 0.002),
    ])
    fallback_radius: float = 0.01
    individual_zoom: float = 19

    # Output shaping
    preview_limit: int = 8

    # Service settings
    warn_point_count: int = 1000
    cache_size: int = 128
