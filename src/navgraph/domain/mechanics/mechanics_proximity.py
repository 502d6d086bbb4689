from dataclasses import dataclass

from navgraph.config.models import ToleranceModel
from navgraph.domain.entities.campus import Landmark, Road
from navgraph.domain.entities.geography import LatLng
from navgraph.domain.mechanics.mechanics_geometry import great_circle_distance


def is_near(a: LatLng, b: LatLng, tolerance_m: float) -> bool:
    return great_circle_distance(a, b) <= tolerance_m


@dataclass(frozen=True)
class ProximityMatcher:
    """Decides whether two features are the same place, one tolerance per use."""

    vertical_circulation_m: float = 10.0
    road_merge_m: float = 20.0
    min_new_point_m: float = 2.0

    @classmethod
    def from_config(cls, cfg: ToleranceModel) -> "ProximityMatcher":
        return cls(
            vertical_circulation_m=cfg.vertical_circulation_m,
            road_merge_m=cfg.road_merge_m,
            min_new_point_m=cfg.min_new_point_m,
        )

    def same_circulation(self, a: Landmark, b: Landmark) -> bool:
        return a.category == b.category and is_near(
            a.position, b.position, self.vertical_circulation_m
        )

    def road_ends_meet(self, a: Road, b: Road) -> bool:
        ends_a = endpoints(a)
        ends_b = endpoints(b)
        return any(is_near(p, q, self.road_merge_m) for p in ends_a for q in ends_b)

    def is_new_point(self, last: LatLng | None, p: LatLng) -> bool:
        return last is None or not is_near(last, p, self.min_new_point_m)


def endpoints(road: Road) -> tuple[LatLng, ...]:
    if not road.points:
        return ()
    if len(road.points) == 1:
        return (road.points[0],)
    return (road.points[0], road.points[-1])
