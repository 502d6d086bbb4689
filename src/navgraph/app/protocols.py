from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

from navgraph.domain.entities.campus import Landmark, Road
from navgraph.domain.entities.geography import LatLng


@runtime_checkable
class CirculationMatcher(Protocol):
    """
    Responsibilities:
      • Decide whether two vertical-circulation landmarks are the same shaft.
      • Decide whether two road ends meet.
      • Gate new trace points by minimum spacing.
    Units: meters.
    """

    def same_circulation(self, a: Landmark, b: Landmark) -> bool: ...
    def road_ends_meet(self, a: Road, b: Road) -> bool: ...
    def is_new_point(self, last: LatLng | None, p: LatLng) -> bool: ...


@runtime_checkable
class ResultStore(Protocol):
    """Memo of derived results keyed by (kind, owner id); owners are evicted explicitly."""

    def get_or_compute(
        self, kind: str, key: str, compute: Callable[[], Any], *, force: bool = False
    ) -> Any: ...
    def invalidate(self, key: str) -> int: ...
