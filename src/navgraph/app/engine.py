# navgraph/app/engine.py
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from navgraph.app.protocols import CirculationMatcher, ResultStore
from navgraph.config.models import ScoringModel, ToleranceModel
from navgraph.domain.entities.campus import (
    ELEVATOR,
    RESTROOM,
    STAIRS,
    Building,
    Floor,
    Intersection,
    Landmark,
    RoadSystem,
)
from navgraph.domain.entities.geography import LatLng
from navgraph.domain.errors import FloorNotFoundError
from navgraph.domain.mechanics.mechanics_geometry import (
    great_circle_distance,
    pairwise_distances,
    polygon_area,
    polyline_length,
)
from navgraph.domain.mechanics.mechanics_graphs import (
    build_floor_graph,
    build_road_graph,
    detect_intersections,
)
from navgraph.domain.mechanics.mechanics_proximity import ProximityMatcher
from navgraph.domain.mechanics.mechanics_scoring import (
    candidate_connections,
    connectivity_percentage,
    connectivity_score,
    score_accessibility,
)
from navgraph.domain.mechanics.mechanics_traversal import (
    all_pairs_hops,
    connected_components,
    isolated_floors,
    reconstruct_path,
)
from navgraph.domain.results import (
    AccessibilityResult,
    BuildingStatistics,
    ConnectivityResult,
    NetworkAnalysis,
    ValidationIssue,
    freeze_graph,
    freeze_hops,
)
from navgraph.runtime.cache import ResultCache
from navgraph.runtime.hooks import EngineHooks, NoopHooks
from navgraph.runtime.registries import BuildingCheck, make_checks

CONNECTIVITY = "connectivity"
ACCESSIBILITY = "accessibility"
STATISTICS = "statistics"
NETWORK = "network"


@dataclass
class NavigationEngine:
    """
    Façade over the analysis mechanics. Inputs are immutable snapshots; derived
    results are cached per building / road-system id until invalidate_cache().
    """

    tolerances: ToleranceModel = field(default_factory=ToleranceModel)
    scoring: ScoringModel = field(default_factory=ScoringModel)
    checks: list[tuple[str, BuildingCheck]] = field(default_factory=make_checks)
    hooks: EngineHooks = field(default_factory=NoopHooks)
    matcher: CirculationMatcher | None = None
    cache: ResultStore | None = None

    def __post_init__(self):
        if self.matcher is None:
            self.matcher = ProximityMatcher.from_config(self.tolerances)
        if self.cache is None:
            self.cache = ResultCache(hooks=self.hooks)

    # --------------- Helpers -----------------------------

    def _timed(self, kind: str, key: str, fn: Callable):
        self.hooks.compute_start(kind=kind, key=key)
        t0 = time.perf_counter()
        try:
            out = fn()
        except Exception as exc:
            self.hooks.error(kind=kind, key=key, exc=exc)
            raise
        self.hooks.compute_end(kind=kind, key=key, wall_ms=(time.perf_counter() - t0) * 1000)
        return out

    def _cached(self, kind: str, key: str, fn: Callable, force: bool):
        return self.cache.get_or_compute(kind, key, lambda: self._timed(kind, key, fn), force=force)

    @staticmethod
    def floor_by_id(building: Building, floor_id: str) -> Floor:
        f = building.floor(floor_id)
        if f is None:
            raise FloorNotFoundError(building.id, floor_id)
        return f

    # --------------- Building analysis -----------------------------

    def compute_connectivity(
        self, building: Building, *, force: bool = False
    ) -> ConnectivityResult:
        return self._cached(CONNECTIVITY, building.id, lambda: self._connectivity(building), force)

    def _connectivity(self, building: Building) -> ConnectivityResult:
        if len(building.floors) <= 1:
            return ConnectivityResult(
                building_id=building.id,
                adjacency=freeze_graph({}),
                isolated_floor_ids=frozenset(),
                fully_connected=True,
                circulation=(),
                distances=freeze_hops({f.id: {f.id: 0} for f in building.floors}),
                score=1.0,
            )
        graph = build_floor_graph(building, self.matcher)
        isolated = isolated_floors(building, graph.adjacency)
        return ConnectivityResult(
            building_id=building.id,
            adjacency=freeze_graph(graph.adjacency),
            isolated_floor_ids=frozenset(f.id for f in isolated),
            fully_connected=not isolated,
            circulation=graph.circulation,
            distances=freeze_hops(
                all_pairs_hops((f.id for f in building.floors), graph.adjacency)
            ),
            score=connectivity_score(building, len(isolated), self.scoring),
        )

    def compute_accessibility(
        self, building: Building, *, force: bool = False
    ) -> AccessibilityResult:
        return self._cached(
            ACCESSIBILITY, building.id, lambda: score_accessibility(building, self.scoring), force
        )

    def shortest_path(
        self, building: Building, from_floor_id: str, to_floor_id: str
    ) -> list[Floor]:
        self.floor_by_id(building, from_floor_id)
        self.floor_by_id(building, to_floor_id)
        adj = self.compute_connectivity(building).adjacency
        path = reconstruct_path(from_floor_id, to_floor_id, adj)
        return [self.floor_by_id(building, fid) for fid in path]

    def hop_distance(self, building: Building, from_floor_id: str, to_floor_id: str) -> int | None:
        self.floor_by_id(building, from_floor_id)
        self.floor_by_id(building, to_floor_id)
        return self.compute_connectivity(building).distances.get(from_floor_id, {}).get(to_floor_id)

    def is_reachable(self, building: Building, from_floor_id: str, to_floor_id: str) -> bool:
        return self.hop_distance(building, from_floor_id, to_floor_id) is not None

    def accessible_floors(self, building: Building, floor_id: str) -> list[Floor]:
        self.floor_by_id(building, floor_id)
        adj = self.compute_connectivity(building).adjacency
        return [self.floor_by_id(building, fid) for fid in adj.get(floor_id, ())]

    def validate_building(self, building: Building) -> list[ValidationIssue]:
        conn = self.compute_connectivity(building)
        issues: list[ValidationIssue] = []
        for _name, check in self.checks:
            issues.extend(check(building, conn))
        return issues

    def building_statistics(self, building: Building, *, force: bool = False) -> BuildingStatistics:
        return self._cached(STATISTICS, building.id, lambda: self._statistics(building), force)

    def _statistics(self, building: Building) -> BuildingStatistics:
        levels = [f.level for f in building.floors]
        return BuildingStatistics(
            building_id=building.id,
            total_floors=len(building.floors),
            highest_level=max(levels, default=0),
            lowest_level=min(levels, default=0),
            total_landmarks=sum(len(f.landmarks) for f in building.floors),
            total_roads=sum(len(f.roads) for f in building.floors),
            floors_with_elevators=sum(1 for f in building.floors if f.has_landmark(ELEVATOR)),
            floors_with_stairs=sum(1 for f in building.floors if f.has_landmark(STAIRS)),
            floors_with_restrooms=sum(1 for f in building.floors if f.has_landmark(RESTROOM)),
            estimated_area_m2=polygon_area(building.boundary),
            total_road_length_m=sum(
                polyline_length(r.points) for f in building.floors for r in f.roads
            ),
            accessibility_score=self.compute_accessibility(building).score,
            connectivity_score=self.compute_connectivity(building).score,
        )

    # --------------- Outdoor network -----------------------------

    def analyze_road_network(self, system: RoadSystem, *, force: bool = False) -> NetworkAnalysis:
        return self._cached(NETWORK, system.id, lambda: self._network(system), force)

    def _network(self, system: RoadSystem) -> NetworkAnalysis:
        roads = system.outdoor_roads
        graph = build_road_graph(roads, system.outdoor_intersections, self.matcher)
        all_points = [p for r in roads for p in r.points]
        isolated = []
        if system.outdoor_landmarks:
            if all_points:
                d = pairwise_distances([lm.position for lm in system.outdoor_landmarks], all_points)
                near = d.min(axis=1) <= self.tolerances.landmark_road_m
            else:
                near = [False] * len(system.outdoor_landmarks)
            isolated = [lm.id for lm, ok in zip(system.outdoor_landmarks, near) if not ok]
        return NetworkAnalysis(
            system_id=system.id,
            total_roads=len(roads),
            connected_roads=sum(1 for r in roads if r.connected_intersections),
            total_intersections=len(system.outdoor_intersections),
            total_landmarks=len(system.outdoor_landmarks),
            connectivity_pct=connectivity_percentage(roads),
            total_length_m=sum(polyline_length(r.points) for r in roads),
            component_count=len(connected_components(graph)),
            candidates=tuple(candidate_connections(roads, self.tolerances.road_merge_m)),
            dead_end_road_ids=tuple(r.id for r in roads if not r.connected_intersections),
            isolated_landmark_ids=tuple(isolated),
        )

    def detect_road_intersections(self, system: RoadSystem) -> list[Intersection]:
        near_miss_m = self.tolerances.intersection_m
        return self._timed(
            "intersections",
            system.id,
            lambda: detect_intersections(system.outdoor_roads, near_miss_m, self.matcher),
        )

    # --------------- Lookups -----------------------------

    @staticmethod
    def find_nearest_landmark(
        point: LatLng, landmarks: Iterable[Landmark], category: str | None = None
    ) -> Landmark | None:
        candidates = [lm for lm in landmarks if category is None or lm.category == category]
        if not candidates:
            return None
        return min(candidates, key=lambda lm: great_circle_distance(point, lm.position))

    def invalidate_cache(self, key: str) -> int:
        return self.cache.invalidate(key)
