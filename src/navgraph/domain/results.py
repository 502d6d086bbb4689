# navgraph/domain/results.py
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from navgraph.domain.entities.geography import LatLng

Adjacency = dict[str, list[str]]
# read-only views handed out with cached results
Graph = Mapping[str, Sequence[str]]
Hops = Mapping[str, Mapping[str, int]]


def freeze_graph(adjacency: Mapping[str, Sequence[str]]) -> Graph:
    return MappingProxyType({k: tuple(vs) for k, vs in adjacency.items()})


def freeze_hops(hops: Mapping[str, Mapping[str, int]]) -> Hops:
    return MappingProxyType({k: MappingProxyType(dict(row)) for k, row in hops.items()})


@dataclass(frozen=True)
class VerticalCirculationPoint:
    landmark_id: str
    kind: str  # elevator / stairs / escalator
    floor_id: str
    position: LatLng


@dataclass(frozen=True)
class FloorGraph:
    adjacency: Adjacency
    circulation: tuple[VerticalCirculationPoint, ...] = ()


@dataclass(frozen=True)
class ConnectivityResult:
    building_id: str
    adjacency: Graph
    isolated_floor_ids: frozenset[str]
    fully_connected: bool
    circulation: tuple[VerticalCirculationPoint, ...]
    distances: Hops  # floor -> floor -> hop count; unreachable absent
    score: float


@dataclass(frozen=True)
class AccessibilityResult:
    building_id: str
    has_elevator: bool
    single_floor: bool
    has_accessible_entrance: bool
    has_ramp: bool
    has_accessible_restroom: bool
    has_accessible_parking: bool
    stairs_only: bool
    score: float
    rating: str
    features: tuple[str, ...] = ()


@dataclass(frozen=True)
class CandidateConnection:
    road_a_id: str
    road_b_id: str
    road_a_name: str
    road_b_name: str
    midpoint: LatLng
    distance_m: float


@dataclass(frozen=True)
class NetworkAnalysis:
    system_id: str
    total_roads: int
    connected_roads: int
    total_intersections: int
    total_landmarks: int
    connectivity_pct: int
    total_length_m: float
    component_count: int
    candidates: tuple[CandidateConnection, ...] = ()
    dead_end_road_ids: tuple[str, ...] = ()
    isolated_landmark_ids: tuple[str, ...] = ()


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class ValidationIssue:
    code: str
    severity: Severity
    message: str
    related_id: str | None = None
    location: LatLng | None = None


@dataclass(frozen=True)
class BuildingStatistics:
    building_id: str
    total_floors: int
    highest_level: int
    lowest_level: int
    total_landmarks: int
    total_roads: int
    floors_with_elevators: int
    floors_with_stairs: int
    floors_with_restrooms: int
    estimated_area_m2: float
    total_road_length_m: float
    accessibility_score: float
    connectivity_score: float
