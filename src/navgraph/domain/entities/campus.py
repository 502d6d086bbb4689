from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from navgraph.config.models import LandmarkPropertiesModel
from navgraph.domain.entities.geography import LatLng
from navgraph.domain.errors import BuildingNotFoundError

# Landmark categories the engine gives meaning to
ELEVATOR = "elevator"
STAIRS = "stairs"
ESCALATOR = "escalator"
ENTRANCE = "entrance"
EMERGENCY_EXIT = "emergency_exit"
RAMP = "ramp"
RESTROOM = "restroom"
PARKING = "parking"

VERTICAL_CIRCULATION = (ELEVATOR, STAIRS, ESCALATOR)
PROXIMITY_MATCHED = (ELEVATOR, STAIRS)


@dataclass(frozen=True)
class Road:
    id: str
    name: str
    points: tuple[LatLng, ...] = ()
    category: str = "road"  # road / walkway / corridor
    width_m: float = 5.0
    one_way: bool = False
    floor_id: str = ""  # "" => outdoor
    connected_intersections: tuple[str, ...] = ()

    @property
    def is_outdoor(self) -> bool:
        return not self.floor_id


@dataclass(frozen=True)
class Landmark:
    id: str
    name: str
    category: str
    position: LatLng
    floor_id: str = ""  # "" => outdoor
    accessible: bool = False
    direction: str | None = None  # escalators only: "up" / "down"
    connected_floors: tuple[str, ...] = ()
    properties: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), compare=False
    )

    @classmethod
    def from_properties(
        cls,
        *,
        id: str,
        name: str,
        category: str,
        position: LatLng,
        floor_id: str = "",
        connected_floors=(),
        properties: Mapping[str, Any] | None = None,
    ) -> "Landmark":
        """Build a landmark, parsing the raw property map into typed fields once."""
        category = category.lower()
        raw = dict(properties or {})
        parsed = LandmarkPropertiesModel.model_validate(raw)
        # entrances are often only tagged through their name
        accessible = parsed.accessible or (
            category == ENTRANCE and "accessible" in name.lower()
        )
        return cls(
            id=id,
            name=name,
            category=category,
            position=position,
            floor_id=floor_id,
            accessible=accessible,
            direction=parsed.direction if category == ESCALATOR else None,
            connected_floors=tuple(connected_floors),
            properties=MappingProxyType(raw),
        )

    @property
    def is_vertical_circulation(self) -> bool:
        return self.category in VERTICAL_CIRCULATION


@dataclass(frozen=True)
class Intersection:
    id: str
    name: str
    position: LatLng
    floor_id: str = ""
    connected_roads: tuple[str, ...] = ()
    category: str = "simple"


@dataclass(frozen=True)
class Floor:
    id: str
    name: str
    level: int  # 0 ground, <0 below grade, >0 above
    building_id: str
    roads: tuple[Road, ...] = ()
    landmarks: tuple[Landmark, ...] = ()
    connected_floors: tuple[str, ...] = ()
    center: LatLng | None = None

    def landmarks_of(self, *categories: str) -> list[Landmark]:
        return [lm for lm in self.landmarks if lm.category in categories]

    def has_landmark(self, *categories: str) -> bool:
        return any(lm.category in categories for lm in self.landmarks)


@dataclass(frozen=True)
class Building:
    id: str
    name: str
    center: LatLng
    floors: tuple[Floor, ...] = ()
    boundary: tuple[LatLng, ...] = ()

    @property
    def is_multi_floor(self) -> bool:
        return len(self.floors) > 1

    def floor(self, floor_id: str) -> Floor | None:
        for f in self.floors:
            if f.id == floor_id:
                return f
        return None

    def closest_floor(self, level: int) -> Floor | None:
        best = None
        for f in self.floors:
            if best is None or abs(f.level - level) < abs(best.level - level):
                best = f
        return best

    def floors_in_range(self, lo: int, hi: int) -> list[Floor]:
        return [f for f in self.floors if lo <= f.level <= hi]

    def landmarks(self):
        for f in self.floors:
            yield from f.landmarks

    def has_landmark(self, *categories: str) -> bool:
        return any(f.has_landmark(*categories) for f in self.floors)


@dataclass(frozen=True)
class RoadSystem:
    id: str
    name: str
    center: LatLng
    buildings: tuple[Building, ...] = ()
    outdoor_roads: tuple[Road, ...] = ()
    outdoor_landmarks: tuple[Landmark, ...] = ()
    outdoor_intersections: tuple[Intersection, ...] = ()

    def building(self, building_id: str) -> Building:
        for b in self.buildings:
            if b.id == building_id:
                return b
        raise BuildingNotFoundError(building_id)
