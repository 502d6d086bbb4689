# navgraph/domain/samples.py
import numpy as np

from navgraph.domain.entities.campus import (
    Building,
    Floor,
    Intersection,
    Landmark,
    Road,
    RoadSystem,
)
from navgraph.domain.entities.geography import LatLng
from navgraph.domain.mechanics.mechanics_geometry import METERS_PER_DEGREE, circular_boundary

CAMPUS_CENTER = LatLng(33.9737, -117.3281)


class SampleCampusGenerator:
    """
    Builds a small campus for demos and tests: a grid of outdoor intersections
    joined by roads, a few outdoor landmarks, and one multi-floor building.

    jitter_m > 0 displaces every generated point by a seeded uniform offset of at
    most jitter_m meters per axis; with jitter_m == 0 the output is exact.
    """

    def __init__(
        self,
        *,
        center: LatLng = CAMPUS_CENTER,
        grid_size: int = 4,
        spacing_deg: float = 0.001,  # ~111 m
        jitter_m: float = 0.0,
        rng: np.random.Generator | None = None,
    ):
        self.center, self.grid_size, self.spacing = center, grid_size, spacing_deg
        self.jitter_m = jitter_m
        self.rng = rng if rng is not None else np.random.default_rng(0)

    def _jitter(self, p: LatLng) -> LatLng:
        if self.jitter_m <= 0:
            return p
        dy, dx = self.rng.uniform(-self.jitter_m, self.jitter_m, size=2) / METERS_PER_DEGREE
        return LatLng(p.lat + float(dy), p.lon + float(dx) / np.cos(np.radians(p.lat)))

    def intersections(self) -> list[list[Intersection]]:
        n, c = self.grid_size, self.center
        grid = []
        for row in range(n):
            cells = []
            for col in range(n):
                pos = LatLng(
                    c.lat + (row - n / 2) * self.spacing, c.lon + (col - n / 2) * self.spacing
                )
                cells.append(
                    Intersection(
                        id=f"ix-{row}-{col}",
                        name=f"Intersection {chr(65 + row)}{col + 1}",
                        position=self._jitter(pos),
                    )
                )
            grid.append(cells)
        return grid

    def roads(self, grid: list[list[Intersection]]) -> list[Road]:
        n, out = self.grid_size, []
        for row in range(n):
            for col in range(n - 1):
                a, b = grid[row][col], grid[row][col + 1]
                name = f"Road {chr(65 + row)} East-{col + 1}"
                out.append(self._road(f"road-h-{row}-{col}", name, a, b))
        for row in range(n - 1):
            for col in range(n):
                a, b = grid[row][col], grid[row + 1][col]
                name = f"Road {col + 1} South-{chr(65 + row)}"
                out.append(self._road(f"road-v-{row}-{col}", name, a, b))
        return out

    @staticmethod
    def _road(rid: str, name: str, a: Intersection, b: Intersection) -> Road:
        return Road(
            id=rid,
            name=name,
            points=(a.position, b.position),
            width_m=8.0,
            connected_intersections=(a.id, b.id),
        )

    def building(
        self, building_id: str = "bldg-1", levels: tuple[int, ...] = (0, 1, 2)
    ) -> Building:
        base = LatLng(self.center.lat + self.spacing / 2, self.center.lon + self.spacing / 2)
        shaft = self._jitter(base)
        floors = []
        for level in levels:
            fid = f"{building_id}-L{level}"
            lms = [
                Landmark(
                    id=f"{fid}-elev",
                    name="Elevator A",
                    category="elevator",
                    position=shaft,
                    floor_id=fid,
                ),
                Landmark(
                    id=f"{fid}-stairs",
                    name="Stairs North",
                    category="stairs",
                    position=LatLng(base.lat + 0.0001, base.lon),
                    floor_id=fid,
                ),
                Landmark(
                    id=f"{fid}-wc",
                    name="Restroom",
                    category="restroom",
                    position=LatLng(base.lat, base.lon + 0.0001),
                    floor_id=fid,
                    accessible=True,
                ),
            ]
            if level == 0:
                lms.append(
                    Landmark.from_properties(
                        id=f"{fid}-door",
                        name="Main Entrance (accessible)",
                        category="entrance",
                        position=LatLng(base.lat - 0.0002, base.lon),
                        floor_id=fid,
                    )
                )
            corridor = Road(
                id=f"{fid}-corridor",
                name="Main Corridor",
                points=(LatLng(base.lat - 0.0002, base.lon), LatLng(base.lat + 0.0001, base.lon)),
                category="corridor",
                width_m=3.0,
                floor_id=fid,
            )
            floors.append(
                Floor(
                    id=fid,
                    name=f"Level {level}",
                    level=level,
                    building_id=building_id,
                    roads=(corridor,),
                    landmarks=tuple(lms),
                    center=base,
                )
            )
        return Building(
            id=building_id,
            name="Science Hall",
            center=base,
            floors=tuple(floors),
            boundary=tuple(circular_boundary(base, 40.0)),
        )

    def campus(self, system_id: str = "campus") -> RoadSystem:
        grid = self.intersections()
        roads = self.roads(grid)
        ixs = [ix for row in grid for ix in row]
        linked = [
            Intersection(
                id=ix.id,
                name=ix.name,
                position=ix.position,
                connected_roads=tuple(r.id for r in roads if ix.id in r.connected_intersections),
            )
            for ix in ixs
        ]
        c = self.center
        landmarks = [
            Landmark(
                id="lm-union",
                name="Student Center",
                category="entrance",
                position=LatLng(c.lat + 0.0001, c.lon + 0.0001),
            ),
            Landmark(
                id="lm-library",
                name="Library",
                category="entrance",
                position=LatLng(c.lat - 0.0009, c.lon + 0.0001),
            ),
            Landmark(
                id="lm-lot",
                name="Parking Lot 1",
                category="parking",
                position=LatLng(c.lat - 0.002, c.lon - 0.0015),
                accessible=True,
            ),
        ]
        return RoadSystem(
            id=system_id,
            name="Sample Campus",
            center=c,
            buildings=(self.building(),),
            outdoor_roads=tuple(roads),
            outdoor_landmarks=tuple(landmarks),
            outdoor_intersections=tuple(linked),
        )
