from collections.abc import Sequence

from navgraph.app.protocols import CirculationMatcher
from navgraph.domain.entities.campus import (
    ESCALATOR,
    PROXIMITY_MATCHED,
    Building,
    Floor,
    Intersection,
    Road,
)
from navgraph.domain.mechanics.mechanics_geometry import (
    point_to_segment_distance,
    segment_intersection,
)
from navgraph.domain.mechanics.mechanics_proximity import endpoints
from navgraph.domain.results import Adjacency, FloorGraph, VerticalCirculationPoint


def _link(adj: Adjacency, src: str, dst: str) -> None:
    if src != dst and dst not in adj[src]:
        adj[src].append(dst)


def build_floor_graph(building: Building, matcher: CirculationMatcher) -> FloorGraph:
    """
    Directed adjacency over a building's floors.

    Explicit connected_floors seed the lists; elevator/stairs landmarks matched
    across floors add edges both ways; escalators add a single edge to the floor
    exactly one level up or down. Neighbour order is discovery order.
    """
    if len(building.floors) <= 1:
        return FloorGraph(adjacency={})

    known = {f.id for f in building.floors}
    adj: Adjacency = {f.id: [] for f in building.floors}

    # 1) explicit links; references to unknown floors are dropped
    for f in building.floors:
        for other_id in f.connected_floors:
            if other_id in known:
                _link(adj, f.id, other_id)

    # 2) proximity-matched elevator/stairs
    for f in building.floors:
        for lm in f.landmarks_of(*PROXIMITY_MATCHED):
            for other in building.floors:
                if other.id == f.id:
                    continue
                if any(matcher.same_circulation(lm, o) for o in other.landmarks_of(lm.category)):
                    _link(adj, f.id, other.id)
                    _link(adj, other.id, f.id)

    # 3) escalators: exact level arithmetic, direction-qualified
    by_level: dict[int, Floor] = {}
    for f in building.floors:
        by_level.setdefault(f.level, f)
    for f in building.floors:
        for lm in f.landmarks_of(ESCALATOR):
            if lm.direction is None:
                continue
            target = by_level.get(f.level + (1 if lm.direction == "up" else -1))
            if target is not None:
                _link(adj, f.id, target.id)

    return FloorGraph(adjacency=adj, circulation=tuple(circulation_points(building)))


def circulation_points(building: Building) -> list[VerticalCirculationPoint]:
    return [
        VerticalCirculationPoint(lm.id, lm.category, f.id, lm.position)
        for f in building.floors
        for lm in f.landmarks
        if lm.is_vertical_circulation
    ]


def build_road_graph(
    roads: Sequence[Road],
    intersections: Sequence[Intersection],
    matcher: CirculationMatcher,
) -> Adjacency:
    """Undirected road adjacency from shared intersections plus endpoint proximity."""
    adj: Adjacency = {r.id: [] for r in roads}
    by_intersection: dict[str, list[str]] = {}
    for r in roads:
        for iid in r.connected_intersections:
            by_intersection.setdefault(iid, []).append(r.id)
    for ix in intersections:
        bucket = by_intersection.setdefault(ix.id, [])
        bucket.extend(rid for rid in ix.connected_roads if rid in adj and rid not in bucket)

    for road_ids in by_intersection.values():
        for a in road_ids:
            for b in road_ids:
                _link(adj, a, b)

    for i, a in enumerate(roads):
        for b in roads[i + 1 :]:
            if matcher.road_ends_meet(a, b):
                _link(adj, a.id, b.id)
                _link(adj, b.id, a.id)
    return adj


def _segments(road: Road):
    return list(zip(road.points, road.points[1:]))


def detect_intersections(
    roads: Sequence[Road], near_miss_m: float, matcher: CirculationMatcher
) -> list[Intersection]:
    """
    Candidate intersections between road pairs that do not already share one.

    Exact crossings come from segment_intersection. A pair without a crossing
    still yields a candidate at any endpoint lying within near_miss_m of the
    other road. Candidates closer than the min-new-point tolerance collapse.
    """
    out = []
    for i, a in enumerate(roads):
        for b in roads[i + 1 :]:
            if not a.points or not b.points:
                continue
            if set(a.connected_intersections) & set(b.connected_intersections):
                continue
            found = []
            for p1, p2 in _segments(a):
                for p3, p4 in _segments(b):
                    p = segment_intersection(p1, p2, p3, p4)
                    if p is not None and all(matcher.is_new_point(q, p) for q in found):
                        found.append(p)
            if not found:
                for road, other in ((a, b), (b, a)):
                    segs = _segments(other) or [(q, q) for q in other.points]
                    for end in endpoints(road):
                        d = min(point_to_segment_distance(end, s, e) for s, e in segs)
                        near = d <= near_miss_m
                        if near and all(matcher.is_new_point(q, end) for q in found):
                            found.append(end)
            for k, p in enumerate(found):
                out.append(
                    Intersection(
                        id=f"detected:{a.id}:{b.id}:{k}",
                        name=f"{a.name} & {b.name}",
                        position=p,
                        floor_id="",
                        connected_roads=(a.id, b.id),
                        category="detected",
                    )
                )
    return out
