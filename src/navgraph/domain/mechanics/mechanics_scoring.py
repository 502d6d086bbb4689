import math
from collections.abc import Sequence

import numpy as np

from navgraph.config.models import ScoringModel
from navgraph.domain.entities.campus import (
    ELEVATOR,
    ENTRANCE,
    ESCALATOR,
    PARKING,
    RAMP,
    RESTROOM,
    STAIRS,
    VERTICAL_CIRCULATION,
    Building,
    Landmark,
    Road,
)
from navgraph.domain.entities.geography import LatLng
from navgraph.domain.mechanics.mechanics_geometry import midpoint, pairwise_distances
from navgraph.domain.results import AccessibilityResult, CandidateConnection


def _clamp01(x: float) -> float:
    return max(0.0, min(1.0, x))


def _any_accessible(landmarks: Sequence[Landmark], category: str) -> bool:
    return any(lm.category == category and lm.accessible for lm in landmarks)


def rating_for(score: float, cfg: ScoringModel) -> str:
    for band in cfg.bands:
        if score >= band.threshold:
            return band.label
    return cfg.fallback_label


def score_accessibility(building: Building, cfg: ScoringModel) -> AccessibilityResult:
    landmarks = list(building.landmarks())
    categories = {lm.category for lm in landmarks}

    has_elevator = ELEVATOR in categories
    single_floor = len(building.floors) == 1
    entrance = _any_accessible(landmarks, ENTRANCE)
    ramp = RAMP in categories
    restroom = _any_accessible(landmarks, RESTROOM)
    parking = _any_accessible(landmarks, PARKING)
    stairs_only = (
        building.is_multi_floor
        and not has_elevator
        and STAIRS in categories
        and ESCALATOR not in categories
    )

    pts = 0.0
    features = []
    if has_elevator or single_floor:
        pts += cfg.elevator_pts
        features.append("Elevators Available" if has_elevator else "Single Floor")
    if entrance:
        pts += cfg.entrance_pts
        features.append("Accessible Entrance")
    if ramp:
        pts += cfg.ramp_pts
        features.append("Wheelchair Ramps")
    if restroom:
        pts += cfg.restroom_pts
        features.append("Accessible Restrooms")
    if parking:
        pts += cfg.parking_pts
        features.append("Accessible Parking")
    if stairs_only:
        pts += cfg.stairs_bonus_pts
        features.append("Stairs Only")

    score = _clamp01(pts / cfg.max_points)
    return AccessibilityResult(
        building_id=building.id,
        has_elevator=has_elevator,
        single_floor=single_floor,
        has_accessible_entrance=entrance,
        has_ramp=ramp,
        has_accessible_restroom=restroom,
        has_accessible_parking=parking,
        stairs_only=stairs_only,
        score=score,
        rating=rating_for(score, cfg),
        features=tuple(features),
    )


def circulation_type_count(building: Building) -> int:
    present = {lm.category for lm in building.landmarks()}
    return sum(1 for kind in VERTICAL_CIRCULATION if kind in present)


def connectivity_score(building: Building, isolated_count: int, cfg: ScoringModel) -> float:
    total = len(building.floors)
    if total <= 1:
        return 1.0
    bonus = cfg.circulation_bonus * max(0, circulation_type_count(building) - 1)
    bonus = min(bonus, cfg.max_circulation_bonus)
    return _clamp01((total - isolated_count) / total + bonus)


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def connectivity_percentage(roads: Sequence[Road]) -> int:
    if not roads:
        return 0
    connected = sum(1 for r in roads if r.connected_intersections)
    return round_half_up(connected / len(roads) * 100)


def closest_pair(a: Sequence[LatLng], b: Sequence[LatLng]) -> tuple[LatLng, LatLng, float]:
    d = pairwise_distances(a, b)
    i, j = np.unravel_index(int(np.argmin(d)), d.shape)
    return a[i], b[j], float(d[i, j])


def candidate_connections(roads: Sequence[Road], threshold_m: float) -> list[CandidateConnection]:
    """Closest point pair for every unordered road pair, kept when strictly under threshold_m."""
    out = []
    for i, a in enumerate(roads):
        if not a.points:
            continue
        for b in roads[i + 1 :]:
            if not b.points:
                continue
            pa, pb, dist = closest_pair(a.points, b.points)
            if dist < threshold_m:
                out.append(
                    CandidateConnection(
                        road_a_id=a.id,
                        road_b_id=b.id,
                        road_a_name=a.name,
                        road_b_name=b.name,
                        midpoint=midpoint(pa, pb),
                        distance_m=dist,
                    )
                )
    return out
