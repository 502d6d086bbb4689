"""
Geometry kernel. Every function takes WGS84 degrees and is pure.

Distances are great-circle (haversine) unless a function says otherwise; the
planar shortcuts below (point_to_segment_distance, polygon_area,
segment_intersection) are only meaningful at building/campus scale.
"""

import math
from collections.abc import Sequence

import numpy as np

from navgraph.domain.entities.geography import LatLng

EARTH_RADIUS_M = 6_371_000.0
METERS_PER_DEGREE = 111_319.9
PARALLEL_EPS = 1e-6

_CARDINALS = ("north", "northeast", "east", "southeast", "south", "southwest", "west", "northwest")


def great_circle_distance(a: LatLng, b: LatLng) -> float:
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlat = lat2 - lat1
    dlon = math.radians(b.lon - a.lon)
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    h = min(1.0, max(0.0, h))  # float drift near antipodes
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))


def pairwise_distances(a: Sequence[LatLng], b: Sequence[LatLng]) -> np.ndarray:
    """Haversine distance matrix of shape (len(a), len(b)) in meters."""
    pa = np.radians(np.array([(p.lat, p.lon) for p in a], dtype=float).reshape(-1, 2))
    pb = np.radians(np.array([(p.lat, p.lon) for p in b], dtype=float).reshape(-1, 2))
    lat1, lon1 = pa[:, 0][:, None], pa[:, 1][:, None]
    lat2, lon2 = pb[:, 0][None, :], pb[:, 1][None, :]
    h = (
        np.sin((lat2 - lat1) / 2) ** 2
        + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    )
    h = np.clip(h, 0.0, 1.0)
    return EARTH_RADIUS_M * 2 * np.arctan2(np.sqrt(h), np.sqrt(1 - h))


def bearing(a: LatLng, b: LatLng) -> float:
    """Forward azimuth from a to b, degrees in [0, 360)."""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlon = math.radians(b.lon - a.lon)
    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0


def cardinal_direction(bearing_deg: float) -> str:
    return _CARDINALS[int(math.floor((bearing_deg % 360.0 + 22.5) / 45.0)) % 8]


def point_to_segment_distance(p: LatLng, start: LatLng, end: LatLng) -> float:
    """
    Distance from p to the segment start-end, in meters.

    The projection is done on a local equirectangular plane (longitude scaled by
    cos(latitude of p)), so it is an approximation valid for segments of tens of
    meters. The final distance to the clamped foot point is great-circle.
    """
    k = math.cos(math.radians(p.lat))
    ax, ay = (p.lon - start.lon) * k, p.lat - start.lat
    dx, dy = (end.lon - start.lon) * k, end.lat - start.lat
    len_sq = dx * dx + dy * dy
    if len_sq == 0:
        return great_circle_distance(p, start)
    t = max(0.0, min(1.0, (ax * dx + ay * dy) / len_sq))
    foot = LatLng(start.lat + t * (end.lat - start.lat), start.lon + t * (end.lon - start.lon))
    return great_circle_distance(p, foot)


def segment_intersection(p1: LatLng, p2: LatLng, p3: LatLng, p4: LatLng) -> LatLng | None:
    """
    Crossing point of segments p1-p2 and p3-p4, treating (lon, lat) as Cartesian.

    Near-parallel pairs (|det| < 1e-6 in degrees squared) never intersect. No
    distance tolerance is applied here; callers that want near-misses to count
    must test endpoint proximity themselves.
    """
    x1, y1, x2, y2 = p1.lon, p1.lat, p2.lon, p2.lat
    x3, y3, x4, y4 = p3.lon, p3.lat, p4.lon, p4.lat
    det = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(det) < PARALLEL_EPS:
        return None
    t = ((x1 - x3) * (y3 - y4) - (y1 - y3) * (x3 - x4)) / det
    u = -((x1 - x2) * (y1 - y3) - (y1 - y2) * (x1 - x3)) / det
    if 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0:
        return LatLng(y1 + t * (y2 - y1), x1 + t * (x2 - x1))
    return None


def polygon_area(points: Sequence[LatLng]) -> float:
    """Shoelace area over raw degrees scaled to square meters; small footprints only."""
    if len(points) < 3:
        return 0.0
    lat = np.array([p.lat for p in points], dtype=float)
    lon = np.array([p.lon for p in points], dtype=float)
    twice = np.dot(lon, np.roll(lat, -1)) - np.dot(np.roll(lon, -1), lat)
    return float(abs(twice) / 2.0 * METERS_PER_DEGREE * METERS_PER_DEGREE)


def circular_boundary(center: LatLng, radius_m: float, segments: int = 16) -> list[LatLng]:
    if segments < 3 or radius_m <= 0:
        return []
    cos_lat = math.cos(math.radians(center.lat))
    ring = []
    for i in range(segments):
        theta = 2 * math.pi * i / segments
        dlat = radius_m * math.cos(theta) / EARTH_RADIUS_M
        dlon = radius_m * math.sin(theta) / (EARTH_RADIUS_M * cos_lat)
        ring.append(LatLng(center.lat + math.degrees(dlat), center.lon + math.degrees(dlon)))
    return ring


def point_in_polygon(p: LatLng, ring: Sequence[LatLng]) -> bool:
    if len(ring) < 3:
        return False
    inside = False
    n = len(ring)
    for i in range(n):
        v1, v2 = ring[i], ring[(i + 1) % n]
        if (v1.lat > p.lat) != (v2.lat > p.lat):
            x_cross = (v2.lon - v1.lon) * (p.lat - v1.lat) / (v2.lat - v1.lat) + v1.lon
            if p.lon < x_cross:
                inside = not inside
    return inside


def polyline_length(points: Sequence[LatLng]) -> float:
    return sum(great_circle_distance(a, b) for a, b in zip(points, points[1:]))


def midpoint(a: LatLng, b: LatLng) -> LatLng:
    return LatLng((a.lat + b.lat) / 2, (a.lon + b.lon) / 2)


def simplify_trace(points: Sequence[LatLng], min_spacing_m: float) -> list[LatLng]:
    """Drop points closer than min_spacing_m to the last kept point; the last point survives."""
    if len(points) <= 2:
        return list(points)
    kept = [points[0]]
    for p in points[1:-1]:
        if great_circle_distance(kept[-1], p) >= min_spacing_m:
            kept.append(p)
    last = points[-1]
    if len(kept) > 1 and great_circle_distance(kept[-1], last) < min_spacing_m:
        kept[-1] = last
    else:
        kept.append(last)
    return kept
