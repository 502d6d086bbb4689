# tests/conftest.py
import math

import pytest

from navgraph.domain.entities.campus import Building, Floor, Landmark, Road
from navgraph.domain.entities.geography import LatLng
from navgraph.domain.mechanics.mechanics_geometry import METERS_PER_DEGREE

ORIGIN = LatLng(33.9737, -117.3281)


def _at(dlat_m: float = 0.0, dlon_m: float = 0.0) -> LatLng:
    # METERS_PER_DEGREE is the equatorial figure, so offsets come out ~0.1% short
    k = math.cos(math.radians(ORIGIN.lat))
    return LatLng(
        ORIGIN.lat + dlat_m / METERS_PER_DEGREE,
        ORIGIN.lon + dlon_m / (METERS_PER_DEGREE * k),
    )


def _lm(lid, category, position, floor_id="", **kw):
    return Landmark(
        id=lid,
        name=kw.pop("name", lid),
        category=category,
        position=position,
        floor_id=floor_id,
        **kw,
    )


def _floor(fid, level, landmarks=(), roads=(), connected=(), building_id="b"):
    return Floor(
        id=fid,
        name=fid,
        level=level,
        building_id=building_id,
        roads=tuple(roads),
        landmarks=tuple(landmarks),
        connected_floors=tuple(connected),
        center=ORIGIN,
    )


def _building(*floors, bid="b", boundary=()):
    return Building(
        id=bid, name=bid.upper(), center=ORIGIN, floors=tuple(floors), boundary=tuple(boundary)
    )


@pytest.fixture
def at():
    """Point offset from the test origin by (north_m, east_m)."""
    return _at


@pytest.fixture
def landmark():
    return _lm


@pytest.fixture
def floor():
    return _floor


@pytest.fixture
def building():
    return _building


@pytest.fixture
def example_building():
    """
    Levels 0/1/2 with elevators on L0 and L2 about 5 m apart. L1 only has a
    restroom, so it is the one floor cut off from the ground.
    """
    corridor = Road(id="c0", name="Corridor", points=(_at(0, 0), _at(20, 0)), floor_id="L0")
    l0 = _floor(
        "L0",
        0,
        landmarks=[
            _lm("e0", "elevator", _at(0, 0), "L0"),
            _lm("door", "entrance", _at(-10, 0), "L0", accessible=True),
        ],
        roads=[corridor],
    )
    l1 = _floor("L1", 1, landmarks=[_lm("wc1", "restroom", _at(0, 30), "L1", accessible=True)])
    l2 = _floor("L2", 2, landmarks=[_lm("e2", "elevator", _at(5, 0), "L2")])
    return _building(l0, l1, l2)
