# tests/domain/test_validation_checks.py
import pytest

from navgraph.app.engine import NavigationEngine
from navgraph.domain.entities.campus import Landmark, Road
from navgraph.domain.mechanics import mechanics_validation as mv
from navgraph.domain.mechanics.mechanics_geometry import circular_boundary
from navgraph.domain.results import Severity
from navgraph.runtime.registries import make_checks, registered_checks


def _codes(issues):
    return [i.code for i in issues]


@pytest.fixture
def engine():
    return NavigationEngine()


@pytest.fixture
def clean_building(at, landmark, floor, building):
    def corridor(fid):
        return Road(f"{fid}-c", "Corridor", (at(0, 0), at(20, 0)), floor_id=fid)

    f0 = floor(
        "F0",
        0,
        landmarks=[
            landmark("e0", "elevator", at(0, 0), "F0"),
            landmark("door", "entrance", at(-5, 0), "F0", accessible=True),
            landmark("fire", "emergency_exit", at(5, 0), "F0"),
        ],
        roads=[corridor("F0")],
    )
    f1 = floor(
        "F1", 1, landmarks=[landmark("e1", "elevator", at(1, 0), "F1")], roads=[corridor("F1")]
    )
    return building(f0, f1, boundary=circular_boundary(at(0, 0), 30.0))


def test_clean_building_has_no_issues(engine, clean_building):
    assert engine.validate_building(clean_building) == []


def test_every_check_is_registered_in_order():
    assert registered_checks() == [
        "floors_present",
        "duplicate_floor_ids",
        "ground_floor",
        "entrance",
        "accessible_entrance",
        "emergency_exit",
        "duplicate_levels",
        "vertical_circulation",
        "isolated_floors",
        "floor_roads",
        "floor_references",
        "boundary",
    ]
    assert [name for name, _ in make_checks(["boundary", "entrance"])] == ["boundary", "entrance"]


def test_unknown_check_name_raises():
    with pytest.raises(ValueError, match="Unknown validation check"):
        make_checks(["no_such_check"])


def test_empty_building(engine, building):
    issues = engine.validate_building(building())
    assert _codes(issues) == ["BUILDING_NO_FLOORS", "BUILDING_BOUNDARY"]
    assert issues[0].severity is Severity.ERROR
    assert issues[1].severity is Severity.INFO


def test_isolated_floor_and_missing_roads(engine, example_building):
    issues = engine.validate_building(example_building)
    codes = _codes(issues)
    assert "FLOOR_ISOLATED" in codes
    isolated = next(i for i in issues if i.code == "FLOOR_ISOLATED")
    assert isolated.related_id == "L1"
    assert isolated.severity is Severity.WARNING
    assert [i.related_id for i in issues if i.code == "FLOOR_NO_ROADS"] == ["L1", "L2"]
    assert "BUILDING_BOUNDARY" in codes
    assert "BUILDING_NO_ENTRANCE" not in codes


def test_missing_entrance_and_ground(at, landmark, floor, building):
    b = building(
        floor("F1", 1, landmarks=[landmark("s1", "stairs", at(0, 0), "F1")]),
        floor("F2", 2, landmarks=[landmark("s2", "stairs", at(0, 0), "F2")]),
    )
    conn = NavigationEngine().compute_connectivity(b)
    assert _codes(mv.check_entrance(b, conn)) == ["BUILDING_NO_ENTRANCE"]
    assert _codes(mv.check_ground_floor(b, conn)) == ["BUILDING_NO_GROUND"]
    circ = mv.check_vertical_circulation(b, conn)
    assert _codes(circ) == ["BUILDING_NO_ELEVATOR"]
    assert circ[0].severity is Severity.INFO


def test_exits_do_not_count_as_entrances(at, landmark, floor, building):
    b = building(floor("F0", 0, landmarks=[landmark("x", "emergency_exit", at(0, 0), "F0")]))
    conn = NavigationEngine().compute_connectivity(b)
    assert _codes(mv.check_entrance(b, conn)) == ["BUILDING_NO_ENTRANCE"]
    assert mv.check_emergency_exit(b, conn) == []


def test_entrance_without_accessibility(at, landmark, floor, building):
    door = landmark("door", "entrance", at(0, 0), "F0")
    b = building(floor("F0", 0, landmarks=[door]))
    conn = NavigationEngine().compute_connectivity(b)
    assert mv.check_entrance(b, conn) == []
    issues = mv.check_accessible_entrance(b, conn)
    assert _codes(issues) == ["BUILDING_NO_ACCESSIBLE_ENTRANCE"]
    assert issues[0].severity is Severity.WARNING
    assert _codes(mv.check_emergency_exit(b, conn)) == ["BUILDING_NO_EMERGENCY_EXIT"]


def test_entrance_named_accessible_satisfies_the_check(at, floor, building):
    door = Landmark.from_properties(
        id="door",
        name="Accessible Entrance",
        category="Entrance",
        position=at(0, 0),
        floor_id="F0",
    )
    b = building(floor("F0", 0, landmarks=[door]))
    conn = NavigationEngine().compute_connectivity(b)
    assert mv.check_accessible_entrance(b, conn) == []


def test_multi_floor_without_circulation(floor, building):
    b = building(floor("F0", 0), floor("F1", 1))
    conn = NavigationEngine().compute_connectivity(b)
    issues = mv.check_vertical_circulation(b, conn)
    assert _codes(issues) == ["BUILDING_NO_CIRC"]
    assert issues[0].severity is Severity.ERROR


def test_duplicate_levels_and_ids(floor, building):
    b = building(floor("F0", 0), floor("F0", 1), floor("G", 1))
    conn = NavigationEngine().compute_connectivity(b)
    dup_ids = mv.check_duplicate_floor_ids(b, conn)
    assert [(i.code, i.related_id) for i in dup_ids] == [("FLOOR_DUP_ID", "F0")]
    dup_levels = mv.check_duplicate_levels(b, conn)
    assert _codes(dup_levels) == ["FLOOR_DUP_LEVEL"]
    assert "Level 1" in dup_levels[0].message


def test_dangling_floor_reference(floor, building):
    b = building(floor("F0", 0, connected=["F1", "F9"]), floor("F1", 1))
    conn = NavigationEngine().compute_connectivity(b)
    issues = mv.check_floor_references(b, conn)
    assert [(i.code, i.related_id) for i in issues] == [("FLOOR_DANGLING_REF", "F0")]
    assert "'F9'" in issues[0].message


def test_short_boundary(at, floor, building):
    b = building(floor("F0", 0), boundary=[at(0, 0), at(1, 1)])
    conn = NavigationEngine().compute_connectivity(b)
    issues = mv.check_boundary(b, conn)
    assert "has 2" in issues[0].message


def test_engine_runs_only_configured_checks(example_building):
    engine = NavigationEngine(checks=make_checks(["isolated_floors"]))
    assert _codes(engine.validate_building(example_building)) == ["FLOOR_ISOLATED"]
