from collections import Counter

from navgraph.domain.entities.campus import (
    ELEVATOR,
    EMERGENCY_EXIT,
    ENTRANCE,
    VERTICAL_CIRCULATION,
    Building,
)
from navgraph.domain.results import ConnectivityResult, Severity, ValidationIssue


def check_floors_present(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    if building.floors:
        return []
    return [
        ValidationIssue(
            "BUILDING_NO_FLOORS",
            Severity.ERROR,
            f"Building {building.name!r} has no floors",
            building.id,
        )
    ]


def check_duplicate_floor_ids(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    counts = Counter(f.id for f in building.floors)
    return [
        ValidationIssue("FLOOR_DUP_ID", Severity.ERROR, f"Duplicate floor id {fid!r}", fid)
        for fid, n in counts.items()
        if n > 1
    ]


def check_ground_floor(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    if not building.floors or any(f.level == 0 for f in building.floors):
        return []
    return [
        ValidationIssue(
            "BUILDING_NO_GROUND",
            Severity.WARNING,
            f"Building {building.name!r} has no ground floor (level 0)",
            building.id,
            building.center,
        )
    ]


def check_entrance(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    if not building.floors or building.has_landmark(ENTRANCE):
        return []
    return [
        ValidationIssue(
            "BUILDING_NO_ENTRANCE",
            Severity.ERROR,
            f"Building {building.name!r} has no marked entrances",
            building.id,
            building.center,
        )
    ]


def check_accessible_entrance(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    if not building.floors or any(
        lm.category == ENTRANCE and lm.accessible for lm in building.landmarks()
    ):
        return []
    return [
        ValidationIssue(
            "BUILDING_NO_ACCESSIBLE_ENTRANCE",
            Severity.WARNING,
            f"Building {building.name!r} lacks an accessible entrance",
            building.id,
            building.center,
        )
    ]


def check_emergency_exit(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    if not building.floors or building.has_landmark(EMERGENCY_EXIT):
        return []
    return [
        ValidationIssue(
            "BUILDING_NO_EMERGENCY_EXIT",
            Severity.WARNING,
            f"Building {building.name!r} lacks emergency exits",
            building.id,
            building.center,
        )
    ]


def check_duplicate_levels(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    counts = Counter(f.level for f in building.floors)
    return [
        ValidationIssue(
            "FLOOR_DUP_LEVEL",
            Severity.WARNING,
            f"Level {level} is used by {n} floors in {building.name!r}",
            building.id,
        )
        for level, n in sorted(counts.items())
        if n > 1
    ]


def check_vertical_circulation(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    if not building.is_multi_floor:
        return []
    issues = []
    if not building.has_landmark(*VERTICAL_CIRCULATION):
        issues.append(
            ValidationIssue(
                "BUILDING_NO_CIRC",
                Severity.ERROR,
                f"Multi-floor building {building.name!r} has no elevators, stairs or escalators",
                building.id,
                building.center,
            )
        )
    elif not building.has_landmark(ELEVATOR):
        issues.append(
            ValidationIssue(
                "BUILDING_NO_ELEVATOR",
                Severity.INFO,
                f"Multi-floor building {building.name!r} lacks elevator access",
                building.id,
            )
        )
    return issues


def check_isolated_floors(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            "FLOOR_ISOLATED",
            Severity.WARNING,
            f"Floor {f.name!r} (level {f.level}) is unreachable from the root floor",
            f.id,
            f.center,
        )
        for f in building.floors
        if f.id in conn.isolated_floor_ids
    ]


def check_floor_roads(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    return [
        ValidationIssue(
            "FLOOR_NO_ROADS",
            Severity.WARNING,
            f"Floor {f.name!r} has landmarks but no roads to reach them",
            f.id,
            f.center,
        )
        for f in building.floors
        if f.landmarks and not f.roads
    ]


def check_floor_references(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    known = {f.id for f in building.floors}
    return [
        ValidationIssue(
            "FLOOR_DANGLING_REF",
            Severity.WARNING,
            f"Floor {f.name!r} links to unknown floor {ref!r}",
            f.id,
        )
        for f in building.floors
        for ref in f.connected_floors
        if ref not in known
    ]


def check_boundary(
    building: Building, conn: ConnectivityResult
) -> list[ValidationIssue]:
    n = len(building.boundary)
    if n == 0:
        msg = f"Building {building.name!r} boundary not defined"
    elif n < 3:
        msg = f"Building {building.name!r} boundary needs at least 3 points, has {n}"
    else:
        return []
    return [ValidationIssue("BUILDING_BOUNDARY", Severity.INFO, msg, building.id, building.center)]
