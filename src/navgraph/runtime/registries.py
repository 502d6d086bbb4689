# runtime/registries.py
from collections.abc import Callable, Sequence

from navgraph.domain.entities.campus import Building
from navgraph.domain.mechanics import mechanics_validation as mv
from navgraph.domain.results import ConnectivityResult, ValidationIssue

BuildingCheck = Callable[[Building, ConnectivityResult], list[ValidationIssue]]

_check_registry: dict[str, BuildingCheck] = {}


def register_check(name: str):
    def deco(fn: BuildingCheck):
        _check_registry[name] = fn
        return fn

    return deco


def registered_checks() -> list[str]:
    return list(_check_registry)


def make_checks(names: Sequence[str] | None = None) -> list[tuple[str, BuildingCheck]]:
    """Resolve check names in registry order when names is None, else in the given order."""
    if names is None:
        return list(_check_registry.items())
    out = []
    for name in names:
        try:
            out.append((name, _check_registry[name]))
        except KeyError:
            raise ValueError(f"Unknown validation check {name!r}")
    return out


# ------------------- Building checks ---------------------------


@register_check("floors_present")
def _floors_present(b, conn):
    return mv.check_floors_present(b, conn)


@register_check("duplicate_floor_ids")
def _dup_ids(b, conn):
    return mv.check_duplicate_floor_ids(b, conn)


@register_check("ground_floor")
def _ground(b, conn):
    return mv.check_ground_floor(b, conn)


@register_check("entrance")
def _entrance(b, conn):
    return mv.check_entrance(b, conn)


@register_check("accessible_entrance")
def _accessible_entrance(b, conn):
    return mv.check_accessible_entrance(b, conn)


@register_check("emergency_exit")
def _emergency_exit(b, conn):
    return mv.check_emergency_exit(b, conn)


@register_check("duplicate_levels")
def _dup_levels(b, conn):
    return mv.check_duplicate_levels(b, conn)


@register_check("vertical_circulation")
def _circulation(b, conn):
    return mv.check_vertical_circulation(b, conn)


@register_check("isolated_floors")
def _isolated(b, conn):
    return mv.check_isolated_floors(b, conn)


@register_check("floor_roads")
def _floor_roads(b, conn):
    return mv.check_floor_roads(b, conn)


@register_check("floor_references")
def _floor_refs(b, conn):
    return mv.check_floor_references(b, conn)


@register_check("boundary")
def _boundary(b, conn):
    return mv.check_boundary(b, conn)
