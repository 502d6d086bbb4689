# tests/app/test_build_config.py
import json
import logging

import pytest
from pydantic import ValidationError

from navgraph.app.build import build
from navgraph.app.engine import NavigationEngine
from navgraph.config.models import EngineModel, ScoringModel, ToleranceModel
from navgraph.io.engine_logging import EngineLogging, _default_json_logger
from navgraph.runtime.hooks import NoopHooks


def test_build_with_defaults(example_building):
    engine = build()
    assert isinstance(engine.hooks, NoopHooks)
    assert engine.tolerances.vertical_circulation_m == 10.0
    assert engine.scoring.max_points == 4.0
    assert len(engine.checks) == 12
    assert engine.compute_connectivity(example_building).isolated_floor_ids == frozenset({"L1"})


def test_build_from_mapping_applies_tolerances(example_building):
    engine = build({"tolerances": {"vertical_circulation_m": 3.0}})
    conn = engine.compute_connectivity(example_building)
    assert conn.isolated_floor_ids == frozenset({"L1", "L2"})


def test_build_accepts_a_model():
    model = EngineModel(name="m", validation={"checks": ["entrance", "boundary"]})
    engine = build(model)
    assert [name for name, _ in engine.checks] == ["entrance", "boundary"]


def test_build_rejects_unknown_checks():
    with pytest.raises(ValueError, match="Unknown validation check"):
        build({"validation": {"checks": ["entrance", "colour"]}})


def test_build_without_cache(example_building):
    engine = build({"cache": {"enabled": False}})
    a = engine.compute_connectivity(example_building)
    assert engine.compute_connectivity(example_building) is not a


@pytest.mark.parametrize(
    "cfg",
    [
        {"unknown": 1},
        {"tolerances": {"road_merge_m": 0}},
        {"tolerances": {"vertical_circulation_m": 1.0, "min_new_point_m": 2.0}},
        {"scoring": {"total_points": 0}},
        {
            "scoring": {
                "bands": [{"threshold": 0.5, "label": "a"}, {"threshold": 0.7, "label": "b"}]
            }
        },
        {"log": {"level": "TRACE"}},
    ],
)
def test_invalid_config_is_rejected(cfg):
    with pytest.raises(ValidationError):
        EngineModel.model_validate(cfg)


def test_tolerance_defaults():
    t = ToleranceModel()
    assert (t.vertical_circulation_m, t.road_merge_m, t.min_new_point_m) == (10.0, 20.0, 2.0)
    assert (t.intersection_m, t.landmark_road_m) == (5.0, 30.0)


def test_max_points_follows_the_weights():
    assert ScoringModel(ramp_pts=1.0).max_points == 4.5
    assert ScoringModel(total_points=5.0).max_points == 5.0


# ------------------ LOGGING ------------------


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


def _capture(name):
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    handler = _ListHandler()
    logger.addHandler(handler)
    return logger, handler


def test_engine_logging_emits_structured_records(example_building):
    logger, handler = _capture("navgraph.test.debug")
    hooks = EngineLogging(name="t", debug=True, logger=logger)
    engine = NavigationEngine(hooks=hooks)

    engine.compute_connectivity(example_building)
    engine.compute_connectivity(example_building)
    engine.invalidate_cache(example_building.id)

    msgs = [r.getMessage() for r in handler.records]
    assert msgs == ["compute_start", "compute_end", "cache_hit", "cache_invalidate"]
    end = handler.records[1]
    assert end.levelno == logging.INFO
    assert end.extra["engine"] == "t"
    assert end.extra["kind"] == "connectivity"
    assert end.extra["key"] == "b"
    assert end.extra["wall_ms"] >= 0
    assert handler.records[3].extra["removed"] == 1
    assert hooks.computed == 1


def test_engine_logging_quiet_mode_and_errors():
    logger, handler = _capture("navgraph.test.quiet")
    hooks = EngineLogging(logger=logger)
    hooks.compute_start(kind="k", key="x")
    hooks.compute_end(kind="k", key="x", wall_ms=1.23456)
    hooks.cache_hit(kind="k", key="x")
    hooks.error(kind="k", key="x", exc=KeyError("gone"))

    assert [(r.getMessage(), r.levelno) for r in handler.records] == [
        ("compute_end", logging.DEBUG),
        ("engine_error", logging.ERROR),
    ]
    assert handler.records[0].extra["wall_ms"] == 1.235
    assert handler.records[1].extra["error_type"] == "KeyError"


def test_default_logger_formats_json():
    logger = _default_json_logger(name="navgraph.test.json", level="DEBUG")
    assert len(logger.handlers) == 1
    # a second call reuses the configured logger
    assert _default_json_logger(name="navgraph.test.json").handlers == logger.handlers

    record = logger.makeRecord(
        logger.name,
        logging.INFO,
        __file__,
        1,
        "compute_end",
        (),
        None,
        extra={"extra": {"kind": "network", "key": "campus"}},
    )
    payload = json.loads(logger.handlers[0].formatter.format(record))
    assert payload == {
        "level": "INFO",
        "msg": "compute_end",
        "logger": "navgraph.test.json",
        "kind": "network",
        "key": "campus",
    }
