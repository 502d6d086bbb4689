# navgraph/app/build.py
from collections.abc import Mapping

from navgraph.app.engine import NavigationEngine
from navgraph.config.models import EngineModel
from navgraph.domain.mechanics.mechanics_proximity import ProximityMatcher
from navgraph.io.engine_logging import EngineLogging  # JSON logs
from navgraph.runtime.cache import ResultCache
from navgraph.runtime.hooks import NoopHooks
from navgraph.runtime.registries import make_checks


def build(
    cfg: EngineModel | Mapping | None = None, *, use_logging: bool = False
) -> NavigationEngine:
    # 0) Validate config
    if cfg is None:
        model = EngineModel()
    else:
        model = cfg if isinstance(cfg, EngineModel) else EngineModel.model_validate(cfg)

    # 1) Hooks
    hooks = (
        EngineLogging(name=model.name, level=model.log.level, debug=model.log.debug)
        if use_logging
        else NoopHooks()
    )

    # 2) Mechanics & checks (unknown check names fail here, not at query time)
    matcher = ProximityMatcher.from_config(model.tolerances)
    checks = make_checks(model.validation.checks)

    # 3) Cache
    cache = ResultCache(hooks=hooks, enabled=model.cache.enabled)

    return NavigationEngine(
        tolerances=model.tolerances,
        scoring=model.scoring,
        checks=checks,
        hooks=hooks,
        matcher=matcher,
        cache=cache,
    )
