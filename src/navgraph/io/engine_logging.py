# io/engine_logging.py
import json
import logging
import sys

from navgraph.runtime.hooks import NoopHooks


def _default_json_logger(name="navgraph", level="INFO"):
    logger = logging.getLogger(name)
    if not logger.handlers:
        h = logging.StreamHandler(sys.stdout)

        class _JsonFormatter(logging.Formatter):
            def format(self, record: logging.LogRecord) -> str:
                payload = {
                    "level": record.levelname,
                    "msg": record.getMessage(),
                    "logger": record.name,
                }
                extra = getattr(record, "extra", None)
                if isinstance(extra, dict):
                    payload.update(extra)
                return json.dumps(payload, default=str)

        h.setFormatter(_JsonFormatter())
        logger.addHandler(h)
        logger.setLevel(level)
    return logger


class EngineLogging(NoopHooks):
    """
    Structured logs for engine computations and cache traffic.
    """

    def __init__(
        self,
        name: str = "navgraph",
        level: str = "INFO",
        debug: bool = False,
        logger: logging.Logger | None = None,
    ):
        self.name, self.debug = name, debug
        self.log = logger or _default_json_logger(level=level)
        self.computed = 0

    def _emit(self, level: str, msg: str, **extra):
        self.log.log(getattr(logging, level), msg, extra={"extra": {"engine": self.name, **extra}})

    def compute_start(self, *, kind: str, key: str):
        if self.debug:
            self._emit("DEBUG", "compute_start", kind=kind, key=key)

    def compute_end(self, *, kind: str, key: str, wall_ms: float, **extra):
        self.computed += 1
        level = "INFO" if self.debug else "DEBUG"
        self._emit(level, "compute_end", kind=kind, key=key, wall_ms=round(wall_ms, 3), **extra)

    def cache_hit(self, *, kind: str, key: str):
        if self.debug:
            self._emit("DEBUG", "cache_hit", kind=kind, key=key)

    def cache_invalidate(self, *, key: str, removed: int):
        self._emit("INFO", "cache_invalidate", key=key, removed=removed)

    def error(self, *, kind: str, key: str, exc: BaseException):
        self._emit(
            "ERROR",
            "engine_error",
            kind=kind,
            key=key,
            error=str(exc),
            error_type=type(exc).__name__,
        )
