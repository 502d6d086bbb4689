# runtime/hooks.py
from typing import Protocol


class EngineHooks(Protocol):
    def compute_start(self, *, kind: str, key: str): ...
    def compute_end(self, *, kind: str, key: str, wall_ms: float, **extra): ...
    def cache_hit(self, *, kind: str, key: str): ...
    def cache_invalidate(self, *, key: str, removed: int): ...
    def error(self, *, kind: str, key: str, exc: BaseException): ...


class NoopHooks:
    def compute_start(self, **_):
        pass

    def compute_end(self, **_):
        pass

    def cache_hit(self, **_):
        pass

    def cache_invalidate(self, **_):
        pass

    def error(self, **_):
        pass
