# navgraph/domain/errors.py


class NavGraphError(Exception):
    """Base class for every error raised by the engine."""


class NotFoundError(NavGraphError, LookupError):
    pass


class BuildingNotFoundError(NotFoundError):
    def __init__(self, building_id: str):
        super().__init__(f"building {building_id!r} not found")
        self.building_id = building_id


class FloorNotFoundError(NotFoundError):
    def __init__(self, building_id: str, floor_id: str):
        super().__init__(f"floor {floor_id!r} not found in building {building_id!r}")
        self.building_id = building_id
        self.floor_id = floor_id
