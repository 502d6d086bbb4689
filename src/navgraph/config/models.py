from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


class LogModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    debug: bool = False


class CacheModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    enabled: bool = True


# ----------------- TOLERANCES ---------------------


class ToleranceModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    vertical_circulation_m: float = 10.0  # elevator/stairs across floors of one building
    road_merge_m: float = 20.0  # road endpoints across the outdoor network
    min_new_point_m: float = 2.0  # trace simplification
    intersection_m: float = 5.0  # near-miss band for detected intersections
    landmark_road_m: float = 30.0  # outdoor landmark "on the network" radius

    @field_validator(
        "vertical_circulation_m",
        "road_merge_m",
        "min_new_point_m",
        "intersection_m",
        "landmark_road_m",
    )
    def _positive(cls, v: float, info: ValidationInfo) -> float:
        if v <= 0:
            raise ValueError(f"{info.field_name} must be > 0")
        return v

    @model_validator(mode="after")
    def _check_ordering(self):
        if self.min_new_point_m > self.vertical_circulation_m:
            raise ValueError("min_new_point_m must not exceed vertical_circulation_m")
        return self


# ----------------- SCORING ---------------------


class RatingBandModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    threshold: float
    label: str


def _default_bands() -> list[RatingBandModel]:
    return [
        RatingBandModel(threshold=0.9, label="Excellent"),
        RatingBandModel(threshold=0.7, label="Good"),
        RatingBandModel(threshold=0.5, label="Fair"),
        RatingBandModel(threshold=0.3, label="Poor"),
    ]


class ScoringModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    elevator_pts: float = 1.0  # also granted to single-floor buildings
    entrance_pts: float = 1.0
    ramp_pts: float = 0.5
    restroom_pts: float = 1.0
    parking_pts: float = 0.5
    stairs_bonus_pts: float = 0.3
    total_points: float | None = None  # None => sum of the rubric weights
    circulation_bonus: float = 0.1
    max_circulation_bonus: float = 0.2
    bands: list[RatingBandModel] = Field(default_factory=_default_bands)
    fallback_label: str = "Very Poor"

    @field_validator("total_points")
    def _nonzero(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("total_points must be > 0")
        return v

    @property
    def max_points(self) -> float:
        if self.total_points is not None:
            return self.total_points
        return (
            self.elevator_pts
            + self.entrance_pts
            + self.ramp_pts
            + self.restroom_pts
            + self.parking_pts
        )

    @model_validator(mode="after")
    def _check_bands(self):
        thresholds = [b.threshold for b in self.bands]
        if any(a <= b for a, b in zip(thresholds, thresholds[1:])):
            raise ValueError("rating band thresholds must be strictly descending")
        return self


# ----------------- VALIDATION ---------------------


class ValidationModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    checks: list[str] | None = None  # None => every registered check


# ----------------- INGESTION ---------------------


class LandmarkPropertiesModel(BaseModel):
    """Typed view over a landmark's free-form property map, parsed once at ingestion."""

    model_config = ConfigDict(extra="allow")
    accessible: bool = False
    direction: Literal["up", "down"] | None = None

    @model_validator(mode="before")
    @classmethod
    def _aliases(cls, data: Any):
        if isinstance(data, dict) and "accessible" not in data and "wheelchair" in data:
            data = {**data, "accessible": data["wheelchair"]}
        return data

    @field_validator("accessible", mode="before")
    @classmethod
    def _truthy(cls, v):
        if isinstance(v, str):
            return v.strip().lower() in {"1", "true", "yes", "y"}
        return bool(v)

    @field_validator("direction", mode="before")
    @classmethod
    def _direction(cls, v):
        # missing or malformed directions degrade to "no direction"
        if isinstance(v, str) and v.strip().lower() in {"up", "down"}:
            return v.strip().lower()
        return None


# ------------------------------------------------------------------


class EngineModel(BaseModel):
    model_config = ConfigDict(extra="forbid")
    name: str = "navgraph"
    log: LogModel = LogModel()
    cache: CacheModel = CacheModel()
    tolerances: ToleranceModel = Field(default_factory=ToleranceModel)
    scoring: ScoringModel = Field(default_factory=ScoringModel)
    validation: ValidationModel = Field(default_factory=ValidationModel)
