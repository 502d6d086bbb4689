from dataclasses import dataclass


# Core geometry type: WGS84 degrees, never projected
@dataclass(frozen=True)
class LatLng:
    lat: float
    lon: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lon)
