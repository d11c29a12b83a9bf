"""Value types shared by the drift model, the providers, and the renderers."""

from dataclasses import asdict, dataclass
from datetime import datetime, timezone


@dataclass(frozen=True)
class Observation:
    """A single jellyfish sighting. Validated upstream, read-only here."""

    latitude: float
    longitude: float
    count: int
    observed_at: datetime


@dataclass(frozen=True)
class WindSample:
    speed: float       # m/s
    direction: float   # degrees, blowing toward
    at: datetime       # timezone-aware

    @classmethod
    def from_epoch_ms(cls, speed, direction, epoch_ms):
        at = datetime.fromtimestamp(epoch_ms / 1000.0, tz=timezone.utc)
        return cls(speed=float(speed), direction=float(direction), at=at)


@dataclass(frozen=True)
class DailyBucket:
    day_index: int                    # 0 = first day after day_start
    samples: tuple[WindSample, ...]


@dataclass(frozen=True)
class AveragedWind:
    speed: float
    direction: float

    @classmethod
    def calm(cls):
        return cls(speed=0.0, direction=0.0)


@dataclass(frozen=True)
class PredictionRecord:
    day: int
    latitude: float
    longitude: float
    confidence: float
    wind_speed: float
    wind_direction: float
    distance_from_origin: float       # km, great-circle from the sighting

    def as_dict(self):
        return asdict(self)


@dataclass(frozen=True)
class PathPoint:
    day: int
    latitude: float
    longitude: float
