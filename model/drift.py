"""Day-by-day drift prediction for a single jellyfish sighting.

Each simulated day resolves a wind bucket, converts its averaged wind into a
displacement distance, and moves the running position downwind along a great
circle. Days with no resolvable wind are skipped: no record is emitted and
the position is left where it was.
"""

import functools
import logging
from dataclasses import dataclass, field
from typing import NamedTuple, Protocol

import numpy as np

from config import (
    DRIFT_FACTOR, OCEAN_CURRENT_KM_PER_DAY, UNCERTAINTY_SCALE,
    EARTH_RADIUS_KM, CONFIDENCE_STEP, CONFIDENCE_FLOOR,
    N_DAYS, BUCKET_POLICY, SPECIES_PROFILES, DEFAULT_SPECIES, HOURS_PER_DAY,
)
from model.entities import Observation, PredictionRecord
from model.geodesy import haversine, project
from model.wind import (
    BucketPolicy, average_wind, bucketize, resolve_bucket, start_of_next_day,
)

logger = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything with ``random() -> float`` uniform in [0, 1).

    ``numpy.random.Generator`` and ``random.Random`` both qualify.
    """

    def random(self) -> float: ...


@dataclass(frozen=True)
class DriftConfig:
    drift_factor: float = DRIFT_FACTOR
    ocean_current_km_per_day: float = OCEAN_CURRENT_KM_PER_DAY
    uncertainty_scale: float = UNCERTAINTY_SCALE
    earth_radius_km: float = EARTH_RADIUS_KM
    confidence_step: float = CONFIDENCE_STEP
    confidence_floor: float = CONFIDENCE_FLOOR
    bucket_count: int = N_DAYS
    bucket_policy: BucketPolicy = BucketPolicy(BUCKET_POLICY)

    @classmethod
    def for_species(cls, name: str = DEFAULT_SPECIES, **overrides) -> "DriftConfig":
        """Drift profile for a named species; raises KeyError if unknown."""
        drift, current, uncertainty = SPECIES_PROFILES[name]
        params = dict(drift_factor=drift, ocean_current_km_per_day=current,
                      uncertainty_scale=uncertainty)
        params.update(overrides)
        return cls(**params)


DEFAULT_CONFIG = DriftConfig()


def daily_displacement(wind_speed: float, day: int, rng: RandomSource,
                       config: DriftConfig = DEFAULT_CONFIG) -> float:
    """Distance (km) drifted in one day under *wind_speed* (m/s)."""
    wind_drift = wind_speed * config.drift_factor * HOURS_PER_DAY
    uncertainty = rng.random() * day * config.uncertainty_scale
    return wind_drift + config.ocean_current_km_per_day + uncertainty


def confidence(day: int, config: DriftConfig = DEFAULT_CONFIG) -> float:
    return max(config.confidence_floor, 1 - day * config.confidence_step)


@dataclass(frozen=True)
class DriftResult:
    observation: Observation
    records: tuple[PredictionRecord, ...]
    skipped_days: tuple[int, ...] = field(default=())

    @property
    def complete(self) -> bool:
        return not self.skipped_days


class _FoldState(NamedTuple):
    lat: float
    lon: float
    records: tuple
    skipped: tuple


def predict_drift(observation: Observation,
                  wind_samples,
                  days: int = None,
                  rng: RandomSource = None,
                  seed: int = None,
                  day_start=None,
                  config: DriftConfig = None) -> DriftResult:
    """Predict the daily positions of *observation* under *wind_samples*.

    Parameters
    ----------
    observation : Observation
        The sighting; its coordinates are the day-0 position.
    wind_samples : iterable of WindSample
        Irregularly timed wind, in any order.
    days : int
        Number of simulated days (default ``config.N_DAYS``).
    rng : RandomSource, optional
        Source for the uncertainty term. Defaults to
        ``numpy.random.default_rng(seed)``.
    day_start : datetime, optional
        Start of day 1's wind bucket. Defaults to the midnight after the
        observation.
    config : DriftConfig, optional

    Returns
    -------
    DriftResult
        At most *days* records with strictly increasing ``day``.
    """
    days = days if days is not None else N_DAYS
    config = config if config is not None else DEFAULT_CONFIG
    rng = rng if rng is not None else np.random.default_rng(seed)
    day_start = day_start if day_start is not None else start_of_next_day(observation.observed_at)

    if not isinstance(days, (int, np.integer)) or days < 1:
        raise ValueError(f"days must be a positive integer, got {days!r}")

    buckets = bucketize(wind_samples, day_start, max(days, config.bucket_count))
    origin = (observation.latitude, observation.longitude)

    def _step(state: _FoldState, day: int) -> _FoldState:
        bucket = resolve_bucket(buckets, day, config.bucket_policy)
        if bucket is None:
            logger.debug("Day %d: no wind bucket, position held", day)
            return state._replace(skipped=state.skipped + (day,))

        wind = average_wind(bucket)
        distance = daily_displacement(wind.speed, day, rng, config)
        lat, lon = project(state.lat, state.lon, distance, wind.direction,
                           radius_km=config.earth_radius_km)
        lat, lon = float(lat), float(lon)

        record = PredictionRecord(
            day=day,
            latitude=lat,
            longitude=lon,
            confidence=confidence(day, config),
            wind_speed=wind.speed,
            wind_direction=wind.direction,
            distance_from_origin=float(haversine(*origin, lat, lon,
                                                 radius_km=config.earth_radius_km)),
        )
        return _FoldState(lat, lon, state.records + (record,), state.skipped)

    final = functools.reduce(_step, range(1, days + 1),
                             _FoldState(*origin, records=(), skipped=()))

    logger.info("Predicted %d of %d days from (%.4f, %.4f), %d wind buckets",
                len(final.records), days, *origin, len(buckets))
    return DriftResult(observation=observation, records=final.records,
                       skipped_days=final.skipped)
