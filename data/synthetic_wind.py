"""Synthetic 3-hourly wind series for offline and demo runs.

Mimics the OpenWeatherMap forecast cadence: a steady base wind plus a
4-day synoptic oscillation and temporally smoothed noise, generated
deterministically from a seeded RNG.
"""

from datetime import datetime, timedelta

import numpy as np
from scipy.ndimage import gaussian_filter1d

from config import (
    N_DAYS, FORECAST_STEP_HOURS, ENTRIES_PER_DAY, GLOBAL_SEED,
    SYNTH_BASE_SPEED, SYNTH_BASE_DIRECTION, SYNTH_SYNOPTIC_PERIOD_HOURS,
    SYNTH_NOISE_STD, SYNTH_NOISE_SIGMA,
)
from model.entities import WindSample


def wind_components(speed, direction_deg):
    """(u, v) eastward/northward components of a blowing-toward wind."""
    theta = np.radians(direction_deg)
    return speed * np.sin(theta), speed * np.cos(theta)


def synthetic_wind(start: datetime, days: int = N_DAYS, seed: int = GLOBAL_SEED,
                   base_speed: float = SYNTH_BASE_SPEED,
                   base_direction: float = SYNTH_BASE_DIRECTION) -> list[WindSample]:
    """Return ``days * 8`` samples, the first at *start*."""
    rng = np.random.default_rng(seed)
    n = days * ENTRIES_PER_DAY
    hours = np.arange(n) * FORECAST_STEP_HOURS

    base_u, base_v = wind_components(base_speed, base_direction)
    phase = 2 * np.pi * hours / SYNTH_SYNOPTIC_PERIOD_HOURS
    u = base_u + 2.0 * np.sin(phase)
    v = base_v + 1.0 * np.cos(phase)

    u += gaussian_filter1d(rng.normal(0, SYNTH_NOISE_STD, n), sigma=SYNTH_NOISE_SIGMA)
    v += gaussian_filter1d(rng.normal(0, SYNTH_NOISE_STD, n), sigma=SYNTH_NOISE_SIGMA)

    speed = np.hypot(u, v)
    direction = np.degrees(np.arctan2(u, v)) % 360.0
    direction[direction >= 360.0] = 0.0

    return [
        WindSample(speed=float(s), direction=float(d),
                   at=start + timedelta(hours=int(h)))
        for s, d, h in zip(speed, direction, hours)
    ]
