"""Shared fixtures for the drift model tests."""

from datetime import datetime, timedelta, timezone

import pytest

from model.entities import Observation, WindSample


class ConstantRandom:
    """Random source that always returns the same value."""

    def __init__(self, value=0.0):
        self.value = value

    def random(self):
        return self.value


@pytest.fixture
def day_start():
    return datetime(2024, 6, 2, tzinfo=timezone.utc)


@pytest.fixture
def origin():
    return Observation(latitude=0.0, longitude=0.0, count=10,
                       observed_at=datetime(2024, 6, 1, 14, 30, tzinfo=timezone.utc))


@pytest.fixture
def zero_rng():
    return ConstantRandom(0.0)


@pytest.fixture
def daily_wind(day_start):
    """Build one sample at noon on each given day index."""
    def _make(day_indices, speed=10.0, direction=90.0):
        return [WindSample(speed=speed, direction=direction,
                           at=day_start + timedelta(days=i, hours=12))
                for i in day_indices]
    return _make
