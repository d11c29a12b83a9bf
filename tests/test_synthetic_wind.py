"""
Tests for the synthetic wind series.
"""

from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

from data.synthetic_wind import synthetic_wind, wind_components
from model.wind import average_wind, bucketize

START = datetime(2024, 6, 2, tzinfo=timezone.utc)


class TestSyntheticWind:

    def test_length_and_cadence(self):
        samples = synthetic_wind(START, days=3)
        assert len(samples) == 24
        assert samples[0].at == START
        assert all(b.at - a.at == timedelta(hours=3) for a, b in zip(samples, samples[1:]))

    def test_values_in_range(self):
        for s in synthetic_wind(START, days=5, seed=7):
            assert s.speed >= 0
            assert 0 <= s.direction < 360

    def test_seeded(self):
        assert synthetic_wind(START, seed=3) == synthetic_wind(START, seed=3)
        assert synthetic_wind(START, seed=3) != synthetic_wind(START, seed=4)

    def test_fills_every_bucket(self):
        buckets = bucketize(synthetic_wind(START, days=5), START, 5)
        assert [b.day_index for b in buckets] == [0, 1, 2, 3, 4]
        assert all(len(b.samples) == 8 for b in buckets)

    def test_follows_base_direction(self):
        """Averaged over days, the wind blows roughly toward the base bearing."""
        avg = average_wind(synthetic_wind(START, days=8, base_direction=135.0))
        assert 90 < avg.direction < 180


class TestWindComponents:

    def test_east_and_north(self):
        u, v = wind_components(10.0, 90.0)
        assert u == pytest.approx(10.0)
        assert v == pytest.approx(0.0, abs=1e-12)
        u, v = wind_components(np.array([5.0]), np.array([0.0]))
        assert v[0] == pytest.approx(5.0)
