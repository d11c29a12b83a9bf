"""
Tests for path assembly and the results summary.
"""

import numpy as np
import pytest

from model.entities import PathPoint, PredictionRecord
from model.path import (
    DriftSummary, assemble_path, confidence_label, path_arrays, summarize,
)


def _record(day, lat, lon, conf, dist):
    return PredictionRecord(day=day, latitude=lat, longitude=lon, confidence=conf,
                            wind_speed=5.0, wind_direction=90.0,
                            distance_from_origin=dist)


@pytest.fixture
def records():
    return [
        _record(1, 0.0, 0.07, 0.98, 7.7),
        _record(3, 0.0, 0.14, 0.94, 15.4),
    ]


class TestAssemblePath:

    def test_origin_first(self, origin, records):
        path = assemble_path(origin, records)
        assert path[0] == PathPoint(day=0, latitude=0.0, longitude=0.0)

    def test_mirrors_records(self, origin, records):
        path = assemble_path(origin, records)
        assert [p.day for p in path] == [0, 1, 3]
        assert [p.longitude for p in path[1:]] == [0.07, 0.14]

    def test_no_records(self, origin):
        assert len(assemble_path(origin, [])) == 1

    def test_path_arrays(self, origin, records):
        day, lat, lon = path_arrays(assemble_path(origin, records))
        assert day.tolist() == [0, 1, 3]
        np.testing.assert_allclose(lon, [0.0, 0.07, 0.14])
        assert lat.dtype == np.float64


class TestSummarize:

    def test_summary(self, records):
        s = summarize(records)
        assert s.days == 2
        assert s.max_distance_km == pytest.approx(15.4)
        assert s.mean_confidence == pytest.approx(0.96)
        assert s.final_position == (0.0, 0.14)

    def test_empty(self):
        assert summarize([]) == DriftSummary(days=0, max_distance_km=0.0,
                                             mean_confidence=0.0,
                                             final_position=None)


class TestConfidenceLabel:

    @pytest.mark.parametrize("value,label", [
        (0.98, "high"), (0.71, "high"), (0.7, "medium"),
        (0.41, "medium"), (0.4, "low"), (0.1, "low"),
    ])
    def test_bands(self, value, label):
        assert confidence_label(value) == label
