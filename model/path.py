"""Drift path assembly and the results-panel rollup."""

from dataclasses import dataclass

import numpy as np

from model.entities import Observation, PathPoint


def assemble_path(observation: Observation, records) -> list[PathPoint]:
    """Origin as day 0 followed by each record's position, in order."""
    path = [PathPoint(day=0, latitude=observation.latitude,
                      longitude=observation.longitude)]
    path.extend(PathPoint(day=r.day, latitude=r.latitude, longitude=r.longitude)
                for r in records)
    return path


def path_arrays(path):
    """(day, lat, lon) ndarrays for plotting or saving."""
    day = np.array([p.day for p in path], dtype=np.int32)
    lat = np.array([p.latitude for p in path], dtype=np.float64)
    lon = np.array([p.longitude for p in path], dtype=np.float64)
    return day, lat, lon


@dataclass(frozen=True)
class DriftSummary:
    days: int
    max_distance_km: float
    mean_confidence: float
    final_position: tuple | None   # (lat, lon) of the last record


def summarize(records) -> DriftSummary:
    if not records:
        return DriftSummary(days=0, max_distance_km=0.0, mean_confidence=0.0,
                            final_position=None)
    last = records[-1]
    return DriftSummary(
        days=len(records),
        max_distance_km=max(r.distance_from_origin for r in records),
        mean_confidence=float(np.mean([r.confidence for r in records])),
        final_position=(last.latitude, last.longitude),
    )


def confidence_label(value: float) -> str:
    if value > 0.7:
        return "high"
    if value > 0.4:
        return "medium"
    return "low"
