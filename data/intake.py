"""Observation intake: range checks and land-to-sea substitution.

Runs before the drift model sees a sighting. A point classified as land is
replaced by the last point that was classified as water.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from config import MAX_JELLYFISH_COUNT
from data.landsea import SeaCoordinateStore, is_over_water
from model.entities import Observation

logger = logging.getLogger(__name__)


class InvalidObservation(ValueError):
    """Form values outside the accepted ranges."""


class LandCoordinatesError(Exception):
    """Sighting is on land and no earlier sea position is known."""


@dataclass(frozen=True)
class IntakeResult:
    observation: Observation
    substituted: bool


def validate_observation_input(lat, lon, count):
    """Coerce and range-check form values; returns (lat, lon, count)."""
    try:
        lat, lon = float(lat), float(lon)
        count = int(count)
    except (TypeError, ValueError) as e:
        raise InvalidObservation(f"Latitude, longitude and count must be numbers: {e}") from e

    if not -90 <= lat <= 90:
        raise InvalidObservation(f"Latitude {lat} outside [-90, 90]")
    if not -180 <= lon <= 180:
        raise InvalidObservation(f"Longitude {lon} outside [-180, 180]")
    if not 0 <= count <= MAX_JELLYFISH_COUNT:
        raise InvalidObservation(f"Count {count} outside [0, {MAX_JELLYFISH_COUNT}]")
    return lat, lon, count


def build_observation(lat, lon, count, observed_at: datetime,
                      store: SeaCoordinateStore,
                      classifier=is_over_water) -> IntakeResult:
    lat, lon, count = validate_observation_input(lat, lon, count)

    if classifier(lat, lon):
        store.save(lat, lon)
        substituted = False
    else:
        previous = store.load()
        if previous is None:
            raise LandCoordinatesError(
                "Land coordinates detected and no previous sea coordinates found. "
                "Please enter coordinates over water."
            )
        logger.info("(%.4f, %.4f) is on land, using previous sea fix (%.4f, %.4f)",
                    lat, lon, *previous)
        lat, lon = previous
        substituted = True

    observation = Observation(latitude=lat, longitude=lon, count=count,
                              observed_at=observed_at)
    return IntakeResult(observation=observation, substituted=substituted)
