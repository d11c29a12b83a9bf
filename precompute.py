"""Run one drift prediction offline and save the path.

Run:      python precompute.py [--lat 41.38 --lon 2.25 --days 5 --seed 42]
Outputs:  data/precomputed.npz  (day, lat, lon, confidence, distance_km)

Uses OpenWeatherMap when OPENWEATHER_API_KEY is set, synthetic wind otherwise.
"""

import argparse
import logging
import os
from datetime import datetime

import numpy as np

from config import (
    DEFAULT_LAT, DEFAULT_LON, N_DAYS, GLOBAL_SEED, OPENWEATHER_API_KEY,
    DEFAULT_SPECIES, LOG_LEVEL, LOG_FORMAT,
)
from data.synthetic_wind import synthetic_wind
from data.weather import OpenWeatherClient, validate_api_key
from model.drift import DriftConfig, predict_drift
from model.entities import Observation
from model.path import assemble_path, path_arrays, summarize
from model.wind import start_of_next_day

logger = logging.getLogger("precompute")


def save_prediction(out, observation, records):
    """Write the assembled path plus per-day scores to a compressed npz."""
    day, lat, lon = path_arrays(assemble_path(observation, records))
    conf = np.array([1.0] + [r.confidence for r in records], dtype=np.float32)
    dist = np.array([0.0] + [r.distance_from_origin for r in records], dtype=np.float32)
    np.savez_compressed(out, day=day, lat=lat, lon=lon,
                        confidence=conf, distance_km=dist)


def main(argv=None):
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--lat", type=float, default=DEFAULT_LAT)
    parser.add_argument("--lon", type=float, default=DEFAULT_LON)
    parser.add_argument("--count", type=int, default=10)
    parser.add_argument("--days", type=int, default=N_DAYS)
    parser.add_argument("--seed", type=int, default=GLOBAL_SEED)
    parser.add_argument("--species", default=DEFAULT_SPECIES)
    parser.add_argument("--out", default=os.path.join("data", "precomputed.npz"))
    args = parser.parse_args(argv)

    now = datetime.now().astimezone()
    obs = Observation(latitude=args.lat, longitude=args.lon, count=args.count,
                      observed_at=now)

    if validate_api_key(OPENWEATHER_API_KEY):
        with OpenWeatherClient(OPENWEATHER_API_KEY) as client:
            wind = client.wind_for_days(args.lat, args.lon, days=args.days, now=now)
    else:
        logger.info("OPENWEATHER_API_KEY not set, using synthetic wind")
        wind = synthetic_wind(start_of_next_day(now), days=args.days, seed=args.seed)

    result = predict_drift(obs, wind, days=args.days, seed=args.seed,
                           config=DriftConfig.for_species(args.species))
    summary = summarize(result.records)
    logger.info("%d days predicted, max %.1f km from sighting, mean confidence %.0f%%",
                summary.days, summary.max_distance_km, 100 * summary.mean_confidence)

    save_prediction(args.out, obs, result.records)
    logger.info("Saved %s (%.1f KB)", args.out, os.path.getsize(args.out) / 1024)
    return result


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
    main()
