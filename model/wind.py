"""Daily wind aggregation.

Irregular wind samples are binned into fixed 24-hour buckets starting at an
explicit instant, and each bucket is reduced to one representative wind by
vector averaging (arithmetic averaging of bearings breaks across 0/360).
"""

import enum
import logging
from datetime import datetime, timedelta, timezone

import numpy as np

from model.entities import AveragedWind, DailyBucket

logger = logging.getLogger(__name__)

_ONE_DAY = timedelta(days=1)


class BucketPolicy(enum.Enum):
    """How a simulated day is matched to a wind bucket."""

    COMPACT = "compact"      # position day-1 in the non-empty buckets
    CALENDAR = "calendar"    # the bucket for that calendar day


def as_aware(instant: datetime) -> datetime:
    """Treat a naive datetime as UTC; aware ones pass through."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant


def start_of_next_day(instant: datetime) -> datetime:
    """Midnight following *instant*, in the instant's own timezone (UTC if naive)."""
    midnight = as_aware(instant).replace(hour=0, minute=0, second=0, microsecond=0)
    return midnight + _ONE_DAY


def bucketize(samples, day_start: datetime, bucket_count: int) -> list[DailyBucket]:
    """Split *samples* into daily buckets, dropping days without samples.

    Day i covers [day_start + i days, day_start + (i + 1) days). Samples
    outside every day are ignored. The returned list is compacted, so list
    position and ``day_index`` only agree while no day is empty.
    """
    day_start = as_aware(day_start)
    bins = [[] for _ in range(bucket_count)]
    for sample in samples:
        offset = as_aware(sample.at) - day_start
        if offset < timedelta(0):
            continue
        idx = offset // _ONE_DAY
        if idx < bucket_count:
            bins[idx].append(sample)

    buckets = [DailyBucket(day_index=i, samples=tuple(b))
               for i, b in enumerate(bins) if b]
    if len(buckets) < bucket_count:
        logger.debug("%d of %d days have wind samples", len(buckets), bucket_count)
    return buckets


def average_wind(samples) -> AveragedWind:
    """Vector-average wind samples (or a DailyBucket) into one AveragedWind."""
    if isinstance(samples, DailyBucket):
        samples = samples.samples
    if not samples:
        return AveragedWind.calm()

    speed = np.array([s.speed for s in samples], dtype=np.float64)
    theta = np.radians([s.direction for s in samples])
    x = np.mean(speed * np.sin(theta))
    y = np.mean(speed * np.cos(theta))

    direction = float(np.degrees(np.arctan2(x, y)))
    if direction < 0:
        direction += 360.0
    return AveragedWind(speed=float(np.hypot(x, y)), direction=direction)


def resolve_bucket(buckets, day: int, policy=BucketPolicy.COMPACT):
    """Return the bucket to use for simulated *day* (1-based), or None."""
    if not buckets:
        return None

    if policy is BucketPolicy.COMPACT:
        return buckets[day - 1] if day - 1 < len(buckets) else buckets[-1]

    earlier = [b for b in buckets if b.day_index <= day - 1]
    return earlier[-1] if earlier else None
