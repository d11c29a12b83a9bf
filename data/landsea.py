"""Land/sea classification by reverse geocoding, and the last sea fix.

Nominatim is asked what lies at a coordinate. Anything that names a water
body, or returns no address at all, counts as water. Lookup failures also
count as water so a flaky geocoder never blocks a sighting.
"""

import json
import logging
import os

import httpx

from config import NOMINATIM_REVERSE_URL, USER_AGENT, HTTP_TIMEOUT_S

logger = logging.getLogger(__name__)

WATER_BODIES = (
    "ocean", "sea", "bay", "gulf", "strait", "channel", "sound",
    "mediterranean", "atlantic", "pacific", "indian", "arctic",
)
WATER_PLACE_TYPES = ("water", "sea", "ocean", "bay", "gulf", "strait")
LAND_FEATURES = ("road", "house_number", "building")


def _mentions_water(text: str) -> bool:
    text = text.lower()
    return any(w in text for w in WATER_BODIES)


def classify_reverse_geocode(data: dict) -> bool:
    """True if a Nominatim reverse-geocode payload describes water."""
    address = data.get("address")
    if not address:
        return True

    if _mentions_water(data.get("display_name") or ""):
        return True
    if _mentions_water(" ".join(str(v) for v in address.values())):
        return True

    place_type = (data.get("type") or "").lower()
    category = (data.get("category") or "").lower()
    if place_type in WATER_PLACE_TYPES or category in WATER_PLACE_TYPES:
        return True

    if any(address.get(k) for k in LAND_FEATURES):
        return False
    return True


def is_over_water(lat: float, lon: float, client: httpx.Client | None = None) -> bool:
    if client is None:
        with httpx.Client(timeout=HTTP_TIMEOUT_S) as own:
            return is_over_water(lat, lon, client=own)
    params = {"format": "json", "lat": lat, "lon": lon, "zoom": 10, "addressdetails": 1}
    headers = {"User-Agent": USER_AGENT}
    try:
        resp = client.get(NOMINATIM_REVERSE_URL, params=params, headers=headers)
        resp.raise_for_status()
        data = resp.json()
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("Land/sea lookup failed for (%.4f, %.4f): %s", lat, lon, e)
        return True
    return classify_reverse_geocode(data)


class SeaCoordinateStore:
    """JSON file holding the last coordinates classified as water."""

    def __init__(self, path: str):
        self.path = path

    def load(self):
        """Return (lat, lon) or None if nothing usable is stored."""
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
            return float(data["latitude"]), float(data["longitude"])
        except FileNotFoundError:
            return None
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("Ignoring unreadable sea coordinates at %s: %s", self.path, e)
            return None

    def save(self, lat: float, lon: float) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"latitude": lat, "longitude": lon}, f)
