"""Spherical-earth geometry: destination point and haversine distance.

Both functions are numpy-vectorised: scalar inputs give numpy scalars,
array inputs give arrays of the broadcast shape.
"""

import numpy as np

from config import EARTH_RADIUS_KM


def normalize_longitude(lon):
    """Wrap longitude (degrees) into [-180, 180)."""
    return (np.asarray(lon, dtype=np.float64) + 540.0) % 360.0 - 180.0


def project(lat, lon, distance_km, bearing_deg, radius_km=EARTH_RADIUS_KM):
    """Advance (lat, lon) by *distance_km* along *bearing_deg*.

    Parameters
    ----------
    lat, lon : float or ndarray
        Start point in degrees.
    distance_km : float or ndarray
        Great-circle distance to travel, >= 0.
    bearing_deg : float or ndarray
        Compass bearing of travel, clockwise from true north.

    Returns
    -------
    lat_new, lon_new : float or ndarray (degrees)
    """
    phi1 = np.radians(lat)
    lam1 = np.radians(lon)
    theta = np.radians(bearing_deg)
    delta = np.asarray(distance_km, dtype=np.float64) / radius_km

    sin_phi2 = (np.sin(phi1) * np.cos(delta)
                + np.cos(phi1) * np.sin(delta) * np.cos(theta))
    # Rounding can push the argument just past +-1 near the poles
    phi2 = np.arcsin(np.clip(sin_phi2, -1.0, 1.0))

    lam2 = lam1 + np.arctan2(
        np.sin(theta) * np.sin(delta) * np.cos(phi1),
        np.cos(delta) - np.sin(phi1) * np.sin(phi2),
    )
    return np.degrees(phi2), normalize_longitude(np.degrees(lam2))


def haversine(lat1, lon1, lat2, lon2, radius_km=EARTH_RADIUS_KM):
    """Great-circle distance in km between (lat1, lon1) and (lat2, lon2)."""
    phi1, phi2 = np.radians(lat1), np.radians(lat2)
    dphi = phi2 - phi1
    dlam = np.radians(lon2) - np.radians(lon1)
    a = np.sin(dphi / 2) ** 2 + np.cos(phi1) * np.cos(phi2) * np.sin(dlam / 2) ** 2
    a = np.clip(a, 0.0, 1.0)
    return radius_km * 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
