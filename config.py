"""Drift model defaults, forecast horizon, and upstream provider settings."""

import logging
import os

# Drift model defaults (Pelagia noctiluca)
DRIFT_FACTOR = 0.03             # fraction of wind speed transferred to drift
OCEAN_CURRENT_KM_PER_DAY = 0.5  # constant background current
UNCERTAINTY_SCALE = 0.1         # km per day index, scaled by a [0, 1) draw
EARTH_RADIUS_KM = 6371.0

# Confidence decay
CONFIDENCE_STEP = 0.02          # lost per simulated day
CONFIDENCE_FLOOR = 0.1

# Temporal
N_DAYS = 5                      # forecast horizon
HOURS_PER_DAY = 24
FORECAST_STEP_HOURS = 3         # OpenWeatherMap forecast cadence
ENTRIES_PER_DAY = HOURS_PER_DAY // FORECAST_STEP_HOURS  # 8 forecast entries

# Wind bucket resolution: "compact" keeps the positional lookup over
# non-empty days, "calendar" looks days up by their own index.
BUCKET_POLICY = "compact"

# Named drift profiles: (drift factor, current km/day, uncertainty scale)
SPECIES_PROFILES = {
    "pelagia_noctiluca": (DRIFT_FACTOR, OCEAN_CURRENT_KM_PER_DAY, UNCERTAINTY_SCALE),
    "aurelia_aurita":    (0.025, 0.5, 0.1),
    "physalia_physalis": (0.06, 0.5, 0.15),   # sail-driven, drifts faster
}
DEFAULT_SPECIES = "pelagia_noctiluca"

# Observation form limits
MAX_JELLYFISH_COUNT = 10_000

# Upstream providers
OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
OPENWEATHER_API_KEY = os.environ.get("OPENWEATHER_API_KEY", "")
NOMINATIM_REVERSE_URL = "https://nominatim.openstreetmap.org/reverse"
USER_AGENT = "JellyfishDrift/1.0"
HTTP_TIMEOUT_S = 10

SEA_COORDINATES_PATH = os.environ.get(
    "SEA_COORDINATES_PATH",
    os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "last_sea_coordinates.json"),
)

# Synthetic wind (Mediterranean mistral-like northwesterly)
SYNTH_BASE_SPEED = 6.0          # m/s
SYNTH_BASE_DIRECTION = 135.0    # degrees, blowing toward SE
SYNTH_SYNOPTIC_PERIOD_HOURS = 4 * 24
SYNTH_NOISE_STD = 0.8           # m/s per component
SYNTH_NOISE_SIGMA = 1.5         # forecast steps, for gaussian_filter1d

# Random seed for reproducibility
GLOBAL_SEED = 42

# Default map view (Western Mediterranean)
DEFAULT_LAT = 41.38
DEFAULT_LON = 2.25

# Logging
LOG_LEVEL = logging.INFO
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
