"""Dash callbacks: run a drift prediction on click, display results.

Single callback: click Predict → validate the sighting (land/sea check),
fetch wind (OpenWeatherMap, or synthetic without a key), run the drift
model, build the map and the per-day results panel.
"""

import logging
from datetime import datetime

import numpy as np
import plotly.graph_objects as go
from dash import Input, Output, State, callback, html

from config import N_DAYS, SEA_COORDINATES_PATH, DEFAULT_SPECIES, GLOBAL_SEED
from data.intake import InvalidObservation, LandCoordinatesError, build_observation
from data.landsea import SeaCoordinateStore, is_over_water
from data.synthetic_wind import synthetic_wind
from data.weather import OpenWeatherClient, WeatherError, validate_api_key
from model.drift import DriftConfig, predict_drift
from model.path import assemble_path, confidence_label, path_arrays, summarize
from model.wind import start_of_next_day

logger = logging.getLogger(__name__)

# ── Map style ──────────────────────────────────────────────────────────

SAT_STYLE = {
    "version": 8,
    "sources": {
        "satellite": {
            "type": "raster",
            "tiles": [
                "https://server.arcgisonline.com/ArcGIS/rest/services/"
                "World_Imagery/MapServer/tile/{z}/{y}/{x}"
            ],
            "tileSize": 256,
            "attribution": "Esri, Maxar, Earthstar Geographics",
        }
    },
    "layers": [{"id": "satellite", "type": "raster", "source": "satellite"}],
}

_BADGE_COLORS = {"high": "#1a73e8", "medium": "#e8a21a", "low": "#999"}


def _confidence_color(c):
    """Blue (confident) fading to grey (floor)."""
    t = max(0.0, min(1.0, (c - 0.1) / 0.9))
    r = int(160 - 134 * t)
    g = int(160 - 45 * t)
    b = int(160 + 72 * t)
    return f"rgb({r},{g},{b})"


def _map_layout(center_lat, center_lon, zoom):
    return dict(
        map=dict(style=SAT_STYLE, center=dict(lat=center_lat, lon=center_lon),
                 zoom=zoom),
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
        paper_bgcolor="rgba(0,0,0,0)",
    )


def _zoom_for_span(span_deg):
    """Rough map zoom that keeps a lat/lon span of *span_deg* in view."""
    span_deg = max(span_deg, 0.02)
    return float(np.clip(np.log2(360.0 / span_deg) - 1.0, 2, 12))


# ── Orchestration ─────────────────────────────────────────────────────

def run_prediction(lat, lon, count, days=N_DAYS, species=DEFAULT_SPECIES,
                   api_key=None, seed=None, now=None, store=None,
                   classifier=is_over_water, weather_client=None):
    """Intake → wind → drift. Returns (intake, result, wind_source).

    Raises InvalidObservation, LandCoordinatesError or WeatherError.
    """
    now = now or datetime.now().astimezone()
    store = store or SeaCoordinateStore(SEA_COORDINATES_PATH)
    days = int(days) if days else N_DAYS
    seed = int(seed) if seed is not None else None

    intake = build_observation(lat, lon, count, now, store, classifier=classifier)
    obs = intake.observation

    if weather_client is not None:
        wind = weather_client.wind_for_days(obs.latitude, obs.longitude, days=days, now=now)
        source = "OpenWeatherMap"
    elif validate_api_key(api_key):
        with OpenWeatherClient(api_key) as client:
            wind = client.wind_for_days(obs.latitude, obs.longitude, days=days, now=now)
        source = "OpenWeatherMap"
    else:
        wind = synthetic_wind(start_of_next_day(now), days=days,
                              seed=seed if seed is not None else GLOBAL_SEED)
        source = "synthetic"

    result = predict_drift(obs, wind, days=days, seed=seed,
                           day_start=start_of_next_day(now),
                           config=DriftConfig.for_species(species))
    return intake, result, source


# ── Figure builders ──────────────────────────────────────────────────

def build_map(observation, records):
    path = assemble_path(observation, records)
    _, lat, lon = path_arrays(path)

    fig = go.Figure()
    fig.add_trace(go.Scattermap(
        lon=lon.tolist(), lat=lat.tolist(), mode="lines",
        line=dict(width=3, color="rgba(255,200,50,0.8)"),
        hoverinfo="skip",
    ))

    if records:
        fig.add_trace(go.Scattermap(
            lon=[r.longitude for r in records],
            lat=[r.latitude for r in records],
            mode="markers",
            marker=dict(size=11, color=[_confidence_color(r.confidence) for r in records]),
            text=[f"Day {r.day}<br>{r.latitude:.4f}, {r.longitude:.4f}<br>"
                  f"{100 * r.confidence:.0f}% confidence<br>"
                  f"{r.distance_from_origin:.1f} km from sighting"
                  for r in records],
            hoverinfo="text",
        ))

    fig.add_trace(go.Scattermap(
        lon=[observation.longitude], lat=[observation.latitude],
        mode="markers",
        marker=dict(size=14, color="#e84040"),
        text=[f"Sighting: {observation.count} jellyfish"],
        hoverinfo="text",
    ))

    span = max(np.ptp(lat), np.ptp(lon))
    fig.update_layout(**_map_layout(float(lat.mean()), float(lon.mean()),
                                    _zoom_for_span(span)))
    return fig


def build_results(observation, records):
    summary = summarize(records)
    header = html.Div(
        style={"display": "grid", "gridTemplateColumns": "1fr 1fr 1fr",
               "gap": "8px", "marginBottom": "10px", "fontSize": "12px"},
        children=[
            html.Div([html.Div("Jellyfish"),
                      html.B(f"{observation.count}")]),
            html.Div([html.Div("Max distance"),
                      html.B(f"{summary.max_distance_km:.1f} km")]),
            html.Div([html.Div("Avg confidence"),
                      html.B(f"{100 * summary.mean_confidence:.0f}%")]),
        ],
    )

    rows = []
    for r in records:
        label = confidence_label(r.confidence)
        rows.append(html.Div(
            style={"borderBottom": "1px solid #eee", "padding": "6px 0",
                   "fontSize": "12px", "display": "grid",
                   "gridTemplateColumns": "60px 1fr 1fr 80px", "gap": "6px"},
            children=[
                html.B(f"Day {r.day}"),
                html.Div(f"{r.latitude:.4f}, {r.longitude:.4f}"),
                html.Div(f"{r.wind_speed:.1f} m/s toward {r.wind_direction:.0f}°"),
                html.Div(f"{r.distance_from_origin:.1f} km"),
                html.Span(f"{100 * r.confidence:.0f}% confidence",
                          style={"color": _BADGE_COLORS[label],
                                 "gridColumn": "2 / span 3"}),
            ],
        ))
    if not rows:
        rows.append(html.Div("No wind data covered the forecast window.",
                             style={"fontSize": "12px", "color": "#a00"}))
    return [header, *rows]


# ── Callback: Predict button ─────────────────────────────────────────

_HIDDEN = {"flex": "1", "minWidth": "300px", "visibility": "hidden"}
_VISIBLE = {"flex": "1", "minWidth": "300px", "visibility": "visible"}


@callback(
    Output("map-figure", "figure"),
    Output("results-container", "children"),
    Output("stats-text", "children"),
    Output("results-container", "style"),
    Input("run-button", "n_clicks"),
    State("lat-input", "value"),
    State("lon-input", "value"),
    State("count-input", "value"),
    State("days-input", "value"),
    State("species-input", "value"),
    State("api-key-input", "value"),
    State("seed-input", "value"),
    prevent_initial_call=True,
)
def run_model(n_clicks, lat, lon, count, days, species, api_key, seed):
    try:
        intake, result, source = run_prediction(
            lat, lon, count, days=days, species=species or DEFAULT_SPECIES,
            api_key=api_key, seed=seed,
        )
    except (InvalidObservation, LandCoordinatesError, WeatherError) as e:
        logger.warning("Prediction failed: %s", e)
        return go.Figure(), [], f"Prediction failed: {e}", _HIDDEN

    obs = intake.observation
    map_fig = build_map(obs, result.records)
    results = build_results(obs, result.records)

    stats = (f"{len(result.records)} of {int(days or N_DAYS)} days predicted "
             f"· wind: {source}")
    if intake.substituted:
        stats += (f" · land coordinates detected, using previous sea "
                  f"position {obs.latitude:.6f}, {obs.longitude:.6f}")
    return map_fig, results, stats, _VISIBLE
