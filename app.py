"""Dash application: layout and server entry point."""

import logging

import dash
import plotly.graph_objects as go
from dash import dcc, html

from config import (
    DEFAULT_LAT, DEFAULT_LON, N_DAYS, OPENWEATHER_API_KEY,
    MAX_JELLYFISH_COUNT, SPECIES_PROFILES, DEFAULT_SPECIES,
    LOG_LEVEL, LOG_FORMAT,
)
from callbacks import SAT_STYLE  # importing callbacks registers them

logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)

app = dash.Dash(
    __name__,
    title="Jellyfish Drift Predictor",
    update_title="Computing...",
)
server = app.server  # for gunicorn

# ── Satellite base map (shown on load) ────────────────────────────────

_initial_map = go.Figure(data=[
    go.Scattermap(
        lon=[DEFAULT_LON], lat=[DEFAULT_LAT], mode="markers",
        marker=dict(size=10, color="rgba(255,255,255,0.6)"),
        name="Default position", hoverinfo="skip",
    ),
])
_initial_map.update_layout(
    map=dict(style=SAT_STYLE, center=dict(lon=DEFAULT_LON, lat=DEFAULT_LAT), zoom=7),
    margin=dict(l=0, r=0, t=0, b=0),
    paper_bgcolor="rgba(0,0,0,0)",
)

# ── Info card helper ──────────────────────────────────────────────────

_CARD = {
    "background": "#fff", "borderRadius": "8px",
    "border": "1px solid #e0e0e0", "padding": "14px 16px",
}


def _card(title, body, color="#1a73e8"):
    style = {**_CARD, "borderLeft": f"4px solid {color}"}
    return html.Div(style=style, children=[
        html.Div(title, style={"fontWeight": "700", "fontSize": "13px",
                                "marginBottom": "6px", "color": "#333"}),
        html.Div(body, style={"fontSize": "12px", "color": "#555",
                               "lineHeight": "1.55"}),
    ])


def _field(label, component):
    return html.Div(style={"display": "flex", "flexDirection": "column",
                           "gap": "3px"}, children=[
        html.Label(label, style={"fontSize": "12px", "fontWeight": "600",
                                 "color": "#444"}),
        component,
    ])


_INPUT = {"padding": "6px 8px", "fontSize": "13px", "border": "1px solid #ccc",
          "borderRadius": "5px"}

# ── Layout ────────────────────────────────────────────────────────────

app.layout = html.Div(
    style={"fontFamily": "system-ui, -apple-system, sans-serif",
           "margin": "0 auto", "maxWidth": "1500px", "padding": "16px"},
    children=[
        html.H2("Jellyfish Drift Predictor",
                style={"marginBottom": "2px", "letterSpacing": "-0.5px"}),
        html.P("Track Pelagia noctiluca sightings and predict their movement "
               "from wind forecasts and a background ocean current",
               style={"color": "#888", "marginTop": 0, "fontSize": "13px",
                      "marginBottom": "14px"}),

        # Info cards
        html.Div(
            style={"display": "grid",
                   "gridTemplateColumns": "1fr 1fr 1fr",
                   "gap": "10px", "marginBottom": "14px"},
            children=[
                _card("Wind-Driven Drift",
                      "Jellyfish are poor swimmers and move downwind. Each day "
                      "the forecast wind is vector-averaged and 3% of its speed, "
                      "over 24 hours, is added to a 0.5 km/day background "
                      "current.",
                      "#1a73e8"),
                _card("Wind Forecast",
                      "Current conditions plus the OpenWeatherMap 5-day / 3-hour "
                      "forecast. Without an API key a synthetic northwesterly "
                      "with a 4-day synoptic cycle is used instead.",
                      "#e8a21a"),
                _card("Confidence",
                      "Each day adds a growing random uncertainty to the drift "
                      "distance and costs 2% confidence, down to a 10% floor. "
                      "Sightings on land are moved to the last sea position.",
                      "#7c3aed"),
            ],
        ),

        # Observation form
        html.Div(
            style={"display": "flex", "flexWrap": "wrap", "alignItems": "flex-end",
                   "gap": "12px", "marginBottom": "10px"},
            children=[
                _field("Latitude", dcc.Input(id="lat-input", type="number",
                                             value=DEFAULT_LAT, min=-90, max=90,
                                             step="any", style=_INPUT)),
                _field("Longitude", dcc.Input(id="lon-input", type="number",
                                              value=DEFAULT_LON, min=-180, max=180,
                                              step="any", style=_INPUT)),
                _field("Jellyfish count", dcc.Input(id="count-input", type="number",
                                                    value=10, min=0,
                                                    max=MAX_JELLYFISH_COUNT,
                                                    step=1, style=_INPUT)),
                _field("Days", dcc.Input(id="days-input", type="number",
                                         value=N_DAYS, min=1, max=30, step=1,
                                         style={**_INPUT, "width": "70px"})),
                _field("Species", dcc.Dropdown(
                    id="species-input",
                    options=[{"label": s.replace("_", " ").capitalize(), "value": s}
                             for s in SPECIES_PROFILES],
                    value=DEFAULT_SPECIES, clearable=False,
                    style={"width": "190px", "fontSize": "13px"})),
                _field("OpenWeatherMap API key",
                       dcc.Input(id="api-key-input", type="password",
                                 value=OPENWEATHER_API_KEY, debounce=True,
                                 style={**_INPUT, "width": "260px"})),
                _field("Seed", dcc.Input(id="seed-input", type="number",
                                         placeholder="random", step=1,
                                         style={**_INPUT, "width": "90px"})),
                html.Button(
                    "Predict", id="run-button", n_clicks=0,
                    style={"padding": "9px 32px", "fontSize": "14px",
                           "cursor": "pointer", "background": "#1a73e8",
                           "color": "white", "border": "none",
                           "borderRadius": "6px", "fontWeight": "600",
                           "letterSpacing": "0.3px"},
                ),
            ],
        ),
        html.Div(
            id="stats-text",
            style={"fontSize": "12px", "color": "#666", "minHeight": "20px",
                   "marginBottom": "10px"},
        ),

        # Map + results
        dcc.Loading(
            type="circle",
            children=html.Div(
                style={"display": "flex", "flexWrap": "wrap", "gap": "12px"},
                children=[
                    html.Div(
                        dcc.Graph(id="map-figure", figure=_initial_map,
                                  style={"height": "460px"},
                                  config={"scrollZoom": True}),
                        style={"flex": "1.5", "minWidth": "360px",
                               "borderRadius": "8px", "overflow": "hidden"},
                    ),
                    html.Div(
                        id="results-container",
                        style={"flex": "1", "minWidth": "300px",
                               "visibility": "hidden"},
                    ),
                ],
            ),
        ),
    ],
)

if __name__ == "__main__":
    app.run(debug=True, port=8050)
