"""
Tests for land/sea classification, the sea coordinate store, and intake.
"""

from datetime import datetime, timezone

import httpx
import pytest

from data.intake import (
    InvalidObservation, LandCoordinatesError, build_observation,
    validate_observation_input,
)
from data.landsea import SeaCoordinateStore, classify_reverse_geocode, is_over_water

NOW = datetime(2024, 6, 1, 14, 30, tzinfo=timezone.utc)

LAND = {
    "display_name": "Carrer de Mallorca, Eixample, Barcelona, Catalunya, España",
    "type": "residential", "category": "highway",
    "address": {"road": "Carrer de Mallorca", "city": "Barcelona", "country": "España"},
}


@pytest.fixture
def store(tmp_path):
    return SeaCoordinateStore(str(tmp_path / "sea.json"))


class TestClassifyReverseGeocode:
    """Tests for the water/land decision on a Nominatim payload."""

    def test_no_address_is_water(self):
        assert classify_reverse_geocode({"error": "Unable to geocode"}) is True

    def test_display_name_mentions_sea(self):
        data = {"display_name": "Balearic Sea", "address": {"country": "Spain"}}
        assert classify_reverse_geocode(data) is True

    def test_address_component_mentions_water(self):
        data = {"display_name": "Somewhere",
                "address": {"water": "Golfe du Lion", "body": "Mediterranean"}}
        assert classify_reverse_geocode(data) is True

    def test_water_place_type(self):
        data = {"display_name": "Lac", "type": "water", "address": {"state": "X"}}
        assert classify_reverse_geocode(data) is True

    def test_road_is_land(self):
        assert classify_reverse_geocode(LAND) is False

    def test_uncertain_defaults_to_water(self):
        data = {"display_name": "Catalunya", "address": {"state": "Catalunya"}}
        assert classify_reverse_geocode(data) is True


class TestIsOverWater:

    def _client(self, handler):
        return httpx.Client(transport=httpx.MockTransport(handler))

    def test_land_response(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=LAND)

        assert is_over_water(41.39, 2.16, client=self._client(handler)) is False
        assert seen[0].url.params["zoom"] == "10"
        assert "User-Agent" in seen[0].headers

    def test_server_error_counts_as_water(self):
        client = self._client(lambda r: httpx.Response(503))
        assert is_over_water(41.39, 2.16, client=client) is True

    def test_connection_error_counts_as_water(self):
        def handler(request):
            raise httpx.ConnectError("offline", request=request)
        assert is_over_water(41.39, 2.16, client=self._client(handler)) is True

    def test_own_client_is_closed(self, monkeypatch):
        real = httpx.Client
        opened = []

        def factory(**kwargs):
            client = real(transport=httpx.MockTransport(lambda r: httpx.Response(200, json=LAND)),
                          **kwargs)
            opened.append(client)
            return client

        monkeypatch.setattr(httpx, "Client", factory)
        assert is_over_water(41.39, 2.16) is False
        assert len(opened) == 1
        assert opened[0].is_closed is True

    def test_injected_client_stays_open(self):
        client = self._client(lambda r: httpx.Response(200, json=LAND))
        is_over_water(41.39, 2.16, client=client)
        assert client.is_closed is False
        client.close()


class TestSeaCoordinateStore:

    def test_missing_file(self, store):
        assert store.load() is None

    def test_save_then_load(self, store):
        store.save(41.2, 2.5)
        assert store.load() == (41.2, 2.5)

    def test_creates_directory(self, tmp_path):
        store = SeaCoordinateStore(str(tmp_path / "nested" / "dir" / "sea.json"))
        store.save(1.0, 2.0)
        assert store.load() == (1.0, 2.0)

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "sea.json"
        path.write_text("{not json")
        assert SeaCoordinateStore(str(path)).load() is None

    def test_missing_keys(self, tmp_path):
        path = tmp_path / "sea.json"
        path.write_text('{"lat": 1}')
        assert SeaCoordinateStore(str(path)).load() is None


class TestValidateObservationInput:

    def test_coerces(self):
        assert validate_observation_input("41.5", "2", 7.0) == (41.5, 2.0, 7)

    @pytest.mark.parametrize("lat,lon,count", [
        (91, 0, 1), (-90.5, 0, 1), (0, 180.1, 1), (0, -181, 1),
        (0, 0, -1), (0, 0, 10_001), (None, 0, 1), ("abc", 0, 1),
    ])
    def test_rejects(self, lat, lon, count):
        with pytest.raises(InvalidObservation):
            validate_observation_input(lat, lon, count)

    def test_bounds_inclusive(self):
        assert validate_observation_input(-90, 180, 0) == (-90.0, 180.0, 0)


class TestBuildObservation:
    """Tests for land-to-sea substitution before the model runs."""

    def test_water_point_is_kept_and_stored(self, store):
        result = build_observation(41.2, 2.5, 12, NOW, store, classifier=lambda la, lo: True)
        assert not result.substituted
        assert (result.observation.latitude, result.observation.longitude) == (41.2, 2.5)
        assert result.observation.count == 12
        assert result.observation.observed_at == NOW
        assert store.load() == (41.2, 2.5)

    def test_land_point_uses_previous_sea(self, store):
        store.save(41.2, 2.5)
        result = build_observation(41.39, 2.16, 3, NOW, store, classifier=lambda la, lo: False)
        assert result.substituted
        assert (result.observation.latitude, result.observation.longitude) == (41.2, 2.5)

    def test_land_point_without_history(self, store):
        with pytest.raises(LandCoordinatesError):
            build_observation(41.39, 2.16, 3, NOW, store, classifier=lambda la, lo: False)

    def test_invalid_input_never_reaches_classifier(self, store):
        calls = []
        with pytest.raises(InvalidObservation):
            build_observation(100, 0, 1, NOW, store,
                              classifier=lambda la, lo: calls.append(1) or True)
        assert calls == []
