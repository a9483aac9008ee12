import asyncio
from datetime import datetime, timezone

import pytest

from features.common.services import rate_limiter
from features.wind.exceptions.forecast_exceptions import ForecastFetchFailed
from features.wind.models.wind_types import HourlySample
from features.wind.services.wind_forecast_service import WindForecastService

TARGET = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _sample(time_iso, **values):
    return HourlySample.model_validate({"time": time_iso, "values": values})


class _StubForecastClient:
    def __init__(self, series_by_point=None, default=None, fail_at=None):
        self.series_by_point = series_by_point or {}
        self.default = default or []
        self.fail_at = fail_at
        self.calls = []

    async def get_hourly_forecast(self, lat, lon):
        self.calls.append((lat, lon))
        if self.fail_at is not None and len(self.calls) - 1 == self.fail_at:
            raise ForecastFetchFailed("upstream down")
        return self.series_by_point.get((lat, lon), self.default)


def _build(client, coordinates, target=TARGET, delay=0):
    service = WindForecastService(forecast_client=client, request_delay=delay)
    return asyncio.run(service.build_forecast_series(coordinates, target))


def test_end_to_end_eastbound_route():
    client = _StubForecastClient(default=[
        _sample("2024-01-01T00:00:00Z", windSpeed=10, windDirection=90),
        _sample("2024-01-01T01:00:00Z", windSpeed=10, windDirection=90),
    ])

    result = _build(client, [(10, 10), (10, 11), (10, 12)])

    assert len(result) == 3
    for point in result[:2]:
        assert point.bearing == pytest.approx(90.0, abs=0.1)
        assert point.impact == pytest.approx(10.0, abs=1e-3)
    assert result[2].bearing == 0
    assert result[2].impact == pytest.approx(0.0, abs=1e-6)
    assert [(p.lat, p.lon) for p in result] == [(10, 10), (10, 11), (10, 12)]
    assert client.calls == [(10, 10), (10, 11), (10, 12)]


def test_point_without_matching_sample_is_skipped():
    early_only = [_sample("2023-12-31T23:00:00Z", windSpeed=4, windDirection=180)]
    client = _StubForecastClient(
        series_by_point={(10, 11): early_only},
        default=[_sample("2024-01-01T03:00:00Z", windSpeed=5, windDirection=0)],
    )

    result = _build(client, [(10, 10), (10, 11), (10, 12)])

    assert [(p.lat, p.lon) for p in result] == [(10, 10), (10, 12)]
    # Bearing still points at the next coordinate, even though it was skipped
    assert result[0].bearing == pytest.approx(90.0, abs=0.1)
    assert len(client.calls) == 3


def test_first_sample_at_or_after_target_wins():
    client = _StubForecastClient(default=[
        _sample("2023-12-31T23:00:00Z", windSpeed=1, windDirection=0),
        _sample("2024-01-01T00:00:00Z", windSpeed=2, windDirection=0),
        _sample("2024-01-01T01:00:00Z", windSpeed=3, windDirection=0),
    ])

    result = _build(client, [(0, 0)])

    assert result[0].wind_speed == 2


def test_samples_are_not_resorted():
    client = _StubForecastClient(default=[
        _sample("2024-01-01T05:00:00Z", windSpeed=5, windDirection=0),
        _sample("2024-01-01T01:00:00Z", windSpeed=1, windDirection=0),
    ])

    result = _build(client, [(0, 0)])

    assert result[0].wind_speed == 5


def test_missing_wind_fields_default_to_zero():
    client = _StubForecastClient(default=[
        _sample("2024-01-01T00:00:00Z"),
    ])

    result = _build(client, [(0, 0), (1, 0)])

    assert result[0].wind_speed == 0
    assert result[0].wind_direction == 0
    assert result[0].impact == 0


def test_direction_defaults_independently_of_speed():
    client = _StubForecastClient(default=[
        _sample("2024-01-01T00:00:00Z", windSpeed=7, windDirection=None),
    ])

    result = _build(client, [(0, 0), (1, 0)])

    assert result[0].wind_speed == 7
    assert result[0].wind_direction == 0
    # Travelling north with wind direction 0
    assert result[0].impact == pytest.approx(7.0)


def test_naive_target_time_is_treated_as_utc():
    client = _StubForecastClient(default=[
        _sample("2024-01-01T00:00:00+00:00", windSpeed=3, windDirection=0),
    ])

    result = _build(client, [(0, 0)], target=datetime(2024, 1, 1))

    assert result[0].wind_speed == 3


def test_failure_on_second_point_aborts_whole_series():
    client = _StubForecastClient(
        default=[_sample("2024-01-01T00:00:00Z", windSpeed=10, windDirection=90)],
        fail_at=1,
    )

    with pytest.raises(ForecastFetchFailed):
        _build(client, [(10, 10), (10, 11), (10, 12)])

    assert len(client.calls) == 2


def test_unexpected_client_error_becomes_fetch_failed():
    class _BrokenClient:
        async def get_hourly_forecast(self, lat, lon):
            raise RuntimeError("boom")

    with pytest.raises(ForecastFetchFailed):
        _build(_BrokenClient(), [(0, 0)])


def test_empty_route_makes_no_requests():
    client = _StubForecastClient()

    assert _build(client, []) == []
    assert client.calls == []


def test_requests_are_spaced_by_delay(monkeypatch):
    sleeps = []

    async def fake_sleep(delay):
        sleeps.append(delay)

    monkeypatch.setattr(rate_limiter.asyncio, "sleep", fake_sleep)
    client = _StubForecastClient(default=[_sample("2024-01-01T00:00:00Z", windSpeed=1, windDirection=0)])

    _build(client, [(0, 0), (0, 1), (0, 2)], delay=0.1)

    assert sleeps == [0.1, 0.1]


def test_serializes_with_public_field_names():
    client = _StubForecastClient(default=[_sample("2024-01-01T00:00:00Z", windSpeed=1, windDirection=2)])

    result = _build(client, [(5, 6)])

    assert result[0].model_dump(by_alias=True) == {
        "lat": 5,
        "lon": 6,
        "windSpeed": 1,
        "windDirection": 2,
        "bearing": 0,
        "impact": pytest.approx(1 * 0.9993908270190958),
    }
