import pytest
import requests

from backend.config.constants import AWC_API_BASE_URL
from backend.data.weather import (
    AviationWeatherCenterApi,
    MetarReport,
    Station,
    WeatherError,
    format_wind,
    parse_altimeter_from_metar,
    parse_wind_from_metar,
)

from helpers import FakeResponse, FakeSession

METAR_URL = f"{AWC_API_BASE_URL}/metar"
STATION_URL = f"{AWC_API_BASE_URL}/stationinfo"

SFO_METAR = {
    'icaoId': 'KSFO',
    'rawOb': 'METAR KSFO 011856Z 29014G22KT 10SM FEW012 17/10 A3002',
    'obsTime': 1714589760,
    'wdir': 290,
    'wspd': 14,
    'wgst': 22,
    'altim': 1016.6,
    'name': 'San Francisco Intl, CA, US',
}


class TestFormatWind:
    def test_calm(self):
        assert format_wind(0, 0) == "00000KT"
        assert format_wind("VRB", 0) == "00000KT"

    def test_direction_is_zero_padded(self):
        assert format_wind(50, 7) == "05007KT"

    def test_variable(self):
        assert format_wind("VRB", 3) == "VRB03KT"

    def test_gust_only_when_above_speed(self):
        assert format_wind(270, 15, 25) == "27015G25KT"
        assert format_wind(270, 15, 15) == "27015KT"
        assert format_wind(270, 15, None) == "27015KT"


class TestParseFromRaw:
    @pytest.mark.parametrize("raw, expected", [
        ("KSFO 011856Z 29014G22KT 10SM A3002", "29014G22KT"),
        ("KSFO 011856Z 00000KT 10SM A3002", "00000KT"),
        ("KSFO 011856Z VRB02KT 10SM A3002", "VRB02KT"),
        ("UUEE 011830Z 18005MPS CAVOK Q1012", "18010KT"),
        ("KSFO 011856Z AUTO 10SM A3002", ""),
        ("", ""),
    ])
    def test_wind(self, raw, expected):
        assert parse_wind_from_metar(raw) == expected

    def test_altimeter(self):
        assert parse_altimeter_from_metar("KSFO 011856Z 29014KT A3002 RMK AO2") == "A3002"
        assert parse_altimeter_from_metar("EGLL 011850Z 24012KT Q1009 NOSIG") == "Q1009"
        assert parse_altimeter_from_metar("KSFO 011856Z 29014KT") is None


class TestMetarReport:
    def test_altimeter_from_decoded_hpa(self):
        report = MetarReport.from_api(SFO_METAR)
        assert report.altimeter_hpa() == 1016.6
        assert report.altimeter_in_hg() == 30.02
        assert report.wind_string() == "29014G22KT"

    def test_altimeter_from_raw_q_group(self):
        report = MetarReport(icao_id="EGLL", raw_ob="EGLL 011850Z 24012KT Q1009")
        assert report.altimeter_hpa() == 1009.0
        assert report.altimeter_in_hg() == 29.8

    def test_altimeter_from_raw_a_group(self):
        report = MetarReport(icao_id="KSFO", raw_ob="KSFO 011856Z 29014KT A2992")
        assert report.altimeter_in_hg() == 29.92

    def test_no_altimeter(self):
        report = MetarReport(icao_id="KSFO", raw_ob="KSFO 011856Z 29014KT")
        assert report.altimeter_hpa() is None
        assert report.altimeter_in_hg() is None

    def test_wind_falls_back_to_raw(self):
        report = MetarReport(icao_id="KSFO", raw_ob="KSFO 011856Z 31008KT A2992")
        assert report.wind_string() == "31008KT"


def test_station_display_id():
    assert Station.from_api({'icaoId': 'KSFO', 'faaId': 'SFO'}).display_id == "SFO"
    assert Station.from_api({'icaoId': 'EGLL', 'faaId': None}).display_id == "EGLL"


class TestAviationWeatherCenterApi:
    def test_fetch_metar_is_cached(self):
        session = FakeSession({METAR_URL: FakeResponse([SFO_METAR], content=b"[...]")})
        api = AviationWeatherCenterApi(session=session)

        first = api.fetch_metar("ksfo")
        second = api.fetch_metar("KSFO")
        assert first is second
        assert first.raw_ob == SFO_METAR['rawOb']
        assert len(session.calls) == 1
        assert session.calls[0]['params'] == {'ids': 'KSFO', 'format': 'json'}

    def test_clear_caches(self):
        session = FakeSession({METAR_URL: FakeResponse([SFO_METAR], content=b"[...]")})
        api = AviationWeatherCenterApi(session=session)
        api.fetch_metar("KSFO")
        api.clear_caches()
        api.fetch_metar("KSFO")
        assert len(session.calls) == 2

    def test_no_metar(self):
        session = FakeSession({METAR_URL: FakeResponse(None, status_code=204, content=b"")})
        api = AviationWeatherCenterApi(session=session)
        with pytest.raises(WeatherError, match="No METAR found for KZZZ"):
            api.fetch_metar("kzzz")

    def test_lookup_station(self):
        session = FakeSession({STATION_URL: FakeResponse(
            [{'icaoId': 'KOAK', 'iataId': 'OAK', 'faaId': 'OAK', 'site': 'Oakland Intl'}],
            content=b"[...]")})
        station = AviationWeatherCenterApi(session=session).lookup_station("OAK")
        assert station.icao_id == "KOAK"
        assert station.site == "Oakland Intl"

    def test_no_station(self):
        session = FakeSession({STATION_URL: FakeResponse([], content=b"[]")})
        with pytest.raises(WeatherError, match="No station found for ZZZ"):
            AviationWeatherCenterApi(session=session).lookup_station("ZZZ")

    @pytest.mark.parametrize("response", [
        requests.Timeout("slow"),
        requests.ConnectionError("down"),
        FakeResponse(None, status_code=500),
        FakeResponse(ValueError("bad json"), content=b"<html>"),
        FakeResponse({'error': 'unexpected'}, content=b"{...}"),
    ])
    def test_request_failures(self, response):
        api = AviationWeatherCenterApi(session=FakeSession({METAR_URL: response}))
        with pytest.raises(WeatherError):
            api.fetch_metar("KSFO")
