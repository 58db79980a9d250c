from unittest.mock import MagicMock, patch

import pytest
import requests

from weatherloc_core.config import PluginConfig
from weatherloc_core.errors import ConfigError, WeatherError
from weatherloc_core.weather import (
    MockWeatherProvider,
    parse_wind_speed,
    resolve_weather_provider,
    translate_description,
    wind_direction,
    wind_power,
)
from weatherloc_core.weather.amap import AmapWeatherProvider
from weatherloc_core.weather.openweather import OpenWeatherProvider

GET = "weatherloc_core.http.requests.get"


def _response(status: int, payload) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    response.json.return_value = payload
    return response


class TestUnits:
    @pytest.mark.parametrize(
        "deg,expected",
        [(0, "北风"), (22.5, "东北风"), (90, "东风"), (180, "南风"), (350, "北风"), (315, "西北风")],
    )
    def test_wind_direction(self, deg, expected):
        assert wind_direction(deg) == expected

    @pytest.mark.parametrize(
        "speed,expected",
        [(0.1, "无风"), (0.3, "1级"), (4.0, "3级"), (17.1, "7级"), (40, "12级")],
    )
    def test_wind_power(self, speed, expected):
        assert wind_power(speed) == expected

    @pytest.mark.parametrize(
        "power,expected",
        [("≤3", 2.0), ("5-6", 5.5), ("4", 7), ("0", 0.0), ("12", 24.0), ("微风", 3.0)],
    )
    def test_parse_wind_speed(self, power, expected):
        assert parse_wind_speed(power) == expected

    def test_translate_description(self):
        assert translate_description("Clear Sky") == "晴朗"
        assert translate_description("冰雹") == "冰雹"


class TestOpenWeather:
    PAYLOAD = {
        "weather": [{"description": "clear sky", "icon": "01d"}],
        "main": {
            "temp": 24.6,
            "feels_like": 25.2,
            "temp_min": 20.1,
            "temp_max": 28.7,
            "humidity": 55,
            "pressure": 1012,
        },
        "wind": {"speed": 4.0, "deg": 90},
        "visibility": 8000,
        "sys": {},
    }

    def test_parses_current_weather(self):
        with patch(GET, return_value=_response(200, self.PAYLOAD)) as get:
            reading = OpenWeatherProvider("key").get_weather(28.23, 112.94)

        params = get.call_args.kwargs["params"]
        assert params["appid"] == "key"
        assert params["units"] == "metric"
        assert reading.description == "晴朗"
        assert reading.temperature == 25
        assert reading.feels_like == 25
        assert reading.temp_min == 20
        assert reading.temp_max == 29
        assert reading.visibility == 8.0
        assert reading.wind_direction == "东风"
        assert reading.wind_power == "3级"
        assert "sunrise" not in reading.to_context()

    def test_invalid_key(self):
        with patch(GET, return_value=_response(401, {"message": "Invalid API key"})):
            with pytest.raises(WeatherError) as exc:
                OpenWeatherProvider("bad").get_weather(1, 1)
        assert exc.value.status_code == 401
        assert exc.value.suggestion
        assert str(exc.value).startswith("[openweather] ")

    def test_timeout(self):
        with patch(GET, side_effect=requests.Timeout("slow")):
            with pytest.raises(WeatherError) as exc:
                OpenWeatherProvider("key", timeout=1.0).get_weather(1, 1)
        assert "timed out" in str(exc.value)

    def test_malformed_payload(self):
        with patch(GET, return_value=_response(200, {"main": {}})):
            with pytest.raises(WeatherError):
                OpenWeatherProvider("key").get_weather(1, 1)


class TestAmapWeather:
    REGEO = {"status": "1", "regeocode": {"addressComponent": {"adcode": "430104"}}}
    FORECAST = {
        "status": "1",
        "forecasts": [
            {
                "casts": [
                    {
                        "dayweather": "多云",
                        "daytemp": "27",
                        "nighttemp": "19",
                        "daywind": "北",
                        "daypower": "≤3",
                    }
                ]
            }
        ],
    }

    def test_forecast_and_adcode_cache(self):
        responses = [
            _response(200, self.REGEO),
            _response(200, self.FORECAST),
            _response(200, self.FORECAST),
        ]
        with patch(GET, side_effect=responses) as get:
            provider = AmapWeatherProvider("key")
            reading = provider.get_weather(28.231, 112.941)
            provider.get_weather(28.229, 112.939)

        assert get.call_count == 3
        assert get.call_args_list[0].kwargs["params"]["location"] == "112.941,28.231"
        assert get.call_args_list[1].kwargs["params"]["city"] == "430104"
        assert reading.description == "多云"
        assert reading.temperature == 27
        assert reading.temp_min == 19
        assert reading.temp_max == 27
        assert reading.wind_speed == 2.0
        assert reading.wind_power == "≤3级"
        assert reading.humidity == 60

    def test_regeo_failure(self):
        with patch(GET, return_value=_response(200, {"status": "0", "info": "INVALID_USER_KEY"})):
            with pytest.raises(WeatherError):
                AmapWeatherProvider("key").get_weather(28.2, 112.9)

    def test_empty_forecast_uses_defaults(self):
        reading = AmapWeatherProvider._from_cast(None)
        assert reading.description == "晴朗"
        assert reading.wind_power == "3级"
        assert reading.wind_direction == "东南风"


class TestFactory:
    def test_mock(self):
        assert isinstance(resolve_weather_provider(PluginConfig(weather_provider="mock")), MockWeatherProvider)

    def test_openweather_requires_key(self):
        with pytest.raises(ConfigError) as exc:
            resolve_weather_provider(PluginConfig(weather_provider="openweather"))
        assert exc.value.suggestion

    def test_amap_requires_key(self):
        with pytest.raises(ConfigError):
            resolve_weather_provider(PluginConfig(weather_provider="amap"))

    def test_configured_providers(self):
        config = PluginConfig(weather_provider="amap", amap_key="k", request_timeout=2)
        assert isinstance(resolve_weather_provider(config), AmapWeatherProvider)
        config = PluginConfig(weather_provider="openweather", weather_api_key="k")
        assert isinstance(resolve_weather_provider(config), OpenWeatherProvider)

    def test_mock_returns_independent_copies(self):
        provider = MockWeatherProvider()
        first = provider.get_weather(0, 0)
        first.temperature = -5
        assert provider.get_weather(0, 0).temperature == 25
        assert provider.calls == 2
