from pathlib import Path

import pytest

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from weatherloc_core.config import (
    DEFAULT_TIME_FORMAT,
    ConfigLoader,
    PluginConfig,
    mask_secrets,
    resolve_env_ref,
)
from weatherloc_core.errors import ConfigError
from weatherloc_core.templates import DEFAULT_TEMPLATE


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_missing_file_yields_defaults(tmp_path: Path):
    config = ConfigLoader.load(tmp_path / "nope.toml")
    assert config.weather_provider == "openweather"
    assert config.location_provider == "ip"
    assert config.template == DEFAULT_TEMPLATE
    assert config.time_format == DEFAULT_TIME_FORMAT
    assert config.favorite_cities == []


def test_load_values_and_favorites(tmp_path: Path):
    path = _write(
        tmp_path / "config.toml",
        "\n".join(
            [
                'weather_provider = "amap"',
                'amap_key = "abcd1234"',
                'location_provider = "manual"',
                'manual_location = "长沙,28.23,112.94"',
                "request_timeout = 2.5",
                "",
                "[[favorite_cities]]",
                'name = "北京"',
                "lat = 39.9",
                "lon = 116.4",
            ]
        ),
    )
    config = ConfigLoader.load(path)
    assert config.weather_provider == "amap"
    assert config.request_timeout == 2.5
    assert config.favorite_cities[0].name == "北京"
    assert config.favorite_cities[0].lon == 116.4


def test_unknown_keys_are_ignored(tmp_path: Path):
    path = _write(tmp_path / "config.toml", 'legacy_option = true\nweather_provider = "mock"\n')
    assert ConfigLoader.load(path).weather_provider == "mock"


def test_invalid_value_raises_config_error(tmp_path: Path):
    path = _write(tmp_path / "config.toml", 'weather_provider = "yahoo"\n')
    with pytest.raises(ConfigError) as exc:
        ConfigLoader.load(path)
    assert "weather_provider" in str(exc.value)


def test_malformed_toml_raises_config_error(tmp_path: Path):
    path = _write(tmp_path / "config.toml", "weather_provider = \n")
    with pytest.raises(ConfigError):
        ConfigLoader.load(path)


def test_env_overrides_win_over_file(tmp_path: Path, monkeypatch):
    path = _write(tmp_path / "config.toml", 'weather_provider = "amap"\n')
    monkeypatch.setenv("WEATHERLOC_WEATHER_PROVIDER", "mock")
    monkeypatch.setenv("WEATHERLOC_REQUEST_TIMEOUT", "9")
    config = ConfigLoader.load(path)
    assert config.weather_provider == "mock"
    assert config.request_timeout == 9.0


def test_config_path_from_environment(tmp_path: Path, monkeypatch):
    path = _write(tmp_path / "elsewhere.toml", 'location_provider = "mock"\n')
    monkeypatch.setenv("WEATHERLOC_CONFIG", str(path))
    assert ConfigLoader.resolve_config_path() == path
    assert ConfigLoader.load().location_provider == "mock"


def test_env_reference_is_resolved_but_not_persisted(tmp_path: Path, monkeypatch):
    path = _write(tmp_path / "config.toml", 'weather_api_key = "env:OWM_KEY"\n')
    monkeypatch.setenv("OWM_KEY", "secret-value")

    assert ConfigLoader.load(path).weather_api_key == "secret-value"

    ConfigLoader.set_value(path, "weather_provider", "mock")
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    assert data["weather_api_key"] == "env:OWM_KEY"
    assert data["weather_provider"] == "mock"


def test_missing_env_reference_raises(monkeypatch):
    monkeypatch.delenv("WEATHERLOC_TEST_MISSING", raising=False)
    with pytest.raises(ConfigError):
        resolve_env_ref("env:WEATHERLOC_TEST_MISSING")
    with pytest.raises(ConfigError):
        resolve_env_ref("env:")
    assert resolve_env_ref("plain") == "plain"
    assert resolve_env_ref(3) == 3


def test_save_and_reload_round_trip(tmp_path: Path):
    path = tmp_path / "sub" / "config.toml"
    config = PluginConfig(weather_provider="mock", template="line one\nline {{time}}\n")
    ConfigLoader.save(config, path)
    reloaded = ConfigLoader.load_raw(path)
    assert reloaded.template == "line one\nline {{time}}\n"
    assert reloaded.weather_provider == "mock"


def test_set_value_validates(tmp_path: Path):
    path = tmp_path / "config.toml"
    with pytest.raises(ConfigError):
        ConfigLoader.set_value(path, "request_timeout", "-1")
    with pytest.raises(ConfigError) as exc:
        ConfigLoader.set_value(path, "favorite_cities", "x")
    assert exc.value.suggestion
    assert not path.exists()


def test_mask_secrets():
    masked = mask_secrets({"amap_key": "abcdef123", "weather_api_key": "env:KEY", "template": "abc"})
    assert masked["amap_key"] == "abcd*****"
    assert masked["weather_api_key"] == "env:KEY"
    assert masked["template"] == "abc"
