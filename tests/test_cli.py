from pathlib import Path
from unittest.mock import MagicMock, patch

try:
    import tomllib
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore

from typer.testing import CliRunner

from weatherloc_cli.cli import app

from conftest import write_config

runner = CliRunner()


def _response(status: int, payload) -> MagicMock:
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    response.json.return_value = payload
    return response


def _invoke(config: Path, *args: str):
    return runner.invoke(app, ["--config-file", str(config), *args])


def test_render_builtin(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    result = _invoke(cfg, "render", "--builtin", "simple")
    assert result.exit_code == 0, result.output
    assert "🌤 **天气**: 晴朗" in result.output
    assert "📍 **位置**: 长沙" in result.output


def test_render_template_file(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    tpl = tmp_path / "tpl.md"
    tpl.write_text("{{location.city}} {{weather.temperature}}°C", encoding="utf-8")
    result = _invoke(cfg, "render", "--template-file", str(tpl))
    assert result.exit_code == 0, result.output
    assert "长沙 25°C" in result.output


def test_render_configured_template(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml", extra='template = "[{{weather.windPower}}]"')
    result = _invoke(cfg, "render")
    assert result.exit_code == 0, result.output
    assert "[3级]" in result.output


def test_render_unknown_builtin(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    result = _invoke(cfg, "render", "--builtin", "nope")
    assert result.exit_code == 1
    assert "Template not found: nope" in result.output


def test_render_missing_api_key(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml", weather_provider="openweather")
    result = _invoke(cfg, "render")
    assert result.exit_code == 1
    assert "API key" in result.output


def test_insert_append_and_replace(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    doc = tmp_path / "daily.md"
    doc.write_text("# Day\n\nweather here ^wx\n", encoding="utf-8")

    result = _invoke(cfg, "insert", str(doc), "--builtin", "simple", "--block", "wx", "--replace")
    assert result.exit_code == 0, result.output
    assert "replace" in result.output
    text = doc.read_text(encoding="utf-8")
    assert text.startswith("# Day\n\n🌤 **天气**: 晴朗\n")
    assert text.endswith("📍 **位置**: 长沙 ^wx\n")

    result = _invoke(cfg, "insert", str(doc), "--builtin", "location")
    assert result.exit_code == 0, result.output
    assert doc.read_text(encoding="utf-8").endswith("\n\n**位置**: 长沙 | **区域**: 湖南省 | **区县**: 岳麓区 | **详细地址**: 湖南省长沙市岳麓区 | **国家**: 中国\n")


def test_insert_replace_requires_block(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    result = _invoke(cfg, "insert", str(tmp_path / "doc.md"), "--replace")
    assert result.exit_code == 2


def test_insert_unknown_block(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    doc = tmp_path / "doc.md"
    doc.write_text("text\n", encoding="utf-8")
    result = _invoke(cfg, "insert", str(doc), "--block", "missing")
    assert result.exit_code == 1
    assert "^missing" in result.output


def test_favorites_lifecycle(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")

    result = _invoke(cfg, "favorites", "list")
    assert "No favorite cities saved." in result.output

    result = _invoke(cfg, "favorites", "add", "北京", "39.9", "116.4")
    assert result.exit_code == 0, result.output
    data = tomllib.loads(cfg.read_text(encoding="utf-8"))
    assert data["favorite_cities"] == [{"name": "北京", "lat": 39.9, "lon": 116.4}]
    assert data["weather_provider"] == "mock"

    result = _invoke(cfg, "render", "--city", "北京", "--builtin", "simple")
    assert result.exit_code == 0, result.output
    assert "📍 **位置**: 北京" in result.output

    result = _invoke(cfg, "favorites", "list")
    assert "北京" in result.output

    result = _invoke(cfg, "favorites", "remove", "北京")
    assert result.exit_code == 0, result.output
    assert tomllib.loads(cfg.read_text(encoding="utf-8"))["favorite_cities"] == []

    result = _invoke(cfg, "favorites", "remove", "北京")
    assert result.exit_code == 1


def test_favorites_add_looks_up_coordinates(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    payload = [{"lat": "30.2741", "lon": "120.1551"}]
    with patch("weatherloc_core.http.requests.get", return_value=_response(200, payload)):
        result = _invoke(cfg, "favorites", "add", "杭州")
    assert result.exit_code == 0, result.output
    assert "30.2741" in result.output
    data = tomllib.loads(cfg.read_text(encoding="utf-8"))
    assert data["favorite_cities"] == [{"name": "杭州", "lat": 30.2741, "lon": 120.1551}]


def test_favorites_add_lookup_failure(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    with patch("weatherloc_core.http.requests.get", return_value=_response(200, [])):
        result = _invoke(cfg, "favorites", "add", "Atlantis")
    assert result.exit_code == 1
    assert "City not found" in result.output
    assert "favorite_cities" not in cfg.read_text(encoding="utf-8")


def test_favorites_add_needs_both_coordinates(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    result = _invoke(cfg, "favorites", "add", "x", "30.1")
    assert result.exit_code == 2


def test_favorites_rejects_bad_coordinates(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    result = _invoke(cfg, "favorites", "add", "x", "95", "10")
    assert result.exit_code == 1


def test_config_init_set_show(tmp_path: Path):
    cfg = tmp_path / "cfg" / "config.toml"

    result = _invoke(cfg, "config", "init")
    assert result.exit_code == 0, result.output
    assert cfg.exists()

    result = _invoke(cfg, "config", "init")
    assert result.exit_code == 1
    assert "--force" in result.output

    result = _invoke(cfg, "config", "set", "amap_key", "abcdef123456")
    assert result.exit_code == 0, result.output

    result = _invoke(cfg, "config", "show")
    assert 'amap_key = "abcd********"' in result.output

    result = _invoke(cfg, "config", "show", "--reveal")
    assert 'amap_key = "abcdef123456"' in result.output

    result = _invoke(cfg, "config", "set", "weather_provider", "yahoo")
    assert result.exit_code == 1

    result = _invoke(cfg, "config", "path")
    assert str(cfg.resolve()) in result.output


def test_templates_commands(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    result = _invoke(cfg, "templates", "list")
    assert result.exit_code == 0, result.output
    assert "table" in result.output

    result = _invoke(cfg, "templates", "show", "table")
    assert "| 项目 | 数值 |" in result.output

    result = _invoke(cfg, "templates", "help")
    assert "{{weather.description}}" in result.output


def test_weather_and_location_tables(tmp_path: Path):
    cfg = write_config(tmp_path / "config.toml")
    result = _invoke(cfg, "weather")
    assert result.exit_code == 0, result.output
    assert "windPower" in result.output

    result = _invoke(cfg, "location")
    assert result.exit_code == 0, result.output
    assert "岳麓区" in result.output
