import pytest
from pydantic import ValidationError

from weatherloc_core.config import PluginConfig
from weatherloc_core.errors import FavoriteLimitError, WeatherLocError
from weatherloc_core.models import FavoriteCity
from weatherloc_ops.favorites import (
    MAX_FAVORITE_CITIES,
    add_favorite,
    find_favorite,
    remove_favorite,
)


def _city(name: str, lat: float = 30.0, lon: float = 120.0) -> FavoriteCity:
    return FavoriteCity(name=name, lat=lat, lon=lon)


def test_add_and_find():
    config = add_favorite(PluginConfig(), _city("Hangzhou"))
    assert find_favorite(config, "  hangzhou ").name == "Hangzhou"
    assert find_favorite(config, "Suzhou") is None


def test_add_does_not_mutate_original():
    original = PluginConfig()
    add_favorite(original, _city("Hangzhou"))
    assert original.favorite_cities == []


def test_re_adding_replaces_coordinates():
    config = add_favorite(PluginConfig(), _city("Hangzhou", 30.0, 120.0))
    config = add_favorite(config, _city("HANGZHOU", 30.3, 120.2))
    assert len(config.favorite_cities) == 1
    assert config.favorite_cities[0].lat == 30.3


def test_limit():
    config = PluginConfig()
    for i in range(MAX_FAVORITE_CITIES):
        config = add_favorite(config, _city(f"city{i}"))
    with pytest.raises(FavoriteLimitError):
        add_favorite(config, _city("one-too-many"))
    # Replacing an existing entry is still allowed when full.
    config = add_favorite(config, _city("city0", 10.0, 10.0))
    assert config.favorite_cities[0].lat == 10.0


def test_remove():
    config = add_favorite(PluginConfig(), _city("Hangzhou"))
    config = remove_favorite(config, "hangzhou")
    assert config.favorite_cities == []
    with pytest.raises(WeatherLocError):
        remove_favorite(config, "hangzhou")


@pytest.mark.parametrize("lat,lon", [(91, 0), (0, 181)])
def test_coordinates_are_validated(lat, lon):
    with pytest.raises(ValidationError):
        FavoriteCity(name="x", lat=lat, lon=lon)
