import logging

import pytest
import yaml

from geopoly_filter import (
    FieldDataCache,
    FilterConfig,
    GeoPolygonFilter,
    InvalidFieldError,
    InvalidPolygonError,
)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "filter.yaml"
    path.write_text(
        yaml.safe_dump({
            "field_name": "location",
            "log_level": "debug",
            "points": [[0.0, 0.0], [0.0, 10.0], [10.0, 10.0], [10.0, 0.0]],
        })
    )
    return path


def test_from_yaml(config_file):
    config = FilterConfig.from_yaml(config_file)
    assert config.field_name == "location"
    assert config.log_level == "DEBUG"
    assert config.logging_level == logging.DEBUG
    assert config.points == ((0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0))


def test_build_filter(config_file, reader):
    cache = FieldDataCache()
    geo_filter = FilterConfig.from_yaml(config_file).build_filter(cache)
    assert isinstance(geo_filter, GeoPolygonFilter)
    assert geo_filter.field_data_cache is cache
    assert list(geo_filter.get_match_set(reader)) == [0, 3]


def test_defaults():
    config = FilterConfig.from_dict({
        "field_name": "location",
        "points": [[0, 0], [0, 4], [4, 0]],
    })
    assert config.log_level == "INFO"


def test_missing_keys():
    with pytest.raises(ValueError, match="points"):
        FilterConfig.from_dict({"field_name": "location"})


def test_not_a_mapping():
    with pytest.raises(ValueError, match="mapping"):
        FilterConfig.from_dict([1, 2, 3])


def test_empty_field_name():
    with pytest.raises(InvalidFieldError):
        FilterConfig(field_name="", points=((0, 0), (0, 4), (4, 0)))


@pytest.mark.parametrize("field_name", [42, None, ["location"]])
def test_non_string_field_name(field_name):
    with pytest.raises(InvalidFieldError):
        FilterConfig(field_name=field_name, points=((0, 0), (0, 4), (4, 0)))


@pytest.mark.parametrize("points", [None, [[0, 0], [0, 4], 7], 3.5])
def test_from_dict_bad_points(points):
    with pytest.raises(InvalidPolygonError):
        FilterConfig.from_dict({"field_name": "location", "points": points})


@pytest.mark.parametrize(
    "points",
    [
        ((0, 0), (0, 4)),
        ((0, 0), (0, 4), (4,)),
        ((0, 0), (0, 4), ("a", "b")),
        ((0, 0), (0, 4), 7),
        None,
        42,
    ],
)
def test_bad_points(points):
    with pytest.raises(InvalidPolygonError):
        FilterConfig(field_name="location", points=points)


def test_bad_log_level():
    with pytest.raises(ValueError, match="log_level"):
        FilterConfig(field_name="location", points=((0, 0), (0, 4), (4, 0)), log_level="LOUD")


def test_config_is_frozen():
    config = FilterConfig(field_name="location", points=((0, 0), (0, 4), (4, 0)))
    with pytest.raises(AttributeError):
        config.field_name = "other"


def test_apply_log_level():
    config = FilterConfig(
        field_name="location", points=((0, 0), (0, 4), (4, 0)), log_level="WARNING"
    )
    names = ["geopoly_filter"] + [
        name for name in logging.root.manager.loggerDict if name.startswith("geopoly_filter.")
    ]
    previous = {name: logging.getLogger(name).level for name in names}
    try:
        config.apply_log_level()
        assert logging.getLogger("geopoly_filter.match_set").level == logging.WARNING
        assert logging.getLogger("geopoly_filter.filter").level == logging.WARNING
    finally:
        for name, level in previous.items():
            logging.getLogger(name).setLevel(level)
