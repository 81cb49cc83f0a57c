from __future__ import annotations

import textwrap

import pytest

from timetravel.config import ACIS_BASE_URL, API_PORT, AppConfig, default_config, load_config


VALID_YAML = """
upstream:
  base_url: "http://example.test/board"
  timeout_seconds: 5

api:
  host: "0.0.0.0"
  port: 8000

logging:
  level: "DEBUG"
"""


def _write_yaml(tmp_path, contents: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(textwrap.dedent(contents))
    return str(path)


def test_default_config() -> None:
    config = default_config()

    assert config.upstream.base_url == ACIS_BASE_URL
    assert config.upstream.stop_param == "stopRef"
    assert config.upstream.timeout_seconds is None
    assert config.api.host == "localhost"
    assert config.api.port == API_PORT == 7654
    assert config.naptan.length == 8


def test_load_config_valid(tmp_path) -> None:
    path = _write_yaml(tmp_path, VALID_YAML)

    config = load_config(path)

    assert isinstance(config, AppConfig)
    assert config.upstream.base_url == "http://example.test/board"
    assert config.upstream.timeout_seconds == 5
    assert config.upstream.stop_param == "stopRef"
    assert config.api.port == 8000
    assert config.log.level == "DEBUG"


def test_load_config_partial_keeps_defaults(tmp_path) -> None:
    path = _write_yaml(tmp_path, "api:\n  port: 9000\n")

    config = load_config(path)

    assert config.api.port == 9000
    assert config.api.host == "localhost"
    assert config.upstream == default_config().upstream


def test_load_config_empty_file(tmp_path) -> None:
    path = _write_yaml(tmp_path, "")

    assert load_config(path) == default_config()


def test_load_config_missing_file(tmp_path) -> None:
    missing_path = tmp_path / "does_not_exist.yaml"

    with pytest.raises(ValueError):
        load_config(str(missing_path))


def test_load_config_unknown_key(tmp_path) -> None:
    path = _write_yaml(tmp_path, "api:\n  poll_interval: 10\n")

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_unknown_section(tmp_path) -> None:
    path = _write_yaml(tmp_path, "display:\n  width: 10\n")

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_non_mapping(tmp_path) -> None:
    path = _write_yaml(tmp_path, "- a\n- b\n")

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_section_not_mapping(tmp_path) -> None:
    path = _write_yaml(tmp_path, "api: 7654\n")

    with pytest.raises(ValueError):
        load_config(path)


@pytest.mark.parametrize("level", ["LOUD", "10", "'[]'"])
def test_load_config_unknown_logging_level(tmp_path, level: str) -> None:
    path = _write_yaml(tmp_path, f"logging:\n  level: {level}\n")

    with pytest.raises(ValueError):
        load_config(path)


def test_load_config_lowercase_logging_level(tmp_path) -> None:
    path = _write_yaml(tmp_path, "logging:\n  level: debug\n")

    assert load_config(path).log.level == "debug"


@pytest.mark.parametrize("timeout", ['"soon"', "true", "[1, 2]"])
def test_load_config_invalid_timeout(tmp_path, timeout: str) -> None:
    path = _write_yaml(tmp_path, f"upstream:\n  timeout_seconds: {timeout}\n")

    with pytest.raises(ValueError):
        load_config(path)
