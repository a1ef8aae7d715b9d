import json
import logging

import pytest

from mini_postman_cli.errors import SettingsError
from mini_postman_cli.settings import (
    DEFAULT_SETTINGS,
    deep_merge,
    load_settings,
    save_settings,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for h in root.handlers:
        if h not in handlers:
            h.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_deep_merge_keeps_unspecified_keys():
    a = {"x": 1, "nested": {"a": 1, "b": 2}}
    out = deep_merge(a, {"nested": {"b": 3}, "y": 4})
    assert out == {"x": 1, "y": 4, "nested": {"a": 1, "b": 3}}
    assert a == {"x": 1, "nested": {"a": 1, "b": 2}}


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(tmp_path / "missing.json")
    assert settings == DEFAULT_SETTINGS
    assert settings is not DEFAULT_SETTINGS


def test_partial_file_is_merged(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"color": False, "limits": {"max_headers": 3}}), encoding="utf-8")
    settings = load_settings(path)
    assert settings["color"] is False
    assert settings["limits"]["max_headers"] == 3
    assert settings["limits"]["max_body_len"] == DEFAULT_SETTINGS["limits"]["max_body_len"]
    assert settings["defaults"] == DEFAULT_SETTINGS["defaults"]


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_invalid_file_falls_back_to_defaults(tmp_path, caplog, content):
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")
    with caplog.at_level(logging.ERROR):
        settings = load_settings(path)
    assert settings == DEFAULT_SETTINGS
    assert "Failed to load settings" in caplog.text


@pytest.mark.parametrize("content,section,key", [
    ({"defaults": {"timeout": -5}}, "defaults", "timeout"),
    ({"defaults": {"timeout": "10"}}, "defaults", "timeout"),
    ({"defaults": {"verbose": "yes"}}, "defaults", "verbose"),
    ({"limits": {"max_url_len": 0}}, "limits", "max_url_len"),
    ({"limits": {"max_headers": True}}, "limits", "max_headers"),
])
def test_invalid_values_replaced_by_defaults(tmp_path, caplog, content, section, key):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(content), encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        settings = load_settings(path)
    assert settings[section][key] == DEFAULT_SETTINGS[section][key]
    assert f"Invalid setting {section}.{key}" in caplog.text


@pytest.mark.parametrize("value", [None, [], "big"])
def test_invalid_section_replaced_by_defaults(tmp_path, caplog, value):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"limits": value, "defaults": {"timeout": 5}}), encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        settings = load_settings(path)
    assert settings["limits"] == DEFAULT_SETTINGS["limits"]
    assert settings["defaults"]["timeout"] == 5
    assert "Invalid settings section limits" in caplog.text


def test_invalid_top_level_values_replaced(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"color": "no", "log_file": 5}), encoding="utf-8")
    settings = load_settings(path)
    assert settings["color"] is True
    assert settings["log_file"] is None


def test_save_then_load(tmp_path):
    path = tmp_path / "settings.json"
    settings = deep_merge(DEFAULT_SETTINGS, {"log_level": "DEBUG"})
    assert save_settings(settings, path) == path
    assert load_settings(path)["log_level"] == "DEBUG"


def test_save_failure_raises_settings_error(tmp_path):
    with pytest.raises(SettingsError):
        save_settings(DEFAULT_SETTINGS, tmp_path)


def test_setup_logging_to_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "cli.log"
    setup_logging({"log_level": "info", "log_file": str(log_file)})
    logging.info("hello from the test")
    for h in logging.getLogger().handlers:
        h.flush()
    text = log_file.read_text(encoding="utf-8")
    assert "| INFO | hello from the test" in text


def test_setup_logging_unknown_level_defaults_to_warning(restore_root_logger):
    setup_logging({"log_level": "chatty"})
    assert logging.getLogger().level == logging.WARNING
