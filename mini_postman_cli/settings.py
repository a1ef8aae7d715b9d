import copy
import json
import logging
from pathlib import Path
from typing import Optional

from .errors import SettingsError

SETTINGS_FILENAME = ".mini_postman_cli.json"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

DEFAULT_SETTINGS = {
    "color": True,
    "log_level": "WARNING",
    "log_file": None,
    "defaults": {
        "follow_redirects": True,
        "timeout": 0,
        "verbose": False,
    },
    "limits": {
        "max_headers": 50,
        "max_header_len": 512,
        "max_url_len": 2048,
        "max_body_len": 16384,
    },
}


# smallest accepted value for each numeric entry
MINIMUMS = {"defaults": 0, "limits": 1}


def settings_path() -> Path:
    return Path.home() / SETTINGS_FILENAME


def deep_merge(a: dict, b: dict) -> dict:
    out = copy.deepcopy(a)
    for k, v in b.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _valid(value, default, minimum: int) -> bool:
    if isinstance(default, bool):
        return isinstance(value, bool)
    return isinstance(value, int) and not isinstance(value, bool) and value >= minimum


def validate_settings(settings: dict) -> dict:
    """Replace every malformed entry with its built-in default, in place."""
    if not isinstance(settings.get("color"), bool):
        logging.warning("Invalid setting color=%r; using %r", settings.get("color"), DEFAULT_SETTINGS["color"])
        settings["color"] = DEFAULT_SETTINGS["color"]
    if settings.get("log_file") is not None and not isinstance(settings["log_file"], str):
        logging.warning("Invalid setting log_file=%r; logging to stderr", settings["log_file"])
        settings["log_file"] = None
    for section, minimum in MINIMUMS.items():
        if not isinstance(settings.get(section), dict):
            logging.warning("Invalid settings section %s=%r; using defaults", section, settings.get(section))
            settings[section] = copy.deepcopy(DEFAULT_SETTINGS[section])
            continue
        for key, default in DEFAULT_SETTINGS[section].items():
            value = settings[section].get(key)
            if not _valid(value, default, minimum):
                logging.warning("Invalid setting %s.%s=%r; using %r", section, key, value, default)
                settings[section][key] = default
    return settings


def load_settings(path: Optional[Path] = None) -> dict:
    p = Path(path) if path else settings_path()
    if not p.exists():
        return copy.deepcopy(DEFAULT_SETTINGS)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"expected a JSON object, got {type(data).__name__}")
    except (OSError, ValueError):
        logging.exception("Failed to load settings from %s; using defaults", p)
        return copy.deepcopy(DEFAULT_SETTINGS)
    return validate_settings(deep_merge(DEFAULT_SETTINGS, data))


def save_settings(settings: dict, path: Optional[Path] = None) -> Path:
    p = Path(path) if path else settings_path()
    try:
        p.write_text(json.dumps(settings, indent=2), encoding="utf-8")
    except OSError as e:
        logging.exception("Failed to save settings")
        raise SettingsError(f"Failed to save settings to {p}: {e}") from e
    return p


def setup_logging(settings: dict) -> None:
    level = logging.getLevelName(str(settings.get("log_level") or "WARNING").upper())
    if not isinstance(level, int):
        level = logging.WARNING
    kwargs = {"level": level, "format": LOG_FORMAT}
    if settings.get("log_file"):
        kwargs["filename"] = settings["log_file"]
        kwargs["encoding"] = "utf-8"
    logging.basicConfig(force=True, **kwargs)
    # keep urllib3's connection chatter out of the interactive screen
    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))
