# config/loader.py
"""
File: loader.py
Description:
  Reads config/config.json into the controller settings and the entry
  registry. Twilio credentials from the environment (.env) override the
  ones in the file. Missing timing values fall back to the defaults in
  constants.py.
"""

import json
import logging
from dataclasses import dataclass, field

from access.entry import Entry
from access.registry import EntryRegistry
from config.constants import (
    DAYS,
    TWILIO_ENV_KEYS,
    KEY_TIMEOUT_MSEC_DEFAULT,
    TESTMODE_TIMEOUT_MSEC_DEFAULT,
    RELAY_DELAY_MSEC_DEFAULT,
    CLOSE_HELPER_SECONDS_DEFAULT,
    CLOSE_HELPER_KEY_DEFAULT,
    TEMP_CODE_TIMEOUT_SECONDS_DEFAULT,
    TEMP_CODE_TTL_MINUTES_DEFAULT,
    TEMP_CODE_PURGE_MINUTES_DEFAULT,
)

logger = logging.getLogger("config")


class ConfigError(Exception):
    pass


@dataclass
class Settings:
    rows: list
    cols: list
    relay_pin: int
    sensor_pin: int
    timeout_msec: int = KEY_TIMEOUT_MSEC_DEFAULT
    testmode_timeout_msec: int = TESTMODE_TIMEOUT_MSEC_DEFAULT
    relay_delay_msec: int = RELAY_DELAY_MSEC_DEFAULT
    close_helper_seconds: int = CLOSE_HELPER_SECONDS_DEFAULT
    close_helper_key: str = CLOSE_HELPER_KEY_DEFAULT
    temp_code_timeout_seconds: int = TEMP_CODE_TIMEOUT_SECONDS_DEFAULT
    temp_code_ttl_minutes: int = TEMP_CODE_TTL_MINUTES_DEFAULT
    temp_code_purge_minutes: int = TEMP_CODE_PURGE_MINUTES_DEFAULT
    alerts: dict = field(default_factory=dict)
    twilio: dict = field(default_factory=dict)


def load_config(path):
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"{path} is not valid JSON: {e}") from e

    return parse_config(data)


def parse_config(data):
    keypad = _require(data, "keypad")
    settings = Settings(
        rows=_pins(_require(keypad, "rows", "keypad.rows"), "keypad.rows"),
        cols=_pins(_require(keypad, "cols", "keypad.cols"), "keypad.cols"),
        relay_pin=_int(_require(data, "relay_pin"), "relay_pin"),
        sensor_pin=_int(_require(data, "sensor_pin"), "sensor_pin"),
        timeout_msec=_int(data.get("timeout_msec") or KEY_TIMEOUT_MSEC_DEFAULT, "timeout_msec"),
        testmode_timeout_msec=_int(
            data.get("testmode_timeout_msec") or TESTMODE_TIMEOUT_MSEC_DEFAULT, "testmode_timeout_msec"
        ),
        relay_delay_msec=_int(data.get("relay_delay_msec") or RELAY_DELAY_MSEC_DEFAULT, "relay_delay_msec"),
        # 0 means "use the default" for the close helper window
        close_helper_seconds=_int(
            data.get("close_helper_seconds") or CLOSE_HELPER_SECONDS_DEFAULT, "close_helper_seconds"
        ),
        close_helper_key=str(data.get("close_helper_key") or CLOSE_HELPER_KEY_DEFAULT),
        temp_code_timeout_seconds=_int(
            _or_default(data, "temp_code_timeout_seconds", TEMP_CODE_TIMEOUT_SECONDS_DEFAULT), "temp_code_timeout_seconds"
        ),
        temp_code_ttl_minutes=_int(
            _or_default(data, "temp_code_ttl_minutes", TEMP_CODE_TTL_MINUTES_DEFAULT), "temp_code_ttl_minutes"
        ),
        temp_code_purge_minutes=_int(
            _or_default(data, "temp_code_purge_minutes", TEMP_CODE_PURGE_MINUTES_DEFAULT), "temp_code_purge_minutes"
        ),
        alerts=_alerts(data.get("alerts") or {}),
        twilio=_twilio(data.get("twilio") or {}),
    )

    registry = EntryRegistry(
        parse_entry(raw, i) for i, raw in enumerate(data.get("entries") or [])
    )
    for entry in registry:
        logger.info(f"[CONFIG] Code found for: {entry.name}")
    return settings, registry


def parse_entry(raw, index=0):
    where = f"entries[{index}]"
    if not isinstance(raw, dict):
        raise ConfigError(f"{where} must be an object")

    return Entry(
        name=str(_require(raw, "name", f"{where}.name")),
        code=str(_require(raw, "code", f"{where}.code")),
        alert=raw.get("alert") or None,
        message=raw.get("message") or None,
        valid_days=_days(raw.get("valid_days"), f"{where}.valid_days"),
        valid_hours=_hours(raw.get("valid_hours"), f"{where}.valid_hours"),
        temp_code_allowed=bool(raw.get("temp_code_allowed")),
        testmode=bool(raw.get("testmode")),
    )


def _require(data, key, name=None):
    if key not in data or data[key] is None:
        raise ConfigError(f"missing required key: {name or key}")
    return data[key]


def _int(value, name):
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _or_default(data, key, default):
    # explicit null falls back too; 0 is kept
    value = data.get(key)
    return default if value is None else value


def _pins(values, name):
    if not isinstance(values, list) or not values:
        raise ConfigError(f"{name} must be a non-empty list of pins")
    return [_int(v, name) for v in values]


def _alerts(value):
    if not isinstance(value, dict):
        raise ConfigError("alerts must be an object of group -> list of numbers")
    alerts = {}
    for group, numbers in value.items():
        if not isinstance(numbers, list):
            raise ConfigError(f"alerts.{group} must be a list of numbers")
        alerts[str(group)] = [str(n) for n in numbers]
    return alerts


def _days(value, name):
    if value is None:
        return None
    # accepts ["monday", ...] or {"monday": 1, ...}
    days = frozenset(str(d).lower() for d in value)
    unknown = days - set(DAYS)
    if unknown:
        raise ConfigError(f"{name} has unknown days: {sorted(unknown)}")
    return days


def _hours(value, name):
    if value is None:
        return None
    if isinstance(value, dict):
        start, end = value.get("start"), value.get("end")
    elif isinstance(value, (list, tuple)) and len(value) == 2:
        start, end = value
    else:
        raise ConfigError(f"{name} must be {{'start': h, 'end': h}} or [start, end]")
    return _int(start, f"{name}.start"), _int(end, f"{name}.end")


def _twilio(file_keys):
    merged = dict(file_keys)
    for key, value in TWILIO_ENV_KEYS.items():
        if value:
            merged[key] = value
    return merged
