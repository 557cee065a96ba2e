import json
import re

import pytest

from config import loader
from config.loader import ConfigError, load_config, parse_config


def minimal(**extra):
    data = {
        "keypad": {"rows": [31, 33, 35, 37], "cols": [32, 36, 38, 40]},
        "relay_pin": 11,
        "sensor_pin": 13,
    }
    data.update(extra)
    return data


def test_defaults_fill_missing_timings():
    settings, registry = parse_config(minimal())

    assert settings.rows == [31, 33, 35, 37]
    assert settings.timeout_msec == 5000
    assert settings.testmode_timeout_msec == 120000
    assert settings.close_helper_seconds == 90
    assert settings.close_helper_key == "C"
    assert settings.temp_code_timeout_seconds == 120
    assert settings.temp_code_purge_minutes == 0
    assert len(registry) == 0


def test_zero_close_helper_falls_back_to_default():
    settings, _ = parse_config(minimal(close_helper_seconds=0))
    assert settings.close_helper_seconds == 90


def test_null_temp_code_timings_fall_back_to_defaults():
    settings, _ = parse_config(minimal(
        temp_code_timeout_seconds=None, temp_code_ttl_minutes=None, temp_code_purge_minutes=None,
    ))
    assert settings.temp_code_timeout_seconds == 120
    assert settings.temp_code_ttl_minutes == 30
    assert settings.temp_code_purge_minutes == 0


def test_zero_temp_code_interval_is_kept():
    settings, _ = parse_config(minimal(temp_code_timeout_seconds=0))
    assert settings.temp_code_timeout_seconds == 0


def test_entries_are_parsed():
    _, registry = parse_config(minimal(entries=[
        {"name": "Family", "code": 2468, "alert": "family"},
        {
            "name": "Walker",
            "code": "13579",
            "valid_days": {"Monday": 1, "friday": 1},
            "valid_hours": {"start": 11, "end": 14},
            "temp_code_allowed": 1,
        },
        {"name": "Installer", "code": "9999", "testmode": 1, "valid_hours": [8, 17]},
    ]))

    family, walker, installer = registry.entries
    assert family.code == "2468"
    assert family.valid_days is None and family.valid_hours is None
    assert walker.valid_days == frozenset(["monday", "friday"])
    assert walker.valid_hours == (11, 14)
    assert walker.temp_code_allowed and not walker.testmode
    assert installer.testmode
    assert installer.valid_hours == (8, 17)


@pytest.mark.parametrize("data,fragment", [
    ({"relay_pin": 11, "sensor_pin": 13}, "keypad"),
    (minimal(relay_pin=None), "relay_pin"),
    (minimal(sensor_pin="x"), "sensor_pin"),
    (minimal(entries=[{"code": "1"}]), "entries[0].name"),
    (minimal(entries=[{"name": "a", "code": "1", "valid_days": ["funday"]}]), "unknown days"),
    (minimal(entries=[{"name": "a", "code": "1", "valid_hours": 9}]), "valid_hours"),
    (minimal(alerts={"family": "5551230001"}), "alerts.family must be a list of numbers"),
    (minimal(alerts=["5551230001"]), "alerts must be an object"),
])
def test_invalid_config_raises(data, fragment):
    with pytest.raises(ConfigError, match=re.escape(fragment)):
        parse_config(data)


def test_environment_overrides_twilio_file_values(monkeypatch):
    monkeypatch.setitem(loader.TWILIO_ENV_KEYS, "account_sid", None)
    monkeypatch.setitem(loader.TWILIO_ENV_KEYS, "auth_token", "from-env")
    settings, _ = parse_config(minimal(twilio={"account_sid": "AC1", "auth_token": "from-file"}))
    assert settings.twilio["auth_token"] == "from-env"
    assert settings.twilio["account_sid"] == "AC1"


def test_load_config_reads_file(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps(minimal(alerts={"family": [5551230001]})))
    settings, _ = load_config(str(path))
    assert settings.alerts == {"family": ["5551230001"]}


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError, match="cannot read"):
        load_config(str(tmp_path / "nope.json"))


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json")
    with pytest.raises(ConfigError, match="not valid JSON"):
        load_config(str(path))
