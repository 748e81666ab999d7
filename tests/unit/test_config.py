"""Unit tests for smarthome.config."""

import pytest

from smarthome.config import Settings, check_log_level, load_settings


def test_defaults_without_sources():
    """Test the built-in defaults."""
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.voltage == 220
    assert settings.kelvin == 4000
    assert settings.brightness == 100


def test_yaml_file_overrides_defaults(tmp_path):
    """Test that a YAML file overrides defaults."""
    path = tmp_path / "settings.yaml"
    path.write_text("voltage: 230\nlog_level: info\n", encoding="utf-8")

    settings = load_settings(path, environ={})

    assert settings.voltage == 230
    assert settings.log_level == "INFO"


def test_environment_overrides_file(tmp_path):
    """Test that SMARTHOME_* variables win over the file."""
    path = tmp_path / "settings.yaml"
    path.write_text("voltage: 230\n", encoding="utf-8")

    settings = load_settings(path, environ={"SMARTHOME_VOLTAGE": "120"})

    assert settings.voltage == 120


def test_process_environment_is_read(smarthome_environment):
    """Test that os.environ is used when no environment is passed."""
    settings = load_settings()

    assert settings.voltage == 110
    assert settings.log_level == "DEBUG"


def test_empty_file_means_defaults(tmp_path):
    """Test that an empty YAML file changes nothing."""
    path = tmp_path / "settings.yaml"
    path.write_text("", encoding="utf-8")

    assert load_settings(path, environ={}) == Settings()


@pytest.mark.parametrize(
    "content, message",
    [
        ("- 1\n- 2\n", "must be a YAML mapping"),
        ("wattage: 5\n", "Unknown setting"),
        ("voltage: high\n", "must be of type int"),
        ("log_level: loud\n", "Unknown log level"),
    ],
)
def test_invalid_files(tmp_path, content, message):
    """Test that malformed settings are rejected with ValueError."""
    path = tmp_path / "settings.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ValueError, match=message):
        load_settings(path, environ={})


def test_environment_log_level_is_checked():
    """Test that an unknown level from the environment is rejected."""
    with pytest.raises(ValueError, match="Unknown log level: chatty"):
        load_settings(environ={"SMARTHOME_LOG_LEVEL": "chatty"})


@pytest.mark.parametrize("name, expected", [("debug", "DEBUG"), ("Warning", "WARNING")])
def test_check_log_level_normalizes_case(name, expected):
    assert check_log_level(name) == expected
