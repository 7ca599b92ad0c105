"""Tests for devlog.core.config module."""

import logging

import pytest

import devlog.core.config as config


class TestEnvHelpers:
    """Tests for environment variable helpers."""

    def test_get_env_returns_value(self, monkeypatch):
        """get_env returns environment variable value."""
        monkeypatch.setenv("TEST_VAR", "test_value")

        assert config.get_env("TEST_VAR") == "test_value"

    def test_get_env_returns_default(self, monkeypatch):
        """get_env returns default when var not set."""
        monkeypatch.delenv("NONEXISTENT_VAR", raising=False)

        assert config.get_env("NONEXISTENT_VAR", "default") == "default"

    def test_get_env_logs_fallback(self, monkeypatch, caplog):
        """get_env logs when falling back to default."""
        monkeypatch.delenv("MISSING_WITH_DEFAULT", raising=False)
        caplog.set_level(logging.DEBUG, logger="devlog.core.config")

        value = config.get_env("MISSING_WITH_DEFAULT", "fallback")

        assert value == "fallback"
        assert "MISSING_WITH_DEFAULT" in caplog.text
        assert "falling back to default value" in caplog.text

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("42", 42),
            ("not_a_number", 99),
            (None, 123),
        ],
    )
    def test_get_env_int(self, monkeypatch, value, expected):
        """get_env_int parses or falls back to default."""
        if value is None:
            monkeypatch.delenv("INT_VAR", raising=False)
        else:
            monkeypatch.setenv("INT_VAR", value)

        assert config.get_env_int("INT_VAR", expected) == expected

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("true", True),
            ("True", True),
            ("1", True),
            ("yes", True),
            ("false", False),
            ("0", False),
            ("no", False),
        ],
    )
    def test_get_env_bool_parses_known_values(self, monkeypatch, value, expected):
        """get_env_bool parses known values."""
        monkeypatch.setenv("BOOL_VAR", value)

        assert config.get_env_bool("BOOL_VAR") is expected

    @pytest.mark.parametrize("default", [True, False])
    def test_get_env_bool_default(self, monkeypatch, default):
        """get_env_bool returns default for unknown values."""
        monkeypatch.setenv("BOOL_VAR", "maybe")

        assert config.get_env_bool("BOOL_VAR", default) is default

    def test_get_env_int_warns_for_invalid_value(self, monkeypatch, caplog):
        """get_env_int warns when value cannot be parsed."""
        monkeypatch.setenv("INT_VAR", "invalid")
        caplog.set_level(logging.WARNING, logger="devlog.core.config")

        value = config.get_env_int("INT_VAR", 77)

        assert value == 77
        assert "not a valid integer" in caplog.text

    def test_get_env_bool_warns_for_invalid_value(self, monkeypatch, caplog):
        """get_env_bool warns when value cannot be parsed."""
        monkeypatch.setenv("BOOL_VAR", "invalid")
        caplog.set_level(logging.WARNING, logger="devlog.core.config")

        value = config.get_env_bool("BOOL_VAR", True)

        assert value is True
        assert "not a valid boolean" in caplog.text


class TestTemplates:
    """Tests for the static log templates."""

    def test_file_header_has_date_placeholder(self):
        """Document header carries the date twice."""
        assert config.DEFAULT_FILE_HEADER.count("{date}") == 2
        assert config.DEFAULT_FILE_HEADER.endswith("---\n\n")

    def test_entry_template_fields(self):
        """Entry template renders header, notes and time."""
        rendered = (
            config.ENTRY_TEMPLATE.replace("{header}", "H")
            .replace("{notes}", "- n.")
            .replace("{time}", "10:00:00")
        )

        assert rendered == "## H\n\n- n.\n\n**Logged at:** 10:00:00\n\n"

    def test_auto_tag_rules_keywords_are_lowercase(self):
        """Auto-tag keywords are matched against lowercased text."""
        for keywords in config.AUTO_TAG_RULES.values():
            assert all(keyword == keyword.lower() for keyword in keywords)


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_returns_package_logger(self):
        """setup_logging returns the devlog logger."""
        logger = config.setup_logging("WARNING")

        assert logger.name == "devlog"
