import json
import logging

import pytest

from nature_areas.config import Settings, validate_environment_configuration
from nature_areas.exceptions import ConfigurationError
from nature_areas.logging_config import DevelopmentFormatter, StructuredJSONFormatter


class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.NVV_API_BASE.startswith("https://")
        assert settings.UPSTREAM_TIMEOUT_S == 30.0
        assert settings.DEFAULT_DECISION_STATUS == "Gällande"
        assert settings.DEFAULT_LIST_LIMIT == 100
        assert settings.RATE_LIMIT == "60/minute"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("UPSTREAM_TIMEOUT_S", "12.5")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings()

        assert settings.UPSTREAM_TIMEOUT_S == 12.5
        assert settings.LOG_LEVEL == "DEBUG"

    def test_cors_origin_list(self):
        settings = Settings(CORS_ORIGINS="http://localhost:3000, https://example.test ,")

        assert settings.cors_origin_list == ["http://localhost:3000", "https://example.test"]

    def test_valid_configuration_passes(self, test_settings):
        validate_environment_configuration(test_settings)

    def test_non_http_base_url_rejected(self):
        settings = Settings(N2000_API_BASE="ftp://geodata.test/n2000")

        with pytest.raises(ConfigurationError) as exc_info:
            validate_environment_configuration(settings)

        assert exc_info.value.config_field == "N2000_API_BASE"

    def test_non_positive_timeout_rejected(self):
        settings = Settings(UPSTREAM_TIMEOUT_S=0)

        with pytest.raises(ConfigurationError, match="UPSTREAM_TIMEOUT_S"):
            validate_environment_configuration(settings)


class TestFormatters:

    def _record(self, **extra):
        record = logging.LogRecord(
            name="nature_areas.services.extent_service", level=logging.WARNING, pathname=__file__,
            lineno=1, msg="nvr extent endpoint failed", args=(), exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_formatter_emits_one_object_with_extra_fields(self):
        formatter = StructuredJSONFormatter(service_name="test-service")

        line = formatter.format(self._record(event="extent_fallback", reason="upstream_error"))

        entry = json.loads(line)
        assert entry["level"] == "WARNING"
        assert entry["service"] == "test-service"
        assert entry["logger"] == "nature_areas.services.extent_service"
        assert entry["message"] == "nvr extent endpoint failed"
        assert entry["extra"] == {"event": "extent_fallback", "reason": "upstream_error"}
        assert "\n" not in line

    def test_development_formatter_is_human_readable(self):
        line = DevelopmentFormatter().format(self._record())

        assert "WARNING" in line
        assert "nvr extent endpoint failed" in line
