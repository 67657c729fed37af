"""
Unit tests for env-driven configuration.
"""

import logging

import pytest

from showcase.core import config
from showcase.core.config import _env_int
from showcase.core.errors import ServiceUnavailableError
from showcase.researcher.models import ResearcherProperties, ResponseFormat


class TestEnvInt:
    def test_unset_uses_default(self, monkeypatch) -> None:
        monkeypatch.delenv("SHOWCASE_TEST_INT", raising=False)
        assert _env_int("SHOWCASE_TEST_INT", 7) == 7

    def test_reads_integer(self, monkeypatch) -> None:
        monkeypatch.setenv("SHOWCASE_TEST_INT", " 12 ")
        assert _env_int("SHOWCASE_TEST_INT", 7) == 12

    def test_non_numeric_falls_back_with_warning(self, monkeypatch, caplog) -> None:
        monkeypatch.setenv("SHOWCASE_TEST_INT", "three")
        with caplog.at_level(logging.WARNING, logger="showcase.core.config"):
            assert _env_int("SHOWCASE_TEST_INT", 3) == 3
        assert "SHOWCASE_TEST_INT" in caplog.text


class TestResearcherPropertiesFromConfig:
    def test_defaults_load(self) -> None:
        props = ResearcherProperties.from_config()
        assert props.response_format is ResponseFormat(config.RESEARCHER_RESPONSE_FORMAT.lower())
        assert props.max_research_rounds == config.RESEARCHER_MAX_ROUNDS

    def test_unknown_response_format_is_service_error(self, monkeypatch) -> None:
        monkeypatch.setattr(config, "RESEARCHER_RESPONSE_FORMAT", "pdf")
        with pytest.raises(ServiceUnavailableError, match="misconfigured"):
            ResearcherProperties.from_config()

    def test_out_of_range_value_is_service_error(self, monkeypatch) -> None:
        monkeypatch.setattr(config, "RESEARCHER_MAX_WORD_COUNT", 0)
        with pytest.raises(ServiceUnavailableError):
            ResearcherProperties.from_config()
