"""Tests for the catalogue configuration.

These tests demonstrate:
1. Default values
2. Environment variable loading
3. Validation of names, levels and the loan period
"""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from library_catalogue.config import CatalogueConfig, get_config, reset_config


class TestCatalogueConfig:
    """Test configuration behavior."""

    def test_default_configuration(self):
        config = CatalogueConfig()

        assert config.server_name == "library-catalogue"
        assert config.server_version == "0.1.0"
        assert config.transport == "stdio"
        assert config.loan_period_days == 14
        assert config.debug is False
        assert config.log_level == "WARNING"

    def test_environment_variable_loading(self):
        env_vars = {
            "LIBRARY_CATALOGUE_SERVER_NAME": "branch-library",
            "LIBRARY_CATALOGUE_LOAN_PERIOD_DAYS": "21",
            "LIBRARY_CATALOGUE_DEBUG": "true",
            "LIBRARY_CATALOGUE_LOG_LEVEL": "info",
        }

        with patch.dict(os.environ, env_vars):
            config = CatalogueConfig()

            assert config.server_name == "branch-library"
            assert config.loan_period_days == 21
            assert config.debug is True
            assert config.log_level == "INFO"

    @pytest.mark.parametrize("name", ["Library_Catalogue", "my library", "ab", "a" * 51])
    def test_invalid_server_names(self, name):
        with pytest.raises(ValidationError):
            CatalogueConfig(server_name=name)

    @pytest.mark.parametrize("days", [0, -1, 366])
    def test_loan_period_bounds(self, days):
        with pytest.raises(ValidationError):
            CatalogueConfig(loan_period_days=days)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            CatalogueConfig(log_level="VERBOSE")

    def test_debug_overrides_log_level(self):
        assert CatalogueConfig(log_level="ERROR").effective_log_level == "ERROR"
        assert CatalogueConfig(log_level="ERROR", debug=True).effective_log_level == "DEBUG"

    def test_server_info(self, test_config):
        assert test_config.server_info == {
            "name": "test-library-catalogue",
            "version": "0.0.1-test",
            "transport": "stdio",
        }


class TestConfigSingleton:
    """Test the global configuration instance."""

    def test_get_config_returns_same_instance(self):
        assert get_config() is get_config()

    def test_reset_config_rereads_environment(self):
        first = get_config()
        with patch.dict(os.environ, {"LIBRARY_CATALOGUE_LOAN_PERIOD_DAYS": "7"}):
            reset_config()
            second = get_config()

        assert second is not first
        assert second.loan_period_days == 7
