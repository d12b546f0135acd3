"""
Test cases for the configuration management system.
Tests config loading, validation, and access functionality.
"""

import os
import json
from unittest.mock import patch, mock_open
import pytest

from config_manager import (
    ConfigManager,
    RecommendationConfig,
    AppConfig,
    PathsConfig,
    get_recommendation_config,
    get_app_config,
    get_paths_config,
)


class TestConfigManager:
    """Test the ConfigManager class functionality."""

    def test_init_with_default_config_file(self):
        """Test ConfigManager initialization with default config file."""
        with patch('config_manager.Path') as mock_path:
            mock_path.return_value.exists.return_value = False
            with patch.dict(os.environ, {}, clear=True):
                manager = ConfigManager()

            assert manager._config is not None
            assert "recommendations" in manager._config
            assert "app" in manager._config
            assert "paths" in manager._config

    def test_defaults(self, tmp_path):
        """Test default recommendation settings."""
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(tmp_path / "missing.json"))

        rec_config = manager.get_recommendation_config()
        assert rec_config.default_strategy == "mixed"
        assert rec_config.default_limit == 3
        assert rec_config.default_min_score == 0.1
        assert rec_config.history_fallback_min_score == 0.2
        assert rec_config.cache_enabled is True

    def test_load_config_from_file(self):
        """Test loading configuration from existing file."""
        test_config = {
            "recommendations": {
                "default_strategy": "tags",
                "default_limit": 5
            },
            "app": {
                "host": "localhost",
                "port": 8080,
                "debug": True
            }
        }

        with patch('builtins.open', mock_open(read_data=json.dumps(test_config))):
            with patch('config_manager.Path') as mock_path:
                mock_path.return_value.exists.return_value = True
                with patch.dict(os.environ, {}, clear=True):
                    manager = ConfigManager()

                    assert manager._config["recommendations"]["default_strategy"] == "tags"
                    assert manager._config["recommendations"]["default_limit"] == 5
                    # Keys missing from the file keep their defaults
                    assert manager._config["recommendations"]["default_min_score"] == 0.1
                    assert manager._config["app"]["host"] == "localhost"

    def test_invalid_file_keeps_defaults(self, tmp_path):
        """Test that an unreadable config file falls back to defaults."""
        config_file = tmp_path / "config.json"
        config_file.write_text("{not json", encoding="utf-8")

        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))

        assert manager.get_recommendation_config().default_limit == 3

    def test_override_with_env_variables(self, tmp_path):
        """Test that environment variables override config file values."""
        config_file = tmp_path / "config.json"
        config_file.write_text(json.dumps({"recommendations": {"default_limit": 7}}), encoding="utf-8")

        env_vars = {
            "RELATED_DEFAULT_STRATEGY": " Category ",
            "RELATED_DEFAULT_LIMIT": "4",
            "RELATED_MIN_SCORE": "0.25",
            "RELATED_HISTORY_MIN_SCORE": "0.3",
            "RELATED_CACHE_ENABLED": "false",
            "APP_HOST": "localhost",
            "APP_PORT": "8080",
            "APP_DEBUG": "true",
            "CORPUS_FILE": "/tmp/articles.json"
        }

        with patch.dict(os.environ, env_vars, clear=True):
            manager = ConfigManager(str(config_file))

        assert manager._config["recommendations"]["default_strategy"] == "category"
        assert manager._config["recommendations"]["default_limit"] == 4
        assert manager._config["recommendations"]["default_min_score"] == 0.25
        assert manager._config["recommendations"]["history_fallback_min_score"] == 0.3
        assert manager._config["recommendations"]["cache_enabled"] is False
        assert manager._config["app"]["host"] == "localhost"
        assert manager._config["app"]["port"] == 8080
        assert manager._config["app"]["debug"] is True
        assert manager._config["paths"]["corpus_file"] == "/tmp/articles.json"

    def test_typed_sections(self, tmp_path):
        """Test getting typed configuration sections."""
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(tmp_path / "missing.json"))

        assert isinstance(manager.get_recommendation_config(), RecommendationConfig)
        assert isinstance(manager.get_app_config(), AppConfig)
        paths_config = manager.get_paths_config()
        assert isinstance(paths_config, PathsConfig)
        assert paths_config.corpus_file == "data/articles.json"

    def test_get_config(self, tmp_path):
        """Test getting raw configuration dictionary."""
        manager = ConfigManager(str(tmp_path / "missing.json"))
        config = manager.get_config()

        assert config == manager._config
        assert config is not manager._config  # Should be a copy

    def test_save_and_reload(self, tmp_path):
        """Test saving configuration to file and reading it back."""
        config_file = tmp_path / "config.json"
        with patch.dict(os.environ, {}, clear=True):
            manager = ConfigManager(str(config_file))
            manager._config["recommendations"]["default_limit"] = 6
            manager.save_config()

            saved = json.loads(config_file.read_text(encoding="utf-8"))
            assert saved["recommendations"]["default_limit"] == 6

            manager._config["recommendations"]["default_limit"] = 9
            manager.reload()
            assert manager.get_recommendation_config().default_limit == 6


class TestGlobalFunctions:
    """Test the global configuration functions."""

    def test_global_getters(self):
        """Test global getter functions return typed sections."""
        assert isinstance(get_recommendation_config(), RecommendationConfig)
        assert isinstance(get_app_config(), AppConfig)
        assert isinstance(get_paths_config(), PathsConfig)
