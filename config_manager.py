"""
Configuration management for the related posts service.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
import logging
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class RecommendationConfig:
    """Recommendation engine defaults."""
    default_strategy: str
    default_limit: int
    default_min_score: float
    history_fallback_min_score: float
    cache_enabled: bool


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool


@dataclass
class PathsConfig:
    """Path configuration settings."""
    corpus_file: str


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "related_posts_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError) as e:
                # Keep default config if file is invalid or not found
                logger.warning(f"Ignoring unreadable config file {self.config_file}: {e}")

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "recommendations": {
                "default_strategy": "mixed",
                "default_limit": 3,
                "default_min_score": 0.1,
                "history_fallback_min_score": 0.2,
                "cache_enabled": True
            },
            "app": {
                "host": "0.0.0.0",
                "port": 22582,
                "debug": False
            },
            "paths": {
                "corpus_file": "data/articles.json"
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config:
                if isinstance(values, dict):
                    self._config[section].update(values)
                else:
                    self._config[section] = values
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # Recommendation settings
        if os.getenv("RELATED_DEFAULT_STRATEGY"):
            self._config["recommendations"]["default_strategy"] = os.getenv("RELATED_DEFAULT_STRATEGY").strip().lower()

        if os.getenv("RELATED_DEFAULT_LIMIT"):
            self._config["recommendations"]["default_limit"] = int(os.getenv("RELATED_DEFAULT_LIMIT"))

        if os.getenv("RELATED_MIN_SCORE"):
            self._config["recommendations"]["default_min_score"] = float(os.getenv("RELATED_MIN_SCORE"))

        if os.getenv("RELATED_HISTORY_MIN_SCORE"):
            self._config["recommendations"]["history_fallback_min_score"] = float(os.getenv("RELATED_HISTORY_MIN_SCORE"))

        if os.getenv("RELATED_CACHE_ENABLED"):
            self._config["recommendations"]["cache_enabled"] = os.getenv("RELATED_CACHE_ENABLED").lower() == "true"

        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        # Paths
        if os.getenv("CORPUS_FILE"):
            self._config["paths"]["corpus_file"] = os.getenv("CORPUS_FILE")

    def get_recommendation_config(self) -> RecommendationConfig:
        """Get recommendation engine configuration."""
        rec_config = self._config["recommendations"]
        return RecommendationConfig(
            default_strategy=rec_config["default_strategy"],
            default_limit=rec_config["default_limit"],
            default_min_score=rec_config["default_min_score"],
            history_fallback_min_score=rec_config["history_fallback_min_score"],
            cache_enabled=rec_config["cache_enabled"]
        )

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"]
        )

    def get_paths_config(self) -> PathsConfig:
        """Get paths configuration."""
        paths_config = self._config["paths"]
        return PathsConfig(
            corpus_file=paths_config["corpus_file"]
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_recommendation_config() -> RecommendationConfig:
    """Get recommendation engine configuration."""
    return config_manager.get_recommendation_config()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_paths_config() -> PathsConfig:
    """Get paths configuration."""
    return config_manager.get_paths_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
