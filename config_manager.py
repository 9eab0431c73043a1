"""
Configuration management for the Document Digest service.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class LLMConfig:
    """LLM configuration settings."""
    provider: str
    api_key: str
    base_url: str
    model: str
    temperature: float
    timeout: int
    max_input_char: int


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool
    max_upload_mb: int


@dataclass
class SummaryConfig:
    """Summary generation settings."""
    default_language: str
    max_retries: int
    retry_delay: float


@dataclass
class RenderConfig:
    """PDF rendering settings."""
    page_format: str
    margin: str
    print_background: bool
    timeout_ms: int


@dataclass
class PathsConfig:
    """Path configuration settings."""
    upload_dir: str
    static_dir: str


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "web_app_config.json"):
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
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "llm": {
                "provider": "deepseek",
                "api_key": "",
                "base_url": "",
                "model": "",
                "temperature": 0.3,
                "timeout": 120,
                "max_input_char": 200000
            },
            "app": {
                "host": "0.0.0.0",
                "port": 3000,
                "debug": False,
                "max_upload_mb": 20
            },
            "summary": {
                "default_language": "Indonesian",
                "max_retries": 3,
                "retry_delay": 5.0
            },
            "render": {
                "page_format": "A4",
                "margin": "1cm",
                "print_background": True,
                "timeout_ms": 30000
            },
            "paths": {
                "upload_dir": "uploads",
                "static_dir": "ui"
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # LLM settings
        if os.getenv("LLM_PROVIDER"):
            self._config["llm"]["provider"] = os.getenv("LLM_PROVIDER")

        provider = self._config["llm"]["provider"].lower()
        key_var = "OPENAI_API_KEY" if provider == "openai" else "DEEPSEEK_API_KEY"
        if os.getenv("LLM_API_KEY"):
            self._config["llm"]["api_key"] = os.getenv("LLM_API_KEY")
        elif os.getenv(key_var):
            self._config["llm"]["api_key"] = os.getenv(key_var)

        if os.getenv("OPENAI_API_BASE"):
            self._config["llm"]["base_url"] = os.getenv("OPENAI_API_BASE")

        if os.getenv("LLM_MODEL"):
            self._config["llm"]["model"] = os.getenv("LLM_MODEL")

        if os.getenv("LLM_TIMEOUT"):
            self._config["llm"]["timeout"] = int(os.getenv("LLM_TIMEOUT"))

        if os.getenv("LLM_MAX_INPUT_CHAR"):
            self._config["llm"]["max_input_char"] = int(os.getenv("LLM_MAX_INPUT_CHAR"))

        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        if os.getenv("MAX_UPLOAD_MB"):
            self._config["app"]["max_upload_mb"] = int(os.getenv("MAX_UPLOAD_MB"))

        # Summary settings
        if os.getenv("DEFAULT_LANGUAGE"):
            self._config["summary"]["default_language"] = os.getenv("DEFAULT_LANGUAGE")

        if os.getenv("SUMMARY_MAX_RETRIES"):
            self._config["summary"]["max_retries"] = int(os.getenv("SUMMARY_MAX_RETRIES"))

        if os.getenv("SUMMARY_RETRY_DELAY"):
            self._config["summary"]["retry_delay"] = float(os.getenv("SUMMARY_RETRY_DELAY"))

        # Render settings
        if os.getenv("RENDER_TIMEOUT_MS"):
            self._config["render"]["timeout_ms"] = int(os.getenv("RENDER_TIMEOUT_MS"))

        # Paths
        if os.getenv("UPLOAD_DIR"):
            self._config["paths"]["upload_dir"] = os.getenv("UPLOAD_DIR")

    def get_llm_config(self) -> LLMConfig:
        """Get LLM configuration."""
        llm_config = self._config["llm"]
        return LLMConfig(
            provider=llm_config["provider"],
            api_key=llm_config["api_key"],
            base_url=llm_config["base_url"],
            model=llm_config["model"],
            temperature=llm_config["temperature"],
            timeout=llm_config["timeout"],
            max_input_char=llm_config["max_input_char"]
        )

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"],
            max_upload_mb=app_config["max_upload_mb"]
        )

    def get_summary_config(self) -> SummaryConfig:
        """Get summary generation configuration."""
        summary_config = self._config["summary"]
        return SummaryConfig(
            default_language=summary_config["default_language"],
            max_retries=summary_config["max_retries"],
            retry_delay=summary_config["retry_delay"]
        )

    def get_render_config(self) -> RenderConfig:
        """Get PDF rendering configuration."""
        render_config = self._config["render"]
        return RenderConfig(
            page_format=render_config["page_format"],
            margin=render_config["margin"],
            print_background=render_config["print_background"],
            timeout_ms=render_config["timeout_ms"]
        )

    def get_paths_config(self) -> PathsConfig:
        """Get paths configuration."""
        paths_config = self._config["paths"]
        return PathsConfig(
            upload_dir=paths_config["upload_dir"],
            static_dir=paths_config["static_dir"]
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()


# Global configuration instance
config_manager = ConfigManager()


def get_llm_config() -> LLMConfig:
    """Get LLM configuration."""
    return config_manager.get_llm_config()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_summary_config() -> SummaryConfig:
    """Get summary generation configuration."""
    return config_manager.get_summary_config()


def get_render_config() -> RenderConfig:
    """Get PDF rendering configuration."""
    return config_manager.get_render_config()


def get_paths_config() -> PathsConfig:
    """Get paths configuration."""
    return config_manager.get_paths_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()
