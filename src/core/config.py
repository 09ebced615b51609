#!/usr/bin/env python3
"""
Centralized Configuration Manager

Provides a single source of truth for all application configuration,
including environment variables, defaults, and validation.
"""

import os
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict

from .env_loader import load_env_file

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']


def _env_flag(key: str, default: str = 'false') -> bool:
    return os.getenv(key, default).strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class DatabaseConfig:
    """Database connection configuration."""
    supabase_url: str
    supabase_db_password: Optional[str] = None
    supabase_anon_key: Optional[str] = None
    supabase_service_key: Optional[str] = None
    connection_timeout: int = 30
    max_retries: int = 3
    use_direct_connection: bool = True


@dataclass
class IntegrationConfig:
    """External integration configuration."""
    slack_webhook_url: Optional[str] = None


@dataclass
class EngineConfig:
    """Analysis engine configuration."""
    max_text_length: int = 100000
    baseline_type: str = "comprehensive"
    persist_results: bool = True
    notify_alerts: bool = False

    # Logging
    log_level: str = "INFO"
    verbose_logging: bool = False


@dataclass
class Config:
    """Master configuration container."""
    database: Optional[DatabaseConfig]
    integrations: IntegrationConfig
    engine: EngineConfig

    # Environment info
    environment: str = field(default_factory=lambda: os.getenv('ENVIRONMENT', 'development'))

    def has_database(self) -> bool:
        return self.database is not None

    def has_slack(self) -> bool:
        """Check if Slack integration is available."""
        return bool(self.integrations.slack_webhook_url)


class ConfigManager:
    """Manages application configuration with validation and environment loading."""

    def __init__(self, env_file_path: str = ".env", requires_database: bool = True):
        """
        Initialize configuration manager.

        Args:
            env_file_path: Path to .env file relative to project root
            requires_database: Fail when database variables are missing.
                Offline commands pass False and get config.database = None.
        """
        self._config: Optional[Config] = None
        self._requires_database = requires_database
        load_env_file(env_file_path)

    def get_config(self, force_reload: bool = False) -> Config:
        """
        Get application configuration.

        Args:
            force_reload: Force reloading configuration from environment

        Returns:
            Complete configuration object
        """
        if self._config is None or force_reload:
            self._config = self._build_config()
        return self._config

    def _build_config(self) -> Config:
        """Build configuration from environment variables."""
        errors = []

        database_config = None
        if self._requires_database or os.getenv('SUPABASE_URL'):
            try:
                database_config = DatabaseConfig(
                    supabase_url=self._get_required_env('SUPABASE_URL'),
                    supabase_db_password=os.getenv('SUPABASE_DB_PASSWORD'),
                    supabase_anon_key=os.getenv('SUPABASE_ANON_KEY'),
                    supabase_service_key=os.getenv('SUPABASE_SERVICE_KEY'),
                    connection_timeout=int(os.getenv('DB_CONNECTION_TIMEOUT', '30')),
                    max_retries=int(os.getenv('DB_MAX_RETRIES', '3')),
                    use_direct_connection=_env_flag('USE_DIRECT_CONNECTION', 'true'),
                )
            except ValueError as e:
                errors.append(str(e))

        integration_config = IntegrationConfig(
            slack_webhook_url=os.getenv('SLACK_WEBHOOK_URL'),
        )

        try:
            max_text_length = int(os.getenv('MAX_TEXT_LENGTH', '100000'))
        except ValueError:
            errors.append("MAX_TEXT_LENGTH must be an integer")
            max_text_length = 0

        engine_config = EngineConfig(
            max_text_length=max_text_length,
            baseline_type=os.getenv('BASELINE_TYPE', 'comprehensive'),
            persist_results=_env_flag('PERSIST_RESULTS', 'true'),
            notify_alerts=_env_flag('NOTIFY_ALERTS', 'false'),
            log_level=os.getenv('LOG_LEVEL', 'INFO').upper(),
            verbose_logging=_env_flag('VERBOSE_LOGGING', 'false'),
        )

        config = Config(
            database=database_config,
            integrations=integration_config,
            engine=engine_config
        )

        self._validate_config(config, errors)
        return config

    def _get_required_env(self, key: str) -> str:
        """Get required environment variable."""
        value = os.getenv(key)
        if not value:
            raise ValueError(f"Required environment variable {key} is not set")
        return value

    def _validate_config(self, config: Config, errors: list) -> None:
        """Validate configuration values, reporting every problem at once."""
        if config.database is not None:
            url = config.database.supabase_url
            if not url.startswith('https://'):
                errors.append("SUPABASE_URL must start with https://")

            if not url.endswith('.supabase.co'):
                errors.append("SUPABASE_URL must end with .supabase.co")

            if config.database.use_direct_connection and not config.database.supabase_db_password:
                errors.append("SUPABASE_DB_PASSWORD is required for direct connections")

            if not config.database.use_direct_connection and not (
                    config.database.supabase_service_key or config.database.supabase_anon_key):
                errors.append("SUPABASE_SERVICE_KEY or SUPABASE_ANON_KEY is required for API connections")

        if config.engine.max_text_length < 1:
            errors.append("MAX_TEXT_LENGTH must be at least 1")

        if not config.engine.baseline_type:
            errors.append("BASELINE_TYPE must not be empty")

        if config.engine.log_level not in VALID_LOG_LEVELS:
            errors.append(f"LOG_LEVEL must be one of: {', '.join(VALID_LOG_LEVELS)}")

        if config.engine.notify_alerts and not config.has_slack():
            errors.append("NOTIFY_ALERTS requires SLACK_WEBHOOK_URL")

        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        logger.debug("Configuration validation passed")

    def update_logging(self) -> None:
        """Configure logging based on current configuration."""
        config = self.get_config()

        numeric_level = getattr(logging, config.engine.log_level)
        logging.getLogger().setLevel(numeric_level)

        if config.engine.verbose_logging:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
        else:
            format_str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

        for handler in logging.getLogger().handlers:
            handler.setLevel(numeric_level)
            formatter = logging.Formatter(format_str, datefmt='%Y-%m-%d %H:%M:%S')
            handler.setFormatter(formatter)

    def get_integration_status(self) -> Dict[str, bool]:
        """Get status of all integrations."""
        config = self.get_config()
        return {
            'database': config.has_database(),
            'slack_webhook': config.has_slack(),
            'alert_notifications': config.engine.notify_alerts,
        }


# Global configuration manager instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(requires_database: bool = True) -> ConfigManager:
    """Get global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager(requires_database=requires_database)
    return _config_manager


def get_config() -> Config:
    """Get application configuration."""
    return get_config_manager().get_config()


def reset_config() -> None:
    """Reset configuration manager (useful for testing)."""
    global _config_manager
    _config_manager = None
