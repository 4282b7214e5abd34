"""
Configuration Factory - Centralized configuration management for the RPS game server
Provides type-safe configuration with validation and environment-specific settings.
"""

import os
import logging
from typing import Any, Dict, List, Optional, Type
from enum import Enum
from dataclasses import dataclass, field


class Environment(Enum):
    """Environment types for configuration"""
    DEVELOPMENT = "development"
    PRODUCTION = "production"
    TESTING = "testing"


class ConfigError(Exception):
    """Configuration-related errors"""
    pass


DEFAULT_SECRET_KEY = 'dev-secret-key-change-in-production'
ASYNC_MODES = ('eventlet', 'threading', 'gevent')
LOG_LEVELS = ('debug', 'info', 'warning', 'error', 'critical')


@dataclass
class AppConfig:
    """Application configuration with type safety and validation"""

    # Core Flask settings
    secret_key: str = field(default_factory=lambda: DEFAULT_SECRET_KEY)
    debug: bool = False
    flask_env: str = 'development'  # Default to development for safety

    # Server settings
    host: str = '0.0.0.0'
    port: int = 5000

    # Socket.IO settings
    async_mode: str = 'eventlet'
    cors_allowed_origins: List[str] = field(default_factory=list)  # empty = permissive outside production
    ping_timeout: int = 60  # seconds
    ping_interval: int = 25  # seconds

    # Game settings
    max_room_id_length: int = 50  # characters

    # File paths
    messages_file: str = 'messages.yaml'  # relative to the rps package

    # Gunicorn settings (for production deployment)
    worker_connections: int = 1000
    timeout: int = 30
    keepalive: int = 2
    log_level: str = 'info'

    # Environment
    environment: Environment = Environment.DEVELOPMENT

    def __post_init__(self):
        """Validate configuration after initialization"""
        self._validate()

    def _validate(self):
        """Validate configuration values"""
        if self.port < 1 or self.port > 65535:
            raise ConfigError(f"Invalid port number: {self.port}")

        if self.async_mode not in ASYNC_MODES:
            raise ConfigError(f"Invalid async_mode: {self.async_mode}")

        if self.ping_timeout < 1 or self.ping_timeout > 600:
            raise ConfigError(f"Invalid ping_timeout: {self.ping_timeout}")

        if self.ping_interval < 1 or self.ping_interval > 600:
            raise ConfigError(f"Invalid ping_interval: {self.ping_interval}")

        if self.max_room_id_length < 1 or self.max_room_id_length > 256:
            raise ConfigError(f"Invalid max_room_id_length: {self.max_room_id_length}")

        if self.log_level.lower() not in LOG_LEVELS:
            raise ConfigError(f"Invalid log_level: {self.log_level}")

        if self.environment == Environment.PRODUCTION and self.secret_key == DEFAULT_SECRET_KEY:
            raise ConfigError("Production environment requires a secure SECRET_KEY")

    @property
    def is_production(self) -> bool:
        """Check if running in production mode"""
        return self.environment == Environment.PRODUCTION

    @property
    def socketio_cors(self):
        """CORS setting for Flask-SocketIO: allowlist in production, permissive otherwise."""
        if self.is_production:
            return self.cors_allowed_origins or []
        return self.cors_allowed_origins or "*"


class ConfigurationFactory:
    """
    Factory for creating and managing application configuration.

    Features:
    - Environment variable loading with type conversion
    - Configuration validation
    - Environment-specific defaults
    - Singleton pattern for global config access
    """

    _instance: Optional['ConfigurationFactory'] = None
    _config: Optional[AppConfig] = None

    def __new__(cls) -> 'ConfigurationFactory':
        """Singleton pattern implementation"""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """Initialize the configuration factory"""
        if not hasattr(self, '_initialized'):
            self._logger = logging.getLogger(__name__)
            self._initialized = True

    def load_from_environment(self, env_prefix: str = '') -> AppConfig:
        """
        Load configuration from environment variables.

        Args:
            env_prefix: Optional prefix for environment variables (e.g., 'RPS_')

        Returns:
            Configured AppConfig instance
        """
        def get_env_var(key: str, default: Any = None, var_type: Type = str) -> Any:
            """Get environment variable with type conversion"""
            env_key = f"{env_prefix}{key}" if env_prefix else key
            value = os.environ.get(env_key)

            if value is None:
                return default

            if var_type == bool:
                return value.lower() in ('true', '1', 'yes', 'on')
            elif var_type == int:
                try:
                    return int(value)
                except ValueError:
                    self._logger.warning(f"Invalid integer value for {env_key}: {value}, using default: {default}")
                    return default
            elif var_type == list:
                return [item.strip() for item in value.split(',') if item.strip()]
            else:
                return value

        flask_env = get_env_var('FLASK_ENV', 'development')
        if flask_env == 'development':
            environment = Environment.DEVELOPMENT
            debug = True
        elif flask_env == 'testing':
            environment = Environment.TESTING
            debug = True
        else:
            environment = Environment.PRODUCTION
            debug = False

        config = AppConfig(
            # Core Flask settings
            secret_key=get_env_var('SECRET_KEY', DEFAULT_SECRET_KEY),
            debug=get_env_var('DEBUG', debug, bool),
            flask_env=flask_env,

            # Server settings
            host=get_env_var('HOST', '0.0.0.0'),
            port=get_env_var('PORT', 5000, int),

            # Socket.IO settings
            async_mode=get_env_var('ASYNC_MODE', 'eventlet'),
            cors_allowed_origins=get_env_var('SOCKETIO_CORS_ALLOWED_ORIGINS', [], list),
            ping_timeout=get_env_var('SOCKET_PING_TIMEOUT', 60, int),
            ping_interval=get_env_var('SOCKET_PING_INTERVAL', 25, int),

            # Game settings
            max_room_id_length=get_env_var('MAX_ROOM_ID_LENGTH', 50, int),

            # File paths
            messages_file=get_env_var('MESSAGES_FILE', 'messages.yaml'),

            # Gunicorn settings
            worker_connections=get_env_var('WORKER_CONNECTIONS', 1000, int),
            timeout=get_env_var('TIMEOUT', 30, int),
            keepalive=get_env_var('KEEPALIVE', 2, int),
            log_level=get_env_var('LOG_LEVEL', 'info'),

            # Environment
            environment=environment
        )

        self._config = config
        self._logger.info(f"Configuration loaded for environment: {environment.value}")
        return config

    def get_config(self) -> AppConfig:
        """
        Get the current configuration.

        Raises:
            ConfigError: If no configuration has been loaded
        """
        if self._config is None:
            raise ConfigError("Configuration not loaded. Call load_from_environment() first.")
        return self._config

    def reset(self) -> 'ConfigurationFactory':
        """Reset the factory (useful for testing)"""
        self._config = None
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert current configuration to dictionary"""
        if self._config is None:
            raise ConfigError("Configuration not loaded")

        config_dict = {}
        for field_info in self._config.__dataclass_fields__.values():
            value = getattr(self._config, field_info.name)
            if isinstance(value, Environment):
                config_dict[field_info.name] = value.value
            elif isinstance(value, list):
                config_dict[field_info.name] = list(value)
            else:
                config_dict[field_info.name] = value

        return config_dict

    def get_flask_config(self) -> Dict[str, Any]:
        """
        Get Flask-compatible configuration dictionary.

        Returns:
            Dictionary suitable for Flask app.config.update()
        """
        if self._config is None:
            raise ConfigError("Configuration not loaded")

        return {
            'SECRET_KEY': self._config.secret_key,
            'DEBUG': self._config.debug,
            'ENV': self._config.flask_env,
            'MAX_ROOM_ID_LENGTH': self._config.max_room_id_length,
            'MESSAGES_FILE': self._config.messages_file,
        }


# Global factory instance
_config_factory = ConfigurationFactory()


def get_config() -> AppConfig:
    """Get the global application configuration"""
    return _config_factory.get_config()


def load_config(env_prefix: str = '') -> AppConfig:
    """Load configuration from environment variables"""
    return _config_factory.load_from_environment(env_prefix)


def reset_config() -> ConfigurationFactory:
    """Reset configuration (for testing)"""
    return _config_factory.reset()
