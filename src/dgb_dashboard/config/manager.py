import os
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


class ConfigurationError(ValueError):
    """Raised when a configuration value cannot be used."""


class NodeConfig(BaseModel):
    """Connection settings for the node's JSON-RPC interface.

    Built once at startup and never mutated afterwards.
    """
    model_config = ConfigDict(frozen=True)

    host: str = "localhost"
    port: int = 14022
    user: str = "umbrel"
    password: str = Field(default="digibyte_secure_password", repr=False)

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/"


# Environment variable -> (section, key, type)
ENV_OVERRIDES = {
    "DIGIBYTE_RPC_HOST": ("rpc", "host", str),
    "DIGIBYTE_RPC_PORT": ("rpc", "port", int),
    "DIGIBYTE_RPC_USER": ("rpc", "user", str),
    "DIGIBYTE_RPC_PASSWORD": ("rpc", "password", str),
    "HOST": ("server", "host", str),
    "PORT": ("server", "port", int),
    "LOG_LEVEL": ("logging", "level", str),
}


class Config:
    """Configuration manager for the dashboard with JSON-based configuration and environment overrides."""

    def __init__(self, config_path: str = None, environ: Optional[Mapping[str, str]] = None):
        # Set up paths relative to project root
        self.project_root = Path(__file__).parent.parent.parent.parent
        self._environ = os.environ if environ is None else environ

        if config_path:
            self.config_path = config_path
        elif self._environ.get("DASHBOARD_CONFIG"):
            self.config_path = self._environ["DASHBOARD_CONFIG"]
        else:
            self.config_path = str(self.project_root / "config.json")

        self._config = self._merge_configs(self._get_default_config(), self._load_config())
        self._apply_env_overrides()
        self._setup_logging()

    def _load_config(self) -> dict:
        """Load configuration from JSON file"""
        config_file = Path(self.config_path)
        if not config_file.exists():
            logging.info(f"Configuration file not found: {self.config_path}, using defaults")
            return {}
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.error(f"Failed to load configuration: {e}")
            return {}
        if not isinstance(config, dict):
            logging.error(f"Failed to load configuration: {self.config_path} must contain a JSON object")
            return {}
        logging.info(f"Configuration loaded from {self.config_path}")
        return config

    def _get_default_config(self) -> dict:
        """Fallback default configuration"""
        return {
            "rpc": {
                "host": "localhost",
                "port": 14022,
                "user": "umbrel",
                "password": "digibyte_secure_password"
            },
            "server": {
                "host": "0.0.0.0",
                "port": 3001,
                "title": "DigiByte Node Dashboard",
                "version": "1.0.0",
                "refresh_interval": 30,
                "cors_origins": ["*"]
            },
            "logging": {
                "level": "INFO",
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        }

    def _apply_env_overrides(self):
        """Override file values with environment variables that are set"""
        for env_name, (section, key, cast) in ENV_OVERRIDES.items():
            raw = self._environ.get(env_name)
            if raw is None or raw == "":
                continue
            try:
                value = cast(raw)
            except ValueError:
                raise ConfigurationError(f"{env_name} must be {cast.__name__}, got {raw!r}")
            self._section(section, create=True)[key] = value

    def _section(self, name: str, create: bool = False) -> dict:
        """Get a top-level section, which must be a JSON object"""
        if create:
            self._config.setdefault(name, {})
        value = self._config.get(name, {})
        if not isinstance(value, dict):
            raise ConfigurationError(
                f"Configuration section '{name}' must be an object, got {type(value).__name__}"
            )
        return value

    def _setup_logging(self):
        """Setup logging based on configuration"""
        log_config = self._section('logging')
        handlers = [logging.StreamHandler()]

        log_file = log_config.get('file')
        if log_file:
            # Ensure log directory exists
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file))

        logging.basicConfig(
            level=getattr(logging, str(log_config.get('level', 'INFO')).upper(), logging.INFO),
            format=log_config.get('format', '%(asctime)s - %(name)s - %(levelname)s - %(message)s'),
            handlers=handlers
        )

    def _merge_configs(self, base: dict, overlay: dict) -> dict:
        """Deep merge two configuration dictionaries"""
        result = base.copy()
        for key, value in overlay.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._merge_configs(result[key], value)
            else:
                result[key] = value
        return result

    def get(self, *keys, default=None) -> Any:
        """Get nested configuration value using dot notation"""
        value = self._config
        for key in keys:
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default
        return value

    def set_override(self, section: str, key: str, value: Any):
        """Override a single value, e.g. from command line arguments"""
        if value is not None:
            self._section(section, create=True)[key] = value

    def get_node_config(self) -> NodeConfig:
        """Get the immutable node RPC configuration"""
        rpc = self._section('rpc')
        try:
            return NodeConfig(**rpc)
        except ValueError as e:
            raise ConfigurationError(f"Invalid rpc configuration: {e}")

    def get_server_config(self) -> dict:
        """Get server configuration"""
        server = dict(self._section('server'))
        try:
            server['port'] = int(server.get('port', 3001))
        except (TypeError, ValueError):
            raise ConfigurationError(f"Invalid server port: {server.get('port')!r}")
        return server

    def get_logging_config(self) -> dict:
        """Get logging configuration"""
        return self._section('logging')
