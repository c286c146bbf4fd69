"""
Configuration Management System for SessionGate

Centralized configuration with a 4-tier precedence hierarchy:
environment → project → user → system defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class IdentityConfig(BaseModel):
    """Identity provider registration"""
    model_config = ConfigDict(extra='forbid')

    client_id: Optional[str] = Field(default=None, description="Application (client) ID")
    authority: str = Field(
        default="https://login.microsoftonline.com/common",
        description="Authority URL, usually https://login.microsoftonline.com/<tenant-id>",
    )
    redirect_uri: str = Field(default="http://localhost", description="Loopback redirect URI")
    scopes: List[str] = Field(default_factory=lambda: ["User.Read"], description="Scopes requested at login")
    login_timeout: Optional[float] = Field(default=None, ge=1.0, description="Seconds to wait for the browser flow")

    @field_validator("authority", "redirect_uri")
    @classmethod
    def _require_http_url(cls, value: str) -> str:
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"expected an http(s) URL, got {value!r}")
        return value


class UIConfig(BaseModel):
    """UI Configuration"""
    model_config = ConfigDict(extra='forbid')

    flet_web_mode: bool = Field(default=False, description="Enable web mode")
    flet_port: int = Field(default=8550, ge=1024, le=65535, description="Web server port")
    flet_web_renderer: str = Field(default="html", description="Web renderer type")
    title: str = Field(default="SessionGate", description="Window and page title")
    theme_mode: str = Field(default="dark", description="UI theme mode")


class LoggingConfig(BaseModel):
    """Logging Configuration"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="DEBUG", description="File log level")
    console_level: str = Field(default="WARNING", description="Console log level")
    log_dir: str = Field(default="data/logs", description="Directory for rotating log files")
    max_bytes: int = Field(default=10 * 1024 * 1024, ge=1024, description="Rotate after this many bytes")
    backup_count: int = Field(default=5, ge=0, le=50, description="Rotated files to keep")


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    identity: IdentityConfig = Field(default_factory=IdentityConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    # Metadata
    schema_version: int = Field(default=1, description="Configuration schema version")


# env var -> (section, key)
_ENV_MAP = {
    'SESSIONGATE_CLIENT_ID': ('identity', 'client_id'),
    'SESSIONGATE_AUTHORITY': ('identity', 'authority'),
    'SESSIONGATE_REDIRECT_URI': ('identity', 'redirect_uri'),
    'SESSIONGATE_SCOPES': ('identity', 'scopes'),
    'FLET_WEB_MODE': ('ui', 'flet_web_mode'),
    'FLET_PORT': ('ui', 'flet_port'),
    'FLET_WEB_RENDERER': ('ui', 'flet_web_renderer'),
    'LOG_LEVEL': ('logging', 'level'),
}


class ConfigManager:
    """Configuration manager with 4-tier precedence hierarchy"""

    def __init__(self, config_dir: Optional[Path] = None, env_file: Optional[Path] = None):
        self.config_dir = config_dir or Path.cwd() / "config"
        self.env_file = env_file
        self._system_config: Optional[SystemConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None
        self._project_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring {file_path}: top level is not a mapping")
            return {}
        return data

    def _save_yaml_file(self, file_path: Path, data: Dict[str, Any]) -> bool:
        """Save configuration to YAML file"""
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(file_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False, indent=2)
            return True
        except OSError as e:
            logger.error(f"Failed to save {file_path}: {e}")
            return False

    def _load_system_defaults(self) -> SystemConfig:
        """Load system default configuration"""
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.config_dir / "defaults.yaml")
            try:
                self._system_config = SystemConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed, using built-in defaults: {e}")
                self._system_config = SystemConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _load_project_config(self) -> Dict[str, Any]:
        if self._project_config is None:
            self._project_config = self._load_yaml_file(self.config_dir / "project.yaml")
        return self._project_config

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → project → user → system"""
        merged = self._load_system_defaults().model_dump()
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._load_project_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        if self.env_file is not None:
            load_dotenv(dotenv_path=self.env_file, override=False)

        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key) in _ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue

            if config_key == 'flet_port':
                try:
                    converted: Any = int(value)
                except ValueError:
                    logger.warning(f"Ignoring {env_key}={value!r}: not an integer")
                    continue
            elif config_key == 'flet_web_mode':
                converted = value.lower() in ('true', '1', 'yes', 'on')
            elif config_key == 'scopes':
                converted = [scope for scope in value.replace(",", " ").split() if scope]
            elif config_key == 'level':
                converted = value.upper()
            else:
                converted = value

            overrides.setdefault(section, {})[config_key] = converted

        return overrides

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ConfigurationError(
                    "Configuration validation failed",
                    details={"errors": e.errors(include_url=False)},
                ) from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_project_config(self, config_updates: Dict[str, Any]) -> bool:
        """Save project-specific configuration updates"""
        project_path = self.config_dir / "project.yaml"
        existing_config = self._load_yaml_file(project_path)
        self._deep_merge(existing_config, config_updates)

        success = self._save_yaml_file(project_path, existing_config)
        if success:
            self._project_config = None
        return success

    def reload_config(self) -> None:
        """Clear cached configurations and reload from files"""
        self._system_config = None
        self._user_config = None
        self._project_config = None
