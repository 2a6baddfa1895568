"""
Configuration Management System for MoveMax

Settings resolve through a 4-tier precedence hierarchy:
environment → project → user → system defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

load_dotenv()


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class AIConfig(BaseModel):
    """Generative vision provider configuration"""
    model_config = ConfigDict(extra='forbid')

    provider: str = Field(default="gemini", description="Vision provider name")
    api_key: Optional[str] = Field(default=None, description="Provider API key; mocks are used when unset")
    model: str = Field(default="gemini-2.5-flash", description="Model used for every analysis")
    base_url: Optional[str] = Field(default=None, description="Override for the provider endpoint")
    timeout: float = Field(default=60.0, ge=1.0, le=600.0, description="HTTP timeout (seconds)")

    # Mock path
    mock_delay: float = Field(default=1.5, ge=0.0, le=10.0, description="Delay before a mock image result")
    summary_mock_delay: float = Field(default=1.0, ge=0.0, le=10.0, description="Delay before a mock summary")


class StorageConfig(BaseModel):
    """Local key/value storage configuration"""
    model_config = ConfigDict(extra='forbid')

    db_path: str = Field(default="data/movemax.duckdb", description="DuckDB file backing local storage")
    key_prefix: str = Field(default="movemax", description="Prefix of the four persisted keys")


class UploadConfig(BaseModel):
    """Uploaded file limits"""
    model_config = ConfigDict(extra='forbid')

    max_image_bytes: int = Field(default=5 * 1024 * 1024, ge=1024, description="Largest accepted upload")
    allowed_mime_prefix: str = Field(default="image/", description="Accepted content type prefix")


class UIConfig(BaseModel):
    """Shell configuration"""
    model_config = ConfigDict(extra='forbid')

    toast_duration: float = Field(default=3.0, ge=0.5, le=60.0, description="Seconds a toast stays visible")
    search_result_limit: int = Field(default=6, ge=1, le=50, description="Max global search hits")
    recent_activity_limit: int = Field(default=5, ge=1, le=50, description="Notification tray size")


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    ai: AIConfig = Field(default_factory=AIConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    uploads: UploadConfig = Field(default_factory=UploadConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    schema_version: int = Field(default=1, description="Configuration schema version")


# env var -> (section, key, caster)
ENV_OVERRIDES: Dict[str, tuple] = {
    'API_KEY': ('ai', 'api_key', str),
    'GEMINI_API_KEY': ('ai', 'api_key', str),
    'GEMINI_MODEL': ('ai', 'model', str),
    'GEMINI_BASE_URL': ('ai', 'base_url', str),
    'MOVEMAX_AI_TIMEOUT': ('ai', 'timeout', float),
    'MOVEMAX_MOCK_DELAY': ('ai', 'mock_delay', float),
    'MOVEMAX_DB_PATH': ('storage', 'db_path', str),
    'MOVEMAX_KEY_PREFIX': ('storage', 'key_prefix', str),
    'MOVEMAX_MAX_UPLOAD_BYTES': ('uploads', 'max_image_bytes', int),
    'MOVEMAX_TOAST_DURATION': ('ui', 'toast_duration', float),
}


# Lowest precedence first; environment overrides are applied after these.
FILE_TIERS = ("defaults", "user", "project")


def _overlay(base: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    """Recursively apply ``updates`` onto ``base`` in place and return it."""
    for key, value in updates.items():
        current = base.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            _overlay(current, value)
        else:
            base[key] = value
    return base


def env_overrides() -> Dict[str, Dict[str, Any]]:
    """Collect section overrides from the variables listed in ``ENV_OVERRIDES``."""
    sections: Dict[str, Dict[str, Any]] = {}
    for name, (section, key, caster) in ENV_OVERRIDES.items():
        raw = os.getenv(name)
        if not raw:
            continue
        try:
            sections.setdefault(section, {})[key] = caster(raw)
        except ValueError:
            logger.warning(f"Ignoring {name}={raw!r}: not a valid {caster.__name__}")
    return sections


class ConfigManager:
    """Resolves ``SystemConfig`` from YAML tiers in ``config_dir`` plus the environment.

    Each tier file (``defaults.yaml``, ``user.yaml``, ``project.yaml``) is read once
    and cached until ``reload_config`` or a project save.
    """

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = config_dir or Path.cwd() / "config"
        self._tiers: Dict[str, Dict[str, Any]] = {}

    def tier_path(self, tier: str) -> Path:
        return self.config_dir / f"{tier}.yaml"

    def _read_tier(self, tier: str) -> Dict[str, Any]:
        path = self.tier_path(tier)
        if not path.exists():
            return {}
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {path}: expected a mapping, got {type(data).__name__}")
            return {}
        return data

    def _tier(self, tier: str) -> Dict[str, Any]:
        if tier not in self._tiers:
            data = self._read_tier(tier)
            if tier == "defaults":
                # A broken defaults file falls back to the model defaults alone.
                try:
                    SystemConfig(**data)
                except ValidationError as e:
                    logger.warning(f"System defaults validation failed: {e}")
                    data = {}
            self._tiers[tier] = data
        return self._tiers[tier]

    def merged(self) -> Dict[str, Any]:
        """Raw merged settings, before validation."""
        result = SystemConfig().model_dump()
        for tier in FILE_TIERS:
            _overlay(result, self._tier(tier))
        return _overlay(result, env_overrides())

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        try:
            return SystemConfig(**self.merged())
        except ValidationError as e:
            if validation_level is ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_project_config(self, config_updates: Dict[str, Any]) -> bool:
        """Merge ``config_updates`` into ``project.yaml``.

        Returns:
            False if the file could not be written
        """
        path = self.tier_path("project")
        contents = _overlay(self._read_tier("project"), config_updates)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(contents, f, default_flow_style=False, sort_keys=False, indent=2)
        except OSError as e:
            logger.error(f"Failed to save {path}: {e}")
            return False
        self._tiers.pop("project", None)
        return True

    def reload_config(self) -> None:
        self._tiers.clear()


_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Process-wide manager; passing ``config_dir`` replaces it."""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config(validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
    return get_config_manager().get_config(validation_level)
