"""Configuration management for the EPC Codec Service.

Settings come from two places:
- `EPC_*` environment variables (config file location, environment, logging)
- a JSON file with the HTTP, codec and auth sections

An `epc-config.<env>.json` file next to the base file replaces it when present.
The JSON sections can be re-read at runtime through the config API.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)

# Relative config and log paths resolve against the backend directory
BASE_DIR = Path(__file__).parent


class HttpConfig(BaseModel):
    """Listen address and CORS origins for the API."""

    host: str = "0.0.0.0"
    port: int = Field(default=8088, ge=1, le=65535)
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class CodecConfig(BaseModel):
    """Encode/decode defaults."""

    default_filter: int = Field(default=1, ge=0, le=7, description="Filter value used when a request omits it")
    max_batch_size: int = Field(default=1000, ge=1, description="Maximum EPCs per batch decode request")


class AuthConfig(BaseModel):
    """Shared-token check on the X-Epc-Token header."""

    enabled: bool = False
    token: str = ""


class ServiceConfig(BaseModel):
    """Complete codec service configuration."""

    http: HttpConfig = Field(default_factory=HttpConfig)
    codec: CodecConfig = Field(default_factory=CodecConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)


class Settings(BaseSettings):
    """Process-level settings read from EPC_* environment variables."""

    config_path: str = Field(default="conf/epc-config.json", description="JSON config file")
    env: str = Field(default="production", description="Selects epc-config.<env>.json if present")
    log_level: str = Field(default="INFO", description="Root logging level")
    log_dir: str = Field(default="logs", description="Directory for the rotating log file")

    class Config:
        env_prefix = "EPC_"


_settings: Optional[Settings] = None
_config: Optional[ServiceConfig] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def resolve_path(path: str) -> Path:
    """Anchor a relative path at the backend directory."""
    resolved = Path(path)
    return resolved if resolved.is_absolute() else BASE_DIR / resolved


def _config_file(config_path: Optional[str]) -> Path:
    settings = get_settings()
    base = resolve_path(config_path or settings.config_path)

    override = base.with_name(f"{base.stem}.{settings.env}{base.suffix}")
    if override.exists():
        logger.info(f"Using {settings.env} config override: {override}")
        return override
    return base


def load_config(config_path: Optional[str] = None) -> ServiceConfig:
    """Load configuration from JSON file.

    Args:
        config_path: Config file to read instead of the EPC_CONFIG_PATH setting.

    Returns:
        The loaded configuration, which also becomes the active one.

    Raises:
        OSError: If the file exists but cannot be read.
        ValueError: If the file is not valid JSON or fails validation.
    """
    global _config

    path = _config_file(config_path)
    if not path.exists():
        logger.warning(f"No config file at {path}, using built-in defaults")
        _config = ServiceConfig()
        return _config

    logger.info(f"Loading configuration from: {path}")
    with open(path, encoding="utf-8") as f:
        _config = ServiceConfig.model_validate(json.load(f))
    return _config


def get_config() -> ServiceConfig:
    """Return the active configuration, loading it on first use."""
    if _config is None:
        return load_config()
    return _config


def reload_config(config_path: Optional[str] = None) -> ServiceConfig:
    """Re-read the config file.

    The previous configuration stays active if reading fails.

    Raises:
        FileNotFoundError: If the config file has gone away since startup.
        ValueError: If the file is not valid JSON or fails validation.
    """
    path = _config_file(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    return load_config(config_path)
