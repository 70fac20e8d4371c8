"""Configuration models and exceptions for the event emitter."""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path

import yaml
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_DEFAULT_MAX_LISTENERS = "EVENT_EMITTER_DEFAULT_MAX_LISTENERS"
ENV_LOG_LEVEL = "EVENT_EMITTER_LOG_LEVEL"


# --- CUSTOM EXCEPTIONS ---

class EventEmitterError(Exception):
    """Base exception for event emitter errors."""


class ConfigError(EventEmitterError):
    """Configuration loading error."""


class InvalidListenerError(EventEmitterError, TypeError):
    """Registered listener is not callable."""


class InvalidCallbackError(EventEmitterError, TypeError):
    """Completion callback for async emission is missing or not callable."""


class InvalidArgumentError(EventEmitterError, TypeError):
    """Argument has the wrong type, e.g. a non-numeric threshold."""


class InvalidSourceError(EventEmitterError, TypeError):
    """Forwarding source has no listener registration method."""


# --- CONFIGURATION DATACLASSES ---

@dataclass
class EmitterConfig:
    """Shared settings applied to every emitter."""
    default_max_listeners: int = 10


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str = "WARNING"
    log_file: str | None = None


# --- HELPER FUNCTIONS ---

def safe_load_dataclass(dclass_type, data: dict, section_name: str):
    """Safely load a dataclass from a dictionary.
    
    Ignores unknown keys and logs warnings for them.
    
    Args:
        dclass_type: Dataclass type to instantiate
        data: Dictionary with configuration data
        section_name: Name of config section (for logging)
        
    Returns:
        Instance of dclass_type with filtered data
    """
    valid_keys = {f.name for f in fields(dclass_type)}
    filtered_data = {}

    for k, v in (data or {}).items():
        if k in valid_keys:
            filtered_data[k] = v
        else:
            logger.warning(
                "Config warning: Unknown key '%s' in section '%s' ignored.",
                k, section_name
            )

    return dclass_type(**filtered_data)


def _parse_threshold(raw, source: str) -> int:
    message = f"default_max_listeners from {source} must be an integer, got {raw!r}"
    if isinstance(raw, bool):
        raise ConfigError(message)
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ConfigError(message)
        return int(raw)
    try:
        return int(raw)
    except (TypeError, ValueError) as e:
        raise ConfigError(message) from e


def _section(data: dict, name: str, path: Path) -> dict:
    section = data.get(name)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(
            f"Section '{name}' in '{path}' must be a mapping, got {type(section).__name__}."
        )
    return section


@dataclass
class AppConfig:
    """Main configuration container."""
    emitter: EmitterConfig
    logging: LoggingConfig

    @classmethod
    def default(cls) -> 'AppConfig':
        return cls(emitter=EmitterConfig(), logging=LoggingConfig())

    @classmethod
    def load(cls, config_path: Path | str) -> 'AppConfig':
        """Load configuration from a YAML file.
        
        Both sections are optional; missing values fall back to defaults.
        
        Args:
            config_path: Path to the YAML file
            
        Returns:
            AppConfig instance with loaded configuration
            
        Raises:
            ConfigError: If file not found, YAML parsing fails, or a value
                has the wrong type
        """
        path = Path(config_path)
        if not path.exists():
            raise ConfigError(f"Configuration file '{path}' not found.")

        try:
            with path.open('r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Error parsing YAML: {e}") from e

        data = data or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Configuration file '{path}' must contain a mapping.")

        emitter = safe_load_dataclass(
            EmitterConfig, _section(data, 'emitter', path), 'emitter'
        )
        emitter.default_max_listeners = _parse_threshold(
            emitter.default_max_listeners, str(path)
        )

        return cls(
            emitter=emitter,
            logging=safe_load_dataclass(
                LoggingConfig, _section(data, 'logging', path), 'logging'
            )
        )

    @classmethod
    def from_env(cls, base: 'AppConfig | None' = None) -> 'AppConfig':
        """Apply environment overrides (``.env`` files included) on top of base.
        
        Args:
            base: Configuration to override, defaults to AppConfig.default()
            
        Returns:
            New AppConfig instance
        """
        load_dotenv()
        base = base or cls.default()
        emitter = EmitterConfig(**vars(base.emitter))
        log_cfg = LoggingConfig(**vars(base.logging))

        raw = os.getenv(ENV_DEFAULT_MAX_LISTENERS)
        if raw:
            emitter.default_max_listeners = _parse_threshold(raw, ENV_DEFAULT_MAX_LISTENERS)

        level = os.getenv(ENV_LOG_LEVEL)
        if level:
            log_cfg.level = level

        return cls(emitter=emitter, logging=log_cfg)
