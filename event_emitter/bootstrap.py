"""Process-wide setup: logging and shared emitter defaults."""

import logging
from pathlib import Path

from .config import AppConfig
from .core import EventEmitter

logger = logging.getLogger(__name__)


def setup_logging(config_log_level: str, log_file: Path | str | None = None) -> None:
    """Configure logging with a console handler and an optional file handler.
    
    Args:
        config_log_level: Console level name, e.g. "INFO"
        log_file: Optional path; receives everything from DEBUG up
    """
    log_level = getattr(logging, config_log_level.upper(), logging.INFO)

    console_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(name)s - %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_formatter)
    handlers = [console_handler]

    if log_file:
        file_formatter = logging.Formatter(
            '%(asctime)s - %(levelname)s - %(name)s - %(funcName)s - %(message)s'
        )
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(file_formatter)
        handlers.append(file_handler)

    logging.basicConfig(
        level=logging.DEBUG if log_file else log_level,
        handlers=handlers,
        force=True
    )


def configure(config: AppConfig | None = None, *, init_logging: bool = True) -> AppConfig:
    """Apply configuration to the process.
    
    Sets ``EventEmitter.default_max_listeners``; emitters created before
    this call keep their own threshold.
    
    Args:
        config: Configuration to apply, defaults to AppConfig.from_env()
        init_logging: Whether to call setup_logging as well
        
    Returns:
        The applied configuration
    """
    if config is None:
        config = AppConfig.from_env()

    if init_logging:
        setup_logging(config.logging.level, config.logging.log_file)

    value = EventEmitter.set_default_max_listeners(config.emitter.default_max_listeners)
    logger.debug("Default max listeners set to %s", value)
    return config
