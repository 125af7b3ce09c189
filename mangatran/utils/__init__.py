"""Utility functions and helpers."""

from .logger import setup_logger, get_logger
from .config_loader import TranslatorConfig, load_config, save_config
from .retry import with_retry, always_retry

__all__ = [
    'setup_logger',
    'get_logger',
    'TranslatorConfig',
    'load_config',
    'save_config',
    'with_retry',
    'always_retry'
]
