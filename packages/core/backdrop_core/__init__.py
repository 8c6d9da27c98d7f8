"""Core services: contrast engine, collaborators, settings, and logging."""

from .collaborators import ImageLoader, InlineStyleApplier, LayoutProvider, StaticLayout, StyleApplier, TargetBox
from .config import ContrastConfig, LoggingConfig, build_config, config_to_dict, load_config, save_config
from .engine import ContrastEngine, ContrastResult
from .logging_setup import configure_logging, get_logger

__all__ = [
    "ContrastConfig",
    "ContrastEngine",
    "ContrastResult",
    "ImageLoader",
    "InlineStyleApplier",
    "LayoutProvider",
    "LoggingConfig",
    "StaticLayout",
    "StyleApplier",
    "TargetBox",
    "build_config",
    "config_to_dict",
    "configure_logging",
    "get_logger",
    "load_config",
    "save_config",
]
