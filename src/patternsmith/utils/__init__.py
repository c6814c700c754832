"""Configuration and logging utilities.

Modules:
    config: Configuration loading and access functions
    logger: Rich component logger
"""

from . import config, logger

__all__ = ["config", "logger"]
