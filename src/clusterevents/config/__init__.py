"""
Configuration Management Package

Provides Pydantic-based configuration models and loading for clusterevents.
"""

from clusterevents.config.models import EventFilterConfig, parse_duration
from clusterevents.config.manager import ConfigManager

__all__ = [
    "EventFilterConfig",
    "ConfigManager",
    "parse_duration",
]
