"""Configuration management for the translation sync system."""

from .config_manager import ConfigurationManager
from .models import (
    ConfigurationType,
    FlagConfiguration,
    RenderConfiguration,
    SyncConfiguration,
    ConfigurationError,
    ValidationResult,
)

__all__ = [
    "ConfigurationManager",
    "ConfigurationType",
    "FlagConfiguration",
    "RenderConfiguration",
    "SyncConfiguration",
    "ConfigurationError",
    "ValidationResult",
]
