"""Configuration Manager implementation for the translation sync system.

This module loads and validates the JSON configuration that controls the
markdown parser, the rendered annotations, and the flag workflow.
"""

import json
from dataclasses import fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

from ..parsers.markdown import MarkdownConfig
from .models import (
    ConfigurationError,
    ConfigurationType,
    FlagConfiguration,
    RenderConfiguration,
    SyncConfiguration,
    ValidationResult,
)

CONFIG_FILENAME = "tl8.json"


class ConfigurationManager:
    """
    Manager for system configuration.

    Handles loading, validation, and access to the parser, render and flag
    settings. Each loaded section replaces the defaults field by field.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the configuration manager.

        Args:
            config_dir: Optional directory containing ``tl8.json``.
        """
        self._config_dir = Path(config_dir) if config_dir else None
        self._configuration = SyncConfiguration()
        self._is_loaded = False

    @property
    def configuration(self) -> SyncConfiguration:
        """Get the current system configuration."""
        return self._configuration

    @property
    def is_loaded(self) -> bool:
        """Check if configuration has been loaded."""
        return self._is_loaded

    def load(self, source: Union[str, Path, Dict[str, Any]]) -> ValidationResult:
        """
        Load and validate a configuration.

        Args:
            source: JSON file path or dictionary with optional ``markdown``,
                ``render`` and ``flag`` sections.

        Returns:
            ValidationResult indicating success, with warnings for unknown keys.

        Raises:
            ConfigurationError: If validation fails and configuration cannot be applied.
        """
        raw_data = self._parse_source(source)
        result = ValidationResult(is_valid=True)

        if not isinstance(raw_data, dict):
            result.add_error("Configuration must be a JSON object")
            raise ConfigurationError("Configuration validation failed", validation_result=result)

        known = {t.value for t in ConfigurationType}
        for key in raw_data:
            if key not in known:
                result.add_warning(f"Unknown configuration section '{key}' ignored")

        markdown_result, markdown = self._validate_section(
            raw_data.get(ConfigurationType.MARKDOWN.value), MarkdownConfig, "markdown"
        )
        render_result, render = self._validate_section(
            raw_data.get(ConfigurationType.RENDER.value), RenderConfiguration, "render"
        )
        flag_result, flag = self._validate_section(
            raw_data.get(ConfigurationType.FLAG.value), FlagConfiguration, "flag"
        )
        result = result.merge(markdown_result).merge(render_result).merge(flag_result)

        if markdown is not None and markdown.max_heading_level not in range(1, 7):
            result.add_error("markdown: 'max_heading_level' must be between 1 and 6")
        if render is not None and not render.repository_url.strip():
            result.add_error("render: 'repository_url' must be a non-empty string")

        if not result.is_valid:
            raise ConfigurationError(
                "Configuration validation failed",
                validation_result=result
            )

        self._configuration = SyncConfiguration(
            markdown=markdown,
            render=render,
            flag=flag,
            metadata={"source": str(source)} if isinstance(source, (str, Path)) else {},
        )
        self._is_loaded = True
        return result

    def _validate_section(
        self,
        data: Optional[Dict[str, Any]],
        model: type,
        prefix: str,
    ) -> Tuple[ValidationResult, Any]:
        """Validate one section against the field types of its dataclass."""
        result = ValidationResult(is_valid=True)
        default = model()
        if data is None:
            return result, default
        if not isinstance(data, dict):
            result.add_error(f"{prefix}: section must be an object")
            return result, default

        values: Dict[str, Any] = {}
        types = {f.name: type(getattr(default, f.name)) for f in fields(model)}
        for key, value in data.items():
            if key not in types:
                result.add_warning(f"{prefix}: unknown field '{key}' ignored")
                continue
            expected = types[key]
            if expected is tuple:
                if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                    result.add_error(f"{prefix}: '{key}' must be a list of strings")
                    continue
                value = tuple(value)
            elif expected is int and isinstance(value, bool):
                result.add_error(f"{prefix}: '{key}' must be an integer")
                continue
            elif not isinstance(value, expected):
                result.add_error(f"{prefix}: '{key}' must be of type {expected.__name__}")
                continue
            values[key] = value

        if not result.is_valid:
            return result, None
        return result, replace(default, **values)

    def _parse_source(
        self,
        source: Union[str, Path, Dict[str, Any]]
    ) -> Any:
        """Parse configuration source to raw data."""
        if isinstance(source, (str, Path)):
            path = Path(source)
            if not path.exists():
                raise ConfigurationError(f"Configuration file not found: {path}")

            try:
                with open(path, "r", encoding="utf-8") as f:
                    return json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid JSON in {path}: {e}")

        return source

    def load_from_directory(self, config_dir: Union[str, Path]) -> ValidationResult:
        """
        Load ``tl8.json`` from a directory if it exists.

        Args:
            config_dir: Directory that may contain the configuration file.

        Returns:
            ValidationResult; valid and empty if there is no file.
        """
        config_dir = Path(config_dir)
        config_file = config_dir / CONFIG_FILENAME
        self._config_dir = config_dir
        if not config_file.exists():
            return ValidationResult(is_valid=True)
        return self.load(config_file)

    def to_dict(self) -> Dict[str, Any]:
        return self._configuration.to_dict()
