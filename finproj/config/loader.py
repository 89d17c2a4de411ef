"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError
from .defaults import (
    CacheParams,
    DebtDefaults,
    EngineConfig,
    FireDefaults,
    MonteCarloDefaults,
    PerformanceParams,
    SavingsDefaults,
    get_default_config,
)
from .validation import ConfigValidator, ValidationError

CONFIG_FILENAME = "engine.yaml"

_SECTION_TYPES = {
    "cache": CacheParams,
    "performance": PerformanceParams,
    "monte_carlo": MonteCarloDefaults,
    "fire": FireDefaults,
    "debt": DebtDefaults,
    "savings": SavingsDefaults,
}


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: EngineConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_file_config(self) -> dict[str, Any]:
        """Load overrides from ``engine.yaml`` in the config directory."""
        config_file = self.config_dir / CONFIG_FILENAME

        if not config_file.exists():
            return {}

        with open(config_file) as f:
            file_config = yaml.safe_load(f)

        return file_config or {}

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Caller overrides (highest priority)
        2. ``engine.yaml`` overrides
        3. Built-in defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        config = self._deep_merge(config, self.load_file_config())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, overrides: Optional[dict[str, Any]] = None) -> EngineConfig:
        """Merge, validate and build an ``EngineConfig``."""
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        errors.extend(self._unknown_fields(merged))
        if errors:
            messages = [f"{err.field}: {err.message} (got: {err.value})" for err in errors]
            raise ConfigurationError(
                f"Invalid engine configuration: {'; '.join(messages)}",
                errors=errors
            )

        return EngineConfig(**{
            section: section_type(**merged.get(section, {}))
            for section, section_type in _SECTION_TYPES.items()
        })

    def _unknown_fields(self, config: dict[str, Any]) -> list[ValidationError]:
        """Report keys that do not map onto a dataclass field."""
        errors = []
        for section, section_type in _SECTION_TYPES.items():
            section_config = config.get(section, {})
            if not isinstance(section_config, dict):
                continue
            known = {f.name for f in fields(section_type)}
            for key, value in section_config.items():
                if key not in known:
                    errors.append(ValidationError(
                        field=f"{section}.{key}",
                        message="Unknown configuration key",
                        value=value
                    ))
        return errors

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
