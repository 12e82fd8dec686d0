"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..data.locales import LocaleTable, get_builtin_locale_table
from ..errors import ConfigurationError
from .defaults import DefaultConfig, LocaleParams, LoggingParams, ParserParams, get_default_config
from .validation import ConfigValidator


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def _load_yaml(self, filename: str) -> dict[str, Any]:
        path = self.config_dir / filename

        if not path.exists():
            return {}

        with open(path) as f:
            loaded = yaml.safe_load(f)

        if loaded is None:
            return {}
        if not isinstance(loaded, dict):
            raise ConfigurationError(f"{path} must contain a mapping", field=filename)
        return loaded

    def load_settings(self) -> dict[str, Any]:
        """Load settings.yaml overrides."""
        return self._load_yaml("settings.yaml")

    def load_locale_overrides(self) -> dict[str, dict[str, Any]]:
        """Load and validate locale table entries from locales.yaml."""
        locales = self._load_yaml("locales.yaml").get("locales", {}) or {}
        if not isinstance(locales, dict):
            raise ConfigurationError("'locales' must be a mapping of tag to entry", field="locales")

        errors = []
        for tag, entry in locales.items():
            errors.extend(ConfigValidator.validate_locale_entry(tag, entry))

        if errors:
            raise ConfigurationError(
                "Invalid locale definitions: " + "; ".join(f"{e.field}: {e.message}" for e in errors),
                field="locales",
                errors=errors,
            )

        return locales

    def merge_config(self, overrides: Optional[dict[str, Any]] = None) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Explicit overrides (highest priority)
        2. settings.yaml in the config directory
        3. Global defaults (lowest priority)
        """
        config = asdict(self.defaults)

        config = self._deep_merge(config, self.load_settings())

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(self, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """
        Merge and validate configuration into typed parameters.

        Raises:
            ConfigurationError: If any merged value fails validation or a
                section contains unknown keys
        """
        merged = self.merge_config(overrides)

        errors = ConfigValidator.validate_config(merged)
        if errors:
            raise ConfigurationError(
                "Invalid configuration: " + "; ".join(f"{e.field}: {e.message} (got: {e.value})" for e in errors),
                field=errors[0].field,
                errors=errors,
            )

        try:
            return DefaultConfig(
                parser=ParserParams(**merged.get("parser", {})),
                locale=LocaleParams(**merged.get("locale", {})),
                logging=LoggingParams(**merged.get("logging", {})),
            )
        except TypeError as e:
            raise ConfigurationError(f"Unknown configuration key: {e}") from e

    def build_locale_table(self, config: Optional[DefaultConfig] = None) -> LocaleTable:
        """Build the locale table: built-ins plus locales.yaml entries."""
        config = config or self.defaults
        overrides = self.load_locale_overrides()
        base = get_builtin_locale_table()

        if not overrides and config.locale.default_tag == base.default_tag:
            return base

        return base.with_overrides(overrides, default_tag=config.locale.default_tag)

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Recursively merge ``override`` into a copy of ``base``."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
