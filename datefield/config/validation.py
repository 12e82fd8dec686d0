"""Configuration validation utilities."""

import re
from dataclasses import dataclass
from typing import Any

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_TAG_RE = re.compile(r"^[A-Za-z]{2,3}([-_][A-Za-z0-9]{2,8})*$")
_PATTERN_TOKEN_RE = re.compile(r"YYYY|MM|DD")


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_parser_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate parser parameters."""
        errors = []

        if "two_digit_year_base" in params:
            value = params["two_digit_year_base"]
            if isinstance(value, bool) or not isinstance(value, int) or value < 100 or value > 9900 or value % 100:
                errors.append(ValidationError(
                    field="two_digit_year_base",
                    message="Must be a whole century between 100 and 9900",
                    value=value
                ))

        if "strict_day_of_month" in params:
            value = params["strict_day_of_month"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="strict_day_of_month",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_locale_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate locale selection parameters."""
        errors = []

        if "default_tag" in params:
            value = params["default_tag"]
            if not isinstance(value, str) or not _TAG_RE.match(value):
                errors.append(ValidationError(
                    field="default_tag",
                    message="Must be a language tag such as 'en-US'",
                    value=value
                ))

        if "tag" in params:
            value = params["tag"]
            if not isinstance(value, str) or (value and not _TAG_RE.match(value)):
                errors.append(ValidationError(
                    field="tag",
                    message="Must be empty or a language tag such as 'fr'",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_logging_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate logging parameters."""
        errors = []

        if "level" in params:
            value = params["level"]
            if not isinstance(value, str) or value.upper() not in _LOG_LEVELS:
                errors.append(ValidationError(
                    field="level",
                    message=f"Must be one of {', '.join(_LOG_LEVELS)}",
                    value=value
                ))

        if "format_json" in params:
            value = params["format_json"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="format_json",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_locale_entry(tag: Any, entry: Any) -> list[ValidationError]:
        """Validate one locale table entry from locales.yaml."""
        errors = []

        if not isinstance(tag, str) or not _TAG_RE.match(tag):
            errors.append(ValidationError(
                field="tag",
                message="Must be a language tag such as 'en-US'",
                value=tag
            ))

        if not isinstance(entry, dict):
            errors.append(ValidationError(
                field=f"{tag}",
                message="Locale entry must be a mapping",
                value=entry
            ))
            return errors

        if "short_pattern" in entry:
            value = entry["short_pattern"]
            if not isinstance(value, str) or sorted(_PATTERN_TOKEN_RE.findall(value)) != ["DD", "MM", "YYYY"]:
                errors.append(ValidationError(
                    field=f"{tag}.short_pattern",
                    message="Must contain YYYY, MM and DD exactly once",
                    value=value
                ))

        if "language" in entry:
            value = entry["language"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field=f"{tag}.language",
                    message="Must be a non-empty language code",
                    value=value
                ))

        return errors

    @classmethod
    def validate_config(cls, config: dict[str, Any]) -> list[ValidationError]:
        """Validate a merged configuration dictionary."""
        errors = []
        errors.extend(cls.validate_parser_params(config.get("parser", {})))
        errors.extend(cls.validate_locale_params(config.get("locale", {})))
        errors.extend(cls.validate_logging_params(config.get("logging", {})))
        return errors
