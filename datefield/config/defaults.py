"""Default configuration parameters for the date input engine."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ParserParams:
    """Numeric grammar interpretation parameters."""
    two_digit_year_base: int = 2000        # "4/5/23" -> 2023
    strict_day_of_month: bool = True       # Reject Feb 30 instead of rolling forward


@dataclass(frozen=True)
class LocaleParams:
    """Locale selection parameters."""
    default_tag: str = "en-US"             # Table fallback when no tag matches
    tag: str = ""                          # Explicit override; empty = host environment


@dataclass(frozen=True)
class LoggingParams:
    """Logging output parameters."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    parser: ParserParams
    locale: LocaleParams
    logging: LoggingParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        parser=ParserParams(),
        locale=LocaleParams(),
        logging=LoggingParams(),
    )
