"""
Date input engine coordinator.

Composes the parsing pipeline behind a single date field:
Raw text → Shortcut tokens → Flexible date grammars → Canonical timestamp → Display string

Module-level functions are the stateless interface; DateInputEngine binds a
resolved locale, configuration and now provider for one field instance.
"""

import time
from pathlib import Path
from typing import Any, Optional

import structlog

from .config.defaults import DefaultConfig, get_default_config
from .config.loader import ConfigLoader
from .data import codec, formatter, navigation
from .data.locales import LocaleTable, detect_host_locale_tag, get_builtin_locale_table
from .data.models import CalendarDate, FailureKind, LocaleDefinition, ParseResult
from .data.parsers import ParserSettings, parse
from .data.shortcuts import match_shortcut, resolve_shortcut
from .errors import DateOverflowError
from .logging.config import loggable_text
from .utils.time import NowProvider, resolve_today

logger = structlog.get_logger(__name__)


def parse_user_input(
    raw: str,
    locale: LocaleDefinition,
    now_provider: Optional[NowProvider] = None,
    settings: Optional[ParserSettings] = None
) -> ParseResult:
    """
    Parse committed field text: shortcut tokens first, then date grammars.

    Args:
        raw: Raw field text
        locale: Locale for month/day order and native grammar
        now_provider: Source of "today"
        settings: Numeric grammar settings

    Returns:
        ParseResult; blank input yields an empty result, not an error
    """
    if raw is None or not raw.strip():
        return ParseResult.empty()

    try:
        token = match_shortcut(raw)
        if token is not None:
            resolved = resolve_shortcut(token, resolve_today(now_provider))
            return ParseResult.success_with_date(resolved, grammar="shortcut")
    except DateOverflowError:
        return ParseResult.failure(FailureKind.INVALID_COMPONENT, raw, grammar="shortcut")

    return parse(raw, locale, now_provider, settings)


def to_canonical(value: CalendarDate) -> str:
    """Encode a date as "YYYY-MM-DDT00:00:00.000Z"."""
    return codec.encode(value)


def from_canonical(value: Optional[str]) -> Optional[CalendarDate]:
    """Decode a stored value; None for missing or malformed input."""
    return codec.decode(value)


def render_display(value: Optional[CalendarDate], locale: LocaleDefinition) -> str:
    """Render a date in the locale's short pattern, "" for no date."""
    return formatter.render_display(value, locale)


def navigate_month(value: CalendarDate, delta: int) -> CalendarDate:
    """Step a date by months with day clamping."""
    return navigation.shift_month(value, delta)


def navigate_year(value: CalendarDate, delta: int) -> CalendarDate:
    """Step a date by years with day clamping."""
    return navigation.shift_year(value, delta)


class ParsingMetrics:
    """Simple per-engine metrics for parse operations."""

    def __init__(self):
        self.total_parses = 0
        self.successful_parses = 0
        self.failed_parses = 0
        self.empty_parses = 0
        self.grammar_hits: dict[str, int] = {}
        self.total_parse_time = 0.0

    def record_parse_start(self) -> float:
        """Record the start of a parsing operation."""
        self.total_parses += 1
        return time.perf_counter()

    def record_result(self, start_time: float, result: ParseResult) -> None:
        """Record the outcome of a parsing operation."""
        self.total_parse_time += time.perf_counter() - start_time

        if result.is_empty:
            self.empty_parses += 1
        elif result.success:
            self.successful_parses += 1
        else:
            self.failed_parses += 1

        if result.grammar:
            self.grammar_hits[result.grammar] = self.grammar_hits.get(result.grammar, 0) + 1

    def get_stats(self) -> dict[str, Any]:
        """Get current metrics."""
        avg_parse_time = self.total_parse_time / max(self.total_parses, 1)

        return {
            "total_parses": self.total_parses,
            "successful_parses": self.successful_parses,
            "failed_parses": self.failed_parses,
            "empty_parses": self.empty_parses,
            "grammar_hits": dict(self.grammar_hits),
            "avg_parse_time_ms": avg_parse_time * 1000,
        }


class DateInputEngine:
    """
    Parsing/formatting core bound to one locale and configuration.

    The locale is resolved once at construction and is immutable afterwards.
    """

    def __init__(
        self,
        locale_tag: Optional[str] = None,
        config: Optional[DefaultConfig] = None,
        now_provider: Optional[NowProvider] = None,
        locale_table: Optional[LocaleTable] = None
    ) -> None:
        """
        Initialize the engine.

        Args:
            locale_tag: Explicit tag; falls back to config, then the host environment
            config: Typed configuration, defaults to get_default_config()
            now_provider: Source of "today", defaults to the local wall clock
            locale_table: Locale lookup table, defaults to the built-in table
        """
        self.logger = logger
        self.config = config or get_default_config()
        self.now_provider = now_provider
        self.locale_table = locale_table or get_builtin_locale_table()

        requested_tag = locale_tag or self.config.locale.tag or detect_host_locale_tag()
        self.locale = self.locale_table.resolve(requested_tag)

        self.settings = ParserSettings(
            two_digit_year_base=self.config.parser.two_digit_year_base,
            strict_day_of_month=self.config.parser.strict_day_of_month,
        )
        self.metrics = ParsingMetrics()

        self.logger.debug(
            "Date input engine initialized",
            requested_tag=requested_tag,
            locale=self.locale.tag,
            short_pattern=self.locale.short_pattern,
        )

    @classmethod
    def from_config_dir(
        cls,
        config_dir: Optional[Path] = None,
        locale_tag: Optional[str] = None,
        now_provider: Optional[NowProvider] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> "DateInputEngine":
        """Create an engine from settings.yaml / locales.yaml in a directory."""
        loader = ConfigLoader.create(config_dir)
        config = loader.build_config(overrides)

        return cls(
            locale_tag=locale_tag,
            config=config,
            now_provider=now_provider,
            locale_table=loader.build_locale_table(config),
        )

    def parse_user_input(self, raw: str) -> ParseResult:
        """Parse committed field text with this engine's locale and settings."""
        start_time = self.metrics.record_parse_start()
        result = parse_user_input(raw, self.locale, self.now_provider, self.settings)
        self.metrics.record_result(start_time, result)

        if result.error is not None:
            self.logger.debug(
                "Date input rejected",
                raw=loggable_text(raw),
                kind=result.error.kind.value,
                grammar=result.grammar,
            )

        return result

    def to_canonical(self, value: CalendarDate) -> str:
        return to_canonical(value)

    def from_canonical(self, value: Optional[str]) -> Optional[CalendarDate]:
        """Decode a stored value, logging data-integrity problems."""
        decoded = from_canonical(value)

        if decoded is None and value:
            self.logger.warning("Stored date value could not be decoded", value=loggable_text(value))

        return decoded

    def render_display(self, value: Optional[CalendarDate]) -> str:
        return render_display(value, self.locale)

    def navigate_month(self, value: CalendarDate, delta: int) -> CalendarDate:
        return navigate_month(value, delta)

    def navigate_year(self, value: CalendarDate, delta: int) -> CalendarDate:
        return navigate_year(value, delta)

    def today(self) -> CalendarDate:
        """Current date according to the now provider."""
        return CalendarDate.from_date(resolve_today(self.now_provider))

    def get_parsing_metrics(self) -> dict[str, Any]:
        """Get this engine's parse metrics."""
        return self.metrics.get_stats()
