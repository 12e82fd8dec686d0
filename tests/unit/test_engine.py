"""Unit tests for the composed date input engine."""

import pytest
from datetime import datetime
from unittest.mock import Mock, patch

from datefield.config.defaults import DefaultConfig, LocaleParams, LoggingParams, ParserParams
from datefield.data.models import CalendarDate, FailureKind
from datefield.engine import (
    DateInputEngine,
    from_canonical,
    navigate_month,
    navigate_year,
    parse_user_input,
    render_display,
    to_canonical,
)


class TestParseUserInput:
    """Test the composed shortcut-then-grammar entry point."""

    def test_empty_input_is_no_date(self, en_us, now_provider):
        """Blank input yields no date and no error."""
        for raw in ("", "   ", None):
            result = parse_user_input(raw, en_us, now_provider)
            assert result.is_empty
            assert result.error is None

    def test_shortcut_takes_precedence(self, en_us, now_provider):
        """Shortcut tokens are resolved before date grammars."""
        result = parse_user_input("d1", en_us, now_provider)

        assert result.date == CalendarDate(2025, 1, 16)
        assert result.grammar == "shortcut"

    def test_falls_through_to_grammars(self, en_us, now_provider):
        """Non-shortcut text goes to the flexible parser."""
        assert parse_user_input("4/5", en_us, now_provider).date == CalendarDate(2025, 4, 5)
        assert parse_user_input("4/5/23", en_us, now_provider).date == CalendarDate(2023, 4, 5)

    def test_shortcut_overflow_is_component_error(self, en_us, now_provider):
        """A shortcut beyond the calendar range is rejected, not re-parsed."""
        result = parse_user_input("y20000", en_us, now_provider)

        assert result.error.kind == FailureKind.INVALID_COMPONENT
        assert result.grammar == "shortcut"

    @pytest.mark.parametrize("raw", ["d" + "9" * 5000, "Y" + "1" * 10])
    def test_overlong_shortcut_is_component_error(self, en_us, now_provider, raw):
        """Huge shortcut counts are rejected without raising."""
        result = parse_user_input(raw, en_us, now_provider)

        assert result.error.kind == FailureKind.INVALID_COMPONENT
        assert result.grammar == "shortcut"

    def test_invalid_text_is_format_error(self, en_us, now_provider):
        """Garbage returns a FormatError value, never raises."""
        result = parse_user_input("invalid", en_us, now_provider)

        assert result.error.kind == FailureKind.INVALID_FORMAT
        assert result.error.message == "invalid date format"


class TestModuleFunctions:
    """Test the stateless interface."""

    def test_canonical_round_trip(self):
        """to_canonical and from_canonical are inverse."""
        value = CalendarDate(2025, 7, 8)
        assert to_canonical(value) == "2025-07-08T00:00:00.000Z"
        assert from_canonical(to_canonical(value)) == value

    def test_from_canonical_ignores_timezone(self):
        """External timestamps keep their written date."""
        assert from_canonical("2025-07-08T18:30:00Z") == CalendarDate(2025, 7, 8)
        assert from_canonical(None) is None

    def test_render_display(self, en_us):
        """Display uses MM/DD/YYYY for US English."""
        assert render_display(CalendarDate(2025, 7, 8), en_us) == "07/08/2025"
        assert render_display(None, en_us) == ""

    def test_navigation(self):
        """Navigation steps clamp the day."""
        assert navigate_month(CalendarDate(2025, 1, 31), 1) == CalendarDate(2025, 2, 28)
        assert navigate_year(CalendarDate(2025, 1, 31), -1) == CalendarDate(2024, 1, 31)


class TestDateInputEngine:
    """Test the engine bound to a locale and configuration."""

    def test_explicit_locale(self, now_provider):
        """An explicit tag wins over config and host environment."""
        config = DefaultConfig(
            parser=ParserParams(), locale=LocaleParams(tag="de"), logging=LoggingParams()
        )
        engine = DateInputEngine(locale_tag="en-GB", config=config, now_provider=now_provider)

        assert engine.locale.tag == "en-GB"

    def test_config_locale(self, now_provider):
        """The configured tag is used when none is passed."""
        config = DefaultConfig(
            parser=ParserParams(), locale=LocaleParams(tag="de"), logging=LoggingParams()
        )
        engine = DateInputEngine(config=config, now_provider=now_provider)

        assert engine.locale.tag == "de"
        assert engine.render_display(CalendarDate(2025, 7, 8)) == "08.07.2025"

    def test_host_locale(self, now_provider):
        """Without tag or config the host environment decides."""
        with patch('datefield.engine.detect_host_locale_tag', return_value="fr-FR"):
            engine = DateInputEngine(now_provider=now_provider)

        assert engine.locale.tag == "fr"

    def test_parser_settings_from_config(self, now_provider):
        """Parser parameters flow into the numeric grammars."""
        config = DefaultConfig(
            parser=ParserParams(two_digit_year_base=1900, strict_day_of_month=False),
            locale=LocaleParams(),
            logging=LoggingParams(),
        )
        engine = DateInputEngine(locale_tag="en-US", config=config, now_provider=now_provider)

        assert engine.parse_user_input("4/5/23").date == CalendarDate(1923, 4, 5)
        assert engine.parse_user_input("2/30/2025").date == CalendarDate(2025, 3, 2)

    def test_documented_inputs(self, engine):
        """Engine reproduces the documented input examples."""
        assert engine.parse_user_input("d").date == CalendarDate(2025, 1, 15)
        assert engine.parse_user_input("m1").date == CalendarDate(2025, 2, 15)
        assert engine.parse_user_input("y1").date == CalendarDate(2026, 1, 15)
        assert engine.parse_user_input("4/5/2025").date == CalendarDate(2025, 4, 5)
        assert not engine.parse_user_input("13/45/2025").success

    def test_today(self, engine):
        """today() reads the now provider."""
        assert engine.today() == CalendarDate(2025, 1, 15)

    def test_now_provider_returning_datetime(self, en_us):
        """Providers may return datetimes; only the date is used."""
        engine = DateInputEngine(locale_tag="en-US", now_provider=lambda: datetime(2025, 3, 1, 23, 0))

        assert engine.parse_user_input("d").date == CalendarDate(2025, 3, 1)

    def test_from_canonical_logs_corrupt_values(self, engine):
        """Undecodable stored values are logged and treated as no date."""
        engine.logger = Mock()

        assert engine.from_canonical("garbage") is None
        engine.logger.warning.assert_called_once()
        assert engine.logger.warning.call_args.kwargs["value"] == "garbage"

    def test_from_canonical_does_not_log_missing_values(self, engine):
        """None is a normal "no date" and is not logged."""
        engine.logger = Mock()

        assert engine.from_canonical(None) is None
        engine.logger.warning.assert_not_called()

    def test_parsing_metrics(self, engine):
        """Parse outcomes are counted per engine."""
        engine.parse_user_input("d")
        engine.parse_user_input("4/5")
        engine.parse_user_input("13/45/2025")
        engine.parse_user_input("")

        stats = engine.get_parsing_metrics()
        assert stats["total_parses"] == 4
        assert stats["successful_parses"] == 2
        assert stats["failed_parses"] == 1
        assert stats["empty_parses"] == 1
        assert stats["grammar_hits"] == {"shortcut": 1, "slash_no_year": 1, "slash_full_year": 1}

    def test_metrics_not_shared_between_engines(self, now_provider):
        """Each engine instance owns its metrics."""
        first = DateInputEngine(locale_tag="en-US", now_provider=now_provider)
        second = DateInputEngine(locale_tag="en-US", now_provider=now_provider)

        first.parse_user_input("d")

        assert first.get_parsing_metrics()["total_parses"] == 1
        assert second.get_parsing_metrics()["total_parses"] == 0

    def test_from_config_dir(self, tmp_path, now_provider):
        """Engines can be built from YAML configuration."""
        (tmp_path / "settings.yaml").write_text("locale:\n  tag: en-AU\n")
        (tmp_path / "locales.yaml").write_text(
            "locales:\n  en-AU:\n    language: en\n    short_pattern: DD/MM/YYYY\n"
        )

        engine = DateInputEngine.from_config_dir(tmp_path, now_provider=now_provider)

        assert engine.locale.tag == "en-AU"
        assert engine.parse_user_input("4/5/2025").date == CalendarDate(2025, 5, 4)
