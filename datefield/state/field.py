"""
Headless state for a single date input field.

The session owns an uncommitted display buffer and one canonical value.
Typing only edits the buffer; the canonical value changes at commit points
(blur, Enter/Tab, explicit selection, clear) and through Ctrl+Arrow
navigation. A failed commit keeps the raw text and the previous value and
records a FormatError for the UI to show.
"""

import datetime
from typing import Optional, Union

from ..data import codec
from ..data.models import CalendarDate, FormatError, ParseResult
from ..engine import DateInputEngine
from ..logging.config import get_field_logger, log_commit

field_logger = get_field_logger(__name__)

# Ctrl+key -> (unit, delta)
NAVIGATION_KEYS = {
    "ArrowUp": ("year", 1),
    "ArrowDown": ("year", -1),
    "ArrowRight": ("month", 1),
    "ArrowLeft": ("month", -1),
}


class DateFieldSession:
    """Display buffer and committed value for one date field."""

    def __init__(
        self,
        engine: DateInputEngine,
        value: Optional[str] = None,
        name: str = "date"
    ) -> None:
        """
        Initialize the session.

        Args:
            engine: Parsing/formatting engine for this field
            value: Initial canonical (or ISO-prefixed) value
            name: Field name used in log events
        """
        self.engine = engine
        self.name = name
        self.logger = field_logger

        self.focused = False
        self.display_text = ""
        self.error: Optional[FormatError] = None
        self._date: Optional[CalendarDate] = None

        self.set_value(value)

    @property
    def date(self) -> Optional[CalendarDate]:
        """Committed calendar date."""
        return self._date

    @property
    def value(self) -> Optional[str]:
        """Committed canonical timestamp, None for no date."""
        if self._date is None:
            return None
        return self.engine.to_canonical(self._date)

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None

    @property
    def picker_value(self) -> Optional[datetime.datetime]:
        """Noon-anchored UTC instant for the calendar popup."""
        if self._date is None:
            return None
        return codec.noon_instant(self._date)

    def set_value(self, value: Optional[str]) -> None:
        """
        Sync the committed value from external form state.

        The display buffer is re-rendered only while the field is not focused,
        so text being edited is never overwritten.
        """
        decoded = self.engine.from_canonical(value)
        self._date = decoded
        self.error = None

        if not self.focused:
            self.display_text = self.engine.render_display(decoded)

    def focus(self) -> None:
        self.focused = True

    def type_text(self, text: str) -> None:
        """Replace the display buffer; clears any shown error."""
        self.display_text = text
        self.error = None

    def blur(self) -> ParseResult:
        """Leave the field, committing the buffer."""
        self.focused = False
        return self.commit()

    def commit(self) -> ParseResult:
        """
        Parse the display buffer and update the committed value.

        Returns:
            The ParseResult of the buffer
        """
        raw = self.display_text
        result = self.engine.parse_user_input(raw)

        if result.error is not None:
            self.error = result.error
            log_commit(self.logger, self.name, "rejected", raw, self.value,
                       context={"kind": result.error.kind.value, "grammar": result.grammar})
            return result

        self._date = result.date
        self.error = None
        self.display_text = self.engine.render_display(result.date)
        log_commit(self.logger, self.name, "cleared" if result.is_empty else "committed",
                   raw, self.value, context={"grammar": result.grammar})
        return result

    def select(self, selected: Optional[Union[CalendarDate, datetime.date]]) -> None:
        """Commit an explicit selection from the calendar popup."""
        if selected is not None and not isinstance(selected, CalendarDate):
            selected = CalendarDate.from_date(selected)

        self._date = selected
        self.error = None
        self.display_text = self.engine.render_display(selected)
        log_commit(self.logger, self.name, "committed" if selected else "cleared",
                   self.display_text, self.value, context={"source": "selection"})

    def clear(self) -> None:
        """Drop the committed value and any uncommitted text."""
        self._date = None
        self.error = None
        self.display_text = ""
        log_commit(self.logger, self.name, "cleared", "", None, context={"source": "clear"})

    def navigate(self, unit: str, delta: int) -> bool:
        """
        Step the committed date by months or years.

        Returns:
            False (no-op) when there is no committed date
        """
        if self._date is None:
            return False

        if unit == "year":
            shifted = self.engine.navigate_year(self._date, delta)
        else:
            shifted = self.engine.navigate_month(self._date, delta)

        self._date = shifted
        self.error = None
        self.display_text = self.engine.render_display(shifted)
        self.logger.debug("Date navigated", field=self.name, unit=unit, delta=delta, value=self.value)
        return True

    def handle_key(self, key: str, ctrl: bool = False) -> bool:
        """
        Handle a key press.

        Enter commits in place, Tab commits and leaves the field, and
        Ctrl+Arrow steps the committed date (Up/Down: year, Right/Left: month).

        Returns:
            True when the key was consumed
        """
        if ctrl and key in NAVIGATION_KEYS:
            unit, delta = NAVIGATION_KEYS[key]
            return self.navigate(unit, delta)

        if key == "Enter":
            self.commit()
            return True

        if key == "Tab":
            self.blur()
            return True

        return False
