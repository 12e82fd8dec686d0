#!/usr/bin/env python3
"""
Basic Usage Example - Datefield Date Input Engine

This script demonstrates the basic usage of the datefield engine with a
fixed "today". It shows how to:
- Initialize the engine for a locale
- Parse shortcut tokens and partial dates
- Store and reload canonical timestamps
- Drive a field session with commits and keyboard navigation

Run: python examples/basic_usage.py
"""

from datetime import date

from datefield.data.models import CalendarDate
from datefield.engine import DateInputEngine
from datefield.logging import configure_logging
from datefield.state.field import DateFieldSession


def fixed_today() -> date:
    """Reference date used by the demo."""
    return date(2025, 1, 15)


def show_parse(engine: DateInputEngine, raw: str) -> None:
    result = engine.parse_user_input(raw)

    if result.error is not None:
        print(f"   {raw!r:16} -> error: {result.error.message} ({result.error.kind.value})")
    elif result.is_empty:
        print(f"   {raw!r:16} -> no date")
    else:
        print(f"   {raw!r:16} -> {engine.render_display(result.date):12} "
              f"{engine.to_canonical(result.date)}  [{result.grammar}]")


def main():
    """Run the basic usage demonstration."""
    configure_logging(level="WARNING")

    print("📅 Datefield - Basic Usage Example")
    print("=" * 50)

    # 1. Initialize engines
    print("1. Initializing engines...")
    us_engine = DateInputEngine(locale_tag="en-US", now_provider=fixed_today)
    de_engine = DateInputEngine(locale_tag="de-DE", now_provider=fixed_today)
    print(f"   en-US resolves to {us_engine.locale.tag} ({us_engine.locale.short_pattern})")
    print(f"   de-DE resolves to {de_engine.locale.tag} ({de_engine.locale.short_pattern})")
    print()

    # 2. Parse input
    print("2. Parsing input (today is 2025-01-15)...")
    for raw in ["d", "d3", "m1", "y2", "4/5", "4/5/23", "4/5/2025", "July 8, 2025", "13/45/2025", "invalid", ""]:
        show_parse(us_engine, raw)
    print()

    print("   German input:")
    for raw in ["8.7.2025", "08.07.2025", "8. Juli 2025"]:
        show_parse(de_engine, raw)
    print()

    # 3. Canonical storage
    print("3. Canonical storage...")
    stored = "2025-07-08T18:30:00Z"
    decoded = us_engine.from_canonical(stored)
    print(f"   API value {stored} decodes to {decoded}")
    print(f"   Re-encoded: {us_engine.to_canonical(decoded)}")
    print()

    # 4. Field session
    print("4. Driving a field session...")
    field = DateFieldSession(us_engine, name="dueDate")
    field.focus()
    field.type_text("1/31")
    field.handle_key("Enter")
    print(f"   Committed '1/31': {field.display_text} -> {field.value}")

    field.handle_key("ArrowRight", ctrl=True)
    print(f"   Ctrl+Right:       {field.display_text} -> {field.value}")

    field.handle_key("ArrowUp", ctrl=True)
    print(f"   Ctrl+Up:          {field.display_text} -> {field.value}")

    field.type_text("not a date")
    field.blur()
    print(f"   Bad input kept:   {field.display_text!r}, error={field.error_message!r}, value={field.value}")

    field.select(CalendarDate(2025, 12, 25))
    print(f"   Picker selection: {field.display_text} -> {field.value} (picker anchor {field.picker_value})")
    print()

    # Final stats
    stats = us_engine.get_parsing_metrics()
    print("5. Engine stats:")
    print(f"   Total parses: {stats['total_parses']}")
    print(f"   Failed parses: {stats['failed_parses']}")
    print(f"   Grammar hits: {stats['grammar_hits']}")
    print()

    print("✅ Demo completed successfully!")


if __name__ == "__main__":
    main()
