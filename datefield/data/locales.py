"""
Locale resolution for date parsing and display.

Maps BCP-47-like language tags onto LocaleDefinition entries held in an
immutable LocaleTable. Lookup is exact tag, then primary subtag, then the
table default, so resolution never fails.
"""

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..errors import LocaleDefinitionError
from .models import LocaleDefinition

DEFAULT_LOCALE_TAG = "en-US"

# Short-date patterns follow each locale's conventional numeric short form.
BUILTIN_LOCALES: tuple[LocaleDefinition, ...] = (
    LocaleDefinition(tag="en-US", language="en", short_pattern="MM/DD/YYYY"),
    LocaleDefinition(tag="en-GB", language="en", short_pattern="DD/MM/YYYY"),
    LocaleDefinition(tag="fr", language="fr", short_pattern="DD/MM/YYYY"),
    LocaleDefinition(tag="de", language="de", short_pattern="DD.MM.YYYY"),
    LocaleDefinition(tag="es", language="es", short_pattern="DD/MM/YYYY"),
    LocaleDefinition(tag="it", language="it", short_pattern="DD/MM/YYYY"),
    LocaleDefinition(tag="ja", language="ja", short_pattern="YYYY/MM/DD"),
    LocaleDefinition(tag="zh-CN", language="zh", short_pattern="YYYY-MM-DD"),
    LocaleDefinition(tag="zh-TW", language="zh-Hant", short_pattern="YYYY/MM/DD"),
    LocaleDefinition(tag="pt-BR", language="pt", short_pattern="DD/MM/YYYY"),
)


def normalize_tag(tag: str) -> str:
    """Lowercase a tag and treat "_" like "-" ("en_US" -> "en-us")."""
    return tag.strip().replace("_", "-").lower()


@dataclass(frozen=True)
class LocaleTable:
    """Immutable tag -> LocaleDefinition lookup table."""

    entries: Mapping[str, LocaleDefinition]
    default_tag: str = DEFAULT_LOCALE_TAG

    @classmethod
    def create(
        cls,
        locales: tuple[LocaleDefinition, ...] = BUILTIN_LOCALES,
        default_tag: str = DEFAULT_LOCALE_TAG
    ) -> "LocaleTable":
        """Create a table from locale definitions."""
        entries = {normalize_tag(locale.tag): locale for locale in locales}
        if normalize_tag(default_tag) not in entries:
            raise LocaleDefinitionError(
                f"Default locale {default_tag!r} is not defined in the table",
                tag=default_tag
            )
        return cls(entries=MappingProxyType(entries), default_tag=default_tag)

    @property
    def default(self) -> LocaleDefinition:
        return self.entries[normalize_tag(self.default_tag)]

    @property
    def tags(self) -> list[str]:
        return sorted(locale.tag for locale in self.entries.values())

    def resolve(self, tag: Optional[str]) -> LocaleDefinition:
        """
        Resolve a language tag to a locale definition.

        Args:
            tag: Language tag such as "en-US", "fr" or "pt_BR" (case-insensitive)

        Returns:
            Exact match, else primary-subtag match, else the table default
        """
        if not tag:
            return self.default

        key = normalize_tag(tag)
        if key in self.entries:
            return self.entries[key]

        primary = key.split("-")[0]
        if primary in self.entries:
            return self.entries[primary]

        return self.default

    def with_overrides(
        self,
        overrides: Mapping[str, Mapping[str, Any]],
        default_tag: Optional[str] = None
    ) -> "LocaleTable":
        """
        Return a new table with entries added or replaced.

        Args:
            overrides: tag -> {"short_pattern": ..., "language": ...}; a missing
                key inherits from the entry being replaced
            default_tag: Optional new default tag

        Returns:
            New LocaleTable; this table is left untouched
        """
        entries = dict(self.entries)

        for tag, entry in overrides.items():
            existing = entries.get(normalize_tag(tag))
            language = entry.get("language", existing.language if existing else None)
            short_pattern = entry.get("short_pattern", existing.short_pattern if existing else None)

            if not language or not short_pattern:
                raise LocaleDefinitionError(
                    f"Locale {tag!r} needs both 'language' and 'short_pattern'",
                    tag=tag, pattern=short_pattern
                )

            entries[normalize_tag(tag)] = LocaleDefinition(
                tag=tag, language=language, short_pattern=short_pattern
            )

        return LocaleTable.create(
            tuple(entries.values()),
            default_tag=default_tag or self.default_tag,
        )


_builtin_table = LocaleTable.create()


def get_builtin_locale_table() -> LocaleTable:
    """Get the table of built-in locales."""
    return _builtin_table


def resolve_locale(tag: Optional[str], table: Optional[LocaleTable] = None) -> LocaleDefinition:
    """Resolve a tag against the given table, or the built-in one."""
    return (table or _builtin_table).resolve(tag)


def detect_host_locale_tag(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Derive a language tag from the host environment.

    Reads LC_ALL, LC_TIME and LANG in that order; "fr_FR.UTF-8" becomes
    "fr-FR". "C" and "POSIX" are treated as unset.

    Args:
        environ: Environment mapping, defaults to os.environ

    Returns:
        Language tag, DEFAULT_LOCALE_TAG when nothing usable is set
    """
    environ = os.environ if environ is None else environ

    for var in ("LC_ALL", "LC_TIME", "LANG"):
        value = environ.get(var, "")
        # Strip codeset and modifier: "de_DE.UTF-8@euro" -> "de_DE"
        value = value.split(".")[0].split("@")[0].strip()
        if value and value not in ("C", "POSIX"):
            return value.replace("_", "-")

    return DEFAULT_LOCALE_TAG
