"""Identifier handling and case conversion for generated TypeScript names."""

from __future__ import annotations

import enum
import re

__all__ = ["DeriveError", "Inflection", "to_ts_ident", "raw_name_to_ts_field"]


class DeriveError(Exception):
    """Raised when a type definition or its attributes cannot be turned into bindings."""


_WORD = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z]+[0-9]*")


def _words(string: str) -> list[str]:
    return _WORD.findall(string)


class Inflection(enum.Enum):
    """A renaming rule applied to fields or variants."""

    LOWER = "lowercase"
    UPPER = "UPPERCASE"
    CAMEL = "camelCase"
    SNAKE = "snake_case"
    PASCAL = "PascalCase"
    SCREAMING_SNAKE = "SCREAMING_SNAKE_CASE"
    KEBAB = "kebab-case"

    def apply(self, string: str) -> str:
        """Return ``string`` converted to this case."""
        if self is Inflection.LOWER:
            return string.lower()
        if self is Inflection.UPPER:
            return string.upper()
        words = _words(string)
        if self is Inflection.CAMEL:
            if not words:
                return ""
            return words[0].lower() + "".join(w.capitalize() for w in words[1:])
        if self is Inflection.PASCAL:
            return "".join(w.capitalize() for w in words)
        if self is Inflection.SNAKE:
            return "_".join(w.lower() for w in words)
        if self is Inflection.SCREAMING_SNAKE:
            return "_".join(w.upper() for w in words)
        return "-".join(w.lower() for w in words)

    @classmethod
    def parse(cls, value: str) -> Inflection:
        """Parse a rule name such as ``camelCase`` or ``SCREAMING_SNAKE_CASE``."""
        key = value.lower().replace("_", "").replace("-", "")
        for member in cls:
            if member.value.lower().replace("_", "").replace("-", "") == key:
                return member
        raise DeriveError(f"invalid inflection: '{value}'")


def to_ts_ident(ident: str) -> str:
    """Strip the raw-identifier prefix ``r#`` from an identifier."""
    while ident.startswith("r#"):
        ident = ident[2:]
    return ident


def raw_name_to_ts_field(value: str) -> str:
    """Return ``value`` as a TypeScript field name, quoting it if necessary."""
    valid = all(c.isalnum() or c in "_$" for c in value) and not (
        value and value[0].isnumeric()
    )
    return value if valid else f'"{value}"'