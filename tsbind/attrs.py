"""Attributes that control how structs, enums, fields and variants are rendered.

Each attribute is a mapping of keys to values, one mapping per attribute; flags
take ``True`` and everything else takes a string.  ``ts`` attributes are parsed
strictly, ``serde`` attributes are parsed leniently: one that cannot be parsed
is reported on stderr and ignored.
"""

from __future__ import annotations

import enum
import sys
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from tsbind.naming import DeriveError, Inflection

__all__ = [
    "TagStyle",
    "Tagged",
    "StructAttr",
    "EnumAttr",
    "FieldAttr",
    "VariantAttr",
    "print_warning",
]

AttrInput = Mapping[str, Any] | Iterable[Mapping[str, Any]] | None
_Setter = Callable[[Any, Any], None]


def print_warning(title: str, content: str, note: str) -> None:
    """Print a message formatted like a compiler warning to stderr."""
    color = sys.stderr.isatty()

    def paint(code: str) -> str:
        return code if color else ""

    yellow_bold = paint("\x1b[1;93m")
    white_bold = paint("\x1b[1;97m")
    white = paint("\x1b[0;97m")
    blue = paint("\x1b[1;94m")
    reset = paint("\x1b[0m")
    sys.stderr.write(
        f"{yellow_bold}warning{white_bold}: {title}\n"
        f"{blue}  | \n"
        f"  | {white}{content}\n"
        f"{blue}  | \n"
        f"  = {white_bold}note: {white}{note}{reset}\n"
    )


def _expect_str(value: Any) -> str:
    if not isinstance(value, str):
        raise DeriveError("expected string")
    return value


def _expect_flag(key: str) -> Callable[[Any], bool]:
    def check(value: Any) -> bool:
        if not isinstance(value, bool):
            raise DeriveError(f"`{key}` takes no value")
        return value

    return check


def _set_str(name: str) -> _Setter:
    def setter(out: Any, value: Any) -> None:
        setattr(out, name, _expect_str(value))

    return setter


def _set_inflection(name: str) -> _Setter:
    def setter(out: Any, value: Any) -> None:
        setattr(out, name, Inflection.parse(_expect_str(value)))

    return setter


def _set_flag(key: str, name: str) -> _Setter:
    check = _expect_flag(key)

    def setter(out: Any, value: Any) -> None:
        if check(value):
            setattr(out, name, True)

    return setter


def _accept_optional_str(out: Any, value: Any) -> None:
    if value is not True:
        _expect_str(value)


def _set_optional_if_none(out: Any, value: Any) -> None:
    out.optional = _expect_str(value) == "Option::is_none"


def _attributes(attrs: AttrInput) -> list[Mapping[str, Any]]:
    if attrs is None:
        return []
    if isinstance(attrs, Mapping):
        return [attrs]
    items = list(attrs)
    for item in items:
        if not isinstance(item, Mapping):
            raise TypeError(f"an attribute must be a mapping, not {type(item).__name__}")
    return items


def _render(path: str, attribute: Mapping[str, Any]) -> str:
    parts = []
    for key, value in attribute.items():
        if value is True:
            parts.append(key)
        elif isinstance(value, str):
            parts.append(f'{key} = "{value}"')
        else:
            parts.append(f"{key} = {value!r}")
    return f"#[{path}({', '.join(parts)})]"


def _parse_one(cls: type, keys: Mapping[str, _Setter], attribute: Mapping[str, Any]) -> Any:
    if not attribute:
        raise DeriveError("expected attribute")
    out = cls()
    for key, value in attribute.items():
        setter = keys.get(key)
        if setter is None:
            raise DeriveError("unexpected attribute")
        setter(out, value)
    return out


def _collect(
    cls: type,
    ts: AttrInput,
    serde: AttrInput,
    ts_keys: Mapping[str, _Setter],
    serde_keys: Mapping[str, _Setter],
) -> Any:
    result = cls()
    for parsed in [_parse_one(cls, ts_keys, a) for a in _attributes(ts)]:
        result.merge(parsed)
    for attribute in _attributes(serde):
        try:
            parsed = _parse_one(cls, serde_keys, attribute)
        except DeriveError:
            print_warning(
                "failed to parse serde attribute",
                _render("serde", attribute),
                "this attribute could not be parsed. It will be ignored.",
            )
            continue
        result.merge(parsed)
    return result


def _first(current: Any, other: Any) -> Any:
    return current if current is not None else other


class TagStyle(enum.Enum):
    """How an enum's variant tag is represented."""

    EXTERNALLY = "externally"
    ADJACENTLY = "adjacently"
    INTERNALLY = "internally"
    UNTAGGED = "untagged"


@dataclass(frozen=True)
class Tagged:
    """The tagging of an enum, with its tag and content field names where used."""

    style: TagStyle
    tag: str | None = None
    content: str | None = None


@dataclass
class VariantAttr:
    """Attributes of an enum variant."""

    rename: str | None = None
    rename_all: Inflection | None = None
    inline: bool = False
    skip: bool = False

    @classmethod
    def from_attrs(cls, ts: AttrInput = None, serde: AttrInput = None) -> VariantAttr:
        return _collect(cls, ts, serde, _VARIANT_TS, _VARIANT_SERDE)

    def merge(self, other: VariantAttr) -> None:
        self.rename = _first(self.rename, other.rename)
        self.rename_all = _first(self.rename_all, other.rename_all)
        self.inline = self.inline or other.inline
        self.skip = self.skip or other.skip


@dataclass
class StructAttr:
    """Attributes of a struct."""

    rename_all: Inflection | None = None
    rename: str | None = None
    export_to: str | None = None
    export: bool = False
    tag: str | None = None

    @classmethod
    def from_attrs(cls, ts: AttrInput = None, serde: AttrInput = None) -> StructAttr:
        return _collect(cls, ts, serde, _STRUCT_TS, _STRUCT_SERDE)

    def merge(self, other: StructAttr) -> None:
        self.rename = _first(self.rename, other.rename)
        self.rename_all = _first(self.rename_all, other.rename_all)
        self.export_to = _first(self.export_to, other.export_to)
        self.export = self.export or other.export
        self.tag = _first(self.tag, other.tag)

    @classmethod
    def from_variant(cls, variant: VariantAttr) -> StructAttr:
        """Struct attributes for a variant rendered as a struct."""
        return cls(rename=variant.rename, rename_all=variant.rename_all)


@dataclass
class EnumAttr:
    """Attributes of an enum."""

    rename_all: Inflection | None = None
    rename: str | None = None
    export_to: str | None = None
    export: bool = False
    tag: str | None = None
    untagged: bool = False
    content: str | None = None

    @classmethod
    def from_attrs(cls, ts: AttrInput = None, serde: AttrInput = None) -> EnumAttr:
        return _collect(cls, ts, serde, _ENUM_TS, _ENUM_SERDE)

    def merge(self, other: EnumAttr) -> None:
        self.rename = _first(self.rename, other.rename)
        self.rename_all = _first(self.rename_all, other.rename_all)
        self.tag = _first(self.tag, other.tag)
        self.untagged = self.untagged or other.untagged
        self.content = _first(self.content, other.content)
        self.export = self.export or other.export
        self.export_to = _first(self.export_to, other.export_to)

    def tagged(self) -> Tagged:
        """The enum's tagging, checking that the settings are compatible."""
        if self.untagged:
            if self.content is not None:
                raise DeriveError("untagged cannot be used with content")
            if self.tag is not None:
                raise DeriveError("untagged cannot be used with tag")
            return Tagged(TagStyle.UNTAGGED)
        if self.tag is None:
            if self.content is not None:
                raise DeriveError("content cannot be used without tag")
            return Tagged(TagStyle.EXTERNALLY)
        if self.content is None:
            return Tagged(TagStyle.INTERNALLY, tag=self.tag)
        return Tagged(TagStyle.ADJACENTLY, tag=self.tag, content=self.content)


@dataclass
class FieldAttr:
    """Attributes of a struct or variant field."""

    type_override: str | None = None
    rename: str | None = None
    inline: bool = False
    skip: bool = False
    optional: bool = False
    flatten: bool = False

    @classmethod
    def from_attrs(cls, ts: AttrInput = None, serde: AttrInput = None) -> FieldAttr:
        return _collect(cls, ts, serde, _FIELD_TS, _FIELD_SERDE)

    def merge(self, other: FieldAttr) -> None:
        self.rename = _first(self.rename, other.rename)
        self.type_override = _first(self.type_override, other.type_override)
        self.inline = self.inline or other.inline
        self.skip = self.skip or other.skip
        self.optional = self.optional or other.optional
        self.flatten = self.flatten or other.flatten


_STRUCT_TS: dict[str, _Setter] = {
    "rename": _set_str("rename"),
    "rename_all": _set_inflection("rename_all"),
    "export": _set_flag("export", "export"),
    "export_to": _set_str("export_to"),
}

_STRUCT_SERDE: dict[str, _Setter] = {
    "rename": _set_str("rename"),
    "rename_all": _set_inflection("rename_all"),
    "tag": _set_str("tag"),
    "deny_unknown_fields": _accept_optional_str,
    "default": _accept_optional_str,
}

_ENUM_TS: dict[str, _Setter] = {
    "rename": _set_str("rename"),
    "rename_all": _set_inflection("rename_all"),
    "export_to": _set_str("export_to"),
    "export": _set_flag("export", "export"),
}

_ENUM_SERDE: dict[str, _Setter] = {
    "rename": _set_str("rename"),
    "rename_all": _set_inflection("rename_all"),
    "tag": _set_str("tag"),
    "content": _set_str("content"),
    "untagged": _set_flag("untagged", "untagged"),
}

_FIELD_TS: dict[str, _Setter] = {
    "type": _set_str("type_override"),
    "rename": _set_str("rename"),
    "inline": _set_flag("inline", "inline"),
    "skip": _set_flag("skip", "skip"),
    "optional": _set_flag("optional", "optional"),
    "flatten": _set_flag("flatten", "flatten"),
}

_FIELD_SERDE: dict[str, _Setter] = {
    "rename": _set_str("rename"),
    "skip": _set_flag("skip", "skip"),
    "skip_serializing": _set_flag("skip_serializing", "skip"),
    "skip_deserializing": _set_flag("skip_deserializing", "skip"),
    "skip_serializing_if": _set_optional_if_none,
    "flatten": _set_flag("flatten", "flatten"),
    "default": _accept_optional_str,
}

_VARIANT_TS: dict[str, _Setter] = {
    "rename": _set_str("rename"),
    "rename_all": _set_inflection("rename_all"),
    "inline": _set_flag("inline", "inline"),
    "skip": _set_flag("skip", "skip"),
}

_VARIANT_SERDE: dict[str, _Setter] = {
    "rename": _set_str("rename"),
    "rename_all": _set_inflection("rename_all"),
    "skip": _set_flag("skip", "skip"),
    "skip_serializing": _set_flag("skip_serializing", "skip"),
    "skip_deserializing": _set_flag("skip_deserializing", "skip"),
}