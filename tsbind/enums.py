"""Bindings for enum definitions, rendered as TypeScript union types."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from tsbind.attrs import (
    AttrInput,
    EnumAttr,
    FieldAttr,
    StructAttr,
    TagStyle,
    VariantAttr,
)
from tsbind.derived import Dependencies, DerivedType
from tsbind.structs import Field, Fields, TypeParam, format_generics, format_type, type_def

__all__ = ["Variant", "derive_enum"]

_Text = Callable[[], str]


@dataclass
class Variant:
    """A variant of an enum, with its fields and its ``ts`` and ``serde`` attributes."""

    name: str
    fields: Fields = field(default_factory=Fields.unit)
    ts: AttrInput = None
    serde: AttrInput = None


def _params(generics: Iterable[TypeParam | str]) -> tuple[TypeParam, ...]:
    params = []
    for param in generics:
        if isinstance(param, TypeParam):
            params.append(param)
        elif isinstance(param, str):
            params.append(TypeParam(param))
        else:
            raise TypeError(
                f"a generic parameter must be a TypeParam or str, not {type(param).__name__}"
            )
    return tuple(params)


def _as_variant(value: Variant | str) -> Variant:
    if isinstance(value, Variant):
        return value
    if isinstance(value, str):
        return Variant(value)
    raise TypeError(f"a variant must be a Variant or str, not {type(value).__name__}")


def _const(text: str) -> _Text:
    return lambda: text


def _is_single_unnamed(fields: Fields) -> bool:
    return fields.shape == "unnamed" and len(fields.items) == 1


def _single_field_type(
    item: Field, dependencies: Dependencies, params: tuple[TypeParam, ...]
) -> str:
    field_attr = FieldAttr.from_attrs(item.ts, item.serde)
    if field_attr.type_override is not None:
        return field_attr.type_override
    return format_type(item.ty, dependencies, params)


def derive_enum(
    name: str,
    variants: Iterable[Variant | str],
    *,
    generics: Iterable[TypeParam | str] = (),
    ts: AttrInput = None,
    serde: AttrInput = None,
) -> DerivedType:
    """Derive the bindings of an enum from its variants and attributes.

    A plain string stands for a variant without fields.
    """
    enum_attr = EnumAttr.from_attrs(ts, serde)
    ts_name = enum_attr.rename if enum_attr.rename is not None else name
    items = [_as_variant(v) for v in variants]

    if not items:
        return DerivedType(
            ts_name,
            inline="never",
            decl=f"type {ts_name} = never;",
            export=enum_attr.export,
            export_to=enum_attr.export_to,
        )

    params = _params(generics)
    dependencies = Dependencies()
    pieces: list[_Text] = []
    for variant in items:
        piece = _format_variant(variant, enum_attr, dependencies, params)
        if piece is not None:
            pieces.append(piece)

    generic_args = format_generics(dependencies, params)

    def inline_text() -> str:
        return " | ".join(piece() for piece in pieces)

    return DerivedType(
        ts_name,
        inline=lambda _ty: inline_text(),
        decl=lambda ty: f"type {ts_name}{generic_args} = {ty.inline()};",
        dependencies=dependencies,
        type_params=[p.ident for p in params],
        export=enum_attr.export,
        export_to=enum_attr.export_to,
    )


def _format_variant(
    variant: Variant,
    enum_attr: EnumAttr,
    dependencies: Dependencies,
    params: tuple[TypeParam, ...],
) -> _Text | None:
    variant_attr = VariantAttr.from_attrs(variant.ts, variant.serde)
    if variant_attr.skip:
        return None

    if variant_attr.rename is not None:
        name = variant_attr.rename
    elif enum_attr.rename_all is not None:
        name = enum_attr.rename_all.apply(variant.name)
    else:
        name = variant.name

    fields = variant.fields
    variant_type = type_def(StructAttr.from_variant(variant_attr), "_", fields, params)
    inline_type = variant_type.inline
    tagged = enum_attr.tagged()
    is_unit = fields.shape == "unit"

    piece: _Text
    if tagged.style is TagStyle.UNTAGGED:
        piece = inline_type
    elif tagged.style is TagStyle.EXTERNALLY:
        if is_unit:
            piece = _const(f'"{name}"')
        else:
            piece = lambda: f'{{ "{name}": {inline_type()} }}'  # noqa: E731
    elif tagged.style is TagStyle.ADJACENTLY:
        tag, content = tagged.tag, tagged.content
        if _is_single_unnamed(fields):
            ty = _single_field_type(fields.items[0], dependencies, params)
            piece = _const(f'{{ "{tag}": "{name}", "{content}": {ty} }}')
        elif is_unit:
            piece = _const(f'{{ "{tag}": "{name}" }}')
        else:
            piece = lambda: (  # noqa: E731
                f'{{ "{tag}": "{name}", "{content}": {inline_type()} }}'
            )
    else:
        tag = tagged.tag
        if fields.shape == "named" and fields.items:
            piece = lambda: (  # noqa: E731
                f'{{ "{tag}": "{name}", {variant_type.inline_flattened()} }}'
            )
        elif _is_single_unnamed(fields):
            ty = _single_field_type(fields.items[0], dependencies, params)
            piece = _const(f'{{ "{tag}": "{name}" }} & {ty}')
        elif is_unit:
            piece = _const(f'{{ "{tag}": "{name}" }}')
        else:
            piece = lambda: f'{{ "{tag}": "{name}" }} & {inline_type()}'  # noqa: E731

    dependencies.append_from(variant_type)
    return piece