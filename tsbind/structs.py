"""Bindings for struct definitions: named, tuple, newtype and unit structs."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

from tsbind.attrs import AttrInput, FieldAttr, StructAttr
from tsbind.derived import Dependencies, DerivedType
from tsbind.naming import DeriveError, Inflection, raw_name_to_ts_field, to_ts_ident
from tsbind.typesys import Dependency, Nullable, TSType, TupleOf

__all__ = [
    "TypeParam",
    "Field",
    "Fields",
    "derive_struct",
    "type_def",
    "format_type",
    "format_generics",
]

_Text = Callable[[], str]
_SHAPES = ("named", "unnamed", "unit")


@dataclass(frozen=True)
class TypeParam(TSType):
    """A generic type parameter, optionally with a default type."""

    ident: str
    default: TSType | None = None

    def name(self) -> str:
        return self.ident

    def inline(self) -> str:
        return self.ident

    def dependencies(self) -> list[Dependency]:
        return []

    def transparent(self) -> bool:
        return False


@dataclass
class Field:
    """A field of a struct or variant, with its ``ts`` and ``serde`` attributes.

    ``ty`` is only looked at when no ``type`` override is given.
    """

    ty: Any
    name: str | None = None
    ts: AttrInput = None
    serde: AttrInput = None


@dataclass(frozen=True)
class Fields:
    """The fields of a definition: named, unnamed (tuple-like) or none at all."""

    shape: str
    items: tuple[Field, ...] = ()

    def __post_init__(self) -> None:
        if self.shape not in _SHAPES:
            raise ValueError(f"unknown field shape: {self.shape!r}")
        if self.shape == "unit" and self.items:
            raise ValueError("a unit definition has no fields")

    @classmethod
    def named(cls, *args: Field | tuple[str, Any]) -> Fields:
        """Named fields, given as :class:`Field` objects or ``(name, type)`` pairs."""
        items = []
        for arg in args:
            if isinstance(arg, Field):
                item = arg
            else:
                name, ty = arg
                item = Field(ty, name)
            if item.name is None:
                raise ValueError("a named field needs a name")
            items.append(item)
        return cls("named", tuple(items))

    @classmethod
    def unnamed(cls, *args: Any) -> Fields:
        """Positional fields, given as :class:`Field` objects or bare types."""
        return cls(
            "unnamed", tuple(a if isinstance(a, Field) else Field(a) for a in args)
        )

    @classmethod
    def unit(cls) -> Fields:
        """No fields at all."""
        return cls("unit")


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


def _const(text: str) -> _Text:
    return lambda: text


def _field_attr(item: Field) -> FieldAttr:
    return FieldAttr.from_attrs(item.ts, item.serde)


def derive_struct(
    name: str,
    fields: Fields,
    *,
    generics: Iterable[TypeParam | str] = (),
    ts: AttrInput = None,
    serde: AttrInput = None,
) -> DerivedType:
    """Derive the bindings of a struct from its fields and attributes."""
    attr = StructAttr.from_attrs(ts, serde)
    return type_def(attr, name, fields, generics)


def type_def(
    attr: StructAttr,
    name: str,
    fields: Fields,
    generics: Iterable[TypeParam | str] = (),
) -> DerivedType:
    """Derive the bindings of a struct-like definition with parsed attributes."""
    params = _params(generics)
    ts_name = attr.rename if attr.rename is not None else to_ts_ident(name)
    if fields.shape == "named":
        if not fields.items:
            return _unit_like(attr, ts_name, "Record<string, never>")
        return _named(attr, ts_name, fields, params)
    if fields.shape == "unnamed":
        if not fields.items:
            return _unit_like(attr, ts_name, "never[]")
        if len(fields.items) == 1:
            return _newtype(attr, ts_name, fields, params)
        return _tuple(attr, ts_name, fields, params)
    return _unit_like(attr, ts_name, "null")


def format_generics(
    dependencies: Dependencies, generics: Iterable[TypeParam | str]
) -> str:
    """The type parameter list, e.g. ``<A, B = string>``, or ``""`` if there is none.

    Defaults are formatted as types and their dependencies are recorded.
    """
    params = _params(generics)
    if not params:
        return ""
    parts = [
        param.ident
        if param.default is None
        else f"{param.ident} = {format_type(param.default, dependencies, params)}"
        for param in params
    ]
    return f"<{', '.join(parts)}>"


def format_type(
    ty: TSType, dependencies: Dependencies, generics: Iterable[TypeParam | str]
) -> str:
    """The name of ``ty`` as used in a field, recording its dependencies."""
    params = _params(generics)
    if isinstance(ty, TypeParam) and any(p.ident == ty.ident for p in params):
        return ty.ident

    if isinstance(ty, TupleOf):
        tuple_struct = type_def(StructAttr(), "_", Fields.unnamed(*ty.elements), params)
        dependencies.append_from(tuple_struct)
        return tuple_struct.inline()

    dependencies.push_or_append_from(ty)
    args = ty.type_args()
    if not args:
        return ty.name()
    return ty.name_with_type_args([format_type(a, dependencies, params) for a in args])


def _check_unit_attributes(attr: StructAttr) -> None:
    if attr.rename_all is not None:
        raise DeriveError("`rename_all` is not applicable to unit structs")
    if attr.tag is not None:
        raise DeriveError("`tag` is not applicable to unit structs")


def _unit_like(attr: StructAttr, name: str, literal: str) -> DerivedType:
    _check_unit_attributes(attr)
    return DerivedType(
        name,
        inline=literal,
        decl=f"type {name} = {literal};",
        export=attr.export,
        export_to=attr.export_to,
    )


def _named(
    attr: StructAttr, name: str, fields: Fields, params: tuple[TypeParam, ...]
) -> DerivedType:
    pieces: list[_Text] = []
    dependencies = Dependencies()
    if attr.tag is not None:
        pieces.append(_const(f'{attr.tag}: "{name}",'))

    for item in fields.items:
        piece = _named_field(item, dependencies, attr.rename_all, params)
        if piece is not None:
            pieces.append(piece)

    generic_args = format_generics(dependencies, params)

    def fields_text() -> str:
        return " ".join(piece() for piece in pieces)

    return DerivedType(
        name,
        inline=lambda _ty: f"{{ {fields_text()} }}",
        decl=lambda ty: f"interface {name}{generic_args} {ty.inline()}",
        inline_flattened=lambda _ty: fields_text(),
        dependencies=dependencies,
        type_params=[p.ident for p in params],
        export=attr.export,
        export_to=attr.export_to,
    )


def _named_field(
    item: Field,
    dependencies: Dependencies,
    rename_all: Inflection | None,
    params: tuple[TypeParam, ...],
) -> _Text | None:
    field_attr = _field_attr(item)
    if field_attr.skip:
        return None

    ty = item.ty
    optional_annotation = ""
    if field_attr.optional:
        ty = _extract_option_argument(ty)
        optional_annotation = "?"

    if field_attr.flatten:
        if field_attr.type_override is not None:
            raise DeriveError("`type` is not compatible with `flatten`")
        if field_attr.rename is not None:
            raise DeriveError("`rename` is not compatible with `flatten`")
        if field_attr.inline:
            raise DeriveError("`inline` is not compatible with `flatten`")
        dependencies.append_from(ty)
        return ty.inline_flattened

    if field_attr.type_override is not None:
        formatted = _const(field_attr.type_override)
    elif field_attr.inline:
        dependencies.append_from(ty)
        formatted = ty.inline
    else:
        formatted = _const(format_type(ty, dependencies, params))

    field_name = to_ts_ident(item.name or "")
    if field_attr.rename is not None:
        ts_name = field_attr.rename
    elif rename_all is not None:
        ts_name = rename_all.apply(field_name)
    else:
        ts_name = field_name
    valid_name = raw_name_to_ts_field(ts_name)

    return lambda: f"{valid_name}{optional_annotation}: {formatted()},"


def _extract_option_argument(ty: Any) -> TSType:
    if not isinstance(ty, Nullable):
        raise DeriveError("`optional` can only be used on an Option<T> type")
    return ty.inner


def _newtype(
    attr: StructAttr, name: str, fields: Fields, params: tuple[TypeParam, ...]
) -> DerivedType:
    if attr.rename_all is not None:
        raise DeriveError("`rename_all` is not applicable to newtype structs")
    if attr.tag is not None:
        raise DeriveError("`tag` is not applicable to newtype structs")

    inner = fields.items[0]
    field_attr = _field_attr(inner)
    if field_attr.rename is not None:
        raise DeriveError("`rename` is not applicable to newtype fields")
    if field_attr.skip:
        raise DeriveError("`skip` is not applicable to newtype fields")
    if field_attr.optional:
        raise DeriveError("`optional` is not applicable to newtype fields")
    if field_attr.flatten:
        raise DeriveError("`flatten` is not applicable to newtype fields")

    ty = inner.ty
    dependencies = Dependencies()
    if field_attr.type_override is not None:
        inline_def = _const(field_attr.type_override)
    elif field_attr.inline:
        dependencies.append_from(ty)
        inline_def = ty.inline
    else:
        dependencies.push_or_append_from(ty)
        inline_def = _const(format_type(ty, dependencies, params))

    generic_args = format_generics(dependencies, params)
    return DerivedType(
        name,
        inline=lambda _ty: inline_def(),
        decl=lambda _ty: f"type {name}{generic_args} = {inline_def()};",
        dependencies=dependencies,
        type_params=[p.ident for p in params],
        export=attr.export,
        export_to=attr.export_to,
    )


def _tuple(
    attr: StructAttr, name: str, fields: Fields, params: tuple[TypeParam, ...]
) -> DerivedType:
    if attr.rename_all is not None:
        raise DeriveError("`rename_all` is not applicable to tuple structs")
    if attr.tag is not None:
        raise DeriveError("`tag` is not applicable to tuple structs")

    pieces: list[_Text] = []
    dependencies = Dependencies()
    for item in fields.items:
        field_attr = _field_attr(item)
        if field_attr.skip:
            continue
        if field_attr.rename is not None:
            raise DeriveError("`rename` is not applicable to tuple structs")
        if field_attr.optional:
            raise DeriveError("`optional` is not applicable to tuple fields")
        if field_attr.flatten:
            raise DeriveError("`flatten` is not applicable to tuple fields")

        ty = item.ty
        if field_attr.type_override is not None:
            pieces.append(_const(field_attr.type_override))
        elif field_attr.inline:
            pieces.append(ty.inline)
            dependencies.append_from(ty)
        else:
            pieces.append(_const(format_type(ty, dependencies, params)))
            dependencies.push_or_append_from(ty)

    generic_args = format_generics(dependencies, params)

    def inline_text() -> str:
        return f"[{', '.join(piece() for piece in pieces)}]"

    return DerivedType(
        name,
        inline=lambda _ty: inline_text(),
        decl=lambda ty: f"type {name}{generic_args} = {ty.inline()};",
        dependencies=dependencies,
        type_params=[p.ident for p in params],
        export=attr.export,
        export_to=attr.export_to,
    )