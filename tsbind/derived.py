"""Types whose bindings are derived from a struct or enum definition."""

from __future__ import annotations

import copy
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from tsbind.export import export_type, export_type_to, export_type_to_string
from tsbind.typesys import Dependency, TSType

__all__ = ["Dependencies", "DerivedType", "exported_types", "export_all"]

Render = Callable[["DerivedType"], str]

_REGISTRY: list[DerivedType] = []


class Dependencies:
    """A lazily evaluated collection of the dependencies of a definition."""

    def __init__(self) -> None:
        self._sources: list[Callable[[], list[Dependency]]] = []

    def append_from(self, ty: TSType) -> None:
        """Add all dependencies of ``ty``."""
        self._sources.append(lambda: list(ty.dependencies()))

    def push_or_append_from(self, ty: TSType) -> None:
        """Add ``ty`` itself, or its dependencies if it is transparent."""

        def collect() -> list[Dependency]:
            if ty.transparent():
                return list(ty.dependencies())
            dep = Dependency.from_type(ty)
            return [] if dep is None else [dep]

        self._sources.append(collect)

    def append(self, other: Dependencies) -> None:
        """Add everything collected by ``other``."""
        self._sources.append(other.resolve)

    def resolve(self) -> list[Dependency]:
        """Evaluate the collection into a list of dependencies, in order."""
        return [dep for source in self._sources for dep in source()]


def _renderer(value: str | Render) -> Render:
    if isinstance(value, str):
        return lambda _ty: value
    return value


@dataclass(eq=False)
class _Definition:
    name: str
    inline: Render
    decl: Render
    inline_flattened: Render | None
    dependencies: Dependencies
    type_params: tuple[str, ...]
    export: bool
    export_to: str


class DerivedType(TSType):
    """A struct or enum with generated bindings.

    ``inline``, ``decl`` and ``inline_flattened`` are strings or callables
    that receive the type and return the rendered text.
    """

    def __init__(
        self,
        name: str,
        *,
        inline: str | Render,
        decl: str | Render,
        inline_flattened: str | Render | None = None,
        dependencies: Dependencies | None = None,
        type_params: Sequence[str] = (),
        export: bool = False,
        export_to: str | None = None,
    ) -> None:
        if export_to is None:
            path = f"bindings/{name}.ts"
        elif export_to.endswith("/"):
            path = f"{export_to}{name}.ts"
        else:
            path = export_to
        self._definition = _Definition(
            name=name,
            inline=_renderer(inline),
            decl=_renderer(decl),
            inline_flattened=None if inline_flattened is None else _renderer(inline_flattened),
            dependencies=Dependencies() if dependencies is None else dependencies,
            type_params=tuple(type_params),
            export=export,
            export_to=path,
        )
        self._args: tuple[TSType, ...] = ()
        if export:
            _REGISTRY.append(self)

    @property
    def exported_to(self) -> str:
        return self._definition.export_to

    @property
    def export_enabled(self) -> bool:
        """Whether the type is exported by :func:`export_all`."""
        return self._definition.export

    def name(self) -> str:
        return self._definition.name

    def name_with_type_args(self, args: Sequence[str]) -> str:
        return super().name_with_type_args(args)

    def inline(self) -> str:
        return self._definition.inline(self)

    def inline_flattened(self) -> str:
        render = self._definition.inline_flattened
        if render is None:
            return super().inline_flattened()
        return render(self)

    def decl(self) -> str:
        return self._definition.decl(self)

    def dependencies(self) -> list[Dependency]:
        return self._definition.dependencies.resolve()

    def transparent(self) -> bool:
        return False

    def type_args(self) -> list[TSType]:
        return list(self._args)

    def of(self, *args: TSType) -> DerivedType:
        """This type applied to the given type arguments."""
        params = self._definition.type_params
        if len(args) > len(params):
            raise ValueError(
                f"{self.name()} takes at most {len(params)} type arguments, got {len(args)}"
            )
        applied = copy.copy(self)
        applied._args = tuple(args)
        return applied

    def export(self) -> Path:
        """Export to the configured path below the manifest directory."""
        return export_type(self)

    def export_to(self, path: str | Path) -> Path:
        """Export to ``path``, ignoring the configured path."""
        return export_type_to(self, path)

    def export_to_string(self) -> str:
        """The generated file contents for this type."""
        return export_type_to_string(self)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DerivedType):
            return NotImplemented
        return self._definition is other._definition and self._args == other._args

    def __hash__(self) -> int:
        return hash((id(self._definition), self._args))

    def __repr__(self) -> str:
        if self._args:
            return f"DerivedType({self.name()!r}, args={list(self._args)!r})"
        return f"DerivedType({self.name()!r})"


def exported_types() -> tuple[DerivedType, ...]:
    """All types defined with ``export`` set, in definition order."""
    return tuple(_REGISTRY)


def export_all() -> list[Path]:
    """Export every type defined with ``export`` set; return the written paths."""
    return [ty.export() for ty in _REGISTRY]