"""Writing generated TypeScript bindings to strings and files."""

from __future__ import annotations

import json
import os
from pathlib import Path, PurePosixPath

from tsbind.typesys import Dependency, TSType

__all__ = [
    "MANIFEST_DIR_ENV",
    "NOTE",
    "ExportError",
    "CannotBeExported",
    "ManifestDirNotSet",
    "export_type",
    "export_type_to",
    "export_type_to_string",
    "output_path",
    "import_path",
    "diff_paths",
]

MANIFEST_DIR_ENV = "TSBIND_MANIFEST_DIR"
NOTE = "// This file was generated by tsbind. Do not edit this file manually.\n"

_ROOT = "/"
_CUR = "."
_PARENT = ".."


class ExportError(Exception):
    """An error which may occur when exporting a type."""


class CannotBeExported(ExportError):
    """The type has no export path."""

    def __init__(self, message: str = "this type cannot be exported") -> None:
        super().__init__(message)


class ManifestDirNotSet(ExportError):
    """The directory exports are relative to is not configured."""

    def __init__(
        self, message: str = f"the environment variable {MANIFEST_DIR_ENV} is not set"
    ) -> None:
        super().__init__(message)


def export_type(ty: TSType) -> Path:
    """Export ``ty`` to its configured path below the manifest directory."""
    path = output_path(ty)
    return export_type_to(ty, path)


def export_type_to(ty: TSType, path: str | os.PathLike[str]) -> Path:
    """Export ``ty`` to ``path``, creating parent directories as needed."""
    target = Path(path)
    buffer = export_type_to_string(ty)
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8", newline="") as handle:
            handle.write(buffer)
    except OSError as exc:
        raise ExportError("an error occurred while performing IO") from exc
    return target


def export_type_to_string(ty: TSType) -> str:
    """The full generated file for ``ty``: header, imports and declaration."""
    return NOTE + _imports(ty) + "export " + ty.decl()


def output_path(ty: TSType) -> Path:
    """Where ``ty`` is exported to."""
    manifest_dir = os.environ.get(MANIFEST_DIR_ENV)
    if manifest_dir is None:
        raise ManifestDirNotSet()
    exported_to = ty.exported_to
    if exported_to is None:
        raise CannotBeExported()
    return Path(manifest_dir) / exported_to


def _imports(ty: TSType) -> str:
    own_path = ty.exported_to
    if own_path is None:
        raise CannotBeExported()
    unique: dict[str, Dependency] = {}
    for dep in ty.dependencies():
        if dep.ty != ty:
            unique[dep.ts_name] = dep
    lines = [
        f"import type {{ {name} }} from "
        f"{json.dumps(import_path(own_path, dep.exported_to), ensure_ascii=False)};\n"
        for name, dep in sorted(unique.items())
    ]
    return "".join(lines) + "\n"


def _components(path: str) -> list[str]:
    components: list[str] = []
    if path.startswith("/"):
        components.append(_ROOT)
    for position, part in enumerate(path.split("/")):
        if not part:
            continue
        if part == _CUR:
            if position == 0:
                components.append(_CUR)
            continue
        components.append(part)
    return components


def _join(components: list[str]) -> str:
    if components and components[0] == _ROOT:
        return _ROOT + "/".join(components[1:])
    return "/".join(components)


def _parent(path: str) -> str:
    components = _components(path)
    if not components or components == [_ROOT]:
        raise ValueError("failed to calculate import path")
    return _join(components[:-1])


def import_path(from_path: str | os.PathLike[str], import_path_: str | os.PathLike[str]) -> str:
    """The module specifier for importing ``import_path_`` from the file ``from_path``."""
    base = _parent(os.fspath(from_path))
    relative = diff_paths(import_path_, base)
    if relative is None:
        raise ValueError("failed to calculate import path")
    components = _components(relative)
    if components and components[0] not in (_ROOT, _CUR, _PARENT):
        relative = f"./{relative}"
    while relative.endswith(".ts"):
        relative = relative[: -len(".ts")]
    return relative


def diff_paths(path: str | os.PathLike[str], base: str | os.PathLike[str]) -> str | None:
    """The path that leads from the directory ``base`` to ``path``, if there is one."""
    path_text = os.fspath(path)
    base_text = os.fspath(base)
    path_absolute = PurePosixPath(path_text).is_absolute()
    if path_absolute != PurePosixPath(base_text).is_absolute():
        return path_text if path_absolute else None

    ita = iter(_components(path_text))
    itb = iter(_components(base_text))
    comps: list[str] = []
    while True:
        a = next(ita, None)
        b = next(itb, None)
        if a is None and b is None:
            break
        if b is None:
            comps.append(a)
            comps.extend(ita)
            break
        if a is None:
            comps.append(_PARENT)
            continue
        if not comps and a == b:
            continue
        if b == _CUR:
            comps.append(a)
            continue
        if b == _PARENT:
            return None
        comps.append(_PARENT)
        comps.extend(_PARENT for _ in itb)
        comps.append(a)
        comps.extend(ita)
        break
    return _join(comps)