"""Project configuration read from ``ts.toml``."""

from __future__ import annotations

import os
import threading
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from tsbind.export import MANIFEST_DIR_ENV, ManifestDirNotSet

__all__ = ["Config"]


@dataclass(frozen=True)
class Config:
    """Settings for generating bindings."""

    ambient_declarations: bool = False
    out_dir: str = "typescript"

    FILE_NAME: ClassVar[str] = "ts.toml"
    _instance: ClassVar[Config | None] = None
    _lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def get(cls) -> Config:
        """The configuration of the project, loaded once and then shared."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls._load()
            return cls._instance

    @classmethod
    def _load(cls) -> Config:
        manifest_dir = os.environ.get(MANIFEST_DIR_ENV)
        if manifest_dir is None:
            raise ManifestDirNotSet()
        loaded = cls.try_load_from_dir(manifest_dir)
        return cls() if loaded is None else loaded

    @classmethod
    def try_load_from_dir(cls, directory: str | os.PathLike[str]) -> Config | None:
        """Load ``ts.toml`` from ``directory``, or return ``None`` if there is none."""
        path = Path(directory) / cls.FILE_NAME
        if not path.is_file():
            return None
        data = tomllib.loads(path.read_text(encoding="utf-8"))
        values = {}
        for name, kind in (("ambient_declarations", bool), ("out_dir", str)):
            if name not in data:
                raise ValueError(f"missing field `{name}`")
            value = data[name]
            if not isinstance(value, kind):
                raise ValueError(
                    f"invalid type for `{name}`: expected {kind.__name__}, "
                    f"found {type(value).__name__}"
                )
            values[name] = value
        return cls(**values)