"""Runtime descriptions of types and how they are rendered in TypeScript.

Every type that can appear in a binding is a :class:`TSType`.  Built-in
kinds cover primitives, nullable values, lists, maps, ranges, tuples and
transparent wrappers; derived structs and enums build on the same interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

__all__ = [
    "Dependency",
    "TSType",
    "Primitive",
    "Opaque",
    "Zoned",
    "Nullable",
    "ArrayOf",
    "RecordOf",
    "RangeOf",
    "TupleOf",
    "Wrapper",
    "U8", "I8", "U16", "I16", "U32", "I32", "USIZE", "ISIZE", "F32", "F64",
    "NONZERO_U8", "NONZERO_I8", "NONZERO_U16", "NONZERO_I16",
    "NONZERO_U32", "NONZERO_I32", "NONZERO_USIZE", "NONZERO_ISIZE",
    "U64", "I64", "U128", "I128",
    "NONZERO_U64", "NONZERO_I64", "NONZERO_U128", "NONZERO_I128",
    "BOOL", "CHAR", "STRING", "STR", "PATH", "PATH_BUF",
    "IPV4_ADDR", "IPV6_ADDR", "IP_ADDR",
    "SOCKET_ADDR_V4", "SOCKET_ADDR_V6", "SOCKET_ADDR", "UNIT",
    "UUID", "URL", "BIG_DECIMAL", "BSON_UUID", "ORDERED_F32", "ORDERED_F64", "BYTES",
    "NAIVE_DATE_TIME", "NAIVE_DATE", "NAIVE_TIME", "MONTH", "WEEKDAY", "DURATION",
    "UTC", "LOCAL", "FIXED_OFFSET",
]

_MAX_TUPLE_LEN = 10


def _expect_args(args: Sequence[str], count: int, owner: str) -> None:
    if len(args) != count:
        raise ValueError(
            f"called {owner}.name_with_type_args with {len(args)} args"
        )


@dataclass(frozen=True)
class Dependency:
    """A type that another type refers to, with the file it is exported to."""

    ty: TSType
    ts_name: str
    exported_to: str

    @classmethod
    def from_type(cls, ty: TSType) -> Dependency | None:
        """The dependency on ``ty``, or ``None`` if ``ty`` is not exportable."""
        exported_to = ty.exported_to
        if exported_to is None:
            return None
        return cls(ty=ty, ts_name=ty.name(), exported_to=exported_to)


def _dependencies_of(types: Iterable[TSType]) -> list[Dependency]:
    return [dep for dep in map(Dependency.from_type, types) if dep is not None]


class TSType(ABC):
    """A type that can be represented in TypeScript."""

    @property
    def exported_to(self) -> str | None:
        """The path this type is exported to, or ``None`` if it cannot be exported."""
        return None

    @abstractmethod
    def name(self) -> str:
        """Name of this type in TypeScript."""

    def name_with_type_args(self, args: Sequence[str]) -> str:
        """Name of this type in TypeScript, with the given type arguments."""
        return f"{self.name()}<{', '.join(args)}>"

    def inline(self) -> str:
        """The definition of this type written out in place."""
        raise TypeError(f"{self.name()} cannot be inlined")

    def inline_flattened(self) -> str:
        """The fields of this type, for merging into an enclosing object."""
        raise TypeError(f"{self.name()} cannot be flattened")

    def decl(self) -> str:
        """The declaration of this type, e.g. ``interface User { ... }``."""
        raise TypeError(f"{self.name()} cannot be declared")

    @abstractmethod
    def dependencies(self) -> list[Dependency]:
        """Types this type depends on, for generating imports."""

    @abstractmethod
    def transparent(self) -> bool:
        """Whether this type only passes its contents through, like a list or tuple."""

    def type_args(self) -> list[TSType]:
        """The generic type arguments this type was written with."""
        return []


@dataclass(frozen=True)
class Primitive(TSType):
    """A type rendered as a fixed TypeScript keyword such as ``number``."""

    literal: str
    label: str = ""

    def name(self) -> str:
        return self.literal

    def name_with_type_args(self, args: Sequence[str]) -> str:
        if args:
            raise ValueError("called name_with_type_args on primitive")
        return self.literal

    def inline(self) -> str:
        return self.literal

    def dependencies(self) -> list[Dependency]:
        return []

    def transparent(self) -> bool:
        return False


@dataclass(frozen=True)
class Opaque(TSType):
    """A type that only appears as a type argument and renders as nothing."""

    label: str

    def name(self) -> str:
        return ""

    def inline(self) -> str:
        return ""

    def dependencies(self) -> list[Dependency]:
        return []

    def transparent(self) -> bool:
        return False


@dataclass(frozen=True)
class Zoned(TSType):
    """A date or date-time in some time zone, rendered as ``string``."""

    timezone: TSType
    kind: str = "DateTime"

    def name(self) -> str:
        return "string"

    def name_with_type_args(self, args: Sequence[str]) -> str:
        return self.name()

    def inline(self) -> str:
        return "string"

    def dependencies(self) -> list[Dependency]:
        return []

    def transparent(self) -> bool:
        return False

    def type_args(self) -> list[TSType]:
        return [self.timezone]


@dataclass(frozen=True)
class Nullable(TSType):
    """An optional value: ``T | null``."""

    inner: TSType

    def name(self) -> str:
        raise TypeError("Option has no name of its own")

    def name_with_type_args(self, args: Sequence[str]) -> str:
        _expect_args(args, 1, "Option")
        return f"{args[0]} | null"

    def inline(self) -> str:
        return f"{self.inner.inline()} | null"

    def dependencies(self) -> list[Dependency]:
        return _dependencies_of([self.inner])

    def transparent(self) -> bool:
        return True

    def type_args(self) -> list[TSType]:
        return [self.inner]


@dataclass(frozen=True)
class ArrayOf(TSType):
    """A list, set or fixed-size array: ``Array<T>``."""

    element: TSType

    def name(self) -> str:
        return "Array"

    def name_with_type_args(self, args: Sequence[str]) -> str:
        _expect_args(args, 1, "Vec")
        return f"Array<{args[0]}>"

    def inline(self) -> str:
        return f"Array<{self.element.inline()}>"

    def dependencies(self) -> list[Dependency]:
        return _dependencies_of([self.element])

    def transparent(self) -> bool:
        return True

    def type_args(self) -> list[TSType]:
        return [self.element]


@dataclass(frozen=True)
class RecordOf(TSType):
    """A map: ``Record<K, V>``."""

    key: TSType
    value: TSType

    def name(self) -> str:
        return "Record"

    def name_with_type_args(self, args: Sequence[str]) -> str:
        _expect_args(args, 2, "HashMap")
        return f"Record<{args[0]}, {args[1]}>"

    def inline(self) -> str:
        return f"Record<{self.key.inline()}, {self.value.inline()}>"

    def dependencies(self) -> list[Dependency]:
        return _dependencies_of([self.key, self.value])

    def transparent(self) -> bool:
        return True

    def type_args(self) -> list[TSType]:
        return [self.key, self.value]


@dataclass(frozen=True)
class RangeOf(TSType):
    """A range, rendered as an object with ``start`` and ``end``."""

    element: TSType
    inclusive: bool = False

    @property
    def _owner(self) -> str:
        return "RangeInclusive" if self.inclusive else "Range"

    def name(self) -> str:
        raise TypeError(f"called {self._owner}::name - Did you use a type alias?")

    def name_with_type_args(self, args: Sequence[str]) -> str:
        _expect_args(args, 1, self._owner)
        return f"{{ start: {args[0]}, end: {args[0]}, }}"

    def inline(self) -> str:
        raise TypeError(f"{self._owner} cannot be inlined")

    def dependencies(self) -> list[Dependency]:
        return _dependencies_of([self.element])

    def transparent(self) -> bool:
        return True

    def type_args(self) -> list[TSType]:
        return [self.element]


@dataclass(frozen=True, init=False)
class TupleOf(TSType):
    """A tuple of one to ten elements: ``[A, B, ...]``."""

    elements: tuple[TSType, ...] = field(default=())

    def __init__(self, *elements: TSType) -> None:
        if not 1 <= len(elements) <= _MAX_TUPLE_LEN:
            raise ValueError(
                f"a tuple must have between 1 and {_MAX_TUPLE_LEN} elements, "
                f"not {len(elements)}"
            )
        object.__setattr__(self, "elements", tuple(elements))

    def name(self) -> str:
        return f"[{', '.join(e.name() for e in self.elements)}]"

    def inline(self) -> str:
        return f"[{', '.join(e.inline() for e in self.elements)}]"

    def dependencies(self) -> list[Dependency]:
        return _dependencies_of(self.elements)

    def transparent(self) -> bool:
        return True


@dataclass(frozen=True)
class Wrapper(TSType):
    """A container that renders exactly as its contents, like a box or a cell."""

    inner: TSType
    kind: str = "Box"

    def name(self) -> str:
        return self.inner.name()

    def name_with_type_args(self, args: Sequence[str]) -> str:
        _expect_args(args, 1, self.kind)
        return args[0]

    def inline(self) -> str:
        return self.inner.inline()

    def inline_flattened(self) -> str:
        return self.inner.inline_flattened()

    def dependencies(self) -> list[Dependency]:
        return self.inner.dependencies()

    def transparent(self) -> bool:
        return self.inner.transparent()

    def type_args(self) -> list[TSType]:
        return [self.inner]


U8 = Primitive("number", "u8")
I8 = Primitive("number", "i8")
U16 = Primitive("number", "u16")
I16 = Primitive("number", "i16")
U32 = Primitive("number", "u32")
I32 = Primitive("number", "i32")
USIZE = Primitive("number", "usize")
ISIZE = Primitive("number", "isize")
F32 = Primitive("number", "f32")
F64 = Primitive("number", "f64")
NONZERO_U8 = Primitive("number", "NonZeroU8")
NONZERO_I8 = Primitive("number", "NonZeroI8")
NONZERO_U16 = Primitive("number", "NonZeroU16")
NONZERO_I16 = Primitive("number", "NonZeroI16")
NONZERO_U32 = Primitive("number", "NonZeroU32")
NONZERO_I32 = Primitive("number", "NonZeroI32")
NONZERO_USIZE = Primitive("number", "NonZeroUsize")
NONZERO_ISIZE = Primitive("number", "NonZeroIsize")

U64 = Primitive("bigint", "u64")
I64 = Primitive("bigint", "i64")
U128 = Primitive("bigint", "u128")
I128 = Primitive("bigint", "i128")
NONZERO_U64 = Primitive("bigint", "NonZeroU64")
NONZERO_I64 = Primitive("bigint", "NonZeroI64")
NONZERO_U128 = Primitive("bigint", "NonZeroU128")
NONZERO_I128 = Primitive("bigint", "NonZeroI128")

BOOL = Primitive("boolean", "bool")

CHAR = Primitive("string", "char")
STRING = Primitive("string", "String")
STR = Primitive("string", "str")
PATH = Primitive("string", "Path")
PATH_BUF = Primitive("string", "PathBuf")
IPV4_ADDR = Primitive("string", "Ipv4Addr")
IPV6_ADDR = Primitive("string", "Ipv6Addr")
IP_ADDR = Primitive("string", "IpAddr")
SOCKET_ADDR_V4 = Primitive("string", "SocketAddrV4")
SOCKET_ADDR_V6 = Primitive("string", "SocketAddrV6")
SOCKET_ADDR = Primitive("string", "SocketAddr")

UNIT = Primitive("null", "()")

UUID = Primitive("string", "Uuid")
URL = Primitive("string", "Url")
BIG_DECIMAL = Primitive("string", "BigDecimal")
BSON_UUID = Primitive("string", "bson::Uuid")
ORDERED_F32 = Primitive("number", "OrderedFloat<f32>")
ORDERED_F64 = Primitive("number", "OrderedFloat<f64>")
BYTES = ArrayOf(U8)

NAIVE_DATE_TIME = Primitive("string", "NaiveDateTime")
NAIVE_DATE = Primitive("string", "NaiveDate")
NAIVE_TIME = Primitive("string", "NaiveTime")
MONTH = Primitive("string", "Month")
WEEKDAY = Primitive("string", "Weekday")
DURATION = Primitive("string", "Duration")

UTC = Opaque("Utc")
LOCAL = Opaque("Local")
FIXED_OFFSET = Opaque("FixedOffset")