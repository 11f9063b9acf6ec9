import pytest

from tsbind.typesys import (
    BOOL,
    F64,
    FIXED_OFFSET,
    I32,
    LOCAL,
    NAIVE_DATE,
    NAIVE_DATE_TIME,
    STR,
    STRING,
    U8,
    U32,
    U64,
    UNIT,
    UTC,
    ArrayOf,
    Dependency,
    Nullable,
    RangeOf,
    RecordOf,
    TSType,
    TupleOf,
    Wrapper,
    Zoned,
)


class _Exported(TSType):
    """A minimal exportable type used to observe dependency handling."""

    def __init__(self, ts_name, path, transparent=False):
        self._name = ts_name
        self._path = path
        self._transparent = transparent

    @property
    def exported_to(self):
        return self._path

    def name(self):
        return self._name

    def inline(self):
        return "{ x: number, }"

    def inline_flattened(self):
        return "x: number,"

    def dependencies(self):
        return []

    def transparent(self):
        return self._transparent


def test_tuple_name():
    tuple_type = TupleOf(STRING, I32, TupleOf(I32, I32))
    assert tuple_type.name() == "[string, number, [number, number]]"


def test_tuple_decl_raises():
    tuple_type = TupleOf(STRING, I32, TupleOf(I32, I32))
    with pytest.raises(TypeError):
        tuple_type.decl()


def test_tuple_length_limits():
    with pytest.raises(ValueError):
        TupleOf()
    with pytest.raises(ValueError):
        TupleOf(*([I32] * 11))
    assert TupleOf(*([I32] * 10)).inline().count("number") == 10


def test_free_array_inline():
    assert ArrayOf(STRING).inline() == "Array<string>"


def test_alias_inline():
    assert ArrayOf(STRING).inline() == "Array<string>"


def test_alias_nested_inline():
    assert ArrayOf(ArrayOf(STRING)).inline() == "Array<Array<string>>"


def test_chrono_tuple():
    dates = TupleOf(
        NAIVE_DATE,
        Zoned(UTC, "Date"),
        Zoned(LOCAL, "Date"),
        Zoned(FIXED_OFFSET, "Date"),
    )
    date_times = TupleOf(NAIVE_DATE_TIME, Zoned(UTC), Zoned(LOCAL), Zoned(FIXED_OFFSET))
    assert dates.inline() == "[string, string, string, string]"
    assert date_times.name() == "[string, string, string, string]"


def test_zoned_ignores_type_args():
    zoned = Zoned(UTC)
    assert zoned.name_with_type_args([UTC.name()]) == "string"
    assert zoned.type_args() == [UTC]
    assert UTC.name() == ""


def test_primitive_literals():
    assert [t.name() for t in (I32, U64, BOOL, STR, UNIT)] == [
        "number",
        "bigint",
        "boolean",
        "string",
        "null",
    ]


def test_primitive_rejects_type_args():
    assert I32.name_with_type_args([]) == "number"
    with pytest.raises(ValueError):
        I32.name_with_type_args(["string"])


def test_nullable():
    nullable = Nullable(ArrayOf(U32))
    assert nullable.inline() == "Array<number> | null"
    assert nullable.name_with_type_args(["Array<number>"]) == "Array<number> | null"
    with pytest.raises(TypeError):
        nullable.name()
    with pytest.raises(ValueError):
        nullable.name_with_type_args(["a", "b"])


def test_record():
    record = RecordOf(STRING, F64)
    assert record.inline() == "Record<string, number>"
    assert record.name_with_type_args(["string", "Foo"]) == "Record<string, Foo>"
    with pytest.raises(ValueError):
        record.name_with_type_args(["string"])


def test_range():
    assert RangeOf(U32).name_with_type_args(["number"]) == "{ start: number, end: number, }"
    with pytest.raises(TypeError):
        RangeOf(U32).name()
    with pytest.raises(TypeError, match="RangeInclusive"):
        RangeOf(U32, inclusive=True).name()


def test_range_dependencies():
    inner = _Exported("Inner", "bindings/Inner.ts")
    assert RangeOf(inner).dependencies() == [Dependency.from_type(inner)]


def test_wrapper_passes_through():
    inner = _Exported("Inner", "bindings/Inner.ts")
    boxed = Wrapper(inner)
    assert boxed.name() == "Inner"
    assert boxed.inline() == "{ x: number, }"
    assert boxed.inline_flattened() == "x: number,"
    assert boxed.name_with_type_args(["Array<string>"]) == "Array<string>"
    with pytest.raises(ValueError):
        boxed.name_with_type_args([])


def test_wrapper_transparency_follows_inner():
    assert Wrapper(ArrayOf(I32)).transparent() is True
    assert Wrapper(I32, "Cell").transparent() is False


def test_dependency_from_type():
    inner = _Exported("Inner", "bindings/Inner.ts")
    dep = Dependency.from_type(inner)
    assert dep == Dependency(ty=inner, ts_name="Inner", exported_to="bindings/Inner.ts")
    assert Dependency.from_type(I32) is None


def test_collection_dependencies_skip_unexportable():
    inner = _Exported("Inner", "bindings/Inner.ts")
    assert ArrayOf(U8).dependencies() == []
    assert TupleOf(inner, U8).dependencies() == [Dependency.from_type(inner)]
    assert RecordOf(STRING, inner).dependencies() == [Dependency.from_type(inner)]


def test_default_inline_and_decl_raise():
    named = _Exported("Thing", None)
    with pytest.raises(TypeError, match="Thing cannot be inlined"):
        TSType.inline(named)
    with pytest.raises(TypeError, match="Thing cannot be declared"):
        TSType.decl(named)
    assert TSType.name_with_type_args(named, ["number", "string"]) == "Thing<number, string>"


def test_type_args():
    assert ArrayOf(STRING).type_args() == [STRING]
    assert RecordOf(STRING, I32).type_args() == [STRING, I32]
    assert TupleOf(I32, I32).type_args() == []
    assert I32.type_args() == []