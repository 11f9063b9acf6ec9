from pathlib import Path

import pytest

from tsbind.derived import Dependencies, DerivedType
from tsbind.export import (
    MANIFEST_DIR_ENV,
    NOTE,
    CannotBeExported,
    ExportError,
    ManifestDirNotSet,
    diff_paths,
    export_type,
    export_type_to,
    export_type_to_string,
    import_path,
    output_path,
)
from tsbind.typesys import STRING, ArrayOf


USER_DECL = "interface User { name: string, age: number, active: boolean, }"
USER_DIR_DECL = "interface UserDir { name: string, age: number, active: boolean, }"


def _user():
    return DerivedType(
        "User",
        inline="{ name: string, age: number, active: boolean, }",
        decl=USER_DECL,
        export_to="tests-out/export_here_test.ts",
    )


def _user_dir():
    return DerivedType(
        "UserDir",
        inline="{ name: string, age: number, active: boolean, }",
        decl=USER_DIR_DECL,
        export_to="tests-out/export_here_dir_test/",
    )


def test_export_manually(tmp_path, monkeypatch):
    monkeypatch.setenv(MANIFEST_DIR_ENV, str(tmp_path))
    written = export_type(_user())
    assert written == tmp_path / "tests-out/export_here_test.ts"
    content = written.read_text(encoding="utf-8")
    assert content == NOTE + "\nexport " + USER_DECL


def test_export_manually_dir(tmp_path, monkeypatch):
    monkeypatch.setenv(MANIFEST_DIR_ENV, str(tmp_path))
    written = export_type(_user_dir())
    assert written == tmp_path / "tests-out/export_here_dir_test/UserDir.ts"
    content = written.read_text(encoding="utf-8")
    assert content == NOTE + "\nexport " + USER_DIR_DECL


def _imports_case():
    type_a = DerivedType(
        "TestTypeA",
        inline="{ value: T, }",
        decl="interface TestTypeA<T> { value: T, }",
        type_params=("T",),
        export_to="/tmp/ts_rs_test_type_a.ts",
    )
    type_b = DerivedType(
        "TestTypeB",
        inline="{ value: T, }",
        decl="interface TestTypeB<T> { value: T, }",
        type_params=("T",),
        export_to="/tmp/ts_rs_test_type_b.ts",
    )
    deps = Dependencies()
    deps.push_or_append_from(type_b)
    deps.push_or_append_from(type_a)
    deps.push_or_append_from(type_a)
    decl = (
        'type TestEnum = { "C": { value: TestTypeB<number>, } } | '
        '{ "A1": { value: TestTypeA<number>, } } | { "A2": { value: TestTypeA<number>, } };'
    )
    enum = DerivedType(
        "TestEnum",
        inline="unused",
        decl=decl,
        dependencies=deps,
        export_to="/tmp/ts_rs_test_enum.ts",
    )
    return enum, decl


def test_imports_are_ordered_and_deduplicated():
    enum, decl = _imports_case()
    text = export_type_to_string(enum)
    assert text == (
        NOTE
        + 'import type { TestTypeA } from "./ts_rs_test_type_a";\n'
        + 'import type { TestTypeB } from "./ts_rs_test_type_b";\n'
        + "\n"
        + "export "
        + decl
    )


def test_self_dependency_is_not_imported():
    deps = Dependencies()
    user = DerivedType("User", inline="{ family: Array<User>, }",
                       decl="interface User { family: Array<User>, }", dependencies=deps)
    deps.push_or_append_from(ArrayOf(user))
    assert len(user.dependencies()) == 1
    assert export_type_to_string(user) == NOTE + "\nexport " + user.decl()


def test_export_type_to_explicit_path(tmp_path):
    target = tmp_path / "nested" / "dir" / "Out.ts"
    written = export_type_to(_user(), target)
    assert written == target
    assert target.read_text(encoding="utf-8") == export_type_to_string(_user())


def test_export_to_directory_path_is_io_error(tmp_path):
    with pytest.raises(ExportError):
        export_type_to(_user(), tmp_path)


def test_primitive_cannot_be_exported():
    with pytest.raises(CannotBeExported):
        export_type_to_string(STRING)


def test_output_path_requires_manifest_dir(monkeypatch):
    monkeypatch.delenv(MANIFEST_DIR_ENV, raising=False)
    with pytest.raises(ManifestDirNotSet):
        output_path(_user())


def test_output_path_primitive(tmp_path, monkeypatch):
    monkeypatch.setenv(MANIFEST_DIR_ENV, str(tmp_path))
    with pytest.raises(CannotBeExported):
        output_path(STRING)
    assert output_path(_user()) == Path(tmp_path) / "tests-out/export_here_test.ts"


@pytest.mark.parametrize(
    ("from_path", "target", "expected"),
    [
        ("/tmp/ts_rs_test_enum.ts", "/tmp/ts_rs_test_type_a.ts", "./ts_rs_test_type_a"),
        ("/tmp/ts_rs_test_enum.ts", "/tmp/ts_rs_test_type_b.ts", "./ts_rs_test_type_b"),
        ("bindings/A.ts", "bindings/B.ts", "./B"),
        ("bindings/A.ts", "other/B.ts", "../other/B"),
        ("A.ts", "bindings/B.ts", "./bindings/B"),
    ],
)
def test_import_path(from_path, target, expected):
    assert import_path(from_path, target) == expected


def test_import_path_unreachable():
    with pytest.raises(ValueError):
        import_path("../up/A.ts", "down/B.ts")


@pytest.mark.parametrize(
    ("path", "base", "expected"),
    [
        ("a/b/c", "a/b", "c"),
        ("a/c", "a/b", "../c"),
        ("/x/y", "rel", "/x/y"),
        ("a/b", "a/b", ""),
        ("a", "a/b/c", "../.."),
    ],
)
def test_diff_paths(path, base, expected):
    assert diff_paths(path, base) == expected


def test_diff_paths_none():
    assert diff_paths("rel", "/abs") is None
    assert diff_paths("a/b", "../c") is None