# tsbind

Describe your data types once, in Python, and get matching TypeScript
declarations: interfaces for records, union types for tagged variants, and
`import type` statements for every exported type a declaration depends on.

## Quick look

```python
from tsbind.structs import Fields, TypeParam, derive_struct
from tsbind.enums import Variant, derive_enum
from tsbind.typesys import I32, STRING, ArrayOf

user = derive_struct("User", Fields.named(("user_id", I32), ("first_name", STRING)))
user.decl()
# 'interface User { user_id: number, first_name: string, }'

role = derive_enum(
    "Role",
    ["User", Variant("Admin", ts={"rename": "administrator"})],
    ts={"rename_all": "lowercase"},
)
role.decl()
# 'type Role = "user" | "administrator";'

page = derive_struct(
    "Page",
    Fields.named(("items", ArrayOf(TypeParam("T")))),
    generics=[TypeParam("T", default=STRING)],
)
page.decl()
# 'interface Page<T = string> { items: Array<T>, }'
```

A derived type can be used as a field type of another definition; apply a
generic one to arguments with `of(...)`, e.g. `page.of(I32)` renders as
`Page<number>`.

## What it produces

- `interface Name { ... }` for structs with named fields
- `type Name = [A, B];` for tuple structs and `type Name = A;` for newtypes
- `type Name = "A" | "B";` for enums without data, and tagged unions for
  enums whose variants carry data: externally tagged (`{ "A": ... }`),
  internally tagged (`tag`), adjacently tagged (`tag` and `content`) or
  `untagged`
- `never` for an empty enum, `null` for a unit struct, `never[]` for an
  empty tuple struct and `Record<string, never>` for a struct without fields
- type parameter lists such as `<T, K = number>`

Output is written on one line per declaration; it is not reformatted.

## Modules

- `tsbind.typesys` – the `TSType` interface (`name()`,
  `name_with_type_args(args)`, `inline()`, `inline_flattened()`, `decl()`,
  `dependencies()`, `transparent()`, `type_args()`) and the built-in kinds:
  `Primitive`, `Nullable` (`T | null`), `ArrayOf` (`Array<T>`), `RecordOf`
  (`Record<K, V>`), `RangeOf` (`{ start: T, end: T, }`), `TupleOf` (1 to 10
  elements), `Wrapper` (renders as its contents), `Opaque` and `Zoned` for
  time zones and zoned dates. Ready-made instances include `I32`, `U64`
  (`bigint`), `F64`, `BOOL`, `STRING`, `CHAR`, `UNIT` (`null`), `UUID`,
  `NAIVE_DATE_TIME`, `UTC` and many more. `Dependency` records a type an
  export needs to import.
- `tsbind.structs` – `Field`, `Fields.named(...)`, `Fields.unnamed(...)`,
  `Fields.unit()`, `TypeParam`, and `derive_struct(name, fields, *,
  generics=(), ts=None, serde=None)`; also `type_def`, `format_type` and
  `format_generics`.
- `tsbind.enums` – `Variant` and `derive_enum(name, variants, *,
  generics=(), ts=None, serde=None)`. A plain string stands for a variant
  without fields.
- `tsbind.derived` – `DerivedType`, the result of both derivations, and
  `Dependencies`.
- `tsbind.attrs` – the attribute classes `StructAttr`, `EnumAttr`,
  `FieldAttr`, `VariantAttr`, and `Tagged` / `TagStyle`.
- `tsbind.naming` – `Inflection` (lowercase, UPPERCASE, camelCase,
  snake_case, PascalCase, SCREAMING_SNAKE_CASE, kebab-case), `to_ts_ident`,
  `raw_name_to_ts_field` and `DeriveError`.
- `tsbind.export` and `tsbind.config` – see below.

## Attributes

`ts` and `serde` are each a mapping, or a list of mappings, of keys to
values; flags take `True`, everything else a string. Earlier values win
when attributes are merged.

- structs: `ts`: `rename`, `rename_all`, `export`, `export_to`;
  `serde`: `rename`, `rename_all`, `tag`, `deny_unknown_fields`, `default`
- enums: `ts`: `rename`, `rename_all`, `export`, `export_to`;
  `serde`: `rename`, `rename_all`, `tag`, `content`, `untagged`
- fields: `ts`: `type`, `rename`, `inline`, `skip`, `optional`, `flatten`;
  `serde`: `rename`, `skip`, `skip_serializing`, `skip_deserializing`,
  `skip_serializing_if = "Option::is_none"` (makes the field optional),
  `flatten`, `default`
- variants: `ts`: `rename`, `rename_all`, `inline`, `skip`;
  `serde`: `rename`, `rename_all`, `skip`, `skip_serializing`,
  `skip_deserializing`

An invalid `ts` attribute, or a combination that makes no sense (for
example `untagged` with `tag`, or `flatten` with `rename`), raises
`DeriveError`. A `serde` attribute that cannot be parsed is reported as a
warning on stderr and ignored.

## Exporting to files

- `export()` writes to the type's export path below the directory named by
  the environment variable `TSBIND_MANIFEST_DIR`. The path is `export_to`,
  by default `bindings/<Name>.ts`; an `export_to` ending in `/` names a
  directory.
- `export_to(path)` writes to the path given.
- `export_to_string()` returns the file's text.

The file starts with `// This file was generated by tsbind. Do not edit
this file manually.`, then one `import type { X } from "./X";` line per
dependency, sorted by name and without duplicates, an empty line, and
`export ` followed by the declaration. `tsbind.derived.export_all()` writes
every type defined with `export` set and returns the paths;
`exported_types()` lists those types.

Failures raise `tsbind.export.ExportError`, or its kinds `CannotBeExported`
and `ManifestDirNotSet` (when `TSBIND_MANIFEST_DIR` is not set).

## Configuration

`tsbind.config.Config.get()` reads `ts.toml` from `TSBIND_MANIFEST_DIR`
once and keeps the result. Without the file it returns the defaults,
`ambient_declarations = false` and `out_dir = "typescript"`; a file that
exists must set both. `Config.try_load_from_dir(directory)` loads a given
directory's file, or returns `None`.

## What it does not do

Types are described by calling the functions above; nothing reads them
from existing source code. There is no command-line tool, and the output is
not run through a formatter.

## Running the tests

```
pip install -e ".[test]"
pytest
```