"""Tests for the per-target type mappers."""

import pytest

from schema_codegen.core.types import SOURCE_TYPES, normalize_source_type
from schema_codegen.languages.csharp import CSharpTypeMapper
from schema_codegen.languages.go import GoTypeMapper
from schema_codegen.languages.python import PythonTypeMapper
from schema_codegen.languages.rust import RustTypeMapper
from schema_codegen.languages.typescript import TypeScriptTypeMapper

MAPPERS = [
    PythonTypeMapper(),
    GoTypeMapper(),
    TypeScriptTypeMapper(),
    RustTypeMapper(),
    CSharpTypeMapper(),
]


@pytest.fixture(params=MAPPERS, ids=lambda mapper: type(mapper).__name__)
def mapper(request):
    return request.param


class TestTotality:
    @pytest.mark.parametrize("source_type", SOURCE_TYPES)
    def test_every_source_type_is_mapped_both_ways(self, mapper, source_type):
        assert mapper.is_mapped(source_type)
        assert mapper.map_type(source_type, nullable=False)
        assert mapper.map_type(source_type, nullable=True)

    def test_unknown_type_falls_back(self, mapper):
        assert not mapper.is_mapped("Geometry")
        assert mapper.map_type("Geometry") == mapper.UNKNOWN_TYPE
        assert mapper.map_type("Geometry", nullable=True) == mapper.UNKNOWN_TYPE

    def test_default_value_is_never_empty(self, mapper):
        for source_type in SOURCE_TYPES:
            for nullable in (False, True):
                assert mapper.default_value_for(mapper.map_type(source_type, nullable))
        assert mapper.default_value_for(mapper.UNKNOWN_TYPE)

    def test_nullable_type_is_idempotent(self, mapper):
        once = mapper.nullable_type(mapper.map_type("Integer"))
        assert mapper.nullable_type(once) == once


class TestAliases:
    @pytest.mark.parametrize(
        "alias, canonical",
        [("string", "String"), ("int", "Integer"), ("decimal", "BigDecimal"), ("bytes", "byte[]"), (" uuid ", "UUID")],
    )
    def test_normalize(self, alias, canonical):
        assert normalize_source_type(alias) == canonical

    def test_unknown_spelling_is_kept(self):
        assert normalize_source_type("Geometry") == "Geometry"
        assert normalize_source_type(None) is None

    def test_aliases_map_like_canonical_names(self, mapper):
        assert mapper.map_type("long") == mapper.map_type("Long")


class TestPythonTypes:
    def test_nullable_union(self):
        mapper = PythonTypeMapper()
        assert mapper.map_type("String", nullable=True) == "str | None"
        assert mapper.required_import("BigDecimal") == "from decimal import Decimal"
        assert mapper.required_import("Geometry") == "from typing import Any"


class TestGoTypes:
    mapper = GoTypeMapper()

    def test_pointers_for_nullable_scalars(self):
        assert self.mapper.map_type("String", nullable=True) == "*string"
        assert self.mapper.map_type("Character") == "rune"

    def test_null_wrappers(self):
        assert self.mapper.map_type("BigDecimal", nullable=True) == "decimal.NullDecimal"
        assert self.mapper.map_type("UUID", nullable=True) == "uuid.NullUUID"
        assert self.mapper.map_type("byte[]", nullable=True) == "sql.Null[[]byte]"
        assert self.mapper.required_import("byte[]", nullable=True) == "database/sql"
        assert self.mapper.required_import("byte[]") is None

    def test_references_are_pointers(self):
        assert self.mapper.reference_type("Category") == "*Category"
        assert self.mapper.list_type("Tag") == "[]Tag"


class TestTypeScriptTypes:
    mapper = TypeScriptTypeMapper()

    def test_string_backed_types(self):
        for source_type in ("BigDecimal", "LocalDate", "LocalTime", "UUID"):
            assert self.mapper.map_type(source_type) == "string"
        assert self.mapper.map_type("LocalDateTime") == "Date"
        assert self.mapper.map_type("byte[]") == "Buffer"

    def test_union_list_is_parenthesized(self):
        assert self.mapper.list_type("string | null") == "(string | null)[]"
        assert self.mapper.list_type("Tag") == "Tag[]"


class TestRustTypes:
    mapper = RustTypeMapper()

    def test_option_and_box(self):
        assert self.mapper.map_type("Long", nullable=True) == "Option<i64>"
        assert self.mapper.reference_type("Category") == "Option<Box<Category>>"
        assert self.mapper.list_type("Tag") == "Vec<Tag>"

    def test_unknown_type_needs_serde_json(self):
        assert self.mapper.map_type("Geometry") == "Value"
        assert self.mapper.required_import("Geometry") == "serde_json::Value"


class TestCSharpTypes:
    mapper = CSharpTypeMapper()

    def test_nullable_suffix(self):
        assert self.mapper.map_type("Integer", nullable=True) == "int?"
        assert self.mapper.map_type("String", nullable=True) == "string?"
        assert self.mapper.map_type("Byte") == "sbyte"

    def test_collections(self):
        assert self.mapper.collection_type("Tag") == "ICollection<Tag>"
        assert self.mapper.reference_type("Category", nullable=True) == "Category?"
