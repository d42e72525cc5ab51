"""Tests for schema_codegen.core.naming."""

import pytest

from schema_codegen.core.naming import (
    NameSanitizer,
    NamingCase,
    convert_case,
    escape_if_keyword,
    is_audit_field,
    split_words,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_plural,
    to_property_name,
    to_singular,
    to_snake_case,
)


class TestCaseConversion:
    @pytest.mark.parametrize(
        "name, pascal, camel, snake, kebab",
        [
            ("order_item", "OrderItem", "orderItem", "order_item", "order-item"),
            ("OrderItem", "OrderItem", "orderItem", "order_item", "order-item"),
            ("order-item", "OrderItem", "orderItem", "order_item", "order-item"),
            ("orderItem", "OrderItem", "orderItem", "order_item", "order-item"),
            ("HTTPServer", "HttpServer", "httpServer", "http_server", "http-server"),
            ("user", "User", "user", "user", "user"),
        ],
    )
    def test_conversions(self, name, pascal, camel, snake, kebab):
        assert to_pascal_case(name) == pascal
        assert to_camel_case(name) == camel
        assert to_snake_case(name) == snake
        assert to_kebab_case(name) == kebab

    @pytest.mark.parametrize("name", ["order_item", "created_by_id", "productTag"])
    def test_conversions_are_mutually_consistent(self, name):
        assert to_pascal_case(to_snake_case(name)) == to_pascal_case(name)
        assert to_snake_case(to_camel_case(name)) == to_snake_case(name)
        assert to_kebab_case(name) == to_snake_case(name).replace("_", "-")

    @pytest.mark.parametrize(
        "func", [to_pascal_case, to_camel_case, to_snake_case, to_kebab_case, to_plural, to_singular]
    )
    def test_null_and_empty_pass_through(self, func):
        assert func(None) is None
        assert func("") == ""

    def test_split_words(self):
        assert split_words("created_by-id") == ["created", "by", "id"]
        assert split_words(None) == []

    def test_convert_case_screaming_snake(self):
        assert convert_case("orderItem", NamingCase.SCREAMING_SNAKE) == "ORDER_ITEM"


class TestPluralization:
    @pytest.mark.parametrize(
        "singular, plural",
        [
            ("category", "categories"),
            ("status", "statuses"),
            ("key", "keys"),
            ("company", "companies"),
            ("user", "users"),
            ("box", "boxes"),
            ("branch", "branches"),
        ],
    )
    def test_plural(self, singular, plural):
        assert to_plural(singular) == plural

    def test_plural_suffix_follows_case(self):
        assert to_plural("CATEGORY") == "CATEGORIES"
        assert to_plural("BOX") == "BOXES"
        assert to_plural("USER") == "USERS"
        assert to_plural("Category") == "Categories"

    @pytest.mark.parametrize(
        "plural, singular",
        [
            ("categories", "category"),
            ("statuses", "status"),
            ("classes", "class"),
            ("boxes", "box"),
            ("users", "user"),
            ("address", "address"),
        ],
    )
    def test_singular(self, plural, singular):
        assert to_singular(plural) == singular


class TestColumnHelpers:
    def test_property_name_strips_id_suffix(self):
        assert to_property_name("category_id") == "category"
        assert to_property_name("created_by_id") == "created_by"

    def test_property_name_strips_bare_id_suffix(self):
        assert to_property_name("_id") == ""
        assert to_property_name("OWNER_ID") == "OWNER"

    def test_property_name_keeps_plain_id(self):
        assert to_property_name("id") == "id"

    def test_audit_fields(self):
        assert is_audit_field("created_at")
        assert is_audit_field("UPDATED_AT")
        assert not is_audit_field("name")
        assert not is_audit_field(None)

    def test_escape_if_keyword(self):
        assert escape_if_keyword("class", {"class"}) == "class_"
        assert escape_if_keyword("name", {"class"}) == "name"
        assert escape_if_keyword(None, {"class"}) is None


class TestNameSanitizer:
    def test_reserved_word_gets_suffix(self):
        sanitizer = NameSanitizer({"class"})
        assert sanitizer.sanitize_name("class", NamingCase.SNAKE_CASE) == "class_"

    def test_duplicates_get_counter(self):
        sanitizer = NameSanitizer()
        assert sanitizer.sanitize_name("name") == "name"
        assert sanitizer.sanitize_name("name") == "name2"
        assert sanitizer.sanitize_name("name") == "name3"

    def test_leading_digit_is_prefixed(self):
        sanitizer = NameSanitizer()
        assert sanitizer.sanitize_name("1st_place") == "_1st_place"

    def test_invalid_characters_are_cleaned(self):
        sanitizer = NameSanitizer()
        assert sanitizer.sanitize_name("unit price", NamingCase.CAMEL_CASE) == "unitPrice"
        assert sanitizer.sanitize_name("$$$") == "field"

    def test_reset_used_names(self):
        sanitizer = NameSanitizer()
        sanitizer.sanitize_name("name")
        sanitizer.reset_used_names()
        assert sanitizer.sanitize_name("name") == "name"

    def test_preclaimed_names_are_avoided(self):
        sanitizer = NameSanitizer()
        sanitizer.add_used_name("id")
        assert sanitizer.sanitize_name("id") == "id2"
