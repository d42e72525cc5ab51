"""Tests for the Jinja2 template engine wrapper."""

import pytest

from schema_codegen.core.templates import (
    SHARED_TEMPLATE_DIR,
    TemplateEngine,
    TemplateError,
    create_template_engine,
)


@pytest.fixture
def engine():
    return TemplateEngine()


class TestFilters:
    @pytest.mark.parametrize(
        "template, expected",
        [
            ("{{ 'order_item' | pascal_case }}", "OrderItem"),
            ("{{ 'order_item' | camel_case }}", "orderItem"),
            ("{{ 'OrderItem' | snake_case }}", "order_item"),
            ("{{ 'OrderItem' | kebab_case }}", "order-item"),
            ("{{ 'category' | plural }}", "categories"),
        ],
    )
    def test_naming_filters(self, engine, template, expected):
        assert engine.render_string(template, {}) == expected

    def test_indent_code_skips_blank_lines(self, engine):
        rendered = engine.render_string("{{ body | indent_code(2) }}", {"body": "a\n\nb"})
        assert rendered == "  a\n\n  b"

    def test_comment_style(self, engine):
        rendered = engine.render_string("{{ text | comment('#') }}", {"text": "one\ntwo"})
        assert rendered == "# one\n# two"


class TestTemplates:
    def test_in_memory_template_shadows_files(self, tmp_path):
        (tmp_path / "entity.j2").write_text("from file", encoding="utf-8")
        engine = TemplateEngine(tmp_path)
        assert engine.render_template("entity.j2", {}) == "from file"

        engine.add_template("entity.j2", "from memory {{ name }}")
        assert engine.render_template("entity.j2", {"name": "x"}) == "from memory x"

    def test_missing_template(self, engine):
        assert not engine.template_exists("missing.j2")
        with pytest.raises(TemplateError, match="Template not found: missing.j2"):
            engine.render_template("missing.j2", {})

    def test_render_failure_is_wrapped(self, engine):
        engine.add_template("broken.j2", "{{ value.attr.deeper }}")
        with pytest.raises(TemplateError, match="Failed to render template broken.j2"):
            engine.render_template("broken.j2", {"value": None})

    def test_syntax_error_in_string(self, engine):
        with pytest.raises(TemplateError):
            engine.render_string("{% if %}", {})

    def test_block_whitespace_is_trimmed(self, engine):
        engine.add_template(
            "list.j2", "{% for x in items %}\n{{ x }}\n{% endfor %}\n"
        )
        assert engine.render_template("list.j2", {"items": [1, 2]}) == "1\n2\n"

    def test_missing_directories_are_ignored(self, tmp_path):
        engine = TemplateEngine([tmp_path / "nope", tmp_path])
        assert engine.template_dirs == [tmp_path]


class TestSharedTemplates:
    def test_target_engine_sees_shared_mail_templates(self, tmp_path):
        engine = create_template_engine(tmp_path)
        assert engine.template_dirs == [tmp_path, SHARED_TEMPLATE_DIR]
        assert engine.template_exists("mail/welcome.html.j2")

    def test_shared_templates_can_be_left_out(self, tmp_path):
        engine = create_template_engine(tmp_path, include_shared=False)
        assert not engine.template_exists("mail/welcome.html.j2")
