"""End-to-end generation tests for every registered target."""

import pytest

from conftest import ALL_TARGETS, col, fk, pk, table
from schema_codegen import generate
from schema_codegen.assembler import ProjectAssembler, generate_project
from schema_codegen.core.diagnostics import DiagnosticKind
from schema_codegen.core.generator import ArtifactKind
from schema_codegen.core.relationships import RelationshipResolver
from schema_codegen.core.schema import schema_from_dict
from schema_codegen.registry import get_generator

# entity file of Product, controller file of Product, per target
EXPECTED_PATHS = {
    "python-fastapi": ("app/models/product.py", "app/routers/product_router.py"),
    "go-gin": ("internal/models/product.go", "internal/handler/product_handler.go"),
    "typescript-nestjs": (
        "src/product/entities/product.entity.ts",
        "src/product/product.controller.ts",
    ),
    "rust-axum": ("src/models/product.rs", "src/handlers/product_handler.rs"),
    "csharp-aspnet": ("Domain/Entities/Product.cs", "Api/Controllers/ProductsController.cs"),
}

ENTITY_DECLARATIONS = {
    "python-fastapi": "class Product(Base):",
    "go-gin": "type Product struct {",
    "typescript-nestjs": "export class Product {",
    "rust-axum": "pub struct Product {",
    "csharp-aspnet": "public class Product",
}


# ===========================================================================
# Every target
# ===========================================================================
class TestAllTargets:
    @pytest.mark.parametrize("target", ALL_TARGETS)
    def test_generates_every_artifact_for_every_entity(self, shop_schema, target):
        generator = get_generator(target)
        result = generate_project(generator, shop_schema)

        assert result.success, result.error_message
        entity_path, controller_path = EXPECTED_PATHS[target]
        assert entity_path in result.files
        assert controller_path in result.files
        assert ENTITY_DECLARATIONS[target] in result.files[entity_path]

        scaffold_count = len(generator.scaffold)
        artifact_count = len(generator.artifacts)
        assert result.file_count == scaffold_count + 3 * artifact_count
        assert result.metadata["entity_count"] == 3
        assert result.metadata["junction_count"] == 1
        assert result.metadata["features"] == []

    @pytest.mark.parametrize("target", ALL_TARGETS)
    def test_junction_table_gets_no_artifacts(self, shop_schema, target):
        result = generate_project(get_generator(target), shop_schema)
        assert not any("product_tag" in path.lower().replace("-", "_") for path in result.files)

    @pytest.mark.parametrize("target", ALL_TARGETS)
    def test_every_file_ends_with_single_newline(self, shop_schema, target):
        result = generate_project(get_generator(target), shop_schema)
        for path, content in result.files.items():
            assert content.endswith("\n"), path
            assert not content.endswith("\n\n"), path

    @pytest.mark.parametrize("target", ALL_TARGETS)
    def test_generation_is_deterministic(self, shop_schema, target):
        first = generate_project(get_generator(target), shop_schema)
        second = generate_project(get_generator(target), shop_schema)
        assert list(first.files) == list(second.files)
        assert first.files == second.files

    @pytest.mark.parametrize("target", ALL_TARGETS)
    def test_parallel_matches_sequential(self, shop_schema, target):
        sequential = generate_project(get_generator(target), shop_schema)
        parallel = generate_project(
            get_generator(target, {"parallel": True, "max_workers": 4}), shop_schema
        )
        assert list(parallel.files) == list(sequential.files)
        assert parallel.files == sequential.files

    @pytest.mark.parametrize("target", ALL_TARGETS)
    def test_tests_can_be_switched_off(self, shop_schema, target):
        generator = get_generator(target, {"generate_tests": False})
        kinds = [g.kind for g in generator.artifact_generators()]
        assert ArtifactKind.TEST not in kinds

        result = generate_project(generator, shop_schema)
        with_tests = generate_project(get_generator(target), shop_schema)
        assert result.file_count == with_tests.file_count - 3

    @pytest.mark.parametrize("target", ALL_TARGETS)
    def test_clean_schema_has_no_warnings(self, shop_schema, target):
        result = generate_project(get_generator(target), shop_schema)
        assert result.warnings == []


# ===========================================================================
# Table order and per-table output
# ===========================================================================
class TestOutputOrder:
    def test_scaffold_then_tables_in_schema_order(self, shop_schema):
        generator = get_generator("python-fastapi")
        paths = list(generate_project(generator, shop_schema).files)

        scaffold_paths = [path for path, _ in generator.scaffold]
        assert paths[: len(scaffold_paths)] == scaffold_paths

        models = [p for p in paths if p.startswith("app/models/") and p not in scaffold_paths]
        assert models == [
            "app/models/category.py",
            "app/models/product.py",
            "app/models/tag.py",
        ]

    def test_table_artifacts_follow_artifact_order(self, shop_schema):
        generator = get_generator("go-gin")
        output = generator.generate_table(
            shop_schema.get_table("tags"), [], [], []
        )
        assert list(output.files) == [
            "internal/models/tag.go",
            "internal/dto/tag_dto.go",
            "internal/repository/tag_repository.go",
            "internal/service/tag_service.go",
            "internal/handler/tag_handler.go",
            "internal/handler/tag_handler_test.go",
        ]

    def test_single_artifact_generator(self, shop_schema):
        generator = get_generator("typescript")
        (dto,) = [g for g in generator.artifact_generators() if g.kind == ArtifactKind.DTO]
        products = shop_schema.get_table("products")
        outgoing, incoming, many_to_many = RelationshipResolver(shop_schema).relations_for(products)

        files = dto.generate(products, outgoing, incoming, many_to_many)
        assert list(files) == ["src/product/dto/product.dto.ts"]
        assert files["src/product/dto/product.dto.ts"].endswith("\n")


# ===========================================================================
# Target specific content
# ===========================================================================
class TestPythonOutput:
    def test_models_and_associations(self, shop_schema):
        files = generate_project(get_generator("python"), shop_schema).files

        category = files["app/models/category.py"]
        assert "class Category(AuditBase):" in category
        assert 'back_populates="category"' in category

        product = files["app/models/product.py"]
        assert 'ForeignKey("categories.id")' in product
        assert 'secondary="product_tags"' in product
        assert 'Index("idx_products_name"' in product

        associations = files["app/models/associations.py"]
        assert 'product_tags = Table(' in associations

        init = files["app/models/__init__.py"]
        assert "from .product import Product" in init
        assert "PasswordResetToken" not in init

    def test_reserved_table_name_yields_importable_modules(self):
        schema = schema_from_dict(
            {
                "tables": [
                    table("classes", [pk(), col("title")]),
                    table(
                        "enrollments",
                        [pk(), col("class_id", "Long")],
                        [fk("class_id", "classes")],
                    ),
                ]
            }
        )
        files = generate_project(get_generator("python"), schema).files
        assert "app/models/class_.py" in files
        assert "app/models/class.py" not in files
        assert "app/routers/class__router.py" in files
        assert "from .class_ import Class" in files["app/models/__init__.py"]
        assert "from .class_ import Class" in files["app/models/enrollment.py"]
        assert "from .class import" not in files["app/models/enrollment.py"]

    def test_repeated_references_pair_back_populates(self):
        schema = schema_from_dict(
            {
                "tables": [
                    table("users", [pk(), col("name")]),
                    table(
                        "messages",
                        [pk(), col("sender_id", "Long"), col("recipient_id", "Long")],
                        [fk("sender_id", "users"), fk("recipient_id", "users")],
                    ),
                ]
            }
        )
        files = generate_project(get_generator("python"), schema).files
        message = files["app/models/message.py"]
        assert 'back_populates="sender_messages"' in message
        assert 'back_populates="recipient_messages"' in message
        user = files["app/models/user.py"]
        assert 'back_populates="sender"' in user
        assert 'back_populates="recipient"' in user
        assert "messages2" not in user

    def test_stored_function_becomes_repository_method(self, shop_schema):
        files = generate_project(get_generator("python"), shop_schema).files
        assert "get_product_stock" in files["app/repositories/product_repository.py"]
        assert "get_product_stock" not in files["app/repositories/tag_repository.py"]


class TestCSharpOutput:
    def test_db_context_lists_every_entity(self, shop_schema):
        files = generate_project(get_generator("csharp"), shop_schema).files
        context = files["Infrastructure/Data/AppDbContext.cs"]
        for entity in ("Category", "Product", "Tag"):
            assert f"DbSet<{entity}>" in context
        assert '"product_tags"' in context
        assert "PasswordResetTokens" not in context

    def test_namespace_comes_from_base_package(self, shop_schema):
        generator = get_generator("csharp", {"base_package": "Acme.Shop"})
        files = generate_project(generator, shop_schema).files
        assert "namespace Acme.Shop" in files["Domain/Entities/Product.cs"]


# ===========================================================================
# Degraded schemas
# ===========================================================================
class TestDegradedSchemas:
    def test_dangling_foreign_key_reported_once(self):
        schema = schema_from_dict(
            {
                "tables": [
                    table(
                        "orders",
                        [pk(), col("number"), col("warehouse_id", "Long")],
                        [fk("warehouse_id", "warehouses")],
                    )
                ]
            }
        )
        result = generate_project(get_generator("go"), schema)
        assert result.success
        dangling = [
            d for d in result.diagnostics if d.kind == DiagnosticKind.DANGLING_FOREIGN_KEY
        ]
        assert len(dangling) == 1
        assert dangling[0].table == "orders"
        assert "internal/models/order.go" in result.files

    def test_unmapped_type_still_generates(self):
        schema = schema_from_dict(
            {"tables": [table("places", [pk(), col("area", "Geometry")])]}
        )
        result = generate(schema, "typescript")
        assert result.success
        assert [d.kind for d in result.diagnostics] == [DiagnosticKind.UNMAPPED_TYPE]
        assert "area" in result.files["src/place/entities/place.entity.ts"]

    def test_generator_failure_becomes_failed_result(self, shop_schema, monkeypatch):
        generator = get_generator("python")

        def explode(models):
            raise RuntimeError("template blew up")

        monkeypatch.setattr(generator, "generate_scaffold", explode)
        result = generate_project(generator, shop_schema)

        assert not result.success
        assert "template blew up" in result.error_message
        assert isinstance(result.exception, RuntimeError)
        assert result.files == {}

    def test_assembler_uses_generator_config_by_default(self):
        generator = get_generator("rust", {"project_name": "inventory"})
        assembler = ProjectAssembler(generator)
        assert assembler.config.project_name == "inventory"


class TestPublicGenerate:
    def test_accepts_schema_document(self, shop_schema_dict):
        result = generate(shop_schema_dict, "rs")
        assert result.success
        assert result.metadata["target"] == "rust-axum"
        assert "src/models/product.rs" in result.files
