"""Shared pytest fixtures for the schema_codegen test suite."""

import copy

import pytest

from schema_codegen.core.config import load_config
from schema_codegen.core.schema import schema_from_dict


# ---------------------------------------------------------------------------
# Shop schema: categories 1-N products, products N-M tags via product_tags
# ---------------------------------------------------------------------------
SHOP_SCHEMA = {
    "name": "shop",
    "tables": [
        {
            "name": "categories",
            "columns": [
                {"name": "id", "type": "Long", "primaryKey": True, "nullable": False},
                {"name": "name", "type": "String", "length": 100, "nullable": False, "unique": True},
                {"name": "description", "type": "String", "nullable": True},
                {"name": "active", "type": "Boolean", "nullable": False},
                {"name": "created_at", "type": "LocalDateTime", "nullable": True},
            ],
        },
        {
            "name": "products",
            "columns": [
                {"name": "id", "type": "Long", "primaryKey": True, "nullable": False},
                {"name": "name", "type": "String", "length": 120, "nullable": False},
                {"name": "price", "type": "BigDecimal", "nullable": False},
                {"name": "category_id", "type": "Long", "nullable": False},
            ],
            "foreignKeys": [
                {"column": "category_id", "referencedTable": "categories", "referencedColumn": "id"}
            ],
            "indexes": [{"name": "idx_products_name", "columns": ["name"], "unique": False}],
        },
        {
            "name": "tags",
            "columns": [
                {"name": "id", "type": "Long", "primaryKey": True, "nullable": False},
                {"name": "label", "type": "String", "length": 50, "nullable": False, "unique": True},
            ],
        },
        {
            "name": "product_tags",
            "junction": True,
            "columns": [
                {"name": "product_id", "type": "Long", "primaryKey": True, "nullable": False},
                {"name": "tag_id", "type": "Long", "primaryKey": True, "nullable": False},
            ],
            "foreignKeys": [
                {"column": "product_id", "referencedTable": "products"},
                {"column": "tag_id", "referencedTable": "tags"},
            ],
        },
    ],
    "functions": [
        {
            "name": "get_product_stock",
            "parameters": [{"name": "p_id", "type": "Long"}],
            "returnType": "Integer",
        }
    ],
}

ALL_TARGETS = [
    "python-fastapi",
    "go-gin",
    "typescript-nestjs",
    "rust-axum",
    "csharp-aspnet",
]


@pytest.fixture
def shop_schema_dict():
    """A fresh, mutable copy of the shop schema document."""
    return copy.deepcopy(SHOP_SCHEMA)


@pytest.fixture
def shop_schema(shop_schema_dict):
    return schema_from_dict(shop_schema_dict)


@pytest.fixture
def all_features_config():
    """Factory for a config with every feature pack switched on."""

    def make(target):
        return load_config(
            target,
            custom_config={
                "project_name": "shop-api",
                "features": {
                    "social_login": True,
                    "mail": True,
                    "file_storage": True,
                    "password_reset": True,
                },
                "social_providers": ["google", "github"],
                "storage_backend": "s3",
            },
        )

    return make


def table(name, columns, foreign_keys=(), junction=None, indexes=()):
    """Build a table document with an `id` primary key unless columns say otherwise."""
    data = {
        "name": name,
        "columns": list(columns),
        "foreignKeys": list(foreign_keys),
        "indexes": list(indexes),
    }
    if junction is not None:
        data["junction"] = junction
    return data


def pk(name="id"):
    return {"name": name, "type": "Long", "primaryKey": True, "nullable": False}


def col(name, type_="String", nullable=True, **extra):
    data = {"name": name, "type": type_, "nullable": nullable}
    data.update(extra)
    return data


def fk(column, referenced_table, **extra):
    data = {"column": column, "referencedTable": referenced_table}
    data.update(extra)
    return data
