"""Tests for the optional feature packs."""

import pytest

from conftest import ALL_TARGETS
from schema_codegen.assembler import generate_project
from schema_codegen.core.config import load_config
from schema_codegen.core.diagnostics import DiagnosticKind
from schema_codegen.features import (
    FeaturePackAssembler,
    FileStoragePack,
    MailPack,
    PasswordResetPack,
    SocialLoginPack,
    merge_files,
)
from schema_codegen.registry import get_generator


def features_config(target="python-fastapi", **overrides):
    return load_config(target, custom_config=overrides)


# ===========================================================================
# Gating
# ===========================================================================
class TestGating:
    def test_no_packs_by_default(self):
        config = load_config("python-fastapi")
        assert FeaturePackAssembler().enabled_packs(config) == []

    def test_only_enabled_packs_run(self):
        config = features_config(features={"mail": True})
        packs = FeaturePackAssembler().enabled_packs(config)
        assert [pack.name for pack in packs] == ["mail"]

    @pytest.mark.parametrize("target", ALL_TARGETS)
    def test_every_target_supports_every_pack(self, target, all_features_config):
        generator = get_generator(target, all_features_config(target))
        files, diagnostics = FeaturePackAssembler().assemble(generator, generator.config)
        assert diagnostics == []
        # 2 social + (1 service + 3 bodies) mail + 2 storage + 2 password reset
        assert len(files) == 10

    @pytest.mark.parametrize("target", ALL_TARGETS)
    def test_features_are_added_after_entities(self, target, shop_schema, all_features_config):
        plain = generate_project(get_generator(target), shop_schema)
        full = generate_project(get_generator(target, all_features_config(target)), shop_schema)
        assert full.success, full.error_message
        assert full.metadata["features"] == [
            "social_login",
            "mail",
            "file_storage",
            "password_reset",
        ]
        assert full.file_count == plain.file_count + 10
        assert list(full.files)[: plain.file_count] == list(plain.files)


# ===========================================================================
# Individual packs
# ===========================================================================
class TestSocialLogin:
    def test_unknown_provider_is_skipped(self):
        config = features_config(social_providers=["google", "myspace", "GitHub", "google"])
        providers = SocialLoginPack().providers(config)
        assert [p.name for p in providers] == ["google", "github"]

    def test_providers_rendered_into_config(self):
        generator = get_generator(
            "python",
            {"features": {"social_login": True}, "social_providers": ["linkedin"]},
        )
        files = SocialLoginPack().generate(generator, generator.config)
        oauth_config = files["app/core/oauth_config.py"]
        assert '"linkedin"' in oauth_config
        assert "LINKEDIN_CLIENT_ID" in oauth_config
        assert "GOOGLE_CLIENT_ID" not in oauth_config


class TestMail:
    def test_password_reset_body_needs_password_reset_feature(self):
        config = features_config(features={"mail": True})
        assert MailPack().templates(config) == ["welcome", "notification"]

        config = features_config(features={"mail": True, "password_reset": True})
        assert MailPack().templates(config) == ["welcome", "password_reset", "notification"]

    def test_unknown_templates_are_ignored(self):
        config = features_config(mail_templates=["welcome", "invoice", "welcome"])
        assert MailPack().templates(config) == ["welcome"]

    def test_subjects_use_project_name(self):
        config = features_config(project_name="shop-api", mail_templates=["welcome"])
        (service, body) = MailPack().plan(config)
        assert service.context["subjects"] == {"welcome": "Welcome to shop-api"}
        assert body.path_vars == {"name": "welcome"}

    @pytest.mark.parametrize(
        "target, path, placeholder",
        [
            ("go-gin", "internal/mail/templates/password_reset.html", "{{ .token }}"),
            ("python-fastapi", "app/templates/email/password_reset.html", "{{ token }}"),
            ("csharp-aspnet", "Templates/Email/password_reset.html", "{{ token }}"),
        ],
    )
    def test_bodies_use_target_placeholder_syntax(self, target, path, placeholder):
        generator = get_generator(
            target, {"features": {"mail": True, "password_reset": True}}
        )
        files = MailPack().generate(generator, generator.config)
        assert placeholder in files[path]
        assert "30 minutes" in files[path]


class TestFileStorage:
    @pytest.mark.parametrize(
        "target, backend, path",
        [
            ("python-fastapi", "s3", "app/services/storage/s3_storage.py"),
            ("go-gin", "azure", "internal/storage/azure_storage.go"),
            ("typescript-nestjs", "local", "src/storage/local.storage.ts"),
            ("rust-axum", "s3", "src/storage/s3_storage.rs"),
            ("csharp-aspnet", "s3", "Infrastructure/Storage/S3FileStorage.cs"),
            ("csharp-aspnet", "azure", "Infrastructure/Storage/AzureFileStorage.cs"),
        ],
    )
    def test_backend_file_path(self, target, backend, path):
        generator = get_generator(
            target, {"features": {"file_storage": True}, "storage_backend": backend}
        )
        files = FileStoragePack().generate(generator, generator.config)
        assert path in files
        assert len(files) == 2

    def test_blank_backend_falls_back_to_local(self):
        config = features_config(storage_backend="")
        service, backend = FileStoragePack().plan(config)
        assert backend.path_vars == {"backend": "local"}


class TestPasswordReset:
    def test_token_lifetime_reaches_templates(self):
        generator = get_generator(
            "python",
            {"features": {"password_reset": True}, "password_reset_token_minutes": 15},
        )
        files = PasswordResetPack().generate(generator, generator.config)
        assert set(files) == {
            "app/services/password_reset_service.py",
            "app/models/password_reset_token.py",
        }
        assert "15" in files["app/services/password_reset_service.py"]


# ===========================================================================
# Merging
# ===========================================================================
class TestMergeFiles:
    def test_later_file_wins_and_is_reported(self):
        destination = {"a.py": "first", "b.py": "b"}
        diagnostics = []
        merge_files(destination, {"a.py": "second", "c.py": "c"}, diagnostics, "pack")

        assert destination == {"a.py": "second", "b.py": "b", "c.py": "c"}
        assert list(destination) == ["a.py", "b.py", "c.py"]
        (diagnostic,) = diagnostics
        assert diagnostic.kind == DiagnosticKind.PATH_COLLISION
        assert "a.py" in diagnostic.message

    def test_pack_overwriting_entity_file_is_reported(self, shop_schema):
        generator = get_generator("python", {"features": {"password_reset": True}})
        generator.feature_layout = {
            "password_reset": {
                "service": ("app/models/product.py", "features/password_reset_service.py.j2"),
            }
        }
        result = generate_project(generator, shop_schema)
        assert result.success
        collisions = [d for d in result.diagnostics if d.kind == DiagnosticKind.PATH_COLLISION]
        assert len(collisions) == 1
        assert "app/models/product.py" in collisions[0].message

    def test_target_without_layout_contributes_nothing(self):
        generator = get_generator("rust", {"features": {"mail": True}})
        generator.feature_layout = {}
        files, diagnostics = FeaturePackAssembler().assemble(generator, generator.config)
        assert files == {}
        assert diagnostics == []
