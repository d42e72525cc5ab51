"""Tests for configuration loading, merging and validation."""

import json

import pytest

from conftest import ALL_TARGETS
from schema_codegen.core.config import (
    FEATURE_SWITCHES,
    ConfigError,
    ConfigManager,
    GeneratorConfig,
    load_config,
)


class TestDefaults:
    @pytest.mark.parametrize("target", ALL_TARGETS)
    def test_every_target_has_defaults(self, target):
        config = load_config(target)
        assert config.target == target
        assert config.base_package
        assert config.custom
        assert config.features == {name: False for name in FEATURE_SWITCHES}
        assert config.enabled_features == []
        assert config.generate_tests
        assert not config.parallel

    def test_target_specific_packages(self):
        assert load_config("go-gin").base_package == "github.com/example/api"
        assert load_config("csharp-aspnet").base_package == "Example.Api"

    def test_unknown_target_gets_dataclass_defaults(self):
        config = load_config("cobol-cics")
        assert config.target == "cobol-cics"
        assert config.base_package == GeneratorConfig().base_package


class TestMerging:
    def test_features_merge_by_key(self):
        config = load_config(
            "python-fastapi", custom_config={"features": {"mail": True}}
        )
        assert config.is_enabled("mail")
        assert not config.is_enabled("social_login")
        assert config.enabled_features == ["mail"]

    def test_unknown_keys_go_to_custom(self):
        config = load_config(
            "python-fastapi", custom_config={"api_prefix": "/v2", "custom": {"x": 1}}
        )
        assert config.custom["api_prefix"] == "/v2"
        assert config.custom["x"] == 1
        # target defaults survive the merge
        assert config.custom["python_version"] == "3.12"

    def test_overrides_beat_file(self, tmp_path):
        path = tmp_path / "codegen.json"
        path.write_text(
            json.dumps({"project_name": "from-file", "base_package": "acme"}),
            encoding="utf-8",
        )
        config = load_config(
            "python-fastapi", custom_config={"project_name": "override"}, config_file=path
        )
        assert config.project_name == "override"
        assert config.base_package == "acme"

    def test_defaults_are_not_mutated(self):
        load_config("rust-axum", custom_config={"custom": {"edition": "2024"}})
        assert load_config("rust-axum").custom["edition"] == "2021"


class TestConfigFile:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_config("go-gin", config_file=tmp_path / "nope.json")

    def test_non_json_extension(self, tmp_path):
        path = tmp_path / "codegen.yaml"
        path.write_text("project_name: x", encoding="utf-8")
        with pytest.raises(ConfigError, match="must be JSON"):
            load_config("go-gin", config_file=path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "codegen.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config("go-gin", config_file=path)

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "codegen.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ConfigError, match="JSON object"):
            load_config("go-gin", config_file=path)

    def test_save_then_load(self, tmp_path):
        manager = ConfigManager()
        config = manager.get_config(
            "go-gin", {"project_name": "inventory", "features": {"mail": True}}
        )
        path = tmp_path / "saved.json"
        manager.save_config(config, path)

        saved = json.loads(path.read_text(encoding="utf-8"))
        assert "custom" not in saved
        assert saved["go_version"] == "1.22"

        reloaded = manager.get_config("go-gin", config_file=path)
        assert reloaded.project_name == "inventory"
        assert reloaded.is_enabled("mail")
        assert reloaded.custom["go_version"] == "1.22"


class TestValidation:
    def setup_method(self):
        self.manager = ConfigManager()

    def test_defaults_are_valid(self):
        for target in ALL_TARGETS:
            assert self.manager.validate_config(load_config(target)) == []

    def test_reports_problems(self):
        config = load_config(
            "python-fastapi",
            custom_config={
                "base_package": " ",
                "features": {
                    "social_login": True,
                    "file_storage": True,
                    "password_reset": True,
                    "sms": True,
                },
                "social_providers": ["google", "myspace"],
                "storage_backend": "ftp",
                "password_reset_token_minutes": 0,
                "max_workers": 0,
            },
        )
        messages = self.manager.validate_config(config)
        assert messages == [
            "Base package/namespace must not be blank",
            "Unknown feature switch: sms",
            "Invalid storage_backend: ftp",
            "Unknown social provider: myspace",
            "password_reset_token_minutes must be positive",
            "password_reset requires the mail feature",
            "max_workers must be at least 1",
        ]

    def test_social_login_without_providers(self):
        config = load_config(
            "go-gin",
            custom_config={"features": {"social_login": True}, "social_providers": []},
        )
        assert self.manager.validate_config(config) == [
            "social_login enabled without any social_providers"
        ]

    def test_unknown_target(self):
        config = GeneratorConfig(target="cobol-cics")
        assert "Unknown target: cobol-cics" in self.manager.validate_config(config)
