"""
Configuration management for code generation.

Handles loading and merging configuration from JSON files,
providing per-target defaults and validation for generator settings.
"""

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..logging_config import get_logger

logger = get_logger(__name__)

FEATURE_SWITCHES = ("social_login", "mail", "file_storage", "password_reset")
SOCIAL_PROVIDERS = ("google", "github", "linkedin", "facebook", "microsoft")
STORAGE_BACKENDS = ("local", "s3", "azure")
MAIL_TEMPLATES = ("welcome", "password_reset", "notification")


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


def _default_features() -> Dict[str, bool]:
    return {switch: False for switch in FEATURE_SWITCHES}


@dataclass
class GeneratorConfig:
    """Per-request configuration for project generation."""

    target: str = "python-fastapi"
    project_name: str = "generated-api"
    base_package: str = "app"

    # Feature packs, one switch per pack
    features: Dict[str, bool] = field(default_factory=_default_features)
    social_providers: List[str] = field(default_factory=lambda: ["google", "github"])
    storage_backend: str = "local"
    password_reset_token_minutes: int = 30
    mail_templates: List[str] = field(default_factory=lambda: list(MAIL_TEMPLATES))

    # Output
    generate_tests: bool = True

    # Per-table fan-out
    parallel: bool = False
    max_workers: Optional[int] = None

    # Custom settings (target-specific)
    custom: Dict[str, Any] = field(default_factory=dict)

    def is_enabled(self, feature: str) -> bool:
        return bool(self.features.get(feature, False))

    @property
    def enabled_features(self) -> List[str]:
        return [name for name in FEATURE_SWITCHES if self.is_enabled(name)]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._configs: Dict[str, Dict[str, Any]] = {}
        self._load_defaults()

    def _load_defaults(self):
        """Load default configurations for supported targets."""
        self._configs["python-fastapi"] = {
            "base_package": "app",
            "custom": {"python_version": "3.12", "database_url": "sqlite:///./app.db"},
        }

        self._configs["go-gin"] = {
            "base_package": "github.com/example/api",
            "custom": {"go_version": "1.22"},
        }

        self._configs["typescript-nestjs"] = {
            "base_package": "app",
            "custom": {"node_version": "20"},
        }

        self._configs["rust-axum"] = {
            "base_package": "api",
            "custom": {"edition": "2021"},
        }

        self._configs["csharp-aspnet"] = {
            "base_package": "Example.Api",
            "custom": {"target_framework": "net8.0"},
        }

    def get_config(
        self,
        target: str,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> GeneratorConfig:
        """
        Get complete configuration for a target.

        Args:
            target: Target ecosystem identifier
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration for the target
        """
        base_config = json.loads(json.dumps(self._configs.get(target, {})))
        base_config["target"] = target

        if config_file:
            file_config = self._load_config_file(config_file)
            self._merge(base_config, file_config)

        if custom_config:
            self._merge(base_config, custom_config)

        return self._dict_to_config(base_config)

    @staticmethod
    def _merge(base: Dict[str, Any], overrides: Dict[str, Any]):
        """Shallow merge, except feature switches and custom settings merge by key."""
        for key, value in overrides.items():
            if key in ("features", "custom") and isinstance(value, dict):
                merged = dict(base.get(key) or {})
                merged.update(value)
                base[key] = merged
            else:
                base[key] = value

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.suffix.lower() == ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        logger.debug("Loaded configuration file %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> GeneratorConfig:
        """Convert dictionary to GeneratorConfig instance."""
        known_fields = set(GeneratorConfig.__dataclass_fields__)

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            existing_custom = dict(config_args.get("custom", {}))
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        features = _default_features()
        features.update(config_args.get("features") or {})
        config_args["features"] = features

        return GeneratorConfig(**config_args)

    def save_config(self, config: GeneratorConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)
        config_dict = config.to_dict()
        custom = config_dict.pop("custom", {})
        config_dict.update(custom)

        try:
            with open(path, "w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def list_targets(self) -> List[str]:
        """Get list of targets with default configurations."""
        return list(self._configs.keys())

    def validate_config(self, config: GeneratorConfig) -> List[str]:
        """
        Validate configuration before generation.

        Returns:
            List of validation warnings/errors (empty when valid)
        """
        warnings = []

        if config.target not in self._configs:
            warnings.append(f"Unknown target: {config.target}")

        if not config.base_package or not config.base_package.strip():
            warnings.append("Base package/namespace must not be blank")

        if not config.project_name or not config.project_name.strip():
            warnings.append("Project name must not be blank")

        for name in config.features:
            if name not in FEATURE_SWITCHES:
                warnings.append(f"Unknown feature switch: {name}")

        if config.is_enabled("file_storage") and config.storage_backend not in STORAGE_BACKENDS:
            warnings.append(f"Invalid storage_backend: {config.storage_backend}")

        if config.is_enabled("social_login"):
            if not config.social_providers:
                warnings.append("social_login enabled without any social_providers")
            for provider in config.social_providers:
                if provider not in SOCIAL_PROVIDERS:
                    warnings.append(f"Unknown social provider: {provider}")

        if config.is_enabled("password_reset"):
            if config.password_reset_token_minutes <= 0:
                warnings.append("password_reset_token_minutes must be positive")
            if not config.is_enabled("mail"):
                warnings.append("password_reset requires the mail feature")

        if config.is_enabled("mail"):
            for template in config.mail_templates:
                if template not in MAIL_TEMPLATES:
                    warnings.append(f"Unknown mail template: {template}")

        if config.max_workers is not None and config.max_workers < 1:
            warnings.append("max_workers must be at least 1")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    target: str = "python-fastapi",
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> GeneratorConfig:
    """
    Convenience function to load configuration.

    Args:
        target: Target ecosystem identifier
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration for the target
    """
    manager = get_config_manager()
    return manager.get_config(target, custom_config, config_file)
