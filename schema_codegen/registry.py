"""
Target registry for managing available generators.

Maps target ids (e.g. 'go-gin') and their aliases to TargetGenerator
classes and builds configured instances.
"""

import dataclasses
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import GeneratorConfig, get_config_manager, load_config
from .core.generator import TargetGenerator
from .logging_config import get_logger

logger = get_logger(__name__)


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class TargetRegistry:
    """Registry of target ecosystem generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[TargetGenerator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        target: str,
        generator_class: Type[TargetGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator for a target.

        Args:
            target: Target id (e.g., 'python-fastapi')
            generator_class: TargetGenerator subclass
            aliases: Alternative names for this target
            replace: If True, replace an existing registration. If False,
                an existing registration is kept.

        Raises:
            RegistryError: If the class is invalid, the id is blank or an
                alias conflicts with another target
        """
        if not isinstance(generator_class, type) or not issubclass(
            generator_class, TargetGenerator
        ):
            raise RegistryError("Generator class must inherit from TargetGenerator")

        if not target or not target.strip():
            raise RegistryError("Target id must not be blank")

        target_key = target.strip().lower()

        if target_key in self._generators and not replace:
            logger.debug("Target %s already registered, keeping existing", target_key)
            return

        alias_keys = []
        for alias in aliases or []:
            alias_key = alias.strip().lower()
            if not alias_key or alias_key == target_key:
                continue
            if not replace:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias}' conflicts with existing target"
                    )
                if alias_key in self._aliases and self._aliases[alias_key] != target_key:
                    raise RegistryError(
                        f"Alias '{alias}' already points to '{self._aliases[alias_key]}'"
                    )
            alias_keys.append(alias_key)

        self._generators[target_key] = generator_class
        for alias_key in alias_keys:
            self._aliases[alias_key] = target_key

    def unregister(self, target: str):
        """Unregister a target and its aliases."""
        target_key = self.resolve(target) or target.lower()

        self._generators.pop(target_key, None)

        for alias in [a for a, t in self._aliases.items() if t == target_key]:
            del self._aliases[alias]

    def resolve(self, target: str) -> Optional[str]:
        """Canonical target id for a target id or alias, None when unknown."""
        if not target:
            return None
        target_key = target.strip().lower()
        if target_key in self._generators:
            return target_key
        return self._aliases.get(target_key)

    def get_generator_class(self, target: str) -> Type[TargetGenerator]:
        """
        Get generator class for a target.

        Raises:
            RegistryError: If the target is not registered
        """
        target_key = self.resolve(target)
        if target_key is None:
            raise RegistryError(
                f"No generator registered for target: {target}. "
                f"Available: {', '.join(self.list_targets())}"
            )
        return self._generators[target_key]

    def create_generator(
        self,
        target: str,
        config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
    ) -> TargetGenerator:
        """
        Create a generator instance for a target.

        Args:
            target: Target id or alias
            config: Configuration as GeneratorConfig, dict of overrides, or
                path to a JSON configuration file

        Returns:
            Configured generator instance

        Raises:
            RegistryError: If the target is unknown or creation fails
        """
        generator_class = self.get_generator_class(target)
        target_key = self.resolve(target)

        try:
            if isinstance(config, GeneratorConfig):
                final_config = dataclasses.replace(config, target=target_key)
            elif isinstance(config, (str, Path)):
                final_config = load_config(target_key, config_file=config)
            elif isinstance(config, dict):
                final_config = load_config(target_key, custom_config=config)
            elif config is None:
                final_config = load_config(target_key)
            else:
                raise RegistryError(f"Invalid config type: {type(config)}")

            return generator_class(final_config)

        except RegistryError:
            raise
        except Exception as e:
            raise RegistryError(f"Failed to create {target} generator: {e}") from e

    def list_targets(self) -> List[str]:
        """Registered canonical target ids, sorted."""
        return sorted(self._generators.keys())

    def get_aliases_for_target(self, target: str) -> List[str]:
        target_key = self.resolve(target)
        return sorted(alias for alias, key in self._aliases.items() if key == target_key)

    def is_supported(self, target: str) -> bool:
        """Check if a target id or alias is registered."""
        return self.resolve(target) is not None

    def get_target_info(self, target: str) -> Dict[str, Any]:
        """
        Describe a registered target.

        Returns:
            Dict with name, language, framework, file extension, class,
            module, artifacts, feature packs, aliases and default settings

        Raises:
            RegistryError: If the target is not registered
        """
        generator_class = self.get_generator_class(target)
        target_key = self.resolve(target)

        # Temporary instance for the property values
        generator = generator_class(load_config(target_key))

        info = generator.get_info()
        info["aliases"] = self.get_aliases_for_target(target_key)
        info["defaults"] = {
            "base_package": generator.config.base_package,
            **generator.config.custom,
        }
        return info


# Global registry instance - created once
_global_registry: Optional[TargetRegistry] = None


def get_registry() -> TargetRegistry:
    """Get the global target registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = TargetRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: TargetRegistry):
    """Register the built-in targets with their aliases."""
    from .languages import (
        CSharpAspNetGenerator,
        GoGinGenerator,
        PythonFastApiGenerator,
        RustAxumGenerator,
        TypeScriptNestGenerator,
    )

    registry.register(
        "python-fastapi", PythonFastApiGenerator, aliases=["python", "py", "fastapi"]
    )
    registry.register("go-gin", GoGinGenerator, aliases=["go", "golang", "gin"])
    registry.register(
        "typescript-nestjs",
        TypeScriptNestGenerator,
        aliases=["typescript", "ts", "nestjs"],
    )
    registry.register("rust-axum", RustAxumGenerator, aliases=["rust", "rs", "axum"])
    registry.register(
        "csharp-aspnet", CSharpAspNetGenerator, aliases=["csharp", "cs", "dotnet"]
    )

    unknown = set(registry.list_targets()) - set(get_config_manager().list_targets())
    if unknown:
        logger.warning("Targets without default configuration: %s", ", ".join(sorted(unknown)))


# Public API functions using the global registry


def register_generator(
    target: str,
    generator_class: Type[TargetGenerator],
    aliases: Optional[List[str]] = None,
):
    """Register a generator in the global registry."""
    get_registry().register(target, generator_class, aliases)


def get_generator(
    target: str,
    config: Optional[Union[GeneratorConfig, Dict[str, Any], str, Path]] = None,
) -> TargetGenerator:
    """
    Get generator instance from the global registry.

    Args:
        target: Target id or alias
        config: Configuration

    Returns:
        Generator instance
    """
    return get_registry().create_generator(target, config)


def list_supported_targets() -> List[str]:
    """List all supported targets from the global registry."""
    return get_registry().list_targets()


def is_target_supported(target: str) -> bool:
    return get_registry().is_supported(target)


def get_target_info(target: str) -> Dict[str, Any]:
    """Get information about a supported target."""
    return get_registry().get_target_info(target)
