"""
Optional feature packs.

Each pack is gated by one switch in GeneratorConfig.features and decides
*which* files it contributes and with which settings. Where those files go
and how they look is declared by the target through its feature_layout.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

from .core.config import GeneratorConfig
from .core.diagnostics import Diagnostic, DiagnosticKind, warning
from .core.generator import TargetGenerator
from .logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class OAuthProvider:
    name: str
    display_name: str
    authorize_url: str
    token_url: str
    userinfo_url: str
    scopes: Tuple[str, ...]

    @property
    def env_prefix(self) -> str:
        return self.name.upper()


OAUTH_PROVIDERS = {
    "google": OAuthProvider(
        "google",
        "Google",
        "https://accounts.google.com/o/oauth2/v2/auth",
        "https://oauth2.googleapis.com/token",
        "https://openidconnect.googleapis.com/v1/userinfo",
        ("openid", "email", "profile"),
    ),
    "github": OAuthProvider(
        "github",
        "GitHub",
        "https://github.com/login/oauth/authorize",
        "https://github.com/login/oauth/access_token",
        "https://api.github.com/user",
        ("read:user", "user:email"),
    ),
    "linkedin": OAuthProvider(
        "linkedin",
        "LinkedIn",
        "https://www.linkedin.com/oauth/v2/authorization",
        "https://www.linkedin.com/oauth/v2/accessToken",
        "https://api.linkedin.com/v2/userinfo",
        ("openid", "email", "profile"),
    ),
    "facebook": OAuthProvider(
        "facebook",
        "Facebook",
        "https://www.facebook.com/v19.0/dialog/oauth",
        "https://graph.facebook.com/v19.0/oauth/access_token",
        "https://graph.facebook.com/me?fields=id,name,email",
        ("email", "public_profile"),
    ),
    "microsoft": OAuthProvider(
        "microsoft",
        "Microsoft",
        "https://login.microsoftonline.com/common/oauth2/v2.0/authorize",
        "https://login.microsoftonline.com/common/oauth2/v2.0/token",
        "https://graph.microsoft.com/oidc/userinfo",
        ("openid", "email", "profile"),
    ),
}

MAIL_SUBJECTS = {
    "welcome": "Welcome to {project}",
    "password_reset": "Reset your {project} password",
    "notification": "{project} notification",
}


@dataclass
class FeatureFile:
    """One file a pack wants, by logical key."""

    key: str
    context: Dict[str, Any] = field(default_factory=dict)
    path_vars: Dict[str, str] = field(default_factory=dict)


class FeaturePack(ABC):
    """Base class for optional cross-cutting generators."""

    name: str = ""

    def is_enabled(self, config: GeneratorConfig) -> bool:
        return config.is_enabled(self.name)

    @abstractmethod
    def plan(self, config: GeneratorConfig) -> List[FeatureFile]:
        """Logical files this pack contributes for the given settings."""
        pass

    def generate(self, target: TargetGenerator, config: GeneratorConfig) -> Dict[str, str]:
        """
        Render this pack for one target.

        Returns:
            Ordered mapping of relative path to content; empty when the
            target has no layout for the pack.
        """
        layout = target.feature_layout.get(self.name)
        if not layout:
            logger.warning(
                "Target %s does not support feature pack %s", target.target_name, self.name
            )
            return {}

        files: Dict[str, str] = {}
        for feature_file in self.plan(config):
            entry = layout.get(feature_file.key)
            if entry is None:
                logger.debug(
                    "No %s/%s file for target %s",
                    self.name,
                    feature_file.key,
                    target.target_name,
                )
                continue

            path_format, template_format = entry
            path_vars = dict(target.project_path_context())
            path_vars.update(feature_file.path_vars)

            context = target.base_context()
            context.update(feature_file.context)
            context["pack"] = self.name

            path = path_format.format(**path_vars)
            template = template_format.format(**path_vars)
            files[path] = target.format_code(target.render_template(template, context))

        return files


class SocialLoginPack(FeaturePack):
    """OAuth2 social login for the configured providers."""

    name = "social_login"

    def providers(self, config: GeneratorConfig) -> List[OAuthProvider]:
        providers = []
        for provider_name in config.social_providers:
            provider = OAUTH_PROVIDERS.get(provider_name.lower())
            if provider is None:
                logger.warning("Skipping unknown social provider %s", provider_name)
                continue
            if provider not in providers:
                providers.append(provider)
        return providers

    def plan(self, config: GeneratorConfig) -> List[FeatureFile]:
        context = {"providers": self.providers(config)}
        return [FeatureFile("config", context), FeatureFile("service", context)]


class MailPack(FeaturePack):
    """Mail service plus one HTML body per enabled template."""

    name = "mail"

    def templates(self, config: GeneratorConfig) -> List[str]:
        names = []
        for template in config.mail_templates:
            if template == "password_reset" and not config.is_enabled("password_reset"):
                continue
            if template in MAIL_SUBJECTS and template not in names:
                names.append(template)
        return names

    def plan(self, config: GeneratorConfig) -> List[FeatureFile]:
        templates = self.templates(config)
        subjects = {
            name: MAIL_SUBJECTS[name].format(project=config.project_name)
            for name in templates
        }
        files = [
            FeatureFile(
                "service",
                {
                    "templates": templates,
                    "subjects": subjects,
                    "password_reset": config.is_enabled("password_reset"),
                },
            )
        ]
        for name in templates:
            files.append(
                FeatureFile(
                    "body",
                    {"template_name": name, "subject": subjects[name]},
                    {"name": name},
                )
            )
        return files


class FileStoragePack(FeaturePack):
    """File storage service backed by local disk, S3 or Azure Blob."""

    name = "file_storage"

    def plan(self, config: GeneratorConfig) -> List[FeatureFile]:
        backend = config.storage_backend if config.storage_backend else "local"
        context = {"backend": backend}
        return [
            FeatureFile("service", context),
            FeatureFile("backend", context, {"backend": backend}),
        ]


class PasswordResetPack(FeaturePack):
    """Token based password reset flow."""

    name = "password_reset"

    def plan(self, config: GeneratorConfig) -> List[FeatureFile]:
        context = {"token_minutes": config.password_reset_token_minutes}
        return [FeatureFile("service", context), FeatureFile("model", context)]


def default_packs() -> List[FeaturePack]:
    return [SocialLoginPack(), MailPack(), FileStoragePack(), PasswordResetPack()]


def merge_files(
    destination: Dict[str, str],
    source: Dict[str, str],
    diagnostics: List[Diagnostic],
    origin: str,
):
    """
    Merge a file map into destination by key.

    A path that already exists is overwritten and reported.
    """
    for path, content in source.items():
        if path in destination:
            diagnostics.append(
                warning(
                    DiagnosticKind.PATH_COLLISION,
                    f"{path} from {origin} overwrites a previously generated file",
                )
            )
        destination[path] = content


class FeaturePackAssembler:
    """Runs every enabled feature pack for a target."""

    def __init__(self, packs: Optional[Sequence[FeaturePack]] = None):
        self.packs = list(packs) if packs is not None else default_packs()

    def enabled_packs(self, config: GeneratorConfig) -> List[FeaturePack]:
        return [pack for pack in self.packs if pack.is_enabled(config)]

    def assemble(
        self, target: TargetGenerator, config: GeneratorConfig
    ) -> Tuple[Dict[str, str], List[Diagnostic]]:
        """Generate and merge the files of every enabled pack."""
        files: Dict[str, str] = {}
        diagnostics: List[Diagnostic] = []
        for pack in self.enabled_packs(config):
            pack_files = pack.generate(target, config)
            logger.debug("Feature pack %s produced %d files", pack.name, len(pack_files))
            merge_files(files, pack_files, diagnostics, f"feature pack '{pack.name}'")
        return files, diagnostics
