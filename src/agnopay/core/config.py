"""
SDK-wide configuration: where the API and the hosted wallet live.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .environment import SDKEnvironment, build_environment

__all__ = [
    "API_URL_ENV",
    "DEFAULT_API_URL",
    "DEFAULT_WALLET_URL",
    "PUBLISHABLE_KEY_ENV",
    "SECRET_KEY_ENV",
    "WALLET_URL_ENV",
    "ConfigError",
    "SDKConfig",
    "configure",
    "get_config",
    "reset_config",
    "resolve_config",
    "resolve_publishable_key",
]

DEFAULT_API_URL = "https://agnoapi.vercel.app"
DEFAULT_WALLET_URL = "https://agnowallet.vercel.app"

API_URL_ENV = "AGNOPAY_API_URL"
WALLET_URL_ENV = "AGNOPAY_WALLET_URL"
PUBLISHABLE_KEY_ENV = "AGNOPAY_PUBLISHABLE_KEY"
SECRET_KEY_ENV = "AGNOPAY_SECRET_KEY"
# Name used by Next.js front-ends; honoured so one .env can serve both.
LEGACY_PUBLISHABLE_KEY_ENV = "NEXT_PUBLIC_AGNOPAY_KEY"


class ConfigError(Exception):
    """Raised when the supplied configuration is unusable."""


def _normalize_url(raw_url: str, field_name: str) -> str:
    value = raw_url.strip()
    if not value:
        raise ConfigError(f"{field_name} must not be empty")
    return value.rstrip("/")


@dataclass(frozen=True)
class SDKConfig:
    api_url: str = DEFAULT_API_URL
    wallet_url: str = DEFAULT_WALLET_URL

    @property
    def orders_url(self) -> str:
        return f"{self.api_url}/v1/orders"

    def with_overrides(
        self,
        *,
        api_url: Optional[str] = None,
        wallet_url: Optional[str] = None,
    ) -> "SDKConfig":
        changes = {}
        if api_url is not None:
            changes["api_url"] = _normalize_url(api_url, "api_url")
        if wallet_url is not None:
            changes["wallet_url"] = _normalize_url(wallet_url, "wallet_url")
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "SDKConfig":
        return cls().with_overrides(
            api_url=values.get(API_URL_ENV),
            wallet_url=values.get(WALLET_URL_ENV),
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
    ) -> "SDKConfig":
        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=overrides,
        )
        return cls.from_mapping(environment.variables)


_global_config = SDKConfig()


def configure(
    *,
    api_url: Optional[str] = None,
    wallet_url: Optional[str] = None,
) -> SDKConfig:
    """
    Replace the process-wide configuration.

    Fields left as ``None`` fall back to the built-in defaults rather than to
    the previous configuration. Call it once at startup.
    """
    global _global_config
    _global_config = SDKConfig().with_overrides(api_url=api_url, wallet_url=wallet_url)
    return _global_config


def get_config() -> SDKConfig:
    return _global_config


def reset_config() -> None:
    global _global_config
    _global_config = SDKConfig()


def resolve_config(config: Optional[SDKConfig]) -> SDKConfig:
    """Return ``config`` when given, otherwise the current process-wide value."""
    return config if config is not None else _global_config


def resolve_publishable_key(
    explicit: Optional[str],
    environment: Optional[SDKEnvironment] = None,
) -> Optional[str]:
    if explicit:
        return explicit
    if environment is None:
        environment = build_environment(env_file=None)
    return environment.first(PUBLISHABLE_KEY_ENV, LEGACY_PUBLISHABLE_KEY_ENV)
