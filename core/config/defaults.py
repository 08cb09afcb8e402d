# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for content eligibility, API and database
# ============================================================================
"""
Configuration Defaults

Provides defaults for the SEO meta service.
These can be overridden via environment variables.

Design:
- Immutable dataclasses for defaults
- Environment variable overrides
- Type-safe access
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from __version__ import API_NAMESPACE
from core.contracts import ContentKind


def _env_flag(name: str, default: bool = False) -> bool:
    """Read a boolean environment variable (true/1/yes/on)."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("true", "1", "yes", "on")


def _env_tuple(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Read a comma-separated environment variable."""
    raw = os.getenv(name)
    if not raw:
        return default
    return tuple(part.strip() for part in raw.split(",") if part.strip())


@dataclass(frozen=True)
class ContentTypeDefaults:
    """
    Which content kinds may have their SEO meta updated.

    The commerce companion module, when active, adds its kinds
    (products) to the base set.
    """
    base_kinds: Tuple[str, ...] = (ContentKind.POST.value,)
    companion_kinds: Tuple[str, ...] = (ContentKind.PRODUCT.value,)
    companion_module_active: bool = False

    def eligible_kinds(self, companion_active: bool) -> Tuple[str, ...]:
        """Kinds eligible for meta updates given the companion module state."""
        if companion_active:
            return self.base_kinds + tuple(
                k for k in self.companion_kinds if k not in self.base_kinds
            )
        return self.base_kinds

    @classmethod
    def from_env(cls) -> "ContentTypeDefaults":
        """Create from environment variables."""
        return cls(
            base_kinds=_env_tuple("ELIGIBLE_CONTENT_KINDS", ("post",)),
            companion_kinds=_env_tuple("COMMERCE_CONTENT_KINDS", ("product",)),
            companion_module_active=_env_flag("COMMERCE_MODULE_ACTIVE"),
        )


@dataclass(frozen=True)
class ApiDefaults:
    """Defaults for the HTTP surface."""
    namespace: str = API_NAMESPACE

    @property
    def prefix(self) -> str:
        """Router prefix, e.g. /rank-math-api/v1."""
        return "/" + self.namespace.strip("/")

    @classmethod
    def from_env(cls) -> "ApiDefaults":
        """Create from environment variables."""
        return cls(
            namespace=os.getenv("API_NAMESPACE", API_NAMESPACE),
        )


@dataclass(frozen=True)
class DatabaseDefaults:
    """Defaults for the PostgreSQL connection pool."""
    pool_min_size: int = 2
    pool_max_size: int = 10

    @classmethod
    def from_env(cls) -> "DatabaseDefaults":
        """Create from environment variables."""
        return cls(
            pool_min_size=int(os.getenv("DB_POOL_MIN_SIZE", 2)),
            pool_max_size=int(os.getenv("DB_POOL_MAX_SIZE", 10)),
        )


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    content: ContentTypeDefaults = field(default_factory=ContentTypeDefaults)
    api: ApiDefaults = field(default_factory=ApiDefaults)
    database: DatabaseDefaults = field(default_factory=DatabaseDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults from environment variables."""
        return cls(
            content=ContentTypeDefaults.from_env(),
            api=ApiDefaults.from_env(),
            database=DatabaseDefaults.from_env(),
        )


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


def is_companion_module_active() -> bool:
    """True when the commerce companion module is installed and active."""
    return get_defaults().content.companion_module_active


def get_eligible_kinds() -> Tuple[str, ...]:
    """Content kinds whose SEO meta may currently be updated."""
    return get_defaults().content.eligible_kinds(is_companion_module_active())


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ContentTypeDefaults",
    "ApiDefaults",
    "DatabaseDefaults",
    "Defaults",
    "get_defaults",
    "reset_defaults",
    "is_companion_module_active",
    "get_eligible_kinds",
]
