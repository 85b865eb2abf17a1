"""Analysis configuration.

AnalysisConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

from routeguard._internal.cache import NORMALIZATION_CACHE_SIZE, PREFIX_CACHE_SIZE
from routeguard._internal.types import NormalizationLevel, SeverityName
from routeguard.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class AnalysisConfig:
    """Analysis configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AnalysisConfig(normalization_level=2, max_router_depth=3)
    """

    # Normalization
    normalization_level: NormalizationLevel = 1
    preserve_constraints: bool = False

    # Reporting
    warn_on_static_vs_dynamic: bool = True  # Surface non-duplicate conflict kinds
    severity: SeverityName = "error"  # Severity of duplicate findings

    # Prefix resolution
    max_router_depth: int = 5
    global_prefix: str | None = None  # Joined in front of every effective path

    # Caches
    normalization_cache_size: int = NORMALIZATION_CACHE_SIZE
    prefix_cache_size: int = PREFIX_CACHE_SIZE

    debug: bool = False

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> AnalysisConfig:
        """Build a config from rule-style options.

        Accepts the snake_case field names and the camelCase names used in
        lint rule configuration, including the nested ``pathNormalization``
        block::

            AnalysisConfig.from_mapping({
                "maxRouterDepth": 3,
                "pathNormalization": {"level": 2, "warnOnStaticVsDynamic": False},
            })
        """
        flat: dict[str, Any] = {}
        for key, value in options.items():
            if key == "pathNormalization" and isinstance(value, Mapping):
                for inner_key, inner_value in value.items():
                    flat[_OPTION_ALIASES.get(inner_key, inner_key)] = inner_value
            else:
                flat[_OPTION_ALIASES.get(key, key)] = value

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(flat) - known)
        if unknown:
            msg = f"Unknown configuration option(s): {', '.join(unknown)}"
            raise ConfigurationError(msg)
        return cls(**flat)


_OPTION_ALIASES: dict[str, str] = {
    "level": "normalization_level",
    "normalizationLevel": "normalization_level",
    "preserveConstraints": "preserve_constraints",
    "warnOnStaticVsDynamic": "warn_on_static_vs_dynamic",
    "maxRouterDepth": "max_router_depth",
    "globalPrefix": "global_prefix",
    "normalizationCacheSize": "normalization_cache_size",
    "prefixCacheSize": "prefix_cache_size",
}


def validate_config(config: AnalysisConfig) -> None:
    """Raise ``ConfigurationError`` listing every invalid field."""
    problems: list[str] = []

    if config.normalization_level not in (0, 1, 2):
        problems.append(f"normalization_level must be 0, 1 or 2 (got {config.normalization_level!r})")
    if not isinstance(config.max_router_depth, int) or not 1 <= config.max_router_depth <= 10:
        problems.append(f"max_router_depth must be between 1 and 10 (got {config.max_router_depth!r})")
    if config.severity not in ("error", "warn"):
        problems.append(f"severity must be 'error' or 'warn' (got {config.severity!r})")
    for name in ("normalization_cache_size", "prefix_cache_size"):
        value = getattr(config, name)
        if not isinstance(value, int) or value < 1:
            problems.append(f"{name} must be a positive integer (got {value!r})")

    if problems:
        msg = "Invalid analysis configuration:\n  " + "\n  ".join(problems)
        raise ConfigurationError(msg)
