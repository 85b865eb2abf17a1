"""Shared type aliases used across routeguard modules."""

from typing import Literal, TypeAlias

# Canonicalization strictness: 0 = raw, 1 = param names erased, 2 = strict
NormalizationLevel: TypeAlias = Literal[0, 1, 2]

# Server framework idiom reported by the extraction layer
FrameworkHint: TypeAlias = Literal["express", "fastify", "generic"]

# Severity of duplicate findings
SeverityName: TypeAlias = Literal["error", "warn"]
