"""Tests for routeguard.routing.conflicts — pairwise conflict rules."""

import pytest

from routeguard.routing.conflicts import ConflictKind, ConflictRecord, detect_conflict
from routeguard.routing.normalize import PathNormalizer
from routeguard.routing.segments import SegmentKind


class TestExactDuplicate:
    @pytest.mark.parametrize("level", [0, 1, 2])
    def test_identical(self, level: int) -> None:
        result = detect_conflict("/users", "/users", level)  # type: ignore[arg-type]
        assert result.kind is ConflictKind.EXACT_DUPLICATE
        assert result.message == "Exact duplicate route paths"

    def test_identical_params(self) -> None:
        assert detect_conflict("/users/:id", "/users/:id").kind is ConflictKind.EXACT_DUPLICATE


class TestParamNameConflict:
    def test_level_one(self) -> None:
        result = detect_conflict("/users/:id", "/users/:userId", 1)
        assert result.kind is ConflictKind.PARAM_NAME_CONFLICT

    def test_level_zero_is_none(self) -> None:
        assert detect_conflict("/users/:id", "/users/:userId", 0).kind is ConflictKind.NONE

    def test_named_vs_bare_wildcard(self) -> None:
        result = detect_conflict("/files/*", "/files/:path*", 1)
        assert result.kind is ConflictKind.PARAM_NAME_CONFLICT

    def test_uses_given_normalizer(self) -> None:
        normalizer = PathNormalizer()
        detect_conflict("/a/:x", "/a/:y", 1, normalizer)
        assert normalizer.cache_size() == 2


class TestShapeRules:
    def test_different_lengths(self) -> None:
        result = detect_conflict("/users", "/users/:id")
        assert result.kind is ConflictKind.NONE
        assert result.message == "Different path lengths"

    def test_static_vs_dynamic(self) -> None:
        result = detect_conflict("/users/me", "/users/:id")
        assert result.kind is ConflictKind.STATIC_VS_DYNAMIC
        assert result.segments is not None
        first, second = result.segments
        assert first.raw == "me"
        assert second.raw == ":id"

    def test_wildcard_vs_param(self) -> None:
        result = detect_conflict("/files/*", "/files/:name")
        assert result.kind is ConflictKind.WILDCARD_CONFLICT

    def test_wildcard_checked_before_static(self) -> None:
        assert detect_conflict("/files/*", "/files/readme").kind is ConflictKind.WILDCARD_CONFLICT

    def test_different_constraints(self) -> None:
        result = detect_conflict(r"/users/:id(\d+)", r"/users/:id(\w+)")
        assert result.kind is ConflictKind.DIFFERENT_CONSTRAINTS
        assert result.segments is not None
        assert all(seg.kind is SegmentKind.CONSTRAINED_PARAM for seg in result.segments)

    def test_same_constraint_different_names(self) -> None:
        result = detect_conflict(r"/users/:id(\d+)", r"/users/:uid(\d+)", 1)
        assert result.kind is ConflictKind.PARAM_NAME_CONFLICT

    def test_constrained_vs_plain_param(self) -> None:
        assert detect_conflict(r"/users/:id(\d+)", "/users/:id", 1).kind is ConflictKind.PARAM_NAME_CONFLICT

    def test_first_differing_pair_wins(self) -> None:
        result = detect_conflict("/a/*/b", "/:x/y/b")
        assert result.kind is ConflictKind.STATIC_VS_DYNAMIC

    def test_unrelated_static_paths(self) -> None:
        assert detect_conflict("/users", "/orders").kind is ConflictKind.NONE

    def test_optional_vs_required(self) -> None:
        assert detect_conflict("/users/:id?", "/users/:id", 1).kind is ConflictKind.NONE


class TestConflictRecord:
    def test_truthiness(self) -> None:
        assert not detect_conflict("/a", "/b")
        assert detect_conflict("/a", "/a")

    def test_is_duplicate(self) -> None:
        assert ConflictKind.EXACT_DUPLICATE.is_duplicate
        assert ConflictKind.PARAM_NAME_CONFLICT.is_duplicate
        assert not ConflictKind.STATIC_VS_DYNAMIC.is_duplicate
        assert not ConflictKind.NONE.is_duplicate

    def test_frozen(self) -> None:
        record = ConflictRecord(kind=ConflictKind.NONE, message="")
        with pytest.raises(AttributeError):
            record.kind = ConflictKind.EXACT_DUPLICATE  # type: ignore[misc]
