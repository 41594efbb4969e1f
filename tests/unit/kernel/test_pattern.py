"""Unit tests for kernel security – wildcard pattern matching."""

from __future__ import annotations

import time

import pytest

from broker_auth.kernel.security import PatternMatcher, simple_match


class TestSimpleMatch:
    @pytest.mark.parametrize(
        ("pattern", "candidate"),
        [
            ("alice", "alice"),
            ("alice*", "alice"),
            ("alice*", "alice1"),
            ("orders-*", "orders-2024"),
            ("*", ""),
            ("*", "anything"),
            ("*-dlq", "payments-dlq"),
            ("a*b*c", "axxbyyc"),
            ("a**b", "ab"),
            ("*orders*", "eu-orders-2024"),
        ],
    )
    def test_matches(self, pattern: str, candidate: str) -> None:
        assert simple_match(pattern, candidate) is True

    @pytest.mark.parametrize(
        ("pattern", "candidate"),
        [
            ("alice", "alice1"),
            ("alice*", "bob"),
            ("orders-*", "orders"),
            ("*-dlq", "payments-dlq-old"),
            ("a*b*c", "axxbyy"),
            ("", "x"),
        ],
    )
    def test_does_not_match(self, pattern: str, candidate: str) -> None:
        assert simple_match(pattern, candidate) is False

    def test_none_never_matches(self) -> None:
        assert simple_match(None, "alice") is False
        assert simple_match("alice", None) is False
        assert simple_match(None, None) is False

    def test_other_glob_characters_are_literal(self) -> None:
        assert simple_match("orders-?", "orders-1") is False
        assert simple_match("orders-?", "orders-?") is True
        assert simple_match("[ab]", "a") is False
        assert simple_match("[ab]", "[ab]") is True

    def test_case_sensitive_by_default(self) -> None:
        assert simple_match("Alice*", "alice1") is False

    def test_case_insensitive(self) -> None:
        assert simple_match("Alice*", "ALICE1", case_sensitive=False) is True


class TestPatternMatcher:
    def test_default_policy(self) -> None:
        matcher = PatternMatcher()
        assert matcher.case_sensitive is True
        assert matcher.match("orders-*", "orders-1") is True
        assert matcher.match("ORDERS-*", "orders-1") is False

    def test_insensitive_policy(self) -> None:
        matcher = PatternMatcher(case_sensitive=False)
        assert matcher.match("ORDERS-*", "orders-1") is True

    def test_callable(self) -> None:
        matcher = PatternMatcher()
        assert matcher("a*", "abc") is True


# ---------------------------------------------------------------------------
# Pathological patterns
# ---------------------------------------------------------------------------


class TestPathologicalPatterns:
    def test_many_consecutive_stars(self) -> None:
        assert simple_match("*" * 2000, "alice") is True
        assert simple_match("*" * 2000 + "x", "alice") is False

    def test_many_separated_stars(self) -> None:
        pattern = "a*" * 1500
        assert simple_match(pattern, "a" * 1500) is True
        assert simple_match(pattern, "a" * 1499) is False

    def test_multi_star_mismatch_is_fast(self) -> None:
        started = time.perf_counter()
        assert simple_match("*a*a*a*a*a*b", "a" * 60) is False
        assert simple_match("*a*a*a*a*a*a*a*a*b", "a" * 5000) is False
        assert time.perf_counter() - started < 1.0

    def test_backtracks_to_last_star(self) -> None:
        assert simple_match("*ab*ab", "aabxab") is True
        assert simple_match("a*b*c", "abcbc") is True
        assert simple_match("a*bc", "abcbd") is False
