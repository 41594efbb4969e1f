"""Kernel security – glob-style wildcard matching.

Only ``*`` is special; it matches any run of characters, including none.
Everything else is compared literally, so a pattern without ``*`` is an
exact match and malformed patterns simply never match anything but
themselves.
"""

from __future__ import annotations


def simple_match(pattern: str | None, candidate: str | None, *, case_sensitive: bool = True) -> bool:
    """Return ``True`` if *candidate* matches *pattern*.

    Examples::

        simple_match("orders-*", "orders-2024")   # True
        simple_match("*", "anything")             # True
        simple_match("*-dlq", "payments-dlq")     # True
        simple_match("a*b*c", "axxbyyc")          # True
        simple_match("alice", "alice1")           # False
    """
    if pattern is None or candidate is None:
        return False
    if not case_sensitive:
        pattern = pattern.casefold()
        candidate = candidate.casefold()
    return _match(pattern, candidate)


def _match(pattern: str, candidate: str) -> bool:
    p = c = 0
    star = -1  # pattern index just past the last "*"
    resume = 0  # candidate index where that "*" stops absorbing
    while c < len(candidate):
        if p < len(pattern) and pattern[p] == "*":
            while p < len(pattern) and pattern[p] == "*":
                p += 1
            if p == len(pattern):
                return True
            star, resume = p, c
        elif p < len(pattern) and pattern[p] == candidate[c]:
            p += 1
            c += 1
        elif star != -1:
            # let the last "*" absorb one more character and retry
            resume += 1
            p, c = star, resume
        else:
            return False
    while p < len(pattern) and pattern[p] == "*":
        p += 1
    return p == len(pattern)


class PatternMatcher:
    """Stateless matcher bound to a case-sensitivity policy.

    Safe to share across threads; holds no mutable state.
    """

    __slots__ = ("_case_sensitive",)

    def __init__(self, *, case_sensitive: bool = True) -> None:
        self._case_sensitive = case_sensitive

    @property
    def case_sensitive(self) -> bool:
        return self._case_sensitive

    def match(self, pattern: str | None, candidate: str | None) -> bool:
        return simple_match(pattern, candidate, case_sensitive=self._case_sensitive)

    __call__ = match


__all__ = ["PatternMatcher", "simple_match"]
