"""
Helpers for asserting on formatted query output.
"""

from __future__ import annotations

import difflib
from typing import Iterable

from hero_queries.errors import AssertionMismatch


def join(strings: Iterable[str], separator: str) -> str:
    """Concatenate in iteration order with `separator` between elements."""
    return separator.join(strings)


def assert_same_string(actual: str, expected: str) -> None:
    """
    Fail unless `actual` and `expected` are identical, byte for byte.

    Raises
    ------
    AssertionMismatch
        With a unified diff of the two strings. Line endings are kept visible
        so CRLF versus LF differences show up in the diff.
    """
    if actual == expected:
        return
    diff = "\n".join(
        difflib.unified_diff(
            [repr(line) for line in expected.splitlines(keepends=True)],
            [repr(line) for line in actual.splitlines(keepends=True)],
            fromfile="expected",
            tofile="actual",
            lineterm="",
        )
    )
    raise AssertionMismatch(f"Strings differ:\n{diff}")


__all__ = ["assert_same_string", "join"]
