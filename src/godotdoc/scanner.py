"""Bracket and string aware search over GDScript source text."""

from __future__ import annotations

from .errors import BracketMismatch

_OPENERS = "([{"
_CLOSERS = {")": "(", "]": "[", "}": "{"}
_QUOTES = "\"'"


def find(
    text: str,
    target: str,
    brackets: list[str] | None = None,
    *,
    top_level: bool = False,
    filename: str | None = None,
    lineno: int | None = None,
) -> int:
    """Return the index of the first unquoted `target` in `text`, or -1.

    `brackets` is the open-bracket stack of the current statement. It is
    updated in place for every character scanned before the match, so callers
    can carry it across the physical lines of one statement.

    Args:
        text: Text to scan
        target: Single character or literal substring to look for
        brackets: Shared bracket stack; a fresh one is used if omitted
        top_level: Only accept a match at the bracket depth found on entry
        filename: Reported in BracketMismatch
        lineno: Reported in BracketMismatch

    Returns:
        Index of the match, -1 if there is none

    Raises:
        BracketMismatch: On a closing bracket with no matching opener
    """
    if brackets is None:
        brackets = []
    base = len(brackets)
    quote = None
    escaped = False

    for i, ch in enumerate(text):
        if quote is not None:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
            continue

        # The match is tested before the character changes the bracket depth
        if text.startswith(target, i) and (not top_level or len(brackets) == base):
            return i

        if ch in _QUOTES:
            quote = ch
        elif ch in _OPENERS:
            brackets.append(ch)
        elif ch in _CLOSERS:
            if not brackets:
                raise BracketMismatch(f"extra '{ch}'", filename, lineno)
            if brackets.pop() != _CLOSERS[ch]:
                raise BracketMismatch(
                    "closing bracket does not match opening bracket", filename, lineno
                )

    return -1


def split_top_level(text: str, sep: str = ",") -> list[str]:
    """Split on `sep` occurrences outside strings and brackets."""
    parts = []
    while True:
        pos = find(text, sep, top_level=True)
        if pos < 0:
            parts.append(text)
            return parts
        parts.append(text[:pos])
        text = text[pos + len(sep) :]
