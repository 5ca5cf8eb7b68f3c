"""Parenthesis counting and matching-block discovery."""

from typing import Optional, Tuple


def count_parens(text: str) -> Tuple[int, int]:
    """Count '(' and ')' occurrences.

    Args:
        text: Text to inspect

    Returns:
        Tuple of (open count, close count)
    """
    return text.count("("), text.count(")")


def is_balanced(text: str) -> bool:
    """Return True when '(' and ')' occur the same number of times."""
    opens, closes = count_parens(text)
    return opens == closes


def paren_pairs(text: str) -> int:
    """Number of parenthesis pairs, or -1 when the text is unbalanced."""
    opens, closes = count_parens(text)
    if opens != closes:
        return -1
    return opens


def last_balanced_block(text: str) -> Optional[str]:
    """Return the last outermost parenthesized block of ``text``.

    Scans backward from just before the last ')' keeping a nesting level.
    Every ')' raises the level; a '(' lowers it, or at level zero marks the
    opening of the block. The returned substring runs from that '(' to the
    end of ``text``.

    Args:
        text: Text with balanced parentheses

    Returns:
        The block, or None when the text is unbalanced or has no parentheses
    """
    opens, closes = count_parens(text)
    if opens != closes or opens == 0:
        return None

    last_close = text.rfind(")")
    level = 0
    for index in range(last_close - 1, -1, -1):
        char = text[index]
        if char == ")":
            level += 1
        elif char == "(":
            if level == 0:
                return text[index:]
            level -= 1

    return None


def matching_close(text: str, open_index: int) -> int:
    """Index of the ')' matching the '(' at ``open_index``, or -1."""
    level = 0
    for index in range(open_index, len(text)):
        char = text[index]
        if char == "(":
            level += 1
        elif char == ")":
            level -= 1
            if level == 0:
                return index
    return -1
