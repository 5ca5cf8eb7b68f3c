"""Extraction of a single C declaration from surrounding source text."""

from typing import Union
import logging
import re

from ..models.declaration import Invalid, RawStatement

logger = logging.getLogger(__name__)

FIX_YOUR_CODE = "fix your code"

_WHITESPACE_RUN = re.compile(r"\s*\n\s*")


def line_bounds(source: str, offset: int) -> tuple:
    """Return the (start, end) offsets of the line containing ``offset``.

    The end offset excludes the newline character.
    """
    start = source.rfind("\n", 0, offset) + 1
    end = source.find("\n", offset)
    if end == -1:
        end = len(source)
    return start, end


def fold_newlines(text: str) -> str:
    """Fold every newline (with its surrounding blanks) into one space and trim."""
    return _WHITESPACE_RUN.sub(" ", text).strip()


def _find_terminator(source: str, start: int):
    """Locate the end of the statement beginning at ``start``.

    Returns:
        Tuple of (end offset exclusive, whether a synthetic ';' is needed),
        or None when no terminator exists.
    """
    paren_depth = 0
    brace_depth = 0

    for index in range(start, len(source)):
        char = source[index]
        if char == "(":
            paren_depth += 1
        elif char == ")":
            paren_depth -= 1
        elif char == "{":
            if paren_depth == 0 and brace_depth == 0:
                # Function definition: the body is not part of the declaration
                if source[start:index].rstrip().endswith(")"):
                    return index, True
            brace_depth += 1
        elif char == "}":
            brace_depth -= 1
        elif char == ";" and paren_depth <= 0 and brace_depth <= 0:
            return index + 1, False

    return None


def _top_level_index(text: str, target: str) -> int:
    """Index of the first ``target`` outside parentheses and braces, or -1."""
    depth = 0
    for index, char in enumerate(text):
        if char in "({":
            depth += 1
        elif char in ")}":
            depth -= 1
        elif char == target and depth == 0:
            return index
    return -1


def extract_statement(
    source: str,
    start: int,
    keep_brackets: bool = False
) -> Union[RawStatement, Invalid]:
    """Extract the declaration starting at ``start``.

    Args:
        source: Whole document text (or a window of it)
        start: Offset of the beginning of the cursor line
        keep_brackets: Leave array bounds in place instead of cutting
            the statement at the first '['

    Returns:
        RawStatement, or Invalid("fix your code") when no terminator is found
    """
    if start < 0 or start > len(source):
        return Invalid(FIX_YOUR_CODE)

    found = _find_terminator(source, start)
    if found is None:
        logger.debug(f"No statement terminator after offset {start}")
        return Invalid(FIX_YOUR_CODE)

    end, synthetic = found
    text = source[start:end]
    if synthetic:
        text = text.rstrip() + ";"

    assign = _top_level_index(text, "=")
    if assign != -1:
        text = text[:assign + 1]

    if not keep_brackets:
        bracket = _top_level_index(text, "[")
        if bracket != -1:
            text = text[:bracket] + ";"

    text = fold_newlines(text)
    if not text:
        return Invalid(FIX_YOUR_CODE)

    return RawStatement(text=text, start=start, end=end)
