"""Parameter list splitting, direction inference and description synthesis."""

from typing import Iterable, List, Optional, Tuple
import logging
import re

from ..models.declaration import Direction, Parameter, ReturnCategory
from ..models.render import DEFAULT_TEXT
from .name_rules import DEFAULT_NAME_RULES, NameRule, describe_name
from .paren_locator import count_parens

logger = logging.getLogger(__name__)

FUNCTION_POINTER_TEXT = "A pointer to function"
FUNCTION_POINTER_RETURN_TEXT = "A pointer to a function"

# "type ( [*] name )" or "type ( [*] name (" as found in function pointers
FUNCTION_POINTER_NAME = re.compile(r"\w[\w\s\*]*\(\s*\*?\s*(\w+)\s*[\)\(]")

_TRAILING_IDENTIFIER = re.compile(r"(\w+)\s*$")
_IDENTIFIER = re.compile(r"\w+")
_CONST = re.compile(r"\bconst\b")
_VOID = re.compile(r"\bvoid\b")


def split_parameters(text: str) -> List[str]:
    """Split a parameter list on commas at parenthesis depth zero.

    Args:
        text: Text between the parameter list parentheses

    Returns:
        Stripped parameter texts; empty for '' and for a lone 'void'
    """
    parts = []
    depth = 0
    current = []

    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    parts.append("".join(current).strip())
    parts = [part for part in parts if part]

    if len(parts) == 1 and parts[0] == "void":
        return []
    return parts


def extract_parameter_name(text: str) -> str:
    """Extract the declared name of a single parameter.

    Args:
        text: Parameter text, e.g. "const char *name" or "int (*cb)(void)"

    Returns:
        The identifier, or an empty string when none is found
    """
    text = text.strip()

    if "(" in text:
        match = FUNCTION_POINTER_NAME.search(text)
        if match:
            return match.group(1)

    bracket = text.find("[")
    if bracket != -1:
        text = text[:bracket]

    if text.endswith("..."):
        return "..."

    match = _TRAILING_IDENTIFIER.search(text.rstrip())
    if match:
        return match.group(1)

    # Unnamed parameter such as "int *": the type name stands in
    if "(" not in text:
        identifiers = _IDENTIFIER.findall(text)
        if identifiers:
            return identifiers[-1]
    return ""


def infer_direction(text: str) -> Direction:
    """Infer the data direction of a parameter from its type syntax.

    no pointer/array marker -> IN; marker without const -> OUT;
    const before the marker -> IN; const after the marker -> OUT.
    A function pointer parameter is always IN.

    Args:
        text: Parameter text

    Returns:
        Direction.IN or Direction.OUT
    """
    if "(" in text:
        return Direction.IN

    markers = [index for index in (text.find("*"), text.find("[")) if index != -1]
    if not markers:
        return Direction.IN
    marker = min(markers)

    const = _CONST.search(text)
    if const is None:
        return Direction.OUT
    if const.start() < marker:
        return Direction.IN
    return Direction.OUT


def describe_parameter(
    text: str,
    name: str,
    return_category: ReturnCategory = ReturnCategory.VALUE,
    rules: Iterable[NameRule] = DEFAULT_NAME_RULES,
    default_text: str = DEFAULT_TEXT
) -> str:
    """Build the description of a parameter.

    Args:
        text: Original parameter text
        name: Extracted parameter name
        return_category: Return category of the enclosing function
        rules: Ordered naming rule table
        default_text: Text used when no rule matches

    Returns:
        Description text
    """
    opens, _ = count_parens(text)
    if opens >= 1:
        if return_category == ReturnCategory.FUNCTION_POINTER:
            return FUNCTION_POINTER_RETURN_TEXT
        return FUNCTION_POINTER_TEXT

    description = describe_name(name, rules)
    if description is None:
        return default_text
    return description


def parse_parameters(
    text: str,
    return_category: ReturnCategory = ReturnCategory.VALUE,
    rules: Iterable[NameRule] = DEFAULT_NAME_RULES,
    default_text: str = DEFAULT_TEXT
) -> Optional[Tuple[Parameter, ...]]:
    """Turn a raw parameter list into Parameter records.

    The first parameter is promoted from OUT to INOUT. A parameter whose
    name cannot be extracted makes the whole list unusable.

    Args:
        text: Text between the parameter list parentheses
        return_category: Return category of the enclosing function
        rules: Ordered naming rule table
        default_text: Text used when no rule matches

    Returns:
        Parameters in source order, or None when a name is missing
    """
    rules = tuple(rules)
    parameters = []

    for part in split_parameters(text):
        name = extract_parameter_name(part)
        if not name:
            logger.debug(f"No parameter name in '{part}'")
            return None
        parameters.append(Parameter(
            name=name,
            direction=infer_direction(part),
            description=describe_parameter(
                part, name, return_category, rules, default_text
            ),
        ))

    if parameters and parameters[0].direction == Direction.OUT:
        first = parameters[0]
        parameters[0] = Parameter(
            name=first.name,
            direction=Direction.INOUT,
            description=first.description,
        )

    logger.debug(f"Parsed {len(parameters)} parameters from '({text})'")
    return tuple(parameters)


def return_category_of(return_type: str) -> Optional[ReturnCategory]:
    """Classify the return type text of a function.

    Args:
        return_type: Text preceding the function name (or the whole head
            for a function returning a function pointer)

    Returns:
        ReturnCategory, or None when the parentheses do not balance
    """
    opens, closes = count_parens(return_type)
    if opens != closes:
        return None
    if opens >= 2:
        return ReturnCategory.FUNCTION_POINTER
    if _VOID.search(return_type) and "*" not in return_type and "(" not in return_type:
        return ReturnCategory.VOID
    return ReturnCategory.VALUE
