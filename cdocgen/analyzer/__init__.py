"""宣言文の切り出し・括弧解析・引数解析モジュール。"""

from .statement_extractor import extract_statement
from .paren_locator import count_parens, last_balanced_block
from .parameter_engine import (
    extract_parameter_name,
    infer_direction,
    parse_parameters,
    split_parameters,
)
from .name_rules import DEFAULT_NAME_RULES, NameRule, describe_name

__all__ = [
    "extract_statement",
    "count_parens",
    "last_balanced_block",
    "extract_parameter_name",
    "infer_direction",
    "parse_parameters",
    "split_parameters",
    "DEFAULT_NAME_RULES",
    "NameRule",
    "describe_name",
]
