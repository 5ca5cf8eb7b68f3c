"""ドキュメント操作と命名規則の入出力モジュール。"""

from .document import DocumentError, apply_insertions, line_start_offset
from .rules_loader import NameRulesLoader, RulesLoadError

__all__ = [
    "DocumentError",
    "apply_insertions",
    "line_start_offset",
    "NameRulesLoader",
    "RulesLoadError",
]
