"""宣言の分類モジュール。"""

from .declaration_classifier import (
    DeclarationClassifier,
    analyze_declaration,
    classify_statement,
)

__all__ = ["DeclarationClassifier", "analyze_declaration", "classify_statement"]
