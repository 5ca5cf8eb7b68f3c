"""Data models for declaration analysis and comment rendering."""

from .declaration import (
    AnalysisResult,
    DeclarationKind,
    Direction,
    FunctionDeclaration,
    FunctionRecord,
    Invalid,
    MacroDeclaration,
    MemberLine,
    Parameter,
    ParsedDeclaration,
    RawStatement,
    ReturnCategory,
    TypeDeclaration,
    TypedefDeclaration,
    VariableDeclaration,
)
from .render import (
    ALTERNATE_LEAD,
    DEFAULT_LEAD,
    DEFAULT_TEXT,
    Insertion,
    RenderConfig,
    RenderPlan,
    RenderResult,
)

__all__ = [
    "AnalysisResult",
    "DeclarationKind",
    "Direction",
    "FunctionDeclaration",
    "FunctionRecord",
    "Invalid",
    "MacroDeclaration",
    "MemberLine",
    "Parameter",
    "ParsedDeclaration",
    "RawStatement",
    "ReturnCategory",
    "TypeDeclaration",
    "TypedefDeclaration",
    "VariableDeclaration",
    "ALTERNATE_LEAD",
    "DEFAULT_LEAD",
    "DEFAULT_TEXT",
    "Insertion",
    "RenderConfig",
    "RenderPlan",
    "RenderResult",
]
