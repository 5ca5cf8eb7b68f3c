"""C宣言の解析結果モデル。"""

from dataclasses import dataclass, field
from typing import Tuple, Union
from enum import Enum


class DeclarationKind(Enum):
    """宣言の種別。"""
    MACRO = "macro"
    TYPEDEF_ENUM = "typedef_enum"
    TYPEDEF_STRUCT = "typedef_struct"
    TYPEDEF_GENERIC = "typedef_generic"
    ENUM = "enum"
    STRUCT = "struct"
    VARIABLE = "variable"
    SIMPLE_FUNCTION = "simple_function"
    COMPLEX_FUNCTION = "complex_function"
    INVALID = "invalid"


class Direction(Enum):
    """引数の入出力方向。"""
    IN = "in"
    OUT = "out"
    INOUT = "inout"


class ReturnCategory(Enum):
    """関数の戻り値の分類。"""
    VOID = "void"
    VALUE = "value"
    FUNCTION_POINTER = "function_pointer"


@dataclass(frozen=True)
class RawStatement:
    """ソースから切り出した1つの宣言文。

    text は改行を空白に置換し前後の空白を除去したもの。
    start/end は元ソース上の範囲。
    """
    text: str
    start: int
    end: int

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class Invalid:
    """解析失敗。理由のみを持つ。"""
    reason: str

    kind = DeclarationKind.INVALID

    def __str__(self) -> str:
        return f"invalid: {self.reason}"


@dataclass(frozen=True)
class MemberLine:
    """末尾コメントを付与するメンバー行。"""
    end_offset: int  # 行末（末尾空白を除く）のソース上オフセット
    width: int       # 行頭からの表示幅


@dataclass(frozen=True)
class Parameter:
    """関数の引数。"""
    name: str
    direction: Direction
    description: str

    def __str__(self) -> str:
        return f"[{self.direction.value}] {self.name}"


@dataclass(frozen=True)
class FunctionRecord:
    """関数宣言から抽出した情報。"""
    name: str
    return_category: ReturnCategory
    parameters: Tuple[Parameter, ...] = ()


@dataclass(frozen=True)
class MacroDeclaration:
    """#define マクロ。"""
    name: str

    kind = DeclarationKind.MACRO


@dataclass(frozen=True)
class TypeDeclaration:
    """enum/struct 宣言（typedef 経由を含む）。

    name は typedef の場合は別名、それ以外はタグ名。
    members はフルモード時のみ設定される。
    """
    kind: DeclarationKind
    keyword: str
    name: str
    members: Tuple[MemberLine, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TypedefDeclaration:
    """enum/struct 以外の typedef。"""
    name: str

    kind = DeclarationKind.TYPEDEF_GENERIC


@dataclass(frozen=True)
class VariableDeclaration:
    """変数宣言。"""
    name: str

    kind = DeclarationKind.VARIABLE


@dataclass(frozen=True)
class FunctionDeclaration:
    """関数宣言（単純/複雑）。"""
    kind: DeclarationKind
    function: FunctionRecord

    @property
    def name(self) -> str:
        return self.function.name


ParsedDeclaration = Union[
    MacroDeclaration,
    TypeDeclaration,
    TypedefDeclaration,
    VariableDeclaration,
    FunctionDeclaration,
]

AnalysisResult = Union[ParsedDeclaration, Invalid]
