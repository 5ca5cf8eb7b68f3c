"""Doxygenコメントの生成モジュール。"""

from typing import Iterable, List
import logging

from ..analyzer.parameter_engine import FUNCTION_POINTER_RETURN_TEXT
from ..models.declaration import (
    DeclarationKind,
    Direction,
    FunctionRecord,
    MemberLine,
    ParsedDeclaration,
    ReturnCategory,
)
from ..models.render import Insertion, RenderConfig, RenderResult

logger = logging.getLogger(__name__)

SUMMARY_LABEL = "Summary"

OPEN = "/**"
LINE = " *"
CLOSE = " */"

_DIRECTION_LABELS = {
    Direction.IN: "[in]",
    Direction.OUT: "[out]",
    Direction.INOUT: "[inout]",
}

_TYPE_TAGS = {
    DeclarationKind.ENUM: "enum",
    DeclarationKind.TYPEDEF_ENUM: "enum",
    DeclarationKind.STRUCT: "struct",
    DeclarationKind.TYPEDEF_STRUCT: "struct",
}


def _tag(config: RenderConfig, name: str) -> str:
    return f"{config.lead}{name}"


def _line(text: str = "") -> str:
    return f"{LINE} {text}" if text else LINE


def member_comment(config: RenderConfig) -> str:
    """メンバー行の末尾コメントを生成する。"""
    return f"/**< {config.default_text} */"


def align_member_comments(
    members: Iterable[MemberLine],
    config: RenderConfig
) -> List[Insertion]:
    """メンバー行の末尾コメントを最長行に揃えて配置する。

    コメントは全行で「最長行の長さ + 1」の桁から始まる。

    Args:
        members: コメント付与対象の行
        config: 生成設定

    Returns:
        各行末への挿入
    """
    members = list(members)
    if not members:
        return []

    widest = max(member.width for member in members)
    comment = member_comment(config)
    return [
        Insertion(
            offset=member.end_offset,
            text=" " * (widest - member.width + 1) + comment,
        )
        for member in members
    ]


def _render_block(tag_line: str, body: List[str]) -> str:
    return "\n".join([f"{OPEN} {tag_line}"] + body + [CLOSE])


def render_function(function: FunctionRecord, config: RenderConfig) -> str:
    """関数コメントを生成する。

    Args:
        function: 関数情報
        config: 生成設定

    Returns:
        コメントテキスト
    """
    body: List[str] = []

    if config.emit_details:
        if config.details_as_blank_line:
            body.append(_line())
            body.append(_line(config.default_text))
        else:
            body.append(_line(f"{_tag(config, 'details')} {config.default_text}"))

    for parameter in function.parameters:
        label = _DIRECTION_LABELS[parameter.direction]
        body.append(_line(
            f"{_tag(config, 'param')}{label} {parameter.name} {parameter.description}"
        ))

    if function.return_category == ReturnCategory.FUNCTION_POINTER:
        body.append(_line(f"{_tag(config, 'return')} {FUNCTION_POINTER_RETURN_TEXT}"))
    elif function.return_category == ReturnCategory.VALUE:
        body.append(_line(f"{_tag(config, 'return')} {config.default_text}"))

    return _render_block(f"{_tag(config, 'brief')} {SUMMARY_LABEL}", body)


def render(declaration: ParsedDeclaration, config: RenderConfig) -> RenderResult:
    """解析済みの宣言からコメントを生成する。

    Args:
        declaration: 解析結果（Invalidは不可）
        config: 生成設定

    Returns:
        コメントテキストとメンバー行への挿入

    Raises:
        ValueError: 生成できない種別が渡された場合
    """
    kind = declaration.kind
    insertions: List[Insertion] = []

    if kind == DeclarationKind.MACRO:
        text = _render_block(
            f"{_tag(config, 'def')} {declaration.name}",
            [_line(config.default_text)],
        )
    elif kind in _TYPE_TAGS:
        text = _render_block(
            f"{_tag(config, _TYPE_TAGS[kind])} {declaration.name}",
            [_line(config.default_text)],
        )
        insertions = align_member_comments(declaration.members, config)
    elif kind == DeclarationKind.TYPEDEF_GENERIC:
        text = _render_block(
            f"{_tag(config, 'typedef')} {declaration.name}",
            [_line(config.default_text)],
        )
    elif kind == DeclarationKind.VARIABLE:
        text = _render_block(
            f"{_tag(config, 'var')} {declaration.name}",
            [_line(f"{_tag(config, 'brief')} {config.default_text}")],
        )
    elif kind in (DeclarationKind.SIMPLE_FUNCTION, DeclarationKind.COMPLEX_FUNCTION):
        text = render_function(declaration.function, config)
    else:
        raise ValueError(f"Cannot render declaration of kind {kind.value}")

    logger.debug(f"Rendered {kind.value} '{declaration.name}'")
    return RenderResult(text=text, insertions=insertions)


def render_group_start(config: RenderConfig) -> str:
    """グループ開始ブロックを生成する。"""
    return "\n".join([
        f"{OPEN} {_tag(config, 'name')} {config.default_text}",
        _line(_tag(config, "{")),
        CLOSE,
    ])


def render_group_end(config: RenderConfig) -> str:
    """グループ終了ブロックを生成する。"""
    return f"{OPEN} {_tag(config, '}')} */"
