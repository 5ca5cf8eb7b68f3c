"""生成したコメントをドキュメントへ反映するモジュール。"""

from typing import Iterable, List
import logging

from ..models.render import Insertion, RenderPlan, RenderResult

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """ドキュメント操作時のエラー。"""
    pass


def line_start_offset(source: str, line_number: int) -> int:
    """行番号から行頭オフセットを求める。

    Args:
        source: ドキュメントのテキスト
        line_number: 行番号（1始まり）

    Returns:
        行頭のオフセット

    Raises:
        DocumentError: 行番号が範囲外の場合
    """
    lines = source.split("\n")
    if line_number < 1 or line_number > len(lines):
        raise DocumentError(
            f"Line {line_number} is out of range (1-{len(lines)})"
        )
    return sum(len(line) + 1 for line in lines[:line_number - 1])


def indent_block(text: str, indent: str) -> str:
    """コメントブロックの各行にインデントを付与する。"""
    if not indent:
        return text
    return "\n".join(indent + line for line in text.split("\n"))


def build_block_insertion(result: RenderResult, plan: RenderPlan) -> Insertion:
    """メインのコメントブロックの挿入を作成する。

    直前の行が空行でない場合は空行を補う。

    Args:
        result: 生成結果
        plan: 挿入計画

    Returns:
        宣言行の行頭への挿入
    """
    text = indent_block(result.text, plan.indent) + "\n"
    if plan.needs_blank_line:
        text = "\n" + text
    return Insertion(offset=plan.insert_offset, text=text)


def apply_insertions(source: str, insertions: Iterable[Insertion]) -> str:
    """挿入をドキュメントに適用する。

    オフセットの大きい順に適用するため、各オフセットは元のテキスト基準のままでよい。
    同じオフセットへの挿入はリストの順序どおりに並ぶ。

    Args:
        source: 元のテキスト
        insertions: 挿入のリスト

    Returns:
        挿入後のテキスト

    Raises:
        DocumentError: オフセットが範囲外の場合
    """
    ordered = sorted(
        enumerate(insertions),
        key=lambda item: (item[1].offset, item[0]),
        reverse=True,
    )

    result = source
    for _, insertion in ordered:
        if insertion.offset < 0 or insertion.offset > len(source):
            raise DocumentError(f"Insertion offset out of range: {insertion.offset}")
        result = result[:insertion.offset] + insertion.text + result[insertion.offset:]

    logger.debug(f"Applied {len(ordered)} insertions")
    return result


def collect_insertions(result: RenderResult, plan: RenderPlan) -> List[Insertion]:
    """メインブロックとメンバー行の挿入をまとめる。"""
    return [build_block_insertion(result, plan)] + list(result.insertions)
