"""コメント生成の設定と出力モデル。"""

from dataclasses import dataclass, field
from typing import List

DEFAULT_LEAD = "@"
ALTERNATE_LEAD = "\\"
DEFAULT_TEXT = "TBD"


@dataclass(frozen=True)
class RenderConfig:
    """コメント生成の設定。

    Attributes:
        use_alternate_lead: タグの先頭文字を '\\' にする（既定は '@'）
        default_text: 説明文のプレースホルダー
        emit_details: 関数コメントに details 行を出力する
        details_as_blank_line: details をタグではなく空行で出力する
            （emit_details が True の場合のみ有効）
    """
    use_alternate_lead: bool = False
    default_text: str = DEFAULT_TEXT
    emit_details: bool = False
    details_as_blank_line: bool = False

    @property
    def lead(self) -> str:
        """タグの先頭文字を取得する。"""
        return ALTERNATE_LEAD if self.use_alternate_lead else DEFAULT_LEAD


@dataclass(frozen=True)
class Insertion:
    """ドキュメントへの挿入位置とテキスト。"""
    offset: int
    text: str


@dataclass(frozen=True)
class RenderPlan:
    """メインのコメントブロックの挿入計画。

    Attributes:
        insert_offset: 宣言行の行頭オフセット
        indent: 宣言行のインデント
        needs_blank_line: 直前の行が空行でないため空行を補う必要がある
        statement_end: 宣言文の終端オフセット
    """
    insert_offset: int
    indent: str = ""
    needs_blank_line: bool = False
    statement_end: int = 0


@dataclass
class RenderResult:
    """生成されたコメントとメンバー行への挿入。"""
    text: str
    insertions: List[Insertion] = field(default_factory=list)

    def line_count(self) -> int:
        """コメントブロックの行数を取得する。"""
        return len(self.text.splitlines())
