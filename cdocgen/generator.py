"""宣言の解析からコメント挿入までをまとめるモジュール。"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

from .config import Config
from .analyzer.name_rules import DEFAULT_NAME_RULES, NameRule
from .classifier.declaration_classifier import DeclarationClassifier, build_render_plan
from .io.document import apply_insertions, collect_insertions
from .io.rules_loader import NameRulesLoader
from .models.declaration import Invalid
from .models.render import Insertion, RenderConfig
from .renderer.comment_renderer import render
from .renderer.wrappers import find_group, render_file_header, render_group

logger = logging.getLogger(__name__)


@dataclass
class DocumentOutcome:
    """1箇所のコメント生成結果。

    Attributes:
        insertions: ドキュメントへの挿入（失敗時は空）
        reason: 失敗理由（成功時はNone）
    """
    insertions: List[Insertion] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        """成功したかどうか。"""
        return self.reason is None

    def apply(self, source: str) -> str:
        """結果をテキストに適用する。失敗時は元のテキストを返す。"""
        if not self.ok:
            return source
        return apply_insertions(source, self.insertions)


class DocGenerator:
    """Doxygenコメント生成のメインクラス。"""

    def __init__(self, config: Optional[Config] = None):
        """生成器を初期化する。

        Args:
            config: アプリケーション設定（省略時は既定値）
        """
        self.config = config or Config()
        self.render_config: RenderConfig = self.config.render_config()
        self.rules: Tuple[NameRule, ...] = self._load_rules()
        self.classifier = DeclarationClassifier(
            self.rules,
            default_text=self.render_config.default_text,
            keep_brackets=self.config.keep_array_brackets,
        )

        logger.info(f"DocGenerator initialized with {len(self.rules)} naming rules")

    def _load_rules(self) -> Tuple[NameRule, ...]:
        """命名規則テーブルを読み込む。"""
        if not self.config.name_rules:
            return DEFAULT_NAME_RULES
        return NameRulesLoader().load(self.config.name_rules)

    def document_declaration(
        self,
        source: str,
        offset: int,
        full_mode: Optional[bool] = None
    ) -> DocumentOutcome:
        """カーソル行の宣言にコメントを生成する。

        Args:
            source: ドキュメントのテキスト
            offset: カーソル行の任意のオフセット
            full_mode: メンバーにもコメントを付けるか（省略時は設定値）

        Returns:
            DocumentOutcome
        """
        if full_mode is None:
            full_mode = self.config.full_mode

        declaration, plan = self.classifier.analyze(source, offset, full_mode)
        if isinstance(declaration, Invalid):
            return DocumentOutcome(reason=declaration.reason)

        result = render(declaration, self.render_config)
        return DocumentOutcome(insertions=collect_insertions(result, plan))

    def document_group(
        self,
        source: str,
        offset: int,
        full_mode: Optional[bool] = None
    ) -> DocumentOutcome:
        """カーソル行から始まる同形の行をグループとして囲む。

        Args:
            source: ドキュメントのテキスト
            offset: グループ先頭行の任意のオフセット
            full_mode: 各行にもコメントを付けるか（省略時は設定値）

        Returns:
            DocumentOutcome
        """
        if full_mode is None:
            full_mode = self.config.full_mode

        group = find_group(source, offset)
        if isinstance(group, Invalid):
            return DocumentOutcome(reason=group.reason)

        result = render_group(group, self.render_config, full_mode)
        plan = build_render_plan(source, group.start, group.end)
        return DocumentOutcome(insertions=collect_insertions(result, plan))

    def document_file_header(
        self,
        source: str,
        file_name: str,
        date: Optional[str] = None
    ) -> DocumentOutcome:
        """ファイル先頭にヘッダーコメントを生成する。

        Args:
            source: ドキュメントのテキスト
            file_name: ファイル名
            date: 日付（省略可）

        Returns:
            DocumentOutcome
        """
        text = render_file_header(
            file_name,
            self.render_config,
            author=self.config.author,
            date=date,
        )
        separator = "\n\n" if source and not source.startswith("\n") else "\n"
        return DocumentOutcome(insertions=[Insertion(offset=0, text=text + separator)])

    def document_lines(
        self,
        source: str,
        offsets: List[int],
        group: bool = False
    ) -> Tuple[str, List[Tuple[int, Optional[str]]]]:
        """複数の位置にまとめてコメントを生成する。

        後ろの位置から処理するため、前方のオフセットは変化しない。

        Args:
            source: ドキュメントのテキスト
            offsets: 各対象行の任意のオフセット
            group: グループとして処理するか

        Returns:
            (更新後のテキスト, [(オフセット, 失敗理由またはNone)]) のタプル
        """
        reasons = []
        for offset in sorted(set(offsets), reverse=True):
            if group:
                outcome = self.document_group(source, offset)
            else:
                outcome = self.document_declaration(source, offset)
            source = outcome.apply(source)
            reasons.append((offset, outcome.reason))

        return source, list(reversed(reasons))
