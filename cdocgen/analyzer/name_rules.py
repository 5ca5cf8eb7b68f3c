"""引数名の命名規則から説明文を生成するルールテーブル。"""

from dataclasses import dataclass
from typing import Iterable, Optional, Pattern, Tuple
import logging
import re

logger = logging.getLogger(__name__)

PLACEHOLDER = "%s"


@dataclass(frozen=True)
class NameRule:
    """命名規則1件。

    Attributes:
        template: 説明文テンプレート（'%s' を0〜2個含む）
        pattern: 識別子にマッチする正規表現
        groups: テンプレートに順に埋め込むキャプチャグループ番号
    """
    template: str
    pattern: Pattern
    groups: Tuple[int, ...] = ()

    @classmethod
    def create(cls, template: str, pattern: str, groups: Iterable[int] = ()) -> "NameRule":
        """パターン文字列からルールを生成する。

        Args:
            template: 説明文テンプレート
            pattern: 正規表現文字列
            groups: キャプチャグループ番号

        Returns:
            NameRuleインスタンス

        Raises:
            ValueError: プレースホルダー数とグループ数が一致しない場合
        """
        groups = tuple(groups)
        if template.count(PLACEHOLDER) != len(groups):
            raise ValueError(
                f"template '{template}' expects {template.count(PLACEHOLDER)} "
                f"groups, got {len(groups)}"
            )
        return cls(template=template, pattern=re.compile(pattern), groups=groups)

    def apply(self, name: str) -> Optional[str]:
        """識別子にルールを適用する。

        Args:
            name: 引数名

        Returns:
            生成した説明文、マッチしない場合はNone
        """
        match = self.pattern.match(name)
        if match is None:
            return None

        description = self.template
        for group in self.groups:
            captured = (match.group(group) or "").lower()
            description = description.replace(PLACEHOLDER, captured, 1)
        return description


# 上から順に評価し、最初にマッチしたルールを採用する
DEFAULT_NAME_RULES: Tuple[NameRule, ...] = (
    NameRule.create("Number of %s", r"^(?:num|n)_(\w+)$", (1,)),
    NameRule.create("Number of %s", r"^n([A-Z]\w*)$", (1,)),
    NameRule.create("Number of %s", r"^(\w+?)(?:_count|_cnt|Count|Cnt)$", (1,)),
    NameRule.create("Length of %s", r"^(\w+?)(?:_len|_length|Len|Length)$", (1,)),
    NameRule.create("Size of %s", r"^(\w+?)(?:_size|Size)$", (1,)),
    NameRule.create("Index of %s", r"^(\w+?)(?:_idx|_index|Idx|Index)$", (1,)),
    NameRule.create("Maximum %s", r"^max(?:_|(?=[A-Z]))(\w+)$", (1,)),
    NameRule.create("Minimum %s", r"^min(?:_|(?=[A-Z]))(\w+)$", (1,)),
    NameRule.create("The %s of %s", r"^([a-z]\w*?)_of_(\w+)$", (1, 2)),
    NameRule.create("Conversion from %s to %s", r"^([a-z]\w*?)_to_(\w+)$", (1, 2)),
    NameRule.create("Conversion from %s to %s", r"^([a-z]+)2([a-z]+)$", (1, 2)),
    NameRule.create("The %s used by %s", r"^([a-z]\w*?)_for_(\w+)$", (1, 2)),
    NameRule.create("Whether %s", r"^(?:is|has)(?:_|(?=[A-Z]))(\w+)$", (1,)),
    NameRule.create("A pointer to %s", r"^(?:p|ptr)_(\w+)$", (1,)),
    NameRule.create("A pointer to %s", r"^p([A-Z]\w*)$", (1,)),
    NameRule.create("Handle of %s", r"^h_(\w+)$", (1,)),
    NameRule.create("Callback for %s", r"^(\w+?)(?:_cb|_callback|Callback)$", (1,)),
    NameRule.create("Buffer for %s", r"^(\w+?)(?:_buf|_buffer|Buf|Buffer)$", (1,)),
    NameRule.create("Duration of %s in milliseconds", r"^(\w+?)(?:_ms|Ms)$", (1,)),
    NameRule.create("Context", r"^(?:ctx|context)$"),
    NameRule.create("Flags", r"^flags?$"),
)


def describe_name(
    name: str,
    rules: Iterable[NameRule] = DEFAULT_NAME_RULES
) -> Optional[str]:
    """最初にマッチしたルールで説明文を生成する。

    Args:
        name: 引数名
        rules: 評価順のルールテーブル

    Returns:
        説明文、どのルールにもマッチしない場合はNone
    """
    for rule in rules:
        description = rule.apply(name)
        if description is not None:
            logger.debug(f"Name '{name}' matched rule '{rule.pattern.pattern}'")
            return description
    return None
