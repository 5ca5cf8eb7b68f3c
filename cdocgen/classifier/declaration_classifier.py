"""C宣言の分類モジュール。

カーソル行から宣言文を切り出し、マクロ・typedef・enum/struct・変数・関数の
いずれかに分類して、コメント生成に必要な情報を抽出する。
"""

from typing import Iterable, List, Optional, Tuple, Union
import logging
import re

from ..analyzer.name_rules import DEFAULT_NAME_RULES, NameRule
from ..analyzer.parameter_engine import (
    FUNCTION_POINTER_NAME,
    parse_parameters,
    return_category_of,
)
from ..analyzer.paren_locator import (
    count_parens,
    is_balanced,
    last_balanced_block,
    matching_close,
)
from ..analyzer.statement_extractor import (
    FIX_YOUR_CODE,
    extract_statement,
    line_bounds,
)
from ..models.declaration import (
    AnalysisResult,
    DeclarationKind,
    FunctionDeclaration,
    FunctionRecord,
    Invalid,
    MacroDeclaration,
    MemberLine,
    RawStatement,
    TypeDeclaration,
    TypedefDeclaration,
    VariableDeclaration,
)
from ..models.render import DEFAULT_TEXT, RenderPlan

logger = logging.getLogger(__name__)

INVALID_STATEMENT = "invalid statement"
INVALID_TYPEDEF = "invalid typedef"
INVALID_COMPLEX_FUNCTION = "invalid complex function"

_MACRO = re.compile(r"^\s*#\s*define\s+([A-Za-z_]\w*)(?:\([^)]*\))?")
_TYPEDEF = re.compile(r"^typedef\b")
_TYPEDEF_TAG = re.compile(
    r"^typedef\s+(?:(?:const|volatile)\s+)*(enum|struct)\b\s*(\w+)?\s*\{.*\}\s*(\w+)\s*;$",
    re.DOTALL,
)
# 配列の添字（keep_brackets 指定時や関数ポインタ配列で残る）
_ARRAY_BOUNDS = r"(?:\s*\[[^\]]*\])*"
_ARRAY_BOUND = re.compile(r"\[[^\]]*\]")

_TYPEDEF_FLAT = re.compile(
    r"^typedef\s+[\w\s\*]*?[\w\*]\s*\b(\w+)" + _ARRAY_BOUNDS + r"\s*;$"
)
_TAG_BLOCK = re.compile(r"^(enum|struct)\b[^{]*\{")
_TAG_DEFINITION = re.compile(
    r"^(enum|struct)\s+(\w+)\s*\{.*\}\s*\w*\s*;$",
    re.DOTALL,
)
_FUNCTION_POINTER_VARIABLE = re.compile(
    r"^[\w\s\*]+\(\s*\*\s*(\w+)" + _ARRAY_BOUNDS + r"\s*\)\s*\((.*)\)\s*[;=]$"
)
_VARIABLE = re.compile(r"^[\w\s\*]*?[\w\*]\s*\b(\w+)" + _ARRAY_BOUNDS + r"\s*[;=]$")
_TRAILING_IDENTIFIER = re.compile(r"(\w+)\s*$")

_TAG_KINDS = {
    ("enum", False): DeclarationKind.ENUM,
    ("struct", False): DeclarationKind.STRUCT,
    ("enum", True): DeclarationKind.TYPEDEF_ENUM,
    ("struct", True): DeclarationKind.TYPEDEF_STRUCT,
}


def is_documentable_line(line: str) -> bool:
    """メンバー行に末尾コメントを付与できるかを判定する。

    空行、および末尾空白を除いて '{' か '}' で終わる行は対象外。
    """
    stripped = line.rstrip()
    if not stripped.strip():
        return False
    return not stripped.endswith(("{", "}"))


def find_member_lines(source: str, start: int, end: int) -> Tuple[MemberLine, ...]:
    """'{' の行と '}' の行の間にあるメンバー行を抽出する。

    Args:
        source: ソース全体
        start: 宣言の開始オフセット
        end: 宣言の終了オフセット

    Returns:
        コメント付与対象のメンバー行
    """
    open_brace = source.find("{", start, end)
    close_brace = source.rfind("}", start, end)
    if open_brace == -1 or close_brace == -1:
        return ()

    _, first_line_end = line_bounds(source, open_brace)
    last_line_start, _ = line_bounds(source, close_brace)

    members: List[MemberLine] = []
    position = first_line_end + 1
    while position < last_line_start:
        line_start, line_end = line_bounds(source, position)
        line = source[line_start:line_end]
        if is_documentable_line(line):
            width = len(line.rstrip())
            members.append(MemberLine(end_offset=line_start + width, width=width))
        position = line_end + 1

    return tuple(members)


def _classify_tag(
    statement: RawStatement,
    keyword: str,
    name: str,
    typedef: bool,
    source: str,
    full_mode: bool
) -> TypeDeclaration:
    members: Tuple[MemberLine, ...] = ()
    if full_mode:
        members = find_member_lines(source, statement.start, statement.end)
    return TypeDeclaration(
        kind=_TAG_KINDS[(keyword, typedef)],
        keyword=keyword,
        name=name,
        members=members,
    )


def classify_typedef(
    statement: RawStatement,
    source: str = "",
    full_mode: bool = False
) -> Union[TypeDeclaration, TypedefDeclaration, Invalid]:
    """typedef 文を分類する。

    Args:
        statement: 宣言文
        source: メンバー行を探すための元ソース
        full_mode: メンバー行を抽出するかどうか

    Returns:
        TypeDeclaration、TypedefDeclaration、またはInvalid
    """
    text = statement.text

    match = _TYPEDEF_TAG.match(text)
    if match:
        keyword, _, alias = match.groups()
        return _classify_tag(statement, keyword, alias, True, source, full_mode)

    if "(" in text:
        fp_match = FUNCTION_POINTER_NAME.search(text)
        if fp_match:
            return TypedefDeclaration(name=fp_match.group(1))
        return Invalid(INVALID_TYPEDEF)

    flat = _TYPEDEF_FLAT.match(text)
    if flat:
        return TypedefDeclaration(name=flat.group(1))

    return Invalid(INVALID_TYPEDEF)


def classify_tag_definition(
    statement: RawStatement,
    source: str = "",
    full_mode: bool = False
) -> Union[TypeDeclaration, Invalid]:
    """typedef を伴わない enum/struct 定義を分類する。"""
    match = _TAG_DEFINITION.match(statement.text)
    if match is None:
        keyword = statement.text.split(None, 1)[0]
        return Invalid(f"invalid {keyword}")

    keyword, name = match.groups()
    return _classify_tag(statement, keyword, name, False, source, full_mode)


def classify_variable(text: str) -> Union[VariableDeclaration, Invalid]:
    """変数宣言を分類する（関数ポインタ変数・配列を含む）。"""
    match = _FUNCTION_POINTER_VARIABLE.match(text)
    if match:
        # 引数部分は1組の括弧で閉じていること
        open_paren = match.start(2) - 1
        if matching_close(text, open_paren) == match.end(2):
            return VariableDeclaration(name=match.group(1))
        return Invalid(INVALID_STATEMENT)

    if "(" in _ARRAY_BOUND.sub("", text):
        return Invalid(INVALID_STATEMENT)

    match = _VARIABLE.match(text)
    if match:
        return VariableDeclaration(name=match.group(1))
    return Invalid(INVALID_STATEMENT)


def classify_simple_function(
    text: str,
    rules: Iterable[NameRule] = DEFAULT_NAME_RULES,
    default_text: str = DEFAULT_TEXT
) -> Union[FunctionDeclaration, Invalid]:
    """括弧が1組だけの関数宣言を分類する。"""
    body = text.rstrip(";").rstrip()
    open_paren = body.find("(")
    close_paren = body.rfind(")")
    if close_paren != len(body) - 1:
        return Invalid(INVALID_STATEMENT)

    head = body[:open_paren]
    match = _TRAILING_IDENTIFIER.search(head)
    if match is None:
        return Invalid(INVALID_STATEMENT)

    return_type = head[:match.start()].strip()
    category = return_category_of(return_type)
    parameters = parse_parameters(
        body[open_paren + 1:close_paren], category, rules, default_text
    )
    if parameters is None:
        return Invalid(INVALID_STATEMENT)

    return FunctionDeclaration(
        kind=DeclarationKind.SIMPLE_FUNCTION,
        function=FunctionRecord(
            name=match.group(1),
            return_category=category,
            parameters=parameters,
        ),
    )


def classify_complex_function(
    text: str,
    rules: Iterable[NameRule] = DEFAULT_NAME_RULES,
    default_text: str = DEFAULT_TEXT
) -> Union[FunctionDeclaration, Invalid]:
    """括弧を複数組含む関数宣言を分類する。

    引数に関数ポインタを持つ関数と、関数ポインタを返す関数の両方を扱う。
    """
    body = text.rstrip(";").rstrip()
    block = last_balanced_block(body)
    if block is None or not block.endswith(")"):
        return Invalid(INVALID_COMPLEX_FUNCTION)

    head = body[:len(body) - len(block)].rstrip()

    match = _TRAILING_IDENTIFIER.search(head)
    if match:
        # 通常の関数（引数に関数ポインタを含む）
        name = match.group(1)
        return_type = head[:match.start()].strip()
        if "(" in return_type:
            # int f(int a) __attribute__((x)) のような後置の括弧
            return Invalid(INVALID_COMPLEX_FUNCTION)
        params_text = block[1:-1]
        category = return_category_of(return_type)
    elif head.endswith(")"):
        # 関数ポインタを返す関数: 関数名の直後の括弧が引数リスト
        fp_match = FUNCTION_POINTER_NAME.search(head)
        if fp_match is None or head[fp_match.end() - 1] != "(":
            return Invalid(INVALID_COMPLEX_FUNCTION)
        name = fp_match.group(1)
        open_paren = fp_match.end() - 1
        close_paren = matching_close(head, open_paren)
        if close_paren == -1:
            return Invalid(INVALID_COMPLEX_FUNCTION)
        params_text = head[open_paren + 1:close_paren]
        category = return_category_of(head)
    else:
        return Invalid(INVALID_COMPLEX_FUNCTION)

    if category is None:
        return Invalid(INVALID_COMPLEX_FUNCTION)

    parameters = parse_parameters(params_text, category, rules, default_text)
    if parameters is None:
        return Invalid(INVALID_COMPLEX_FUNCTION)

    return FunctionDeclaration(
        kind=DeclarationKind.COMPLEX_FUNCTION,
        function=FunctionRecord(
            name=name,
            return_category=category,
            parameters=parameters,
        ),
    )


def classify_function_or_variable(
    text: str,
    rules: Iterable[NameRule] = DEFAULT_NAME_RULES,
    default_text: str = DEFAULT_TEXT
) -> AnalysisResult:
    """変数または関数として分類する。

    関数ポインタ変数、関数の順に解釈を試し、すべて失敗した場合にInvalidを返す。
    """
    opens, closes = count_parens(text)
    if opens != closes:
        return Invalid(FIX_YOUR_CODE)

    if opens == 0:
        return classify_variable(text)

    variable = classify_variable(text)
    if not isinstance(variable, Invalid):
        return variable

    if opens == 1:
        return classify_simple_function(text, rules, default_text)
    return classify_complex_function(text, rules, default_text)


def classify_statement(
    statement: RawStatement,
    source: str = "",
    full_mode: bool = False,
    rules: Iterable[NameRule] = DEFAULT_NAME_RULES,
    default_text: str = DEFAULT_TEXT
) -> AnalysisResult:
    """切り出した宣言文を分類する。

    Args:
        statement: 宣言文
        source: 元ソース（フルモードのメンバー行抽出用）
        full_mode: enum/struct のメンバー行も対象にする
        rules: 命名規則テーブル
        default_text: 既定の説明文

    Returns:
        解析結果またはInvalid
    """
    text = statement.text

    if not is_balanced(text):
        return Invalid(FIX_YOUR_CODE)

    if _TYPEDEF.match(text):
        return classify_typedef(statement, source, full_mode)

    if _TAG_BLOCK.match(text):
        return classify_tag_definition(statement, source, full_mode)

    return classify_function_or_variable(text, rules, default_text)


def classify_macro(line: str) -> Optional[MacroDeclaration]:
    """行が #define であればマクロとして分類する。"""
    match = _MACRO.match(line)
    if match:
        return MacroDeclaration(name=match.group(1))
    return None


def build_render_plan(source: str, start: int, statement_end: int = 0) -> RenderPlan:
    """メインブロックの挿入計画を作成する。

    Args:
        source: ソース全体
        start: 宣言行の任意のオフセット
        statement_end: 宣言文の終端オフセット

    Returns:
        RenderPlan
    """
    line_start, line_end = line_bounds(source, start)
    line = source[line_start:line_end]
    indent = line[:len(line) - len(line.lstrip())]

    needs_blank_line = False
    if line_start > 0:
        previous_start, previous_end = line_bounds(source, line_start - 1)
        needs_blank_line = bool(source[previous_start:previous_end].strip())

    return RenderPlan(
        insert_offset=line_start,
        indent=indent,
        needs_blank_line=needs_blank_line,
        statement_end=statement_end or line_end,
    )


class DeclarationClassifier:
    """カーソル行の宣言を解析するクラス。

    命名規則テーブルと解析設定を保持し、各行の解析に使い回す。
    """

    def __init__(
        self,
        rules: Optional[Iterable[NameRule]] = None,
        default_text: str = DEFAULT_TEXT,
        keep_brackets: bool = False
    ):
        """解析器を初期化する。

        Args:
            rules: 命名規則テーブル（省略時は組み込みテーブル）
            default_text: 既定の説明文
            keep_brackets: 配列の '[...]' を残したまま解析する
        """
        self.rules: Tuple[NameRule, ...] = (
            tuple(rules) if rules is not None else DEFAULT_NAME_RULES
        )
        self.default_text = default_text
        self.keep_brackets = keep_brackets

    def classify(
        self,
        statement: RawStatement,
        source: str = "",
        full_mode: bool = False
    ) -> AnalysisResult:
        """切り出し済みの宣言文を分類する。"""
        return classify_statement(
            statement, source, full_mode, self.rules, self.default_text
        )

    def analyze(
        self,
        source_text: str,
        start_offset: int,
        full_mode: bool = False
    ) -> Tuple[AnalysisResult, RenderPlan]:
        """カーソル行の宣言を解析する。

        Args:
            source_text: ドキュメントのテキスト
            start_offset: カーソル行の任意のオフセット
            full_mode: enum/struct のメンバー行も対象にする

        Returns:
            (解析結果またはInvalid, RenderPlan) のタプル
        """
        line_start, line_end = line_bounds(source_text, start_offset)
        plan = build_render_plan(source_text, line_start)

        macro = classify_macro(source_text[line_start:line_end])
        if macro is not None:
            logger.debug(f"Classified macro '{macro.name}'")
            return macro, plan

        statement = extract_statement(source_text, line_start, self.keep_brackets)
        if isinstance(statement, Invalid):
            return statement, plan

        plan = build_render_plan(source_text, line_start, statement.end)
        result = self.classify(statement, source_text, full_mode)

        if isinstance(result, Invalid):
            logger.info(f"Not documented ({result.reason}): {statement.text}")
        else:
            logger.debug(f"Classified {result.kind.value}: {statement.text}")

        return result, plan


def analyze_declaration(
    source_text: str,
    start_offset: int,
    full_mode: bool = False,
    keep_brackets: bool = False,
    rules: Optional[Iterable[NameRule]] = None,
    default_text: str = DEFAULT_TEXT
) -> Tuple[AnalysisResult, RenderPlan]:
    """カーソル行の宣言を解析する。

    DeclarationClassifier を1回だけ使う場合の簡易関数。

    Returns:
        (解析結果またはInvalid, RenderPlan) のタプル
    """
    classifier = DeclarationClassifier(rules, default_text, keep_brackets)
    return classifier.analyze(source_text, start_offset, full_mode)
