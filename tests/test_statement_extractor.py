"""宣言文切り出しのテスト。"""

from cdocgen.analyzer.statement_extractor import (
    extract_statement,
    fold_newlines,
    line_bounds,
)
from cdocgen.models.declaration import Invalid, RawStatement


class TestLineBounds:
    """line_boundsのテスト。"""

    def test_middle_line(self):
        """中間行の範囲取得テスト。"""
        source = "int a;\nint b;\nint c;"
        assert line_bounds(source, 9) == (7, 13)

    def test_last_line_without_newline(self):
        """末尾に改行のない最終行のテスト。"""
        source = "int a;\nint b;"
        assert line_bounds(source, 7) == (7, 13)


class TestExtractStatement:
    """extract_statementのテスト。"""

    def test_plain_declaration(self):
        """単純な宣言の切り出しテスト。"""
        source = "int add(int a, int b);\nint other;"
        statement = extract_statement(source, 0)

        assert isinstance(statement, RawStatement)
        assert statement.text == "int add(int a, int b);"
        assert statement.start == 0
        assert statement.end == 22

    def test_multiline_declaration_is_folded(self):
        """複数行にわたる宣言が1行にまとめられるテスト。"""
        source = "int add(int a,\n        int b);\n"
        statement = extract_statement(source, 0)

        assert statement.text == "int add(int a, int b);"

    def test_initializer_is_truncated_after_equal(self):
        """初期化子が '=' の直後で切り捨てられるテスト。"""
        source = "static int table_size = compute(1, 2);\n"
        statement = extract_statement(source, 0)

        assert statement.text == "static int table_size ="

    def test_array_bound_is_replaced(self):
        """配列の添字が取り除かれ ';' が補われるテスト。"""
        source = "char name[NAME_LEN];\n"
        statement = extract_statement(source, 0)

        assert statement.text == "char name;"

    def test_array_with_initializer(self):
        """初期化子付き配列のテスト。"""
        source = "int primes[] = { 2, 3, 5 };\n"
        statement = extract_statement(source, 0)

        assert statement.text == "int primes;"

    def test_keep_brackets(self):
        """keep_brackets指定時に添字を残すテスト。"""
        source = "char name[16];\n"
        statement = extract_statement(source, 0, keep_brackets=True)

        assert statement.text == "char name[16];"

    def test_struct_body_is_captured(self):
        """struct本体内の ';' で終了しないテスト。"""
        source = "struct point {\n    int x;\n    int y;\n};\nint after;"
        statement = extract_statement(source, 0)

        assert statement.text == "struct point { int x; int y; };"
        assert source[statement.end - 2:statement.end] == "};"

    def test_array_member_inside_struct_is_kept(self):
        """struct内の配列メンバーは切り詰めないテスト。"""
        source = "typedef struct {\n    char name[16];\n} entry_t;\n"
        statement = extract_statement(source, 0)

        assert statement.text == "typedef struct { char name[16]; } entry_t;"

    def test_function_definition_stops_at_body(self):
        """関数定義は本体の手前で終了するテスト。"""
        source = "int main(int argc, char **argv)\n{\n    return 0;\n}\n"
        statement = extract_statement(source, 0)

        assert statement.text == "int main(int argc, char **argv);"

    def test_start_in_middle_of_text(self):
        """途中の行から切り出すテスト。"""
        source = "int a;\nvoid reset(void);\n"
        statement = extract_statement(source, 7)

        assert statement.text == "void reset(void);"

    def test_missing_terminator(self):
        """終端がない場合のテスト。"""
        result = extract_statement("int broken(int a", 0)

        assert isinstance(result, Invalid)
        assert result.reason == "fix your code"

    def test_offset_out_of_range(self):
        """範囲外オフセットのテスト。"""
        result = extract_statement("int a;", 100)

        assert isinstance(result, Invalid)


class TestFoldNewlines:
    """fold_newlinesのテスト。"""

    def test_fold(self):
        """改行と周囲の空白が1つの空白になるテスト。"""
        assert fold_newlines("  int a,\n\t   int b  \n") == "int a, int b"
