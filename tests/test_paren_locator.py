"""括弧解析のテスト。"""

import pytest

from cdocgen.analyzer.paren_locator import (
    count_parens,
    is_balanced,
    last_balanced_block,
    matching_close,
    paren_pairs,
)


class TestCountParens:
    """括弧の数え上げのテスト。"""

    def test_count(self):
        """開き括弧と閉じ括弧の数のテスト。"""
        assert count_parens("int (*f(int))(char);") == (3, 3)

    def test_unbalanced(self):
        """不均衡な括弧のテスト。"""
        assert not is_balanced("int f(int a;")
        assert paren_pairs("int f(int a;") == -1

    def test_pairs(self):
        """括弧の組数のテスト。"""
        assert paren_pairs("void f(void)") == 1
        assert paren_pairs("int x") == 0


class TestLastBalancedBlock:
    """last_balanced_blockのテスト。"""

    def test_simple_function(self):
        """単純な関数の引数リストのテスト。"""
        assert last_balanced_block("int add(int a, int b)") == "(int a, int b)"

    def test_function_pointer_return_type(self):
        """関数ポインタを返す関数では末尾の外側ブロックを返すテスト。"""
        assert last_balanced_block("int (*make_adder(int))(int)") == "(int)"

    def test_block_runs_to_end_of_text(self):
        """ブロックは文字列の末尾まで含むテスト。"""
        block = last_balanced_block("int (*make_adder(int))(int);")

        assert block == "(int);"
        assert block.rstrip(";") == "(int)"

    def test_nested_parameter(self):
        """関数ポインタ引数を含む場合に最外の引数リストを返すテスト。"""
        text = "void on(int id, void (*cb)(int, void *))"
        assert last_balanced_block(text) == "(int id, void (*cb)(int, void *))"

    @pytest.mark.parametrize("text", ["int x", "int f(int a", "int f(a))"])
    def test_no_block(self, text):
        """括弧がない、または不均衡な場合のテスト。"""
        assert last_balanced_block(text) is None


class TestMatchingClose:
    """matching_closeのテスト。"""

    def test_matching(self):
        """対応する閉じ括弧の位置のテスト。"""
        text = "(*make_adder(int))"
        assert matching_close(text, 0) == len(text) - 1
        assert matching_close(text, 12) == 16

    def test_no_match(self):
        """対応する閉じ括弧がない場合のテスト。"""
        assert matching_close("(int", 0) == -1
