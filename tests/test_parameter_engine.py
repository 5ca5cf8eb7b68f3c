"""引数解析のテスト。"""

import pytest

from cdocgen.analyzer.name_rules import NameRule
from cdocgen.analyzer.parameter_engine import (
    describe_parameter,
    extract_parameter_name,
    infer_direction,
    parse_parameters,
    return_category_of,
    split_parameters,
)
from cdocgen.models.declaration import Direction, ReturnCategory


class TestSplitParameters:
    """split_parametersのテスト。"""

    def test_simple(self):
        """単純な引数リストの分割テスト。"""
        assert split_parameters("int a, int b") == ["int a", "int b"]

    def test_nested_commas_are_ignored(self):
        """関数ポインタ内のカンマでは分割しないテスト。"""
        assert split_parameters("int id, void (*cb)(int, void *), size_t n") == [
            "int id",
            "void (*cb)(int, void *)",
            "size_t n",
        ]

    @pytest.mark.parametrize("text", ["void", " void ", "", "   "])
    def test_empty_lists(self, text):
        """voidまたは空の引数リストのテスト。"""
        assert split_parameters(text) == []

    def test_void_pointer_is_a_parameter(self):
        """void * は引数として扱うテスト。"""
        assert split_parameters("void *data") == ["void *data"]


class TestExtractParameterName:
    """extract_parameter_nameのテスト。"""

    @pytest.mark.parametrize("text, expected", [
        ("int a", "a"),
        ("const char *name", "name"),
        ("char **argv", "argv"),
        ("char buf[64]", "buf"),
        ("uint8_t data[]", "data"),
        ("void (*cb)(int, void *)", "cb"),
        ("int (*compare)(const void *, const void *)", "compare"),
        ("...", "..."),
    ])
    def test_names(self, text, expected):
        """各種引数からの名前抽出テスト。"""
        assert extract_parameter_name(text) == expected


class TestInferDirection:
    """infer_directionのテスト。"""

    @pytest.mark.parametrize("text, expected", [
        ("int a", Direction.IN),
        ("const int a", Direction.IN),
        ("int *out", Direction.OUT),
        ("char buf[64]", Direction.OUT),
        ("const char *name", Direction.IN),
        ("char const *name", Direction.IN),
        ("char *const name", Direction.OUT),
        ("const uint8_t data[]", Direction.IN),
        ("void (*cb)(int *)", Direction.IN),
    ])
    def test_decision_table(self, text, expected):
        """方向判定表のテスト。"""
        assert infer_direction(text) == expected

    @pytest.mark.parametrize("text", ["int", "size_t count", "struct foo value", "x"])
    def test_without_markers_is_always_in(self, text):
        """ポインタ・配列・括弧がない引数は常にINとなるテスト。"""
        assert infer_direction(text) == Direction.IN

    def test_idempotent(self):
        """同じ入力に対して常に同じ結果になるテスト。"""
        text = "char *const name"
        assert infer_direction(text) == infer_direction(text)


class TestDescribeParameter:
    """describe_parameterのテスト。"""

    def test_function_pointer(self):
        """関数ポインタ引数の説明テスト。"""
        assert describe_parameter("void (*cb)(int)", "cb") == "A pointer to function"

    def test_function_pointer_in_function_returning_function_pointer(self):
        """関数ポインタを返す関数の関数ポインタ引数の説明テスト。"""
        description = describe_parameter(
            "void (*cb)(int)", "cb", ReturnCategory.FUNCTION_POINTER
        )
        assert description == "A pointer to a function"

    def test_rule_match(self):
        """命名規則に一致する場合の説明テスト。"""
        assert describe_parameter("size_t num_items", "num_items") == "Number of items"

    def test_default_text(self):
        """命名規則に一致しない場合の既定文テスト。"""
        assert describe_parameter("int value", "value", default_text="XXX") == "XXX"

    def test_custom_rules(self):
        """独自ルールテーブルのテスト。"""
        rules = (NameRule.create("Seconds of %s", r"^(\w+)_sec$", (1,)),)
        assert describe_parameter("int wait_sec", "wait_sec", rules=rules) == "Seconds of wait"


class TestParseParameters:
    """parse_parametersのテスト。"""

    def test_first_out_parameter_is_promoted(self):
        """先頭のOUT引数がINOUTに昇格するテスト。"""
        parameters = parse_parameters("int* out_count, const char* name")

        assert [p.name for p in parameters] == ["out_count", "name"]
        assert parameters[0].direction == Direction.INOUT
        assert parameters[1].direction == Direction.IN

    def test_only_first_parameter_is_promoted(self):
        """2番目以降のOUT引数は昇格しないテスト。"""
        parameters = parse_parameters("int *a, int *b")

        assert parameters[0].direction == Direction.INOUT
        assert parameters[1].direction == Direction.OUT

    def test_first_in_parameter_is_unchanged(self):
        """先頭がINの場合は変化しないテスト。"""
        parameters = parse_parameters("int a, char *buf")

        assert parameters[0].direction == Direction.IN
        assert parameters[1].direction == Direction.OUT

    def test_void(self):
        """voidの場合は引数なしとなるテスト。"""
        assert parse_parameters("void") == ()

    def test_descriptions(self):
        """各引数の説明生成テスト。"""
        parameters = parse_parameters(
            "const uint8_t *p_data, size_t data_len, void (*done)(int)",
            default_text="TBD",
        )

        assert [p.description for p in parameters] == [
            "A pointer to data",
            "Length of data",
            "A pointer to function",
        ]


class TestReturnCategory:
    """return_category_ofのテスト。"""

    @pytest.mark.parametrize("text, expected", [
        ("void", ReturnCategory.VOID),
        ("static inline void", ReturnCategory.VOID),
        ("void *", ReturnCategory.VALUE),
        ("int", ReturnCategory.VALUE),
        ("", ReturnCategory.VALUE),
        ("int (*make_adder(int))", ReturnCategory.FUNCTION_POINTER),
    ])
    def test_categories(self, text, expected):
        """戻り値の分類テスト。"""
        assert return_category_of(text) == expected

    def test_unbalanced(self):
        """括弧が不均衡な場合のテスト。"""
        assert return_category_of("int (*f(int)") is None


class TestMissingNames:
    """名前を特定できない引数のテスト。"""

    @pytest.mark.parametrize("text, expected", [
        ("int *", "int"),
        ("const char *", "char"),
        ("(deprecated)", ""),
        ("*", ""),
    ])
    def test_fallback_to_type_name(self, text, expected):
        """名前のない引数は型名、括弧のみの場合は空文字となるテスト。"""
        assert extract_parameter_name(text) == expected

    @pytest.mark.parametrize("text", ["(deprecated)", "int a, *", "(*)(int)"])
    def test_parse_fails_without_name(self, text):
        """名前を特定できない引数があると解析失敗となるテスト。"""
        assert parse_parameters(text) is None
