"""DocGeneratorとCLIのテスト。"""

from pathlib import Path
from tempfile import TemporaryDirectory

from cdocgen.config import Config
from cdocgen.generator import DocGenerator
from cdocgen.main import main


class TestDocGenerator:
    """DocGeneratorのテスト。"""

    def test_document_function(self):
        """関数宣言へのコメント挿入テスト。"""
        source = "int add(int a, int b);\n"
        outcome = DocGenerator().document_declaration(source, 0)

        assert outcome.ok
        assert outcome.apply(source) == (
            "/** @brief Summary\n"
            " * @param[in] a TBD\n"
            " * @param[in] b TBD\n"
            " * @return TBD\n"
            " */\n"
            "int add(int a, int b);\n"
        )

    def test_document_indented_member(self):
        """インデントと空行の補完テスト。"""
        source = "struct s {\n    int a;\n};\n"
        outcome = DocGenerator().document_declaration(source, 11)

        assert outcome.apply(source) == (
            "struct s {\n"
            "\n"
            "    /** @var a\n"
            "     * @brief TBD\n"
            "     */\n"
            "    int a;\n"
            "};\n"
        )

    def test_full_mode_struct(self):
        """フルモードでのメンバーコメントのテスト。"""
        source = "enum mode {\n    MODE_A,\n    MODE_LONG,\n};\n"
        generator = DocGenerator(Config(full_mode=True))

        result = generator.document_declaration(source, 0).apply(source)

        assert result == (
            "/** @enum mode\n"
            " * TBD\n"
            " */\n"
            "enum mode {\n"
            "    MODE_A,    /**< TBD */\n"
            "    MODE_LONG, /**< TBD */\n"
            "};\n"
        )

    def test_invalid_leaves_source_unchanged(self):
        """解析失敗時にテキストが変化しないテスト。"""
        source = "int f(int a));\n"
        outcome = DocGenerator().document_declaration(source, 0)

        assert not outcome.ok
        assert outcome.reason == "fix your code"
        assert outcome.insertions == []
        assert outcome.apply(source) == source

    def test_document_group(self):
        """グループ区切りの挿入テスト。"""
        source = "int a;\nint b;\n"
        result = DocGenerator().document_group(source, 0).apply(source)

        assert result == "/** @name TBD\n * @{\n */\nint a;\nint b;\n/** @} */\n"

    def test_file_header(self):
        """ファイルヘッダーの挿入テスト。"""
        generator = DocGenerator(Config(author="Taro"))
        result = generator.document_file_header("int x;\n", "a.h", date="2026-10-19").apply("int x;\n")

        assert result == (
            "/**\n"
            " * @file a.h\n"
            " * @brief TBD\n"
            " * @author Taro\n"
            " * @date 2026-10-19\n"
            " */\n"
            "\n"
            "int x;\n"
        )

    def test_document_lines_bottom_up(self):
        """複数行の処理で前方のオフセットが保たれるテスト。"""
        source = "int a;\nint b;\nint f(int a));\n"
        result, outcomes = DocGenerator().document_lines(source, [7, 0, 14])

        assert result == (
            "/** @var a\n * @brief TBD\n */\n"
            "int a;\n"
            "\n"
            "/** @var b\n * @brief TBD\n */\n"
            "int b;\n"
            "int f(int a));\n"
        )
        assert outcomes == [(0, None), (7, None), (14, "fix your code")]

    def test_custom_rules(self):
        """設定した命名規則が使われるテスト。"""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "rules.yaml"
            path.write_text(
                'rules:\n  - template: "Seconds of %s"\n'
                '    pattern: "^(\\\\w+)_sec$"\n    groups: [1]\n',
                encoding="utf-8",
            )
            generator = DocGenerator(Config(name_rules={"type": "yaml", "path": str(path)}))

        source = "void sleep_for(int wait_sec);\n"
        result = generator.document_declaration(source, 0).apply(source)

        assert " * @param[in] wait_sec Seconds of wait\n" in result


class TestMain:
    """CLIのテスト。"""

    def _write(self, tmpdir, content):
        source_path = Path(tmpdir) / "sample.h"
        source_path.write_text(content, encoding="utf-8")
        config_path = Path(tmpdir) / "config.yaml"
        Config().save_yaml(str(config_path))
        return source_path, config_path

    def test_stdout(self, capsys):
        """標準出力への出力テスト。"""
        with TemporaryDirectory() as tmpdir:
            source_path, config_path = self._write(tmpdir, "#define MAX 4\n")

            code = main([str(source_path), "-l", "1", "-c", str(config_path)])

        assert code == 0
        assert capsys.readouterr().out == "/** @def MAX\n * TBD\n */\n#define MAX 4\n"

    def test_in_place(self):
        """ファイルを直接書き換えるテスト。"""
        with TemporaryDirectory() as tmpdir:
            source_path, config_path = self._write(tmpdir, "int a;\nint b;\n")

            code = main([
                str(source_path), "-l", "1", "--group",
                "-c", str(config_path), "--in-place",
            ])
            content = source_path.read_text(encoding="utf-8")

        assert code == 0
        assert content == "/** @name TBD\n * @{\n */\nint a;\nint b;\n/** @} */\n"

    def test_output_file_with_header(self):
        """ヘッダー付きでファイル出力するテスト。"""
        with TemporaryDirectory() as tmpdir:
            source_path, config_path = self._write(tmpdir, "int a;\n")
            output_path = Path(tmpdir) / "out.h"

            code = main([
                str(source_path), "--header",
                "-c", str(config_path), "-o", str(output_path),
            ])
            content = output_path.read_text(encoding="utf-8")

        assert code == 0
        assert content.startswith("/**\n * @file sample.h\n")
        assert content.endswith(" */\n\nint a;\n")

    def test_failed_line(self, capsys):
        """解析に失敗した行がある場合の終了コードテスト。"""
        with TemporaryDirectory() as tmpdir:
            source_path, config_path = self._write(tmpdir, "int f(int a));\n")

            code = main([str(source_path), "-l", "1", "-c", str(config_path)])

        assert code == 1
        assert capsys.readouterr().out == "int f(int a));\n"

    def test_line_out_of_range(self):
        """範囲外の行番号のテスト。"""
        with TemporaryDirectory() as tmpdir:
            source_path, config_path = self._write(tmpdir, "int a;\n")

            code = main([str(source_path), "-l", "9", "-c", str(config_path)])

        assert code == 1

    def test_init_config(self):
        """設定ファイル生成のテスト。"""
        with TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "generated.yaml"

            code = main(["--init-config", str(path)])

            assert code == 0
            assert Config.from_yaml(str(path)).default_text == "TBD"


class TestKeepArrayBrackets:
    """keep_array_brackets設定のテスト。"""

    def test_array_variable(self):
        """添字を残す設定でも配列変数にコメントが付くテスト。"""
        source = "int buf[16];\n"
        outcome = DocGenerator(Config(keep_array_brackets=True)).document_declaration(source, 0)

        assert outcome.ok
        assert outcome.apply(source) == "/** @var buf\n * @brief TBD\n */\nint buf[16];\n"
