"""Doxygenコメント生成ツールのメインエントリーポイント。"""

import argparse
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional
import logging

from .config import Config, ConfigError
from .generator import DocGenerator
from .io.document import DocumentError, line_start_offset
from .io.rules_loader import RulesLoadError
from .utils.logger import setup_logging, ProgressLogger

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/default_config.yaml"


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="C宣言からDoxygenコメントを生成するツール"
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="対象のCソース/ヘッダーファイル"
    )
    parser.add_argument(
        "-l", "--line",
        type=int,
        action="append",
        default=[],
        help="コメントを生成する行番号（1始まり、複数指定可）"
    )
    parser.add_argument(
        "--group",
        action="store_true",
        help="指定行から始まる同形の行をグループとして囲む"
    )
    parser.add_argument(
        "--header",
        action="store_true",
        help="ファイル先頭にヘッダーコメントを追加する"
    )
    parser.add_argument(
        "--full",
        action="store_true",
        help="enum/structのメンバーやグループの各行にもコメントを付ける"
    )
    parser.add_argument(
        "-o", "--output",
        help="出力ファイル（省略時は標準出力）"
    )
    parser.add_argument(
        "--in-place",
        action="store_true",
        help="対象ファイルを直接書き換える"
    )
    parser.add_argument(
        "-c", "--config",
        default=DEFAULT_CONFIG_PATH,
        help="設定ファイルパス"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="詳細ログを有効にする"
    )
    parser.add_argument(
        "--init-config",
        metavar="PATH",
        help="既定値の設定ファイルを生成する"
    )
    return parser


def _load_config(path: str) -> Config:
    """設定ファイルを読み込む。存在しない場合は既定値を使う。"""
    config_path = Path(path)
    if not config_path.exists():
        if path != DEFAULT_CONFIG_PATH:
            raise ConfigError(f"設定ファイルが見つかりません: {path}")
        return Config()
    return Config.from_yaml(str(config_path))


def main(argv: Optional[List[str]] = None) -> int:
    """メインエントリーポイント。

    Args:
        argv: コマンドライン引数（省略時はsys.argv）

    Returns:
        終了コード
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.init_config:
        setup_logging(level="DEBUG" if args.verbose else "INFO")
        Config().save_yaml(args.init_config)
        print(f"設定ファイルを生成しました: {args.init_config}")
        return 0

    if not args.file:
        parser.error("対象ファイルを指定してください")
    if not args.line and not args.header:
        parser.error("--line または --header のいずれかが必要です")
    if args.output and args.in_place:
        parser.error("--output と --in-place は同時に指定できません")

    try:
        config = _load_config(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.verbose:
        config.log_level = "DEBUG"
    if args.full:
        config.full_mode = True

    setup_logging(level=config.log_level, log_file=config.log_file)

    errors = config.validate()
    if errors:
        for error in errors:
            logger.error(f"Configuration error: {error}")
        return 1

    source_path = Path(args.file)
    if not source_path.exists():
        logger.error(f"入力ファイルが見つかりません: {args.file}")
        return 1

    try:
        generator = DocGenerator(config)
    except RulesLoadError as e:
        logger.error(f"Failed to load naming rules: {e}")
        return 1

    source = source_path.read_text(encoding="utf-8")
    failed = 0

    try:
        offsets = [line_start_offset(source, line) for line in args.line]
    except DocumentError as e:
        logger.error(str(e))
        return 1

    if offsets:
        progress = ProgressLogger(len(offsets), logger, log_interval=10)
        source, outcomes = generator.document_lines(source, offsets, group=args.group)
        for line, (_, reason) in zip(sorted(set(args.line)), outcomes):
            if reason is not None:
                logger.warning(f"Line {line} not documented: {reason}")
                failed += 1
            progress.update(f"line {line}", ok=reason is None)
        progress.complete()

    if args.header:
        outcome = generator.document_file_header(
            source,
            source_path.name,
            date=date.today().isoformat(),
        )
        source = outcome.apply(source)

    if args.in_place:
        source_path.write_text(source, encoding="utf-8")
        logger.info(f"Updated {source_path}")
    elif args.output:
        Path(args.output).write_text(source, encoding="utf-8")
        logger.info(f"Written {args.output}")
    else:
        sys.stdout.write(source)

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
