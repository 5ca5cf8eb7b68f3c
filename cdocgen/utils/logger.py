"""ロギング設定モジュール。"""

import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    format_string: Optional[str] = None
) -> logging.Logger:
    """ロギング設定をセットアップする。

    生成したコメントやファイル内容を標準出力に書き出すため、
    コンソールへのログは標準エラー出力に出す。

    Args:
        level: ログレベル（DEBUG, INFO, WARNING, ERROR, CRITICAL）
        log_file: ログファイルへのパス（省略可）
        format_string: カスタムフォーマット文字列（省略可）

    Returns:
        ルートロガー
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(format_string or DEFAULT_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # 既存のハンドラーを削除
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        root_logger.addHandler(file_handler)

    return root_logger


class ProgressLogger:
    """複数行を処理する際の進捗ログ出力。"""

    def __init__(
        self,
        total: int,
        logger: Optional[logging.Logger] = None,
        log_interval: int = 10
    ):
        """進捗ロガーを初期化する。

        Args:
            total: 処理する行の総数
            logger: 使用するロガー
            log_interval: 進捗更新の間隔
        """
        self.total = total
        self.current = 0
        self.failed = 0
        self.logger = logger or logging.getLogger(__name__)
        self.log_interval = log_interval

    def update(self, message: Optional[str] = None, ok: bool = True) -> None:
        """進捗を更新する。

        Args:
            message: 含めるメッセージ（省略可）
            ok: 処理に成功したかどうか
        """
        self.current += 1
        if not ok:
            self.failed += 1

        if self.total <= 0:
            return

        if self.current % self.log_interval == 0 or self.current == self.total:
            progress = self.current / self.total * 100
            msg = f"Progress: {self.current}/{self.total} ({progress:.1f}%)"
            if message:
                msg += f" - {message}"
            self.logger.info(msg)

    def complete(self, message: str = "Complete") -> None:
        """進捗を完了としてマークする。

        Args:
            message: 完了メッセージ
        """
        self.logger.info(
            f"{message}: {self.current - self.failed} documented, "
            f"{self.failed} skipped"
        )
