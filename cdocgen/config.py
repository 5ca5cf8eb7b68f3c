"""設定管理モジュール。"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Any
from pathlib import Path
import os
import logging

import yaml

from .models.render import DEFAULT_TEXT, RenderConfig

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """設定ファイルの読み込みエラー。"""
    pass


@dataclass
class Config:
    """アプリケーション設定。"""

    # コメント生成設定
    use_alternate_lead: bool = False  # '@' の代わりに '\' を使う
    default_text: str = DEFAULT_TEXT
    emit_details: bool = False
    details_as_blank_line: bool = False

    # 解析設定
    full_mode: bool = False  # enum/struct のメンバーにも末尾コメントを付ける
    keep_array_brackets: bool = False

    # ファイルヘッダー
    author: Optional[str] = None

    # 命名規則ソース設定
    name_rules: Dict[str, Any] = field(default_factory=dict)

    # ロギング設定
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_yaml(cls, file_path: str) -> "Config":
        """YAMLファイルから設定を読み込む。

        Args:
            file_path: YAML設定ファイルのパス

        Returns:
            Configインスタンス

        Raises:
            ConfigError: YAMLとして読み込めない場合
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse {file_path}: {e}")

        if not isinstance(data, dict):
            raise ConfigError(f"Configuration root must be a mapping: {file_path}")

        config = cls()

        # コメント生成設定
        config.use_alternate_lead = bool(data.get(
            "use_alternate_lead",
            config.use_alternate_lead
        ))
        config.default_text = str(data.get("default_text", config.default_text))
        config.emit_details = bool(data.get("emit_details", config.emit_details))
        config.details_as_blank_line = bool(data.get(
            "details_as_blank_line",
            config.details_as_blank_line
        ))

        # 解析設定
        config.full_mode = bool(data.get("full_mode", config.full_mode))
        config.keep_array_brackets = bool(data.get(
            "keep_array_brackets",
            config.keep_array_brackets
        ))

        # 作成者（環境変数が優先）
        config.author = os.getenv("CDOCGEN_AUTHOR", data.get("author"))

        # 命名規則ソース
        config.name_rules = data.get("name_rules") or {}

        # ロギング
        config.log_level = data.get("log_level", config.log_level)
        config.log_file = data.get("log_file")

        logger.info(f"Configuration loaded from {file_path}")
        return config

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """辞書から設定を作成する。

        Args:
            data: 設定辞書

        Returns:
            Configインスタンス
        """
        config = cls()

        for key, value in data.items():
            if hasattr(config, key):
                setattr(config, key, value)

        return config

    def validate(self) -> List[str]:
        """設定を検証する。

        Returns:
            検証エラーのリスト（有効な場合は空）
        """
        errors = []

        if not self.default_text.strip():
            errors.append("default_textは空にできません")
        if "\n" in self.default_text:
            errors.append("default_textに改行は使用できません")
        if self.details_as_blank_line and not self.emit_details:
            logger.warning("details_as_blank_line has no effect without emit_details")

        if self.log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"不正なログレベルです: {self.log_level}")

        if self.name_rules:
            rules_path = self.name_rules.get("path")
            if rules_path and not Path(rules_path).exists():
                errors.append(f"命名規則ファイルが存在しません: {rules_path}")

        return errors

    def render_config(self) -> RenderConfig:
        """コメント生成設定を作成する。

        Returns:
            RenderConfigインスタンス
        """
        return RenderConfig(
            use_alternate_lead=self.use_alternate_lead,
            default_text=self.default_text,
            emit_details=self.emit_details,
            details_as_blank_line=self.details_as_blank_line,
        )

    def to_dict(self) -> dict:
        """設定を辞書に変換する。

        Returns:
            辞書形式の設定
        """
        return {
            "use_alternate_lead": self.use_alternate_lead,
            "default_text": self.default_text,
            "emit_details": self.emit_details,
            "details_as_blank_line": self.details_as_blank_line,
            "full_mode": self.full_mode,
            "keep_array_brackets": self.keep_array_brackets,
            "author": self.author,
            "name_rules": self.name_rules,
            "log_level": self.log_level,
            "log_file": self.log_file,
        }

    def save_yaml(self, file_path: str) -> None:
        """設定をYAMLファイルに保存。

        Args:
            file_path: 保存先パス
        """
        # 出力先ディレクトリが存在しない場合は作成
        output_path = Path(file_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        data = self.to_dict()
        for key in ("author", "log_file"):
            if not data[key]:
                del data[key]

        with open(file_path, "w", encoding="utf-8") as f:
            yaml.dump(
                data,
                f,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False
            )

        logger.info(f"Configuration saved to {file_path}")
