"""Naming rule loader for YAML, CSV and Excel sources."""

from typing import Any, Dict, List, Optional, Tuple
from pathlib import Path
import logging
import numbers
import re

import pandas as pd
import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..analyzer.name_rules import DEFAULT_NAME_RULES, PLACEHOLDER, NameRule

logger = logging.getLogger(__name__)

MERGE_MODES = ("prepend", "append", "replace")


class RulesLoadError(Exception):
    """Error raised when a rule source cannot be read."""
    pass


class NameRuleEntry(BaseModel):
    """Validated naming rule row."""

    template: str = Field(description="Description template with 0-2 '%s' markers")
    pattern: str = Field(description="Regular expression matched against the name")
    groups: List[int] = Field(default_factory=list, description="Capture groups to substitute")

    @field_validator("pattern")
    @classmethod
    def _pattern_compiles(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid pattern: {e}")
        return value

    @field_validator("groups", mode="before")
    @classmethod
    def _parse_groups(cls, value: Any) -> Any:
        # CSV/Excel cells hold "1" or "1,2"; numeric cells may come back as floats
        if value is None or (isinstance(value, float) and pd.isna(value)):
            return []
        if isinstance(value, numbers.Number):
            return [int(value)]
        if isinstance(value, str):
            return [int(part) for part in re.split(r"[,\s;]+", value.strip()) if part]
        return value

    @model_validator(mode="after")
    def _groups_match_template(self) -> "NameRuleEntry":
        placeholders = self.template.count(PLACEHOLDER)
        if placeholders > 2:
            raise ValueError("at most two placeholders are supported")
        if placeholders != len(self.groups):
            raise ValueError(
                f"{placeholders} placeholders but {len(self.groups)} groups"
            )
        available = re.compile(self.pattern).groups
        for group in self.groups:
            if group < 1 or group > available:
                raise ValueError(f"group {group} not in pattern (has {available})")
        return self

    def to_rule(self) -> NameRule:
        """Convert to a NameRule."""
        return NameRule.create(self.template, self.pattern, self.groups)


class NameRulesLoader:
    """Load naming rules from various sources (Excel, CSV, YAML)."""

    def __init__(self):
        """Initialize the rules loader."""
        self._rules: Tuple[NameRule, ...] = DEFAULT_NAME_RULES

    def load(self, config: dict) -> Tuple[NameRule, ...]:
        """Load rules based on configuration and merge with the built-in table.

        Args:
            config: Rules source configuration with keys:
                - type: "excel", "csv", or "yaml"
                - path: Path to the rules file
                - sheet: Sheet name for Excel (optional)
                - columns: Column mapping (optional)
                - mode: "prepend", "append" or "replace" (optional)

        Returns:
            Ordered rule table

        Raises:
            RulesLoadError: If the source is missing or unsupported
        """
        source_type = config.get("type", "yaml").lower()
        path = config.get("path")
        mode = config.get("mode", "prepend").lower()

        if not path:
            logger.warning("No naming rules path specified")
            return self._rules

        if mode not in MERGE_MODES:
            raise RulesLoadError(f"Unsupported merge mode: {mode}")

        path = Path(path)
        if not path.exists():
            raise RulesLoadError(f"Rules file not found: {path}")

        if source_type == "excel":
            loaded = self.load_from_excel(
                str(path),
                sheet=config.get("sheet"),
                columns=config.get("columns", {})
            )
        elif source_type == "csv":
            loaded = self.load_from_csv(
                str(path),
                columns=config.get("columns", {})
            )
        elif source_type == "yaml":
            loaded = self.load_from_yaml(str(path))
        else:
            raise RulesLoadError(f"Unsupported rules source type: {source_type}")

        self.merge_rules(loaded, mode)
        return self._rules

    def load_from_excel(
        self,
        path: str,
        sheet: Optional[str] = None,
        columns: Optional[Dict[str, str]] = None
    ) -> List[NameRule]:
        """Load rules from an Excel file.

        Args:
            path: Path to the Excel file
            sheet: Sheet name (None for first sheet)
            columns: Column name mapping

        Returns:
            Rules in sheet order
        """
        try:
            df = pd.read_excel(path, sheet_name=sheet or 0)
        except (ValueError, OSError) as e:
            raise RulesLoadError(f"Failed to read {path}: {e}")

        rules = self._rules_from_frame(df, columns or {})
        logger.info(f"Loaded {len(rules)} naming rules from Excel: {path}")
        return rules

    def load_from_csv(
        self,
        path: str,
        columns: Optional[Dict[str, str]] = None,
        encoding: str = "utf-8"
    ) -> List[NameRule]:
        """Load rules from a CSV file.

        Args:
            path: Path to the CSV file
            columns: Column name mapping
            encoding: File encoding

        Returns:
            Rules in file order
        """
        try:
            df = pd.read_csv(path, encoding=encoding, dtype={"Groups": str})
        except (ValueError, OSError) as e:
            raise RulesLoadError(f"Failed to read {path}: {e}")

        rules = self._rules_from_frame(df, columns or {})
        logger.info(f"Loaded {len(rules)} naming rules from CSV: {path}")
        return rules

    def load_from_yaml(self, path: str) -> List[NameRule]:
        """Load rules from a YAML file.

        Expected YAML format:
        ```yaml
        rules:
          - template: "Number of %s"
            pattern: "^(\\w+)_total$"
            groups: [1]
        ```

        Args:
            path: Path to the YAML file

        Returns:
            Rules in file order
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise RulesLoadError(f"Failed to parse {path}: {e}")

        if not data or "rules" not in data:
            logger.warning(f"No 'rules' key found in YAML: {path}")
            return []

        rules = []
        for index, rule_data in enumerate(data["rules"] or []):
            rule = self._build_rule(rule_data, f"{path}#{index}")
            if rule is not None:
                rules.append(rule)

        logger.info(f"Loaded {len(rules)} naming rules from YAML: {path}")
        return rules

    def _rules_from_frame(
        self,
        df: pd.DataFrame,
        columns: Dict[str, str]
    ) -> List[NameRule]:
        """Convert spreadsheet rows to rules.

        Args:
            df: Loaded table
            columns: Column name mapping

        Returns:
            Rules in row order
        """
        col_template = columns.get("template", "Template")
        col_pattern = columns.get("pattern", "Pattern")
        col_groups = columns.get("groups", "Groups")

        rules = []
        for row_index, row in df.iterrows():
            pattern = row.get(col_pattern)
            if pattern is None or (isinstance(pattern, float) and pd.isna(pattern)):
                continue

            template = row.get(col_template, "")
            if isinstance(template, float) and pd.isna(template):
                template = ""

            rule = self._build_rule(
                {
                    "template": str(template),
                    "pattern": str(pattern),
                    "groups": row.get(col_groups),
                },
                f"row {row_index + 2}"
            )
            if rule is not None:
                rules.append(rule)
        return rules

    def _build_rule(self, data: Any, where: str) -> Optional[NameRule]:
        """Validate one rule row, logging and skipping invalid ones."""
        try:
            return NameRuleEntry.model_validate(data).to_rule()
        except ValidationError as e:
            logger.warning(f"Skipping invalid naming rule at {where}: {e}")
            return None

    def merge_rules(self, new_rules: List[NameRule], mode: str = "prepend") -> None:
        """Merge new rules into the current table.

        Args:
            new_rules: Rules to merge
            mode: "prepend" (new rules win), "append" or "replace"
        """
        if mode == "replace":
            self._rules = tuple(new_rules)
        elif mode == "append":
            self._rules = self._rules + tuple(new_rules)
        else:
            self._rules = tuple(new_rules) + self._rules

    @property
    def rules(self) -> Tuple[NameRule, ...]:
        """Get the current rule table."""
        return self._rules
