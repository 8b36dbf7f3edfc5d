# SPDX-License-Identifier: AGPL-3.0-only
from pathlib import Path
from typing import Dict, List, Optional, Any
try:
    import tomllib
except ImportError:
    import tomli as tomllib

from .types import RunOptions

CONFIG_FILENAME = "accname.toml"

# Default configuration structure
DEFAULT_CONFIG = {
    "audit": {
        "categories": [],  # Empty means every category
        "inline_style_check": True,
        "locator": "css",
    },
    "report": {
        "output": "",
        "format": "json",
    },
    "gate": {
        "fail_on": "fail",
    },
}

GATE_MODES = ("fail", "warn", "never")
REPORT_FORMATS = ("json", "text")


class Config:
    def __init__(self, data: Dict[str, Any], path: Optional[Path] = None):
        self.data = data
        self.path = path
        self.root = path.parent if path is not None else Path.cwd()

    @classmethod
    def default(cls) -> "Config":
        return cls({section: dict(values) for section, values in DEFAULT_CONFIG.items()})

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration from accname.toml."""
        path = Path(path) if path is not None else Path.cwd() / CONFIG_FILENAME
        if not path.exists():
            raise FileNotFoundError(f"No {CONFIG_FILENAME} found at {path}.")

        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)
        except Exception as e:
            raise ValueError(f"Failed to parse {path}: {e}")

        config = cls(data, path)
        config.validate()
        return config

    @classmethod
    def discover(cls, start: Optional[Path] = None) -> "Config":
        """Nearest accname.toml in ``start`` or its parents, else defaults."""
        here = Path(start or Path.cwd()).resolve()
        for folder in (here, *here.parents):
            candidate = folder / CONFIG_FILENAME
            if candidate.is_file():
                return cls.load(candidate)
        return cls.default()

    def _section(self, name: str) -> Dict[str, Any]:
        merged = dict(DEFAULT_CONFIG.get(name, {}))
        merged.update(self.data.get(name, {}) or {})
        return merged

    @property
    def audit(self) -> Dict[str, Any]:
        return self._section("audit")

    @property
    def report(self) -> Dict[str, Any]:
        return self._section("report")

    @property
    def gate(self) -> Dict[str, Any]:
        return self._section("gate")

    def validate(self) -> None:
        fail_on = str(self.gate.get("fail_on", "fail")).strip().lower()
        if fail_on not in GATE_MODES:
            raise ValueError(f"Unsupported gate.fail_on {fail_on!r}; expected one of: {', '.join(GATE_MODES)}")
        fmt = str(self.report.get("format", "json")).strip().lower()
        if fmt not in REPORT_FORMATS:
            raise ValueError(f"Unsupported report.format {fmt!r}; expected one of: {', '.join(REPORT_FORMATS)}")
        categories = self.audit.get("categories", [])
        if isinstance(categories, str) or not isinstance(categories, list):
            raise ValueError("audit.categories must be a list of category names")

    def resolve_path(self, relative_path: str) -> Path:
        return self.root / relative_path

    # Helpers for common fields
    def get_categories(self) -> Optional[List[str]]:
        categories = self.audit.get("categories") or []
        return [str(c) for c in categories] or None

    def get_output_path(self) -> Optional[Path]:
        out = self.report.get("output")
        return self.resolve_path(out) if out else None

    def get_report_format(self) -> str:
        return str(self.report.get("format", "json")).strip().lower()

    def get_fail_on(self) -> str:
        return str(self.gate.get("fail_on", "fail")).strip().lower()

    def run_options(self) -> RunOptions:
        categories = self.get_categories()
        return RunOptions(
            categories=tuple(categories) if categories else None,
            inline_style_check=bool(self.audit.get("inline_style_check", True)),
            locator=str(self.audit.get("locator", "css")),
        )
