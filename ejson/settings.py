"""
Settings file loading, validation, and normalization.

This module answers one question:
    "How does the user want files written and keys found?"

Responsibilities:
- Load the optional YAML settings file
- Validate structure and version
- Normalize defaults
- Expose a clean Python representation

This module does NOT:
- Read or write documents
- Encrypt or decrypt data
- Resolve environment variables
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .config import DEFAULT_INDENT, SUPPORTED_SETTINGS_VERSION
from .errors import SettingsError

# ---------------------------------------------------------------------------
# Data models
# ---------------------------------------------------------------------------


@dataclass
class OutputConfig:
    indent: Optional[int] = DEFAULT_INDENT
    sort_keys: bool = False


@dataclass
class Settings:
    version: int = SUPPORTED_SETTINGS_VERSION
    keydir: Optional[str] = None
    output: OutputConfig = field(default_factory=OutputConfig)

    # ------------------------------------------------------------------
    # Loading API
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: str | Path, required: bool = True) -> "Settings":
        """
        Load and validate a settings file.

        Args:
            path: Path to the settings YAML file
            required: if False, a missing file yields default settings

        Raises:
            SettingsError: if the file is missing (when required) or invalid

        Returns:
            Settings
        """

        path = Path(path)
        if not path.exists():
            if required:
                raise SettingsError(f"Settings file not found: {path}")
            return cls()

        try:
            with path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise SettingsError(f"Failed to read settings file {path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")

        return cls._from_dict(raw)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @classmethod
    def _from_dict(cls, data: Dict[str, Any]) -> "Settings":
        version = data.get("version", SUPPORTED_SETTINGS_VERSION)
        if version != SUPPORTED_SETTINGS_VERSION:
            raise SettingsError(f"Unsupported settings version: {version}")

        keydir = data.get("keydir")
        if keydir is not None and not isinstance(keydir, str):
            raise SettingsError("'keydir' must be a string")

        return cls(
            version=version,
            keydir=keydir,
            output=cls._parse_output(data.get("output") or {}),
        )

    @staticmethod
    def _parse_output(data: Any) -> OutputConfig:
        if not isinstance(data, dict):
            raise SettingsError("'output' must be a mapping")

        indent = data.get("indent", DEFAULT_INDENT)
        # bool is an int subclass
        if indent is not None and (isinstance(indent, bool) or not isinstance(indent, int)):
            raise SettingsError("'output.indent' must be an integer or null")

        sort_keys = data.get("sort_keys", False)
        if not isinstance(sort_keys, bool):
            raise SettingsError("'output.sort_keys' must be a boolean")

        return OutputConfig(indent=indent, sort_keys=sort_keys)
