"""
Shared utility helpers.

This module contains small, reusable helpers that do not belong
to the codec, the tree walk, or document handling.
"""

from __future__ import annotations

import base64
import string
from pathlib import Path

from .errors import InvalidBase64String, InvalidHexString

_HEX_DIGITS = frozenset(string.hexdigits)


# ---------------------------------------------------------------------------
# Hex helpers
# ---------------------------------------------------------------------------


def hex_to_bytes(value: str) -> bytes:
    """
    Decode a hex string strictly.

    Odd lengths and any non-hex character (whitespace included) are
    rejected; nothing is padded or truncated.
    """
    if not isinstance(value, str) or len(value) % 2 != 0:
        raise InvalidHexString()
    if not all(ch in _HEX_DIGITS for ch in value):
        raise InvalidHexString()
    return bytes.fromhex(value)


def bytes_to_hex(data: bytes) -> str:
    """Return lowercase hex with no prefix or separators."""
    return data.hex()


# ---------------------------------------------------------------------------
# Base64 helpers
# ---------------------------------------------------------------------------


def b64e(data: bytes) -> str:
    """Standard-alphabet base64 with padding."""
    return base64.b64encode(data).decode("ascii")


def b64d(value: str) -> bytes:
    """Decode standard-alphabet base64, rejecting anything malformed."""
    try:
        return base64.b64decode(value, validate=True)
    except ValueError as exc:
        raise InvalidBase64String() from exc


# ---------------------------------------------------------------------------
# Filesystem helpers
# ---------------------------------------------------------------------------


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory of a file exists."""
    path.parent.mkdir(parents=True, exist_ok=True)
