"""
Global configuration and environment handling.

This module is responsible for:
- Defining the wire format and key size constants
- Defining global defaults (key directory, settings file, output style)
- Resolving values that come from the environment

Nothing in this file should depend on:
- the filesystem
- JSON document structure
- CLI arguments

If something here changes, every encrypted file in the wild may stop
decrypting.
"""

from __future__ import annotations

import os
from typing import Final, Optional

# ---------------------------------------------------------------------------
# Tool / format versioning
# ---------------------------------------------------------------------------

TOOL_VERSION: Final[str] = "0.1.0"
SUPPORTED_SETTINGS_VERSION: Final[int] = 1

# ---------------------------------------------------------------------------
# Wire format
# ---------------------------------------------------------------------------

WIRE_PREFIX: Final[str] = "EJ["
WIRE_SUFFIX: Final[str] = "]"
WIRE_SEPARATOR: Final[str] = ":"
WIRE_VERSION: Final[str] = "1"

PUBLIC_KEY_FIELD: Final[str] = "_public_key"

# crypto_box (X25519 + XSalsa20 + Poly1305) sizes
KEY_SIZE: Final[int] = 32
NONCE_SIZE: Final[int] = 24
MAC_SIZE: Final[int] = 16

# ---------------------------------------------------------------------------
# Default behavior
# ---------------------------------------------------------------------------

DEFAULT_KEYDIR: Final[str] = "/opt/ejson/keys"
DEFAULT_SETTINGS_FILE: Final[str] = ".ejson.yml"
DEFAULT_INDENT: Final[int] = 2

# ---------------------------------------------------------------------------
# Environment variable names
# ---------------------------------------------------------------------------

ENV_KEYDIR: Final[str] = "EJSON_KEYDIR"

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def get_env_keydir() -> Optional[str]:
    """
    Return the key directory named by the environment, if any.

    An empty value is treated as unset.
    """

    return os.getenv(ENV_KEYDIR) or None
