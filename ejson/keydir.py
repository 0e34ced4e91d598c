"""
Private key storage.

A key directory holds one file per keypair: the file is named after the
public key hex and contains the private key hex. Documents only carry
the public key, so decryption looks the private key up here.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .config import DEFAULT_KEYDIR, get_env_keydir
from .errors import FileWriteError, PrivateKeyNotFound
from .keys import KeyPair
from .settings import Settings

logger = logging.getLogger(__name__)


def resolve_keydir(
    explicit: Optional[str | Path] = None,
    settings: Optional[Settings] = None,
) -> Path:
    """
    Pick the key directory.

    Precedence: explicit argument, EJSON_KEYDIR, settings file, default.
    """

    if explicit:
        chosen = str(explicit)
    elif get_env_keydir():
        chosen = get_env_keydir()
    elif settings is not None and settings.keydir:
        chosen = settings.keydir
    else:
        chosen = DEFAULT_KEYDIR

    return Path(chosen).expanduser()


def key_path(public_key: str, keydir: str | Path) -> Path:
    return Path(keydir) / public_key


def load_private_key(public_key: str, keydir: str | Path) -> str:
    """
    Read the private key stored for ``public_key``.

    Raises:
        PrivateKeyNotFound: no readable key file exists
    """

    path = key_path(public_key, keydir)
    try:
        return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as exc:
        raise PrivateKeyNotFound(public_key, str(path)) from exc


def save_private_key(keypair: KeyPair, keydir: str | Path) -> Path:
    """
    Store a keypair's private key, readable by the owner only.

    Returns:
        Path of the written key file
    """

    path = key_path(keypair.public_key, keydir)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(keypair.private_key)
        os.chmod(path, 0o600)
    except OSError as exc:
        raise FileWriteError(f"Failed to write key to {path}") from exc

    logger.debug("stored private key for %s", keypair.public_key)
    return path
