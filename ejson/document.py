"""
Document loading, saving, and whole-file operations.

This module answers one question:
    "How does a JSON file on disk become a tree, and back?"

Responsibilities:
- Read and parse UTF-8 JSON documents (root must be an object)
- Serialize documents back to disk
- Locate the "_public_key" field
- Tie loading, the tree walk, and saving together for single files

This module does NOT:
- Encrypt or decrypt individual values
- Look up private keys

Known limitation:
    Numbers go through the json module. Integers keep their exact value,
    but any number with a fraction or exponent becomes a Python float, so
    literals with more than 17 significant digits are rounded and forms
    like 1e3 are rewritten (as 1000.0) when a file is saved again.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from .config import DEFAULT_INDENT, PUBLIC_KEY_FIELD
from .errors import FileReadError, FileWriteError, InvalidJSONData, MissingPublicKey
from .transformer import decrypt_tree, encrypt_tree
from .utils import ensure_parent_dir

logger = logging.getLogger(__name__)

Document = Dict[str, Any]


# ---------------------------------------------------------------------------
# Loading / saving
# ---------------------------------------------------------------------------


def load_document(path: str | Path) -> Document:
    """
    Load a JSON document from disk.

    Raises:
        FileReadError: the file cannot be read
        InvalidJSONData: the content is not JSON or the root is not an object
    """

    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise FileReadError(f"Failed to read file: {path}") from exc

    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidJSONData(f"Invalid JSON data in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise InvalidJSONData(f"Invalid JSON data in {path}: root must be an object")

    logger.debug("loaded %s (%d top-level keys)", path, len(data))
    return data


def dump_document(
    document: Document,
    indent: Optional[int] = DEFAULT_INDENT,
    sort_keys: bool = False,
) -> str:
    """Serialize a document the way save_document writes it."""
    return json.dumps(document, indent=indent, sort_keys=sort_keys, ensure_ascii=False) + "\n"


def save_document(
    path: str | Path,
    document: Document,
    indent: Optional[int] = DEFAULT_INDENT,
    sort_keys: bool = False,
) -> None:
    """
    Write a document to disk as UTF-8 JSON.

    Raises:
        FileWriteError: the file cannot be written
    """

    path = Path(path)
    text = dump_document(document, indent=indent, sort_keys=sort_keys)

    try:
        ensure_parent_dir(path)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise FileWriteError(f"Failed to write file: {path}") from exc

    logger.debug("wrote %s", path)


def extract_public_key(document: Document) -> str:
    """
    Return the document's "_public_key" value.

    Raises:
        MissingPublicKey: the field is absent or not a string
    """

    value = document.get(PUBLIC_KEY_FIELD)
    if not isinstance(value, str):
        raise MissingPublicKey()
    return value


# ---------------------------------------------------------------------------
# Whole-file operations
# ---------------------------------------------------------------------------


def encrypt_file(
    path: str | Path,
    public_key: Optional[str] = None,
    indent: Optional[int] = DEFAULT_INDENT,
    sort_keys: bool = False,
) -> Document:
    """
    Encrypt a file in place and return the encrypted document.

    When ``public_key`` is not given it is taken from the file itself.
    Nothing is written unless every value encrypts.
    """

    document = load_document(path)
    if public_key is None:
        public_key = extract_public_key(document)

    encrypted = encrypt_tree(document, public_key)
    save_document(path, encrypted, indent=indent, sort_keys=sort_keys)
    return encrypted


def decrypt_file(path: str | Path, private_key: str) -> Document:
    """
    Decrypt a file and return the plaintext document.

    The file on disk is left unchanged.

    Raises:
        MissingPublicKey: the file has no "_public_key" field
    """

    document = load_document(path)
    extract_public_key(document)
    return decrypt_tree(document, private_key)
