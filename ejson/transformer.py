"""
Structure-preserving JSON tree transformation.

This module walks a parsed JSON value and applies the codec to string
leaves. It is intentionally dumb about files and key storage: callers
hand it a tree and a key, and get a new tree back.

Rules:
- the root object's "_public_key" entry is never passed through the codec
- object keys, numbers, booleans and null are returned untouched
- encryption skips strings that already carry the EJ[ prefix
- decryption only touches strings that carry the EJ[ prefix

The input tree is never mutated. A codec error aborts the walk and
propagates as-is, so there is no partially transformed result.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Union

from . import codec
from .config import PUBLIC_KEY_FIELD
from .keys import decode_key

JSONValue = Union[
    Dict[str, "JSONValue"],
    List["JSONValue"],
    str,
    int,
    float,
    bool,
    None,
]

_Leaf = Callable[[str], str]


class TreeTransformer:
    def __init__(self, leaf: _Leaf):
        self.leaf = leaf

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def transform_root(self, value: JSONValue) -> JSONValue:
        """
        Transform a whole document, leaving the root "_public_key" as-is.
        """

        if not isinstance(value, dict):
            return self.transform(value)

        return {
            key: (item if key == PUBLIC_KEY_FIELD else self.transform(item))
            for key, item in value.items()
        }

    def transform(self, value: JSONValue) -> JSONValue:
        if isinstance(value, dict):
            return {key: self.transform(item) for key, item in value.items()}
        if isinstance(value, list):
            return [self.transform(item) for item in value]
        if isinstance(value, str):
            return self.leaf(value)
        if value is None or isinstance(value, (bool, int, float)):
            return value
        raise TypeError(f"Not a JSON value: {type(value).__name__}")


def encrypt_tree(value: JSONValue, public_key: str) -> JSONValue:
    """
    Encrypt every plaintext string leaf under ``public_key``.

    On a root object, "_public_key" is set to ``public_key`` verbatim;
    when absent it is added as the first key.
    """

    decode_key(public_key)

    def leaf(text: str) -> str:
        if codec.is_encrypted(text):
            return text
        return codec.encrypt(text, public_key)

    result = TreeTransformer(leaf).transform_root(value)

    if isinstance(result, dict):
        if PUBLIC_KEY_FIELD in result:
            result[PUBLIC_KEY_FIELD] = public_key
        else:
            result = {PUBLIC_KEY_FIELD: public_key, **result}

    return result


def decrypt_tree(value: JSONValue, private_key: str) -> JSONValue:
    """
    Decrypt every EJ[...] string leaf with ``private_key``.

    Plain strings pass through, so partially encrypted documents are
    accepted.
    """

    decode_key(private_key)

    def leaf(text: str) -> str:
        if codec.is_encrypted(text):
            return codec.decrypt(text, private_key)
        return text

    return TreeTransformer(leaf).transform_root(value)
