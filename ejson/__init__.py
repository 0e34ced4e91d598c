"""
ejson

Encrypts the secret values of JSON documents with public-key
authenticated encryption, so the files can be committed to version
control while their structure stays readable.
"""

__version__ = "0.1.0"

from .codec import EncryptedValue, decrypt, encrypt, is_encrypted
from .document import (
    decrypt_file,
    encrypt_file,
    extract_public_key,
    load_document,
    save_document,
)
from .errors import EJSONError
from .keys import KeyPair, generate_keypair
from .transformer import decrypt_tree, encrypt_tree

__all__ = [
    "EncryptedValue",
    "encrypt",
    "decrypt",
    "is_encrypted",
    "encrypt_tree",
    "decrypt_tree",
    "load_document",
    "save_document",
    "extract_public_key",
    "encrypt_file",
    "decrypt_file",
    "KeyPair",
    "generate_keypair",
    "EJSONError",
]
