"""
Exception taxonomy.

Every failure the library reports is an EJSONError subclass, so callers
can catch one type. Errors are raised as soon as they are detected and
are terminal for the value or document being processed.
"""

from __future__ import annotations


class EJSONError(RuntimeError):
    """Base class for all ejson errors."""

    default_message = "ejson operation failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


# ---------------------------------------------------------------------------
# Crypto / codec
# ---------------------------------------------------------------------------


class CryptoInitError(EJSONError):
    default_message = "Failed to initialize libsodium"


class InvalidKeyFormat(EJSONError):
    default_message = "Invalid key format (expected 64-character hex string)"


class InvalidHexString(EJSONError):
    default_message = "Invalid hexadecimal string"


class InvalidBase64String(EJSONError):
    default_message = "Invalid base64 string"


class InvalidEncryptedFormat(EJSONError):
    default_message = "Invalid encrypted value format (expected EJ[1:...])"


class EncryptionFailed(EJSONError):
    default_message = "Encryption operation failed"


class DecryptionFailed(EJSONError):
    """
    Authentication failed, the wrong key was used, or the plaintext was
    not valid UTF-8. The message is always the same so callers cannot
    tell these apart.
    """

    default_message = "Decryption operation failed"

    def __init__(self):
        super().__init__()


# ---------------------------------------------------------------------------
# Documents / files
# ---------------------------------------------------------------------------


class MissingPublicKey(EJSONError):
    default_message = "Missing _public_key field in EJSON document"


class InvalidJSONData(EJSONError):
    default_message = "Invalid JSON data"


class FileReadError(EJSONError):
    default_message = "Failed to read file"


class FileWriteError(EJSONError):
    default_message = "Failed to write file"


class PrivateKeyNotFound(EJSONError):
    default_message = "Private key not found"

    def __init__(self, public_key: str, path: str):
        self.public_key = public_key
        self.path = path
        super().__init__(f"Private key not found in {path}")


class SettingsError(EJSONError):
    default_message = "Invalid settings file"
