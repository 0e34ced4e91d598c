"""
Key management: keypair generation and key marshaling.

Keys travel as lowercase 64-character hex strings; the codec works on
raw 32-byte values. This module converts between the two and owns the
process-wide libsodium initialization.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from nacl.bindings import sodium_init
from nacl.public import PrivateKey

from .config import KEY_SIZE
from .errors import CryptoInitError, InvalidKeyFormat
from .utils import bytes_to_hex, hex_to_bytes

logger = logging.getLogger(__name__)

_init_lock = threading.Lock()
_initialized = False


def ensure_crypto() -> None:
    """
    Initialize libsodium once per process.

    Safe to call repeatedly. A failed attempt leaves the state
    uninitialized so the next call tries again.
    """
    global _initialized

    if _initialized:
        return

    with _init_lock:
        if _initialized:
            return
        try:
            sodium_init()
        except RuntimeError as exc:
            raise CryptoInitError() from exc
        _initialized = True
        logger.debug("libsodium initialized")


@dataclass(frozen=True)
class KeyPair:
    public_key: str
    private_key: str

    @property
    def public_key_bytes(self) -> bytes:
        return hex_to_bytes(self.public_key)

    @property
    def private_key_bytes(self) -> bytes:
        return hex_to_bytes(self.private_key)


def generate_keypair() -> KeyPair:
    """
    Generate a fresh X25519 keypair from libsodium's CSPRNG.

    Raises:
        CryptoInitError: if libsodium cannot be initialized
    """
    ensure_crypto()

    sk = PrivateKey.generate()
    return KeyPair(
        public_key=bytes_to_hex(bytes(sk.public_key)),
        private_key=bytes_to_hex(bytes(sk)),
    )


def decode_key(value: str) -> bytes:
    """
    Decode a hex key and check it is exactly 32 bytes.

    Raises:
        InvalidHexString: odd length or non-hex characters
        InvalidKeyFormat: decoded length is not 32 bytes
    """
    raw = hex_to_bytes(value)
    if len(raw) != KEY_SIZE:
        raise InvalidKeyFormat()
    return raw
