"""
Value encryption: the EJ[1:...] wire codec.

Each value is sealed with crypto_box (X25519 + XSalsa20 + Poly1305)
between a fresh ephemeral keypair and the recipient's public key:

    EJ[1:<ephemeral public key>:<nonce>:<MAC || ciphertext>]

All three fields are standard base64 with padding. The byte layout is
the one libsodium's crypto_box_easy produces, so values written here
decrypt anywhere that format is understood and vice versa.

This module knows nothing about JSON documents.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from Crypto.Random import get_random_bytes
from nacl.exceptions import CryptoError
from nacl.public import Box, PrivateKey, PublicKey

from .config import (
    KEY_SIZE,
    MAC_SIZE,
    NONCE_SIZE,
    WIRE_PREFIX,
    WIRE_SEPARATOR,
    WIRE_SUFFIX,
    WIRE_VERSION,
)
from .errors import DecryptionFailed, EncryptionFailed, InvalidEncryptedFormat
from .keys import decode_key, ensure_crypto
from .utils import b64d, b64e

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncryptedValue:
    ephemeral_public_key: bytes
    nonce: bytes
    ciphertext: bytes

    # ------------------------------------------------------------------
    # Wire conversion
    # ------------------------------------------------------------------

    @classmethod
    def parse(cls, wire: str) -> "EncryptedValue":
        """
        Parse an EJ[1:...] string.

        Raises:
            InvalidEncryptedFormat: wrong shape, version, or field sizes
            InvalidBase64String: a field is not valid base64
        """

        if not (
            isinstance(wire, str)
            and wire.startswith(WIRE_PREFIX)
            and wire.endswith(WIRE_SUFFIX)
            and len(wire) >= len(WIRE_PREFIX) + len(WIRE_SUFFIX)
        ):
            raise InvalidEncryptedFormat()

        body = wire[len(WIRE_PREFIX):-len(WIRE_SUFFIX)]
        parts = body.split(WIRE_SEPARATOR)

        if len(parts) != 4 or parts[0] != WIRE_VERSION:
            raise InvalidEncryptedFormat()

        ephemeral_pk = b64d(parts[1])
        nonce = b64d(parts[2])
        ciphertext = b64d(parts[3])

        if len(ephemeral_pk) != KEY_SIZE or len(nonce) != NONCE_SIZE:
            raise InvalidEncryptedFormat()
        if len(ciphertext) < MAC_SIZE:
            raise InvalidEncryptedFormat()

        return cls(
            ephemeral_public_key=ephemeral_pk,
            nonce=nonce,
            ciphertext=ciphertext,
        )

    def format(self) -> str:
        fields = [
            WIRE_VERSION,
            b64e(self.ephemeral_public_key),
            b64e(self.nonce),
            b64e(self.ciphertext),
        ]
        return f"{WIRE_PREFIX}{WIRE_SEPARATOR.join(fields)}{WIRE_SUFFIX}"

    def __str__(self) -> str:
        return self.format()


def is_encrypted(value: str) -> bool:
    """
    Return True if a string looks like an encrypted value.

    Only the prefix is checked, so a plaintext that happens to start
    with "EJ[" is treated as already encrypted.
    """
    return value.startswith(WIRE_PREFIX)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def encrypt(plaintext: str, public_key: str) -> str:
    """
    Encrypt a string for the holder of ``public_key``.

    A new ephemeral keypair and nonce are drawn on every call, so the
    same input never produces the same output twice.

    Raises:
        InvalidHexString / InvalidKeyFormat: bad recipient key
        EncryptionFailed: the plaintext cannot be encoded or sealed
    """

    ensure_crypto()
    recipient = PublicKey(decode_key(public_key))

    try:
        message = plaintext.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise EncryptionFailed() from exc

    ephemeral = PrivateKey.generate()
    nonce = get_random_bytes(NONCE_SIZE)

    try:
        sealed = Box(ephemeral, recipient).encrypt(message, nonce)
    except CryptoError as exc:
        raise EncryptionFailed() from exc

    value = EncryptedValue(
        ephemeral_public_key=bytes(ephemeral.public_key),
        nonce=nonce,
        ciphertext=sealed.ciphertext,
    )
    return value.format()


def decrypt(wire: str, private_key: str) -> str:
    """
    Decrypt an EJ[1:...] string with the recipient's private key.

    Raises:
        InvalidEncryptedFormat / InvalidBase64String: malformed value
        InvalidHexString / InvalidKeyFormat: bad private key
        DecryptionFailed: wrong key, tampered value, or non-UTF-8 plaintext
    """

    ensure_crypto()
    value = EncryptedValue.parse(wire)
    recipient = PrivateKey(decode_key(private_key))

    # Box() runs the key exchange, which rejects low-order points
    try:
        box = Box(recipient, PublicKey(value.ephemeral_public_key))
        message = box.decrypt(value.ciphertext, value.nonce)
    except CryptoError:
        logger.debug("crypto_box_open rejected value")
        raise DecryptionFailed() from None

    try:
        return message.decode("utf-8")
    except UnicodeDecodeError:
        raise DecryptionFailed() from None
