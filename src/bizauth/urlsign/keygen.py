"""Shared secret generation for new clients."""

from __future__ import annotations

import secrets
from collections.abc import Callable

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from bizauth.common.errors import KeyGenerationError
from bizauth.common.logging import get_logger
from bizauth.urlsign.codec import encode_urlsafe_b64

logger = get_logger(__name__)

DEFAULT_KEY_BYTES = 32
LEGACY_RSA_KEY_SIZE = 1024

RandomSource = Callable[[int], bytes]


def generate_key(
    size: int = DEFAULT_KEY_BYTES,
    randbytes: RandomSource = secrets.token_bytes,
) -> str:
    """
    Generate a fresh shared secret for signing request URLs.

    Args:
        size: Number of random bytes in the key
        randbytes: Source of random bytes, called once with size

    Returns:
        URL-safe base64 encoded key

    Raises:
        KeyGenerationError: If size is not positive or the source fails
    """
    if size <= 0:
        raise KeyGenerationError(f"Key size must be positive, got {size}")

    try:
        raw = randbytes(size)
    except Exception as e:
        raise KeyGenerationError(f"Random source failed: {e}") from e

    if not isinstance(raw, bytes) or len(raw) != size:
        got = len(raw) if isinstance(raw, bytes) else type(raw).__name__
        raise KeyGenerationError(f"Random source returned {got}, expected {size} bytes")

    logger.debug("Generated client key", size=size)
    return encode_urlsafe_b64(raw)


def generate_rsa_key(key_size: int = LEGACY_RSA_KEY_SIZE) -> str:
    """
    Generate a key in the legacy format: an encoded RSA private key PEM.

    Older provisioning tooling handed out RSA private keys as HMAC secrets.
    The RSA structure is never used for asymmetric operations; the PEM
    bytes simply serve as key material. Prefer generate_key for new clients.

    Raises:
        KeyGenerationError: If generation or serialization fails
    """
    try:
        private_key = rsa.generate_private_key(public_exponent=65537, key_size=key_size)
        pem = private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.TraditionalOpenSSL,
            encryption_algorithm=serialization.NoEncryption(),
        )
    except (ValueError, TypeError) as e:
        raise KeyGenerationError(f"RSA key generation failed: {e}") from e

    logger.debug("Generated legacy RSA client key", key_size=key_size)
    return encode_urlsafe_b64(pem)
