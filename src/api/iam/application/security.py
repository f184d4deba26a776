"""Security utilities for session credentials and passwords.

Provides secure token generation for sessions and bcrypt-based password
hashing. Uses cryptographically secure random generation throughout.
"""

import secrets
from functools import lru_cache

import bcrypt

SESSION_TOKEN_BYTES = 32

# bcrypt only considers the first 72 bytes of its input
_BCRYPT_MAX_BYTES = 72


def generate_session_token() -> str:
    """Generate a session token from 32 bytes of secure randomness.

    Returns:
        A 64-character lowercase hex string
    """
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def _password_bytes(plaintext: str) -> bytes:
    return plaintext.encode()[:_BCRYPT_MAX_BYTES]


def hash_password(plaintext: str) -> str:
    """Hash a password using bcrypt.

    Uses bcrypt with automatic salt generation for secure password hashing.
    The work factor is automatically determined by bcrypt's gensalt().

    Args:
        plaintext: The password to hash

    Returns:
        The bcrypt hash as a string
    """
    return bcrypt.hashpw(_password_bytes(plaintext), bcrypt.gensalt()).decode()


def verify_password(plaintext: str, digest: str) -> bool:
    """Verify a password against its hash using constant-time comparison.

    Args:
        plaintext: The password to verify
        digest: The bcrypt hash to verify against

    Returns:
        True if the password matches the hash, False otherwise
    """
    try:
        return bcrypt.checkpw(_password_bytes(plaintext), digest.encode())
    except ValueError:
        # Malformed stored hash
        return False


class BcryptPasswordHasher:
    """IPasswordHasher implementation backed by bcrypt."""

    def hash(self, plaintext: str) -> str:
        return hash_password(plaintext)

    def verify(self, plaintext: str, digest: str) -> bool:
        return verify_password(plaintext, digest)


@lru_cache
def dummy_password_hash() -> str:
    """Digest verified against when the email is unknown.

    Lets both login failure paths spend the same bcrypt work.
    """
    return hash_password(secrets.token_hex(16))
