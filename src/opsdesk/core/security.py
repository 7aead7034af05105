"""Password hashing and verification utilities.

Stored hashes have the form ``<salt>:<digest>``: a 32 hex character salt
(16 random bytes) and the hex SHA-256 digest of ``salt + password``, with the
salt mixed in as its hex text.
"""

import hashlib
import hmac
import secrets
import string

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

from opsdesk.core.logging import get_logger

logger = get_logger(__name__)

SALT_BYTES = 16
SEPARATOR = ":"
DIGEST_HEX_LENGTH = hashlib.sha256().digest_size * 2


def _as_text(value: str | bytes) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


def _digest(salt_hex: str, password: str) -> str:
    return hashlib.sha256((salt_hex + password).encode("utf-8")).hexdigest()


def _is_hex(value: str) -> bool:
    """Strict hex: no whitespace, which bytes.fromhex would skip."""
    return bool(value) and all(c in string.hexdigits for c in value)


class SaltedSHA256Hasher:
    """pwdlib hasher for salted SHA-256 ``salt:digest`` hashes."""

    @classmethod
    def identify(cls, hash: str | bytes) -> bool:
        try:
            salt, sep, digest = _as_text(hash).partition(SEPARATOR)
        except (AttributeError, UnicodeDecodeError):
            return False
        return bool(sep and salt and digest)

    def hash(self, password: str | bytes, *, salt: bytes | None = None) -> str:
        if salt is None:
            salt = secrets.token_bytes(SALT_BYTES)
        salt_hex = salt.hex()
        return f"{salt_hex}{SEPARATOR}{_digest(salt_hex, _as_text(password))}"

    def verify(self, password: str | bytes, hash: str | bytes) -> bool:
        try:
            salt_hex, _, digest_hex = _as_text(hash).partition(SEPARATOR)
            # Salt must be valid hex even though it is hashed as text
            if not _is_hex(salt_hex) or not _is_hex(digest_hex):
                return False

            bytes.fromhex(salt_hex)
            expected = bytes.fromhex(digest_hex)
            actual = bytes.fromhex(_digest(salt_hex, _as_text(password)))
        except (AttributeError, TypeError, ValueError) as exc:
            # UnicodeDecodeError is a ValueError
            logger.debug("security.verify_malformed", error=type(exc).__name__)
            return False

        return hmac.compare_digest(actual, expected)

    def check_needs_rehash(self, hash: str | bytes) -> bool:
        try:
            salt_hex, _, digest_hex = _as_text(hash).partition(SEPARATOR)
        except (AttributeError, TypeError, ValueError):
            return True
        if not _is_hex(salt_hex) or not _is_hex(digest_hex):
            return True
        return len(salt_hex) != SALT_BYTES * 2 or len(digest_hex) != DIGEST_HEX_LENGTH


# Salted SHA-256 (legacy-compatible storage format)
password_hash = PasswordHash((SaltedSHA256Hasher(),))


def hash_password(password: str, salt: bytes | None = None) -> str:
    """Hash password as ``salt:digest`` with a fresh random salt."""
    return password_hash.hash(password, salt=salt)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify plain password against hashed password. Never raises."""
    try:
        return password_hash.verify(plain_password, hashed_password)
    except UnknownHashError:
        logger.debug("security.verify_unknown_hash")
        return False
    except TypeError:
        # pwdlib rejects non str/bytes arguments before any hasher runs
        logger.debug("security.verify_invalid_type")
        return False


def needs_rehash(hashed_password: str) -> bool:
    """Return True when the stored hash is not a well-formed ``salt:digest``."""
    return SaltedSHA256Hasher().check_needs_rehash(hashed_password)
