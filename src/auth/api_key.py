"""
Module: api_key.py
Description: API key generation, hashing and verification.

Keys are hashed with PBKDF2-SHA256 from the standard library and stored
as pbkdf2_sha256$iterations$salt$hash. Only the hash is configured on
the service (API_KEY_HASH); the plain key is handed to the caller once.

Dependencies: hashlib, secrets
"""

import hashlib
import secrets

from utils.logger import get_logger

logger = get_logger(__name__)

PBKDF2_ALGORITHM = 'pbkdf2_sha256'
PBKDF2_ITERATIONS = 100000
PBKDF2_SALT_LENGTH = 32     # 256-bit salt
PBKDF2_KEY_LENGTH = 32      # 256-bit derived key
API_KEY_PREFIX = 'whk_'


def generate_api_key() -> str:
    """Generate a new plain API key."""
    return f"{API_KEY_PREFIX}{secrets.token_urlsafe(32)[:32]}"


def _derive(api_key: str, salt: bytes, iterations: int) -> bytes:
    return hashlib.pbkdf2_hmac(
        'sha256',
        api_key.encode('utf-8'),
        salt,
        iterations,
        dklen=PBKDF2_KEY_LENGTH
    )


def hash_api_key(api_key: str) -> str:
    """
    Hash an API key using PBKDF2-SHA256.

    Args:
        api_key: Plain text API key to hash

    Returns:
        Hash string in format: pbkdf2_sha256$iterations$salt$hash

    Raises:
        ValueError: If api_key is empty or only whitespace
    """
    if not api_key or not isinstance(api_key, str):
        raise ValueError("api_key must be a non-empty string")
    if not api_key.strip():
        raise ValueError("api_key cannot be only whitespace")

    salt = secrets.token_bytes(PBKDF2_SALT_LENGTH)
    key = _derive(api_key, salt, PBKDF2_ITERATIONS)

    return f"{PBKDF2_ALGORITHM}${PBKDF2_ITERATIONS}${salt.hex()}${key.hex()}"


def verify_api_key(plain_key: str, hashed_key: str) -> bool:
    """
    Verify an API key against its PBKDF2 hash.

    Malformed input never raises; it simply fails verification.

    Example:
        >>> hashed = hash_api_key("whk_abc123")
        >>> verify_api_key("whk_abc123", hashed)
        True
        >>> verify_api_key("wrong_key", hashed)
        False
    """
    if not plain_key or not isinstance(plain_key, str):
        return False
    if not hashed_key or not isinstance(hashed_key, str):
        return False

    parts = hashed_key.split('$')
    if len(parts) != 4 or parts[0] != PBKDF2_ALGORITHM:
        logger.warning("Invalid hash format for verification")
        return False

    try:
        iterations = int(parts[1])
        salt = bytes.fromhex(parts[2])
    except (ValueError, TypeError):
        logger.warning("Invalid hash parameters")
        return False

    if iterations < 1:
        logger.warning("Invalid hash parameters")
        return False

    computed = _derive(plain_key, salt, iterations).hex()
    # Constant-time comparison
    is_valid = secrets.compare_digest(computed, parts[3])

    if not is_valid:
        logger.warning("API key verification failed")

    return is_valid


def needs_rehash(hashed_key: str) -> bool:
    """Whether a stored hash uses an unknown format or fewer iterations than current."""
    if not hashed_key or not isinstance(hashed_key, str):
        return False

    parts = hashed_key.split('$')
    if len(parts) != 4 or parts[0] != PBKDF2_ALGORITHM:
        return True

    try:
        return int(parts[1]) < PBKDF2_ITERATIONS
    except ValueError:
        return True
