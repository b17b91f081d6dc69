"""Password generation and hashing (PBKDF2-SHA256)."""

import base64
import hashlib
import hmac
import secrets

PBKDF2_ITERATIONS = 600_000
SALT_BYTES = 16


def generate_random_password() -> str:
    """Generate a 16-character hex password for new accounts."""
    return secrets.token_hex(8)


def hash_password(password: str, salt: bytes | None = None) -> str:
    """Hash a password as `pbkdf2:sha256:<iterations>$<salt>$<key>`."""
    if salt is None:
        salt = secrets.token_bytes(SALT_BYTES)

    rounds = PBKDF2_ITERATIONS
    key = hashlib.pbkdf2_hmac("sha256", password.encode(), salt, rounds)
    return (
        f"pbkdf2:sha256:{rounds}"
        f"${base64.b64encode(salt).decode()}${base64.b64encode(key).decode()}"
    )


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash in constant time.

    The iteration count is read from the stored hash, so hashes made
    with an older setting keep verifying.
    """
    try:
        header, salt_b64, key_b64 = password_hash.split("$")
        algorithm, digest, iterations = header.split(":")
        if algorithm != "pbkdf2" or digest != "sha256":
            return False
        salt = base64.b64decode(salt_b64)
        expected = base64.b64decode(key_b64)
        rounds = int(iterations)
    except ValueError:
        return False

    key = hashlib.pbkdf2_hmac(digest, password.encode(), salt, rounds)
    return hmac.compare_digest(key, expected)
