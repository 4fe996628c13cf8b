"""
Password hashing helpers.
Salted one-way hashes via Argon2; verification never raises for bad input.
"""

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

ph = PasswordHasher()


def hash_password(password: str) -> str:
    """
    Hash a plaintext password.

    Args:
        password (str): The plaintext password.

    Returns:
        str: Encoded Argon2 hash, salt included.
    """
    return ph.hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    """
    Check a plaintext password against a stored hash.

    Args:
        password_hash (str): The stored Argon2 hash.
        password (str): The candidate plaintext password.

    Returns:
        bool: True on match, False on mismatch or a malformed hash.
    """
    if not password_hash or not isinstance(password_hash, str) or not isinstance(password, str):
        return False
    try:
        return ph.verify(password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False
