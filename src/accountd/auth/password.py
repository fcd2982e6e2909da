"""Password hashing utilities.

Learn: Uses bcrypt for secure password hashing. bcrypt automatically
handles salting and embeds salt + cost in the hash string ("$2b$10$..."),
so verification needs nothing but the stored hash. The cost factor comes
from configuration (default 10, ~50-100ms per hash on modern hardware).
"""

import bcrypt

# bcrypt only looks at the first 72 bytes of input.
BCRYPT_MAX_BYTES = 72


class HashingError(Exception):
    """Raised when hashing fails or a stored hash is malformed."""


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """bcrypt hasher with a fixed cost factor."""

    def __init__(self, rounds: int = 10):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt."""
        try:
            salt = bcrypt.gensalt(rounds=self.rounds)
            return bcrypt.hashpw(_encode(password), salt).decode("utf-8")
        except (ValueError, TypeError, OSError) as e:
            raise HashingError("Password hashing failed") from e

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash.

        Returns False on mismatch. A hash that bcrypt cannot parse is
        a data problem, not a wrong password, so it raises HashingError.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError) as e:
            raise HashingError("Stored password hash is malformed") from e
