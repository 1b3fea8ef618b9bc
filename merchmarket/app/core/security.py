"""
Password hashing utilities.

Thin wrapper over bcrypt so the work factor can be configured per app.
"""

import bcrypt


class PasswordHasher:
    """Salted bcrypt hashing and verification."""

    def __init__(self, rounds: int = 12):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a plaintext password.

        Raises:
            ValueError: If bcrypt rejects the password (e.g. longer than 72 bytes)
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify(self, password: str, hashed_password: str) -> bool:
        """Check a plaintext password against a stored digest."""
        try:
            return bcrypt.checkpw(password.encode("utf-8"), hashed_password.encode("utf-8"))
        except ValueError:
            return False
