"""
Password Hashing
Salted bcrypt hashes for stored credentials
"""

from __future__ import annotations

import bcrypt

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """bcrypt wrapper with a configurable cost factor"""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(password.encode('utf-8'), salt).decode('utf-8')

    def verify(self, password: str, stored_hash: str) -> bool:
        if not password or not stored_hash:
            return False
        try:
            return bcrypt.checkpw(password.encode('utf-8'), stored_hash.encode('utf-8'))
        except ValueError:
            # Not a bcrypt hash, or a password past the 72 byte limit
            return False
