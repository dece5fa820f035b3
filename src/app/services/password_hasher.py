"""
Password hashing and verification.

bcrypt with a per-hash random salt and a tunable cost factor. Passwords are
pre-hashed with SHA-256 so bcrypt's 72-byte input limit never truncates:
two passwords sharing a long prefix must not verify against each other.
"""

import base64
import hashlib
from typing import Dict

import bcrypt

DEFAULT_ROUNDS = 12


class PasswordHasher:
    """Credential verifier used by registration, login and password changes"""

    # One dummy hash per cost factor, shared by every instance
    _dummy_hashes: Dict[int, bytes] = {}

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        self.rounds = rounds
        if rounds not in self._dummy_hashes:
            self._dummy_hashes[rounds] = bcrypt.hashpw(
                b"dummy_password", bcrypt.gensalt(rounds)
            )
        self._dummy_hash = self._dummy_hashes[rounds]

    @staticmethod
    def _prepare(password: str) -> bytes:
        digest = hashlib.sha256(password.encode("utf-8")).digest()
        return base64.b64encode(digest)

    def hash(self, password: str) -> str:
        """Hash a plain-text password for storage"""
        return bcrypt.hashpw(
            self._prepare(password), bcrypt.gensalt(self.rounds)
        ).decode("utf-8")

    def verify(self, password_hash: str, password: str) -> bool:
        """
        Check password against a stored hash.

        bcrypt.checkpw compares in constant time. Malformed hashes verify as
        False instead of raising.
        """
        try:
            return bcrypt.checkpw(self._prepare(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def dummy_verify(self, password: str) -> None:
        """Burn one bcrypt check so unknown usernames cost as much as known ones"""
        bcrypt.checkpw(self._prepare(password), self._dummy_hash)
