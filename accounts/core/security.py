"""Password hashing and verification."""

from __future__ import annotations

from argon2 import PasswordHasher, exceptions as argon_exc


class CredentialHasher:
    """argon2 hasher whose time cost comes from configuration."""

    def __init__(self, cost: int) -> None:
        self._ph = PasswordHasher(time_cost=max(1, int(cost)))

    def hash(self, password: str) -> str:
        return self._ph.hash(password)

    def verify(self, password: str, stored_hash: str | None) -> bool:
        if not stored_hash:
            return False
        try:
            return self._ph.verify(stored_hash, password)
        except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
            return False

    def needs_rehash(self, stored_hash: str) -> bool:
        """True when the hash was produced with parameters other than the current ones."""
        try:
            return self._ph.check_needs_rehash(stored_hash)
        except argon_exc.InvalidHashError:
            return True
