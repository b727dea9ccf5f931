"""
Password hashing and verification.

Uses bcrypt for password hashing with automatic salting and a
configurable work factor. Hashing is deliberately slow, so async code
goes through ``hash_async``/``verify_async``, which run in a worker thread
and leave the event loop free for other requests.
"""

from __future__ import annotations

import asyncio
import secrets
from functools import cached_property

import bcrypt

from .exceptions import HashingError, MalformedHashError
from .models import MAX_PASSWORD_BYTES

MIN_ROUNDS = 4
MAX_ROUNDS = 31
DEFAULT_ROUNDS = 12


class PasswordHasher:
    """bcrypt hasher bound to one cost factor for the life of the process."""

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        if (
            isinstance(rounds, bool)
            or not isinstance(rounds, int)
            or not MIN_ROUNDS <= rounds <= MAX_ROUNDS
        ):
            raise HashingError(
                f"bcrypt cost factor must be an integer in "
                f"[{MIN_ROUNDS}, {MAX_ROUNDS}], got {rounds!r}"
            )
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Hash a password with a fresh random salt."""
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            return bcrypt.hashpw(password.encode(), salt).decode()
        except OSError as exc:
            raise HashingError("Entropy source unavailable") from exc
        except ValueError as exc:
            raise HashingError(str(exc)) from exc

    def verify(self, password: str, password_hash: str) -> bool:
        """
        Constant-time comparison against a bcrypt hash.

        Returns False for a wrong password; raises ``MalformedHashError``
        only when ``password_hash`` is not a bcrypt hash.
        """
        candidate = password.encode()
        if len(candidate) > MAX_PASSWORD_BYTES:
            # Longer inputs are rejected at registration, so none can match.
            return False
        try:
            return bcrypt.checkpw(candidate, password_hash.encode())
        except ValueError as exc:
            raise MalformedHashError() from exc

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, password_hash: str) -> bool:
        return await asyncio.to_thread(self.verify, password, password_hash)

    async def verify_dummy_async(self, password: str) -> bool:
        """Spend one verification's worth of time when there is no hash to check."""
        return await asyncio.to_thread(lambda: self.verify(password, self.dummy_hash))

    @cached_property
    def dummy_hash(self) -> str:
        """A hash of a random secret, verified against when no user matches."""
        return self.hash(secrets.token_urlsafe(32))
