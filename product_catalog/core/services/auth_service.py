"""Credential storage and Basic authentication checks."""

import threading
from collections.abc import Iterable
from typing import Protocol

from loguru import logger

from product_catalog.core.security import (
    DEFAULT_HASH_ROUNDS,
    create_password_context,
    hash_password,
    verify_password,
)
from product_catalog.runtime.config.config_data import UserCredentialConfig


class CredentialStore(Protocol):
    """Backend holding the users allowed to call the service."""

    def add_user(self, username: str, password: str) -> None: ...

    def verify(self, username: str, password: str) -> bool: ...

    def usernames(self) -> list[str]: ...


class InMemoryCredentialStore:
    """Process-local credential store keeping salted password hashes.

    Reads and writes are serialized with a lock so users can be added while
    calls are being served.
    """

    def __init__(self, rounds: int = DEFAULT_HASH_ROUNDS) -> None:
        self._context = create_password_context(rounds)
        self._hashes: dict[str, str] = {}
        self._lock = threading.Lock()

    def add_user(self, username: str, password: str) -> None:
        if not username:
            raise ValueError("username must not be empty")
        encoded = hash_password(password, self._context)
        with self._lock:
            self._hashes[username] = encoded

    def verify(self, username: str, password: str) -> bool:
        with self._lock:
            encoded = self._hashes.get(username)
        if encoded is None:
            return False
        return verify_password(password, encoded, self._context)

    def usernames(self) -> list[str]:
        with self._lock:
            return sorted(self._hashes)


class Authenticator:
    """Validates username/password pairs against a credential store."""

    def __init__(self, store: CredentialStore) -> None:
        self._store = store

    @classmethod
    def from_config(
        cls,
        users: Iterable[UserCredentialConfig],
        rounds: int = DEFAULT_HASH_ROUNDS,
    ) -> "Authenticator":
        """Build an authenticator seeded with the configured users."""
        store = InMemoryCredentialStore(rounds=rounds)
        for user in users:
            store.add_user(user.username, user.password)
        logger.info("Basic authentication enabled for users: {}", store.usernames())
        return cls(store)

    def add_user(self, username: str, password: str) -> None:
        self._store.add_user(username, password)

    def validate(self, username: str, password: str) -> bool:
        """Return True only for a known username with a matching password."""
        if not username:
            return False
        return self._store.verify(username, password)
