"""Credentials class for username / passwords and their storage."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from pathlib import Path

from .json import dumps as json_dumps
from .json import loads as json_loads

_LOGGER = logging.getLogger(__name__)

DEFAULT_STORE_KEY = "fritzaha"


@dataclass
class Credentials:
    """Credentials for authentication."""

    #: Username of the FRITZ!Box user, may be empty for password-only setups
    username: str = field(default="", repr=False)
    #: Password of the FRITZ!Box user
    password: str = field(default="", repr=False)


class CredentialStore(ABC):
    """Opaque key/value storage for secrets."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value or None if absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> bool:
        """Store a value, returning True on success."""

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a value, returning True on success."""


class MemoryCredentialStore(CredentialStore):
    """Credential store kept in memory for the lifetime of the object."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        """Return the stored value or None if absent."""
        return self._values.get(key)

    def set(self, key: str, value: str) -> bool:
        """Store a value."""
        self._values[key] = value
        return True

    def delete(self, key: str) -> bool:
        """Remove a value."""
        self._values.pop(key, None)
        return True


class FileCredentialStore(CredentialStore):
    """Credential store backed by a json file readable only by the owner."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        """Return the location of the backing file."""
        return self._path

    def _read(self) -> dict[str, str]:
        try:
            content = self._path.read_text()
        except FileNotFoundError:
            return {}
        if not content.strip():
            return {}
        data = json_loads(content)
        if not isinstance(data, dict):
            _LOGGER.warning("Ignoring unexpected content in %s", self._path)
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as f:
            f.write(json_dumps(data, indent=True))

    def get(self, key: str) -> str | None:
        """Return the stored value or None if absent."""
        try:
            return self._read().get(key)
        except (OSError, ValueError) as ex:
            _LOGGER.debug("Unable to read credentials from %s: %s", self._path, ex)
            return None

    def set(self, key: str, value: str) -> bool:
        """Store a value, returning False if the file could not be written."""
        try:
            data = self._read()
            data[key] = value
            self._write(data)
        except (OSError, ValueError) as ex:
            _LOGGER.debug("Unable to store credentials in %s: %s", self._path, ex)
            return False
        return True

    def delete(self, key: str) -> bool:
        """Remove a value, returning False if the file could not be written."""
        try:
            data = self._read()
            if key in data:
                del data[key]
                self._write(data)
        except (OSError, ValueError) as ex:
            _LOGGER.debug("Unable to delete credentials in %s: %s", self._path, ex)
            return False
        return True


class CredentialManager:
    """Remember credentials between runs in a :class:`CredentialStore`.

    The username and password are stored under ``<key>user`` and
    ``<key>pass``. When *remember* is False any stored credentials are
    removed after a login instead of being offered for storage.
    """

    def __init__(
        self,
        store: CredentialStore,
        key: str = DEFAULT_STORE_KEY,
        *,
        remember: bool = True,
    ) -> None:
        if not key:
            raise ValueError("A store key is required")
        self._store = store
        self._user_key = f"{key}user"
        self._pass_key = f"{key}pass"
        self._remember = remember

    @property
    def remember(self) -> bool:
        """Return True if credentials are kept between runs."""
        return self._remember

    def get_remembered(self) -> Credentials | None:
        """Return the stored credentials or None if nothing is stored."""
        username = self._store.get(self._user_key)
        password = self._store.get(self._pass_key)
        if username is None or password is None:
            return None
        return Credentials(username, password)

    def get_credentials(self) -> Credentials | None:
        """Return stored credentials if remembering is enabled."""
        if not self._remember:
            return None
        return self.get_remembered()

    def save(self, credentials: Credentials) -> bool:
        """Store the credentials, returning True on success."""
        return self._store.set(
            self._user_key, credentials.username
        ) and self._store.set(self._pass_key, credentials.password)

    def delete(self) -> bool:
        """Remove stored credentials, returning True on success."""
        user_deleted = self._store.delete(self._user_key)
        pass_deleted = self._store.delete(self._pass_key)
        return user_deleted and pass_deleted

    async def update_stored(
        self,
        credentials: Credentials,
        confirm: Callable[[], Awaitable[bool]],
    ) -> None:
        """Update the store after a successful login.

        With remembering enabled and nothing stored yet *confirm* is awaited
        and the credentials are saved if it returns True. With remembering
        disabled any stored credentials are deleted.
        """
        if not self._remember:
            self.delete()
            return

        if self.get_remembered() is not None:
            return

        if await confirm():
            if not self.save(credentials):
                _LOGGER.warning("Unable to remember credentials")
