from __future__ import annotations

import os
import threading
from pathlib import Path
from typing import Iterable

from ipdr_auth.models import User

from .errors import DuplicateIdentity, NotFound, StoreFailure
from .json_file import JsonDocument


class UserStore:
    """Credential store contract shared by every backing medium."""

    def find_by_username_or_email(self, username: str, email: str) -> User | None:
        for user in self.list_users():
            if user.username == username or user.email == email:
                return user
        return None

    def find_by_username(self, username: str) -> User | None:
        for user in self.list_users():
            if user.username == username:
                return user
        return None

    def find_by_id(self, user_id: str) -> User | None:
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None

    def list_users(self) -> list[User]:
        raise NotImplementedError

    def insert(self, user: User) -> None:
        raise NotImplementedError

    def update(self, user: User) -> None:
        raise NotImplementedError


def _check_unique(existing: Iterable[User], user: User) -> None:
    for current in existing:
        if current.username == user.username:
            raise DuplicateIdentity("username", user.username)
        if current.email == user.email:
            raise DuplicateIdentity("email", user.email)
        if current.id == user.id:
            raise DuplicateIdentity("id", user.id)


def _replace(users: list[User], user: User) -> None:
    for index, current in enumerate(users):
        if current.id == user.id:
            users[index] = user
            return
    raise NotFound(user.id)


class InMemoryUserStore(UserStore):
    def __init__(self, users: Iterable[User] | None = None) -> None:
        self._users: list[User] = [user.copy() for user in users or ()]
        self._lock = threading.RLock()

    def list_users(self) -> list[User]:
        with self._lock:
            return [user.copy() for user in self._users]

    def insert(self, user: User) -> None:
        with self._lock:
            _check_unique(self._users, user)
            self._users.append(user.copy())

    def update(self, user: User) -> None:
        with self._lock:
            _replace(self._users, user.copy())


class JsonUserStore(UserStore):
    """Users kept as one JSON array; every mutation rewrites the whole file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.document = JsonDocument(path)

    @property
    def path(self) -> Path:
        return self.document.path

    def initialize(self) -> None:
        self.document.initialize()

    def list_users(self) -> list[User]:
        items = self.document.read()
        try:
            return [User.from_dict(item) for item in items]
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreFailure(f"Malformed user record in {self.path}") from exc

    def insert(self, user: User) -> None:
        with self.document.lock:
            users = self.list_users()
            _check_unique(users, user)
            users.append(user)
            self.document.write([item.to_dict() for item in users])

    def update(self, user: User) -> None:
        with self.document.lock:
            users = self.list_users()
            _replace(users, user)
            self.document.write([item.to_dict() for item in users])
