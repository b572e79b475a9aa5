"""
User Repository - account records

Module: persistence.user_repository
Date: 2026-10-12
Version: 0.1.0

CHANGELOG:
[2026-10-12 v0.1.0] Initial implementation
  - Registration with unique email (exact, case-sensitive match)
  - In-place update of email and password hash
  - Email to id lookup

Passwords arrive here already hashed; this module never sees plaintext.
"""

import logging
from typing import Optional

from ..core.errors import Conflict, NotFound
from .json_store import DatasetStore
from .models import Dataset, User


class UserRepository:
    """User CRUD against the shared dataset"""

    def __init__(self, store: DatasetStore):
        self.logger = logging.getLogger("persistence.user_repository")
        self.store = store

    def create(self, email: str, hashed_password: str) -> User:
        """
        Register a new user

        Args:
            email: Email address (must not be registered yet)
            hashed_password: bcrypt hash of the password

        Returns:
            The stored User

        Raises:
            Conflict: If the email is already registered
            StoreIOError: If the dataset cannot be written
        """
        with self.store.writing() as data:
            if self._find_id(data, email) is not None:
                self.logger.warning("Registration rejected: email already registered")
                raise Conflict("Email already registered")

            user = User(
                id=len(data.users) + 1,
                email=email,
                hashed_password=hashed_password,
            )
            data.users[user.id] = user

        self.logger.info(f"User created: {user.id}")
        return user

    def update(self, user_id: int, email: str, hashed_password: str) -> User:
        """
        Replace a user's email and password hash

        Args:
            user_id: Id of the user to update
            email: New email address
            hashed_password: bcrypt hash of the new password

        Returns:
            The updated User (same id)

        Raises:
            NotFound: If no user has this id
            Conflict: If another user already owns the email
            StoreIOError: If the dataset cannot be written
        """
        with self.store.writing() as data:
            if user_id not in data.users:
                raise NotFound(f"User {user_id} does not exist")

            owner = self._find_id(data, email)
            if owner is not None and owner != user_id:
                self.logger.warning(f"Update of user {user_id} rejected: email in use")
                raise Conflict("Email already registered")

            user = User(id=user_id, email=email, hashed_password=hashed_password)
            data.users[user_id] = user

        self.logger.info(f"User updated: {user_id}")
        return user

    def get(self, user_id: int) -> User:
        """
        Get a user by id

        Raises:
            NotFound: If no user has this id
        """
        with self.store.reading() as data:
            user = data.users.get(user_id)
        if user is None:
            raise NotFound(f"User {user_id} does not exist")
        return user

    def find_id_by_email(self, email: str) -> int:
        """
        Resolve an email to a user id

        Raises:
            NotFound: If the email is not registered
        """
        with self.store.reading() as data:
            user_id = self._find_id(data, email)
        if user_id is None:
            raise NotFound("Email is not registered")
        return user_id

    @staticmethod
    def _find_id(data: Dataset, email: str) -> Optional[int]:
        """Linear scan; at most one match since emails are unique"""
        for user in data.users.values():
            if user.email == email:
                return user.id
        return None
