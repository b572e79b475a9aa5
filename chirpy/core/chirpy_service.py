"""
Chirpy Service - core orchestrator

Module: core.chirpy_service
Date: 2026-10-12
Version: 0.1.0

CHANGELOG:
[2026-10-12 v0.1.0] Initial implementation
  - Chirp creation, listing and lookup
  - User registration and update
  - Login (access + refresh token pair)
  - Access token refresh and refresh token revocation
  - Dataset reset

ARCHITECTURE:
ChirpyService is built once at startup and handed to the transport. It
owns every piece of shared state:

  - DatasetStore      (the JSON file, chirps + users)
  - ChirpRepository / UserRepository
  - PasswordHasher    (bcrypt)
  - JWTHandler        (tokens) + RevocationStore
  - HitCounter        (file server metrics)

All methods are blocking and thread-safe; the HTTP layer calls them from
a thread pool.

SECURITY NOTES:
- Unknown email and wrong password are both reported as Unauthorized
- Password hashes never leave the core (User.to_public_dict)
- Tokens are never logged
"""

import logging
from dataclasses import dataclass
from typing import List

from .config import ServerConfig
from .constants import ISSUER_ACCESS, ISSUER_REFRESH, MAX_PASSWORD_BYTES
from .errors import InvalidToken, NotFound, Unauthorized, ValidationError
from .metrics import HitCounter
from ..persistence.chirp_repository import ChirpRepository
from ..persistence.json_store import DatasetStore
from ..persistence.models import Chirp, User
from ..persistence.token_store import RevocationStore
from ..persistence.user_repository import UserRepository
from ..security.jwt_handler import JWTHandler
from ..security.password_hasher import PasswordHasher


@dataclass
class LoginResult:
    """Successful login: the user and a fresh token pair"""
    user: User
    access_token: str
    refresh_token: str


class ChirpyService:
    """
    Main Chirpy service

    Typical usage:
        service = ChirpyService(ServerConfig.from_env())
        user = service.create_user("a@b.c", "hunter2")
        tokens = service.login("a@b.c", "hunter2")
    """

    def __init__(self, config: ServerConfig):
        """
        Initialize the service and load the dataset

        Args:
            config: Server configuration

        Raises:
            StoreIOError: If the database cannot be created or loaded
            ValueError: If the JWT secret is too short
        """
        self.logger = logging.getLogger("core.chirpy_service")
        self.config = config

        self.store = DatasetStore(self.config.db_path)
        self.chirps = ChirpRepository(self.store)
        self.users = UserRepository(self.store)

        self.password_hasher = PasswordHasher(rounds=self.config.bcrypt_rounds)
        self.revocation_store = RevocationStore()
        self.jwt_handler = JWTHandler(
            secret_key=self.config.jwt_secret,
            revocation_store=self.revocation_store,
        )

        self.hits = HitCounter()

        self.logger.info(f"Service initialized (db={self.config.db_path})")

    # ------------------------------------------------------------------
    # Chirps
    # ------------------------------------------------------------------

    def create_chirp(self, body: str) -> Chirp:
        return self.chirps.create(body)

    def list_chirps(self) -> List[Chirp]:
        return self.chirps.list()

    def get_chirp(self, chirp_id: int) -> Chirp:
        return self.chirps.get(chirp_id)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def create_user(self, email: str, password: str) -> User:
        """
        Register a user

        Raises:
            ValidationError: Empty or over-long password
            Conflict: Email already registered
            StoreIOError: Dataset write failed
        """
        self._check_password(password)
        return self.users.create(email, self.password_hasher.hash(password))

    def update_user(self, user_id: int, email: str, password: str) -> User:
        """
        Replace a user's email and password

        Raises:
            ValidationError: Empty or over-long password
            NotFound: Unknown user id
            Conflict: Email owned by another user
            StoreIOError: Dataset write failed
        """
        self._check_password(password)
        return self.users.update(user_id, email, self.password_hasher.hash(password))

    # ------------------------------------------------------------------
    # Authentication
    # ------------------------------------------------------------------

    def login(self, email: str, password: str) -> LoginResult:
        """
        Check credentials and issue an access/refresh token pair

        Raises:
            Unauthorized: Unknown email or wrong password
        """
        try:
            user = self.users.get(self.users.find_id_by_email(email))
        except NotFound:
            self.logger.warning("Login failed: unknown email")
            raise Unauthorized("Incorrect email or password")

        if not self.password_hasher.verify(password, user.hashed_password):
            self.logger.warning(f"Login failed: wrong password for user {user.id}")
            raise Unauthorized("Incorrect email or password")

        self.logger.info(f"User logged in: {user.id}")
        return LoginResult(
            user=user,
            access_token=self.jwt_handler.issue_access(user.id),
            refresh_token=self.jwt_handler.issue_refresh(user.id),
        )

    def authenticate(self, access_token: str) -> int:
        """
        Resolve an access token to a user id

        Raises:
            InvalidToken: Bad, expired or non-access token
            Revoked: Token was revoked
        """
        return self._subject_to_id(
            self.jwt_handler.verify(access_token, ISSUER_ACCESS)
        )

    def refresh(self, refresh_token: str) -> str:
        """
        Exchange a refresh token for a new access token

        Raises:
            InvalidToken: Bad, expired or non-refresh token
            Revoked: Token was revoked
        """
        user_id = self._subject_to_id(
            self.jwt_handler.verify(refresh_token, ISSUER_REFRESH)
        )
        self.logger.info(f"Access token refreshed for user {user_id}")
        return self.jwt_handler.issue_access(user_id)

    def revoke(self, refresh_token: str) -> None:
        """Revoke a refresh token; always succeeds"""
        if not refresh_token:
            self.logger.warning("Revoke called without a token")
            return
        self.jwt_handler.revoke(refresh_token)

    # ------------------------------------------------------------------
    # Admin
    # ------------------------------------------------------------------

    def reset(self) -> None:
        """Empty the dataset and persist it"""
        self.store.reset()

    @staticmethod
    def _check_password(password: str) -> None:
        if not password:
            raise ValidationError("Enter a password")
        if len(password.encode()) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes"
            )

    @staticmethod
    def _subject_to_id(subject: str) -> int:
        try:
            return int(subject)
        except ValueError:
            raise InvalidToken("Token subject is not a user id")
