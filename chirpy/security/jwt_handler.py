"""
JWT Handler - access and refresh tokens

Module: security.jwt_handler
Date: 2026-10-12
Version: 0.1.0

CHANGELOG:
[2026-10-12 v0.1.0] Initial implementation
  - HS256 signed tokens (iss, sub, iat, exp)
  - Access (1 hour) and refresh (60 days) scopes via the issuer claim
  - Parse with signature and expiry check
  - Scope check and revocation check on verify

ARCHITECTURE:
Token lifecycle: Issued -> Valid | Expired | Revoked.

  - parse(): signature, structure and expiry
  - verify(): parse() + issuer must match the required scope
              + token must not be in the revocation store

The subject is the user id as a decimal string.

SECURITY NOTES:
- Secret key must be 32+ characters
- All times in UTC
- Revocation state is in memory only and is lost on restart
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import (
    ACCESS_TOKEN_EXPIRE_MINUTES,
    ISSUER_ACCESS,
    ISSUER_REFRESH,
    JWT_ALGORITHM,
    MIN_JWT_SECRET_LENGTH,
    REFRESH_TOKEN_EXPIRE_DAYS,
)
from ..core.errors import InvalidToken, Revoked
from ..persistence.token_store import RevocationStore


@dataclass
class TokenClaims:
    """Verified token claims"""
    issuer: str
    subject: str
    issued_at: datetime
    expires_at: datetime


class JWTHandler:
    """
    Issues, parses and validates signed tokens.

    Uses HS256 (HMAC-SHA256) with a single shared secret. Tokens are
    stateless; revocation goes through the RevocationStore.
    """

    def __init__(
        self,
        secret_key: str,
        revocation_store: Optional[RevocationStore] = None,
        algorithm: str = JWT_ALGORITHM,
        access_token_expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
        refresh_token_expire_days: int = REFRESH_TOKEN_EXPIRE_DAYS,
    ):
        """
        Initialize JWT handler

        Args:
            secret_key: Secret key for signing (32+ characters)
            revocation_store: Revoked token registry (new one if None)
            algorithm: JWT algorithm (default HS256)
            access_token_expire_minutes: Access token TTL in minutes
            refresh_token_expire_days: Refresh token TTL in days

        Raises:
            ValueError: If secret_key too short
        """
        if len(secret_key) < MIN_JWT_SECRET_LENGTH:
            raise ValueError(
                f"Secret key must be at least {MIN_JWT_SECRET_LENGTH} characters"
            )

        self.logger = logging.getLogger("security.jwt_handler")
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.revocation_store = (
            revocation_store if revocation_store is not None else RevocationStore()
        )
        self.access_token_expire = timedelta(minutes=access_token_expire_minutes)
        self.refresh_token_expire = timedelta(days=refresh_token_expire_days)

        self.logger.info(
            f"JWT Handler initialized (algo={algorithm}, "
            f"access_expires={access_token_expire_minutes}min, "
            f"refresh_expires={refresh_token_expire_days}d)"
        )

    def issue_access(self, user_id: int) -> str:
        """Issue a 1-hour access token for a user"""
        return self._issue(ISSUER_ACCESS, user_id, self.access_token_expire)

    def issue_refresh(self, user_id: int) -> str:
        """Issue a 60-day refresh token for a user"""
        return self._issue(ISSUER_REFRESH, user_id, self.refresh_token_expire)

    def parse(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry, extract claims

        Args:
            token: JWT token string

        Returns:
            TokenClaims

        Raises:
            InvalidToken: If malformed, badly signed, expired or missing claims
        """
        if not token or not isinstance(token, str):
            raise InvalidToken("Token must be non-empty string")

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["iss", "sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidToken(f"Token expired: {e}") from e
        except jwt.InvalidSignatureError as e:
            raise InvalidToken(f"Invalid signature: {e}") from e
        except jwt.InvalidTokenError as e:
            raise InvalidToken(f"Invalid token: {e}") from e

        try:
            return TokenClaims(
                issuer=str(payload["iss"]),
                subject=str(payload["sub"]),
                issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
                expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
            )
        except (ValueError, TypeError, OverflowError) as e:
            raise InvalidToken(f"Invalid timestamp: {e}") from e

    def verify(self, token: str, required_issuer: str) -> str:
        """
        Validate a token for a given scope

        Args:
            token: JWT token string
            required_issuer: ISSUER_ACCESS or ISSUER_REFRESH

        Returns:
            Subject (user id as string)

        Raises:
            InvalidToken: If parse fails or the issuer does not match
            Revoked: If the token has been revoked
        """
        claims = self.parse(token)

        if claims.issuer != required_issuer:
            self.logger.warning(
                f"Token scope mismatch (expected={required_issuer}, got={claims.issuer})"
            )
            raise InvalidToken("Invalid token issuer")

        if self.revocation_store.is_revoked(token):
            self.logger.warning(f"Revoked token presented for subject {claims.subject}")
            raise Revoked("Token has been revoked")

        return claims.subject

    def revoke(self, token: str) -> None:
        """Revoke a token (idempotent, issuer-agnostic)"""
        self.revocation_store.revoke(token)

    def _issue(self, issuer: str, user_id: int, ttl: timedelta) -> str:
        now = datetime.now(timezone.utc)
        claims = {
            "iss": issuer,
            "sub": str(user_id),
            "iat": int(now.timestamp()),
            "exp": int((now + ttl).timestamp()),
        }
        token = jwt.encode(claims, self.secret_key, algorithm=self.algorithm)
        self.logger.debug(f"Issued {issuer} token for user {user_id}")
        return token
