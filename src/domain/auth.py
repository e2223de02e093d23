"""
Admin authentication - credentials, session tokens and the admin gate.

The admin session is stateless: a successful login yields a signed JWT that
the client keeps in a cookie. Nothing is stored server-side, so validity is
purely a matter of signature and expiry.

Security Design:
---------------
- Username comparison uses secrets.compare_digest() and the password is
  always checked with bcrypt, even when the username is wrong, so response
  time does not reveal which half of the credentials failed. Passwords
  beyond bcrypt's 72-byte limit are refused after the same bcrypt work.
- SessionTokenCodec.verify() collapses every failure (malformed, foreign
  signature, expired, missing subject) into the same None result.
- AdminGate is binary: a request is either the admin or it is not.
"""

import secrets
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import bcrypt
from jose import JWTError, jwt

from .exceptions import Unauthorized


# bcrypt only defines its input up to this many bytes
BCRYPT_MAX_PASSWORD_BYTES = 72


def _utcnow() -> datetime:
    return datetime.now(UTC)


class CredentialStore:
    """Holds the single admin identity and a bcrypt hash of its password."""

    def __init__(self, username: str, password_hash: str) -> None:
        self._username = username
        self._password_hash = password_hash

    @classmethod
    def from_plaintext(cls, username: str, password: str, cost: int = 10) -> "CredentialStore":
        """
        Hash the configured plaintext password once at startup.

        Raises:
            ValueError: If the password is longer than bcrypt accepts
        """
        password_bytes = password.encode()
        if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(
                f"Admin password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes "
                f"when UTF-8 encoded (got {len(password_bytes)})"
            )
        password_hash = bcrypt.hashpw(password_bytes, bcrypt.gensalt(rounds=cost)).decode()
        return cls(username, password_hash)

    def authenticate(self, username: str, password: str) -> str | None:
        """
        Check admin credentials.

        Args:
            username: Submitted username
            password: Submitted plaintext password

        Returns:
            The admin identity on success, None otherwise
        """
        # Both comparisons always run
        username_valid = secrets.compare_digest(username.encode(), self._username.encode())
        password_bytes = password.encode()
        too_long = len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES
        # An over-long password can never match, but still pays for one checkpw
        password_valid = bcrypt.checkpw(
            password_bytes[:BCRYPT_MAX_PASSWORD_BYTES], self._password_hash.encode()
        )
        if username_valid and password_valid and not too_long:
            return self._username
        return None


@dataclass
class SessionTokenCodec:
    """Issues and verifies signed, time-limited admin session tokens."""

    secret: str
    algorithm: str = "HS256"
    ttl: timedelta = timedelta(hours=24)
    clock: Callable[[], datetime] = field(default=_utcnow)

    def issue(self, identity: str) -> str:
        """Create a token for identity that expires after ttl."""
        issued_at = self.clock()
        claims = {
            "sub": identity,
            "iat": issued_at,
            "exp": issued_at + self.ttl,
        }
        return jwt.encode(claims, self.secret, algorithm=self.algorithm)

    def verify(self, token: str | None) -> str | None:
        """
        Verify signature and expiry.

        Returns:
            The embedded identity, or None for any kind of invalid token
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError:
            return None
        identity = payload.get("sub")
        if not isinstance(identity, str) or not identity:
            return None
        return identity


@dataclass
class AdminGate:
    """Guard for admin-only operations."""

    codec: SessionTokenCodec

    def admit(self, token: str | None) -> str:
        """
        Admit a request carrying token.

        Raises:
            Unauthorized: If the token is absent or fails verification
        """
        identity = self.codec.verify(token)
        if identity is None:
            raise Unauthorized("Unauthorized")
        return identity

    def is_admin(self, token: str | None) -> bool:
        """Report whether token would be admitted, without raising."""
        return self.codec.verify(token) is not None
