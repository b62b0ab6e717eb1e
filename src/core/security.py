"""Password hashing and signed session tokens.

Passwords are hashed with bcrypt. Session tokens are HS256 JWTs carrying the
user id and role; there is no refresh mechanism, so expiry forces a new login.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta

import bcrypt
import pytz
from jose import ExpiredSignatureError, JWTError, jwt

from core.exceptions import ExpiredTokenError, InvalidTokenError
from models.enums import Role

logger = logging.getLogger(__name__)

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS = 12

# bcrypt ignores input beyond 72 bytes; newer releases refuse it outright
BCRYPT_MAX_BYTES = 72

ALGORITHM = "HS256"


def _password_bytes(password: str) -> bytes:
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_BYTES:
        logger.warning(
            "Password exceeds %d bytes (%d bytes), truncating",
            BCRYPT_MAX_BYTES,
            len(password_bytes),
        )
        password_bytes = password_bytes[:BCRYPT_MAX_BYTES]
    return password_bytes


def hash_password(password: str) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password.

    Returns:
        Bcrypt hash string.
    """
    salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash.

    Args:
        plain_password: Plain text password to verify.
        hashed_password: Bcrypt hash string to verify against.

    Returns:
        True if password matches, False otherwise (including malformed hashes).
    """
    if not plain_password or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            _password_bytes(plain_password), hashed_password.encode("utf-8")
        )
    except ValueError as e:
        logger.error("Password verification error: %s", e)
        return False


@dataclass(frozen=True)
class Identity:
    """Authenticated caller attached to the request context."""

    user_id: int
    role: Role


class TokenService:
    """Issues and verifies signed session tokens."""

    def __init__(self, secret: str, expires_in: timedelta):
        """Initialize the service.

        Args:
            secret: HMAC signing key.
            expires_in: Lifetime of issued tokens.
        """
        if not secret:
            raise ValueError("jwt_secret_blank")
        self._secret = secret
        self._expires_in = expires_in

    def issue(self, identity: Identity) -> str:
        """Create a token for the given identity.

        Args:
            identity: User id and role to embed.

        Returns:
            Encoded JWT string.
        """
        now = datetime.now(pytz.utc)
        payload = {
            "sub": str(identity.user_id),
            "role": identity.role.value,
            "iat": int(now.timestamp()),
            "exp": int((now + self._expires_in).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> Identity:
        """Decode and check a token.

        Args:
            token: Encoded JWT string.

        Returns:
            The Identity embedded in the token.

        Raises:
            ExpiredTokenError: If the token is past its expiry.
            InvalidTokenError: If the signature or claims are invalid.
        """
        if not token:
            raise InvalidTokenError("token_blank")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[ALGORITHM])
        except ExpiredSignatureError as e:
            raise ExpiredTokenError("token_expired") from e
        except JWTError as e:
            raise InvalidTokenError("token_invalid") from e

        try:
            return Identity(user_id=int(payload["sub"]), role=Role(payload["role"]))
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError("token_claims_invalid") from e
