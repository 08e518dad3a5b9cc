"""
Password hashing and access token handling.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from passlib.context import CryptContext

from ..domain.entities import Doctor
from ..domain.errors import ExpiredTokenError, InvalidTokenError
from .config import SecuritySettings
from .exceptions import ConfigurationError


class PasswordHasher:
    """bcrypt via passlib.

    Every method is CPU bound; async callers go through ``run_blocking``.
    """

    def __init__(self, rounds: int = 12) -> None:
        self._context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds
        )
        # Verified against unknown emails so login timing stays uniform
        self._dummy_hash: Optional[str] = None

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            return self._context.verify(password, password_hash)
        except ValueError:
            return False

    def verify_dummy(self, password: str) -> bool:
        if self._dummy_hash is None:
            self._dummy_hash = self._context.hash("doctorconnect-timing-guard")
        self._context.verify(password, self._dummy_hash)
        return False


class TokenService:
    """Issues and decodes HS256 JWTs identifying a doctor."""

    def __init__(self, secret_key: str, algorithm: str = "HS256", expire_minutes: int = 24 * 60) -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: SecuritySettings) -> "TokenService":
        if not settings.secret_key:
            raise ConfigurationError("SECURITY_SECRET_KEY is not configured")
        return cls(settings.secret_key, settings.algorithm, settings.access_token_expire_minutes)

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds."""
        return self._expire_minutes * 60

    def create(self, doctor: Doctor, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {
            "sub": doctor.id,
            "email": doctor.email,
            "role": doctor.role.value,
            "iat": issued_at,
            "exp": issued_at + timedelta(minutes=self._expire_minutes),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError() from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e
        return payload
