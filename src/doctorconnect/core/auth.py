"""
Authentication gate: resolves the acting doctor from a bearer token and
performs the single admin capability check used by protected operations.
"""

import logging
from typing import Optional

from ..application.ports.repositories.doctor_repo import DoctorRepository
from ..domain.entities import Doctor
from ..domain.errors import AuthorizationError, InvalidTokenError, MissingTokenError
from .security import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Authenticates bearer tokens against the doctor record store."""

    def __init__(self, tokens: TokenService, doctors: DoctorRepository) -> None:
        self._tokens = tokens
        self._doctors = doctors

    async def authenticate(self, token: Optional[str]) -> Doctor:
        """Return the token's doctor with the password hash stripped.

        Raises MissingTokenError, ExpiredTokenError or InvalidTokenError.
        """
        if not token or not token.strip():
            raise MissingTokenError()

        payload = self._tokens.decode(token.strip())
        doctor_id = payload.get("sub")
        if not isinstance(doctor_id, str) or not doctor_id:
            raise InvalidTokenError()

        doctor = await self._doctors.find_by_id(doctor_id)
        if doctor is None:
            logger.warning("Token presented for missing doctor %s", doctor_id)
            raise InvalidTokenError("Token is not valid - doctor not found", http_status=401)
        return doctor.without_password()


def require_admin(doctor: Doctor) -> Doctor:
    """Raise AuthorizationError unless the doctor holds the admin role."""
    if not doctor.is_admin:
        raise AuthorizationError(details={"role": doctor.role.value})
    return doctor
