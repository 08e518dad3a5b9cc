"""Login Doctor use case."""

import logging

from ...core.security import PasswordHasher, TokenService
from ...core.utils.async_utils import run_blocking
from ...domain.errors import InvalidCredentialsError
from ..dto.auth_dto import AuthResult, LoginRequest
from ..ports.repositories.doctor_repo import DoctorRepository

logger = logging.getLogger(__name__)


class LoginDoctorUseCase:
    """Exchanges email and password for an access token.

    Unknown email and wrong password fail identically, including timing.
    """

    def __init__(
        self, doctor_repository: DoctorRepository, password_hasher: PasswordHasher, token_service: TokenService
    ):
        self._doctor_repository = doctor_repository
        self._password_hasher = password_hasher
        self._token_service = token_service

    async def execute(self, request: LoginRequest) -> AuthResult:
        doctor = await self._doctor_repository.find_by_email(request.email.strip().lower())

        if doctor is None or not doctor.password_hash:
            await run_blocking(self._password_hasher.verify_dummy, request.password)
            raise InvalidCredentialsError()

        if not await run_blocking(self._password_hasher.verify, request.password, doctor.password_hash):
            logger.info("Failed login for doctor %s", doctor.id)
            raise InvalidCredentialsError()

        logger.info("Doctor %s logged in", doctor.id)
        return AuthResult(
            doctor=doctor.without_password(),
            token=self._token_service.create(doctor),
            expires_in=self._token_service.expires_in,
        )
