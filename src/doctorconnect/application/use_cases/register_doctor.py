"""Register Doctor use case."""

import logging

from ...core.security import PasswordHasher, TokenService
from ...core.utils.async_utils import run_blocking
from ...domain.entities.doctor import Doctor
from ...domain.errors import DuplicateDoctorError, ValidationError
from ..dto.auth_dto import AuthResult, RegisterDoctorRequest
from ..ports.repositories.doctor_repo import DoctorRepository

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def check_password_strength(password: str) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            details={"field": "password"},
        )


class RegisterDoctorUseCase:
    """Creates a doctor account and signs them in."""

    def __init__(
        self, doctor_repository: DoctorRepository, password_hasher: PasswordHasher, token_service: TokenService
    ):
        self._doctor_repository = doctor_repository
        self._password_hasher = password_hasher
        self._token_service = token_service

    async def execute(self, request: RegisterDoctorRequest) -> AuthResult:
        check_password_strength(request.password)

        email = request.email.strip().lower()
        if await self._doctor_repository.exists_by_email(email):
            raise DuplicateDoctorError("email")
        license_number = request.license_number.strip()
        if await self._doctor_repository.exists_by_license(license_number):
            raise DuplicateDoctorError("license_number")

        doctor = Doctor(
            name=request.name.strip(),
            email=email,
            password_hash=await run_blocking(self._password_hasher.hash, request.password),
            phone=request.phone.strip(),
            specialization=request.specialization,
            license_number=license_number,
            experience_years=request.experience_years,
            address=request.address.strip(),
            city=request.city.strip(),
            state=request.state.strip(),
        )
        doctor.validate()
        # The unique indexes still back this up if two registrations race
        doctor = await self._doctor_repository.create(doctor)
        logger.info("Registered doctor %s", doctor.id)

        return AuthResult(
            doctor=doctor.without_password(),
            token=self._token_service.create(doctor),
            expires_in=self._token_service.expires_in,
        )
