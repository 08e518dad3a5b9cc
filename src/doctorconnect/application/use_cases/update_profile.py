"""Profile maintenance use cases: edit profile fields and change password."""

import logging

from ...core.security import PasswordHasher
from ...core.utils.async_utils import run_blocking
from ...core.utils.datetime_utils import utc_now
from ...domain.entities.doctor import Doctor
from ...domain.errors import DoctorNotFoundError, ValidationError
from ..dto.auth_dto import ChangePasswordRequest, UpdateProfileRequest
from ..ports.repositories.doctor_repo import DoctorRepository
from .register_doctor import check_password_strength

logger = logging.getLogger(__name__)


class UpdateProfileUseCase:
    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self, doctor_id: str, request: UpdateProfileRequest) -> Doctor:
        doctor = await self._doctor_repository.find_by_id(doctor_id)
        if doctor is None:
            raise DoctorNotFoundError(doctor_id)

        doctor.update_profile(
            utc_now(),
            name=request.name,
            phone=request.phone,
            address=request.address,
            city=request.city,
            state=request.state,
        )
        doctor = await self._doctor_repository.save(doctor)
        logger.info("Updated profile for doctor %s", doctor_id)
        return doctor.without_password()


class ChangePasswordUseCase:
    def __init__(self, doctor_repository: DoctorRepository, password_hasher: PasswordHasher):
        self._doctor_repository = doctor_repository
        self._password_hasher = password_hasher

    async def execute(self, doctor_id: str, request: ChangePasswordRequest) -> None:
        doctor = await self._doctor_repository.find_by_id(doctor_id)
        if doctor is None:
            raise DoctorNotFoundError(doctor_id)

        if not doctor.password_hash or not await run_blocking(
            self._password_hasher.verify, request.current_password, doctor.password_hash
        ):
            raise ValidationError(
                "Current password is incorrect",
                "INVALID_CURRENT_PASSWORD",
                {"field": "current_password"},
            )
        check_password_strength(request.new_password)

        new_hash = await run_blocking(self._password_hasher.hash, request.new_password)
        doctor.set_password_hash(new_hash, utc_now())
        await self._doctor_repository.save(doctor)
        logger.info("Password changed for doctor %s", doctor_id)
