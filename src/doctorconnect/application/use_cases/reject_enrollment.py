"""Reject Enrollment use case."""

import logging

from ...core.auth import require_admin
from ...core.utils.datetime_utils import utc_now
from ...domain.entities.doctor import Doctor
from ...domain.errors import EnrollmentNotFoundError, InvalidTransitionError
from ..dto.enrollment_dto import EnrollmentView
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.repositories.enrollment_repo import EnrollmentRepository
from ..ports.repositories.hospital_repo import HospitalRepository
from .enrollment_views import build_enrollment_view

logger = logging.getLogger(__name__)


class RejectEnrollmentUseCase:
    def __init__(
        self,
        enrollment_repository: EnrollmentRepository,
        hospital_repository: HospitalRepository,
        doctor_repository: DoctorRepository,
    ):
        self._enrollment_repository = enrollment_repository
        self._hospital_repository = hospital_repository
        self._doctor_repository = doctor_repository

    async def execute(self, enrollment_id: str, admin: Doctor, reason: str) -> EnrollmentView:
        require_admin(admin)

        enrollment = await self._enrollment_repository.find_by_id(enrollment_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)

        expected = enrollment.reject(reason, utc_now())
        if not await self._enrollment_repository.update_if_status(enrollment, expected):
            raise InvalidTransitionError(
                "Only pending enrollments can be rejected",
                details={"enrollment_id": enrollment_id, "reason": "concurrent_update"},
            )
        logger.info("Enrollment %s rejected by admin %s", enrollment_id, admin.id)
        return await build_enrollment_view(enrollment, self._hospital_repository, self._doctor_repository)
