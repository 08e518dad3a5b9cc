"""Doctor-side enrollment changes: cancel and edit notes.

Both act only on the caller's own enrollments; anybody else's are
reported as not found.
"""

import logging

from ...core.utils.datetime_utils import utc_now
from ...domain.entities.doctor import Doctor
from ...domain.entities.enrollment import Enrollment
from ...domain.errors import EnrollmentNotFoundError, InvalidTransitionError
from ..dto.enrollment_dto import EnrollmentView
from ..ports.repositories.enrollment_repo import EnrollmentRepository
from ..ports.repositories.hospital_repo import HospitalRepository
from .enrollment_views import build_enrollment_view

logger = logging.getLogger(__name__)


async def find_owned_enrollment(
    repository: EnrollmentRepository, enrollment_id: str, doctor: Doctor
) -> Enrollment:
    enrollment = await repository.find_by_id(enrollment_id)
    if enrollment is None or not enrollment.is_owned_by(doctor.id):
        raise EnrollmentNotFoundError(enrollment_id)
    return enrollment


class CancelEnrollmentUseCase:
    def __init__(self, enrollment_repository: EnrollmentRepository, hospital_repository: HospitalRepository):
        self._enrollment_repository = enrollment_repository
        self._hospital_repository = hospital_repository

    async def execute(self, enrollment_id: str, doctor: Doctor) -> EnrollmentView:
        enrollment = await find_owned_enrollment(self._enrollment_repository, enrollment_id, doctor)

        expected = enrollment.cancel(utc_now())
        if not await self._enrollment_repository.update_if_status(enrollment, expected):
            raise InvalidTransitionError(
                "Only pending enrollments can be cancelled",
                details={"enrollment_id": enrollment_id, "reason": "concurrent_update"},
            )
        logger.info("Enrollment %s cancelled by doctor %s", enrollment_id, doctor.id)
        return await build_enrollment_view(enrollment, self._hospital_repository)


class UpdateEnrollmentNotesUseCase:
    def __init__(self, enrollment_repository: EnrollmentRepository, hospital_repository: HospitalRepository):
        self._enrollment_repository = enrollment_repository
        self._hospital_repository = hospital_repository

    async def execute(self, enrollment_id: str, doctor: Doctor, notes: str) -> EnrollmentView:
        enrollment = await find_owned_enrollment(self._enrollment_repository, enrollment_id, doctor)

        expected = enrollment.update_notes(notes, utc_now())
        if not await self._enrollment_repository.update_if_status(enrollment, expected):
            raise InvalidTransitionError(
                "Only pending enrollments can be updated",
                details={"enrollment_id": enrollment_id, "reason": "concurrent_update"},
            )
        return await build_enrollment_view(enrollment, self._hospital_repository)
