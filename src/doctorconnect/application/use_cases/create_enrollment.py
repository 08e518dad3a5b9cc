"""Create Enrollment use case."""

import logging

from ...core.utils.datetime_utils import to_naive_utc, utc_now
from ...domain.entities.doctor import Doctor
from ...domain.entities.enrollment import Enrollment
from ...domain.enums import EnrollmentStatus
from ...domain.errors import (
    DepartmentNotAvailableError,
    HospitalNotFoundError,
    OverlappingEnrollmentError,
)
from ..dto.enrollment_dto import CreateEnrollmentRequest, EnrollmentView
from ..ports.repositories.enrollment_repo import EnrollmentRepository
from ..ports.repositories.hospital_repo import HospitalRepository

logger = logging.getLogger(__name__)


class CreateEnrollmentUseCase:
    """Files a pending enrollment request for the acting doctor."""

    def __init__(self, enrollment_repository: EnrollmentRepository, hospital_repository: HospitalRepository):
        self._enrollment_repository = enrollment_repository
        self._hospital_repository = hospital_repository

    async def execute(self, doctor: Doctor, request: CreateEnrollmentRequest) -> EnrollmentView:
        start_date = to_naive_utc(request.start_date)
        end_date = to_naive_utc(request.end_date)

        # Field-level rules first so bad input fails before any lookup
        enrollment = Enrollment.request(
            doctor_id=doctor.id,
            hospital_id=request.hospital_id,
            start_date=start_date,
            end_date=end_date,
            service_hours=request.service_hours,
            department=request.department,
            notes=request.notes,
            now=utc_now(),
        )

        hospital = await self._hospital_repository.find_by_id(request.hospital_id)
        if hospital is None:
            raise HospitalNotFoundError(request.hospital_id)
        if not hospital.offers(request.department):
            raise DepartmentNotAvailableError(request.hospital_id, request.department.value)

        existing = await self._enrollment_repository.find_overlapping(
            doctor_id=doctor.id,
            hospital_id=request.hospital_id,
            start_date=start_date,
            end_date=end_date,
            statuses=EnrollmentStatus.blocking(),
        )
        if existing is not None:
            raise OverlappingEnrollmentError(existing.id)

        enrollment = await self._enrollment_repository.create(enrollment)
        logger.info(
            "Enrollment %s created for doctor %s at hospital %s",
            enrollment.id,
            doctor.id,
            hospital.id,
        )
        return EnrollmentView(enrollment=enrollment, hospital=hospital)
