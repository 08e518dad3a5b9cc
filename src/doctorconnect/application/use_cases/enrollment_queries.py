"""Enrollment read-side use cases."""

from typing import List, Optional

from ...core.auth import require_admin
from ...core.utils.datetime_utils import utc_now
from ...domain.entities.doctor import Doctor
from ...domain.enums import EnrollmentStatus
from ..dto.enrollment_dto import EnrollmentStats, EnrollmentView
from ..dto.pagination import Page, PageRequest
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.repositories.enrollment_repo import EnrollmentRepository
from ..ports.repositories.hospital_repo import HospitalRepository
from .cancel_enrollment import find_owned_enrollment
from .enrollment_views import build_enrollment_view, build_enrollment_views


class ListEnrollmentsUseCase:
    """Paged listings: a doctor's own, or (admins) everyone's."""

    def __init__(
        self,
        enrollment_repository: EnrollmentRepository,
        hospital_repository: HospitalRepository,
        doctor_repository: DoctorRepository,
    ):
        self._enrollment_repository = enrollment_repository
        self._hospital_repository = hospital_repository
        self._doctor_repository = doctor_repository

    async def for_doctor(
        self, doctor: Doctor, page: PageRequest, status: Optional[EnrollmentStatus] = None
    ) -> Page[EnrollmentView]:
        items, total = await self._enrollment_repository.find_page(
            doctor_id=doctor.id, status=status, skip=page.skip, limit=page.limit
        )
        views = await build_enrollment_views(items, self._hospital_repository)
        return Page.of(views, total, page)

    async def for_admin(
        self, admin: Doctor, page: PageRequest, status: Optional[EnrollmentStatus] = None
    ) -> Page[EnrollmentView]:
        require_admin(admin)
        items, total = await self._enrollment_repository.find_page(
            status=status, skip=page.skip, limit=page.limit
        )
        views = await build_enrollment_views(items, self._hospital_repository, self._doctor_repository)
        return Page.of(views, total, page)


class GetEnrollmentUseCase:
    def __init__(self, enrollment_repository: EnrollmentRepository, hospital_repository: HospitalRepository):
        self._enrollment_repository = enrollment_repository
        self._hospital_repository = hospital_repository

    async def execute(self, enrollment_id: str, doctor: Doctor) -> EnrollmentView:
        enrollment = await find_owned_enrollment(self._enrollment_repository, enrollment_id, doctor)
        return await build_enrollment_view(enrollment, self._hospital_repository)


class GetActiveEnrollmentsUseCase:
    def __init__(self, enrollment_repository: EnrollmentRepository, hospital_repository: HospitalRepository):
        self._enrollment_repository = enrollment_repository
        self._hospital_repository = hospital_repository

    async def execute(self, doctor: Doctor) -> List[EnrollmentView]:
        items = await self._enrollment_repository.find_active(doctor.id, utc_now())
        return await build_enrollment_views(items, self._hospital_repository)


class GetEnrollmentStatsUseCase:
    def __init__(self, enrollment_repository: EnrollmentRepository):
        self._enrollment_repository = enrollment_repository

    async def execute(self, doctor: Doctor) -> EnrollmentStats:
        counts = await self._enrollment_repository.count_by_status(doctor.id)
        hours = await self._enrollment_repository.sum_completed_hours(doctor.id)
        return EnrollmentStats(counts=counts, total_hours_completed=hours)
