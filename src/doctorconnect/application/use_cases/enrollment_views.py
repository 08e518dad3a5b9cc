"""Joins enrollments with the hospital and doctor records they reference."""

from typing import List, Optional, Sequence

from ...domain.entities.enrollment import Enrollment
from ..dto.enrollment_dto import EnrollmentView
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.repositories.hospital_repo import HospitalRepository


async def build_enrollment_views(
    enrollments: Sequence[Enrollment],
    hospital_repository: HospitalRepository,
    doctor_repository: Optional[DoctorRepository] = None,
) -> List[EnrollmentView]:
    """One batched lookup per referenced collection."""
    hospitals = await hospital_repository.find_many({e.hospital_id for e in enrollments})
    doctors = {}
    if doctor_repository is not None:
        doctors = await doctor_repository.find_many({e.doctor_id for e in enrollments})
    return [
        EnrollmentView(
            enrollment=e,
            hospital=hospitals.get(e.hospital_id),
            doctor=doctors[e.doctor_id].without_password() if e.doctor_id in doctors else None,
        )
        for e in enrollments
    ]


async def build_enrollment_view(
    enrollment: Enrollment,
    hospital_repository: HospitalRepository,
    doctor_repository: Optional[DoctorRepository] = None,
) -> EnrollmentView:
    views = await build_enrollment_views([enrollment], hospital_repository, doctor_repository)
    return views[0]
