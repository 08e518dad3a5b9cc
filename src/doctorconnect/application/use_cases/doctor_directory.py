"""Doctor directory queries.

Directory entries are always handed out without the password hash, and
admin accounts are not part of the directory.
"""

from typing import List

from ...domain.entities.doctor import Doctor
from ...domain.enums import Specialization
from ...domain.errors import DoctorNotFoundError
from ..dto.doctor_dto import DoctorFilters, DoctorStats
from ..dto.pagination import Page, PageRequest
from ..ports.repositories.doctor_repo import DoctorRepository


class ListDoctorsUseCase:
    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self, filters: DoctorFilters, page: PageRequest) -> Page[Doctor]:
        items, total = await self._doctor_repository.search(filters, skip=page.skip, limit=page.limit)
        return Page.of([d.without_password() for d in items], total, page)


class GetDoctorProfileUseCase:
    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self, doctor_id: str) -> Doctor:
        doctor = await self._doctor_repository.find_by_id(doctor_id)
        if doctor is None or doctor.is_admin:
            raise DoctorNotFoundError(doctor_id)
        return doctor.without_password()


class ListDoctorSpecializationsUseCase:
    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self) -> List[Specialization]:
        return await self._doctor_repository.list_specializations()


class GetDoctorStatsUseCase:
    def __init__(self, doctor_repository: DoctorRepository):
        self._doctor_repository = doctor_repository

    async def execute(self) -> DoctorStats:
        return await self._doctor_repository.stats()
