"""Hospital catalogue queries."""

from typing import List

from ...domain.entities.hospital import Hospital
from ...domain.enums import Department
from ...domain.errors import HospitalNotFoundError
from ..dto.hospital_dto import HospitalFilters, HospitalStats
from ..dto.pagination import Page, PageRequest
from ..ports.repositories.hospital_repo import HospitalRepository


class ListHospitalsUseCase:
    def __init__(self, hospital_repository: HospitalRepository):
        self._hospital_repository = hospital_repository

    async def execute(self, filters: HospitalFilters, page: PageRequest) -> Page[Hospital]:
        items, total = await self._hospital_repository.search(filters, skip=page.skip, limit=page.limit)
        return Page.of(items, total, page)


class GetHospitalUseCase:
    def __init__(self, hospital_repository: HospitalRepository):
        self._hospital_repository = hospital_repository

    async def execute(self, hospital_id: str) -> Hospital:
        hospital = await self._hospital_repository.find_by_id(hospital_id)
        if hospital is None:
            raise HospitalNotFoundError(hospital_id)
        return hospital


class ListSpecializationsUseCase:
    def __init__(self, hospital_repository: HospitalRepository):
        self._hospital_repository = hospital_repository

    async def execute(self) -> List[Department]:
        return await self._hospital_repository.list_specializations()


class GetHospitalStatsUseCase:
    def __init__(self, hospital_repository: HospitalRepository):
        self._hospital_repository = hospital_repository

    async def execute(self) -> HospitalStats:
        return await self._hospital_repository.stats()
