"""
Doctor directory endpoints. Readable by any signed-in doctor.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, Request

from ...application.dto.doctor_dto import DoctorFilters
from ...application.dto.pagination import PageRequest
from ...application.ports.repositories import DoctorRepository
from ...application.use_cases.doctor_directory import (
    GetDoctorProfileUseCase,
    GetDoctorStatsUseCase,
    ListDoctorSpecializationsUseCase,
    ListDoctorsUseCase,
)
from ...domain.enums import Specialization
from ..deps import CurrentDoctor, DoctorRepositoryDep, PageRequestDep, SettingsDep
from ..schemas.common import ERROR_RESPONSES, ApiResponse, PaginatedData
from ..schemas.doctors import DoctorProfileOut, DoctorStatsOut
from ..utils.responses import ok

router = APIRouter(prefix="/doctors", tags=["doctors"], responses=ERROR_RESPONSES)

SHORTLIST_LIMIT = 10


async def _shortlist(
    doctors: DoctorRepository, filters: DoctorFilters, limit: int, max_limit: int
) -> List[DoctorProfileOut]:
    page = PageRequest(page=1, limit=limit, max_limit=max_limit)
    result = await ListDoctorsUseCase(doctors).execute(filters, page)
    return [DoctorProfileOut.from_domain(d) for d in result.items]


@router.get("", response_model=ApiResponse[PaginatedData[DoctorProfileOut]], summary="Browse the doctor directory")
async def list_doctors(
    request: Request,
    _: CurrentDoctor,
    doctors: DoctorRepositoryDep,
    page: PageRequestDep,
    specialization: Optional[Specialization] = Query(None),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches name, specialization, city or state"),
):
    filters = DoctorFilters(specialization=specialization, city=city, state=state, search=search)
    result = await ListDoctorsUseCase(doctors).execute(filters, page)
    data = PaginatedData[DoctorProfileOut].from_page(result, [DoctorProfileOut.from_domain(d) for d in result.items])
    return ok(request, data=data, message="OK")


@router.get("/specializations", response_model=ApiResponse[List[Specialization]], summary="Specializations on record")
async def list_specializations(request: Request, _: CurrentDoctor, doctors: DoctorRepositoryDep):
    return ok(request, data=await ListDoctorSpecializationsUseCase(doctors).execute(), message="OK")


@router.get("/stats", response_model=ApiResponse[DoctorStatsOut], summary="Directory statistics")
async def doctor_stats(request: Request, _: CurrentDoctor, doctors: DoctorRepositoryDep):
    stats = await GetDoctorStatsUseCase(doctors).execute()
    return ok(request, data=DoctorStatsOut.from_dto(stats), message="OK")


@router.get(
    "/specialization/{specialization}",
    response_model=ApiResponse[List[DoctorProfileOut]],
    summary="Doctors with a specialization",
)
async def doctors_by_specialization(
    request: Request,
    specialization: Specialization,
    _: CurrentDoctor,
    doctors: DoctorRepositoryDep,
    settings: SettingsDep,
    limit: int = Query(SHORTLIST_LIMIT),
):
    data = await _shortlist(
        doctors, DoctorFilters(specialization=specialization), limit, settings.pagination.max_limit
    )
    return ok(request, data=data, message="OK")


@router.get("/location/{city}", response_model=ApiResponse[List[DoctorProfileOut]], summary="Doctors in a city")
async def doctors_by_city(
    request: Request,
    city: str,
    _: CurrentDoctor,
    doctors: DoctorRepositoryDep,
    settings: SettingsDep,
    limit: int = Query(SHORTLIST_LIMIT),
):
    data = await _shortlist(doctors, DoctorFilters(city=city), limit, settings.pagination.max_limit)
    return ok(request, data=data, message="OK")


@router.get("/search/{query}", response_model=ApiResponse[List[DoctorProfileOut]], summary="Free-text doctor search")
async def search_doctors(
    request: Request,
    query: str,
    _: CurrentDoctor,
    doctors: DoctorRepositoryDep,
    settings: SettingsDep,
    limit: int = Query(SHORTLIST_LIMIT),
):
    data = await _shortlist(doctors, DoctorFilters(search=query), limit, settings.pagination.max_limit)
    return ok(request, data=data, message="OK")


@router.get("/{doctor_id}", response_model=ApiResponse[DoctorProfileOut], summary="A doctor's directory entry")
async def get_doctor(request: Request, doctor_id: str, _: CurrentDoctor, doctors: DoctorRepositoryDep):
    doctor = await GetDoctorProfileUseCase(doctors).execute(doctor_id)
    return ok(request, data=DoctorProfileOut.from_domain(doctor), message="OK")
