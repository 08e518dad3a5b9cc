"""
Hospital catalogue endpoints. Public, read-only.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, Request

from ...application.dto.hospital_dto import HospitalFilters
from ...application.use_cases.hospital_queries import (
    GetHospitalStatsUseCase,
    GetHospitalUseCase,
    ListHospitalsUseCase,
    ListSpecializationsUseCase,
)
from ...domain.enums import Department, HospitalType
from ..deps import HospitalRepositoryDep, PageRequestDep
from ..schemas.common import ERROR_RESPONSES, ApiResponse, PaginatedData
from ..schemas.hospitals import HospitalOut, HospitalStatsOut
from ..utils.responses import ok

router = APIRouter(prefix="/hospitals", tags=["hospitals"])


@router.get(
    "",
    response_model=ApiResponse[PaginatedData[HospitalOut]],
    summary="Search hospitals",
    responses={400: ERROR_RESPONSES[400]},
)
async def list_hospitals(
    request: Request,
    hospitals: HospitalRepositoryDep,
    page: PageRequestDep,
    type: Optional[HospitalType] = Query(None, description="government or private"),
    specialization: Optional[Department] = Query(None, description="Department the hospital must offer"),
    city: Optional[str] = Query(None),
    state: Optional[str] = Query(None),
    search: Optional[str] = Query(None, description="Matches name, city, state or address"),
):
    filters = HospitalFilters(type=type, specialization=specialization, city=city, state=state, search=search)
    result = await ListHospitalsUseCase(hospitals).execute(filters, page)
    data = PaginatedData[HospitalOut].from_page(result, [HospitalOut.from_domain(h) for h in result.items])
    return ok(request, data=data, message="OK")


@router.get("/specializations", response_model=ApiResponse[List[Department]], summary="Departments on offer")
async def list_specializations(request: Request, hospitals: HospitalRepositoryDep):
    return ok(request, data=await ListSpecializationsUseCase(hospitals).execute(), message="OK")


@router.get("/stats", response_model=ApiResponse[HospitalStatsOut], summary="Catalogue statistics")
async def hospital_stats(request: Request, hospitals: HospitalRepositoryDep):
    stats = await GetHospitalStatsUseCase(hospitals).execute()
    return ok(request, data=HospitalStatsOut.from_dto(stats), message="OK")


@router.get(
    "/{hospital_id}",
    response_model=ApiResponse[HospitalOut],
    summary="Hospital details",
    responses={404: ERROR_RESPONSES[404]},
)
async def get_hospital(request: Request, hospital_id: str, hospitals: HospitalRepositoryDep):
    hospital = await GetHospitalUseCase(hospitals).execute(hospital_id)
    return ok(request, data=HospitalOut.from_domain(hospital), message="OK")
