"""
Doctor-facing enrollment endpoints.
"""

from typing import List, Optional

from fastapi import APIRouter, Query, Request, status

from ...application.dto.enrollment_dto import CreateEnrollmentRequest as CreateEnrollmentDTO
from ...application.use_cases.cancel_enrollment import CancelEnrollmentUseCase, UpdateEnrollmentNotesUseCase
from ...application.use_cases.create_enrollment import CreateEnrollmentUseCase
from ...application.use_cases.enrollment_queries import (
    GetActiveEnrollmentsUseCase,
    GetEnrollmentStatsUseCase,
    GetEnrollmentUseCase,
    ListEnrollmentsUseCase,
)
from ...domain.enums import EnrollmentStatus
from ..deps import (
    CurrentDoctor,
    DoctorRepositoryDep,
    EnrollmentRepositoryDep,
    HospitalRepositoryDep,
    PageRequestDep,
)
from ..schemas.common import ERROR_RESPONSES, ApiResponse, PaginatedData
from ..schemas.enrollments import (
    CreateEnrollmentRequest,
    EnrollmentOut,
    EnrollmentStatsOut,
    UpdateEnrollmentRequest,
)
from ..utils.responses import ok

router = APIRouter(prefix="/enrollments", tags=["enrollments"], responses=ERROR_RESPONSES)


@router.post(
    "",
    response_model=ApiResponse[EnrollmentOut],
    status_code=status.HTTP_201_CREATED,
    summary="Request a service enrollment",
)
async def create_enrollment(
    request: Request,
    payload: CreateEnrollmentRequest,
    doctor: CurrentDoctor,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
):
    view = await CreateEnrollmentUseCase(enrollments, hospitals).execute(
        doctor,
        CreateEnrollmentDTO(
            hospital_id=payload.hospital_id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            service_hours=payload.service_hours,
            department=payload.department,
            notes=payload.notes,
        ),
    )
    return ok(request, data=EnrollmentOut.from_view(view), message="Enrollment request submitted successfully")


@router.get("", response_model=ApiResponse[PaginatedData[EnrollmentOut]], summary="My enrollments")
async def list_my_enrollments(
    request: Request,
    doctor: CurrentDoctor,
    page: PageRequestDep,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
    doctors: DoctorRepositoryDep,
    status_filter: Optional[EnrollmentStatus] = Query(None, alias="status"),
):
    result = await ListEnrollmentsUseCase(enrollments, hospitals, doctors).for_doctor(doctor, page, status_filter)
    data = PaginatedData[EnrollmentOut].from_page(result, [EnrollmentOut.from_view(v) for v in result.items])
    return ok(request, data=data, message="OK")


@router.get("/stats", response_model=ApiResponse[EnrollmentStatsOut], summary="My enrollment statistics")
async def enrollment_stats(request: Request, doctor: CurrentDoctor, enrollments: EnrollmentRepositoryDep):
    stats = await GetEnrollmentStatsUseCase(enrollments).execute(doctor)
    return ok(request, data=EnrollmentStatsOut.from_dto(stats), message="OK")


@router.get("/active", response_model=ApiResponse[List[EnrollmentOut]], summary="Enrollments in service today")
async def active_enrollments(
    request: Request,
    doctor: CurrentDoctor,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
):
    views = await GetActiveEnrollmentsUseCase(enrollments, hospitals).execute(doctor)
    return ok(request, data=[EnrollmentOut.from_view(v) for v in views], message="OK")


@router.get("/{enrollment_id}", response_model=ApiResponse[EnrollmentOut], summary="One of my enrollments")
async def get_enrollment(
    request: Request,
    enrollment_id: str,
    doctor: CurrentDoctor,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
):
    view = await GetEnrollmentUseCase(enrollments, hospitals).execute(enrollment_id, doctor)
    return ok(request, data=EnrollmentOut.from_view(view), message="OK")


@router.put("/{enrollment_id}", response_model=ApiResponse[EnrollmentOut], summary="Edit notes on a pending enrollment")
async def update_enrollment(
    request: Request,
    enrollment_id: str,
    payload: UpdateEnrollmentRequest,
    doctor: CurrentDoctor,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
):
    view = await UpdateEnrollmentNotesUseCase(enrollments, hospitals).execute(enrollment_id, doctor, payload.notes)
    return ok(request, data=EnrollmentOut.from_view(view), message="Enrollment updated successfully")


@router.delete("/{enrollment_id}", response_model=ApiResponse[EnrollmentOut], summary="Cancel a pending enrollment")
async def cancel_enrollment(
    request: Request,
    enrollment_id: str,
    doctor: CurrentDoctor,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
):
    view = await CancelEnrollmentUseCase(enrollments, hospitals).execute(enrollment_id, doctor)
    return ok(request, data=EnrollmentOut.from_view(view), message="Enrollment cancelled successfully")
