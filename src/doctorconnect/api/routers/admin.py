"""
Administrator endpoints: enrollment review and certificate verification.
"""

from typing import Optional

from fastapi import APIRouter, Query, Request

from ...application.use_cases.approve_enrollment import ApproveEnrollmentUseCase
from ...application.use_cases.certificate_queries import VerifyCertificateUseCase
from ...application.use_cases.complete_enrollment import CompleteEnrollmentUseCase
from ...application.use_cases.enrollment_queries import ListEnrollmentsUseCase
from ...application.use_cases.reject_enrollment import RejectEnrollmentUseCase
from ...domain.enums import EnrollmentStatus
from ..deps import (
    CertificateRepositoryDep,
    CurrentAdmin,
    DoctorRepositoryDep,
    EnrollmentRepositoryDep,
    HospitalRepositoryDep,
    IssueCertificateDep,
    PageRequestDep,
)
from ..schemas.certificates import CertificateOut
from ..schemas.common import ERROR_RESPONSES, ApiResponse, PaginatedData
from ..schemas.enrollments import ApproveEnrollmentData, EnrollmentOut, RejectEnrollmentRequest
from ..utils.responses import ok

router = APIRouter(prefix="/admin", tags=["admin"], responses=ERROR_RESPONSES)


@router.get(
    "/enrollments/pending",
    response_model=ApiResponse[PaginatedData[EnrollmentOut]],
    summary="Enrollments awaiting review",
)
async def pending_enrollments(
    request: Request,
    admin: CurrentAdmin,
    page: PageRequestDep,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
    doctors: DoctorRepositoryDep,
):
    result = await ListEnrollmentsUseCase(enrollments, hospitals, doctors).for_admin(
        admin, page, EnrollmentStatus.PENDING
    )
    data = PaginatedData[EnrollmentOut].from_page(result, [EnrollmentOut.from_view(v) for v in result.items])
    return ok(request, data=data, message="OK")


@router.get(
    "/enrollments",
    response_model=ApiResponse[PaginatedData[EnrollmentOut]],
    summary="All enrollments, optionally by status",
)
async def all_enrollments(
    request: Request,
    admin: CurrentAdmin,
    page: PageRequestDep,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
    doctors: DoctorRepositoryDep,
    status_filter: Optional[EnrollmentStatus] = Query(None, alias="status"),
):
    result = await ListEnrollmentsUseCase(enrollments, hospitals, doctors).for_admin(admin, page, status_filter)
    data = PaginatedData[EnrollmentOut].from_page(result, [EnrollmentOut.from_view(v) for v in result.items])
    return ok(request, data=data, message="OK")


@router.put(
    "/enrollments/{enrollment_id}/approve",
    response_model=ApiResponse[ApproveEnrollmentData],
    summary="Approve a pending enrollment and issue its certificate",
)
async def approve_enrollment(
    request: Request,
    enrollment_id: str,
    admin: CurrentAdmin,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
    doctors: DoctorRepositoryDep,
    issue: IssueCertificateDep,
):
    use_case = ApproveEnrollmentUseCase(enrollments, hospitals, doctors, issue)
    result = await use_case.execute(enrollment_id, admin)
    message = "Enrollment approved successfully"
    if result.certificate_error:
        message = "Enrollment approved, but certificate generation failed"
    return ok(request, data=ApproveEnrollmentData.from_result(result), message=message)


@router.put(
    "/enrollments/{enrollment_id}/reject",
    response_model=ApiResponse[EnrollmentOut],
    summary="Reject a pending enrollment",
)
async def reject_enrollment(
    request: Request,
    enrollment_id: str,
    payload: RejectEnrollmentRequest,
    admin: CurrentAdmin,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
    doctors: DoctorRepositoryDep,
):
    use_case = RejectEnrollmentUseCase(enrollments, hospitals, doctors)
    view = await use_case.execute(enrollment_id, admin, payload.rejection_reason)
    return ok(request, data=EnrollmentOut.from_view(view), message="Enrollment rejected successfully")


@router.put(
    "/enrollments/{enrollment_id}/complete",
    response_model=ApiResponse[EnrollmentOut],
    summary="Mark an approved enrollment as completed",
)
async def complete_enrollment(
    request: Request,
    enrollment_id: str,
    admin: CurrentAdmin,
    enrollments: EnrollmentRepositoryDep,
    hospitals: HospitalRepositoryDep,
    doctors: DoctorRepositoryDep,
):
    view = await CompleteEnrollmentUseCase(enrollments, hospitals, doctors).execute(enrollment_id, admin)
    return ok(request, data=EnrollmentOut.from_view(view), message="Enrollment completed successfully")


@router.put(
    "/certificates/{certificate_id}/verify",
    response_model=ApiResponse[CertificateOut],
    summary="Mark a certificate as verified",
)
async def verify_certificate(
    request: Request,
    certificate_id: str,
    admin: CurrentAdmin,
    certificates: CertificateRepositoryDep,
):
    certificate = await VerifyCertificateUseCase(certificates).execute(certificate_id, admin)
    return ok(request, data=CertificateOut.from_domain(certificate), message="Certificate verified successfully")
