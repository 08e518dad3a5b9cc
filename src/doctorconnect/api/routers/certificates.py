"""
Doctor-facing certificate endpoints.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import Response

from ...application.use_cases.certificate_queries import (
    DownloadCertificateUseCase,
    GetCertificateStatsUseCase,
    GetCertificateUseCase,
    ListCertificatesUseCase,
)
from ...application.use_cases.generate_certificate import GenerateCertificateUseCase
from ..deps import (
    ArtifactWriterDep,
    CertificateRepositoryDep,
    CertificateStorageDep,
    CurrentDoctor,
    DoctorRepositoryDep,
    EnrollmentRepositoryDep,
    HospitalRepositoryDep,
    IssueCertificateDep,
    PageRequestDep,
)
from ..schemas.certificates import CertificateOut, CertificateStatsOut
from ..schemas.common import ERROR_RESPONSES, ApiResponse, ErrorResponse, PaginatedData
from ..utils.responses import ok

router = APIRouter(prefix="/certificates", tags=["certificates"], responses=ERROR_RESPONSES)


@router.get("", response_model=ApiResponse[PaginatedData[CertificateOut]], summary="My certificates")
async def list_certificates(
    request: Request,
    doctor: CurrentDoctor,
    page: PageRequestDep,
    certificates: CertificateRepositoryDep,
    hospitals: HospitalRepositoryDep,
):
    result = await ListCertificatesUseCase(certificates, hospitals).execute(doctor, page)
    data = PaginatedData[CertificateOut].from_page(result, [CertificateOut.from_view(v) for v in result.items])
    return ok(request, data=data, message="OK")


@router.get("/stats", response_model=ApiResponse[CertificateStatsOut], summary="My certificate statistics")
async def certificate_stats(request: Request, doctor: CurrentDoctor, certificates: CertificateRepositoryDep):
    stats = await GetCertificateStatsUseCase(certificates).execute(doctor)
    return ok(request, data=CertificateStatsOut.from_dto(stats), message="OK")


@router.get("/{certificate_id}", response_model=ApiResponse[CertificateOut], summary="One of my certificates")
async def get_certificate(
    request: Request,
    certificate_id: str,
    doctor: CurrentDoctor,
    certificates: CertificateRepositoryDep,
    hospitals: HospitalRepositoryDep,
    enrollments: EnrollmentRepositoryDep,
):
    view = await GetCertificateUseCase(certificates, hospitals, enrollments).execute(certificate_id, doctor)
    return ok(request, data=CertificateOut.from_view(view), message="OK")


@router.get(
    "/{certificate_id}/download",
    summary="Download the certificate PDF",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}, "description": "Certificate PDF"}},
)
async def download_certificate(
    certificate_id: str,
    doctor: CurrentDoctor,
    certificates: CertificateRepositoryDep,
    doctors: DoctorRepositoryDep,
    hospitals: HospitalRepositoryDep,
    storage: CertificateStorageDep,
    writer: ArtifactWriterDep,
):
    use_case = DownloadCertificateUseCase(certificates, doctors, hospitals, storage, writer)
    download = await use_case.execute(certificate_id, doctor)
    return Response(
        content=download.content,
        media_type=download.media_type,
        headers={"Content-Disposition": f'attachment; filename="{download.filename}"'},
    )


@router.post(
    "/generate/{enrollment_id}",
    response_model=ApiResponse[CertificateOut],
    status_code=status.HTTP_201_CREATED,
    summary="Generate the certificate for a completed enrollment",
    responses={409: {"model": ErrorResponse, "description": "Certificate already exists"}},
)
async def generate_certificate(
    request: Request,
    enrollment_id: str,
    doctor: CurrentDoctor,
    enrollments: EnrollmentRepositoryDep,
    issue: IssueCertificateDep,
):
    certificate = await GenerateCertificateUseCase(enrollments, issue).execute(enrollment_id, doctor)
    return ok(request, data=CertificateOut.from_domain(certificate), message="Certificate generated successfully")
