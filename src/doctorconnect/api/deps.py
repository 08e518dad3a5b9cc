"""FastAPI dependency providers.

Everything resolves from the per-application container on
``request.app.state.container``.
"""

from typing import Annotated, Optional

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..application.dto.pagination import PageRequest
from ..application.ports.repositories import (
    CertificateRepository,
    DoctorRepository,
    EnrollmentRepository,
    HospitalRepository,
)
from ..application.ports.services import CertificateRenderer, CertificateStorage
from ..application.use_cases.issue_certificate import CertificateArtifactWriter, IssueCertificateUseCase
from ..core.auth import AuthService, require_admin
from ..core.config import Settings
from ..core.container import Container, ServiceNames
from ..core.security import PasswordHasher, TokenService
from ..domain.entities.doctor import Doctor

_bearer = HTTPBearer(auto_error=False, description="JWT issued by /api/auth/login")


def get_container(request: Request) -> Container:
    return request.app.state.container


ContainerDep = Annotated[Container, Depends(get_container)]


def get_settings_dep(container: ContainerDep) -> Settings:
    return container.get(ServiceNames.SETTINGS)


def get_doctor_repository(container: ContainerDep) -> DoctorRepository:
    return container.get(ServiceNames.DOCTOR_REPOSITORY)


def get_hospital_repository(container: ContainerDep) -> HospitalRepository:
    return container.get(ServiceNames.HOSPITAL_REPOSITORY)


def get_enrollment_repository(container: ContainerDep) -> EnrollmentRepository:
    return container.get(ServiceNames.ENROLLMENT_REPOSITORY)


def get_certificate_repository(container: ContainerDep) -> CertificateRepository:
    return container.get(ServiceNames.CERTIFICATE_REPOSITORY)


def get_certificate_storage(container: ContainerDep) -> CertificateStorage:
    return container.get(ServiceNames.CERTIFICATE_STORAGE)


def get_certificate_renderer(container: ContainerDep) -> CertificateRenderer:
    return container.get(ServiceNames.CERTIFICATE_RENDERER)


SettingsDep = Annotated[Settings, Depends(get_settings_dep)]
DoctorRepositoryDep = Annotated[DoctorRepository, Depends(get_doctor_repository)]
HospitalRepositoryDep = Annotated[HospitalRepository, Depends(get_hospital_repository)]
EnrollmentRepositoryDep = Annotated[EnrollmentRepository, Depends(get_enrollment_repository)]
CertificateRepositoryDep = Annotated[CertificateRepository, Depends(get_certificate_repository)]
CertificateStorageDep = Annotated[CertificateStorage, Depends(get_certificate_storage)]
CertificateRendererDep = Annotated[CertificateRenderer, Depends(get_certificate_renderer)]


# ---------------------------------------------------------------------------
# Authentication
# ---------------------------------------------------------------------------


async def get_current_doctor(
    container: ContainerDep,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(_bearer)],
) -> Doctor:
    auth_service: AuthService = container.get(ServiceNames.AUTH_SERVICE)
    return await auth_service.authenticate(credentials.credentials if credentials else None)


async def get_current_admin(doctor: Annotated[Doctor, Depends(get_current_doctor)]) -> Doctor:
    return require_admin(doctor)


CurrentDoctor = Annotated[Doctor, Depends(get_current_doctor)]
CurrentAdmin = Annotated[Doctor, Depends(get_current_admin)]


# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------


def get_page_request(
    settings: SettingsDep,
    page: int = Query(1, description="1-based page number"),
    limit: Optional[int] = Query(None, description="Page size"),
) -> PageRequest:
    return PageRequest(
        page=page,
        limit=limit if limit is not None else settings.pagination.default_limit,
        max_limit=settings.pagination.max_limit,
    )


PageRequestDep = Annotated[PageRequest, Depends(get_page_request)]


# ---------------------------------------------------------------------------
# Certificate issuance wiring
# ---------------------------------------------------------------------------


def get_artifact_writer(
    renderer: CertificateRendererDep, storage: CertificateStorageDep
) -> CertificateArtifactWriter:
    return CertificateArtifactWriter(renderer, storage)


ArtifactWriterDep = Annotated[CertificateArtifactWriter, Depends(get_artifact_writer)]


def get_issue_certificate_use_case(
    settings: SettingsDep,
    certificates: CertificateRepositoryDep,
    enrollments: EnrollmentRepositoryDep,
    doctors: DoctorRepositoryDep,
    hospitals: HospitalRepositoryDep,
    writer: ArtifactWriterDep,
) -> IssueCertificateUseCase:
    return IssueCertificateUseCase(
        certificates,
        enrollments,
        doctors,
        hospitals,
        writer,
        max_attempts=settings.certificates.number_max_attempts,
    )


IssueCertificateDep = Annotated[IssueCertificateUseCase, Depends(get_issue_certificate_use_case)]


def get_password_hasher(container: ContainerDep) -> PasswordHasher:
    return container.get(ServiceNames.PASSWORD_HASHER)


def get_token_service(container: ContainerDep) -> TokenService:
    return container.get(ServiceNames.TOKEN_SERVICE)


PasswordHasherDep = Annotated[PasswordHasher, Depends(get_password_hasher)]
TokenServiceDep = Annotated[TokenService, Depends(get_token_service)]
