"""Certificate read-side use cases plus download and admin verification."""

import logging

from ...core.auth import require_admin
from ...core.exceptions import StorageError
from ...core.utils.datetime_utils import utc_now
from ...domain.entities.certificate import Certificate
from ...domain.entities.doctor import Doctor
from ...domain.errors import (
    CertificateNotFoundError,
    DoctorNotFoundError,
    HospitalNotFoundError,
)
from ..dto.certificate_dto import CertificateDownload, CertificateStats, CertificateView
from ..dto.pagination import Page, PageRequest
from ..ports.repositories.certificate_repo import CertificateRepository
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.repositories.enrollment_repo import EnrollmentRepository
from ..ports.repositories.hospital_repo import HospitalRepository
from ..ports.services.certificate_storage import CertificateStorage
from .issue_certificate import CertificateArtifactWriter

logger = logging.getLogger(__name__)


async def find_owned_certificate(
    repository: CertificateRepository, certificate_id: str, doctor: Doctor
) -> Certificate:
    certificate = await repository.find_by_id(certificate_id)
    if certificate is None or certificate.doctor_id != doctor.id:
        raise CertificateNotFoundError(certificate_id)
    return certificate


class ListCertificatesUseCase:
    def __init__(self, certificate_repository: CertificateRepository, hospital_repository: HospitalRepository):
        self._certificate_repository = certificate_repository
        self._hospital_repository = hospital_repository

    async def execute(self, doctor: Doctor, page: PageRequest) -> Page[CertificateView]:
        items, total = await self._certificate_repository.find_page(doctor.id, skip=page.skip, limit=page.limit)
        hospitals = await self._hospital_repository.find_many({c.hospital_id for c in items})
        views = [CertificateView(certificate=c, hospital=hospitals.get(c.hospital_id)) for c in items]
        return Page.of(views, total, page)


class GetCertificateUseCase:
    def __init__(
        self,
        certificate_repository: CertificateRepository,
        hospital_repository: HospitalRepository,
        enrollment_repository: EnrollmentRepository,
    ):
        self._certificate_repository = certificate_repository
        self._hospital_repository = hospital_repository
        self._enrollment_repository = enrollment_repository

    async def execute(self, certificate_id: str, doctor: Doctor) -> CertificateView:
        certificate = await find_owned_certificate(self._certificate_repository, certificate_id, doctor)
        return CertificateView(
            certificate=certificate,
            hospital=await self._hospital_repository.find_by_id(certificate.hospital_id),
            enrollment=await self._enrollment_repository.find_by_id(certificate.enrollment_id),
            doctor=doctor,
        )


class GetCertificateStatsUseCase:
    def __init__(self, certificate_repository: CertificateRepository):
        self._certificate_repository = certificate_repository

    async def execute(self, doctor: Doctor) -> CertificateStats:
        return await self._certificate_repository.stats(doctor.id)


class DownloadCertificateUseCase:
    """Returns the PDF, regenerating it when the stored copy is missing."""

    def __init__(
        self,
        certificate_repository: CertificateRepository,
        doctor_repository: DoctorRepository,
        hospital_repository: HospitalRepository,
        storage: CertificateStorage,
        artifact_writer: CertificateArtifactWriter,
    ):
        self._certificate_repository = certificate_repository
        self._doctor_repository = doctor_repository
        self._hospital_repository = hospital_repository
        self._storage = storage
        self._artifact_writer = artifact_writer

    async def execute(self, certificate_id: str, doctor: Doctor) -> CertificateDownload:
        certificate = await find_owned_certificate(self._certificate_repository, certificate_id, doctor)

        content = None
        if certificate.file_path:
            content = await self._storage.load(certificate.file_path)

        if content is None:
            logger.info("Regenerating artifact for certificate %s", certificate.certificate_number)
            owner = await self._doctor_repository.find_by_id(certificate.doctor_id)
            if owner is None:
                raise DoctorNotFoundError(certificate.doctor_id)
            hospital = await self._hospital_repository.find_by_id(certificate.hospital_id)
            if hospital is None:
                raise HospitalNotFoundError(certificate.hospital_id)

            content = await self._artifact_writer.write(certificate, owner, hospital)
            if content is None:
                raise StorageError(
                    "Certificate file could not be generated",
                    {"certificate_id": certificate_id},
                )
            await self._certificate_repository.save(certificate)

        return CertificateDownload(filename=certificate.filename, content=content)


class VerifyCertificateUseCase:
    def __init__(self, certificate_repository: CertificateRepository):
        self._certificate_repository = certificate_repository

    async def execute(self, certificate_id: str, admin: Doctor) -> Certificate:
        require_admin(admin)
        certificate = await self._certificate_repository.find_by_id(certificate_id)
        if certificate is None:
            raise CertificateNotFoundError(certificate_id)

        certificate.verify(admin.id, utc_now())
        certificate = await self._certificate_repository.save(certificate)
        logger.info("Certificate %s verified by admin %s", certificate.certificate_number, admin.id)
        return certificate
