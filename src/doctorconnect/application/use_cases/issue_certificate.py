"""Certificate issuance.

A certificate record is the source of truth; the PDF is a derived artifact.
The record is inserted first with an empty path and zero size, then the PDF
is rendered and stored under its number. If that fails the record stays
that way and the artifact is rebuilt on first download.
"""

import logging
from typing import Optional

from ...core.exceptions import RenderingError, StorageError
from ...core.utils.datetime_utils import format_long_date, format_period, utc_now
from ...domain.entities.certificate import Certificate
from ...domain.entities.doctor import Doctor
from ...domain.entities.enrollment import Enrollment
from ...domain.entities.hospital import Hospital
from ...domain.errors import (
    CertificateAlreadyIssuedError,
    CertificateNumberTakenError,
    ConflictError,
    DoctorNotFoundError,
    HospitalNotFoundError,
)
from ...domain.value_objects.certificate_number import CertificateNumber
from ..dto.certificate_dto import CertificateDocument
from ..ports.repositories.certificate_repo import CertificateRepository
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.repositories.enrollment_repo import EnrollmentRepository
from ..ports.repositories.hospital_repo import HospitalRepository
from ..ports.services.certificate_renderer import CertificateRenderer
from ..ports.services.certificate_storage import CertificateStorage

logger = logging.getLogger(__name__)


def build_certificate_document(certificate: Certificate, doctor: Doctor, hospital: Hospital) -> CertificateDocument:
    return CertificateDocument(
        certificate_number=certificate.certificate_number,
        issue_date=format_long_date(certificate.issue_date),
        doctor_name=doctor.name,
        license_number=doctor.license_number,
        specialization=doctor.specialization.value,
        hospital_name=hospital.name,
        hospital_address=hospital.address,
        hospital_city=hospital.city,
        hospital_state=hospital.state,
        service_period=certificate.service_period,
        department=certificate.department.value,
        total_hours=certificate.total_hours,
    )


class CertificateArtifactWriter:
    """Renders a certificate and stores the PDF."""

    def __init__(self, renderer: CertificateRenderer, storage: CertificateStorage):
        self._renderer = renderer
        self._storage = storage

    async def write(self, certificate: Certificate, doctor: Doctor, hospital: Hospital) -> Optional[bytes]:
        """Attach the stored artifact to ``certificate``.

        Returns the PDF bytes, or None if the certificate was left degraded.
        """
        try:
            content = await self._renderer.render(build_certificate_document(certificate, doctor, hospital))
            artifact = await self._storage.save(certificate.filename, content)
        except (RenderingError, StorageError) as e:
            logger.warning(
                "Certificate %s stored without artifact: %s",
                certificate.certificate_number,
                e.message,
            )
            certificate.attach_artifact("", 0, utc_now())
            return None
        certificate.attach_artifact(artifact.path, artifact.size, utc_now())
        return content


class IssueCertificateUseCase:
    """Issues the single certificate an enrollment may have."""

    def __init__(
        self,
        certificate_repository: CertificateRepository,
        enrollment_repository: EnrollmentRepository,
        doctor_repository: DoctorRepository,
        hospital_repository: HospitalRepository,
        artifact_writer: CertificateArtifactWriter,
        max_attempts: int = 5,
    ):
        self._certificate_repository = certificate_repository
        self._enrollment_repository = enrollment_repository
        self._doctor_repository = doctor_repository
        self._hospital_repository = hospital_repository
        self._artifact_writer = artifact_writer
        self._max_attempts = max_attempts

    async def execute(self, enrollment: Enrollment) -> Certificate:
        if await self._certificate_repository.find_by_enrollment_id(enrollment.id) is not None:
            raise CertificateAlreadyIssuedError(enrollment.id)

        doctor = await self._doctor_repository.find_by_id(enrollment.doctor_id)
        if doctor is None:
            raise DoctorNotFoundError(enrollment.doctor_id)
        hospital = await self._hospital_repository.find_by_id(enrollment.hospital_id)
        if hospital is None:
            raise HospitalNotFoundError(enrollment.hospital_id)

        now = utc_now()
        for attempt in range(1, self._max_attempts + 1):
            number = CertificateNumber.generate()
            if await self._certificate_repository.exists_by_number(number.value):
                logger.warning("Certificate number collision on attempt %d", attempt)
                continue

            certificate = Certificate(
                enrollment_id=enrollment.id,
                doctor_id=enrollment.doctor_id,
                hospital_id=enrollment.hospital_id,
                certificate_number=number.value,
                issue_date=now,
                service_period=format_period(enrollment.start_date, enrollment.end_date),
                total_hours=enrollment.total_hours,
                department=enrollment.department,
                created_at=now,
                updated_at=now,
            )
            try:
                certificate = await self._certificate_repository.create(certificate)
            except CertificateNumberTakenError:
                logger.warning("Certificate number %s taken at insert, retrying", number.value)
                continue
            break
        else:
            raise ConflictError(
                "Could not allocate a unique certificate number",
                "CERTIFICATE_NUMBER_EXHAUSTED",
                {"attempts": self._max_attempts},
            )

        # Stored only once the number is ours
        if await self._artifact_writer.write(certificate, doctor, hospital) is not None:
            certificate = await self._certificate_repository.save(certificate)

        generated_at = utc_now()
        enrollment.mark_certificate_generated(generated_at)
        await self._enrollment_repository.mark_certificate_generated(enrollment.id, generated_at)
        logger.info(
            "Issued certificate %s for enrollment %s (%d hours)",
            certificate.certificate_number,
            enrollment.id,
            certificate.total_hours,
        )
        return certificate
