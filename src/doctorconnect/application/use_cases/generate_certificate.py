"""Doctor-requested certificate generation for a completed enrollment."""

from ...domain.entities.certificate import Certificate
from ...domain.entities.doctor import Doctor
from ...domain.enums import EnrollmentStatus
from ...domain.errors import NotFoundError
from ..ports.repositories.enrollment_repo import EnrollmentRepository
from .issue_certificate import IssueCertificateUseCase


class GenerateCertificateUseCase:
    def __init__(self, enrollment_repository: EnrollmentRepository, issue_certificate: IssueCertificateUseCase):
        self._enrollment_repository = enrollment_repository
        self._issue_certificate = issue_certificate

    async def execute(self, enrollment_id: str, doctor: Doctor) -> Certificate:
        enrollment = await self._enrollment_repository.find_by_id(enrollment_id)
        if (
            enrollment is None
            or not enrollment.is_owned_by(doctor.id)
            or enrollment.status != EnrollmentStatus.COMPLETED
        ):
            raise NotFoundError(
                "Completed enrollment not found",
                "ENROLLMENT_NOT_FOUND",
                {"enrollment_id": enrollment_id},
            )
        return await self._issue_certificate.execute(enrollment)
