"""Approve Enrollment use case.

Approval and certificate issuance are separate writes. If issuance fails
the enrollment stays approved and the failure is reported alongside it.
"""

import logging

from ...core.auth import require_admin
from ...core.utils.datetime_utils import utc_now
from ...domain.entities.doctor import Doctor
from ...domain.errors import DomainError, EnrollmentNotFoundError, InvalidTransitionError
from ..dto.enrollment_dto import ApproveEnrollmentResult
from ..ports.repositories.doctor_repo import DoctorRepository
from ..ports.repositories.enrollment_repo import EnrollmentRepository
from ..ports.repositories.hospital_repo import HospitalRepository
from .enrollment_views import build_enrollment_view
from .issue_certificate import IssueCertificateUseCase

logger = logging.getLogger(__name__)


class ApproveEnrollmentUseCase:
    def __init__(
        self,
        enrollment_repository: EnrollmentRepository,
        hospital_repository: HospitalRepository,
        doctor_repository: DoctorRepository,
        issue_certificate: IssueCertificateUseCase,
    ):
        self._enrollment_repository = enrollment_repository
        self._hospital_repository = hospital_repository
        self._doctor_repository = doctor_repository
        self._issue_certificate = issue_certificate

    async def execute(self, enrollment_id: str, admin: Doctor) -> ApproveEnrollmentResult:
        require_admin(admin)

        enrollment = await self._enrollment_repository.find_by_id(enrollment_id)
        if enrollment is None:
            raise EnrollmentNotFoundError(enrollment_id)

        expected = enrollment.approve(utc_now())
        if not await self._enrollment_repository.update_if_status(enrollment, expected):
            raise InvalidTransitionError(
                "Only pending enrollments can be approved",
                details={"enrollment_id": enrollment_id, "reason": "concurrent_update"},
            )
        logger.info("Enrollment %s approved by admin %s", enrollment_id, admin.id)

        result = ApproveEnrollmentResult(
            view=await build_enrollment_view(enrollment, self._hospital_repository, self._doctor_repository)
        )
        try:
            result.certificate = await self._issue_certificate.execute(enrollment)
        except DomainError as e:
            logger.warning("Certificate issuance failed for enrollment %s: %s", enrollment_id, e.message)
            result.certificate_error = e.message
        except Exception:
            logger.exception("Unexpected error issuing certificate for enrollment %s", enrollment_id)
            result.certificate_error = "Certificate generation failed"
        return result
