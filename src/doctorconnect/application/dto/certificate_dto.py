"""Certificate DTOs."""

from dataclasses import dataclass
from typing import Optional

from ...domain.entities.certificate import Certificate
from ...domain.entities.doctor import Doctor
from ...domain.entities.enrollment import Enrollment
from ...domain.entities.hospital import Hospital


@dataclass(frozen=True)
class CertificateDocument:
    """Everything printed on a certificate."""

    certificate_number: str
    issue_date: str
    doctor_name: str
    license_number: str
    specialization: str
    hospital_name: str
    hospital_address: str
    hospital_city: str
    hospital_state: str
    service_period: str
    department: str
    total_hours: int


@dataclass
class CertificateView:
    certificate: Certificate
    hospital: Optional[Hospital] = None
    enrollment: Optional[Enrollment] = None
    doctor: Optional[Doctor] = None


@dataclass
class CertificateDownload:
    filename: str
    content: bytes
    media_type: str = "application/pdf"


@dataclass
class CertificateStats:
    total_certificates: int = 0
    verified_certificates: int = 0
    total_hours: int = 0

    @property
    def pending_verification(self) -> int:
        return self.total_certificates - self.verified_certificates
