"""
Certificate schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...application.dto.certificate_dto import CertificateStats, CertificateView
from ...domain.entities.certificate import Certificate
from ...domain.enums import Department
from .hospitals import HospitalSummary


class CertificateOut(BaseModel):
    id: str
    enrollment_id: str
    doctor_id: str
    hospital_id: str
    certificate_number: str
    issue_date: datetime
    service_period: str
    total_hours: int
    department: Department
    file_size: int
    has_file: bool
    is_verified: bool
    verification_status: str
    verification_date: Optional[datetime] = None
    verified_by: Optional[str] = None
    additional_notes: Optional[str] = None
    hospital: Optional[HospitalSummary] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, certificate: Certificate, hospital: Optional[HospitalSummary] = None) -> "CertificateOut":
        # The storage path is internal and is not exposed
        return cls(
            id=certificate.id,
            enrollment_id=certificate.enrollment_id,
            doctor_id=certificate.doctor_id,
            hospital_id=certificate.hospital_id,
            certificate_number=certificate.certificate_number,
            issue_date=certificate.issue_date,
            service_period=certificate.service_period,
            total_hours=certificate.total_hours,
            department=certificate.department,
            file_size=certificate.file_size,
            has_file=certificate.has_artifact,
            is_verified=certificate.is_verified,
            verification_status=certificate.verification_status,
            verification_date=certificate.verification_date,
            verified_by=certificate.verified_by,
            additional_notes=certificate.additional_notes,
            hospital=hospital,
            created_at=certificate.created_at,
            updated_at=certificate.updated_at,
        )

    @classmethod
    def from_view(cls, view: CertificateView) -> "CertificateOut":
        hospital = HospitalSummary.from_domain(view.hospital) if view.hospital else None
        return cls.from_domain(view.certificate, hospital)


class CertificateStatsOut(BaseModel):
    total_certificates: int
    verified_certificates: int
    pending_verification: int
    total_hours: int

    @classmethod
    def from_dto(cls, stats: CertificateStats) -> "CertificateStatsOut":
        return cls(
            total_certificates=stats.total_certificates,
            verified_certificates=stats.verified_certificates,
            pending_verification=stats.pending_verification,
            total_hours=stats.total_hours,
        )
