"""
Enrollment schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from ...application.dto.enrollment_dto import ApproveEnrollmentResult, EnrollmentStats, EnrollmentView
from ...domain.enums import Department, EnrollmentStatus
from .auth import DoctorSummary
from .certificates import CertificateOut
from .hospitals import HospitalSummary


class CreateEnrollmentRequest(BaseModel):
    hospital_id: str = Field(..., min_length=1)
    start_date: datetime
    end_date: datetime
    service_hours: int = Field(..., description="Weekly service hours (1-40)")
    department: Department
    notes: Optional[str] = None


class UpdateEnrollmentRequest(BaseModel):
    notes: Optional[str] = None


class RejectEnrollmentRequest(BaseModel):
    rejection_reason: str = Field(..., description="Shown to the doctor (1-500 characters)")


class EnrollmentOut(BaseModel):
    id: str
    doctor_id: str
    hospital_id: str
    start_date: datetime
    end_date: datetime
    service_hours: int
    department: Department
    status: EnrollmentStatus
    notes: Optional[str] = None
    admin_notes: Optional[str] = None
    rejection_reason: Optional[str] = None
    total_hours_completed: int
    completion_date: Optional[datetime] = None
    certificate_generated: bool
    hospital: Optional[HospitalSummary] = None
    doctor: Optional[DoctorSummary] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_view(cls, view: EnrollmentView) -> "EnrollmentOut":
        e = view.enrollment
        return cls(
            id=e.id,
            doctor_id=e.doctor_id,
            hospital_id=e.hospital_id,
            start_date=e.start_date,
            end_date=e.end_date,
            service_hours=e.service_hours,
            department=e.department,
            status=e.status,
            notes=e.notes,
            admin_notes=e.admin_notes,
            rejection_reason=e.admin_notes if e.status == EnrollmentStatus.REJECTED else None,
            total_hours_completed=e.total_hours_completed,
            completion_date=e.completion_date,
            certificate_generated=e.certificate_generated,
            hospital=HospitalSummary.from_domain(view.hospital) if view.hospital else None,
            doctor=DoctorSummary.from_domain(view.doctor) if view.doctor else None,
            created_at=e.created_at,
            updated_at=e.updated_at,
        )


class ApproveEnrollmentData(BaseModel):
    enrollment: EnrollmentOut
    certificate: Optional[CertificateOut] = None
    certificate_error: Optional[str] = Field(None, description="Set when the approval stuck but issuance failed")

    @classmethod
    def from_result(cls, result: ApproveEnrollmentResult) -> "ApproveEnrollmentData":
        return cls(
            enrollment=EnrollmentOut.from_view(result.view),
            certificate=CertificateOut.from_domain(result.certificate) if result.certificate else None,
            certificate_error=result.certificate_error,
        )


class EnrollmentStatsOut(BaseModel):
    total: int
    pending: int
    approved: int
    rejected: int
    completed: int
    cancelled: int
    total_hours_completed: int

    @classmethod
    def from_dto(cls, stats: EnrollmentStats) -> "EnrollmentStatsOut":
        return cls(
            total=stats.total,
            pending=stats.count(EnrollmentStatus.PENDING),
            approved=stats.count(EnrollmentStatus.APPROVED),
            rejected=stats.count(EnrollmentStatus.REJECTED),
            completed=stats.count(EnrollmentStatus.COMPLETED),
            cancelled=stats.count(EnrollmentStatus.CANCELLED),
            total_hours_completed=stats.total_hours_completed,
        )
