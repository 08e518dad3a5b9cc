"""Enrollment DTOs.

Views compose an enrollment with the records it references; the join is
done by the use case, never by the store.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

from ...domain.entities.certificate import Certificate
from ...domain.entities.doctor import Doctor
from ...domain.entities.enrollment import Enrollment
from ...domain.entities.hospital import Hospital
from ...domain.enums import Department, EnrollmentStatus


@dataclass
class CreateEnrollmentRequest:
    hospital_id: str
    start_date: datetime
    end_date: datetime
    service_hours: int
    department: Department
    notes: Optional[str] = None


@dataclass
class EnrollmentView:
    enrollment: Enrollment
    hospital: Optional[Hospital] = None
    doctor: Optional[Doctor] = None


@dataclass
class ApproveEnrollmentResult:
    """Approval always sticks; certificate issuance may fail separately."""

    view: EnrollmentView
    certificate: Optional[Certificate] = None
    certificate_error: Optional[str] = None


@dataclass
class EnrollmentStats:
    counts: Dict[EnrollmentStatus, int] = field(default_factory=dict)
    total_hours_completed: int = 0

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def count(self, status: EnrollmentStatus) -> int:
        return self.counts.get(status, 0)
