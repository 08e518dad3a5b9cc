"""Enrollment domain entity and its lifecycle state machine.

    pending -> approved | rejected | cancelled
    approved -> completed (only once the end date has passed)

Transition methods mutate the entity in memory; persisting it is a
conditional write guarded by the status the transition started from.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ...core.utils.datetime_utils import start_of_day, utc_now
from ..enums import Department, EnrollmentStatus
from ..errors import InvalidTransitionError, ValidationError

MIN_WEEKLY_HOURS = 1
MAX_WEEKLY_HOURS = 40
MAX_NOTES_LENGTH = 500


def compute_total_hours(weekly_hours: int, start_date: datetime, end_date: datetime) -> int:
    """Hours served over a period, rounded half-up and never below 1.

    Partial days count as whole days.
    """
    duration_days = math.ceil((end_date - start_date).total_seconds() / 86400)
    total = math.floor(weekly_hours * duration_days / 7 + 0.5)
    return max(1, total)


@dataclass
class Enrollment:
    """A doctor's time-boxed service request at a hospital department."""

    doctor_id: str
    hospital_id: str
    start_date: datetime
    end_date: datetime
    service_hours: int
    department: Department
    status: EnrollmentStatus = EnrollmentStatus.PENDING
    notes: Optional[str] = None
    admin_notes: Optional[str] = None
    total_hours_completed: int = 0
    completion_date: Optional[datetime] = None
    certificate_generated: bool = False
    id: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def request(
        cls,
        doctor_id: str,
        hospital_id: str,
        start_date: datetime,
        end_date: datetime,
        service_hours: int,
        department: Department,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Enrollment":
        """Build a new pending enrollment, enforcing creation-time rules."""
        now = now or utc_now()
        if end_date <= start_date:
            raise ValidationError(
                "End date must be after start date",
                details={"start_date": start_date.isoformat(), "end_date": end_date.isoformat()},
            )
        if start_date < start_of_day(now):
            raise ValidationError(
                "Start date cannot be in the past",
                details={"start_date": start_date.isoformat()},
            )
        if not MIN_WEEKLY_HOURS <= service_hours <= MAX_WEEKLY_HOURS:
            raise ValidationError(
                f"Service hours must be between {MIN_WEEKLY_HOURS} and {MAX_WEEKLY_HOURS} per week",
                details={"service_hours": service_hours},
            )
        _check_notes(notes, "notes")
        return cls(
            doctor_id=doctor_id,
            hospital_id=hospital_id,
            start_date=start_date,
            end_date=end_date,
            service_hours=service_hours,
            department=department,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

    @property
    def duration_days(self) -> int:
        return math.ceil((self.end_date - self.start_date).total_seconds() / 86400)

    @property
    def total_hours(self) -> int:
        return compute_total_hours(self.service_hours, self.start_date, self.end_date)

    def overlaps(self, start_date: datetime, end_date: datetime) -> bool:
        return self.start_date <= end_date and self.end_date >= start_date

    def is_owned_by(self, doctor_id: str) -> bool:
        return self.doctor_id == doctor_id

    def approve(self, now: datetime) -> EnrollmentStatus:
        """Move pending -> approved. Returns the status the write must match."""
        previous = self._require(EnrollmentStatus.PENDING, "approved")
        self.status = EnrollmentStatus.APPROVED
        self.updated_at = now
        return previous

    def reject(self, reason: str, now: datetime) -> EnrollmentStatus:
        if not reason or not reason.strip():
            raise ValidationError("Rejection reason is required", details={"field": "rejection_reason"})
        _check_notes(reason, "rejection_reason")
        previous = self._require(EnrollmentStatus.PENDING, "rejected")
        self.status = EnrollmentStatus.REJECTED
        self.admin_notes = reason.strip()
        self.updated_at = now
        return previous

    def complete(self, now: datetime) -> EnrollmentStatus:
        previous = self._require(EnrollmentStatus.APPROVED, "completed")
        if now < self.end_date:
            raise InvalidTransitionError(
                "Service period has not ended yet",
                details={"end_date": self.end_date.isoformat()},
            )
        self.status = EnrollmentStatus.COMPLETED
        self.completion_date = now
        self.total_hours_completed = self.total_hours
        self.updated_at = now
        return previous

    def cancel(self, now: datetime) -> EnrollmentStatus:
        previous = self._require(EnrollmentStatus.PENDING, "cancelled")
        self.status = EnrollmentStatus.CANCELLED
        self.updated_at = now
        return previous

    def update_notes(self, notes: Optional[str], now: datetime) -> EnrollmentStatus:
        if self.status != EnrollmentStatus.PENDING:
            raise InvalidTransitionError(
                "Only pending enrollments can be updated",
                details={"status": self.status.value},
            )
        _check_notes(notes, "notes")
        self.notes = notes
        self.updated_at = now
        return EnrollmentStatus.PENDING

    def mark_certificate_generated(self, now: datetime) -> None:
        self.certificate_generated = True
        self.updated_at = now

    def _require(self, expected: EnrollmentStatus, target: str) -> EnrollmentStatus:
        if self.status != expected:
            raise InvalidTransitionError(
                f"Only {expected.value} enrollments can be {target}",
                details={"status": self.status.value, "required_status": expected.value},
            )
        return self.status


def _check_notes(value: Optional[str], field_name: str) -> None:
    if value is not None and len(value) > MAX_NOTES_LENGTH:
        raise ValidationError(
            f"{field_name.replace('_', ' ').capitalize()} cannot exceed {MAX_NOTES_LENGTH} characters",
            details={"field": field_name, "length": len(value)},
        )
