"""MongoDB Beanie model for Enrollment documents."""

from datetime import datetime
from typing import Optional

from beanie import Document
from pydantic import Field

from doctorconnect.core.utils.datetime_utils import utc_now


class EnrollmentMongo(Document):
    """MongoDB model for Enrollment entity."""

    doctor_id: str = Field(..., description="Doctor reference")
    hospital_id: str = Field(..., description="Hospital reference")
    start_date: datetime = Field(...)
    end_date: datetime = Field(...)
    service_hours: int = Field(..., description="Weekly service hours")
    department: str = Field(..., description="Department enum value")
    status: str = Field(default="pending")
    notes: Optional[str] = Field(None)
    admin_notes: Optional[str] = Field(None, description="Rejection reason or admin remarks")
    total_hours_completed: int = Field(default=0)
    completion_date: Optional[datetime] = Field(None)
    certificate_generated: bool = Field(default=False)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "enrollments"
        indexes = [
            [("doctor_id", 1), ("status", 1)],
            [("hospital_id", 1), ("status", 1)],
            [("status", 1), ("start_date", 1)],
            [("doctor_id", 1), ("created_at", -1)],
        ]
