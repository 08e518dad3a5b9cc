"""MongoDB Beanie model for Certificate documents."""

from datetime import datetime
from typing import Optional

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, IndexModel

from doctorconnect.core.utils.datetime_utils import utc_now


class CertificateMongo(Document):
    """MongoDB model for Certificate entity."""

    enrollment_id: str = Field(..., description="Enrollment reference (one certificate each)")
    doctor_id: str = Field(...)
    hospital_id: str = Field(...)
    certificate_number: str = Field(..., description="CERT-XXXX-YYYY")
    issue_date: datetime = Field(default_factory=utc_now)
    service_period: str = Field(...)
    total_hours: int = Field(..., ge=1)
    department: str = Field(...)
    file_path: str = Field(default="", description="Stored PDF location, empty when degraded")
    file_size: int = Field(default=0)
    is_verified: bool = Field(default=False)
    verification_date: Optional[datetime] = Field(None)
    verified_by: Optional[str] = Field(None, description="Admin doctor id")
    additional_notes: Optional[str] = Field(None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "certificates"
        indexes = [
            IndexModel([("certificate_number", ASCENDING)], unique=True, name="certificate_number_unique"),
            IndexModel([("enrollment_id", ASCENDING)], unique=True, name="enrollment_id_unique"),
            [("doctor_id", 1), ("issue_date", -1)],
        ]
