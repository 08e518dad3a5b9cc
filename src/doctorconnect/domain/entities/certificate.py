"""Certificate domain entity: the issued proof-of-service record."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ...core.utils.datetime_utils import utc_now
from ..enums import Department
from ..errors import ConflictError


@dataclass
class Certificate:
    """Immutable after issuance except for the verification fields and a
    regenerated artifact location."""

    enrollment_id: str
    doctor_id: str
    hospital_id: str
    certificate_number: str
    issue_date: datetime
    service_period: str
    total_hours: int
    department: Department
    file_path: str = ""
    file_size: int = 0
    is_verified: bool = False
    verification_date: Optional[datetime] = None
    verified_by: Optional[str] = None
    additional_notes: Optional[str] = None
    id: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @property
    def has_artifact(self) -> bool:
        return bool(self.file_path) and self.file_size > 0

    @property
    def filename(self) -> str:
        return f"certificate-{self.certificate_number}.pdf"

    @property
    def verification_status(self) -> str:
        return "Verified" if self.is_verified else "Pending Verification"

    def attach_artifact(self, file_path: str, file_size: int, now: datetime) -> None:
        self.file_path = file_path
        self.file_size = file_size
        self.updated_at = now

    def verify(self, admin_id: str, now: datetime) -> None:
        if self.is_verified:
            raise ConflictError(
                "Certificate is already verified",
                "CERTIFICATE_ALREADY_VERIFIED",
                {"certificate_id": self.id},
            )
        self.is_verified = True
        self.verification_date = now
        self.verified_by = admin_id
        self.updated_at = now
