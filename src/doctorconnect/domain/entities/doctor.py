"""Doctor domain entity: login credential plus professional profile."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from ...core.utils.datetime_utils import utc_now
from ..enums import DoctorRole, Specialization
from ..errors import ValidationError


@dataclass
class Doctor:
    """Doctor domain entity.

    ``password_hash`` is ``None`` on copies handed out past the
    authentication gate; only the record store ever sees the hash.
    """

    name: str
    email: str
    password_hash: Optional[str]
    phone: str
    specialization: Specialization
    license_number: str
    experience_years: int
    address: str
    city: str
    state: str
    id: Optional[str] = None
    is_verified: bool = False
    role: DoctorRole = DoctorRole.DOCTOR
    profile_image: Optional[str] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        self.email = self.email.strip().lower()

    def validate(self) -> None:
        """Profile field rules enforced at registration and on edit."""
        _check_length("name", self.name, 2, 50)
        _check_length("phone", self.phone, 10, 15)
        _check_length("license_number", self.license_number, 5, 20)
        _check_length("address", self.address, 10, 200)
        _check_length("city", self.city, 2, 50)
        _check_length("state", self.state, 2, 50)
        if not 0 <= self.experience_years <= 50:
            raise ValidationError(
                "Experience must be between 0 and 50 years",
                details={"field": "experience_years", "value": self.experience_years},
            )

    @property
    def is_admin(self) -> bool:
        return self.role == DoctorRole.ADMIN

    def without_password(self) -> "Doctor":
        """Copy safe to hand to route handlers."""
        return replace(self, password_hash=None)

    def update_profile(
        self,
        now: datetime,
        name: Optional[str] = None,
        phone: Optional[str] = None,
        address: Optional[str] = None,
        city: Optional[str] = None,
        state: Optional[str] = None,
    ) -> None:
        """Apply the editable profile fields that were supplied."""
        changes = {
            "name": name,
            "phone": phone,
            "address": address,
            "city": city,
            "state": state,
        }
        for attr, value in changes.items():
            if value is not None:
                setattr(self, attr, value.strip())
        self.validate()
        self.updated_at = now

    def set_password_hash(self, password_hash: str, now: datetime) -> None:
        self.password_hash = password_hash
        self.updated_at = now


def _check_length(name: str, value: str, minimum: int, maximum: int) -> None:
    length = len(value.strip()) if value else 0
    if not minimum <= length <= maximum:
        raise ValidationError(
            f"{name.replace('_', ' ').capitalize()} must be between {minimum} and {maximum} characters",
            details={"field": name, "length": length},
        )
