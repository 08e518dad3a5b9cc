"""
Authentication and profile schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field, validator

from ...domain.entities.doctor import Doctor
from ...domain.enums import DoctorRole, Specialization


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, description="At least 6 characters")
    phone: str = Field(..., min_length=10, max_length=15)
    specialization: Specialization
    license_number: str = Field(..., min_length=5, max_length=20)
    experience_years: int = Field(..., ge=0, le=50)
    address: str = Field(..., min_length=10, max_length=200)
    city: str = Field(..., min_length=2, max_length=50)
    state: str = Field(..., min_length=2, max_length=50)

    @validator("name", "phone", "license_number", "address", "city", "state")
    def strip_text(cls, v: str) -> str:
        return v.strip()


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UpdateProfileRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    phone: Optional[str] = Field(None, min_length=10, max_length=15)
    address: Optional[str] = Field(None, min_length=10, max_length=200)
    city: Optional[str] = Field(None, min_length=2, max_length=50)
    state: Optional[str] = Field(None, min_length=2, max_length=50)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=6)


class DoctorOut(BaseModel):
    """Public view of a doctor. Never carries the password hash."""

    id: str
    name: str
    email: str
    phone: str
    specialization: Specialization
    license_number: str
    experience_years: int
    address: str
    city: str
    state: str
    is_verified: bool
    role: DoctorRole
    profile_image: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, doctor: Doctor) -> "DoctorOut":
        return cls(
            id=doctor.id,
            name=doctor.name,
            email=doctor.email,
            phone=doctor.phone,
            specialization=doctor.specialization,
            license_number=doctor.license_number,
            experience_years=doctor.experience_years,
            address=doctor.address,
            city=doctor.city,
            state=doctor.state,
            is_verified=doctor.is_verified,
            role=doctor.role,
            profile_image=doctor.profile_image,
            created_at=doctor.created_at,
            updated_at=doctor.updated_at,
        )


class DoctorSummary(BaseModel):
    id: str
    name: str
    email: str
    specialization: Specialization
    license_number: str

    @classmethod
    def from_domain(cls, doctor: Doctor) -> "DoctorSummary":
        return cls(
            id=doctor.id,
            name=doctor.name,
            email=doctor.email,
            specialization=doctor.specialization,
            license_number=doctor.license_number,
        )


class AuthData(BaseModel):
    token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token lifetime in seconds")
    doctor: DoctorOut
