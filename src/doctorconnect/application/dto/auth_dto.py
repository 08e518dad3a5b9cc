"""Authentication and profile DTOs."""

from dataclasses import dataclass
from typing import Optional

from ...domain.entities.doctor import Doctor
from ...domain.enums import Specialization


@dataclass
class RegisterDoctorRequest:
    name: str
    email: str
    password: str
    phone: str
    specialization: Specialization
    license_number: str
    experience_years: int
    address: str
    city: str
    state: str


@dataclass
class LoginRequest:
    email: str
    password: str


@dataclass
class AuthResult:
    """Issued token plus the doctor it identifies (password stripped)."""

    doctor: Doctor
    token: str
    expires_in: int


@dataclass
class UpdateProfileRequest:
    name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None


@dataclass
class ChangePasswordRequest:
    current_password: str
    new_password: str
