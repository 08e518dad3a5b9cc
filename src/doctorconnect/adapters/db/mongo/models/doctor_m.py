"""MongoDB Beanie model for Doctor documents."""

from datetime import datetime
from typing import Optional

from beanie import Document
from pydantic import Field
from pymongo import ASCENDING, IndexModel

from doctorconnect.core.utils.datetime_utils import utc_now


class DoctorMongo(Document):
    """MongoDB model for Doctor entity."""

    name: str = Field(..., description="Doctor display name")
    email: str = Field(..., description="Lower-cased login email")
    password: str = Field(..., description="bcrypt hash")
    phone: str = Field(..., description="Contact phone number")
    specialization: str = Field(..., description="Specialization enum value")
    license_number: str = Field(..., description="Medical license number")
    experience_years: int = Field(default=0)
    address: str = Field(...)
    city: str = Field(...)
    state: str = Field(...)
    is_verified: bool = Field(default=False)
    role: str = Field(default="doctor", description="doctor or admin")
    profile_image: Optional[str] = Field(None)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "doctors"
        indexes = [
            IndexModel([("email", ASCENDING)], unique=True, name="email_unique"),
            IndexModel([("license_number", ASCENDING)], unique=True, name="license_number_unique"),
            "specialization",
            "created_at",
        ]
