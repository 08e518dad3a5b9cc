"""MongoDB Beanie model for Hospital documents."""

from datetime import datetime
from typing import List

from beanie import Document
from pydantic import Field

from doctorconnect.core.utils.datetime_utils import utc_now


class HospitalMongo(Document):
    """MongoDB model for Hospital entity (seeded reference data)."""

    name: str = Field(..., description="Hospital name")
    type: str = Field(default="government", description="government or private")
    address: str = Field(...)
    city: str = Field(...)
    state: str = Field(...)
    capacity: int = Field(default=0, description="Bed capacity")
    specialties: List[str] = Field(default_factory=list, description="Department enum values")
    facilities: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    class Settings:
        name = "hospitals"
        indexes = [
            "name",
            "type",
            [("state", 1), ("city", 1)],
            "specialties",
        ]
