"""
Doctor directory schemas. Contact details and credentials stay out of the
directory; a doctor's own record is served by the auth profile endpoint.
"""

from pydantic import BaseModel

from ...application.dto.doctor_dto import DoctorStats
from ...domain.entities.doctor import Doctor
from ...domain.enums import Specialization


class DoctorProfileOut(BaseModel):
    id: str
    name: str
    specialization: Specialization
    experience_years: int
    city: str
    state: str
    is_verified: bool

    @classmethod
    def from_domain(cls, doctor: Doctor) -> "DoctorProfileOut":
        return cls(
            id=doctor.id,
            name=doctor.name,
            specialization=doctor.specialization,
            experience_years=doctor.experience_years,
            city=doctor.city,
            state=doctor.state,
            is_verified=doctor.is_verified,
        )


class DoctorStatsOut(BaseModel):
    total_doctors: int
    verified_doctors: int
    unverified_doctors: int
    cities: int
    states: int
    specializations: int
    average_experience: float
    min_experience: int
    max_experience: int

    @classmethod
    def from_dto(cls, stats: DoctorStats) -> "DoctorStatsOut":
        return cls(
            total_doctors=stats.total_doctors,
            verified_doctors=stats.verified_doctors,
            unverified_doctors=stats.unverified_doctors,
            cities=stats.cities,
            states=stats.states,
            specializations=stats.specializations,
            average_experience=stats.average_experience,
            min_experience=stats.min_experience,
            max_experience=stats.max_experience,
        )
