"""
Hospital catalogue schemas.
"""

from typing import List

from pydantic import BaseModel

from ...application.dto.hospital_dto import HospitalStats
from ...domain.entities.hospital import Hospital
from ...domain.enums import Department, HospitalType


class HospitalOut(BaseModel):
    id: str
    name: str
    type: HospitalType
    address: str
    city: str
    state: str
    capacity: int
    specialties: List[Department]
    facilities: List[str]

    @classmethod
    def from_domain(cls, hospital: Hospital) -> "HospitalOut":
        return cls(
            id=hospital.id,
            name=hospital.name,
            type=hospital.type,
            address=hospital.address,
            city=hospital.city,
            state=hospital.state,
            capacity=hospital.capacity,
            specialties=list(hospital.specialties),
            facilities=list(hospital.facilities),
        )


class HospitalSummary(BaseModel):
    id: str
    name: str
    type: HospitalType
    city: str
    state: str

    @classmethod
    def from_domain(cls, hospital: Hospital) -> "HospitalSummary":
        return cls(id=hospital.id, name=hospital.name, type=hospital.type, city=hospital.city, state=hospital.state)


class HospitalStatsOut(BaseModel):
    total_hospitals: int
    government_hospitals: int
    private_hospitals: int
    cities: int
    states: int
    specializations: int

    @classmethod
    def from_dto(cls, stats: HospitalStats) -> "HospitalStatsOut":
        return cls(
            total_hospitals=stats.total_hospitals,
            government_hospitals=stats.government_hospitals,
            private_hospitals=stats.private_hospitals,
            cities=stats.cities,
            states=stats.states,
            specializations=stats.specializations,
        )
