"""Hospital catalogue DTOs."""

from dataclasses import dataclass
from typing import Optional

from ...domain.enums import Department, HospitalType


@dataclass
class HospitalFilters:
    type: Optional[HospitalType] = None
    specialization: Optional[Department] = None
    city: Optional[str] = None
    state: Optional[str] = None
    search: Optional[str] = None


@dataclass
class HospitalStats:
    total_hospitals: int = 0
    government_hospitals: int = 0
    private_hospitals: int = 0
    cities: int = 0
    states: int = 0
    specializations: int = 0
