"""Doctor directory DTOs."""

from dataclasses import dataclass
from typing import Optional

from ...domain.enums import Specialization


@dataclass
class DoctorFilters:
    specialization: Optional[Specialization] = None
    city: Optional[str] = None
    state: Optional[str] = None
    search: Optional[str] = None


@dataclass
class DoctorStats:
    total_doctors: int = 0
    verified_doctors: int = 0
    unverified_doctors: int = 0
    cities: int = 0
    states: int = 0
    specializations: int = 0
    average_experience: float = 0.0
    min_experience: int = 0
    max_experience: int = 0
