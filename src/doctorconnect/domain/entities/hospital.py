"""Hospital reference entity. Written only by seeding, read by everyone."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ..enums import Department, HospitalType


@dataclass
class Hospital:
    name: str
    type: HospitalType
    address: str
    city: str
    state: str
    capacity: int = 0
    specialties: List[Department] = field(default_factory=list)
    facilities: List[str] = field(default_factory=list)
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def offers(self, department: Department) -> bool:
        return department in self.specialties

    def matches_search(self, term: str) -> bool:
        """Case-insensitive substring match on name, city, state or address."""
        needle = term.lower()
        return any(
            needle in value.lower()
            for value in (self.name, self.city, self.state, self.address)
        )
