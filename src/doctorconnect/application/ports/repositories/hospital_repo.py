"""
Hospital repository interface. Hospitals are read-only for the application.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from ....domain.entities.hospital import Hospital
from ....domain.enums import Department
from ...dto.hospital_dto import HospitalFilters, HospitalStats


class HospitalRepository(ABC):
    """Abstract repository for hospital data access."""

    @abstractmethod
    async def find_by_id(self, hospital_id: str) -> Optional[Hospital]:
        """Find a hospital by ID; malformed ids yield None."""
        pass

    @abstractmethod
    async def find_many(self, hospital_ids: Iterable[str]) -> Dict[str, Hospital]:
        """Fetch several hospitals at once, keyed by id."""
        pass

    @abstractmethod
    async def search(
        self, filters: HospitalFilters, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Hospital], int]:
        """Return one page of matching hospitals sorted by name, and the total match count."""
        pass

    @abstractmethod
    async def list_specializations(self) -> List[Department]:
        """Distinct departments offered by any hospital, sorted by name."""
        pass

    @abstractmethod
    async def stats(self) -> HospitalStats:
        pass
