"""
Doctor repository interface for data access abstraction.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, Tuple

from ....domain.entities.doctor import Doctor
from ....domain.enums import Specialization
from ...dto.doctor_dto import DoctorFilters, DoctorStats


class DoctorRepository(ABC):
    """Abstract repository for doctor data access."""

    @abstractmethod
    async def create(self, doctor: Doctor) -> Doctor:
        """Insert a new doctor and return it with its id.

        Raises DuplicateDoctorError if the email or license number is taken.
        """
        pass

    @abstractmethod
    async def save(self, doctor: Doctor) -> Doctor:
        """Persist changes to an existing doctor."""
        pass

    @abstractmethod
    async def find_by_id(self, doctor_id: str) -> Optional[Doctor]:
        """Find a doctor by ID."""
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[Doctor]:
        """Find a doctor by (lower-cased) email."""
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def exists_by_license(self, license_number: str) -> bool:
        pass

    @abstractmethod
    async def find_many(self, doctor_ids: Iterable[str]) -> Dict[str, Doctor]:
        """Fetch several doctors at once, keyed by id. Missing ids are omitted."""
        pass

    @abstractmethod
    async def search(
        self, filters: DoctorFilters, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Doctor], int]:
        """One page of directory entries sorted by name, and the total match count.

        Only the doctor role is listed; admin accounts never appear.
        """
        pass

    @abstractmethod
    async def list_specializations(self) -> List[Specialization]:
        """Distinct specializations held by listed doctors, sorted by name."""
        pass

    @abstractmethod
    async def stats(self) -> DoctorStats:
        pass
