"""
Enrollment repository interface for data access abstraction.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from ....domain.entities.enrollment import Enrollment
from ....domain.enums import EnrollmentStatus


class EnrollmentRepository(ABC):
    """Abstract repository for enrollment data access."""

    @abstractmethod
    async def create(self, enrollment: Enrollment) -> Enrollment:
        """Insert a new enrollment and return it with its id."""
        pass

    @abstractmethod
    async def mark_certificate_generated(self, enrollment_id: str, at: datetime) -> None:
        """Set only the certificate flag, leaving status and other fields as stored."""
        pass

    @abstractmethod
    async def update_if_status(self, enrollment: Enrollment, expected_status: EnrollmentStatus) -> bool:
        """Persist the enrollment only if the stored status still equals
        ``expected_status``. Returns False when another writer got there first."""
        pass

    @abstractmethod
    async def find_by_id(self, enrollment_id: str) -> Optional[Enrollment]:
        pass

    @abstractmethod
    async def find_overlapping(
        self,
        doctor_id: str,
        hospital_id: str,
        start_date: datetime,
        end_date: datetime,
        statuses: Sequence[EnrollmentStatus],
    ) -> Optional[Enrollment]:
        """First enrollment in ``statuses`` whose period overlaps the range."""
        pass

    @abstractmethod
    async def find_page(
        self,
        doctor_id: Optional[str] = None,
        status: Optional[EnrollmentStatus] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Enrollment], int]:
        """Newest first. Returns the page and the total match count."""
        pass

    @abstractmethod
    async def find_active(self, doctor_id: str, now: datetime) -> List[Enrollment]:
        """Approved enrollments whose period contains ``now``, soonest start first."""
        pass

    @abstractmethod
    async def count_by_status(self, doctor_id: str) -> Dict[EnrollmentStatus, int]:
        pass

    @abstractmethod
    async def sum_completed_hours(self, doctor_id: str) -> int:
        """Sum of total_hours_completed over completed enrollments."""
        pass
