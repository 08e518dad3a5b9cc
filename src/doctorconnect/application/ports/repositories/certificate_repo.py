"""
Certificate repository interface for data access abstraction.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from ....domain.entities.certificate import Certificate
from ...dto.certificate_dto import CertificateStats


class CertificateRepository(ABC):
    """Abstract repository for certificate data access."""

    @abstractmethod
    async def create(self, certificate: Certificate) -> Certificate:
        """Insert a certificate.

        Raises CertificateNumberTakenError or CertificateAlreadyIssuedError
        when a unique constraint rejects the insert.
        """
        pass

    @abstractmethod
    async def save(self, certificate: Certificate) -> Certificate:
        pass

    @abstractmethod
    async def find_by_id(self, certificate_id: str) -> Optional[Certificate]:
        pass

    @abstractmethod
    async def find_by_enrollment_id(self, enrollment_id: str) -> Optional[Certificate]:
        pass

    @abstractmethod
    async def exists_by_number(self, certificate_number: str) -> bool:
        pass

    @abstractmethod
    async def find_page(
        self, doctor_id: str, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Certificate], int]:
        """Newest issue date first."""
        pass

    @abstractmethod
    async def stats(self, doctor_id: str) -> CertificateStats:
        pass
