"""
Certificate artifact storage interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StoredArtifact:
    path: str
    size: int


class CertificateStorage(ABC):
    """Keeps generated certificate files."""

    @abstractmethod
    async def save(self, filename: str, content: bytes) -> StoredArtifact:
        """Store content under filename. Raises StorageError on failure."""
        pass

    @abstractmethod
    async def load(self, path: str) -> Optional[bytes]:
        """Return stored content, or None if the artifact is gone."""
        pass
