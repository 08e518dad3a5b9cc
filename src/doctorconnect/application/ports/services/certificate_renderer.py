"""
Certificate renderer interface.
"""

from abc import ABC, abstractmethod

from ...dto.certificate_dto import CertificateDocument


class CertificateRenderer(ABC):
    """Turns certificate content into a printable document."""

    @abstractmethod
    async def render(self, document: CertificateDocument) -> bytes:
        """Render a one-page PDF. Raises RenderingError on failure."""
        pass
