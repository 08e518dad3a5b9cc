"""
Service ports for certificate artifacts.
"""

from .certificate_renderer import CertificateRenderer
from .certificate_storage import CertificateStorage, StoredArtifact

__all__ = ["CertificateRenderer", "CertificateStorage", "StoredArtifact"]
