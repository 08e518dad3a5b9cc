"""
Certificate artifact storage adapters.
"""

from .local_certificate_storage import LocalCertificateStorage

__all__ = ["LocalCertificateStorage"]
