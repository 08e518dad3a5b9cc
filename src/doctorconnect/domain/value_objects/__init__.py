"""
Value objects package for domain layer.
"""

from .certificate_number import CertificateNumber

__all__ = ["CertificateNumber"]
