"""
Domain entities package.
"""

from .certificate import Certificate
from .doctor import Doctor
from .enrollment import Enrollment, compute_total_hours
from .hospital import Hospital

__all__ = [
    "Certificate",
    "Doctor",
    "Enrollment",
    "Hospital",
    "compute_total_hours",
]
