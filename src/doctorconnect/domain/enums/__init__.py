"""
Enumerations shared by the domain, persistence and API layers.
"""

from .catalog import Department, HospitalType, Specialization
from .enrollment import EnrollmentStatus
from .roles import DoctorRole

__all__ = [
    "Department",
    "DoctorRole",
    "EnrollmentStatus",
    "HospitalType",
    "Specialization",
]
