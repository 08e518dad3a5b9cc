"""
Repository ports (record stores).
"""

from .certificate_repo import CertificateRepository
from .doctor_repo import DoctorRepository
from .enrollment_repo import EnrollmentRepository
from .hospital_repo import HospitalRepository

__all__ = [
    "CertificateRepository",
    "DoctorRepository",
    "EnrollmentRepository",
    "HospitalRepository",
]
