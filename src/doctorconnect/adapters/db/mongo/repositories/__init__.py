"""
MongoDB repository implementations.
"""

from .certificate_repository import MongoCertificateRepository
from .doctor_repository import MongoDoctorRepository
from .enrollment_repository import MongoEnrollmentRepository
from .hospital_repository import MongoHospitalRepository

__all__ = [
    "MongoCertificateRepository",
    "MongoDoctorRepository",
    "MongoEnrollmentRepository",
    "MongoHospitalRepository",
]
