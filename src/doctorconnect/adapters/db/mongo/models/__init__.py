"""
MongoDB Beanie documents.
"""

from .certificate_m import CertificateMongo
from .doctor_m import DoctorMongo
from .enrollment_m import EnrollmentMongo
from .hospital_m import HospitalMongo

DOCUMENT_MODELS = [DoctorMongo, HospitalMongo, EnrollmentMongo, CertificateMongo]

__all__ = [
    "CertificateMongo",
    "DOCUMENT_MODELS",
    "DoctorMongo",
    "EnrollmentMongo",
    "HospitalMongo",
]
