"""
Medical field enums used for doctor specializations and hospital departments.
"""

from enum import Enum


class Specialization(str, Enum):
    """Fields a doctor may register under."""

    CARDIOLOGY = "Cardiology"
    NEUROLOGY = "Neurology"
    ORTHOPEDICS = "Orthopedics"
    PEDIATRICS = "Pediatrics"
    ONCOLOGY = "Oncology"
    PSYCHIATRY = "Psychiatry"
    GENERAL_MEDICINE = "General Medicine"
    SURGERY = "Surgery"
    EMERGENCY_MEDICINE = "Emergency Medicine"
    RADIOLOGY = "Radiology"
    ANESTHESIOLOGY = "Anesthesiology"
    DERMATOLOGY = "Dermatology"


class Department(str, Enum):
    """Service lines a hospital can offer (superset of Specialization)."""

    CARDIOLOGY = "Cardiology"
    NEUROLOGY = "Neurology"
    ORTHOPEDICS = "Orthopedics"
    PEDIATRICS = "Pediatrics"
    ONCOLOGY = "Oncology"
    PSYCHIATRY = "Psychiatry"
    GENERAL_MEDICINE = "General Medicine"
    SURGERY = "Surgery"
    EMERGENCY_MEDICINE = "Emergency Medicine"
    RADIOLOGY = "Radiology"
    ANESTHESIOLOGY = "Anesthesiology"
    DERMATOLOGY = "Dermatology"
    GYNECOLOGY = "Gynecology"
    OPHTHALMOLOGY = "Ophthalmology"
    ENT = "ENT"
    UROLOGY = "Urology"


class HospitalType(str, Enum):
    GOVERNMENT = "government"
    PRIVATE = "private"
