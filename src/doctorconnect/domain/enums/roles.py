from enum import Enum


class DoctorRole(str, Enum):
    DOCTOR = "doctor"
    ADMIN = "admin"
