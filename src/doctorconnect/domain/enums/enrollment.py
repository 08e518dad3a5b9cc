"""
Enrollment lifecycle status enum.
"""

from enum import Enum


class EnrollmentStatus(str, Enum):
    """Enrollment states.

    pending -> approved | rejected | cancelled
    approved -> completed
    """

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (EnrollmentStatus.REJECTED, EnrollmentStatus.COMPLETED, EnrollmentStatus.CANCELLED)

    @classmethod
    def blocking(cls) -> tuple:
        """Statuses that reserve a doctor's time at a hospital."""
        return (cls.PENDING, cls.APPROVED)
