"""
Domain-specific error types for business rule violations.

Every error carries the HTTP status it maps to so the API layer can convert
it into the error envelope without a lookup table.
"""

from typing import Any, Dict, Optional


class DomainError(Exception):
    """Base domain error."""

    http_status: int = 400
    default_code: str = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(DomainError):
    """Bad input shape or range."""

    default_code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """Referenced record does not exist (or is not visible to the caller)."""

    http_status = 404
    default_code = "NOT_FOUND"


class ConflictError(DomainError):
    """Uniqueness violation."""

    http_status = 409
    default_code = "CONFLICT"


class InvalidTransitionError(DomainError):
    """Illegal enrollment state change."""

    default_code = "INVALID_TRANSITION"


class AuthenticationError(DomainError):
    """Caller could not be authenticated."""

    http_status = 401
    default_code = "AUTHENTICATION_ERROR"


class MissingTokenError(AuthenticationError):
    def __init__(self) -> None:
        super().__init__(
            "Please provide a valid authentication token",
            "ACCESS_TOKEN_REQUIRED",
        )


class InvalidTokenError(AuthenticationError):
    http_status = 403

    def __init__(self, message: str = "Token is not valid", http_status: Optional[int] = None) -> None:
        super().__init__(message, "INVALID_TOKEN")
        if http_status is not None:
            self.http_status = http_status


class ExpiredTokenError(AuthenticationError):
    http_status = 403

    def __init__(self) -> None:
        super().__init__("Token has expired, please login again", "TOKEN_EXPIRED")


class InvalidCredentialsError(AuthenticationError):
    """Login failed. Deliberately silent about which half was wrong."""

    def __init__(self) -> None:
        super().__init__("Email or password is incorrect", "INVALID_CREDENTIALS")


class AuthorizationError(DomainError):
    """Caller is authenticated but lacks the required role."""

    http_status = 403
    default_code = "ACCESS_DENIED"

    def __init__(self, message: str = "Admin privileges required", details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message, details=details)


class DoctorNotFoundError(NotFoundError):
    def __init__(self, doctor_id: str) -> None:
        super().__init__(
            f"Doctor with ID '{doctor_id}' not found",
            "DOCTOR_NOT_FOUND",
            {"doctor_id": doctor_id},
        )


class HospitalNotFoundError(NotFoundError):
    def __init__(self, hospital_id: str) -> None:
        super().__init__(
            f"Hospital with ID '{hospital_id}' not found",
            "HOSPITAL_NOT_FOUND",
            {"hospital_id": hospital_id},
        )


class EnrollmentNotFoundError(NotFoundError):
    def __init__(self, enrollment_id: str) -> None:
        super().__init__(
            f"Enrollment with ID '{enrollment_id}' not found",
            "ENROLLMENT_NOT_FOUND",
            {"enrollment_id": enrollment_id},
        )


class CertificateNotFoundError(NotFoundError):
    def __init__(self, certificate_id: str) -> None:
        super().__init__(
            f"Certificate with ID '{certificate_id}' not found",
            "CERTIFICATE_NOT_FOUND",
            {"certificate_id": certificate_id},
        )


class DuplicateDoctorError(ConflictError):
    """Email or license number already registered."""

    def __init__(self, field: str) -> None:
        label = field.replace("_", " ")
        super().__init__(
            f"An account with this {label} already exists",
            "DUPLICATE_DOCTOR",
            {"field": field},
        )


class CertificateAlreadyIssuedError(ConflictError):
    def __init__(self, enrollment_id: str) -> None:
        super().__init__(
            "Certificate for this enrollment has already been generated",
            "CERTIFICATE_EXISTS",
            {"enrollment_id": enrollment_id},
        )


class CertificateNumberTakenError(ConflictError):
    def __init__(self, certificate_number: str) -> None:
        super().__init__(
            f"Certificate number '{certificate_number}' is already in use",
            "CERTIFICATE_NUMBER_TAKEN",
            {"certificate_number": certificate_number},
        )


class OverlappingEnrollmentError(ValidationError):
    def __init__(self, existing_id: Optional[str] = None) -> None:
        super().__init__(
            "You already have an enrollment that overlaps with this period",
            "OVERLAPPING_ENROLLMENT",
            {"existing_enrollment_id": existing_id} if existing_id else {},
        )


class DepartmentNotAvailableError(ValidationError):
    def __init__(self, hospital_id: str, department: str) -> None:
        super().__init__(
            "This hospital does not have the requested department",
            "DEPARTMENT_NOT_AVAILABLE",
            {"hospital_id": hospital_id, "department": department},
        )
