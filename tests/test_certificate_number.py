"""
Certificate number format and uniqueness.
"""

import re
from datetime import datetime

import pytest

from doctorconnect.domain.entities import Certificate
from doctorconnect.domain.enums import Department
from doctorconnect.domain.errors import ConflictError
from doctorconnect.domain.value_objects.certificate_number import CertificateNumber, to_base36

PATTERN = re.compile(r"^CERT-[0-9A-Z]+-[0-9A-Z]+$")


def test_base36():
    assert to_base36(0) == "0"
    assert to_base36(35) == "Z"
    assert to_base36(36) == "10"
    with pytest.raises(ValueError):
        to_base36(-1)


def test_generated_numbers_match_format():
    number = CertificateNumber.generate()
    assert PATTERN.match(number.value)
    assert number.value == number.value.upper()


def test_timestamp_prefix():
    number = CertificateNumber.generate(timestamp_ms=36 ** 3)
    assert number.value.startswith("CERT-1000-")


def test_ten_thousand_numbers_are_distinct():
    numbers = {CertificateNumber.generate().value for _ in range(10_000)}
    assert len(numbers) == 10_000


def test_from_string_normalizes():
    assert CertificateNumber.from_string(" cert-abc-123 ").value == "CERT-ABC-123"


@pytest.mark.parametrize("value", ["", "CERT-", "CERT-ABC", "cert-abc-123", "CERT-AB_C-1"])
def test_invalid_numbers_rejected(value):
    with pytest.raises(ValueError):
        CertificateNumber(value)


def _certificate(**overrides) -> Certificate:
    values = dict(
        enrollment_id="e1",
        doctor_id="d1",
        hospital_id="h1",
        certificate_number="CERT-ABC-123",
        issue_date=datetime(2024, 1, 16),
        service_period="January 1, 2024 - January 15, 2024",
        total_hours=40,
        department=Department.CARDIOLOGY,
    )
    values.update(overrides)
    return Certificate(**values)


def test_certificate_filename_and_status():
    certificate = _certificate()
    assert certificate.filename == "certificate-CERT-ABC-123.pdf"
    assert certificate.verification_status == "Pending Verification"
    assert not certificate.has_artifact


def test_certificate_verify_once():
    certificate = _certificate()
    certificate.verify("admin-1", datetime(2024, 2, 1))
    assert certificate.verification_status == "Verified"
    assert certificate.verified_by == "admin-1"
    with pytest.raises(ConflictError):
        certificate.verify("admin-1", datetime(2024, 2, 2))
