"""
ReportLab renderer and local file storage.
"""

import pytest

from doctorconnect.adapters.external.certificate_pdf_reportlab import ReportLabCertificateRenderer
from doctorconnect.adapters.storage.local_certificate_storage import LocalCertificateStorage
from doctorconnect.application.dto.certificate_dto import CertificateDocument
from doctorconnect.core.exceptions import StorageError

DOCUMENT = CertificateDocument(
    certificate_number="CERT-LQ2X8K-9F3A1B",
    issue_date="January 16, 2024",
    doctor_name="Dr. Jane Smith",
    license_number="LIC12345",
    specialization="Cardiology",
    hospital_name="City General Hospital",
    hospital_address="1 Hospital Road",
    hospital_city="Springfield",
    hospital_state="Illinois",
    service_period="January 1, 2024 - January 15, 2024",
    department="Cardiology",
    total_hours=40,
)


@pytest.mark.asyncio
async def test_renders_pdf_with_certificate_text():
    renderer = ReportLabCertificateRenderer("Doctor Connect - Government Hospital Service", "info@doctorconnect.com")
    content = await renderer.render(DOCUMENT)

    assert content.startswith(b"%PDF")
    assert b"CERT-LQ2X8K-9F3A1B" in content
    assert b"Total Hours Served: 40 hours" in content
    assert b"info@doctorconnect.com" in content


@pytest.mark.asyncio
async def test_storage_round_trip(tmp_path):
    storage = LocalCertificateStorage(str(tmp_path / "certs"))
    artifact = await storage.save("certificate-CERT-A-B.pdf", b"%PDF-1.4 test")

    assert artifact.size == len(b"%PDF-1.4 test")
    assert artifact.path.endswith("certificate-CERT-A-B.pdf")
    assert await storage.load(artifact.path) == b"%PDF-1.4 test"
    assert not list((tmp_path / "certs").glob("*.tmp"))


@pytest.mark.asyncio
async def test_storage_missing_file(tmp_path):
    storage = LocalCertificateStorage(str(tmp_path))
    assert await storage.load(str(tmp_path / "gone.pdf")) is None


@pytest.mark.asyncio
@pytest.mark.parametrize("filename", ["../escape.pdf", "nested/cert.pdf", ""])
async def test_storage_rejects_paths(tmp_path, filename):
    storage = LocalCertificateStorage(str(tmp_path))
    with pytest.raises(StorageError):
        await storage.save(filename, b"data")


@pytest.mark.asyncio
async def test_storage_write_failure(tmp_path):
    blocker = tmp_path / "not-a-directory"
    blocker.write_text("x")
    storage = LocalCertificateStorage(str(blocker))
    with pytest.raises(StorageError):
        await storage.save("certificate-CERT-A-B.pdf", b"data")
