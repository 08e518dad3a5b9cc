"""
ReportLab implementation of CertificateRenderer.

Produces a single A4 page. Page compression is off so the text of the
certificate stays searchable in the raw PDF bytes.
"""

import io
import logging
from typing import List, Tuple

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

from ...application.dto.certificate_dto import CertificateDocument
from ...application.ports.services.certificate_renderer import CertificateRenderer
from ...core.exceptions import RenderingError
from ...core.utils.async_utils import run_blocking

logger = logging.getLogger(__name__)

MARGIN = 18 * mm
REGULAR = "Helvetica"
BOLD = "Helvetica-Bold"

# (text, font, size, centered, space after in points)
Line = Tuple[str, str, int, bool, int]


class ReportLabCertificateRenderer(CertificateRenderer):
    """Lays out the certificate of service with the ReportLab canvas API."""

    def __init__(self, issuer_name: str, contact_email: str):
        self._issuer_name = issuer_name
        self._contact_email = contact_email

    async def render(self, document: CertificateDocument) -> bytes:
        try:
            return await run_blocking(self._render_sync, document)
        except Exception as e:
            logger.error("Failed to render certificate %s: %s", document.certificate_number, e, exc_info=True)
            raise RenderingError(
                f"Failed to render certificate: {e}",
                {"certificate_number": document.certificate_number},
            ) from e

    def _lines(self, doc: CertificateDocument) -> List[Line]:
        return [
            ("CERTIFICATE OF SERVICE", BOLD, 24, True, 18),
            (self._issuer_name, BOLD, 16, True, 30),
            (f"Certificate Number: {doc.certificate_number}", REGULAR, 12, False, 14),
            (f"Issue Date: {doc.issue_date}", REGULAR, 12, False, 28),
            ("This is to certify that", BOLD, 14, True, 16),
            (doc.doctor_name, BOLD, 16, True, 18),
            (f"License Number: {doc.license_number}", REGULAR, 14, False, 14),
            (f"Specialization: {doc.specialization}", REGULAR, 14, False, 28),
            ("Has successfully completed their service at:", REGULAR, 14, False, 16),
            (doc.hospital_name, BOLD, 16, True, 18),
            (doc.hospital_address, REGULAR, 14, False, 4),
            (f"{doc.hospital_city}, {doc.hospital_state}", REGULAR, 14, False, 28),
            (f"Service Period: {doc.service_period}", REGULAR, 14, False, 14),
            (f"Department: {doc.department}", REGULAR, 14, False, 14),
            (f"Total Hours Served: {doc.total_hours} hours", REGULAR, 14, False, 36),
            ("This certificate is issued in recognition of the valuable service", REGULAR, 12, False, 2),
            ("provided to the community through government healthcare facilities.", REGULAR, 12, False, 28),
            (
                "This is a digitally generated certificate and does not require a physical signature.",
                REGULAR,
                10,
                False,
                12,
            ),
            (f"For verification, please contact: {self._contact_email}", REGULAR, 10, False, 18),
            (f"Verification Code: {doc.certificate_number}", REGULAR, 8, True, 0),
        ]

    def _render_sync(self, document: CertificateDocument) -> bytes:
        buffer = io.BytesIO()
        width, height = A4
        pdf = canvas.Canvas(buffer, pagesize=A4, pageCompression=0)
        pdf.setTitle(f"Certificate {document.certificate_number}")
        pdf.setAuthor(self._issuer_name)

        y = height - MARGIN
        for text, font, size, centered, space_after in self._lines(document):
            y -= size
            pdf.setFont(font, size)
            if centered:
                pdf.drawCentredString(width / 2, y, text)
            else:
                pdf.drawString(MARGIN, y, text)
            y -= space_after + size * 0.2

        pdf.showPage()
        pdf.save()
        return buffer.getvalue()
