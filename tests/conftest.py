"""
Shared fixtures: in-memory record stores and artifact adapters wired into
a per-test application container.
"""

import copy
import itertools
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

import pytest
from fastapi.testclient import TestClient

from doctorconnect.app import create_app, register_security_services
from doctorconnect.application.dto.certificate_dto import CertificateDocument, CertificateStats
from doctorconnect.application.dto.doctor_dto import DoctorFilters, DoctorStats
from doctorconnect.application.dto.hospital_dto import HospitalFilters, HospitalStats
from doctorconnect.application.ports.repositories import (
    CertificateRepository,
    DoctorRepository,
    EnrollmentRepository,
    HospitalRepository,
)
from doctorconnect.application.ports.services import CertificateRenderer, CertificateStorage, StoredArtifact
from doctorconnect.core.config import (
    CertificateSettings,
    LoggingSettings,
    SecuritySettings,
    Settings,
)
from doctorconnect.core.container import Container, ServiceNames
from doctorconnect.core.exceptions import RenderingError, StorageError
from doctorconnect.core.security import PasswordHasher, TokenService
from doctorconnect.core.utils.datetime_utils import start_of_day, utc_now
from doctorconnect.domain.entities import Certificate, Doctor, Enrollment, Hospital
from doctorconnect.domain.enums import (
    Department,
    DoctorRole,
    EnrollmentStatus,
    HospitalType,
    Specialization,
)
from doctorconnect.domain.errors import (
    CertificateAlreadyIssuedError,
    CertificateNumberTakenError,
    DuplicateDoctorError,
)

TEST_SECRET = "test-secret-key-that-is-long-enough-1234"
TEST_PASSWORD = "secret123"

_ids = itertools.count(1)


def _new_id() -> str:
    return f"{next(_ids):024x}"


# ---------------------------------------------------------------------------
# In-memory adapters
# ---------------------------------------------------------------------------


class InMemoryDoctorRepository(DoctorRepository):
    def __init__(self):
        self.items: Dict[str, Doctor] = {}

    async def create(self, doctor: Doctor) -> Doctor:
        for existing in self.items.values():
            if existing.email == doctor.email:
                raise DuplicateDoctorError("email")
            if existing.license_number == doctor.license_number:
                raise DuplicateDoctorError("license_number")
        doctor.id = doctor.id or _new_id()
        self.items[doctor.id] = copy.deepcopy(doctor)
        return doctor

    async def save(self, doctor: Doctor) -> Doctor:
        self.items[doctor.id] = copy.deepcopy(doctor)
        return doctor

    async def find_by_id(self, doctor_id: str) -> Optional[Doctor]:
        doctor = self.items.get(doctor_id)
        return copy.deepcopy(doctor) if doctor else None

    async def find_by_email(self, email: str) -> Optional[Doctor]:
        for doctor in self.items.values():
            if doctor.email == email:
                return copy.deepcopy(doctor)
        return None

    async def exists_by_email(self, email: str) -> bool:
        return any(d.email == email for d in self.items.values())

    async def exists_by_license(self, license_number: str) -> bool:
        return any(d.license_number == license_number for d in self.items.values())

    async def find_many(self, doctor_ids: Iterable[str]) -> Dict[str, Doctor]:
        return {i: copy.deepcopy(self.items[i]) for i in doctor_ids if i in self.items}

    def _listed(self) -> List[Doctor]:
        return [d for d in self.items.values() if d.role == DoctorRole.DOCTOR]

    async def search(self, filters: DoctorFilters, skip: int = 0, limit: int = 20) -> Tuple[List[Doctor], int]:
        def contains(haystack: str, needle: Optional[str]) -> bool:
            return needle is None or needle.strip().lower() in haystack.lower()

        matches = [
            d for d in self._listed()
            if (filters.specialization is None or d.specialization == filters.specialization)
            and contains(d.city, filters.city)
            and contains(d.state, filters.state)
            and (
                filters.search is None
                or any(contains(v, filters.search) for v in (d.name, d.specialization.value, d.city, d.state))
            )
        ]
        matches.sort(key=lambda d: d.name)
        return [copy.deepcopy(d) for d in matches[skip:skip + limit]], len(matches)

    async def list_specializations(self) -> List[Specialization]:
        return sorted({d.specialization for d in self._listed()}, key=lambda s: s.value)

    async def stats(self) -> DoctorStats:
        listed = self._listed()
        years = [d.experience_years for d in listed]
        verified = sum(1 for d in listed if d.is_verified)
        return DoctorStats(
            total_doctors=len(listed),
            verified_doctors=verified,
            unverified_doctors=len(listed) - verified,
            cities=len({d.city for d in listed}),
            states=len({d.state for d in listed}),
            specializations=len({d.specialization for d in listed}),
            average_experience=round(sum(years) / len(years), 1) if years else 0.0,
            min_experience=min(years, default=0),
            max_experience=max(years, default=0),
        )


class InMemoryHospitalRepository(HospitalRepository):
    def __init__(self):
        self.items: Dict[str, Hospital] = {}

    def add(self, hospital: Hospital) -> Hospital:
        hospital.id = hospital.id or _new_id()
        self.items[hospital.id] = hospital
        return hospital

    async def find_by_id(self, hospital_id: str) -> Optional[Hospital]:
        return self.items.get(hospital_id)

    async def find_many(self, hospital_ids: Iterable[str]) -> Dict[str, Hospital]:
        return {i: self.items[i] for i in hospital_ids if i in self.items}

    async def search(self, filters: HospitalFilters, skip: int = 0, limit: int = 20) -> Tuple[List[Hospital], int]:
        matches = []
        for hospital in sorted(self.items.values(), key=lambda h: h.name):
            if filters.type and hospital.type != filters.type:
                continue
            if filters.specialization and not hospital.offers(filters.specialization):
                continue
            if filters.city and filters.city.lower() not in hospital.city.lower():
                continue
            if filters.state and filters.state.lower() not in hospital.state.lower():
                continue
            if filters.search and not hospital.matches_search(filters.search):
                continue
            matches.append(hospital)
        return matches[skip:skip + limit], len(matches)

    async def list_specializations(self) -> List[Department]:
        found = {d for h in self.items.values() for d in h.specialties}
        return sorted(found, key=lambda d: d.value)

    async def stats(self) -> HospitalStats:
        hospitals = list(self.items.values())
        return HospitalStats(
            total_hospitals=len(hospitals),
            government_hospitals=sum(1 for h in hospitals if h.type == HospitalType.GOVERNMENT),
            private_hospitals=sum(1 for h in hospitals if h.type == HospitalType.PRIVATE),
            cities=len({h.city for h in hospitals}),
            states=len({h.state for h in hospitals}),
            specializations=len({d for h in hospitals for d in h.specialties}),
        )


class InMemoryEnrollmentRepository(EnrollmentRepository):
    def __init__(self):
        self.items: Dict[str, Enrollment] = {}

    def add(self, enrollment: Enrollment) -> Enrollment:
        enrollment.id = enrollment.id or _new_id()
        self.items[enrollment.id] = copy.deepcopy(enrollment)
        return enrollment

    async def create(self, enrollment: Enrollment) -> Enrollment:
        return self.add(enrollment)

    async def mark_certificate_generated(self, enrollment_id: str, at: datetime) -> None:
        stored = self.items[enrollment_id]
        stored.certificate_generated = True
        stored.updated_at = at

    async def update_if_status(self, enrollment: Enrollment, expected_status: EnrollmentStatus) -> bool:
        stored = self.items.get(enrollment.id)
        if stored is None or stored.status != expected_status:
            return False
        self.items[enrollment.id] = copy.deepcopy(enrollment)
        return True

    async def find_by_id(self, enrollment_id: str) -> Optional[Enrollment]:
        enrollment = self.items.get(enrollment_id)
        return copy.deepcopy(enrollment) if enrollment else None

    async def find_overlapping(
        self,
        doctor_id: str,
        hospital_id: str,
        start_date: datetime,
        end_date: datetime,
        statuses: Sequence[EnrollmentStatus],
    ) -> Optional[Enrollment]:
        for e in self.items.values():
            if (
                e.doctor_id == doctor_id
                and e.hospital_id == hospital_id
                and e.status in statuses
                and e.overlaps(start_date, end_date)
            ):
                return copy.deepcopy(e)
        return None

    async def find_page(
        self,
        doctor_id: Optional[str] = None,
        status: Optional[EnrollmentStatus] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Enrollment], int]:
        matches = [
            e for e in self.items.values()
            if (doctor_id is None or e.doctor_id == doctor_id) and (status is None or e.status == status)
        ]
        matches.sort(key=lambda e: e.created_at, reverse=True)
        return [copy.deepcopy(e) for e in matches[skip:skip + limit]], len(matches)

    async def find_active(self, doctor_id: str, now: datetime) -> List[Enrollment]:
        matches = [
            e for e in self.items.values()
            if e.doctor_id == doctor_id
            and e.status == EnrollmentStatus.APPROVED
            and e.start_date <= now <= e.end_date
        ]
        matches.sort(key=lambda e: e.start_date)
        return [copy.deepcopy(e) for e in matches]

    async def count_by_status(self, doctor_id: str) -> Dict[EnrollmentStatus, int]:
        counts: Dict[EnrollmentStatus, int] = {}
        for e in self.items.values():
            if e.doctor_id == doctor_id:
                counts[e.status] = counts.get(e.status, 0) + 1
        return counts

    async def sum_completed_hours(self, doctor_id: str) -> int:
        return sum(
            e.total_hours_completed
            for e in self.items.values()
            if e.doctor_id == doctor_id and e.status == EnrollmentStatus.COMPLETED
        )


class InMemoryCertificateRepository(CertificateRepository):
    def __init__(self):
        self.items: Dict[str, Certificate] = {}
        self.taken_numbers: set = set()

    async def create(self, certificate: Certificate) -> Certificate:
        if certificate.certificate_number in self.taken_numbers or any(
            c.certificate_number == certificate.certificate_number for c in self.items.values()
        ):
            raise CertificateNumberTakenError(certificate.certificate_number)
        if any(c.enrollment_id == certificate.enrollment_id for c in self.items.values()):
            raise CertificateAlreadyIssuedError(certificate.enrollment_id)
        certificate.id = _new_id()
        self.items[certificate.id] = copy.deepcopy(certificate)
        return certificate

    async def save(self, certificate: Certificate) -> Certificate:
        self.items[certificate.id] = copy.deepcopy(certificate)
        return certificate

    async def find_by_id(self, certificate_id: str) -> Optional[Certificate]:
        certificate = self.items.get(certificate_id)
        return copy.deepcopy(certificate) if certificate else None

    async def find_by_enrollment_id(self, enrollment_id: str) -> Optional[Certificate]:
        for c in self.items.values():
            if c.enrollment_id == enrollment_id:
                return copy.deepcopy(c)
        return None

    async def exists_by_number(self, certificate_number: str) -> bool:
        return any(c.certificate_number == certificate_number for c in self.items.values())

    async def find_page(self, doctor_id: str, skip: int = 0, limit: int = 20) -> Tuple[List[Certificate], int]:
        matches = sorted(
            (c for c in self.items.values() if c.doctor_id == doctor_id),
            key=lambda c: c.issue_date,
            reverse=True,
        )
        return [copy.deepcopy(c) for c in matches[skip:skip + limit]], len(matches)

    async def stats(self, doctor_id: str) -> CertificateStats:
        mine = [c for c in self.items.values() if c.doctor_id == doctor_id]
        return CertificateStats(
            total_certificates=len(mine),
            verified_certificates=sum(1 for c in mine if c.is_verified),
            total_hours=sum(c.total_hours for c in mine),
        )


class FakeRenderer(CertificateRenderer):
    """Produces a tiny PDF-shaped payload; can be told to fail."""

    def __init__(self):
        self.fail = False
        self.rendered: List[CertificateDocument] = []

    async def render(self, document: CertificateDocument) -> bytes:
        if self.fail:
            raise RenderingError("renderer unavailable")
        self.rendered.append(document)
        return f"%PDF-1.4 {document.certificate_number}".encode()


class InMemoryStorage(CertificateStorage):
    def __init__(self):
        self.fail = False
        self.files: Dict[str, bytes] = {}

    async def save(self, filename: str, content: bytes) -> StoredArtifact:
        if self.fail:
            raise StorageError("disk full")
        path = f"memory://{filename}"
        self.files[path] = content
        return StoredArtifact(path=path, size=len(content))

    async def load(self, path: str) -> Optional[bytes]:
        return self.files.get(path)


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def make_doctor(
    hasher: Optional[PasswordHasher] = None,
    email: str = "doc@example.com",
    license_number: str = "LIC12345",
    role: DoctorRole = DoctorRole.DOCTOR,
    **overrides,
) -> Doctor:
    values = dict(
        name="Dr. Jane Smith",
        email=email,
        password_hash=hasher.hash(TEST_PASSWORD) if hasher else None,
        phone="5551234567",
        specialization=Specialization.CARDIOLOGY,
        license_number=license_number,
        experience_years=8,
        address="12 Harley Street, Suite 4",
        city="Springfield",
        state="Illinois",
        role=role,
    )
    values.update(overrides)
    return Doctor(**values)


def make_hospital(name: str = "City General Hospital", **overrides) -> Hospital:
    values = dict(
        name=name,
        type=HospitalType.GOVERNMENT,
        address="1 Hospital Road",
        city="Springfield",
        state="Illinois",
        capacity=300,
        specialties=[Department.CARDIOLOGY, Department.NEUROLOGY],
    )
    values.update(overrides)
    return Hospital(**values)


def future_period(days_ahead: int = 7, length_days: int = 14) -> Tuple[datetime, datetime]:
    start = start_of_day(utc_now()) + timedelta(days=days_ahead)
    return start, start + timedelta(days=length_days)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def settings(tmp_path):
    return Settings(
        app_env="testing",
        security=SecuritySettings(secret_key=TEST_SECRET, bcrypt_rounds=4),
        logging=LoggingSettings(level="WARNING", format="text"),
        certificates=CertificateSettings(storage_path=str(tmp_path / "certificates")),
    )


@pytest.fixture
def hasher():
    return PasswordHasher(rounds=4)


@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET, "HS256", 60)


@pytest.fixture
def doctors():
    return InMemoryDoctorRepository()


@pytest.fixture
def hospitals():
    return InMemoryHospitalRepository()


@pytest.fixture
def enrollments():
    return InMemoryEnrollmentRepository()


@pytest.fixture
def certificates():
    return InMemoryCertificateRepository()


@pytest.fixture
def renderer():
    return FakeRenderer()


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def hospital(hospitals):
    return hospitals.add(make_hospital())


@pytest.fixture
async def doctor(doctors, hasher):
    return (await doctors.create(make_doctor(hasher))).without_password()


@pytest.fixture
async def admin(doctors, hasher):
    created = await doctors.create(
        make_doctor(hasher, email="admin@example.com", license_number="ADM00001", role=DoctorRole.ADMIN)
    )
    return created.without_password()


@pytest.fixture
def container(settings, doctors, hospitals, enrollments, certificates, renderer, storage):
    container = Container()
    container.register_singleton(ServiceNames.SETTINGS, settings)
    container.register_singleton(ServiceNames.DOCTOR_REPOSITORY, doctors)
    container.register_singleton(ServiceNames.HOSPITAL_REPOSITORY, hospitals)
    container.register_singleton(ServiceNames.ENROLLMENT_REPOSITORY, enrollments)
    container.register_singleton(ServiceNames.CERTIFICATE_REPOSITORY, certificates)
    container.register_singleton(ServiceNames.CERTIFICATE_RENDERER, renderer)
    container.register_singleton(ServiceNames.CERTIFICATE_STORAGE, storage)
    register_security_services(container, settings)
    return container


@pytest.fixture
def client(settings, container):
    with TestClient(create_app(settings, container)) as test_client:
        yield test_client


@pytest.fixture
def register(client):
    """Register a doctor through the API and return (doctor_json, auth_headers)."""

    def _register(email: str = "doc@example.com", license_number: str = "LIC12345"):
        response = client.post(
            "/api/auth/register",
            json={
                "name": "Dr. Jane Smith",
                "email": email,
                "password": TEST_PASSWORD,
                "phone": "5551234567",
                "specialization": "Cardiology",
                "license_number": license_number,
                "experience_years": 8,
                "address": "12 Harley Street, Suite 4",
                "city": "Springfield",
                "state": "Illinois",
            },
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return data["doctor"], {"Authorization": f"Bearer {data['token']}"}

    return _register


@pytest.fixture
def admin_headers(doctors, hasher, tokens):
    """Seed an admin directly in the store; admins are never self-registered."""
    admin_doctor = make_doctor(hasher, email="admin@example.com", license_number="ADM00001", role=DoctorRole.ADMIN)
    admin_doctor.id = _new_id()
    doctors.items[admin_doctor.id] = admin_doctor
    return {"Authorization": f"Bearer {tokens.create(admin_doctor)}"}
