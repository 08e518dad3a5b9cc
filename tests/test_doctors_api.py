"""
Doctor directory endpoints.
"""

import pytest

from conftest import _new_id, make_doctor
from doctorconnect.domain.enums import DoctorRole, Specialization


def _seed(doctors, doctor):
    doctor.id = _new_id()
    doctors.items[doctor.id] = doctor
    return doctor


@pytest.fixture
def directory(doctors):
    return [
        _seed(
            doctors,
            make_doctor(
                email="amara@example.com",
                license_number="LIC00001",
                name="Dr. Amara Okafor",
                specialization=Specialization.NEUROLOGY,
                city="Columbus",
                state="Ohio",
                experience_years=4,
                is_verified=True,
            ),
        ),
        _seed(
            doctors,
            make_doctor(
                email="bruno@example.com",
                license_number="LIC00002",
                name="Dr. Bruno Keller",
                specialization=Specialization.PEDIATRICS,
                city="Shelbyville",
                experience_years=20,
            ),
        ),
        _seed(
            doctors,
            make_doctor(
                email="root@example.com",
                license_number="ADM00009",
                name="Directory Admin",
                role=DoctorRole.ADMIN,
            ),
        ),
    ]


def test_directory_requires_token(client, directory):
    response = client.get("/api/doctors")
    assert response.status_code == 401
    assert response.json()["error"] == "ACCESS_TOKEN_REQUIRED"


def test_list_sorted_by_name_without_credentials(client, register, directory):
    _, headers = register()
    response = client.get("/api/doctors", headers=headers)
    assert response.status_code == 200
    data = response.json()["data"]
    assert [d["name"] for d in data["items"]] == ["Dr. Amara Okafor", "Dr. Bruno Keller", "Dr. Jane Smith"]
    assert data["total"] == 3
    for entry in data["items"]:
        assert "password" not in entry
        assert "password_hash" not in entry
        assert "email" not in entry
        assert "license_number" not in entry


def test_filters_and_paging(client, register, directory):
    _, headers = register()
    by_specialization = client.get(
        "/api/doctors", params={"specialization": "Neurology"}, headers=headers
    ).json()["data"]
    assert [d["name"] for d in by_specialization["items"]] == ["Dr. Amara Okafor"]

    by_city = client.get("/api/doctors", params={"city": "shelby"}, headers=headers).json()["data"]
    assert [d["name"] for d in by_city["items"]] == ["Dr. Bruno Keller"]

    paged = client.get("/api/doctors", params={"limit": 2, "page": 2}, headers=headers).json()["data"]
    assert [d["name"] for d in paged["items"]] == ["Dr. Jane Smith"]
    assert paged["hasPrev"] is True
    assert paged["hasNext"] is False


def test_shortlists(client, register, directory):
    _, headers = register()
    pediatrics = client.get("/api/doctors/specialization/Pediatrics", headers=headers).json()["data"]
    assert [d["name"] for d in pediatrics] == ["Dr. Bruno Keller"]

    columbus = client.get("/api/doctors/location/columbus", headers=headers).json()["data"]
    assert [d["name"] for d in columbus] == ["Dr. Amara Okafor"]

    search = client.get("/api/doctors/search/ohio", headers=headers).json()["data"]
    assert [d["name"] for d in search] == ["Dr. Amara Okafor"]

    limited = client.get("/api/doctors/search/dr.", params={"limit": 1}, headers=headers).json()["data"]
    assert len(limited) == 1

    response = client.get("/api/doctors/specialization/Astrology", headers=headers)
    assert response.status_code == 400


def test_admins_are_not_listed(client, register, directory):
    _, headers = register()
    admin = directory[2]
    assert client.get(f"/api/doctors/{admin.id}", headers=headers).status_code == 404
    search = client.get("/api/doctors/search/admin", headers=headers).json()["data"]
    assert search == []


def test_get_doctor(client, register, directory):
    _, headers = register()
    response = client.get(f"/api/doctors/{directory[0].id}", headers=headers)
    assert response.status_code == 200
    entry = response.json()["data"]
    assert entry == {
        "id": directory[0].id,
        "name": "Dr. Amara Okafor",
        "specialization": "Neurology",
        "experience_years": 4,
        "city": "Columbus",
        "state": "Ohio",
        "is_verified": True,
    }

    missing = client.get("/api/doctors/not-an-id", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["error"] == "DOCTOR_NOT_FOUND"


def test_specializations_and_stats(client, register, directory):
    _, headers = register()
    specializations = client.get("/api/doctors/specializations", headers=headers).json()["data"]
    assert specializations == ["Cardiology", "Neurology", "Pediatrics"]

    stats = client.get("/api/doctors/stats", headers=headers).json()["data"]
    assert stats["total_doctors"] == 3
    assert stats["verified_doctors"] == 1
    assert stats["unverified_doctors"] == 2
    assert stats["cities"] == 3
    assert stats["states"] == 2
    assert stats["specializations"] == 3
    assert stats["min_experience"] == 4
    assert stats["max_experience"] == 20
    assert stats["average_experience"] == pytest.approx(10.7)
