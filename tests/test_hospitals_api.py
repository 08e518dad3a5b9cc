"""
Hospital catalogue endpoints.
"""

import pytest

from conftest import make_hospital
from doctorconnect.domain.enums import Department, HospitalType


@pytest.fixture
def catalogue(hospitals):
    return [
        hospitals.add(make_hospital("Apollo Government Hospital")),
        hospitals.add(
            make_hospital(
                "Bayview Private Hospital",
                type=HospitalType.PRIVATE,
                city="Shelbyville",
                specialties=[Department.DERMATOLOGY],
            )
        ),
        hospitals.add(make_hospital("Capital District Hospital", state="Ohio", city="Columbus")),
    ]


def test_list_is_public_and_paginated(client, catalogue):
    response = client.get("/api/hospitals", params={"limit": 2})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total"] == 3
    assert data["currentPage"] == 1
    assert data["totalPages"] == 2
    assert data["hasNext"] is True
    assert data["hasPrev"] is False
    assert [h["name"] for h in data["items"]] == ["Apollo Government Hospital", "Bayview Private Hospital"]


def test_filters(client, catalogue):
    by_type = client.get("/api/hospitals", params={"type": "private"}).json()["data"]
    assert [h["name"] for h in by_type["items"]] == ["Bayview Private Hospital"]

    by_department = client.get("/api/hospitals", params={"specialization": "Neurology"}).json()["data"]
    assert by_department["total"] == 2

    by_search = client.get("/api/hospitals", params={"search": "columbus"}).json()["data"]
    assert [h["name"] for h in by_search["items"]] == ["Capital District Hospital"]


def test_bad_page_is_rejected(client, catalogue):
    response = client.get("/api/hospitals", params={"page": 0})
    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"

    response = client.get("/api/hospitals", params={"limit": 1000})
    assert response.status_code == 400


def test_get_hospital(client, catalogue):
    response = client.get(f"/api/hospitals/{catalogue[0].id}")
    assert response.status_code == 200
    assert response.json()["data"]["specialties"] == ["Cardiology", "Neurology"]


def test_unknown_hospital(client, catalogue):
    response = client.get("/api/hospitals/doesnotexist")
    assert response.status_code == 404
    assert response.json()["error"] == "HOSPITAL_NOT_FOUND"


def test_specializations_and_stats(client, catalogue):
    specializations = client.get("/api/hospitals/specializations").json()["data"]
    assert specializations == ["Cardiology", "Dermatology", "Neurology"]

    stats = client.get("/api/hospitals/stats").json()["data"]
    assert stats == {
        "total_hospitals": 3,
        "government_hospitals": 2,
        "private_hospitals": 1,
        "cities": 3,
        "states": 2,
        "specializations": 3,
    }
