"""
End-to-end enrollment and certificate flow over HTTP.
"""

from datetime import timedelta

from conftest import future_period
from doctorconnect.core.utils.datetime_utils import utc_now
from doctorconnect.domain.entities import Enrollment
from doctorconnect.domain.enums import Department, EnrollmentStatus


def _enroll(client, headers, hospital_id, department="Cardiology", period=None, hours=20):
    start, end = period or future_period(days_ahead=1, length_days=14)
    return client.post(
        "/api/enrollments",
        headers=headers,
        json={
            "hospital_id": hospital_id,
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "service_hours": hours,
            "department": department,
            "notes": "Available on weekends",
        },
    )


def test_full_approval_flow(client, register, admin_headers, hospital):
    _, headers = register()

    created = _enroll(client, headers, hospital.id)
    assert created.status_code == 201, created.text
    enrollment = created.json()["data"]
    assert enrollment["status"] == "pending"
    assert enrollment["hospital"]["name"] == hospital.name

    pending = client.get("/api/admin/enrollments/pending", headers=admin_headers).json()["data"]
    assert pending["total"] == 1
    assert pending["items"][0]["doctor"]["name"] == "Dr. Jane Smith"

    approved = client.put(f"/api/admin/enrollments/{enrollment['id']}/approve", headers=admin_headers)
    assert approved.status_code == 200
    body = approved.json()
    assert body["message"] == "Enrollment approved successfully"
    assert body["data"]["enrollment"]["status"] == "approved"
    certificate = body["data"]["certificate"]
    assert certificate["total_hours"] == 40
    assert certificate["has_file"] is True
    assert certificate["verification_status"] == "Pending Verification"
    assert "file_path" not in certificate

    again = client.put(f"/api/admin/enrollments/{enrollment['id']}/approve", headers=admin_headers)
    assert again.status_code == 400
    assert again.json()["error"] == "INVALID_TRANSITION"

    listing = client.get("/api/certificates", headers=headers).json()["data"]
    assert listing["total"] == 1

    download = client.get(f"/api/certificates/{certificate['id']}/download", headers=headers)
    assert download.status_code == 200
    assert download.headers["content-type"] == "application/pdf"
    assert (
        download.headers["content-disposition"]
        == f'attachment; filename="certificate-{certificate["certificate_number"]}.pdf"'
    )
    assert download.content.startswith(b"%PDF")

    verified = client.put(f"/api/admin/certificates/{certificate['id']}/verify", headers=admin_headers)
    assert verified.json()["data"]["verification_status"] == "Verified"

    stats = client.get("/api/certificates/stats", headers=headers).json()["data"]
    assert stats == {
        "total_certificates": 1,
        "verified_certificates": 1,
        "pending_verification": 0,
        "total_hours": 40,
    }


def test_overlapping_request_rejected(client, register, hospital):
    _, headers = register()
    assert _enroll(client, headers, hospital.id).status_code == 201

    overlap = _enroll(client, headers, hospital.id)
    assert overlap.status_code == 400
    assert overlap.json()["error"] == "OVERLAPPING_ENROLLMENT"


def test_creation_rules(client, register, hospital):
    _, headers = register()

    past = utc_now() - timedelta(days=3)
    response = _enroll(client, headers, hospital.id, period=(past, past + timedelta(days=7)))
    assert response.status_code == 400
    assert "past" in response.json()["message"]

    response = _enroll(client, headers, hospital.id, department="Urology")
    assert response.json()["error"] == "DEPARTMENT_NOT_AVAILABLE"

    response = _enroll(client, headers, "unknown-hospital")
    assert response.status_code == 404


def test_doctor_manages_own_pending_enrollment(client, register, hospital):
    _, headers = register()
    _, other_headers = register(email="other@example.com", license_number="LIC54321")
    enrollment_id = _enroll(client, headers, hospital.id).json()["data"]["id"]

    assert client.get(f"/api/enrollments/{enrollment_id}", headers=other_headers).status_code == 404
    assert client.delete(f"/api/enrollments/{enrollment_id}", headers=other_headers).status_code == 404

    updated = client.put(f"/api/enrollments/{enrollment_id}", headers=headers, json={"notes": "Mornings only"})
    assert updated.json()["data"]["notes"] == "Mornings only"

    cancelled = client.delete(f"/api/enrollments/{enrollment_id}", headers=headers)
    assert cancelled.json()["data"]["status"] == "cancelled"

    listing = client.get("/api/enrollments", headers=headers, params={"status": "cancelled"}).json()["data"]
    assert [e["id"] for e in listing["items"]] == [enrollment_id]

    stats = client.get("/api/enrollments/stats", headers=headers).json()["data"]
    assert stats["total"] == 1
    assert stats["cancelled"] == 1


def test_reject_flow(client, register, admin_headers, hospital):
    _, headers = register()
    enrollment_id = _enroll(client, headers, hospital.id).json()["data"]["id"]

    missing_reason = client.put(
        f"/api/admin/enrollments/{enrollment_id}/reject", headers=admin_headers, json={"rejection_reason": " "}
    )
    assert missing_reason.status_code == 400

    rejected = client.put(
        f"/api/admin/enrollments/{enrollment_id}/reject",
        headers=admin_headers,
        json={"rejection_reason": "No capacity this month"},
    )
    data = rejected.json()["data"]
    assert data["status"] == "rejected"
    assert data["rejection_reason"] == "No capacity this month"


def test_admin_routes_need_admin(client, register):
    _, headers = register()
    response = client.get("/api/admin/enrollments", headers=headers)
    assert response.status_code == 403
    assert response.json()["error"] == "ACCESS_DENIED"


def test_complete_and_active(client, register, admin_headers, hospital, enrollments):
    doctor, headers = register()
    now = utc_now()
    running = enrollments.add(
        Enrollment(
            doctor_id=doctor["id"],
            hospital_id=hospital.id,
            start_date=now - timedelta(days=3),
            end_date=now + timedelta(days=3),
            service_hours=14,
            department=Department.CARDIOLOGY,
            status=EnrollmentStatus.APPROVED,
        )
    )
    finished = enrollments.add(
        Enrollment(
            doctor_id=doctor["id"],
            hospital_id=hospital.id,
            start_date=now - timedelta(days=15),
            end_date=now - timedelta(days=1),
            service_hours=20,
            department=Department.CARDIOLOGY,
            status=EnrollmentStatus.APPROVED,
        )
    )

    active = client.get("/api/enrollments/active", headers=headers).json()["data"]
    assert [e["id"] for e in active] == [running.id]

    early = client.put(f"/api/admin/enrollments/{running.id}/complete", headers=admin_headers)
    assert early.status_code == 400
    assert early.json()["error"] == "INVALID_TRANSITION"

    done = client.put(f"/api/admin/enrollments/{finished.id}/complete", headers=admin_headers).json()["data"]
    assert done["status"] == "completed"
    assert done["total_hours_completed"] == 40

    generated = client.post(f"/api/certificates/generate/{finished.id}", headers=headers)
    assert generated.status_code == 201
    assert generated.json()["data"]["total_hours"] == 40

    duplicate = client.post(f"/api/certificates/generate/{finished.id}", headers=headers)
    assert duplicate.status_code == 409
    assert duplicate.json()["error"] == "CERTIFICATE_EXISTS"


def test_degraded_certificate_is_regenerated_on_download(client, register, admin_headers, hospital, renderer):
    _, headers = register()
    enrollment_id = _enroll(client, headers, hospital.id).json()["data"]["id"]

    renderer.fail = True
    approved = client.put(f"/api/admin/enrollments/{enrollment_id}/approve", headers=admin_headers).json()
    certificate = approved["data"]["certificate"]
    assert certificate["has_file"] is False

    renderer.fail = False
    download = client.get(f"/api/certificates/{certificate['id']}/download", headers=headers)
    assert download.status_code == 200
    assert certificate["certificate_number"].encode() in download.content

    refreshed = client.get(f"/api/certificates/{certificate['id']}", headers=headers).json()["data"]
    assert refreshed["has_file"] is True
