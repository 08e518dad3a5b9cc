"""
MongoDB implementation of EnrollmentRepository.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from doctorconnect.application.ports.repositories.enrollment_repo import EnrollmentRepository
from doctorconnect.domain.entities.enrollment import Enrollment
from doctorconnect.domain.enums import Department, EnrollmentStatus
from doctorconnect.domain.errors import EnrollmentNotFoundError
from ..models.enrollment_m import EnrollmentMongo
from .object_ids import to_object_id

logger = logging.getLogger(__name__)

# Fields a state transition or notes edit may change
_MUTABLE_FIELDS = (
    "status",
    "notes",
    "admin_notes",
    "total_hours_completed",
    "completion_date",
    "certificate_generated",
    "updated_at",
)


class MongoEnrollmentRepository(EnrollmentRepository):
    """MongoDB implementation of EnrollmentRepository."""

    async def create(self, enrollment: Enrollment) -> Enrollment:
        enrollment_mongo = self._domain_to_mongo(enrollment)
        await enrollment_mongo.insert()
        return self._mongo_to_domain(enrollment_mongo)

    async def mark_certificate_generated(self, enrollment_id: str, at: datetime) -> None:
        oid = to_object_id(enrollment_id)
        if oid is None:
            raise EnrollmentNotFoundError(enrollment_id)
        result = await EnrollmentMongo.get_motor_collection().update_one(
            {"_id": oid},
            {"$set": {"certificate_generated": True, "updated_at": at}},
        )
        if result.matched_count == 0:
            raise EnrollmentNotFoundError(enrollment_id)

    async def update_if_status(self, enrollment: Enrollment, expected_status: EnrollmentStatus) -> bool:
        oid = to_object_id(enrollment.id)
        if oid is None:
            return False
        document = self._domain_to_mongo(enrollment).model_dump()
        changes = {name: document[name] for name in _MUTABLE_FIELDS}
        result = await EnrollmentMongo.get_motor_collection().update_one(
            {"_id": oid, "status": expected_status.value},
            {"$set": changes},
        )
        if result.modified_count == 0:
            logger.info(
                "Conditional update of enrollment %s lost: status no longer %s",
                enrollment.id,
                expected_status.value,
            )
            return False
        return True

    async def find_by_id(self, enrollment_id: str) -> Optional[Enrollment]:
        oid = to_object_id(enrollment_id)
        if oid is None:
            return None
        enrollment_mongo = await EnrollmentMongo.get(oid)
        return self._mongo_to_domain(enrollment_mongo) if enrollment_mongo else None

    async def find_overlapping(
        self,
        doctor_id: str,
        hospital_id: str,
        start_date: datetime,
        end_date: datetime,
        statuses: Sequence[EnrollmentStatus],
    ) -> Optional[Enrollment]:
        enrollment_mongo = await EnrollmentMongo.find_one(
            {
                "doctor_id": doctor_id,
                "hospital_id": hospital_id,
                "status": {"$in": [s.value for s in statuses]},
                "start_date": {"$lte": end_date},
                "end_date": {"$gte": start_date},
            }
        )
        return self._mongo_to_domain(enrollment_mongo) if enrollment_mongo else None

    async def find_page(
        self,
        doctor_id: Optional[str] = None,
        status: Optional[EnrollmentStatus] = None,
        skip: int = 0,
        limit: int = 20,
    ) -> Tuple[List[Enrollment], int]:
        query: Dict[str, Any] = {}
        if doctor_id is not None:
            query["doctor_id"] = doctor_id
        if status is not None:
            query["status"] = status.value
        total = await EnrollmentMongo.find(query).count()
        docs = await EnrollmentMongo.find(query).sort("-created_at").skip(skip).limit(limit).to_list()
        return [self._mongo_to_domain(d) for d in docs], total

    async def find_active(self, doctor_id: str, now: datetime) -> List[Enrollment]:
        docs = await EnrollmentMongo.find(
            {
                "doctor_id": doctor_id,
                "status": EnrollmentStatus.APPROVED.value,
                "start_date": {"$lte": now},
                "end_date": {"$gte": now},
            }
        ).sort("+start_date").to_list()
        return [self._mongo_to_domain(d) for d in docs]

    async def count_by_status(self, doctor_id: str) -> Dict[EnrollmentStatus, int]:
        pipeline = [
            {"$match": {"doctor_id": doctor_id}},
            {"$group": {"_id": "$status", "count": {"$sum": 1}}},
        ]
        rows = await EnrollmentMongo.get_motor_collection().aggregate(pipeline).to_list(length=None)
        counts = {status: 0 for status in EnrollmentStatus}
        for row in rows:
            counts[EnrollmentStatus(row["_id"])] = row["count"]
        return counts

    async def sum_completed_hours(self, doctor_id: str) -> int:
        pipeline = [
            {"$match": {"doctor_id": doctor_id, "status": EnrollmentStatus.COMPLETED.value}},
            {"$group": {"_id": None, "hours": {"$sum": "$total_hours_completed"}}},
        ]
        rows = await EnrollmentMongo.get_motor_collection().aggregate(pipeline).to_list(length=None)
        return int(rows[0]["hours"]) if rows else 0

    def _domain_to_mongo(self, enrollment: Enrollment) -> EnrollmentMongo:
        return EnrollmentMongo(
            doctor_id=enrollment.doctor_id,
            hospital_id=enrollment.hospital_id,
            start_date=enrollment.start_date,
            end_date=enrollment.end_date,
            service_hours=enrollment.service_hours,
            department=enrollment.department.value,
            status=enrollment.status.value,
            notes=enrollment.notes,
            admin_notes=enrollment.admin_notes,
            total_hours_completed=enrollment.total_hours_completed,
            completion_date=enrollment.completion_date,
            certificate_generated=enrollment.certificate_generated,
            created_at=enrollment.created_at,
            updated_at=enrollment.updated_at,
        )

    def _mongo_to_domain(self, enrollment_mongo: EnrollmentMongo) -> Enrollment:
        return Enrollment(
            id=str(enrollment_mongo.id),
            doctor_id=enrollment_mongo.doctor_id,
            hospital_id=enrollment_mongo.hospital_id,
            start_date=enrollment_mongo.start_date,
            end_date=enrollment_mongo.end_date,
            service_hours=enrollment_mongo.service_hours,
            department=Department(enrollment_mongo.department),
            status=EnrollmentStatus(enrollment_mongo.status),
            notes=enrollment_mongo.notes,
            admin_notes=enrollment_mongo.admin_notes,
            total_hours_completed=enrollment_mongo.total_hours_completed,
            completion_date=enrollment_mongo.completion_date,
            certificate_generated=enrollment_mongo.certificate_generated,
            created_at=enrollment_mongo.created_at,
            updated_at=enrollment_mongo.updated_at,
        )
