"""
MongoDB implementation of CertificateRepository.
"""

from typing import List, Optional, Tuple

from pymongo.errors import DuplicateKeyError

from doctorconnect.application.dto.certificate_dto import CertificateStats
from doctorconnect.application.ports.repositories.certificate_repo import CertificateRepository
from doctorconnect.domain.entities.certificate import Certificate
from doctorconnect.domain.enums import Department
from doctorconnect.domain.errors import (
    CertificateAlreadyIssuedError,
    CertificateNotFoundError,
    CertificateNumberTakenError,
)
from ..models.certificate_m import CertificateMongo
from .object_ids import to_object_id


class MongoCertificateRepository(CertificateRepository):
    """MongoDB implementation of CertificateRepository."""

    async def create(self, certificate: Certificate) -> Certificate:
        certificate_mongo = self._domain_to_mongo(certificate)
        try:
            await certificate_mongo.insert()
        except DuplicateKeyError as e:
            if "enrollment_id" in str(e):
                raise CertificateAlreadyIssuedError(certificate.enrollment_id) from e
            raise CertificateNumberTakenError(certificate.certificate_number) from e
        return self._mongo_to_domain(certificate_mongo)

    async def save(self, certificate: Certificate) -> Certificate:
        oid = to_object_id(certificate.id)
        if oid is None:
            raise CertificateNotFoundError(str(certificate.id))
        certificate_mongo = self._domain_to_mongo(certificate)
        certificate_mongo.id = oid
        await certificate_mongo.replace()
        return self._mongo_to_domain(certificate_mongo)

    async def find_by_id(self, certificate_id: str) -> Optional[Certificate]:
        oid = to_object_id(certificate_id)
        if oid is None:
            return None
        certificate_mongo = await CertificateMongo.get(oid)
        return self._mongo_to_domain(certificate_mongo) if certificate_mongo else None

    async def find_by_enrollment_id(self, enrollment_id: str) -> Optional[Certificate]:
        certificate_mongo = await CertificateMongo.find_one(CertificateMongo.enrollment_id == enrollment_id)
        return self._mongo_to_domain(certificate_mongo) if certificate_mongo else None

    async def exists_by_number(self, certificate_number: str) -> bool:
        count = await CertificateMongo.find(
            CertificateMongo.certificate_number == certificate_number
        ).count()
        return count > 0

    async def find_page(
        self, doctor_id: str, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Certificate], int]:
        query = CertificateMongo.find(CertificateMongo.doctor_id == doctor_id)
        total = await query.count()
        docs = await CertificateMongo.find(
            CertificateMongo.doctor_id == doctor_id
        ).sort("-issue_date").skip(skip).limit(limit).to_list()
        return [self._mongo_to_domain(d) for d in docs], total

    async def stats(self, doctor_id: str) -> CertificateStats:
        pipeline = [
            {"$match": {"doctor_id": doctor_id}},
            {
                "$group": {
                    "_id": None,
                    "total": {"$sum": 1},
                    "verified": {"$sum": {"$cond": ["$is_verified", 1, 0]}},
                    "hours": {"$sum": "$total_hours"},
                }
            },
        ]
        rows = await CertificateMongo.get_motor_collection().aggregate(pipeline).to_list(length=None)
        if not rows:
            return CertificateStats()
        row = rows[0]
        return CertificateStats(
            total_certificates=row["total"],
            verified_certificates=row["verified"],
            total_hours=row["hours"],
        )

    def _domain_to_mongo(self, certificate: Certificate) -> CertificateMongo:
        return CertificateMongo(
            enrollment_id=certificate.enrollment_id,
            doctor_id=certificate.doctor_id,
            hospital_id=certificate.hospital_id,
            certificate_number=certificate.certificate_number,
            issue_date=certificate.issue_date,
            service_period=certificate.service_period,
            total_hours=certificate.total_hours,
            department=certificate.department.value,
            file_path=certificate.file_path,
            file_size=certificate.file_size,
            is_verified=certificate.is_verified,
            verification_date=certificate.verification_date,
            verified_by=certificate.verified_by,
            additional_notes=certificate.additional_notes,
            created_at=certificate.created_at,
            updated_at=certificate.updated_at,
        )

    def _mongo_to_domain(self, certificate_mongo: CertificateMongo) -> Certificate:
        return Certificate(
            id=str(certificate_mongo.id),
            enrollment_id=certificate_mongo.enrollment_id,
            doctor_id=certificate_mongo.doctor_id,
            hospital_id=certificate_mongo.hospital_id,
            certificate_number=certificate_mongo.certificate_number,
            issue_date=certificate_mongo.issue_date,
            service_period=certificate_mongo.service_period,
            total_hours=certificate_mongo.total_hours,
            department=Department(certificate_mongo.department),
            file_path=certificate_mongo.file_path,
            file_size=certificate_mongo.file_size,
            is_verified=certificate_mongo.is_verified,
            verification_date=certificate_mongo.verification_date,
            verified_by=certificate_mongo.verified_by,
            additional_notes=certificate_mongo.additional_notes,
            created_at=certificate_mongo.created_at,
            updated_at=certificate_mongo.updated_at,
        )
