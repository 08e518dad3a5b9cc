"""
MongoDB implementation of DoctorRepository.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from pymongo.errors import DuplicateKeyError

from doctorconnect.application.dto.doctor_dto import DoctorFilters, DoctorStats
from doctorconnect.application.ports.repositories.doctor_repo import DoctorRepository
from doctorconnect.domain.entities.doctor import Doctor
from doctorconnect.domain.enums import DoctorRole, Specialization
from doctorconnect.domain.errors import DoctorNotFoundError, DuplicateDoctorError
from ..models.doctor_m import DoctorMongo
from .object_ids import to_object_id, to_object_ids

# Directory queries never list admin accounts
_LISTED: Dict[str, Any] = {"role": DoctorRole.DOCTOR.value}


def _contains(value: str) -> Dict[str, str]:
    return {"$regex": re.escape(value.strip()), "$options": "i"}


class MongoDoctorRepository(DoctorRepository):
    """MongoDB implementation of DoctorRepository."""

    async def create(self, doctor: Doctor) -> Doctor:
        doctor_mongo = self._domain_to_mongo(doctor)
        try:
            await doctor_mongo.insert()
        except DuplicateKeyError as e:
            field = "license_number" if "license_number" in str(e) else "email"
            raise DuplicateDoctorError(field) from e
        return self._mongo_to_domain(doctor_mongo)

    async def save(self, doctor: Doctor) -> Doctor:
        oid = to_object_id(doctor.id)
        if oid is None:
            raise DoctorNotFoundError(str(doctor.id))
        doctor_mongo = self._domain_to_mongo(doctor)
        doctor_mongo.id = oid
        await doctor_mongo.replace()
        return self._mongo_to_domain(doctor_mongo)

    async def find_by_id(self, doctor_id: str) -> Optional[Doctor]:
        oid = to_object_id(doctor_id)
        if oid is None:
            return None
        doctor_mongo = await DoctorMongo.get(oid)
        return self._mongo_to_domain(doctor_mongo) if doctor_mongo else None

    async def find_by_email(self, email: str) -> Optional[Doctor]:
        doctor_mongo = await DoctorMongo.find_one(DoctorMongo.email == email.lower())
        return self._mongo_to_domain(doctor_mongo) if doctor_mongo else None

    async def exists_by_email(self, email: str) -> bool:
        return await DoctorMongo.find(DoctorMongo.email == email.lower()).count() > 0

    async def exists_by_license(self, license_number: str) -> bool:
        return await DoctorMongo.find(DoctorMongo.license_number == license_number).count() > 0

    async def find_many(self, doctor_ids: Iterable[str]) -> Dict[str, Doctor]:
        oids = to_object_ids(doctor_ids)
        if not oids:
            return {}
        docs = await DoctorMongo.find({"_id": {"$in": oids}}).to_list()
        return {str(d.id): self._mongo_to_domain(d) for d in docs}

    async def search(
        self, filters: DoctorFilters, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Doctor], int]:
        query = self._build_query(filters)
        total = await DoctorMongo.find(query).count()
        docs = await DoctorMongo.find(query).sort("+name").skip(skip).limit(limit).to_list()
        return [self._mongo_to_domain(d) for d in docs], total

    async def list_specializations(self) -> List[Specialization]:
        values = await DoctorMongo.distinct("specialization", _LISTED)
        return sorted((Specialization(v) for v in values), key=lambda s: s.value)

    async def stats(self) -> DoctorStats:
        total = await DoctorMongo.find(_LISTED).count()
        verified = await DoctorMongo.find({**_LISTED, "is_verified": True}).count()
        pipeline = [
            {"$match": _LISTED},
            {
                "$group": {
                    "_id": None,
                    "avg": {"$avg": "$experience_years"},
                    "min": {"$min": "$experience_years"},
                    "max": {"$max": "$experience_years"},
                }
            },
        ]
        rows = await DoctorMongo.get_motor_collection().aggregate(pipeline).to_list(length=None)
        experience = rows[0] if rows else {"avg": 0, "min": 0, "max": 0}
        return DoctorStats(
            total_doctors=total,
            verified_doctors=verified,
            unverified_doctors=total - verified,
            cities=len(await DoctorMongo.distinct("city", _LISTED)),
            states=len(await DoctorMongo.distinct("state", _LISTED)),
            specializations=len(await DoctorMongo.distinct("specialization", _LISTED)),
            average_experience=round(float(experience["avg"] or 0), 1),
            min_experience=int(experience["min"] or 0),
            max_experience=int(experience["max"] or 0),
        )

    def _build_query(self, filters: DoctorFilters) -> Dict[str, Any]:
        query: Dict[str, Any] = dict(_LISTED)
        if filters.specialization:
            query["specialization"] = filters.specialization.value
        if filters.city:
            query["city"] = _contains(filters.city)
        if filters.state:
            query["state"] = _contains(filters.state)
        if filters.search:
            pattern = _contains(filters.search)
            query["$or"] = [
                {"name": pattern},
                {"specialization": pattern},
                {"city": pattern},
                {"state": pattern},
            ]
        return query

    def _domain_to_mongo(self, doctor: Doctor) -> DoctorMongo:
        return DoctorMongo(
            name=doctor.name,
            email=doctor.email,
            password=doctor.password_hash or "",
            phone=doctor.phone,
            specialization=doctor.specialization.value,
            license_number=doctor.license_number,
            experience_years=doctor.experience_years,
            address=doctor.address,
            city=doctor.city,
            state=doctor.state,
            is_verified=doctor.is_verified,
            role=doctor.role.value,
            profile_image=doctor.profile_image,
            created_at=doctor.created_at,
            updated_at=doctor.updated_at,
        )

    def _mongo_to_domain(self, doctor_mongo: DoctorMongo) -> Doctor:
        return Doctor(
            id=str(doctor_mongo.id),
            name=doctor_mongo.name,
            email=doctor_mongo.email,
            password_hash=doctor_mongo.password,
            phone=doctor_mongo.phone,
            specialization=Specialization(doctor_mongo.specialization),
            license_number=doctor_mongo.license_number,
            experience_years=doctor_mongo.experience_years,
            address=doctor_mongo.address,
            city=doctor_mongo.city,
            state=doctor_mongo.state,
            is_verified=doctor_mongo.is_verified,
            role=DoctorRole(doctor_mongo.role),
            profile_image=doctor_mongo.profile_image,
            created_at=doctor_mongo.created_at,
            updated_at=doctor_mongo.updated_at,
        )
