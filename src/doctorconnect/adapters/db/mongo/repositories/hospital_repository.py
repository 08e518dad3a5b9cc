"""
MongoDB implementation of HospitalRepository.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple

from doctorconnect.application.dto.hospital_dto import HospitalFilters, HospitalStats
from doctorconnect.application.ports.repositories.hospital_repo import HospitalRepository
from doctorconnect.domain.entities.hospital import Hospital
from doctorconnect.domain.enums import Department, HospitalType
from ..models.hospital_m import HospitalMongo
from .object_ids import to_object_id, to_object_ids


def _contains(value: str) -> Dict[str, str]:
    return {"$regex": re.escape(value.strip()), "$options": "i"}


class MongoHospitalRepository(HospitalRepository):
    """MongoDB implementation of HospitalRepository."""

    async def find_by_id(self, hospital_id: str) -> Optional[Hospital]:
        oid = to_object_id(hospital_id)
        if oid is None:
            return None
        hospital_mongo = await HospitalMongo.get(oid)
        return self._mongo_to_domain(hospital_mongo) if hospital_mongo else None

    async def find_many(self, hospital_ids: Iterable[str]) -> Dict[str, Hospital]:
        oids = to_object_ids(hospital_ids)
        if not oids:
            return {}
        docs = await HospitalMongo.find({"_id": {"$in": oids}}).to_list()
        return {str(d.id): self._mongo_to_domain(d) for d in docs}

    async def search(
        self, filters: HospitalFilters, skip: int = 0, limit: int = 20
    ) -> Tuple[List[Hospital], int]:
        query = self._build_query(filters)
        total = await HospitalMongo.find(query).count()
        docs = await HospitalMongo.find(query).sort("+name").skip(skip).limit(limit).to_list()
        return [self._mongo_to_domain(d) for d in docs], total

    async def list_specializations(self) -> List[Department]:
        values = await HospitalMongo.distinct("specialties")
        return sorted((Department(v) for v in values), key=lambda d: d.value)

    async def stats(self) -> HospitalStats:
        return HospitalStats(
            total_hospitals=await HospitalMongo.find_all().count(),
            government_hospitals=await HospitalMongo.find(
                HospitalMongo.type == HospitalType.GOVERNMENT.value
            ).count(),
            private_hospitals=await HospitalMongo.find(
                HospitalMongo.type == HospitalType.PRIVATE.value
            ).count(),
            cities=len(await HospitalMongo.distinct("city")),
            states=len(await HospitalMongo.distinct("state")),
            specializations=len(await HospitalMongo.distinct("specialties")),
        )

    def _build_query(self, filters: HospitalFilters) -> Dict[str, Any]:
        query: Dict[str, Any] = {}
        if filters.type:
            query["type"] = filters.type.value
        if filters.specialization:
            query["specialties"] = filters.specialization.value
        if filters.city:
            query["city"] = _contains(filters.city)
        if filters.state:
            query["state"] = _contains(filters.state)
        if filters.search:
            pattern = _contains(filters.search)
            query["$or"] = [
                {"name": pattern},
                {"city": pattern},
                {"state": pattern},
                {"address": pattern},
            ]
        return query

    def _mongo_to_domain(self, hospital_mongo: HospitalMongo) -> Hospital:
        return Hospital(
            id=str(hospital_mongo.id),
            name=hospital_mongo.name,
            type=HospitalType(hospital_mongo.type),
            address=hospital_mongo.address,
            city=hospital_mongo.city,
            state=hospital_mongo.state,
            capacity=hospital_mongo.capacity,
            specialties=[Department(s) for s in hospital_mongo.specialties],
            facilities=list(hospital_mongo.facilities),
            created_at=hospital_mongo.created_at,
            updated_at=hospital_mongo.updated_at,
        )
