"""ObjectId helpers shared by the Mongo repositories."""

from typing import Iterable, List, Optional

from beanie import PydanticObjectId
from bson import ObjectId


def to_object_id(value: Optional[str]) -> Optional[PydanticObjectId]:
    """Parse an id string; malformed ids map to None (treated as not found)."""
    if not value or not ObjectId.is_valid(value):
        return None
    return PydanticObjectId(value)


def to_object_ids(values: Iterable[str]) -> List[PydanticObjectId]:
    return [oid for oid in (to_object_id(v) for v in values) if oid is not None]
