from datetime import datetime
from typing import Optional

from bson import ObjectId
from bson.errors import InvalidId

from utils.date_utils import to_iso_utc


def to_object_id(raw: str) -> Optional[ObjectId]:
    """Parse a path id; None when it is not a valid 24-hex ObjectId."""
    if not isinstance(raw, str) or len(raw) != 24:
        return None
    try:
        return ObjectId(raw)
    except InvalidId:
        return None


def convert_bson(obj):
    """Recursively turn ObjectId/datetime values into JSON-safe strings."""
    if isinstance(obj, ObjectId):
        return str(obj)
    if isinstance(obj, datetime):
        return to_iso_utc(obj)
    if isinstance(obj, dict):
        return {k: convert_bson(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [convert_bson(v) for v in obj]
    return obj
