# Models/complaint_model.py
import enum
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from bson import ObjectId

from utils.date_utils import utc_now
from utils.mongo_helpers import convert_bson


class ComplaintStatus(str, enum.Enum):
    pending = "Pending"
    in_progress = "In Progress"
    resolved = "Resolved"


@dataclass
class ComplaintRecord:
    name: str
    mobile: str
    email: str
    address: str
    complaint: str
    status: ComplaintStatus = ComplaintStatus.pending
    created_at: datetime = field(default_factory=utc_now)
    id: Optional[ObjectId] = None  # assigned by the store on insert

    def to_document(self) -> Dict[str, Any]:
        doc = {
            "name": self.name,
            "mobile": self.mobile,
            "email": self.email,
            "address": self.address,
            "complaint": self.complaint,
            "status": self.status.value,
            "createdAt": self.created_at,
        }
        if self.id is not None:
            doc["_id"] = self.id
        return doc

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "ComplaintRecord":
        return cls(
            id=doc.get("_id"),
            name=doc.get("name", ""),
            mobile=doc.get("mobile", ""),
            email=doc.get("email", ""),
            address=doc.get("address", ""),
            complaint=doc.get("complaint", ""),
            status=ComplaintStatus(doc.get("status", ComplaintStatus.pending.value)),
            created_at=doc.get("createdAt"),
        )

    def to_json(self) -> Dict[str, Any]:
        out = convert_bson(self.to_document())
        out["_id"] = out.get("_id")
        out["id"] = out["_id"]
        return out
