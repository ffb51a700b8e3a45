# Schemas/complaints_schema.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from Models.complaint_model import ComplaintStatus


# ---------- Requests ----------
# Fields stay optional so a missing value reaches the validation layer
# (400 with a specific reason) instead of FastAPI's generic 422.
class ComplaintCreate(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, extra="ignore")

    name: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None
    address: Optional[str] = None
    complaint: Optional[str] = None


class StatusUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: Optional[str] = Field(None, description=" | ".join(s.value for s in ComplaintStatus))


# ---------- Responses ----------
class ComplaintOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    mongo_id: str = Field(alias="_id")
    id: str
    name: str
    mobile: str
    email: str
    address: str
    complaint: str
    status: ComplaintStatus
    createdAt: str


class ComplaintResponse(BaseModel):
    success: bool = True
    message: Optional[str] = None
    data: ComplaintOut


class ComplaintListResponse(BaseModel):
    success: bool = True
    count: int
    data: List[ComplaintOut]


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    error: Optional[str] = None
