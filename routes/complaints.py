# routes/complaints.py
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from Schemas.complaints_schema import (
    ComplaintCreate, ComplaintListResponse, ComplaintResponse, ErrorResponse, MessageResponse, StatusUpdate
)
from services.complaint_service import ComplaintService, Outcome
from services.deps import get_complaint_service, parsed_body
from utils.errors import HTTP_STATUS

router = APIRouter()

ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error(outcome: Outcome) -> JSONResponse:
    """Translate a failed outcome into the error envelope."""
    body = {"success": False, "message": outcome.message, "error": outcome.detail}
    return JSONResponse(status_code=HTTP_STATUS[outcome.error], content=body)


@router.post(
    "",
    response_model=ComplaintResponse,
    status_code=status.HTTP_201_CREATED,
    responses=ERROR_RESPONSES,
)
async def create_complaint(
        body: ComplaintCreate = Depends(parsed_body(ComplaintCreate)),
        service: ComplaintService = Depends(get_complaint_service),
):
    outcome = await service.create(body.model_dump())
    if not outcome.ok:
        return _error(outcome)
    return {
        "success": True,
        "message": "Complaint submitted successfully",
        "data": outcome.data.to_json(),
    }


@router.get("", response_model=ComplaintListResponse, responses={500: {"model": ErrorResponse}})
async def list_complaints(service: ComplaintService = Depends(get_complaint_service)):
    outcome = await service.list_all()
    if not outcome.ok:
        return _error(outcome)
    return {
        "success": True,
        "count": len(outcome.data),
        "data": [r.to_json() for r in outcome.data],
    }


@router.get(
    "/{complaint_id}",
    response_model=ComplaintResponse,
    response_model_exclude_none=True,
    responses=ERROR_RESPONSES,
)
async def get_complaint(complaint_id: str, service: ComplaintService = Depends(get_complaint_service)):
    outcome = await service.get(complaint_id)
    if not outcome.ok:
        return _error(outcome)
    return {"success": True, "data": outcome.data.to_json()}


@router.patch("/{complaint_id}", response_model=ComplaintResponse, responses=ERROR_RESPONSES)
async def update_complaint_status(
        complaint_id: str,
        body: StatusUpdate = Depends(parsed_body(StatusUpdate)),
        service: ComplaintService = Depends(get_complaint_service),
):
    outcome = await service.update_status(complaint_id, body.status)
    if not outcome.ok:
        return _error(outcome)
    return {
        "success": True,
        "message": "Status updated successfully",
        "data": outcome.data.to_json(),
    }


@router.delete("/{complaint_id}", response_model=MessageResponse, responses=ERROR_RESPONSES)
async def delete_complaint(complaint_id: str, service: ComplaintService = Depends(get_complaint_service)):
    outcome = await service.delete(complaint_id)
    if not outcome.ok:
        return _error(outcome)
    return {"success": True, "message": "Complaint deleted successfully"}
