# services/deps.py
import json

from fastapi import Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from Connections.mongo_connection import MongoConnectionManager
from services.complaint_service import ComplaintService, MongoComplaintStore

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_connections(request: Request) -> MongoConnectionManager:
    return request.app.state.mongo


def get_complaint_service(connections: MongoConnectionManager = Depends(get_connections)) -> ComplaintService:
    return ComplaintService(MongoComplaintStore(connections))


def parsed_body(schema):
    """
    Dependency reading a request body as `schema` from either JSON or an HTML
    form post. Any other content type, or no body at all, reads as empty.
    """

    async def _parse(request: Request):
        ctype = request.headers.get("content-type", "").lower()
        if ctype.startswith(FORM_TYPES):
            data = dict(await request.form())
        elif ctype.startswith("application/json"):
            raw = await request.body()
            try:
                data = json.loads(raw) if raw.strip() else {}
            except ValueError as e:
                raise RequestValidationError(
                    [{"type": "json_invalid", "loc": ("body",), "msg": str(e), "input": None}]
                )
        else:
            data = {}

        try:
            return schema.model_validate({} if data is None else data)
        except ValidationError as e:
            raise RequestValidationError(e.errors())

    return _parse
