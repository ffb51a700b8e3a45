# routes/system.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from Connections.mongo_connection import MongoConnectionManager
from services.deps import get_connections
from utils.date_utils import to_iso_utc, utc_now
from utils.errors import DatastoreError

SERVICE_NAME = "Complaint Intake API"
VERSION = "1.0.0"

ENDPOINTS = {
    "submit": "POST /api/complaints",
    "getAll": "GET /api/complaints",
    "getOne": "GET /api/complaints/:id",
    "update": "PATCH /api/complaints/:id",
    "delete": "DELETE /api/complaints/:id",
    "health": "GET /api/health",
}

AVAILABLE_ENDPOINTS = [
    "GET /",
    "GET /api/health",
    "POST /api/complaints",
    "GET /api/complaints",
    "GET /api/complaints/:id",
    "PATCH /api/complaints/:id",
    "DELETE /api/complaints/:id",
]

router = APIRouter()


@router.get("/")
async def root():
    return {
        "message": SERVICE_NAME,
        "status": "Running",
        "version": VERSION,
        "endpoints": ENDPOINTS,
    }


@router.get("/api/health")
async def health(connections: MongoConnectionManager = Depends(get_connections)):
    try:
        await connections.connect()
    except DatastoreError as e:
        return JSONResponse(
            status_code=503,
            content={
                "status": "ERROR",
                "timestamp": to_iso_utc(utc_now()),
                "database": "Disconnected",
                "mongodb": "Unavailable",
                "error": e.detail,
            },
        )
    return {
        "status": "OK",
        "timestamp": to_iso_utc(utc_now()),
        "database": "Connected" if connections.is_connected else "Disconnected",
        "mongodb": "Working",
    }


def not_found_payload(path: str) -> dict:
    return {
        "success": False,
        "message": "Route not found",
        "requestedPath": path,
        "availableEndpoints": AVAILABLE_ENDPOINTS,
    }
