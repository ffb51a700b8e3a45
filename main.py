# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from Connections.mongo_connection import MongoConnectionManager
from Connections.settings import Settings
from middlewares.transaction_logger_middleware import TransactionLoggerMiddleware
from utils.validation import INVALID_BODY, MESSAGES

# ── Routers
from routes.complaints import router as complaints_router
from routes.system import router as system_router, not_found_payload

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, connections: Optional[MongoConnectionManager] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # No connect here: the first request dials MongoDB, so a cold start
        # still serves / and a 503 health report when the store is down.
        try:
            yield
        finally:
            app.state.mongo.close()

    app = FastAPI(title="Complaint Intake API", version="1.0.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.mongo = connections or MongoConnectionManager(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.add_middleware(TransactionLoggerMiddleware)

    # Register Routers
    app.include_router(system_router, tags=["System"])
    app.include_router(complaints_router, prefix="/api/complaints", tags=["Complaints"])

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return JSONResponse(status_code=404, content=not_found_payload(request.url.path))
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "message": str(exc.detail)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.info("Rejected body on %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=400,
            content={"success": False, "message": MESSAGES[INVALID_BODY], "error": INVALID_BODY},
        )

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=app.state.settings.port)
