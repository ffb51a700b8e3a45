import time
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from utils.transaction_logger import build_log, log_transaction


class TransactionLoggerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.time()
        response = await call_next(request)

        duration = int((time.time() - start) * 1000)
        log_transaction(build_log(request, response.status_code, duration))

        return response
