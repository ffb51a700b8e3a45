# utils/transaction_logger.py
import logging

logger = logging.getLogger("transactions")


def build_log(request, response_status, duration_ms: int):
    """Build the transaction record for one request."""
    client = request.client.host if request.client else None
    return {
        "endpoint": request.url.path,
        "method": request.method,
        "query_params": dict(request.query_params),
        "response_status": response_status,
        "client": client,
        "user_agent": request.headers.get("user-agent"),
        "duration_ms": duration_ms,
    }


def log_transaction(log: dict):
    level = logging.WARNING if log["response_status"] >= 500 else logging.INFO
    logger.log(
        level,
        "%s %s -> %s (%d ms) client=%s",
        log["method"],
        log["endpoint"],
        log["response_status"],
        log["duration_ms"],
        log["client"],
        extra={"transaction": log},
    )
