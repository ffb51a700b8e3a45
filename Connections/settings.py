# Connections/settings.py
import os
from dataclasses import dataclass
from typing import List

from dotenv import load_dotenv

load_dotenv()

# Local/demo fallback only. Deployments must set MONGODB_URI.
DEFAULT_MONGO_URI = "mongodb://localhost:27017/complaintDB"
DEFAULT_DB_NAME = "complaintDB"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise RuntimeError(f"{name} must be an integer, got {raw!r}")


@dataclass(frozen=True)
class Settings:
    mongo_uri: str = DEFAULT_MONGO_URI
    mongo_db: str = DEFAULT_DB_NAME
    server_selection_timeout_ms: int = 5000
    socket_timeout_ms: int = 45000
    allow_index_drop: bool = False
    cors_origins: tuple = ("*",)
    log_level: str = "INFO"
    port: int = 8080

    @property
    def uses_default_uri(self) -> bool:
        return self.mongo_uri == DEFAULT_MONGO_URI

    @classmethod
    def from_env(cls) -> "Settings":
        mongo_uri = (os.getenv("MONGODB_URI") or os.getenv("MONGO_URI") or "").strip()
        origins: List[str] = [
            o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()
        ]
        return cls(
            mongo_uri=mongo_uri or DEFAULT_MONGO_URI,
            mongo_db=os.getenv("MONGO_DB", DEFAULT_DB_NAME).strip() or DEFAULT_DB_NAME,
            server_selection_timeout_ms=_int_env("MONGO_SERVER_SELECTION_TIMEOUT_MS", 5000),
            socket_timeout_ms=_int_env("MONGO_SOCKET_TIMEOUT_MS", 45000),
            allow_index_drop=os.getenv("ALLOW_INDEX_DROP", "false").strip().lower() == "true",
            cors_origins=tuple(origins) or ("*",),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper() or "INFO",
            port=_int_env("PORT", 8080),
        )
