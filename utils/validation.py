# utils/validation.py
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from Models.complaint_model import ComplaintStatus

REQUIRED_FIELDS = ("name", "mobile", "email", "address", "complaint")

MOBILE_RE = re.compile(r"[0-9]{10}")
EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

MISSING_FIELDS = "missing_fields"
BAD_MOBILE = "bad_mobile"
BAD_EMAIL = "bad_email"
BAD_STATUS = "bad_status"
INVALID_BODY = "invalid_body"

# Accepted on input, stored under the canonical value.
STATUS_ALIASES = {"InProgress": ComplaintStatus.in_progress}

MESSAGES = {
    MISSING_FIELDS: "All fields are required: name, mobile, email, address, complaint",
    BAD_MOBILE: "Mobile number must be exactly 10 digits",
    BAD_EMAIL: "Please enter a valid email address",
    BAD_STATUS: "Status must be one of: " + ", ".join(s.value for s in ComplaintStatus),
    INVALID_BODY: "Request body could not be read as JSON or form data",
}


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    value: Any = None
    reason: Optional[str] = None

    @property
    def message(self) -> Optional[str]:
        return MESSAGES.get(self.reason) if self.reason else None

    @classmethod
    def success(cls, value: Any) -> "ValidationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)


def _clean(v: Any) -> str:
    if v is None:
        return ""
    return str(v).strip()


def validate_complaint(payload: Mapping[str, Any]) -> ValidationResult:
    """
    Check a create payload: required fields, then mobile, then email.
    Only the first failure is reported. On success `value` holds the
    normalised fields: trimmed and email lower-cased, with the complaint
    text kept as supplied.
    """
    fields: Dict[str, str] = {k: _clean(payload.get(k)) for k in REQUIRED_FIELDS}

    if not all(fields.values()):
        return ValidationResult.failure(MISSING_FIELDS)

    if not MOBILE_RE.fullmatch(fields["mobile"]):
        return ValidationResult.failure(BAD_MOBILE)

    if not EMAIL_RE.fullmatch(fields["email"]):
        return ValidationResult.failure(BAD_EMAIL)

    fields["email"] = fields["email"].lower()
    fields["complaint"] = str(payload["complaint"])
    return ValidationResult.success(fields)


def validate_status(value: Any) -> ValidationResult:
    raw = _clean(value)
    try:
        return ValidationResult.success(STATUS_ALIASES.get(raw) or ComplaintStatus(raw))
    except ValueError:
        return ValidationResult.failure(BAD_STATUS)
