from __future__ import annotations

import re
from datetime import date
from typing import Optional

from ..core.constants import NATIONAL_ID_PATTERN
from ..core.exceptions import ValidationError

_NATIONAL_ID_RE = re.compile(NATIONAL_ID_PATTERN, re.ASCII)


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} مطلوب")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if value is None or len(value) < min_len:
        raise ValidationError(f"{field_name} يجب ألا يقل عن {min_len} أحرف")
    return value


def is_valid_national_id(value: Optional[str]) -> bool:
    return bool(value) and _NATIONAL_ID_RE.fullmatch(value) is not None


def require_national_id(value: Optional[str]) -> str:
    """National ID: 10 digits starting with 1 (citizen) or 2 (resident)."""
    v = (value or "").strip()
    if not is_valid_national_id(v):
        raise ValidationError("رقم الهوية يجب أن يتكون من 10 أرقام ويبدأ بـ 1 أو 2")
    return v


def require_valid_range(start: date, end: date) -> None:
    if start > end:
        raise ValidationError("تاريخ البداية يجب أن يكون قبل تاريخ النهاية")
