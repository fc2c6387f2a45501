# beantrace/models/common.py
from typing import Optional


def required_text(value: Optional[str], message: str) -> str:
    """Strip a free-text form field and reject it when blank."""
    value = (value or "").strip()
    if not value:
        raise ValueError(message)
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None
