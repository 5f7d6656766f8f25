from __future__ import annotations

import re
from typing import Iterable, List, Optional

from email_validator import EmailNotValidError, validate_email

_ID_SEPARATORS = re.compile(r"[,;|\s]+")


def split_id_tokens(raw: str) -> List[str]:
    """Split on comma / semicolon / pipe / whitespace, dropping empty parts."""
    return [p for p in _ID_SEPARATORS.split(raw or "") if p]


def parse_id_list(raw: str) -> Optional[List[int]]:
    """Return the ids when *every* token is a plain integer, else None.

    Duplicates are removed, first occurrence order is kept.
    """
    parts = split_id_tokens(raw)
    if not parts or not all(p.isascii() and p.isdigit() for p in parts):
        return None
    return unique_ids(int(p) for p in parts)


def parse_lenient_ids(raw: str) -> List[int]:
    """Parse a comma separated option, ignoring garbage and non-positive values."""
    out: list[int] = []
    for part in (raw or "").split(","):
        try:
            value = int(part.strip())
        except ValueError:
            continue
        if value > 0:
            out.append(value)
    return unique_ids(out)


def unique_ids(values: Iterable[int]) -> List[int]:
    seen: set[int] = set()
    out: list[int] = []
    for v in values:
        v = int(v)
        if v not in seen:
            seen.add(v)
            out.append(v)
    return out


def normalize_email(value: Optional[str]) -> Optional[str]:
    """Syntactic check only (no DNS). Returns the trimmed address or None."""
    email = (value or "").strip()
    if not email:
        return None
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return None
    return email
