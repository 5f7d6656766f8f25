from __future__ import annotations

from typing import Optional

from slugify import slugify

from ..core.constants import CHURCH_PLACEHOLDER, DISTRICT_PLACEHOLDER, NAME_PLACEHOLDER


def slug(value: Optional[str], fallback: str) -> str:
    """Filesystem-safe slug (lowercase, transliterated, '-' separated)."""
    text = (value or "").strip()
    return (slugify(text) if text else "") or fallback


def district_slug(distrito: Optional[str]) -> str:
    return slug(distrito, DISTRICT_PLACEHOLDER)


def church_slug(iglesia: Optional[str]) -> str:
    return slug(iglesia, CHURCH_PLACEHOLDER)


def name_slug(nombre: Optional[str]) -> str:
    return slug(nombre, NAME_PLACEHOLDER)
