from __future__ import annotations

from typing import Optional

from ..common.validators import parse_id_list
from .model import SearchFilter


def parse_search(query: Optional[str]) -> SearchFilter:
    """Turn the search box token into a SearchFilter.

    "12, 40;7" -> ids (12, 40, 7). Anything else is a substring search; a token
    that still reads as an integer ("+12") also matches that exact id.
    """

    token = (query or "").strip()
    if not token:
        return SearchFilter()

    ids = parse_id_list(token)
    if ids:
        return SearchFilter(ids=tuple(ids))

    try:
        exact_id: Optional[int] = int(token)
    except ValueError:
        exact_id = None
    return SearchFilter(text=token, exact_id=exact_id)
