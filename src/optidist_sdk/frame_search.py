from __future__ import annotations

from typing import Iterable, Sequence

from .models_catalog import Frame

MIN_QUERY_LENGTH = 2
MAX_RESULTS = 10

DISTRIBUTION_SEARCH_FIELDS: tuple[str, ...] = ("product_id", "name", "brand", "frame_type")
STOCK_IN_SEARCH_FIELDS: tuple[str, ...] = ("product_id", "name", "brand")


def search_frames(
    query: str | None,
    frames: Iterable[Frame],
    *,
    fields: Sequence[str] = DISTRIBUTION_SEARCH_FIELDS,
    limit: int = MAX_RESULTS,
) -> list[Frame]:
    """Case-insensitive substring match over the catalog, in catalog order.

    Queries shorter than two characters return nothing so a single keystroke
    does not dump the whole catalog into the dropdown.
    """
    if not query or len(query) < MIN_QUERY_LENGTH:
        return []
    needle = query.lower()
    matches: list[Frame] = []
    for frame in frames:
        if any(needle in str(getattr(frame, name, "") or "").lower() for name in fields):
            matches.append(frame)
            if len(matches) >= limit:
                break
    return matches
