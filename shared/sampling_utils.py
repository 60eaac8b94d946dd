"""
Deduplication and bounded sampling of extracted signals.

All extracted title/description/tag lists pass through sample_unique()
before they are stored in a profile. Limits are hard caps applied after
deduplication.
"""

from typing import Iterable, List

# Channel profile limits
CHANNEL_TITLE_LIMIT = 10
CHANNEL_DESCRIPTION_LIMIT = 10
CHANNEL_TAG_LIMIT = 20

# Target video limit
VIDEO_TAG_LIMIT = 15


def sample_unique(candidates: Iterable[str], limit: int) -> List[str]:
    """
    Remove exact duplicates (first occurrence wins) and keep at most `limit`.

    Examples:
        >>> sample_unique(['#a', '#b', '#a', '#c'], 2)
        ['#a', '#b']
    """
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise TypeError(f"limit must be an int, got {type(limit).__name__}")
    if limit < 0:
        raise ValueError(f"limit must be non-negative, got {limit}")

    unique = []
    seen = set()
    for candidate in candidates:
        if not isinstance(candidate, str):
            raise TypeError(f"candidates must be strings, got {type(candidate).__name__}")
        if candidate in seen:
            continue
        seen.add(candidate)
        unique.append(candidate)
        if len(unique) >= limit:
            break

    return unique[:limit]
