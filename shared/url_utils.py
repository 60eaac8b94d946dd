"""
URL identifier utilities for the SEO optimizer.

Resolves video and channel URLs to their identifiers using an ordered list
of patterns. Only the first matching pattern is used; later patterns are
never consulted once one matches, even if they would capture something
more specific.
"""

import re
from typing import List, Optional, Pattern

from .errors import ResolutionFailure

# Order matters: the first match wins
VIDEO_ID_PATTERNS: List[Pattern] = [
    re.compile(r'/watch\?(?:[^#]*?&)??v=([^&\n?#]+)'),  # youtube.com/watch?v=ID
    re.compile(r'youtu\.be/([^&\n?#/]+)'),             # youtu.be/ID
    re.compile(r'/embed/([^&\n?#/]+)'),                # youtube.com/embed/ID
    re.compile(r'/v/([^&\n?#/]+)'),                    # youtube.com/v/ID (legacy)
]

CHANNEL_ID_PATTERNS: List[Pattern] = [
    re.compile(r'/@([^/\n?#]+)'),          # youtube.com/@handle
    re.compile(r'/channel/([^/\n?#]+)'),   # youtube.com/channel/UC...
    re.compile(r'/c/([^/\n?#]+)'),         # youtube.com/c/CustomName (legacy)
    re.compile(r'/user/([^/\n?#]+)'),      # youtube.com/user/Name (legacy)
]

PATTERNS_BY_KIND = {
    'video': VIDEO_ID_PATTERNS,
    'channel': CHANNEL_ID_PATTERNS,
}


def _first_match(url: str, patterns: List[Pattern]) -> Optional[str]:
    if not url:
        return None

    url = url.strip()
    for pattern in patterns:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def extract_video_id(url: str) -> Optional[str]:
    """Extract video ID from a watch, short-link, embed or legacy URL."""
    return _first_match(url, VIDEO_ID_PATTERNS)


def extract_channel_id(url: str) -> Optional[str]:
    """Extract channel handle/ID from a handle, channel, custom or user URL."""
    return _first_match(url, CHANNEL_ID_PATTERNS)


def resolve_identifier(url: str, kind: str) -> Optional[str]:
    """
    Resolve a URL to an identifier.

    Args:
        url: Video or channel URL
        kind: 'video' or 'channel'

    Returns:
        The identifier, or None if no pattern matches
    """
    if kind not in PATTERNS_BY_KIND:
        raise ValueError(f"Unknown identifier kind: {kind}")
    return _first_match(url, PATTERNS_BY_KIND[kind])


def require_identifier(url: str, kind: str) -> str:
    """Like resolve_identifier(), but raises ResolutionFailure on no match."""
    identifier = resolve_identifier(url, kind)
    if identifier is None:
        raise ResolutionFailure(url, kind)
    return identifier
