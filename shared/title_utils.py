"""
Title cleanup utilities for the SEO optimizer.

Scraped titles arrive with page decorations attached:
1. The document <title> carries a trailing " - YouTube" suffix
2. Accessibility labels append "by <author> <N> <unit> ago" attribution

These helpers strip the decorations and decide which candidates are worth
keeping as channel title samples.
"""

import json
import re

PLATFORM_TITLE_SUFFIX = ' - YouTube'

# Channel title candidate bounds
MIN_TITLE_RUN_LENGTH = 10      # title runs must be longer than this
MIN_ARIA_LABEL_LENGTH = 20     # aria labels must be longer than this
MAX_ARIA_LABEL_LENGTH = 200    # ... and shorter than this
MIN_CLEANED_LABEL_LENGTH = 10  # what is left after stripping attribution

ATTRIBUTION_PATTERN = re.compile(r'by .+ \d+ .+ago', re.IGNORECASE)


def strip_platform_suffix(title: str, suffix: str = PLATFORM_TITLE_SUFFIX) -> str:
    """
    Remove a trailing platform suffix and surrounding whitespace.

    Examples:
        >>> strip_platform_suffix("Foo Bar - YouTube")
        'Foo Bar'

        >>> strip_platform_suffix("Foo - YouTube - Bar")
        'Foo - YouTube - Bar'
    """
    if not title:
        return ''

    title = title.strip()
    if title.endswith(suffix):
        title = title[:-len(suffix)]
    return title.strip()


def strip_attribution(label: str) -> str:
    """Remove the 'by <author> <N> <unit> ago' fragment from an aria label."""
    if not label:
        return ''
    return ATTRIBUTION_PATTERN.sub('', label).strip()


def is_title_run_candidate(text: str) -> bool:
    """Title runs that look like handles (@name) or are too short are noise."""
    return bool(text) and '@' not in text and len(text) > MIN_TITLE_RUN_LENGTH


def clean_aria_label(label: str) -> str:
    """
    Turn an accessibility label into a title candidate.

    Returns '' when the label is out of bounds or too short once the
    attribution fragment is removed.
    """
    if not label or not (MIN_ARIA_LABEL_LENGTH < len(label) < MAX_ARIA_LABEL_LENGTH):
        return ''

    cleaned = strip_attribution(label)
    if len(cleaned) > MIN_CLEANED_LABEL_LENGTH:
        return cleaned
    return ''


def unescape_json_text(text: str) -> str:
    """
    Decode JSON string escapes captured from a script blob.

    Captures like 'Tips \\u0026 Tricks' become 'Tips & Tricks'. A capture
    that is not a valid JSON string body (e.g. cut off at an escaped quote)
    is returned unchanged.
    """
    if not text or '\\' not in text:
        return text

    try:
        return json.loads(f'"{text}"')
    except json.JSONDecodeError:
        return text
