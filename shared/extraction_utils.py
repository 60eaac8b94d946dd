"""
Field extraction for the SEO optimizer.

YouTube has no stable public document format, so fields are recovered with
layered heuristics over the raw page markup. Each heuristic is a strategy
function `strategy(html) -> list of candidates`. Strategies are registered
per field and all of them run; their outputs are concatenated in registry
order. No strategy is authoritative.

Channel pages: titles, descriptions and hashtags from the embedded script
blobs. Video pages: <title>, meta description, meta keywords and hashtags,
with the page parsed by BeautifulSoup once and shared by the video strategies.
"""

import re
from typing import Callable, Dict, List, Optional

from bs4 import BeautifulSoup

from .title_utils import (
    clean_aria_label,
    is_title_run_candidate,
    strip_platform_suffix,
    unescape_json_text,
)

Strategy = Callable[[str], List[str]]
VideoStrategy = Callable[[str, BeautifulSoup], List[str]]

TITLE_RUN_PATTERN = re.compile(r'"title":\s*{\s*"runs":\s*\[\s*{\s*"text":\s*"([^"]+)"')
ARIA_LABEL_PATTERN = re.compile(r'"ariaLabel":\s*"([^"]+)"')
SIMPLE_TEXT_DESCRIPTION_PATTERN = re.compile(r'"description":\s*{\s*"simpleText":\s*"([^"]+)"')
# ASCII word characters plus the Arabic block
HASHTAG_PATTERN = re.compile(r'#[\w\u0600-\u06FF]+', re.ASCII)

MIN_DESCRIPTION_LENGTH = 20


# ============================================================================
# Channel strategies
# ============================================================================

def extract_title_runs(html: str) -> List[str]:
    """Video titles from "title": {"runs": [{"text": ...}]} blobs."""
    titles = []
    for match in TITLE_RUN_PATTERN.finditer(html):
        text = match.group(1)
        if is_title_run_candidate(text):
            titles.append(unescape_json_text(text))
    return titles


def extract_aria_label_titles(html: str) -> List[str]:
    """Video titles from accessibility labels, attribution stripped."""
    titles = []
    for match in ARIA_LABEL_PATTERN.finditer(html):
        cleaned = clean_aria_label(match.group(1))
        if cleaned:
            titles.append(unescape_json_text(cleaned))
    return titles


def extract_simple_text_descriptions(html: str) -> List[str]:
    descriptions = []
    for match in SIMPLE_TEXT_DESCRIPTION_PATTERN.finditer(html):
        text = match.group(1)
        if len(text) > MIN_DESCRIPTION_LENGTH:
            descriptions.append(unescape_json_text(text))
    return descriptions


def extract_hashtags(html: str) -> List[str]:
    """Every hashtag-shaped token anywhere in the markup (Latin and Arabic)."""
    return HASHTAG_PATTERN.findall(html)


CHANNEL_STRATEGIES: Dict[str, List[Strategy]] = {
    'titles': [extract_title_runs, extract_aria_label_titles],
    'descriptions': [extract_simple_text_descriptions],
    'tags': [extract_hashtags],
}


# ============================================================================
# Video strategies
# ============================================================================
# Video strategies receive the raw markup and the page parsed once by
# extract_video_info: `strategy(html, soup) -> list of candidates`.

def _meta_content(soup: BeautifulSoup, name: str) -> str:
    tag = soup.find('meta', attrs={'name': name})
    if tag and tag.get('content'):
        return tag.get('content')
    return ''


def extract_meta_keywords(html: str, soup: Optional[BeautifulSoup] = None) -> List[str]:
    """Comma-separated <meta name="keywords"> content, trimmed."""
    if soup is None:
        soup = BeautifulSoup(html, 'html.parser')
    keywords = _meta_content(soup, 'keywords')
    return [keyword.strip() for keyword in keywords.split(',') if keyword.strip()]


def extract_video_hashtags(html: str, soup: Optional[BeautifulSoup] = None) -> List[str]:
    return extract_hashtags(html)


VIDEO_TAG_STRATEGIES: List[VideoStrategy] = [extract_meta_keywords, extract_video_hashtags]


# ============================================================================
# Runners
# ============================================================================

def run_strategies(strategies: List[Callable], html: str, *args) -> List[str]:
    """
    Run every strategy and concatenate the candidates.

    Extra positional args (the parsed page, for video strategies) are passed
    through to each strategy. A strategy that raises is logged and skipped;
    the remaining strategies still contribute.
    """
    candidates = []
    if not html:
        return candidates

    for strategy in strategies:
        try:
            candidates.extend(strategy(html, *args))
        except Exception as e:
            print(f"Extraction strategy {strategy.__name__} failed: {e}")
    return candidates


def extract_channel_patterns(html: str) -> Dict[str, List[str]]:
    """
    Extract raw (unsampled) channel candidates.

    Returns dict with:
        titles: list - title candidates in discovery order
        descriptions: list - description candidates
        tags: list - hashtag candidates
    """
    return {
        field: run_strategies(strategies, html)
        for field, strategies in CHANNEL_STRATEGIES.items()
    }


def extract_video_info(html: str) -> Dict:
    """
    Extract title, description and raw tag candidates from a video page.

    Tags are returned unsampled; callers apply the video tag limit.
    """
    info = {
        'title': '',
        'description': '',
        'tags': [],
    }

    if not html:
        return info

    soup = BeautifulSoup(html, 'html.parser')

    title_tag = soup.find('title')
    if title_tag:
        info['title'] = strip_platform_suffix(title_tag.get_text())

    info['description'] = _meta_content(soup, 'description')
    info['tags'] = run_strategies(VIDEO_TAG_STRATEGIES, html, soup)

    return info
