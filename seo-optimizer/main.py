"""
SEO Optimizer Cloud Function

Generates an optimized title, description and tags for a YouTube video by
imitating the style of a set of reference channels.

Responsibilities:
- Fetch reference channel pages and mine title/description/hashtag patterns
- Fetch the target video page and extract its current metadata
- Build a prompt from both and ask the generation service for new metadata
- Validate the generated payload before returning it

Does NOT:
- Use any official YouTube API (pages are scraped)
- Retry failed fetches or generation calls (caller's job)
- Cache anything between requests
"""

import functions_framework
import requests
import google.generativeai as genai
import os
import sys
import json
import traceback

# Add shared module to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))
from shared.errors import (
    AggregateExhaustion,
    FetchFailure,
    GenerationServiceError,
    InputValidationError,
    OptimizerError,
)
from shared.url_utils import require_identifier
from shared.extraction_utils import extract_channel_patterns, extract_video_info
from shared.sampling_utils import (
    sample_unique,
    CHANNEL_TITLE_LIMIT,
    CHANNEL_DESCRIPTION_LIMIT,
    CHANNEL_TAG_LIMIT,
    VIDEO_TAG_LIMIT,
)
from shared.json_utils import find_json_object_span
from shared.prompt_utils import build_optimization_prompt
from shared.response_utils import parse_optimized_response

# Configuration
USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
OPENAI_CHAT_COMPLETIONS_URL = 'https://api.openai.com/v1/chat/completions'
DEFAULT_OPENAI_MODEL = 'gpt-4o-mini'
DEFAULT_GEMINI_MODEL = 'gemini-2.0-flash'
SYSTEM_INSTRUCTION = 'You are a YouTube SEO expert. Always respond with valid JSON only.'
GENERATION_TEMPERATURE = 0.7
GENERATION_MAX_TOKENS = 1000
INITIAL_DATA_MARKER = 'var ytInitialData = '

# Response limits for channel summaries
SUMMARY_TITLE_LIMIT = 5
SUMMARY_TAG_LIMIT = 10

CORS_HEADERS = {'Access-Control-Allow-Origin': '*'}


def _env_float(name, default):
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        print(f"Invalid {name}={value!r}, using {default}")
        return default


def get_fetch_timeout():
    return _env_float('FETCH_TIMEOUT', 30.0)


def get_generation_timeout():
    return _env_float('GENERATION_TIMEOUT', 60.0)


def extract_initial_data(html: str):
    """Parse the embedded `var ytInitialData = {...};` object, or None."""
    if not html:
        return None

    marker = html.find(INITIAL_DATA_MARKER)
    if marker == -1:
        return None

    span = find_json_object_span(html, marker + len(INITIAL_DATA_MARKER))
    if span is None:
        return None

    try:
        data = json.loads(html[span[0]:span[1]])
    except json.JSONDecodeError as e:
        print(f"ytInitialData parse error: {e}")
        return None

    return data if isinstance(data, dict) else None


def fetch_document(url: str) -> dict:
    """
    Fetch a YouTube page. Never raises.

    Returns dict with:
        html: str - page markup, '' on any failure
        initial_data: dict or None - embedded ytInitialData object
        error: str or None - failure reason
    """
    try:
        headers = {
            'User-Agent': USER_AGENT,
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        }

        response = requests.get(url, headers=headers, timeout=get_fetch_timeout(), allow_redirects=True)
        response.raise_for_status()

        html = response.text
        return {'html': html, 'initial_data': extract_initial_data(html), 'error': None}

    except requests.exceptions.Timeout:
        error = 'Request timed out'
    except requests.exceptions.HTTPError as e:
        error = f'HTTP error: {e.response.status_code}'
    except requests.exceptions.RequestException as e:
        error = f'Request failed: {str(e)}'

    print(f"Error fetching {url}: {error}")
    return {'html': '', 'initial_data': None, 'error': error}


def build_channel_profile(channel_name: str, html: str) -> dict:
    """Extract, dedupe and sample channel patterns into a profile."""
    candidates = extract_channel_patterns(html)

    titles = sample_unique(candidates['titles'], CHANNEL_TITLE_LIMIT)
    descriptions = sample_unique(candidates['descriptions'], CHANNEL_DESCRIPTION_LIMIT)
    tags = sample_unique(candidates['tags'], CHANNEL_TAG_LIMIT)

    # Convenience view only; patterns carry the actual signal
    videos = [
        {
            'title': title,
            'description': descriptions[i] if i < len(descriptions) else '',
            'tags': tags[i * 3:i * 3 + 3],
        }
        for i, title in enumerate(titles)
    ]

    return {
        'channelName': channel_name,
        'videos': videos,
        'patterns': {
            'titlePatterns': titles,
            'descriptionPatterns': descriptions,
            'commonTags': tags,
        },
    }


def analyze_channel(channel_url: str) -> dict:
    """Resolve, fetch and profile one reference channel."""
    channel_name = require_identifier(channel_url, 'channel')

    document = fetch_document(channel_url)
    if not document['html']:
        raise FetchFailure(channel_url, document.get('error'))

    return build_channel_profile(channel_name, document['html'])


def aggregate_channels(channel_urls: list) -> tuple:
    """
    Profile every reference channel, skipping the ones that fail.

    Returns:
        Tuple of (profiles, failures). Each failure is a dict with
        url, stage, message and recoverable.

    Raises:
        AggregateExhaustion: if no channel produced a profile
    """
    profiles = []
    failures = []

    for channel_url in channel_urls:
        try:
            profiles.append(analyze_channel(channel_url))
        except Exception as e:
            print(f"Error analyzing channel {channel_url}: {e}")
            failure = e.to_dict() if isinstance(e, OptimizerError) else {
                'stage': 'channel_analysis',
                'message': str(e),
            }
            failure['recoverable'] = True
            failures.append({'url': channel_url, **failure})

    if not profiles:
        raise AggregateExhaustion(failures)

    print(f"Analyzed {len(profiles)} of {len(channel_urls)} reference channels")
    return profiles, failures


def analyze_target_video(video_url: str) -> dict:
    """Resolve, fetch and extract the target video. All failures are fatal."""
    video_id = require_identifier(video_url, 'video')

    document = fetch_document(video_url)
    if not document['html']:
        raise FetchFailure(video_url, document.get('error'))

    info = extract_video_info(document['html'])
    print(f"Target video {video_id}: {info['title']!r}")

    return {
        'title': info['title'],
        'description': info['description'],
        'tags': sample_unique(info['tags'], VIDEO_TAG_LIMIT),
    }


def generate_with_openai(prompt: str) -> str:
    """Send the prompt to the OpenAI chat completions endpoint."""
    api_key = os.environ.get('OPENAI_API_KEY')
    if not api_key:
        raise GenerationServiceError('OpenAI API key not configured')

    try:
        response = requests.post(
            OPENAI_CHAT_COMPLETIONS_URL,
            headers={
                'Content-Type': 'application/json',
                'Authorization': f'Bearer {api_key}',
            },
            json={
                'model': os.environ.get('OPENAI_MODEL', DEFAULT_OPENAI_MODEL),
                'messages': [
                    {'role': 'system', 'content': SYSTEM_INSTRUCTION},
                    {'role': 'user', 'content': prompt},
                ],
                'temperature': GENERATION_TEMPERATURE,
                'max_tokens': GENERATION_MAX_TOKENS,
            },
            timeout=get_generation_timeout(),
        )
    except requests.exceptions.Timeout as e:
        raise GenerationServiceError('OpenAI API request timed out') from e
    except requests.exceptions.RequestException as e:
        raise GenerationServiceError(f'OpenAI API request failed: {e}') from e

    if not response.ok:
        raise GenerationServiceError(f'OpenAI API error: {response.status_code}')

    try:
        return response.json()['choices'][0]['message']['content']
    except (ValueError, KeyError, IndexError, TypeError) as e:
        raise GenerationServiceError(f'Unexpected OpenAI API response: {e}') from e


def generate_with_gemini(prompt: str) -> str:
    """Send the prompt to Gemini."""
    api_key = os.environ.get('GEMINI_API_KEY')
    if not api_key:
        raise GenerationServiceError('Gemini API key not configured')

    try:
        genai.configure(api_key=api_key)
        model = genai.GenerativeModel(
            os.environ.get('GEMINI_MODEL', DEFAULT_GEMINI_MODEL),
            system_instruction=SYSTEM_INSTRUCTION,
        )
        response = model.generate_content(
            prompt,
            generation_config=genai.GenerationConfig(
                temperature=GENERATION_TEMPERATURE,
                max_output_tokens=GENERATION_MAX_TOKENS,
            ),
            request_options={'timeout': get_generation_timeout()},
        )
        return response.text
    except Exception as e:
        raise GenerationServiceError(f'Gemini API error: {e}') from e


GENERATION_PROVIDERS = {
    'openai': generate_with_openai,
    'gemini': generate_with_gemini,
}


def generate_completion(prompt: str) -> str:
    """
    Get raw response text from the configured generation service.

    Provider comes from GENERATION_PROVIDER (openai or gemini). One attempt,
    no retries; any failure raises GenerationServiceError.
    """
    provider = os.environ.get('GENERATION_PROVIDER', 'openai').strip().lower()
    generate = GENERATION_PROVIDERS.get(provider)
    if generate is None:
        raise GenerationServiceError(f'Unknown generation provider: {provider}')

    try:
        return generate(prompt)
    except GenerationServiceError as e:
        print(f"AI generation error: {e}")
        raise


def parse_request_fields(request_json) -> tuple:
    """
    Validate the request body.

    Returns:
        Tuple of (reference_channels, target_video), trimmed

    Raises:
        InputValidationError: missing, empty or blank fields
    """
    if not isinstance(request_json, dict):
        raise InputValidationError('Request body must be a JSON object')

    reference_channels = request_json.get('referenceChannels')
    if not reference_channels or not isinstance(reference_channels, list):
        raise InputValidationError('Please provide reference channel URLs')

    channels = []
    for channel_url in reference_channels:
        if not isinstance(channel_url, str) or not channel_url.strip():
            raise InputValidationError('Reference channel URLs must be non-empty strings')
        channels.append(channel_url.strip())

    target_video = request_json.get('targetVideo')
    if not isinstance(target_video, str) or not target_video.strip():
        raise InputValidationError('Please provide a target video URL')

    return channels, target_video.strip()


def optimize(reference_channels: list, target_video: str) -> dict:
    """Run the full pipeline and build the success payload."""
    profiles, failures = aggregate_channels(reference_channels)

    target = analyze_target_video(target_video)

    prompt = build_optimization_prompt(profiles, target)
    raw_text = generate_completion(prompt)
    optimized = parse_optimized_response(raw_text)

    result = {
        'success': True,
        'original': target,
        'optimized': optimized,
        'channelAnalyses': [
            {
                'channelName': profile['channelName'],
                'sampleTitles': profile['patterns']['titlePatterns'][:SUMMARY_TITLE_LIMIT],
                'sampleTags': profile['patterns']['commonTags'][:SUMMARY_TAG_LIMIT],
            }
            for profile in profiles
        ],
    }

    # Partial success: some channels were skipped
    if failures:
        result['errors'] = failures

    return result


@functions_framework.http
def optimize_seo(request):
    """
    Main Cloud Function entry point.

    Expected JSON input:
    {
        "referenceChannels": ["https://www.youtube.com/@SomeChannel"],
        "targetVideo": "https://www.youtube.com/watch?v=abc123"
    }
    """
    # Handle CORS
    if request.method == 'OPTIONS':
        headers = {
            'Access-Control-Allow-Origin': '*',
            'Access-Control-Allow-Methods': 'POST',
            'Access-Control-Allow-Headers': 'Content-Type',
            'Access-Control-Max-Age': '3600'
        }
        return ('', 204, headers)

    try:
        request_json = request.get_json(silent=True)
        reference_channels, target_video = parse_request_fields(request_json)

        result = optimize(reference_channels, target_video)
        return (json.dumps(result), 200, CORS_HEADERS)

    except OptimizerError as e:
        print(f"Error ({e.stage}): {e.message}")
        body = {
            'success': False,
            'error': e.message,
            'stage': e.stage,
        }
        if isinstance(e, AggregateExhaustion):
            body['errors'] = e.failures
        return (json.dumps(body), e.status_code, CORS_HEADERS)

    except Exception as e:
        print(f"Error: {str(e)}\n{traceback.format_exc()}")
        return (json.dumps({
            'success': False,
            'error': str(e) or 'Internal server error',
            'stage': 'processing',
        }), 500, CORS_HEADERS)
