"""Shared utilities for the SEO optimizer."""

from .errors import (
    OptimizerError,
    InputValidationError,
    ResolutionFailure,
    FetchFailure,
    AggregateExhaustion,
    GenerationServiceError,
    MalformedResponse,
)

from .url_utils import (
    VIDEO_ID_PATTERNS,
    CHANNEL_ID_PATTERNS,
    extract_video_id,
    extract_channel_id,
    resolve_identifier,
    require_identifier,
)

from .title_utils import (
    PLATFORM_TITLE_SUFFIX,
    strip_platform_suffix,
    strip_attribution,
    clean_aria_label,
)

from .sampling_utils import (
    CHANNEL_TITLE_LIMIT,
    CHANNEL_DESCRIPTION_LIMIT,
    CHANNEL_TAG_LIMIT,
    VIDEO_TAG_LIMIT,
    sample_unique,
)

from .extraction_utils import (
    CHANNEL_STRATEGIES,
    VIDEO_TAG_STRATEGIES,
    extract_channel_patterns,
    extract_video_info,
)

from .json_utils import find_json_object, find_json_object_span

from .prompt_utils import build_optimization_prompt

from .response_utils import (
    REQUIRED_RESPONSE_FIELDS,
    parse_optimized_response,
    validate_optimized_result,
)

__all__ = [
    # Errors
    'OptimizerError',
    'InputValidationError',
    'ResolutionFailure',
    'FetchFailure',
    'AggregateExhaustion',
    'GenerationServiceError',
    'MalformedResponse',
    # URL utilities
    'VIDEO_ID_PATTERNS',
    'CHANNEL_ID_PATTERNS',
    'extract_video_id',
    'extract_channel_id',
    'resolve_identifier',
    'require_identifier',
    # Title utilities
    'PLATFORM_TITLE_SUFFIX',
    'strip_platform_suffix',
    'strip_attribution',
    'clean_aria_label',
    # Sampling
    'CHANNEL_TITLE_LIMIT',
    'CHANNEL_DESCRIPTION_LIMIT',
    'CHANNEL_TAG_LIMIT',
    'VIDEO_TAG_LIMIT',
    'sample_unique',
    # Extraction
    'CHANNEL_STRATEGIES',
    'VIDEO_TAG_STRATEGIES',
    'extract_channel_patterns',
    'extract_video_info',
    # JSON scanning
    'find_json_object',
    'find_json_object_span',
    # Prompt
    'build_optimization_prompt',
    # Response parsing
    'REQUIRED_RESPONSE_FIELDS',
    'parse_optimized_response',
    'validate_optimized_result',
]
