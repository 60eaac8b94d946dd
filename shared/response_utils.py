"""
Model response parsing for the SEO optimizer.

The model is told to answer with JSON only, but often wraps it in
commentary. Parsing runs in two stages:
1. Locate the first balanced {...} span in the text
2. Parse it and validate the required fields

Only structure is checked. Title length, tag counts and similar content
rules are not enforced here.
"""

import json
from typing import Dict, List

from .errors import MalformedResponse
from .json_utils import find_json_object

REQUIRED_RESPONSE_FIELDS = ['title', 'description', 'tags']


def validate_optimized_result(data: Dict) -> Dict:
    """
    Validate the parsed model payload.

    Returns dict with:
        valid: bool - True if all required fields are present and well-formed
        errors: list - Error messages
    """
    errors: List[str] = []

    if not isinstance(data, dict):
        return {'valid': False, 'errors': ['Response payload is not a JSON object']}

    for field in REQUIRED_RESPONSE_FIELDS:
        if field not in data:
            errors.append(f"Missing required field: {field}")

    for field in ('title', 'description'):
        if field in data:
            value = data[field]
            if not isinstance(value, str):
                errors.append(f"Field '{field}' must be a string")
            elif not value.strip():
                errors.append(f"Field '{field}' is empty")

    if 'tags' in data:
        tags = data['tags']
        if not isinstance(tags, list):
            errors.append("Field 'tags' must be an array")
        elif not all(isinstance(tag, str) for tag in tags):
            errors.append("Field 'tags' must contain only strings")

    return {
        'valid': len(errors) == 0,
        'errors': errors,
    }


def parse_optimized_response(text: str) -> Dict:
    """
    Extract the optimized title/description/tags from raw model text.

    Raises:
        MalformedResponse: no JSON object, invalid JSON, or missing fields
    """
    candidate = find_json_object(text or '')
    if candidate is None:
        raise MalformedResponse('No JSON object found in model response')

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise MalformedResponse(f"Model response is not valid JSON: {e}") from e

    validation = validate_optimized_result(data)
    if not validation['valid']:
        raise MalformedResponse(
            f"Model response failed validation: {'; '.join(validation['errors'])}"
        )

    return {
        'title': data['title'],
        'description': data['description'],
        'tags': list(data['tags']),
    }
