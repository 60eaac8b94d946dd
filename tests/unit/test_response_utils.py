"""
Unit tests for model response parsing.

Covers the brace-matching scanner and the schema validation that runs
on top of it.
"""

import pytest

from shared.errors import MalformedResponse
from shared.json_utils import find_json_object, find_json_object_span
from shared.response_utils import parse_optimized_response, validate_optimized_result


class TestFindJsonObject:
    """Tests for find_json_object()"""

    def test_object_surrounded_by_text(self):
        text = 'Here you go: {"a": 1} Enjoy!'
        assert find_json_object(text) == '{"a": 1}'

    def test_nested_object(self):
        text = 'x {"a": {"b": {"c": 1}}, "d": 2} y'
        assert find_json_object(text) == '{"a": {"b": {"c": 1}}, "d": 2}'

    def test_braces_inside_strings_ignored(self):
        text = '{"title": "Use } and { freely", "tags": []} trailing }'
        assert find_json_object(text) == '{"title": "Use } and { freely", "tags": []}'

    def test_escaped_quote_inside_string(self):
        text = '{"title": "She said \\"hi}\\"", "n": 1}'
        assert find_json_object(text) == text

    def test_first_object_only(self):
        assert find_json_object('{"a": 1} {"b": 2}') == '{"a": 1}'

    def test_no_brace(self):
        assert find_json_object("no json here") is None

    def test_unbalanced(self):
        assert find_json_object('{"a": {"b": 1}') is None

    def test_empty(self):
        assert find_json_object("") is None

    def test_span_with_start_offset(self):
        text = '{"skip": 1} var data = {"keep": 2};'
        begin, end = find_json_object_span(text, text.index('var'))
        assert text[begin:end] == '{"keep": 2}'


class TestValidateOptimizedResult:
    """Tests for validate_optimized_result()"""

    def test_valid_payload(self):
        result = validate_optimized_result({'title': 'T', 'description': 'D', 'tags': []})
        assert result['valid'] is True
        assert result['errors'] == []

    def test_missing_fields(self):
        result = validate_optimized_result({'title': 'T'})
        assert result['valid'] is False
        assert "Missing required field: description" in result['errors']
        assert "Missing required field: tags" in result['errors']

    def test_empty_title(self):
        result = validate_optimized_result({'title': '  ', 'description': 'D', 'tags': []})
        assert result['valid'] is False
        assert "Field 'title' is empty" in result['errors']

    def test_tags_not_array(self):
        result = validate_optimized_result({'title': 'T', 'description': 'D', 'tags': 'a, b'})
        assert result['valid'] is False
        assert "Field 'tags' must be an array" in result['errors']

    def test_non_string_tags(self):
        result = validate_optimized_result({'title': 'T', 'description': 'D', 'tags': ['a', 2]})
        assert result['valid'] is False

    def test_not_an_object(self):
        result = validate_optimized_result(['title', 'description'])
        assert result['valid'] is False

    def test_no_length_rules(self):
        """Only structure is checked, never content."""
        payload = {'title': 'x' * 500, 'description': 'D', 'tags': ['t'] * 100}
        assert validate_optimized_result(payload)['valid'] is True


class TestParseOptimizedResponse:
    """Tests for parse_optimized_response()"""

    def test_commentary_around_payload(self, valid_model_text):
        result = parse_optimized_response(valid_model_text)
        assert result == {'title': 'T', 'description': 'D', 'tags': ['a', 'b']}

    def test_markdown_fenced_payload(self):
        text = '```json\n{"title": "T", "description": "D", "tags": []}\n```'
        assert parse_optimized_response(text) == {'title': 'T', 'description': 'D', 'tags': []}

    def test_extra_fields_dropped(self):
        text = '{"title": "T", "description": "D", "tags": ["x"], "score": 9}'
        assert parse_optimized_response(text) == {'title': 'T', 'description': 'D', 'tags': ['x']}

    def test_no_json_span(self):
        with pytest.raises(MalformedResponse) as exc_info:
            parse_optimized_response("I could not do that, sorry.")
        assert "No JSON object" in exc_info.value.message

    def test_invalid_json(self):
        with pytest.raises(MalformedResponse) as exc_info:
            parse_optimized_response("{title: 'T', description: 'D'}")
        assert "not valid JSON" in exc_info.value.message

    def test_missing_required_field(self):
        with pytest.raises(MalformedResponse) as exc_info:
            parse_optimized_response('{"title": "T", "tags": []}')
        assert "description" in exc_info.value.message

    def test_none_text(self):
        with pytest.raises(MalformedResponse):
            parse_optimized_response(None)

    def test_error_stage(self):
        with pytest.raises(MalformedResponse) as exc_info:
            parse_optimized_response("")
        assert exc_info.value.stage == 'response_parsing'
        assert exc_info.value.status_code == 500
