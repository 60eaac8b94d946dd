"""
Locate JSON objects embedded in free text.

Model responses and page scripts both carry JSON objects surrounded by
other text. find_json_object() scans from the first '{' and returns the
balanced object span, tracking string literals so braces inside strings
do not affect nesting.
"""

from typing import Optional, Tuple


def find_json_object_span(text: str, start: int = 0) -> Optional[Tuple[int, int]]:
    """
    Find the first balanced {...} span at or after `start`.

    Returns:
        (begin, end) indices so that text[begin:end] is the span, or None
        if there is no '{' or the braces never balance.
    """
    if not text:
        return None

    begin = text.find('{', start)
    if begin == -1:
        return None

    depth = 0
    in_string = False
    escaped = False

    for index in range(begin, len(text)):
        char = text[index]

        if in_string:
            if escaped:
                escaped = False
            elif char == '\\':
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char == '"':
            in_string = True
        elif char == '{':
            depth += 1
        elif char == '}':
            depth -= 1
            if depth == 0:
                return (begin, index + 1)

    return None


def find_json_object(text: str, start: int = 0) -> Optional[str]:
    """
    Return the first balanced {...} substring, or None.

    Examples:
        >>> find_json_object('Sure! {"a": {"b": "}"}} Thanks')
        '{"a": {"b": "}"}}'
    """
    span = find_json_object_span(text, start)
    if span is None:
        return None
    return text[span[0]:span[1]]
