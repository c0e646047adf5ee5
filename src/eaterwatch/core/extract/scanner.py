"""
Locating JSON literals embedded in page text.

Some page versions inline their data as part of a larger script blob that
is not valid JSON as a whole. A regex cannot find the end of a nested
array, so the closing bracket is found by scanning with a depth counter
that ignores brackets inside string literals.
"""

from __future__ import annotations


def find_matching_bracket(text: str, start: int) -> int:
    """Find the index of the bracket closing the one at ``start``.

    Handles ``[]`` and ``{}``, skips string contents and honours
    backslash escapes inside strings.

    Args:
        text: Text to scan
        start: Index of an opening ``[`` or ``{``

    Returns:
        Index of the matching closing bracket, or -1 if unbalanced
    """
    if start < 0 or start >= len(text) or text[start] not in "[{":
        return -1

    depth = 0
    in_string = False
    escaped = False

    for i in range(start, len(text)):
        ch = text[i]

        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue

        if ch == '"':
            in_string = True
        elif ch in "[{":
            depth += 1
        elif ch in "]}":
            depth -= 1
            if depth == 0:
                return i

    return -1


def find_json_array(text: str, key: str) -> str | None:
    """Return the raw JSON array literal stored under ``"key":[``.

    Only the first occurrence of the key is considered.

    Args:
        text: Page text (HTML or script source)
        key: Object key whose array value to cut out

    Returns:
        The ``[...]`` substring, or None if absent or unterminated
    """
    marker = f'"{key}":['
    position = text.find(marker)
    if position == -1:
        return None

    start = position + len(marker) - 1
    end = find_matching_bracket(text, start)
    if end == -1:
        return None
    return text[start : end + 1]
