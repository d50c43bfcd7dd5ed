"""Extraction of an embedded JSON object from model output.

Models asked for JSON often wrap it in prose or put raw line breaks inside
string values. This module pulls out the first brace-balanced object (one
level of nesting) and escapes newlines found inside quoted literals so the
result can be fed to `json.loads`.
"""

import re

# First `{...}` allowing one level of nested braces.
JSON_OBJECT_PATTERN = re.compile(r"\{(?:[^{}]|\{[^{}]*\})*\}")
QUOTED_LITERAL_PATTERN = re.compile(r'"([^"]*)"')


def _escape_newlines(match):
    return match.group(0).replace("\n", "\\n")


def extract_json(content: str) -> str:
    """Return the first JSON object embedded in `content`.

    Args:
        content: Normalized completion text.

    Returns:
        - `content` unchanged when it contains no brace at all.
        - The first balanced object with in-string newlines escaped.
        - `""` when a brace is present but no balanced object matches,
          including a missing closing brace.
    """
    if "{" not in content and "}" not in content:
        return content

    match = JSON_OBJECT_PATTERN.search(content)
    if not match:
        return ""

    return QUOTED_LITERAL_PATTERN.sub(_escape_newlines, match.group(0))


def maybe_extract_json(content: str) -> str:
    """Apply `extract_json` only to non-empty text containing both braces."""
    if content and "{" in content and "}" in content:
        return extract_json(content)
    return content
