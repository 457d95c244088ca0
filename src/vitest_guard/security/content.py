"""
Content Sanitizer - strips executable constructs from untrusted file content.

This is a best-effort transform for text that will be displayed, not a gate:
it never raises and it is not an HTML sanitizer.
"""

from __future__ import annotations

from typing import Any

from vitest_guard.security.patterns import (
    DANGEROUS_PROTOCOL_PATTERN,
    MAX_CONTENT_BYTES,
    NON_PRINTABLE_PATTERN,
    SCRIPT_CLOSE_TAG,
    SCRIPT_OPEN_TAG,
)


def _remove_script_blocks(text: str) -> str:
    """Drop every ``<script ...>...</script>`` block, left to right."""
    pieces = []
    position = 0
    while True:
        opening = SCRIPT_OPEN_TAG.search(text, position)
        if not opening:
            break
        tag_end = text.find(">", opening.end())
        if tag_end == -1:
            break
        closing = SCRIPT_CLOSE_TAG.search(text, tag_end + 1)
        if not closing:
            break
        pieces.append(text[position:opening.start()])
        position = closing.end()
    pieces.append(text[position:])
    return "".join(pieces)


def _strip_once(text: str) -> str:
    text = _remove_script_blocks(text)
    text = DANGEROUS_PROTOCOL_PATTERN.sub("", text)
    return NON_PRINTABLE_PATTERN.sub("", text)


def _truncate_utf8(text: str, max_bytes: int) -> str:
    encoded = text.encode("utf-8")
    if len(encoded) <= max_bytes:
        return text
    # A multi-byte character cut in half is dropped, not mangled.
    return encoded[:max_bytes].decode("utf-8", errors="ignore")


def sanitize_file_content(content: Any) -> str:
    """
    Sanitize untrusted file content for display.

    Removes script blocks, dangerous URI schemes (``javascript:``,
    ``vbscript:``, ``data:``, ...) and non-printable control characters, then
    truncates to MAX_CONTENT_BYTES of UTF-8.

    Removal repeats until nothing changes, so input such as
    ``javajavascript:script:`` cannot reassemble a scheme; this also makes
    the function idempotent.

    Args:
        content: Untrusted content; anything that is not a str yields ""

    Returns:
        Sanitized text
    """
    if not isinstance(content, str):
        return ""

    text = content
    while True:
        cleaned = _strip_once(text)
        if cleaned == text:
            break
        text = cleaned

    return _truncate_utf8(text, MAX_CONTENT_BYTES)
