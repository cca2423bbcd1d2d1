"""Markdown helpers for wiki ingestion."""

from __future__ import annotations

import hashlib
import re

_H1 = re.compile(r"^#\s+(.+)$", re.MULTILINE)
_FENCED_CODE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE = re.compile(r"`[^`]+`")
_LINK = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_MARKUP = re.compile(r"[#*_~`]")
_WHITESPACE = re.compile(r"\s+")


def extract_title(content: str, file_name: str) -> str:
    """First level-one heading, else the file name without ``.md`` and with ``-``/``_`` as spaces."""
    match = _H1.search(content)
    if match:
        return match.group(1).strip()
    return re.sub(r"[-_]", " ", re.sub(r"\.md$", "", file_name))


def clean_markdown(content: str) -> str:
    """Plain text of a markdown document, for embedding and storage."""
    text = _FENCED_CODE.sub("", content)
    text = _INLINE_CODE.sub("", text)
    text = _LINK.sub(r"\1", text)
    text = _MARKUP.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def content_hash(content: str) -> str:
    """Hex SHA-256 of the UTF-8 encoded content."""
    return hashlib.sha256(content.encode("utf-8")).hexdigest()
