"""
sections.py — Classify arbitrary LLM content into RenderedSection values.

Three shapes, checked in order:
  slide array   {"slides": [{"title": ..., "content": ...}, ...]}  (non-empty list)
  plain object  {"someKey": "text", "other": {...}}                 (one section per key)
  scalar        anything else: string, number, bool, null, list, {} (one section)

The mapping is total: any JSON value yields at least one section.
"""
from __future__ import annotations

import json
import re
from typing import Any

from bizdoc.core.model.document import RenderedSection, SectionKind

GENERIC_HEADING = "문서 내용"

_UPPER_RE = re.compile(r"([A-Z])")


def humanize_key(key: str) -> str:
    """`documentType` -> `document Type` (space before each uppercase letter)."""
    return _UPPER_RE.sub(r" \1", key).strip()


def _pretty_json(value: Any) -> str:
    # Nested values are shown as-is; flattening them into sub-sections is an open change.
    return json.dumps(value, ensure_ascii=False, indent=2, default=str)


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


def _slide_body(value: Any) -> str | tuple[str, ...]:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, list):
        return tuple(_stringify(v) for v in value)
    return _stringify(value)


def _from_slides(slides: list[Any]) -> list[RenderedSection]:
    out: list[RenderedSection] = []
    for i, slide in enumerate(slides, 1):
        fallback = f"Slide {i}"
        if not isinstance(slide, dict):
            out.append(RenderedSection(fallback, _stringify(slide), SectionKind.SLIDE))
            continue
        title = slide.get("title")
        heading = title if isinstance(title, str) and title.strip() else fallback
        out.append(RenderedSection(heading, _slide_body(slide.get("content")), SectionKind.SLIDE))
    return out


def _from_object(content: dict[str, Any]) -> list[RenderedSection]:
    out: list[RenderedSection] = []
    for key, value in content.items():
        body = value if isinstance(value, str) else _pretty_json(value)
        out.append(RenderedSection(humanize_key(str(key)), body, SectionKind.FIELD))
    return out


def normalize_content(content: Any) -> list[RenderedSection]:
    """Map a content tree to an ordered, non-empty list of sections. Never raises."""
    if isinstance(content, dict):
        slides = content.get("slides")
        if isinstance(slides, list) and slides:
            return _from_slides(slides)
        if content:
            return _from_object(content)
        return [RenderedSection(GENERIC_HEADING, "", SectionKind.SCALAR)]
    return [RenderedSection(GENERIC_HEADING, _stringify(content), SectionKind.SCALAR)]
