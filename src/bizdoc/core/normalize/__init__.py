"""Content normalization package.

Turns a Document's untyped `content` tree into the ordered RenderedSection
sequence both renderers consume. Keep this module as a thin re-export layer:

    from bizdoc.core.normalize import normalize_content
"""

from __future__ import annotations

from .sections import GENERIC_HEADING, humanize_key, normalize_content

__all__ = [
    "GENERIC_HEADING",
    "humanize_key",
    "normalize_content",
]
