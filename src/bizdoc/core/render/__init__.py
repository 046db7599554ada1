"""
bizdoc.core.render — PDF and slide-deck rendering. Public API:

    DocumentRenderer.generate_pdf(document)  -> bytes
    DocumentRenderer.generate_pptx(document) -> bytes
    RenderError and its categories           (errors.py)
"""
from bizdoc.core.render.errors import (
    DocumentNotReady,
    EngineCrashed,
    RenderError,
    RenderFailed,
    RenderTimeout,
    ResourceCleanupFailed,
)
from bizdoc.core.render.facade import (
    CONTENT_TYPES,
    PDF_CONTENT_TYPE,
    PPTX_CONTENT_TYPE,
    DocumentRenderer,
)

__all__ = [
    "CONTENT_TYPES",
    "PDF_CONTENT_TYPE",
    "PPTX_CONTENT_TYPE",
    "DocumentRenderer",
    "DocumentNotReady",
    "EngineCrashed",
    "RenderError",
    "RenderFailed",
    "RenderTimeout",
    "ResourceCleanupFailed",
]
