"""
facade.py — The two-method entry point the HTTP layer calls.

    renderer = DocumentRenderer.from_settings(get_settings())
    pdf = await renderer.generate_pdf(document)
    pptx = await renderer.generate_pptx(document)

Failures arrive as `RenderError` subclasses (category + message); a buffer is
only ever returned whole.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from bizdoc.config import Settings
from bizdoc.core.model.document import CompanyInfo, Document, get_company_info
from bizdoc.core.render.pdf_renderer import PdfRenderer
from bizdoc.core.render.pptx_renderer import SlideRenderer

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
PPTX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

CONTENT_TYPES: dict[str, str] = {
    "pdf": PDF_CONTENT_TYPE,
    "pptx": PPTX_CONTENT_TYPE,
}


class DocumentRenderer:
    def __init__(
        self,
        pdf_renderer: PdfRenderer,
        slide_renderer: SlideRenderer,
        company_provider: Callable[[], CompanyInfo],
    ):
        self._pdf = pdf_renderer
        self._slides = slide_renderer
        self._company = company_provider

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentRenderer":
        return cls(
            PdfRenderer(settings),
            SlideRenderer(settings),
            lambda: get_company_info(settings),
        )

    async def generate_pdf(self, document: Document) -> bytes:
        return await self._pdf.render(document, self._company())

    async def generate_pptx(self, document: Document) -> bytes:
        return await asyncio.to_thread(self._slides.render, document, self._company())

    async def generate(self, document: Document, fmt: str) -> bytes:
        """Dispatch on a format name (`pdf` or `pptx`)."""
        key = fmt.lower().lstrip(".")
        if key == "pdf":
            return await self.generate_pdf(document)
        if key == "pptx":
            return await self.generate_pptx(document)
        raise ValueError(f"unsupported format: {fmt} (use pdf or pptx)")
