from __future__ import annotations

from pathlib import Path
from typing import Any

import fitz  # PyMuPDF


def _suppress_mupdf_noise() -> None:
    """Best-effort suppression of MuPDF stderr spam (version-tolerant)."""
    tools = getattr(fitz, "TOOLS", None)
    if tools is None:
        return

    for name in ("mupdf_display_errors", "mupdf_display_warnings"):
        fn = getattr(tools, name, None)
        if callable(fn):
            try:
                fn(False)
            except Exception:
                pass


def summarize_pdf(source: bytes | Path) -> dict[str, Any]:
    """Page count, page size and extracted text per page of a PDF (bytes or path)."""
    _suppress_mupdf_noise()

    try:
        if isinstance(source, (bytes, bytearray)):
            doc = fitz.open(stream=bytes(source), filetype="pdf")
        else:
            doc = fitz.open(str(source))
    except Exception as e:
        raise RuntimeError(f"failed to open pdf: {source if isinstance(source, Path) else '<bytes>'}") from e

    pages: list[dict[str, Any]] = []
    with doc:
        for page_index in range(doc.page_count):
            page = doc.load_page(page_index)
            text = page.get_text("text")
            pages.append(
                {
                    "page_no": page_index + 1,
                    "width_pt": round(float(page.rect.width), 1),
                    "height_pt": round(float(page.rect.height), 1),
                    "text_chars": len(text.strip()),
                    "text": text,
                }
            )

    return {"kind": "pdf", "page_count": len(pages), "pages": pages}
