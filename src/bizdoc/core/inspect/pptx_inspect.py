from __future__ import annotations

from io import BytesIO
from pathlib import Path
from typing import Any

from pptx import Presentation
from pptx.enum.shapes import MSO_SHAPE_TYPE


def _open(source: bytes | Path) -> Any:
    if isinstance(source, (bytes, bytearray)):
        return Presentation(BytesIO(bytes(source)))
    return Presentation(str(source))


def summarize_pptx(source: bytes | Path) -> dict[str, Any]:
    """Per-slide shape counts and texts of a deck (bytes or path)."""
    prs = _open(source)

    total_text_shapes = 0
    total_picture_shapes = 0
    total_other_shapes = 0
    slides: list[dict[str, Any]] = []

    for si, slide in enumerate(prs.slides, start=1):
        text_shapes = 0
        picture_shapes = 0
        other_shapes = 0
        texts: list[str] = []
        font_sizes: list[float] = []

        for shp in slide.shapes:
            if shp.shape_type == MSO_SHAPE_TYPE.PICTURE:
                picture_shapes += 1
                continue
            txt = shp.text_frame.text if getattr(shp, "has_text_frame", False) and shp.has_text_frame else ""
            if txt:
                text_shapes += 1
                texts.append(txt)
                for para in shp.text_frame.paragraphs:
                    for run in para.runs:
                        if run.font.size is not None:
                            font_sizes.append(run.font.size.pt)
            else:
                other_shapes += 1

        total_text_shapes += text_shapes
        total_picture_shapes += picture_shapes
        total_other_shapes += other_shapes
        slides.append(
            {
                "slide_no": si,
                "text_shapes": text_shapes,
                "picture_shapes": picture_shapes,
                "other_shapes": other_shapes,
                "text_chars": sum(len(t.strip()) for t in texts),
                "texts": texts,
                "font_sizes_pt": sorted(set(font_sizes)),
            }
        )

    return {
        "kind": "pptx",
        "slide_count": len(slides),
        "slide_width_in": round(int(prs.slide_width) / 914400.0, 2),
        "slide_height_in": round(int(prs.slide_height) / 914400.0, 2),
        "text_shapes": total_text_shapes,
        "picture_shapes": total_picture_shapes,
        "other_shapes": total_other_shapes,
        "slides": slides,
    }
