from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from io import BytesIO
from typing import Any

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.enum.shapes import MSO_AUTO_SHAPE_TYPE
from pptx.enum.text import MSO_ANCHOR, PP_ALIGN
from pptx.oxml.ns import qn
from pptx.oxml.xmlchemy import OxmlElement
from pptx.util import Emu, Inches, Pt

from bizdoc.config import Settings
from bizdoc.core.model.document import CompanyInfo, Document, RenderedSection, korean_date
from bizdoc.core.normalize import normalize_content
from bizdoc.core.render.errors import DocumentNotReady, RenderFailed

logger = logging.getLogger(__name__)

# Logical canvas every box below is expressed in.
CANVAS_W = 10.0
CANVAS_H = 7.5

BLANK_LAYOUT_INDEX = 6

DEFAULT_COVER_TITLE = "프레젠테이션 제목"

# Palette (hex RGB)
COVER_BG = "F8F9FA"
BRAND_FILL = "2563EB"
CONTENT_BG = "FFFFFF"
HEADER_BAND_FILL = "F1F5F9"
INK_TITLE = "1E293B"
INK_MUTED = "64748B"
INK_FAINT = "94A3B8"
INK_BODY = "374151"
WHITE = "FFFFFF"


class SlideLayout(str, Enum):
    STANDARD_4_3 = "4:3"
    A4 = "a4"

    @property
    def size_inches(self) -> tuple[float, float]:
        if self is SlideLayout.A4:
            return 10.83, 7.5
        return 10.0, 7.5


@dataclass(frozen=True)
class Box:
    """Element box in canvas units (x, y, w, h on a 10 x 7.5 canvas)."""

    x: float
    y: float
    w: float
    h: float


# Cover slide
BOX_BRAND = Box(4.0, 0.5, 2.0, 0.8)
BOX_COVER_TITLE = Box(1.0, 2.5, 8.0, 1.2)
BOX_COVER_SUBTITLE = Box(1.0, 4.0, 8.0, 0.8)
BOX_COVER_DATE = Box(1.0, 5.5, 8.0, 0.6)

# Content slides
BOX_HEADER_BAND = Box(0.0, 0.0, 10.0, 1.0)
BOX_INDEX = Box(9.0, 0.1, 0.8, 0.8)
BOX_HEADING = Box(0.5, 0.1, 8.0, 0.8)
BOX_BODY = Box(0.5, 1.5, 9.0, 5.5)


@dataclass(frozen=True)
class FontTierPolicy:
    """Body font size picked by character count: > small_above -> small, > medium_above -> medium."""

    medium_above: int = 300
    small_above: int = 500
    large_pt: int = 16
    medium_pt: int = 14
    small_pt: int = 12

    def size_for(self, text: str) -> int:
        n = len(text)
        if n > self.small_above:
            return self.small_pt
        if n > self.medium_above:
            return self.medium_pt
        return self.large_pt

    @classmethod
    def from_settings(cls, settings: Settings) -> "FontTierPolicy":
        return cls(
            medium_above=settings.tier_medium_threshold,
            small_above=settings.tier_small_threshold,
            large_pt=settings.tier_large_pt,
            medium_pt=settings.tier_medium_pt,
            small_pt=settings.tier_small_pt,
        )


class _Canvas:
    """Scales canvas-unit boxes to the presentation's real slide size."""

    def __init__(self, prs: Any):
        self.sx = int(prs.slide_width) / CANVAS_W
        self.sy = int(prs.slide_height) / CANVAS_H

    def place(self, box: Box) -> tuple[Emu, Emu, Emu, Emu]:
        return (
            Emu(int(round(box.x * self.sx))),
            Emu(int(round(box.y * self.sy))),
            Emu(int(round(box.w * self.sx))),
            Emu(int(round(box.h * self.sy))),
        )


# ---------------------------------------------------------------------------
# Low-level shape helpers
# ---------------------------------------------------------------------------


def _set_no_line(shape: Any) -> None:
    """Enforce <a:ln w="0"><a:noFill/></a:ln> so the theme outline never shows."""
    spPr = shape._element.spPr
    ln = spPr.find(qn("a:ln"))
    if ln is None:
        ln = OxmlElement("a:ln")
        spPr.append(ln)
    ln.set("w", "0")
    for tag in ("a:noFill", "a:solidFill", "a:gradFill", "a:pattFill"):
        el = ln.find(qn(tag))
        if el is not None:
            ln.remove(el)
    ln.insert(0, OxmlElement("a:noFill"))


def _set_east_asian_font(run: Any, face: str) -> None:
    """python-pptx only writes <a:latin>; Hangul glyphs need <a:ea> as well."""
    rPr = run._r.get_or_add_rPr()
    ea = rPr.find(qn("a:ea"))
    if ea is None:
        ea = OxmlElement("a:ea")
        latin = rPr.find(qn("a:latin"))
        if latin is not None:
            latin.addnext(ea)
        else:
            rPr.append(ea)
    ea.set("typeface", face)


def _fill_background(slide: Any, hex_rgb: str) -> None:
    fill = slide.background.fill
    fill.solid()
    fill.fore_color.rgb = RGBColor.from_string(hex_rgb)


def _add_rect(slide: Any, canvas: _Canvas, box: Box, fill_hex: str) -> Any:
    shp = slide.shapes.add_shape(MSO_AUTO_SHAPE_TYPE.RECTANGLE, *canvas.place(box))
    shp.fill.solid()
    shp.fill.fore_color.rgb = RGBColor.from_string(fill_hex)
    _set_no_line(shp)
    return shp


def _write_text(
    text_frame: Any,
    text: str,
    *,
    face: str,
    size_pt: int,
    color_hex: str,
    bold: bool = False,
    align: PP_ALIGN | None = None,
    anchor: MSO_ANCHOR = MSO_ANCHOR.TOP,
    line_spacing_pt: int | None = None,
) -> None:
    text_frame.word_wrap = True
    text_frame.vertical_anchor = anchor
    # One paragraph per line so "\n" survives as a visible break.
    lines = text.split("\n") if text else [""]
    for i, line in enumerate(lines):
        p = text_frame.paragraphs[0] if i == 0 else text_frame.add_paragraph()
        if align is not None:
            p.alignment = align
        if line_spacing_pt is not None:
            p.line_spacing = Pt(line_spacing_pt)
        run = p.add_run()
        run.text = line
        font = run.font
        font.name = face
        font.size = Pt(size_pt)
        font.bold = bold
        font.color.rgb = RGBColor.from_string(color_hex)
        _set_east_asian_font(run, face)


def _add_textbox(slide: Any, canvas: _Canvas, box: Box, text: str, **style: Any) -> Any:
    tb = slide.shapes.add_textbox(*canvas.place(box))
    _write_text(tb.text_frame, text, **style)
    return tb


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


class SlideRenderer:
    """Document -> .pptx bytes: one cover slide, then one slide per section."""

    def __init__(
        self,
        settings: Settings,
        *,
        layout: SlideLayout | None = None,
        tiers: FontTierPolicy | None = None,
    ):
        self._face = settings.slide_font_face
        self._line_spacing_pt = settings.body_line_spacing_pt
        self._layout = layout or SlideLayout(settings.slide_layout.lower())
        self._tiers = tiers or FontTierPolicy.from_settings(settings)

    def render(self, document: Document, company: CompanyInfo, *, today: date | None = None) -> bytes:
        if not document.is_completed:
            raise DocumentNotReady(
                f"document {document.id} is {document.status.value}; only completed documents render"
            )
        sections = normalize_content(document.content)
        logger.info("PPTX render start: document=%s sections=%d", document.id, len(sections))
        try:
            prs = Presentation()
            w_in, h_in = self._layout.size_inches
            prs.slide_width = Inches(w_in)
            prs.slide_height = Inches(h_in)
            canvas = _Canvas(prs)

            self._add_cover(prs, canvas, document, company, today or date.today())
            for index, section in enumerate(sections, 1):
                self._add_section(prs, canvas, index, section)

            buf = BytesIO()
            prs.save(buf)
            data = buf.getvalue()
        except Exception as exc:
            logger.error("PPTX render failed: document=%s %s", document.id, exc)
            raise RenderFailed(f"PPTX rendering failed: {exc}") from exc

        logger.info("PPTX render done: document=%s slides=%d bytes=%d", document.id, len(sections) + 1, len(data))
        return data

    def _add_cover(
        self, prs: Any, canvas: _Canvas, document: Document, company: CompanyInfo, today: date
    ) -> None:
        slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT_INDEX])
        _fill_background(slide, COVER_BG)

        band = _add_rect(slide, canvas, BOX_BRAND, BRAND_FILL)
        _write_text(
            band.text_frame,
            company.brand_mark or company.name,
            face=self._face,
            size_pt=16,
            color_hex=WHITE,
            bold=True,
            align=PP_ALIGN.CENTER,
            anchor=MSO_ANCHOR.MIDDLE,
        )
        _add_textbox(
            slide, canvas, BOX_COVER_TITLE, document.title or DEFAULT_COVER_TITLE,
            face=self._face, size_pt=32, color_hex=INK_TITLE, bold=True,
            align=PP_ALIGN.CENTER, anchor=MSO_ANCHOR.MIDDLE,
        )
        _add_textbox(
            slide, canvas, BOX_COVER_SUBTITLE, f"{company.name} {document.type.label}",
            face=self._face, size_pt=18, color_hex=INK_MUTED,
            align=PP_ALIGN.CENTER, anchor=MSO_ANCHOR.MIDDLE,
        )
        _add_textbox(
            slide, canvas, BOX_COVER_DATE, korean_date(today),
            face=self._face, size_pt=14, color_hex=INK_FAINT, align=PP_ALIGN.CENTER,
        )

    def _add_section(self, prs: Any, canvas: _Canvas, index: int, section: RenderedSection) -> None:
        slide = prs.slides.add_slide(prs.slide_layouts[BLANK_LAYOUT_INDEX])
        _fill_background(slide, CONTENT_BG)
        _add_rect(slide, canvas, BOX_HEADER_BAND, HEADER_BAND_FILL)
        _add_textbox(
            slide, canvas, BOX_INDEX, str(index),
            face=self._face, size_pt=12, color_hex=INK_MUTED,
            align=PP_ALIGN.CENTER, anchor=MSO_ANCHOR.MIDDLE,
        )
        _add_textbox(
            slide, canvas, BOX_HEADING, section.heading,
            face=self._face, size_pt=24, color_hex=INK_TITLE, bold=True, anchor=MSO_ANCHOR.MIDDLE,
        )
        body = section.text
        _add_textbox(
            slide, canvas, BOX_BODY, body,
            face=self._face, size_pt=self._tiers.size_for(body), color_hex=INK_BODY,
            anchor=MSO_ANCHOR.TOP, line_spacing_pt=self._line_spacing_pt,
        )
