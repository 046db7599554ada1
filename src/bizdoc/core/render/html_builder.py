"""
html_builder.py — Print-ready HTML for the PDF renderer.

Layout:
  <h1>title</h1>
  <div class="company-info">  회사 정보 block (never split across pages)
  <div class="section"> x N  one per RenderedSection, <h2> heading + body

Fonts: a `@font-face` family made of `local()` sources (regular and bold)
sits in front of a plain font-family chain, so whichever Korean face the host
has installed is picked up without network font loading.
"""
from __future__ import annotations

import html
from collections.abc import Sequence

from bizdoc.core.model.document import CompanyInfo, Document, RenderedSection

FONT_ALIAS = "DocFont"

_GENERIC_TAIL = ("Arial", "sans-serif")

_CSS = """
* { margin: 0; padding: 0; box-sizing: border-box; }
body {
  font-family: __CHAIN__;
  font-size: 14px; line-height: 1.8; color: #333; background: white;
  padding: 40px; word-break: keep-all; overflow-wrap: break-word;
  -webkit-font-smoothing: antialiased;
}
h1 {
  font-size: 24px; font-weight: bold; margin-bottom: 30px; text-align: center;
  color: #2563eb; border-bottom: 2px solid #2563eb; padding-bottom: 15px;
}
h2 {
  font-size: 18px; font-weight: bold; margin: 30px 0 15px 0; color: #1e40af;
  page-break-after: avoid; break-after: avoid;
}
h3 { font-size: 16px; font-weight: bold; color: #2563eb; margin-bottom: 15px; }
p { margin-bottom: 15px; text-align: justify; line-height: 1.8; }
.company-info {
  background: #f8f9fa; padding: 25px; border-radius: 10px; margin-bottom: 30px;
  border-left: 5px solid #2563eb; page-break-inside: avoid; break-inside: avoid;
}
.company-info p { margin-bottom: 8px; font-size: 13px; }
.section { margin-bottom: 35px; page-break-inside: avoid; break-inside: avoid; }
@page { size: A4; margin: 2.5cm; }
@media print {
  body { padding: 0; -webkit-print-color-adjust: exact; print-color-adjust: exact; }
}
"""


def _css_string(name: str) -> str:
    return "'" + name.replace("\\", "\\\\").replace("'", "\\'") + "'"


def font_face_css(families: Sequence[str]) -> str:
    """Two @font-face rules (normal/bold) resolving FONT_ALIAS to local faces."""
    regular = ", ".join(f"local({_css_string(f)})" for f in families)
    bold = ", ".join(f"local({_css_string(f + ' Bold')})" for f in families)
    return (
        f"@font-face {{ font-family: '{FONT_ALIAS}'; src: {regular}; "
        "font-weight: normal; font-style: normal; }\n"
        f"@font-face {{ font-family: '{FONT_ALIAS}'; src: {bold}; "
        "font-weight: bold; font-style: normal; }\n"
    )


def font_family_chain(families: Sequence[str]) -> str:
    names = [_css_string(FONT_ALIAS)]
    seen: set[str] = set()
    for f in families:
        if f not in seen:
            seen.add(f)
            names.append(_css_string(f))
    names.extend(_GENERIC_TAIL)
    return ", ".join(names)


def _text_html(text: str) -> str:
    return html.escape(text).replace("\n", "<br>")


def company_block_html(company: CompanyInfo) -> str:
    rows = (
        ("회사명", company.name),
        ("사업자등록번호", company.business_number),
        ("주소", company.address),
        ("업종", company.business_type),
        ("대표자", company.representative),
    )
    lines = "".join(
        f"<p><strong>{label}:</strong> {html.escape(value)}</p>" for label, value in rows if value
    )
    return f'<div class="company-info"><h3>회사 정보</h3>{lines}</div>'


def section_html(section: RenderedSection) -> str:
    paras = "".join(f"<p>{_text_html(p)}</p>" for p in section.paragraphs if p)
    return f'<div class="section"><h2>{html.escape(section.heading)}</h2>{paras}</div>'


def build_document_html(
    document: Document,
    sections: Sequence[RenderedSection],
    company: CompanyInfo,
    font_families: Sequence[str],
) -> str:
    title = html.escape(document.title)
    css = font_face_css(font_families) + _CSS.replace("__CHAIN__", font_family_chain(font_families))
    body = (
        f"<h1>{title}</h1>"
        + company_block_html(company)
        + "".join(section_html(s) for s in sections)
    )
    return (
        '<!DOCTYPE html><html lang="ko"><head>'
        '<meta charset="UTF-8">'
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">'
        f"<title>{title}</title>"
        f"<style>{css}</style>"
        f"</head><body>{body}</body></html>"
    )
