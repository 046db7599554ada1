from __future__ import annotations

from bizdoc.core.normalize import normalize_content
from bizdoc.core.render.html_builder import (
    FONT_ALIAS,
    build_document_html,
    font_face_css,
    font_family_chain,
)


def test_quotation_html_has_title_header_and_sections_in_order(make_document, company, settings) -> None:
    doc = make_document({"documentType": "X", "customer": "Y"}, title="Q1")
    html = build_document_html(doc, normalize_content(doc.content), company, settings.pdf_font_families)

    assert "<title>Q1</title>" in html
    assert "<h1>Q1</h1>" in html
    assert '<div class="company-info"><h3>회사 정보</h3>' in html
    assert company.business_number in html

    header_at = html.index('class="company-info"')
    first = html.index("<h2>document Type</h2>")
    second = html.index("<h2>customer</h2>")
    assert header_at < first < second
    assert html.count('<div class="section">') == 2


def test_text_is_escaped_and_newlines_become_breaks(make_document, company, settings) -> None:
    doc = make_document({"note": "<b>1 & 2</b>\nnext"}, title="A <script>")
    html = build_document_html(doc, normalize_content(doc.content), company, settings.pdf_font_families)

    assert "<script>" not in html
    assert "A &lt;script&gt;" in html
    assert "&lt;b&gt;1 &amp; 2&lt;/b&gt;<br>next" in html


def test_list_bodies_render_one_paragraph_per_item(make_document, company, settings) -> None:
    doc = make_document({"slides": [{"title": "Close", "content": ["c", "d"]}]})
    html = build_document_html(doc, normalize_content(doc.content), company, settings.pdf_font_families)
    assert "<h2>Close</h2><p>c</p><p>d</p>" in html


def test_page_setup_and_break_avoidance_rules(make_document, company, settings) -> None:
    doc = make_document("body")
    html = build_document_html(doc, normalize_content(doc.content), company, settings.pdf_font_families)

    assert "@page { size: A4; margin: 2.5cm; }" in html
    assert ".section { margin-bottom: 35px; page-break-inside: avoid;" in html
    assert "border-left: 5px solid #2563eb; page-break-inside: avoid;" in html
    assert "print-color-adjust: exact" in html
    assert '<html lang="ko">' in html


def test_font_fallback_chain_keeps_order_and_ends_generic() -> None:
    chain = font_family_chain(["Noto Sans KR", "맑은 고딕", "Noto Sans KR"])
    assert chain == f"'{FONT_ALIAS}', 'Noto Sans KR', '맑은 고딕', Arial, sans-serif"


def test_font_face_uses_local_sources_for_regular_and_bold() -> None:
    css = font_face_css(["Malgun Gothic"])
    assert "src: local('Malgun Gothic');" in css
    assert "src: local('Malgun Gothic Bold');" in css
    assert css.count("@font-face") == 2
