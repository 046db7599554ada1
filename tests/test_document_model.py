from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from bizdoc.core.model.document import (
    Document,
    DocumentStatus,
    DocumentType,
    ReferenceFile,
    RenderedSection,
    attachment_filename,
    content_disposition,
    korean_date,
    sanitize_title,
)


def test_from_record_reads_camel_case_row() -> None:
    doc = Document.from_record(
        {
            "id": "7",
            "type": "transaction-statement",
            "title": "거래명세서 10월",
            "content": {"items": []},
            "formData": {
                "field_1": "고객사",
                "referenceFiles": [
                    {"name": "견적.pdf", "mimeType": "application/pdf"},
                    {"name": "broken"},
                ],
            },
            "status": "completed",
            "createdAt": "2026-10-18T09:30:00Z",
        }
    )
    assert doc.id == 7
    assert doc.type is DocumentType.TRANSACTION_STATEMENT
    assert doc.type.label == "거래명세서"
    assert doc.is_completed
    assert doc.created_at == datetime(2026, 10, 18, 9, 30, tzinfo=timezone.utc)
    assert doc.reference_files == [ReferenceFile("견적.pdf", "application/pdf")]


def test_from_record_defaults_status_and_accepts_snake_case() -> None:
    doc = Document.from_record(
        {"id": 1, "type": "email", "title": "t", "content": "x", "form_data": {"files": []}}
    )
    assert doc.status is DocumentStatus.COMPLETED
    assert doc.form_data == {"files": []}


@pytest.mark.parametrize("title", ["", "   "])
def test_empty_title_is_rejected(title: str) -> None:
    with pytest.raises(ValueError):
        Document(id=1, type=DocumentType.CONTRACT, title=title, content={})


def test_unknown_type_is_rejected() -> None:
    with pytest.raises(ValueError):
        Document.from_record({"id": 1, "type": "tax-invoice", "title": "t", "content": {}})


def test_section_text_joins_list_bodies_with_blank_line() -> None:
    assert RenderedSection("h", ("c", "d")).text == "c\n\nd"
    assert RenderedSection("h", "a\nb").paragraphs == ("a\nb",)


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("2026 견적서 (해피솔라)", "2026_견적서_해피솔라"),
        ("  contract / v2  ", "contract_v2"),
        ("***", "document"),
        ("회의록-10_18", "회의록-10_18"),
    ],
)
def test_sanitize_title(title: str, expected: str) -> None:
    assert sanitize_title(title) == expected


def test_attachment_filename_and_disposition() -> None:
    name = attachment_filename("견적서 Q1", "pdf", today=date(2026, 10, 18))
    assert name == "견적서_Q1_2026-10-18.pdf"
    assert content_disposition(name) == (
        "attachment; filename*=UTF-8''%EA%B2%AC%EC%A0%81%EC%84%9C_Q1_2026-10-18.pdf"
    )


def test_korean_date() -> None:
    assert korean_date(date(2026, 1, 5)) == "2026. 1. 5."
