"""
document.py — Document record, company branding and the rendered-section unit.

A Document is what the generation service persisted: the LLM output lives in
`content` as an untyped JSON tree. Renderers never read `content` directly;
they consume the RenderedSection sequence built by `bizdoc.core.normalize`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any
from urllib.parse import quote

from bizdoc.config import Settings


class DocumentType(str, Enum):
    QUOTATION = "quotation"
    TRANSACTION_STATEMENT = "transaction-statement"
    CONTRACT = "contract"
    PRESENTATION = "presentation"
    PROPOSAL = "proposal"
    MINUTES = "minutes"
    EMAIL = "email"

    @property
    def label(self) -> str:
        return _TYPE_LABELS[self]


_TYPE_LABELS: dict[DocumentType, str] = {
    DocumentType.QUOTATION: "견적서",
    DocumentType.TRANSACTION_STATEMENT: "거래명세서",
    DocumentType.CONTRACT: "계약서",
    DocumentType.PRESENTATION: "프레젠테이션",
    DocumentType.PROPOSAL: "제안서",
    DocumentType.MINUTES: "회의록",
    DocumentType.EMAIL: "이메일",
}


class DocumentStatus(str, Enum):
    PENDING = "pending"
    GENERATING = "generating"
    COMPLETED = "completed"
    ERROR = "error"


class SectionKind(str, Enum):
    SLIDE = "slide"
    FIELD = "field"
    SCALAR = "scalar"


@dataclass(frozen=True)
class ReferenceFile:
    """Metadata of an uploaded reference file (bytes are not retained)."""

    name: str
    mime_type: str


@dataclass(frozen=True)
class CompanyInfo:
    name: str
    business_number: str
    address: str
    business_type: str
    representative: str
    brand_mark: str = ""


@dataclass(frozen=True)
class RenderedSection:
    heading: str
    body: str | tuple[str, ...]
    kind: SectionKind = SectionKind.FIELD

    @property
    def text(self) -> str:
        if isinstance(self.body, tuple):
            return "\n\n".join(self.body)
        return self.body

    @property
    def paragraphs(self) -> tuple[str, ...]:
        if isinstance(self.body, tuple):
            return self.body
        return (self.body,)


@dataclass(frozen=True)
class Document:
    id: int
    type: DocumentType
    title: str
    content: Any
    status: DocumentStatus = DocumentStatus.COMPLETED
    form_data: dict[str, Any] = field(default_factory=dict)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not isinstance(self.title, str) or not self.title.strip():
            raise ValueError(f"document {self.id} has an empty title")

    @property
    def is_completed(self) -> bool:
        return self.status is DocumentStatus.COMPLETED

    @property
    def reference_files(self) -> list[ReferenceFile]:
        """Uploaded file metadata kept in formData (`files` or `referenceFiles`)."""
        raw = self.form_data.get("referenceFiles", self.form_data.get("files"))
        if not isinstance(raw, list):
            return []
        out: list[ReferenceFile] = []
        for item in raw:
            if not isinstance(item, dict):
                continue
            name = item.get("name") or item.get("originalname")
            mime = item.get("mimeType") or item.get("mimetype") or item.get("type")
            if isinstance(name, str) and isinstance(mime, str):
                out.append(ReferenceFile(name=name, mime_type=mime))
        return out

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Document":
        """Build a Document from a persisted row (camelCase or snake_case keys)."""
        form_data = record.get("formData", record.get("form_data")) or {}
        if not isinstance(form_data, dict):
            raise ValueError("formData must be a JSON object")
        created_raw = record.get("createdAt", record.get("created_at"))
        return cls(
            id=int(record["id"]),
            type=DocumentType(record["type"]),
            title=record.get("title", ""),
            content=record.get("content"),
            status=DocumentStatus(record.get("status", DocumentStatus.COMPLETED.value)),
            form_data=form_data,
            created_at=_parse_timestamp(created_raw),
        )


def _parse_timestamp(v: Any) -> datetime:
    if isinstance(v, datetime):
        return v
    if isinstance(v, str) and v.strip():
        s = v.strip()
        # fromisoformat() only accepts a trailing Z from 3.11 on.
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        return datetime.fromisoformat(s)
    return datetime.now(timezone.utc)


def get_company_info(settings: Settings) -> CompanyInfo:
    return CompanyInfo(
        name=settings.company_name,
        business_number=settings.company_business_number,
        address=settings.company_address,
        business_type=settings.company_business_type,
        representative=settings.company_representative,
        brand_mark=settings.company_brand_mark,
    )


# ---------------------------------------------------------------------------
# Download framing
# ---------------------------------------------------------------------------

_UNSAFE_TITLE_RE = re.compile(r"[^A-Za-z0-9가-힣\s\-_]")
_WS_RE = re.compile(r"\s+")


def sanitize_title(title: str) -> str:
    """Filename-safe form of a title: Hangul, ASCII alnum, `-` and `_` only."""
    s = _UNSAFE_TITLE_RE.sub("", title or "")
    s = _WS_RE.sub("_", s.strip()).strip("_")
    return s or "document"


def attachment_filename(title: str, extension: str, today: date | None = None) -> str:
    day = (today or date.today()).isoformat()
    return f"{sanitize_title(title)}_{day}.{extension.lstrip('.')}"


def content_disposition(filename: str) -> str:
    return f"attachment; filename*=UTF-8''{quote(filename, safe='')}"


def korean_date(d: date) -> str:
    """Short Korean date form, e.g. `2026. 10. 18.`."""
    return f"{d.year}. {d.month}. {d.day}."
