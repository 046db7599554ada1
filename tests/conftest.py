"""Shared pytest fixtures: settings, documents and a fake Playwright engine."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from bizdoc.config import Settings
from bizdoc.core.model.document import (
    CompanyInfo,
    Document,
    DocumentStatus,
    DocumentType,
    get_company_info,
)

FAKE_PDF = b"%PDF-1.7\n% fake pdf body\n%%EOF\n"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        font_settle_delay_s=0.0,
        browser_launch_timeout_s=1.0,
        content_load_timeout_s=1.0,
        font_ready_timeout_s=1.0,
        print_timeout_s=1.0,
        document_store_dir="unused",
    )


@pytest.fixture
def company(settings: Settings) -> CompanyInfo:
    return get_company_info(settings)


@pytest.fixture
def make_document() -> Callable[..., Document]:
    def _make(
        content: Any,
        *,
        title: str = "Q1",
        doc_type: DocumentType = DocumentType.QUOTATION,
        status: DocumentStatus = DocumentStatus.COMPLETED,
        doc_id: int = 1,
    ) -> Document:
        return Document(
            id=doc_id,
            type=doc_type,
            title=title,
            content=content,
            status=status,
            form_data={},
            created_at=datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc),
        )

    return _make


class FakeEngine:
    """Stand-in for `async_playwright()`: records every handle it hands out."""

    def __init__(self, pdf_bytes: bytes = FAKE_PDF):
        self.page = MagicMock(name="page")
        self.page.set_content = AsyncMock()
        self.page.evaluate = AsyncMock(return_value="loaded")
        self.page.pdf = AsyncMock(return_value=pdf_bytes)
        self.page.close = AsyncMock()
        self.page.is_closed = MagicMock(return_value=False)

        self.browser = MagicMock(name="browser")
        self.browser.new_page = AsyncMock(return_value=self.page)
        self.browser.close = AsyncMock()

        self.playwright = MagicMock(name="playwright")
        self.playwright.chromium = SimpleNamespace(launch=AsyncMock(return_value=self.browser))
        self.playwright.stop = AsyncMock()

        self.manager = SimpleNamespace(
            start=AsyncMock(return_value=self.playwright),
            __aexit__=AsyncMock(return_value=None),
        )
        self.starts = 0

    def __call__(self) -> SimpleNamespace:
        self.starts += 1
        return self.manager


@pytest.fixture
def fake_engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def make_engine() -> type[FakeEngine]:
    return FakeEngine


@pytest.fixture
def fake_pdf() -> bytes:
    return FAKE_PDF
