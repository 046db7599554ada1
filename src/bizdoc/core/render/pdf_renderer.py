"""
pdf_renderer.py — Document -> PDF bytes through headless Chromium (Playwright).

Every render owns its engine: Playwright is started, Chromium launched and a
page opened inside `browser_page()`, and all three are released in reverse
order on every exit path. Each awaited engine step runs under its own
timeout budget:

  browser launch -> content load -> font loading -> pdf print

Failure categories (no internal retries):
  EngineCrashed   target/page/browser closed or crashed mid-operation
  RenderTimeout   a step exceeded its budget (asyncio or Playwright timeout)
  RenderFailed    anything else, with the original message
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any, TypeVar

from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from bizdoc.config import Settings
from bizdoc.core.model.document import CompanyInfo, Document
from bizdoc.core.normalize import normalize_content
from bizdoc.core.render.errors import (
    DocumentNotReady,
    EngineCrashed,
    RenderError,
    RenderFailed,
    RenderTimeout,
    ResourceCleanupFailed,
)
from bizdoc.core.render.html_builder import build_document_html

logger = logging.getLogger(__name__)

T = TypeVar("T")

# A4 at 96 dpi; scale 1 keeps font metrics deterministic.
VIEWPORT = {"width": 794, "height": 1123}
DEVICE_SCALE_FACTOR = 1

PAGE_MARGIN = "2.5cm"
PDF_OPTIONS: dict[str, Any] = {
    "format": "A4",
    "print_background": True,
    "margin": {
        "top": PAGE_MARGIN,
        "right": PAGE_MARGIN,
        "bottom": PAGE_MARGIN,
        "left": PAGE_MARGIN,
    },
    "prefer_css_page_size": False,
}

_FONTS_READY_JS = (
    "() => document.fonts ? document.fonts.ready.then(() => document.fonts.status) : 'unsupported'"
)

_CRASH_MARKERS = (
    "target closed",
    "target page, context or browser has been closed",
    "has been closed",
    "browser closed",
    "crashed",
    "disconnected",
    "connection closed",
)

EngineFactory = Callable[[], Any]


async def _bounded(aw: Awaitable[T], stage: str, timeout_s: float) -> T:
    try:
        return await asyncio.wait_for(aw, timeout=timeout_s)
    except asyncio.TimeoutError as exc:
        raise RenderTimeout(stage, timeout_s) from exc
    except PlaywrightTimeoutError as exc:
        raise RenderTimeout(stage, timeout_s, detail=str(exc).splitlines()[0] if str(exc) else "") from exc


def classify_engine_error(exc: BaseException) -> RenderError:
    """Map a raw engine exception onto a render failure category."""
    if isinstance(exc, RenderError):
        return exc
    if isinstance(exc, (asyncio.TimeoutError, PlaywrightTimeoutError)):
        return RenderTimeout("render", detail=str(exc))
    msg = str(exc).strip() or type(exc).__name__
    low = msg.lower()
    if any(m in low for m in _CRASH_MARKERS):
        return EngineCrashed(f"rendering engine terminated unexpectedly: {msg}")
    return RenderFailed(f"PDF rendering failed: {msg}")


def _log_cleanup_failure(what: str, exc: Exception) -> None:
    err = ResourceCleanupFailed(f"closing {what} failed: {exc}")
    logger.warning("[%s] %s", err.category, err.message, exc_info=exc)


async def _release(page: Any, browser: Any, playwright: Any) -> None:
    # Page first, then browser, then the driver process.
    if page is not None:
        try:
            if not page.is_closed():
                await page.close()
            logger.debug("page closed")
        except Exception as exc:
            _log_cleanup_failure("page", exc)
    if browser is not None:
        try:
            await browser.close()
            logger.debug("browser closed")
        except Exception as exc:
            _log_cleanup_failure("browser", exc)
    if playwright is not None:
        try:
            await playwright.stop()
            logger.debug("playwright stopped")
        except Exception as exc:
            _log_cleanup_failure("playwright", exc)


async def _abandon_engine(manager: Any) -> None:
    # start() never handed back a handle; the driver may still be running.
    try:
        await manager.__aexit__(None, None, None)
        logger.debug("playwright manager exited")
    except Exception as exc:
        _log_cleanup_failure("playwright manager", exc)


@asynccontextmanager
async def browser_page(
    settings: Settings,
    engine_factory: EngineFactory = async_playwright,
) -> AsyncIterator[Any]:
    """Start an engine, launch Chromium and yield a fresh page; always release all three."""
    manager = engine_factory()
    playwright = None
    browser = None
    page = None
    try:
        playwright = await _bounded(manager.start(), "browser launch", settings.browser_launch_timeout_s)
        browser = await _bounded(
            playwright.chromium.launch(headless=True, args=list(settings.browser_args)),
            "browser launch",
            settings.browser_launch_timeout_s,
        )
        page = await _bounded(
            browser.new_page(viewport=dict(VIEWPORT), device_scale_factor=DEVICE_SCALE_FACTOR),
            "browser launch",
            settings.browser_launch_timeout_s,
        )
        yield page
    finally:
        await _release(page, browser, playwright)
        if playwright is None:
            await _abandon_engine(manager)


class PdfRenderer:
    def __init__(self, settings: Settings, engine_factory: EngineFactory = async_playwright):
        self._settings = settings
        self._engine_factory = engine_factory

    async def render(self, document: Document, company: CompanyInfo) -> bytes:
        if not document.is_completed:
            raise DocumentNotReady(
                f"document {document.id} is {document.status.value}; only completed documents render"
            )

        s = self._settings
        sections = normalize_content(document.content)
        markup = build_document_html(document, sections, company, s.pdf_font_families)
        logger.info("PDF render start: document=%s sections=%d", document.id, len(sections))

        try:
            async with browser_page(s, self._engine_factory) as page:
                await _bounded(
                    page.set_content(
                        markup,
                        wait_until="networkidle",
                        timeout=s.content_load_timeout_s * 1000,
                    ),
                    "content load",
                    s.content_load_timeout_s,
                )
                font_status = await _bounded(
                    page.evaluate(_FONTS_READY_JS), "font loading", s.font_ready_timeout_s
                )
                logger.debug("fonts ready: %s", font_status)
                if s.font_settle_delay_s > 0:
                    await asyncio.sleep(s.font_settle_delay_s)
                pdf = await _bounded(page.pdf(**PDF_OPTIONS), "pdf print", s.print_timeout_s)
        except RenderError as err:
            logger.error("PDF render failed: document=%s [%s] %s", document.id, err.category, err.message)
            raise
        except Exception as exc:
            err = classify_engine_error(exc)
            logger.error("PDF render failed: document=%s [%s] %s", document.id, err.category, err.message)
            raise err from exc

        if not pdf:
            raise RenderFailed("PDF rendering failed: engine returned an empty document")
        logger.info("PDF render done: document=%s bytes=%d", document.id, len(pdf))
        return bytes(pdf)
