"""Render failure categories surfaced to callers of the rendering facade."""

from __future__ import annotations

from typing import Any


class RenderError(RuntimeError):
    """Base class: a categorized, all-or-nothing render failure."""

    category = "render_error"
    retryable = False

    def __init__(self, message: str):
        self.message = str(message).strip() or self.category
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "category": self.category,
            "message": self.message,
            "retryable": self.retryable,
        }


class EngineCrashed(RenderError):
    """The headless browser (or its page) went away mid-render."""

    category = "engine_crashed"
    retryable = True


class RenderTimeout(RenderError):
    """A PDF suspension point exceeded its budget."""

    category = "render_timeout"

    def __init__(self, stage: str, timeout_s: float | None = None, detail: str = ""):
        self.stage = stage
        self.timeout_s = timeout_s
        msg = f"{stage} timed out"
        if timeout_s is not None:
            msg += f" after {timeout_s:g}s"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)

    def to_dict(self) -> dict[str, Any]:
        d = super().to_dict()
        d["stage"] = self.stage
        return d


class RenderFailed(RenderError):
    category = "render_failed"


class DocumentNotReady(RenderError):
    """Rendering requested for a document whose status is not `completed`."""

    category = "document_not_ready"


class ResourceCleanupFailed(RenderError):
    """Releasing a page/browser handle failed. Logged, never raised."""

    category = "resource_cleanup_failed"
