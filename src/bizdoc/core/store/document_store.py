"""
document_store.py — Read-only access to persisted document records.

Records live one per file as `<root>/<id>.json` (the row as the generation
service stored it: id, type, title, content, formData, status, createdAt).
Every record is schema-checked before it becomes a Document.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from pathlib import Path

import orjson

from bizdoc.config import Settings
from bizdoc.core.model.document import Document
from bizdoc.core.validate.schema_validate import document_validator, validate_record

logger = logging.getLogger(__name__)

_ID_RE = re.compile(r"^\d+$")


class InvalidDocumentId(ValueError):
    pass


class DocumentRecordError(ValueError):
    """A stored record is unreadable or fails the document schema."""

    def __init__(self, path: Path, issues: list[str]):
        self.path = path
        self.issues = issues
        super().__init__(f"invalid document record {path}:\n" + "\n".join(issues))


def parse_document_id(raw: int | str) -> int:
    if isinstance(raw, bool):
        raise InvalidDocumentId(f"invalid document id: {raw!r}")
    if isinstance(raw, int):
        if raw < 1:
            raise InvalidDocumentId(f"invalid document id: {raw!r}")
        return raw
    s = str(raw).strip()
    if not _ID_RE.match(s) or int(s) < 1:
        raise InvalidDocumentId(f"invalid document id: {raw!r}")
    return int(s)


def load_document_file(path: Path) -> Document:
    """Parse, validate and build a Document from one record file."""
    try:
        record = orjson.loads(path.read_bytes())
    except orjson.JSONDecodeError as e:
        raise DocumentRecordError(path, [f"- $: not valid JSON ({e})"]) from e
    issues = validate_record(record, document_validator())
    if issues:
        raise DocumentRecordError(path, issues)
    try:
        return Document.from_record(record)
    except (KeyError, TypeError, ValueError) as e:
        raise DocumentRecordError(path, [f"- $: cannot build document ({e})"]) from e


class DocumentStore:
    def __init__(self, root: Path):
        self.root = Path(root)

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentStore":
        return cls(Path(settings.document_store_dir))

    def path_for(self, doc_id: int | str) -> Path:
        return self.root / f"{parse_document_id(doc_id)}.json"

    def get_document(self, doc_id: int | str) -> Document | None:
        path = self.path_for(doc_id)
        if not path.exists():
            logger.info("document not found: %s", path)
            return None
        doc = load_document_file(path)
        if doc.id != parse_document_id(doc_id):
            raise DocumentRecordError(path, [f"- $['id']: record id {doc.id} does not match file name"])
        return doc

    def list_documents(self) -> Iterator[int]:
        if not self.root.is_dir():
            return iter(())
        stems = (p.stem for p in self.root.glob("*.json") if _ID_RE.match(p.stem))
        ids = sorted(n for n in map(int, stems) if n >= 1)
        return iter(ids)
