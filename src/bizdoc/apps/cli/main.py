from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path

from bizdoc.config import Settings, get_settings
from bizdoc.core.inspect.pdf_inspect import summarize_pdf
from bizdoc.core.inspect.pptx_inspect import summarize_pptx
from bizdoc.core.model.document import Document, attachment_filename
from bizdoc.core.normalize import normalize_content
from bizdoc.core.render import DocumentRenderer, RenderError
from bizdoc.core.store.document_store import (
    DocumentRecordError,
    DocumentStore,
    InvalidDocumentId,
    load_document_file,
)
from bizdoc.core.validate.schema_validate import DOCUMENT_SCHEMA_PATH, validate_record_file

logger = logging.getLogger(__name__)


def _configure_logging(settings: Settings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_document(args: argparse.Namespace, settings: Settings) -> Document | None:
    """Resolve --doc PATH or --id N [--store DIR]; prints [NG] and returns None on failure."""
    try:
        if getattr(args, "doc", None):
            path = Path(args.doc).resolve()
            if not path.exists():
                print(f"[NG] document file not found: {path}")
                return None
            return load_document_file(path)

        store = DocumentStore(Path(args.store)) if args.store else DocumentStore.from_settings(settings)
        doc = store.get_document(args.id)
        if doc is None:
            print(f"[NG] document not found: id={args.id} (store: {store.root})")
        return doc
    except InvalidDocumentId as e:
        print(f"[NG] {e}")
        return None
    except DocumentRecordError as e:
        print(f"[NG] invalid document record: {e.path}")
        for m in e.issues[:30]:
            print(f"  {m}")
        if len(e.issues) > 30:
            print(f"  ... ({len(e.issues)} errors)")
        return None
    except ValueError as e:
        print(f"[NG] cannot build document: {e}")
        return None


def cmd_paths(args: argparse.Namespace) -> int:
    settings = get_settings()
    print(f"schema.document: {DOCUMENT_SCHEMA_PATH}")
    print(f"store: {Path(settings.document_store_dir).resolve()}")
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    path = Path(args.doc).resolve()
    errs = validate_record_file(path)
    if not errs:
        print(f"[OK] {path}")
        return 0
    if errs[0].startswith("[ERR]"):
        print(errs[0])
        return 2
    print(f"[NG] {path}")
    for m in errs[:30]:
        print(f"  {m}")
    if len(errs) > 30:
        print(f"  ... ({len(errs)} errors)")
    return 2


def cmd_sections(args: argparse.Namespace) -> int:
    doc = _load_document(args, get_settings())
    if doc is None:
        return 2
    sections = normalize_content(doc.content)
    print(f"[OK] {len(sections)} section(s): {doc.title}")
    for rf in doc.reference_files:
        print(f"  ref: {rf.name} ({rf.mime_type})")
    for i, s in enumerate(sections, 1):
        preview = s.text.replace("\n", " ")
        if len(preview) > 60:
            preview = preview[:57] + "..."
        print(f"  {i:>3}. [{s.kind.value}] {s.heading} ({len(s.text)} chars) {preview}")
    return 0


def cmd_render(args: argparse.Namespace) -> int:
    settings = get_settings()
    doc = _load_document(args, settings)
    if doc is None:
        return 2

    fmt = args.format
    out_path = Path(args.out).resolve()
    if out_path.is_dir() or args.out.endswith(("/", "\\")):
        out_path = out_path / attachment_filename(doc.title, fmt)

    renderer = DocumentRenderer.from_settings(settings)
    try:
        data = asyncio.run(renderer.generate(doc, fmt))
    except RenderError as e:
        # Do not leave stale output behind.
        try:
            if out_path.exists():
                out_path.unlink()
        except OSError:
            pass
        print(f"[NG] render failed [{e.category}]")
        print(f"      detail: {e.message}")
        if e.retryable:
            print("      the rendering engine stopped unexpectedly; retrying may succeed")
        return 2

    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_bytes(data)
    print(f"[OK] rendered: {out_path} ({len(data)} bytes)")
    return 0


def cmd_inspect(args: argparse.Namespace) -> int:
    in_path = Path(args.input).resolve()
    if not in_path.exists():
        print(f"[NG] input not found: {in_path}")
        return 2

    suf = in_path.suffix.lower()
    try:
        if suf == ".pdf":
            summary = summarize_pdf(in_path)
            for p in summary["pages"]:
                p.pop("text", None)
        elif suf == ".pptx":
            summary = summarize_pptx(in_path)
        else:
            print(f"[NG] unsupported input type: {in_path.suffix} (use .pdf or .pptx)")
            return 2
    except Exception as e:
        print("[NG] inspect failed")
        print(f"      detail: {e}")
        return 2

    print(json.dumps(summary, ensure_ascii=False, indent=2))
    return 0


def _add_doc_source(p: argparse.ArgumentParser) -> None:
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--doc", help="path to a document record (.json)")
    src.add_argument("--id", help="document id to read from the store")
    p.add_argument("--store", required=False, help="document store directory (default: BIZDOC_DOCUMENT_STORE_DIR)")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bizdoc")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_paths = sub.add_parser("paths", help="show schema and store paths")
    p_paths.set_defaults(func=cmd_paths)

    p_val = sub.add_parser("validate", help="validate a document record against the schema")
    p_val.add_argument("--doc", required=True, help="path to a document record (.json)")
    p_val.set_defaults(func=cmd_validate)

    p_sec = sub.add_parser("sections", help="print the sections a document renders into")
    _add_doc_source(p_sec)
    p_sec.set_defaults(func=cmd_sections)

    p_rnd = sub.add_parser("render", help="render a document to pdf or pptx")
    _add_doc_source(p_rnd)
    p_rnd.add_argument("--format", choices=("pdf", "pptx"), required=True)
    p_rnd.add_argument("--out", required=True, help="output file, or a directory to name it automatically")
    p_rnd.set_defaults(func=cmd_render)

    p_ins = sub.add_parser("inspect", help="summarize a rendered .pdf or .pptx")
    p_ins.add_argument("input", help="path to a .pdf or .pptx")
    p_ins.set_defaults(func=cmd_inspect)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(get_settings(), args.verbose)
    raise SystemExit(args.func(args))


if __name__ == "__main__":
    main()
