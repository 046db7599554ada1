from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

import orjson
from jsonschema import Draft202012Validator

DOCUMENT_SCHEMA_PATH = Path(__file__).resolve().parents[1] / "schemas" / "document.schema.json"


def load_json(path: Path) -> Any:
    return orjson.loads(path.read_bytes())


def _json_path(parts: Any) -> str:
    path = "$"
    for p in parts:
        path += f"[{p!r}]" if isinstance(p, str) else f"[{p}]"
    return path


def document_validator(schema_path: Path = DOCUMENT_SCHEMA_PATH) -> Draft202012Validator:
    return Draft202012Validator(load_json(schema_path), format_checker=Draft202012Validator.FORMAT_CHECKER)


def validate_record(record: Any, validator: Draft202012Validator | None = None) -> list[str]:
    """
    Validate a document record (already parsed) against the document schema.
    Returns a list of human-readable error strings (empty if valid).
    Each error is formatted as: "- <jsonpath>: <message>"
    """
    v = validator or document_validator()
    errors = sorted(v.iter_errors(record), key=lambda e: list(e.path))
    return [f"- {_json_path(e.path)}: {e.message}" for e in errors]


def validate_record_file(instance_path: Path, schema_path: Path = DOCUMENT_SCHEMA_PATH) -> list[str]:
    if not schema_path.exists():
        return [f"[ERR] schema not found: {schema_path}"]
    if not instance_path.exists():
        return [f"[ERR] instance not found: {instance_path}"]
    try:
        inst = load_json(instance_path)
    except orjson.JSONDecodeError as e:
        return [f"[ERR] not valid JSON: {instance_path} ({e})"]
    return validate_record(inst, document_validator(schema_path))


def main() -> int:
    ap = argparse.ArgumentParser(prog="schema_validate")
    ap.add_argument("--schema", default=str(DOCUMENT_SCHEMA_PATH), help="path to *.schema.json")
    ap.add_argument("--instance", required=True, help="path to json to validate")
    args = ap.parse_args()

    schema_path = Path(args.schema)
    instance_path = Path(args.instance)

    errors = validate_record_file(instance_path, schema_path)
    if not errors:
        print(f"[OK] {instance_path} conforms to {schema_path}")
        return 0
    if errors[0].startswith("[ERR]"):
        print(errors[0])
        return 2
    print(f"[NG] {instance_path} does NOT conform to {schema_path}")
    for err in errors:
        print(err)
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
