"""
json_exporter.py
Structured JSON exporter for parsed SDL Tag trees.

This exporter:
- Converts Tags to dictionaries (NOT strings)
- Tags every literal with its SDL type so nothing is lost to JSON's
  smaller type system (Int64 vs int, Float32 vs float, Char vs str, ...)
- Is deterministic: attributes come out in key order
"""

from __future__ import annotations

import json
from datetime import date, datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, Iterable, List

from sdl_parser import codec
from sdl_parser.duration import Duration
from sdl_parser.literals import format_literal
from sdl_parser.logging import get_logger
from sdl_parser.tag import Tag
from sdl_parser.types import Char, Float32, Int64

log = get_logger("json_exporter")


def literal_type(value: Any) -> str:
    """Name of the SDL literal type of ``value`` (order matters: subclasses first)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, Int64):
        return "int64"
    if isinstance(value, int):
        return "int32"
    if isinstance(value, Float32):
        return "float32"
    if isinstance(value, float):
        return "float64"
    if isinstance(value, Decimal):
        return "decimal"
    if isinstance(value, Char):
        return "char"
    if isinstance(value, str):
        return "string"
    if isinstance(value, bytes):
        return "binary"
    if isinstance(value, datetime):
        return "datetime"
    if isinstance(value, date):
        return "date"
    if isinstance(value, Duration):
        return "duration"
    raise TypeError(f"{type(value).__name__} is not an SDL literal")


def _to_json_compatible(value: Any) -> Dict[str, Any]:
    """
    Rules:
    - null/bool/numbers/strings pass through as JSON natives
    - Decimal -> plain decimal string (no precision loss)
    - binary -> base64 text
    - date/datetime/duration -> their SDL literal text
    """
    kind = literal_type(value)

    if kind in ("null", "bool"):
        payload: Any = value
    elif kind in ("int32", "int64"):
        payload = int(value)
    elif kind in ("float32", "float64"):
        payload = float(value)
    elif kind in ("string", "char"):
        payload = str(value)
    elif kind == "decimal":
        payload = format(value, "f")
    elif kind == "binary":
        payload = codec.encode(value)
    else:
        payload = format_literal(value)

    return {"type": kind, "value": payload}


def tag_to_dict(tag: Tag) -> Dict[str, Any]:
    return {
        "name": tag.name,
        "namespace": tag.namespace,
        "values": [_to_json_compatible(v) for v in tag.values],
        "attributes": [
            {"namespace": namespace, "key": key, **_to_json_compatible(value)}
            for namespace, key, value in tag.iter_attributes()
        ],
        "children": [tag_to_dict(child) for child in tag.children],
    }


def tags_to_json(tags: Iterable[Tag], indent: int | None = 2) -> str:
    data: List[Dict[str, Any]] = [tag_to_dict(tag) for tag in tags]
    if indent is None:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(data, indent=indent, ensure_ascii=False)


def export_tags_to_json(tags: Iterable[Tag], output_path: str | Path, indent: int | None = 2) -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    tags = list(tags)
    log.info("Exporting %d top-level tags as JSON to: %s", len(tags), output_path)

    output_path.write_text(tags_to_json(tags, indent=indent), encoding="utf-8")

    size_bytes = output_path.stat().st_size
    log.info("JSON export complete. size=%d bytes", size_bytes)
    return output_path
