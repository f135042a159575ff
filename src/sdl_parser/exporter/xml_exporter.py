"""
xml_exporter.py
XML rendition of SDL Tag trees.

Each Tag becomes an element named after its (namespace-qualified) name.
Values become ``_val0``, ``_val1``, ... attributes and SDL attributes keep
their key and namespace prefix:

    person "Akiko" age=32 { pet "cat" }

    <person _val0="Akiko" age="32">
        <pet _val0="cat"/>
    </person>
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable
from xml.sax.saxutils import quoteattr

from sdl_parser.literals import format_literal
from sdl_parser.logging import get_logger
from sdl_parser.tag import Tag

log = get_logger("xml_exporter")


def _xml_value(value) -> str:
    # strings and chars keep their SDL escapes but lose their quotes
    return quoteattr(format_literal(value, quote=False))


def tag_to_xml(tag: Tag, prefix: str = "", indent: str = "    ", newline: str = "\n") -> str:
    parts = [prefix, "<", tag.qualified_name]

    for i, value in enumerate(tag.values):
        parts.append(f" _val{i}={_xml_value(value)}")

    for namespace, key, value in tag.iter_attributes():
        name = f"{namespace}:{key}" if namespace else key
        parts.append(f" {name}={_xml_value(value)}")

    children = tag.children
    if not children:
        parts.append("/>")
        return "".join(parts)

    parts.append(">" + newline)
    for child in children:
        parts.append(tag_to_xml(child, prefix + indent, indent, newline))
        parts.append(newline)
    parts.append(f"{prefix}</{tag.qualified_name}>")
    return "".join(parts)


def tags_to_xml(tags: Iterable[Tag], root_name: str = "root") -> str:
    """Wrap a parsed forest in a single root element and render it."""
    root = Tag(root_name)
    for tag in tags:
        root.add_child(tag)
    return tag_to_xml(root)


def export_tags_to_xml(tags: Iterable[Tag], output_path: str | Path, root_name: str = "root") -> Path:
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    output_path.write_text(tags_to_xml(tags, root_name) + "\n", encoding="utf-8")

    log.info("XML export complete: %s (%d bytes)", output_path, output_path.stat().st_size)
    return output_path
