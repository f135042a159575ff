"""
Exporter package.

Re-exports the JSON and XML export entry points for parsed SDL trees.
"""

from __future__ import annotations

from .json_exporter import export_tags_to_json, tag_to_dict, tags_to_json
from .xml_exporter import export_tags_to_xml, tag_to_xml, tags_to_xml

__all__ = [
    "export_tags_to_json",
    "export_tags_to_xml",
    "tag_to_dict",
    "tag_to_xml",
    "tags_to_json",
    "tags_to_xml",
]
