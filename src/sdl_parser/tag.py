# src/sdl_parser/tag.py

"""
The SDL document node.

A Tag has a name and optional namespace, an ordered list of values, a set
of attributes kept in key order (each with its own namespace) and an
ordered list of child Tags.

    tag = Tag("person", "hr")
    tag.add_value("Akiko")
    tag.set_attribute("age", 32)
    tag.add_child(Tag("pet"))
    str(tag)
    # hr:person "Akiko" age=32 {
    #     pet
    # }

``str(tag)`` is the canonical serialization and two Tags are equal when
their canonical serializations are equal.

A Date value directly followed by a Duration value serializes as
``2005/01/01 12:30:00``, which reads back as a single datetime. Keep such
values apart, or put the Duration in an attribute, when the text has to
round-trip.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from sdl_parser.config import get_config
from sdl_parser.core.exceptions import UnsupportedValueError
from sdl_parser.identifiers import validate_name
from sdl_parser.literals import coerce_literal, format_literal
from sdl_parser.logging import get_logger

log = get_logger(__name__)

CANONICAL_INDENT = "    "
CANONICAL_NEWLINE = "\n"


def _same_literal(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


class Tag:
    def __init__(self, name: str, namespace: str = ""):
        self._namespace = ""
        self._name = ""
        self.name = name
        self.namespace = namespace

        self._values: List[Any] = []
        self._attributes: Dict[str, Tuple[str, Any]] = {}
        self._children: List["Tag"] = []

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @name.setter
    def name(self, name: str) -> None:
        self._name = validate_name(name)

    @property
    def namespace(self) -> str:
        return self._namespace

    @namespace.setter
    def namespace(self, namespace: Optional[str]) -> None:
        self._namespace = validate_name(namespace) if namespace else ""

    @property
    def qualified_name(self) -> str:
        return f"{self._namespace}:{self._name}" if self._namespace else self._name

    # ------------------------------------------------------------------
    # Values
    # ------------------------------------------------------------------

    @property
    def value(self) -> Any:
        """The first value, or None if the tag has no values."""
        return self._values[0] if self._values else None

    @value.setter
    def value(self, value: Any) -> None:
        value = coerce_literal(value)
        if self._values:
            self._values[0] = value
        else:
            self._values.append(value)

    @property
    def values(self) -> List[Any]:
        return list(self._values)

    @values.setter
    def values(self, values: Iterable[Any]) -> None:
        self.set_values(values)

    def add_value(self, value: Any) -> None:
        self._values.append(coerce_literal(value))

    def remove_value(self, value: Any) -> bool:
        """Remove the first value of the same type equal to ``value``."""
        for i, existing in enumerate(self._values):
            if _same_literal(existing, value):
                del self._values[i]
                return True
        return False

    def has_value(self, value: Any) -> bool:
        return any(_same_literal(existing, value) for existing in self._values)

    def set_values(self, values: Iterable[Any]) -> None:
        coerced = [coerce_literal(v) for v in values]
        self._values = coerced

    def clear_values(self) -> None:
        self._values = []

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def set_attribute(self, key: str, value: Any, namespace: str = "") -> None:
        """
        Set ``key`` to ``value``. Keys are unique regardless of namespace:
        setting an existing key replaces both its value and its namespace.

        Raises:
            InvalidIdentifierError: if ``key`` or ``namespace`` is not a legal identifier.
            UnsupportedValueError: if ``value`` is not an SDL literal type.
        """
        validate_name(key)
        if namespace:
            validate_name(namespace)
        self._attributes[key] = (namespace or "", coerce_literal(value))

    def get_attribute(self, key: str, default: Any = None) -> Any:
        entry = self._attributes.get(key)
        return default if entry is None else entry[1]

    def has_attribute(self, key: str) -> bool:
        return key in self._attributes

    def get_attribute_namespace(self, key: str) -> Optional[str]:
        entry = self._attributes.get(key)
        return None if entry is None else entry[0]

    def remove_attribute(self, key: str) -> bool:
        return self._attributes.pop(key, None) is not None

    def iter_attributes(self) -> Iterator[Tuple[str, str, Any]]:
        """Yield ``(namespace, key, value)`` in key order."""
        for key in sorted(self._attributes):
            namespace, value = self._attributes[key]
            yield namespace, key, value

    @property
    def attributes(self) -> Dict[str, Any]:
        return {key: value for _, key, value in self.iter_attributes()}

    @attributes.setter
    def attributes(self, attributes: Mapping[str, Any]) -> None:
        self.set_attributes(attributes)

    def set_attributes(self, attributes: Mapping[str, Any], namespace: Optional[str] = None) -> None:
        """
        Replace attributes from a mapping.

        With no ``namespace`` every existing attribute is dropped first;
        otherwise only the attributes in ``namespace`` are replaced.
        """
        staged = {}
        for key, value in attributes.items():
            validate_name(key)
            staged[key] = (namespace or "", coerce_literal(value))
        if namespace:
            validate_name(namespace)

        self.clear_attributes(namespace)
        self._attributes.update(staged)

    def clear_attributes(self, namespace: Optional[str] = None) -> None:
        if namespace is None:
            self._attributes = {}
            return
        self._attributes = {
            key: entry for key, entry in self._attributes.items() if entry[0] != namespace
        }

    def attribute_namespaces(self) -> Dict[str, str]:
        """Map each attribute key to its namespace ('' for none), in key order."""
        return {key: namespace for namespace, key, _ in self.iter_attributes()}

    def attributes_for_namespace(self, namespace: str) -> Dict[str, Any]:
        return {
            key: value
            for ns, key, value in self.iter_attributes()
            if ns == namespace
        }

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    @property
    def children(self) -> List["Tag"]:
        return list(self._children)

    def add_child(self, child: "Tag") -> "Tag":
        if not isinstance(child, Tag):
            raise UnsupportedValueError(f"Children must be Tags, got {type(child).__name__}")
        self._children.append(child)
        return child

    def remove_child(self, child: "Tag") -> bool:
        for i, existing in enumerate(self._children):
            if existing is child:
                del self._children[i]
                return True
        return False

    def clear_children(self) -> None:
        self._children = []

    def iter_children(self, recursive: bool = False) -> Iterator["Tag"]:
        """Yield children in order; with ``recursive`` descend depth-first."""
        for child in self._children:
            yield child
            if recursive:
                yield from child.iter_children(recursive=True)

    def get_child(self, name: str, recursive: bool = False) -> Optional["Tag"]:
        for child in self.iter_children(recursive):
            if child.name == name:
                return child
        return None

    def get_children(self, name: Optional[str] = None, recursive: bool = False) -> List["Tag"]:
        return [
            child
            for child in self.iter_children(recursive)
            if name is None or child.name == name
        ]

    def children_for_namespace(self, namespace: str, recursive: bool = False) -> List["Tag"]:
        return [
            child
            for child in self.iter_children(recursive)
            if child.namespace == namespace
        ]

    def children_values(self, name: str) -> List[Any]:
        """
        Values of the children called ``name``: a single value for children
        holding exactly one, the full value list otherwise.
        """
        result = []
        for child in self.get_children(name):
            values = child.values
            result.append(values[0] if len(values) == 1 else values)
        return result

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def _lines(self, prefix: str, indent: str, newline: str) -> str:
        parts = [prefix]

        skip_name = self._name == "content" and not self._namespace and bool(self._values)
        if not skip_name:
            parts.append(self.qualified_name)

        for i, value in enumerate(self._values):
            if i > 0 or not skip_name:
                parts.append(" ")
            parts.append(format_literal(value))

        for namespace, key, value in self.iter_attributes():
            parts.append(" ")
            if namespace:
                parts.append(namespace + ":")
            parts.append(key + "=" + format_literal(value))

        if self._children:
            parts.append(" {" + newline)
            for child in self._children:
                parts.append(child._lines(prefix + indent, indent, newline))
                parts.append(newline)
            parts.append(prefix + "}")

        return "".join(parts)

    def serialize(self, indent: Optional[str] = None, newline: Optional[str] = None) -> str:
        """
        Render this tag (and its children) as SDL text.

        ``indent`` and ``newline`` default to the ``writer`` settings of the
        active configuration.
        """
        if indent is None or newline is None:
            config = get_config()
            indent = config.indent if indent is None else indent
            newline = config.newline if newline is None else newline
        return self._lines("", indent, newline)

    def __str__(self) -> str:
        return self._lines("", CANONICAL_INDENT, CANONICAL_NEWLINE)

    def __repr__(self) -> str:
        return (
            f"<Tag {self.qualified_name} values={len(self._values)} "
            f"attributes={len(self._attributes)} children={len(self._children)}>"
        )

    def __eq__(self, other):
        if not isinstance(other, Tag):
            return NotImplemented
        return str(self) == str(other)

    __hash__ = None

    def to_xml_string(self) -> str:
        from sdl_parser.exporter.xml_exporter import tag_to_xml

        return tag_to_xml(self)

    # ------------------------------------------------------------------
    # Reading and writing documents
    # ------------------------------------------------------------------

    def read(self, source) -> "Tag":
        """Parse ``source`` (text, bytes or stream) and append the result as children."""
        from sdl_parser.parser_core import parse

        for child in parse(source):
            self.add_child(child)
        return self

    def read_file(self, path: Union[str, Path]) -> "Tag":
        from sdl_parser.parser_core import parse_file

        for child in parse_file(path):
            self.add_child(child)
        return self

    def write(self, path: Union[str, Path], include_root: bool = False) -> Path:
        """
        Write this tag to ``path``. Without ``include_root`` only the
        children are written, one top-level statement per child.
        """
        config = get_config()
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if include_root:
            text = self.serialize() + config.newline
        else:
            text = "".join(child.serialize() + config.newline for child in self._children)

        with path.open("w", encoding=config.encoding, newline="") as fh:
            fh.write(text)

        log.debug("Wrote %s (%d bytes)", path, path.stat().st_size)
        return path
