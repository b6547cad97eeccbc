"""Deterministic structural canonicalization for XML and JSON documents.

Documents are parsed into a small tagged tree (scalar, sequence, keyed), every
keyed node is sorted by key and every sequence by the serialized form of its
elements, and the tree is written back to its original surface syntax. Two
documents that differ only in element or attribute order produce identical
output. Ordering is purely structural and never depends on the document type.
"""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Any, Literal, Union
from xml.dom import minidom
from xml.parsers.expat import ExpatError
from xml.sax.saxutils import escape

from orgdiffpack.core.exceptions import ParseError

DocumentSurface = Literal["xml", "json"]
DOCUMENT_SURFACES: tuple[str, ...] = ("xml", "json")

ATTRIBUTE_PREFIX = "@_"
TEXT_KEY = "#text"
INDENT = "  "

_ATTRIBUTE_ENTITIES = {'"': "&quot;", "\n": "&#10;", "\r": "&#13;", "\t": "&#9;"}


@dataclass(frozen=True, slots=True)
class ScalarNode:
    """Leaf value. XML text is always ``str``; JSON keeps its scalar type."""

    value: Any


@dataclass(frozen=True, slots=True)
class SequenceNode:
    """Ordered list of child nodes."""

    items: tuple["Node", ...]


@dataclass(frozen=True, slots=True)
class KeyedNode:
    """Mapping of unique string keys to child nodes."""

    entries: tuple[tuple[str, "Node"], ...]


Node = Union[ScalarNode, SequenceNode, KeyedNode]


def canonicalize(
    document: str,
    format_hint: str | None = None,
    *,
    surface: DocumentSurface = "xml",
) -> str:
    """Return the canonical serialization of a structured document.

    ``format_hint`` names the declared item type (for example a metadata type).
    It only annotates parse errors and never changes ordering.
    """
    tree = parse_document(document, surface=surface, format_hint=format_hint)
    return serialize_document(canonicalize_node(tree), surface=surface)


def canonicalize_xml(xml: str, format_hint: str | None = None) -> str:
    return canonicalize(xml, format_hint, surface="xml")


def canonicalize_json(text: str, format_hint: str | None = None) -> str:
    return canonicalize(text, format_hint, surface="json")


def parse_document(
    document: str,
    *,
    surface: DocumentSurface,
    format_hint: str | None = None,
) -> Node:
    """Parse a document into the generic node tree.

    Raises:
        ParseError: If the document is not well-formed.
        ValueError: If ``surface`` is not supported.
    """
    if surface == "xml":
        return _parse_xml(document, format_hint=format_hint)
    if surface == "json":
        return _parse_json(document, format_hint=format_hint)
    raise ValueError(
        f"Unsupported document surface: {surface}. "
        f"Supported values: {', '.join(DOCUMENT_SURFACES)}."
    )


def canonicalize_node(node: Node) -> Node:
    """Sort keyed children by key and sequence items by serialized form, bottom-up."""
    if isinstance(node, ScalarNode):
        return node

    if isinstance(node, KeyedNode):
        entries = [(key, canonicalize_node(child)) for key, child in node.entries]
        entries.sort(key=lambda entry: entry[0])
        return KeyedNode(entries=tuple(entries))

    if isinstance(node, SequenceNode):
        items = [canonicalize_node(item) for item in node.items]
        # list.sort is stable, so equal keys keep their original relative order.
        items.sort(key=node_sort_key)
        return SequenceNode(items=tuple(items))

    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def node_sort_key(node: Node) -> str:
    """Serialized form used to order sequence elements.

    String scalars compare by raw value; everything else by compact JSON. This is
    lexicographic on purpose, so ``10`` sorts before ``2``.
    """
    if isinstance(node, ScalarNode) and isinstance(node.value, str):
        return node.value
    return json.dumps(node_to_plain(node), ensure_ascii=False, separators=(",", ":"))


def node_to_plain(node: Node) -> Any:
    """Convert a node tree into plain dict/list/scalar values, preserving order."""
    if isinstance(node, ScalarNode):
        return node.value
    if isinstance(node, SequenceNode):
        return [node_to_plain(item) for item in node.items]
    if isinstance(node, KeyedNode):
        return {key: node_to_plain(child) for key, child in node.entries}
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def serialize_document(node: Node, *, surface: DocumentSurface) -> str:
    if surface == "json":
        return json.dumps(node_to_plain(node), ensure_ascii=False, indent=2) + "\n"
    if surface == "xml":
        if not isinstance(node, KeyedNode):
            raise ValueError("XML documents must have a keyed root node")
        lines: list[str] = []
        for tag, child in node.entries:
            _emit_xml(tag, child, depth=0, out=lines)
        return "\n".join(lines) + "\n"
    raise ValueError(
        f"Unsupported document surface: {surface}. "
        f"Supported values: {', '.join(DOCUMENT_SURFACES)}."
    )


def _parse_xml(document: str, *, format_hint: str | None) -> KeyedNode:
    try:
        parsed = minidom.parseString(document)
    except ExpatError as error:
        raise ParseError(_error_detail(error, format_hint), surface="xml") from error

    try:
        root = parsed.documentElement
        return KeyedNode(entries=((root.tagName, _element_to_node(root)),))
    finally:
        parsed.unlink()


def _element_to_node(element: minidom.Element) -> Node:
    grouped: dict[str, list[Node]] = {}
    text_parts: list[str] = []

    for name, value in element.attributes.items():
        grouped[f"{ATTRIBUTE_PREFIX}{name}"] = [ScalarNode(value=value)]

    for child in element.childNodes:
        if child.nodeType == child.ELEMENT_NODE:
            grouped.setdefault(child.tagName, []).append(_element_to_node(child))
        elif child.nodeType in (child.TEXT_NODE, child.CDATA_SECTION_NODE):
            text_parts.append(child.data)

    text = "".join(text_parts).strip()
    if not grouped:
        return ScalarNode(value=text)

    if text:
        grouped[TEXT_KEY] = [ScalarNode(value=text)]

    entries: list[tuple[str, Node]] = []
    for key, nodes in grouped.items():
        if len(nodes) == 1:
            entries.append((key, nodes[0]))
        else:
            entries.append((key, SequenceNode(items=tuple(nodes))))
    return KeyedNode(entries=tuple(entries))


def _parse_json(document: str, *, format_hint: str | None) -> Node:
    try:
        raw = json.loads(document)
    except json.JSONDecodeError as error:
        raise ParseError(_error_detail(error, format_hint), surface="json") from error
    return _json_to_node(raw)


def _json_to_node(value: Any) -> Node:
    if isinstance(value, dict):
        return KeyedNode(
            entries=tuple((str(key), _json_to_node(child)) for key, child in value.items())
        )
    if isinstance(value, list):
        return SequenceNode(items=tuple(_json_to_node(item) for item in value))
    return ScalarNode(value=value)


def _emit_xml(tag: str, node: Node, *, depth: int, out: list[str]) -> None:
    pad = INDENT * depth

    if isinstance(node, SequenceNode):
        for item in node.items:
            _emit_xml(tag, item, depth=depth, out=out)
        return

    if isinstance(node, ScalarNode):
        text = _scalar_text(node)
        if text:
            out.append(f"{pad}<{tag}>{escape(text)}</{tag}>")
        else:
            out.append(f"{pad}<{tag}/>")
        return

    attributes: list[str] = []
    text = ""
    children: list[tuple[str, Node]] = []
    for key, child in node.entries:
        if key.startswith(ATTRIBUTE_PREFIX) and isinstance(child, ScalarNode):
            name = key[len(ATTRIBUTE_PREFIX):]
            value = escape(_scalar_text(child), _ATTRIBUTE_ENTITIES)
            attributes.append(f' {name}="{value}"')
        elif key == TEXT_KEY and isinstance(child, ScalarNode):
            text = _scalar_text(child)
        else:
            children.append((key, child))

    opening = f"<{tag}{''.join(attributes)}"
    if not children:
        if text:
            out.append(f"{pad}{opening}>{escape(text)}</{tag}>")
        else:
            out.append(f"{pad}{opening}/>")
        return

    out.append(f"{pad}{opening}>")
    if text:
        out.append(f"{pad}{INDENT}{escape(text)}")
    for key, child in children:
        _emit_xml(key, child, depth=depth + 1, out=out)
    out.append(f"{pad}</{tag}>")


def _scalar_text(node: ScalarNode) -> str:
    if isinstance(node.value, str):
        return node.value
    if node.value is None:
        return ""
    return json.dumps(node.value)


def _error_detail(error: Exception, format_hint: str | None) -> str:
    if format_hint:
        return f"{error} (type: {format_hint})"
    return str(error)
