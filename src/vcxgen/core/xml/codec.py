from __future__ import annotations

"""
Markup Document Codec.

Translates between raw bytes and the Node tree. Decoding delegates
tokenization to lxml and then walks the parsed tree in document order,
turning element text and tails into Text children so that mixed content
keeps its exact position. Encoding is a direct writer that emits the tree
in stored order, tracking in-scope namespace declarations so qualified
names can be rendered with the prefixes the document declared.
"""

import io
import logging
from typing import BinaryIO, Dict, List, Optional, Tuple
from xml.sax.saxutils import escape

from lxml import etree

from vcxgen.domain.errors import MalformedDocumentError, SinkWriteError
from vcxgen.domain.node_models import (
    XMLNS_SPACE,
    Attribute,
    Comment,
    Node,
    QName,
    Text,
)

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# CONSTANTS
# -----------------------------------------------------------------------------

XML_SPACE = "http://www.w3.org/XML/1998/namespace"
XML_DECLARATION = b'<?xml version="1.0" encoding="utf-8"?>\n'

_TEXT_ENTITIES: Dict[str, str] = {"\r": "&#13;"}

_ATTR_ENTITIES: Dict[str, str] = {
    '"': "&quot;",
    "\n": "&#10;",
    "\r": "&#13;",
    "\t": "&#9;",
}

# Namespace scope: prefix ("" for the default namespace) -> URI
Scope = Dict[str, str]

# -----------------------------------------------------------------------------
# DECODING
# -----------------------------------------------------------------------------

def decode(data: bytes) -> Node:
    """
    Decode a complete markup document into a Node tree.

    The returned root corresponds to the outermost element. Its own
    namespace is discarded, while namespace declarations are kept as
    attributes wherever they appear. Processing instructions, entity
    references and DTD content are dropped.

    Args:
        data: Raw document bytes. The encoding is taken from the XML
              declaration, defaulting to UTF-8.

    Returns:
        Node: Root of the decoded tree.

    Raises:
        MalformedDocumentError: If the input is not well-formed.
    """
    parser = etree.XMLParser(
        remove_comments=False,
        remove_pis=False,
        resolve_entities=False,
        remove_blank_text=False,
        strip_cdata=True,
        no_network=True,
        huge_tree=True,
    )

    try:
        root_el = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        line, column = getattr(e, "position", (0, 0))
        raise MalformedDocumentError(f"Malformed document: {e}", line, column) from e
    except ValueError as e:
        # Raised by lxml for unusable input such as an empty byte string
        raise MalformedDocumentError(f"Malformed document: {e}") from e

    if root_el is None:
        raise MalformedDocumentError("Malformed document: no root element")

    root = _convert_element(root_el, {})
    root.name = QName(root.name.local)
    return root


def _convert_element(el: etree._Element, parent_nsmap: Dict[Optional[str], str]) -> Node:
    """Recursively convert an lxml element and its mixed content."""
    tag = etree.QName(el)
    node = Node(QName(tag.localname, tag.namespace or ""))

    # Declarations introduced on this element come first
    for prefix, uri in el.nsmap.items():
        if parent_nsmap.get(prefix) == uri:
            continue
        if prefix is None:
            node.attributes.append(Attribute(QName("xmlns"), uri))
        else:
            node.attributes.append(Attribute(QName(prefix, XMLNS_SPACE), uri))

    for key, value in el.attrib.items():
        attr_name = etree.QName(key)
        node.attributes.append(Attribute(QName(attr_name.localname, attr_name.namespace or ""), value))

    if el.text:
        node.children.append(Text(el.text))

    for child in el:
        if child.tag is etree.Comment:
            node.children.append(Comment(child.text or ""))
        elif isinstance(child.tag, str):
            node.children.append(_convert_element(child, el.nsmap))
        else:
            logger.debug(f"Dropping unsupported markup construct: {child!r}")

        # Tail text belongs to the parent, after the construct itself
        if child.tail:
            node.children.append(Text(child.tail))

    return node

# -----------------------------------------------------------------------------
# ENCODING
# -----------------------------------------------------------------------------

def encode(node: Node, *, indent: str = "", xml_declaration: bool = False) -> bytes:
    """
    Encode a Node tree into UTF-8 bytes.

    Args:
        node: Root of the tree to encode.
        indent: Per-level indentation. Empty disables pretty printing.
        xml_declaration: Prefix the output with an XML declaration.

    Returns:
        bytes: The encoded document.
    """
    buffer = io.BytesIO()
    encode_to(node, buffer, indent=indent, xml_declaration=xml_declaration)
    return buffer.getvalue()


def encode_to(
        node: Node,
        sink: BinaryIO,
        *,
        indent: str = "",
        xml_declaration: bool = False,
) -> None:
    """
    Encode a Node tree directly into a binary sink.

    Raises:
        SinkWriteError: If the sink fails while receiving data.
    """
    parts: List[str] = []
    _write_node(node, parts, {}, indent, 0)

    try:
        if xml_declaration:
            sink.write(XML_DECLARATION)
        sink.write("".join(parts).encode("utf-8"))
        if indent:
            sink.write(b"\n")
    except OSError as e:
        raise SinkWriteError(f"Failed to write encoded document: {e}") from e


def _write_node(node: Node, out: List[str], parent_scope: Scope, indent: str, depth: int) -> None:
    """Append the serialized form of one element subtree to the output."""
    scope: Scope = dict(parent_scope)
    for attr in node.attributes:
        declared = _declared_prefix(attr.name)
        if declared is not None:
            scope[declared] = attr.value

    extra_decls: List[Tuple[str, str]] = []
    tag = _element_name(node.name, scope, extra_decls)

    rendered = [(_attribute_name(attr.name, scope, extra_decls), attr.value) for attr in node.attributes]

    # Declarations go first, the position decode() gives them back
    out.append("<" + tag)
    for attr_name, value in extra_decls + rendered:
        out.append(f' {attr_name}="{_escape_attr(value)}"')

    content = [c for c in node.children if not (isinstance(c, Text) and not c.value)]
    if not content:
        out.append(" />")
        return
    out.append(">")

    # Whitespace is never injected into mixed content
    pretty = bool(indent) and not any(isinstance(c, Text) for c in content)
    child_indent = indent if pretty else ""

    for child in content:
        if pretty:
            out.append("\n" + indent * (depth + 1))

        if isinstance(child, Node):
            _write_node(child, out, scope, child_indent, depth + 1)
        elif isinstance(child, Text):
            out.append(escape(child.value, _TEXT_ENTITIES))
        elif isinstance(child, Comment):
            out.append(f"<!--{child.value}-->")

    if pretty:
        out.append("\n" + indent * depth)
    out.append(f"</{tag}>")


def _declared_prefix(name: QName) -> Optional[str]:
    """Return the prefix declared by an xmlns attribute name, or None."""
    if name.space == XMLNS_SPACE:
        return name.local
    if not name.space and name.local == "xmlns":
        return ""
    return None


def _element_name(name: QName, scope: Scope, extra_decls: List[Tuple[str, str]]) -> str:
    """
    Render an element name against the namespace scope.

    Unqualified names are written bare and take the default namespace in
    scope. A namespace that is not in scope is declared as the default
    namespace on the element itself.
    """
    if not name.space or scope.get("") == name.space:
        return name.local

    for prefix, uri in scope.items():
        if prefix and uri == name.space:
            return f"{prefix}:{name.local}"

    scope[""] = name.space
    extra_decls.append(("xmlns", name.space))
    return name.local


def _attribute_name(name: QName, scope: Scope, extra_decls: List[Tuple[str, str]]) -> str:
    """Render an attribute name, declaring a generated prefix if needed."""
    if not name.space:
        return name.local
    if name.space == XMLNS_SPACE:
        return f"xmlns:{name.local}"
    if name.space == XML_SPACE:
        return f"xml:{name.local}"

    for prefix, uri in scope.items():
        if prefix and uri == name.space:
            return f"{prefix}:{name.local}"

    n = 0
    while f"ns{n}" in scope:
        n += 1
    prefix = f"ns{n}"
    scope[prefix] = name.space
    extra_decls.append((f"xmlns:{prefix}", name.space))
    return f"{prefix}:{name.local}"


def _escape_attr(value: str) -> str:
    return escape(value, _ATTR_ENTITIES)
