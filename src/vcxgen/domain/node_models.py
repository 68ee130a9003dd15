from __future__ import annotations

"""
Markup Document Node Models.

Provides the order-preserving tree used to represent a decoded markup
document. An element owns an ordered list of attributes and an ordered
list of children, where each child is exactly one of three variants:
a nested Node, a Text run, or a Comment run.
"""

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Union

# Pseudo-namespace used for xmlns:prefix declaration attributes
XMLNS_SPACE = "xmlns"

# -----------------------------------------------------------------------------
# NAMES AND ATTRIBUTES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class QName:
    """
    Qualified name of an element or attribute.

    Attributes:
        local: Local part of the name.
        space: Namespace URI, or the literal 'xmlns' for namespace
               declarations of the form xmlns:prefix. Empty when unqualified.
    """
    local: str
    space: str = ""


@dataclass
class Attribute:
    """A single name/value pair. Duplicates are allowed on one element."""
    name: QName
    value: str


# -----------------------------------------------------------------------------
# CHILD VARIANTS
# -----------------------------------------------------------------------------

@dataclass
class Text:
    """Character data run. Stored unescaped."""
    value: str


@dataclass
class Comment:
    """Comment run, without the surrounding delimiters."""
    value: str


@dataclass
class Node:
    """
    Element node of the document tree.

    Attributes:
        name: Qualified element name.
        attributes: Attribute pairs in insertion order.
        children: Mixed content in insertion order.
    """
    name: QName
    attributes: List[Attribute] = field(default_factory=list)
    children: List["Child"] = field(default_factory=list)

    # --- Mutation ---

    def add_child(self, local_name: str) -> Node:
        """Append a new empty element child and return it."""
        child = Node(QName(local_name))
        self.children.append(child)
        return child

    def add_attribute(self, name: str, value: str) -> None:
        """Append an attribute. Existing ones with the same name are kept, though decode() rejects such documents."""
        self.attributes.append(Attribute(QName(name), value))

    def add_text(self, value: str) -> None:
        self.children.append(Text(value))

    def add_comment(self, value: str) -> None:
        """
        Append a comment child.

        Raises:
            ValueError: If the content cannot be represented inside a comment.
        """
        if "--" in value or value.endswith("-"):
            raise ValueError(f"Comment content cannot contain '--' or end with '-': {value!r}")
        self.children.append(Comment(value))

    def clear_attributes(self) -> None:
        self.attributes = []

    def clear_children(self) -> None:
        self.children = []

    # --- Lookup ---

    def elements(self) -> Iterator[Node]:
        """Yield element children in document order, skipping Text and Comment."""
        for child in self.children:
            if isinstance(child, Node):
                yield child

    def get_attribute(self, local_name: str) -> Optional[str]:
        """Return the value of the first attribute with this local name, if any."""
        for attr in self.attributes:
            if attr.name.local == local_name and attr.name.space != XMLNS_SPACE:
                return attr.value
        return None


Child = Union[Node, Text, Comment]