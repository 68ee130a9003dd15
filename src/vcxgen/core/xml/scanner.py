from __future__ import annotations

"""
Tree Scanner.

Depth-first, pre-order search over the element nodes of a document tree.
A matching element is handed to the callback and its subtree is not
visited, so matches never nest.
"""

from typing import Callable

from vcxgen.domain.node_models import Node

NodePredicate = Callable[[Node], bool]
NodeCallback = Callable[[Node], None]


def scan(root: Node, predicate: NodePredicate, callback: NodeCallback) -> int:
    """
    Visit every element in document order and invoke the callback on matches.

    The descent decision for a node is taken before its callback runs, so a
    callback may freely replace the matched node's attributes and children.
    Text and Comment children are skipped.

    Args:
        root: Node where the traversal starts. It may match itself.
        predicate: Structural test applied to each element.
        callback: Receives each matching element, with mutation rights.

    Returns:
        int: Number of matched elements.
    """
    if predicate(root):
        callback(root)
        return 1

    matches = 0
    # Snapshot guards the sibling walk against callbacks that touch the parent
    for child in list(root.elements()):
        matches += scan(child, predicate, callback)
    return matches


def local_name_is(local_name: str) -> NodePredicate:
    """Build a predicate matching elements by local name, ignoring namespace."""
    def _predicate(node: Node) -> bool:
        return node.name.local == local_name
    return _predicate
