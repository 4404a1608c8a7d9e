"""
AST traversal helpers.

Indexers describe what they extract as a table of node kind -> handler and
hand it to ``dispatch_nodes``, which walks the whole tree in source order the
way ``ast.Inspect`` does (function-local declarations included).
"""

from typing import Callable, Dict, Iterator, List, Optional, TypeVar

from tree_sitter import Node

T = TypeVar("T")

NodeHandler = Callable[[Node, str], Optional[T]]


def iter_nodes(root: Node) -> Iterator[Node]:
    """Yield named nodes of the subtree in pre-order (source order)."""
    stack: List[Node] = [root]
    while stack:
        node = stack.pop()
        if node.is_named:
            yield node
        stack.extend(reversed(node.children))


def dispatch_nodes(
    root: Node,
    file_path: str,
    handlers: Dict[str, NodeHandler],
) -> List[T]:
    """Run the handler registered for each node kind and collect non-None results.

    Args:
        root: Subtree to walk.
        file_path: Path recorded in produced locations.
        handlers: Node kind -> handler(node, file_path).

    Returns:
        Handler results in source order.
    """
    results: List[T] = []
    for node in iter_nodes(root):
        handler = handlers.get(node.type)
        if handler is None:
            continue
        result = handler(node, file_path)
        if result is not None:
            results.append(result)
    return results


def node_text(node: Optional[Node]) -> str:
    """Decode a node's source text, or return an empty string."""
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="replace")
