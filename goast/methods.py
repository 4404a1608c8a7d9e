"""
Method declaration indexing.

Receivers are named after their type: ``T`` for a value receiver and ``*T``
for a pointer receiver. Any other receiver shape (generic instantiation,
parenthesised type) yields an empty name.
"""

import logging
from typing import Callable, Dict, List, Optional

from tree_sitter import Node

from goast.config import (
    METHOD_DECLARATION_NODE,
    PARAMETER_DECLARATION_NODE,
    POINTER_MARKER,
    POINTER_TYPE_NODE,
    TYPE_IDENTIFIER_NODE,
)
from goast.models import MethodDeclaration, SourceLocation
from goast.parser import ParsedSource
from goast.traversal import NodeHandler, dispatch_nodes, node_text

logger = logging.getLogger(__name__)


def _named_type(node: Node) -> str:
    return node_text(node)


def _pointer_to_named_type(node: Node) -> str:
    inner = [child for child in node.named_children if child.type != "comment"]
    if len(inner) == 1 and inner[0].type == TYPE_IDENTIFIER_NODE:
        return POINTER_MARKER + node_text(inner[0])
    return ""


_RECEIVER_TYPE_NAMERS: Dict[str, Callable[[Node], str]] = {
    TYPE_IDENTIFIER_NODE: _named_type,
    POINTER_TYPE_NODE: _pointer_to_named_type,
}


def receiver_type_name(receiver: Optional[Node]) -> str:
    """Name the receiver type of a method's receiver parameter list.

    Args:
        receiver: The ``parameter_list`` in the receiver position.

    Returns:
        ``T``, ``*T`` or an empty string for unsupported shapes.
    """
    if receiver is None:
        return ""

    parameters = [
        child for child in receiver.named_children
        if child.type == PARAMETER_DECLARATION_NODE
    ]
    if not parameters:
        return ""

    type_node = parameters[0].child_by_field_name("type")
    if type_node is None:
        return ""

    namer = _RECEIVER_TYPE_NAMERS.get(type_node.type)
    if namer is None:
        logger.debug(
            "Unsupported receiver shape %s at line %d",
            type_node.type,
            type_node.start_point.row + 1,
        )
        return ""
    return namer(type_node)


def _method_from_declaration(node: Node, file_path: str) -> Optional[MethodDeclaration]:
    name = node_text(node.child_by_field_name("name"))
    if not name:
        return None

    return MethodDeclaration(
        receiver_type_name=receiver_type_name(node.child_by_field_name("receiver")),
        method_name=name,
        file=file_path,
        start_location=SourceLocation.from_point(file_path, node.start_point),
        end_location=SourceLocation.from_point(file_path, node.end_point),
    )


_HANDLERS: Dict[str, NodeHandler] = {
    METHOD_DECLARATION_NODE: _method_from_declaration,
}


def extract_methods_from_tree(root: Node, file_path: str) -> List[MethodDeclaration]:
    """Extract all method declarations below ``root`` in source order."""
    return dispatch_nodes(root, file_path, _HANDLERS)


def extract_methods(parsed: ParsedSource) -> List[MethodDeclaration]:
    """Extract all method declarations of a parsed file."""
    methods = extract_methods_from_tree(parsed.tree.root_node, parsed.path)
    logger.debug("Found %d methods in %s", len(methods), parsed.path)
    return methods
