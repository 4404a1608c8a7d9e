"""
Interface declaration indexing.

Every type spec whose underlying type is an interface literal becomes an
``InterfaceDeclaration``. Only entries with an explicit method name are
recorded; embedded interfaces and type-set elements are left unexpanded.
"""

import logging
from typing import Dict, List, Optional

from tree_sitter import Node

from goast.config import (
    INTERFACE_METHOD_NODES,
    INTERFACE_TYPE_NODE,
    METHOD_SPEC_LIST_NODE,
    TYPE_SPEC_NODES,
)
from goast.models import InterfaceDeclaration, InterfaceMethod, SourceLocation
from goast.parser import ParsedSource
from goast.traversal import NodeHandler, dispatch_nodes, node_text

logger = logging.getLogger(__name__)


def hint_location_after(file_path: str, node: Node) -> SourceLocation:
    """Column zero of the line following the node's first line."""
    return SourceLocation(file=file_path, line=node.start_point.row + 1, column=0)


def extract_interface_method(
    node: Node,
    interface_name: str,
    file_path: str,
) -> Optional[InterfaceMethod]:
    """Build the entry for one interface element, if it names a method."""
    if node.type not in INTERFACE_METHOD_NODES:
        return None

    name = node_text(node.child_by_field_name("name"))
    if not name:
        logger.debug(
            "Interface %s has an unnamed method entry at line %d",
            interface_name,
            node.start_point.row + 1,
        )
        return None

    return InterfaceMethod(
        name=name,
        interface_name=interface_name,
        location=SourceLocation.from_point(file_path, node.start_point),
        end_location=hint_location_after(file_path, node),
    )


def _interface_elements(interface_node: Node) -> List[Node]:
    elements: List[Node] = []
    for child in interface_node.named_children:
        if child.type == METHOD_SPEC_LIST_NODE:
            elements.extend(child.named_children)
        else:
            elements.append(child)
    return elements


def _interface_from_type_spec(node: Node, file_path: str) -> Optional[InterfaceDeclaration]:
    type_node = node.child_by_field_name("type")
    if type_node is None or type_node.type != INTERFACE_TYPE_NODE:
        return None

    name_node = node.child_by_field_name("name")
    name = node_text(name_node)
    if not name:
        return None

    methods: List[InterfaceMethod] = []
    for element in _interface_elements(type_node):
        method = extract_interface_method(element, name, file_path)
        if method is not None:
            methods.append(method)

    logger.debug(
        "Interface %s at %s:%d declares %s",
        name,
        file_path,
        node.start_point.row + 1,
        [method.name for method in methods],
    )
    return InterfaceDeclaration(
        name=name,
        file=file_path,
        location=SourceLocation.from_point(file_path, name_node.start_point),
        methods=methods,
    )


_HANDLERS: Dict[str, NodeHandler] = {
    kind: _interface_from_type_spec for kind in TYPE_SPEC_NODES
}


def extract_interfaces_from_tree(root: Node, file_path: str) -> List[InterfaceDeclaration]:
    """Extract all interface declarations below ``root`` in source order."""
    return dispatch_nodes(root, file_path, _HANDLERS)


def extract_interfaces(parsed: ParsedSource) -> List[InterfaceDeclaration]:
    """Extract all interface declarations of a parsed file."""
    interfaces = extract_interfaces_from_tree(parsed.tree.root_node, parsed.path)
    logger.debug("Found %d interfaces in %s", len(interfaces), parsed.path)
    return interfaces
