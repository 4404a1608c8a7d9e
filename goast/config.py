"""
Tree-sitter node type constants for Go declaration indexing.

Names follow the tree-sitter-go grammar. Older grammar releases used
``method_spec`` for interface methods, so both spellings are accepted.
"""

from typing import Set


# Declarations that introduce a named type (type T ..., type T = ...)
TYPE_SPEC_NODES: Set[str] = {
    "type_spec",
    "type_alias",
}

# Interface type literal
INTERFACE_TYPE_NODE: str = "interface_type"

# Wrapper around interface entries in old grammar releases
METHOD_SPEC_LIST_NODE: str = "method_spec_list"

# Interface entries that carry an explicit method name
INTERFACE_METHOD_NODES: Set[str] = {
    "method_elem",
    "method_spec",
}

# Function declaration with a receiver
METHOD_DECLARATION_NODE: str = "method_declaration"

# Receiver list entries
PARAMETER_DECLARATION_NODE: str = "parameter_declaration"

# Receiver type shapes that name a type
TYPE_IDENTIFIER_NODE: str = "type_identifier"
POINTER_TYPE_NODE: str = "pointer_type"

# Prefix marking a pointer receiver in receiver type names
POINTER_MARKER: str = "*"
