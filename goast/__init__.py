"""
Go source indexing

Tree-sitter-based Go parser, directory walker and declaration indexers.
Extracts interface declarations and receiver method declarations.
"""

from goast.models import (
    InterfaceDeclaration,
    InterfaceMethod,
    MethodDeclaration,
    SourceLocation,
    TypeMethodSet,
)
from goast.parser import ParsedSource, create_parser, load_source, parse_bytes, count_error_nodes
from goast.walker import ScanStats, iter_parsed_sources, iter_source_files
from goast.interfaces import extract_interfaces, extract_interfaces_from_tree
from goast.methods import extract_methods, extract_methods_from_tree, receiver_type_name

__all__ = [
    # Data models
    "InterfaceDeclaration",
    "InterfaceMethod",
    "MethodDeclaration",
    "SourceLocation",
    "TypeMethodSet",
    # Loading
    "ParsedSource",
    "create_parser",
    "load_source",
    "parse_bytes",
    "count_error_nodes",
    # Walking
    "ScanStats",
    "iter_parsed_sources",
    "iter_source_files",
    # Indexing
    "extract_interfaces",
    "extract_interfaces_from_tree",
    "extract_methods",
    "extract_methods_from_tree",
    "receiver_type_name",
]
