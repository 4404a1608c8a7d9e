"""
Tree-sitter parser initialization and Go source loading.

``load_source`` is the tolerant entry point used by every scan: a file that
is not Go, cannot be read, or does not parse contributes nothing and never
raises.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import tree_sitter_go as tsgo
from tree_sitter import Language, Node, Parser, Tree

from core.analyzer_config import AnalyzerConfig

logger = logging.getLogger(__name__)

# Module-level language constant
GO_LANGUAGE = Language(tsgo.language())


@dataclass(frozen=True)
class ParsedSource:
    """A successfully parsed Go file."""

    path: str
    tree: Tree
    source_bytes: bytes


def create_parser() -> Parser:
    """Create and configure a tree-sitter parser for Go.

    Example:
        >>> parser = create_parser()
        >>> tree = parser.parse(b"package main")
    """
    parser = Parser(GO_LANGUAGE)
    logger.debug("Created tree-sitter Go parser")
    return parser


def parse_bytes(source: bytes) -> Tree:
    """Parse raw bytes of Go source code.

    Args:
        source: UTF-8 encoded bytes of Go source code.

    Returns:
        The parsed tree. Syntax errors are kept in the tree as ERROR nodes.

    Raises:
        TypeError: If source is not bytes.
    """
    if not isinstance(source, bytes):
        raise TypeError(f"Source must be bytes, got {type(source).__name__}")

    tree = create_parser().parse(source)
    logger.debug("Parsed %d bytes of Go code", len(source))
    return tree


def count_error_nodes(tree: Tree) -> int:
    """Count ERROR and MISSING nodes in a parsed tree."""
    count = 0
    stack: list[Node] = [tree.root_node]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            count += 1
        if node.has_error:
            stack.extend(node.children)
    return count


def is_go_source(file_path: str, config: Optional[AnalyzerConfig] = None) -> bool:
    config = config or AnalyzerConfig()
    return file_path.endswith(config.source_suffix)


def load_source(
    file_path: str,
    config: Optional[AnalyzerConfig] = None,
) -> Optional[ParsedSource]:
    """Read and parse one Go file.

    Args:
        file_path: Path of the file. Kept verbatim in every location derived
            from the result.
        config: Analyzer settings; defaults apply when omitted.

    Returns:
        The parsed source, or None when the file has the wrong extension,
        cannot be read, or (with ``skip_files_with_errors``) contains syntax
        errors.
    """
    config = config or AnalyzerConfig()

    if not is_go_source(file_path, config):
        logger.debug("Skipping non-Go file: %s", file_path)
        return None

    try:
        with open(file_path, "rb") as f:
            source_bytes = f.read()
    except OSError as e:
        logger.warning("Cannot read %s: %s", file_path, e)
        return None

    tree = parse_bytes(source_bytes)

    if tree.root_node.has_error:
        error_count = count_error_nodes(tree)
        if config.skip_files_with_errors:
            logger.warning(
                "Skipping %s: %d syntax error nodes", file_path, error_count
            )
            return None
        logger.debug(
            "File %s contains %d syntax error nodes; indexing anyway",
            file_path,
            error_count,
        )

    logger.debug("Parsed file: %s", file_path)
    return ParsedSource(path=file_path, tree=tree, source_bytes=source_bytes)
