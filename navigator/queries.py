"""
Navigation queries over a Go source tree.

Each query scans the files on disk from scratch, builds its indexes, answers,
and discards them. Unreadable or unparsable files are skipped; an empty or
missing scope gives an empty answer. Only invalid arguments raise.
"""

import logging
import os
from typing import Iterable, List, Optional

from core.analyzer_config import AnalyzerConfig
from core.structured_logging import phase_scope
from goast.interfaces import extract_interfaces
from goast.methods import extract_methods
from goast.models import InterfaceDeclaration, InterfaceMethod, MethodDeclaration, TypeMethodSet
from goast.parser import ParsedSource, load_source
from goast.walker import ScanStats, iter_parsed_sources
from navigator.policies import MatchPolicy
from navigator.resolver import SatisfactionRecord, SatisfactionResolver, ScopeIndex

logger = logging.getLogger(__name__)


class UsageError(ValueError):
    """Raised when a query is called with missing or malformed arguments."""


def _require(value: Optional[str], label: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise UsageError(f"{label} must be a non-empty string")
    return value


def _scan_scope(
    root: str,
    config: AnalyzerConfig,
    recursive: bool = True,
) -> ScopeIndex:
    stats = ScanStats()
    with phase_scope("index"):
        index = ScopeIndex.from_sources(
            iter_parsed_sources(root, config, recursive=recursive, stats=stats)
        )
    logger.info(
        "Scanned %s: %s, %d interfaces, %d methods",
        root,
        stats,
        len(index.interfaces),
        len(index.methods),
    )
    return index


def _interface_methods(interfaces: Iterable[InterfaceDeclaration]) -> List[InterfaceMethod]:
    return [method for iface in interfaces for method in iface.methods]


def _scan_interfaces(root: str, config: AnalyzerConfig) -> List[InterfaceDeclaration]:
    stats = ScanStats()
    interfaces: List[InterfaceDeclaration] = []
    with phase_scope("index"):
        for parsed in iter_parsed_sources(root, config, stats=stats):
            interfaces.extend(extract_interfaces(parsed))
    logger.info("Scanned %s: %s, %d interfaces", root, stats, len(interfaces))
    return interfaces


def _containing_directory(file_path: str) -> str:
    return os.path.dirname(file_path) or os.curdir


def implementations_in_source(
    parsed: ParsedSource,
    interfaces: Iterable[InterfaceDeclaration],
) -> List[MethodDeclaration]:
    """Methods of the file's types that satisfy one of ``interfaces``.

    Type method sets come from this file only. Interfaces without methods are
    ignored. Once a type satisfies an interface (subset policy) every method
    the file declares for it is returned, in declaration order.
    """
    declarations = extract_methods(parsed)
    type_methods = TypeMethodSet.from_declarations(declarations)
    candidates = [iface for iface in interfaces if iface.methods]
    resolver = SatisfactionResolver(candidates, type_methods, MatchPolicy.SUBSET)

    implementations: List[MethodDeclaration] = []
    with phase_scope("resolve"):
        for type_name in type_methods.types():
            iface = resolver.first_satisfied_interface(type_name)
            if iface is None:
                logger.debug("Type %s in %s satisfies no interface", type_name, parsed.path)
                continue
            logger.debug("Type %s in %s satisfies %s", type_name, parsed.path, iface.name)
            implementations.extend(
                decl for decl in declarations if decl.receiver_type_name == type_name
            )
    return implementations


def find_file_interfaces(
    file_path: str,
    config: Optional[AnalyzerConfig] = None,
) -> List[InterfaceMethod]:
    """Every interface method entry declared in one file.

    Example:
        >>> entries = find_file_interfaces("pkg/reader.go")
        >>> [(e.interface_name, e.name) for e in entries]
        [('Reader', 'Read')]
    """
    _require(file_path, "file")
    config = config or AnalyzerConfig()

    parsed = load_source(file_path, config)
    if parsed is None:
        return []
    return _interface_methods(extract_interfaces(parsed))


def find_file_implementations(
    file_path: str,
    config: Optional[AnalyzerConfig] = None,
) -> List[MethodDeclaration]:
    """Methods in one file whose type satisfies an interface of its directory tree.

    Interfaces are collected recursively from the file's containing
    directory; see ``implementations_in_source`` for the matching rule.
    """
    _require(file_path, "file")
    config = config or AnalyzerConfig()

    parsed = load_source(file_path, config)
    if parsed is None:
        return []

    interfaces = _scan_interfaces(_containing_directory(file_path), config)
    implementations = implementations_in_source(parsed, interfaces)
    logger.info("Found %d implementation methods in %s", len(implementations), file_path)
    return implementations


def find_interfaces(
    root: str,
    method_name: str,
    config: Optional[AnalyzerConfig] = None,
) -> List[InterfaceMethod]:
    """Every interface method entry under ``root`` named ``method_name``."""
    _require(root, "root")
    _require(method_name, "method name")
    config = config or AnalyzerConfig()

    interfaces = _scan_interfaces(root, config)
    return [
        method for method in _interface_methods(interfaces)
        if method.name == method_name
    ]


def find_all_interfaces(
    root: str,
    config: Optional[AnalyzerConfig] = None,
) -> List[InterfaceMethod]:
    """Every interface method entry under ``root``."""
    _require(root, "root")
    config = config or AnalyzerConfig()
    return _interface_methods(_scan_interfaces(root, config))


def find_implementations(
    root: str,
    method_name: str,
    config: Optional[AnalyzerConfig] = None,
) -> List[MethodDeclaration]:
    """Declarations of ``method_name`` on every type implementing its interface.

    The interface is the first one under ``root`` (walk order) that declares
    ``method_name``; other interfaces sharing the name are not tried. Types
    are aggregated across the whole tree and checked with the subset policy.
    """
    _require(root, "root")
    _require(method_name, "method name")
    config = config or AnalyzerConfig()

    index = _scan_scope(root, config)
    candidates = index.interfaces_declaring(method_name)
    if not candidates:
        logger.info("No interface under %s declares %s", root, method_name)
        return []

    target = candidates[0]
    if len(candidates) > 1:
        logger.debug(
            "%d interfaces declare %s; using %s from %s",
            len(candidates),
            method_name,
            target.name,
            target.file,
        )

    type_methods = index.type_methods
    resolver = SatisfactionResolver([target], type_methods, MatchPolicy.SUBSET)

    implementations: List[MethodDeclaration] = []
    with phase_scope("resolve"):
        for type_name in resolver.satisfying_types(target):
            declaration = type_methods.declaration(type_name, method_name)
            if declaration is not None:
                implementations.append(declaration)

    logger.info(
        "Found %d implementations of %s.%s",
        len(implementations),
        target.name,
        method_name,
    )
    return implementations


def analyze_package_interfaces(
    package_dir: str,
    config: Optional[AnalyzerConfig] = None,
) -> SatisfactionRecord:
    """Interface/method relations of the Go files directly inside ``package_dir``.

    Candidate methods are those ``find_file_implementations`` reports for
    each file. They are tied to interfaces by method name only
    (``MatchPolicy.NAME_OVERLAP``), so a method is associated with every
    interface of the package that declares its name, whichever interface its
    type actually satisfies.
    """
    _require(package_dir, "package directory")
    config = config or AnalyzerConfig()

    stats = ScanStats()
    with phase_scope("index"):
        sources = list(iter_parsed_sources(package_dir, config, recursive=False, stats=stats))
    logger.info("Scanned package %s: %s", package_dir, stats)
    if not sources:
        return SatisfactionRecord()

    scope_interfaces = _scan_interfaces(package_dir, config)

    interfaces: List[InterfaceDeclaration] = []
    candidates: List[MethodDeclaration] = []
    for parsed in sources:
        interfaces.extend(extract_interfaces(parsed))
        candidates.extend(implementations_in_source(parsed, scope_interfaces))

    resolver = SatisfactionResolver(
        interfaces,
        TypeMethodSet.from_declarations(candidates),
        MatchPolicy.NAME_OVERLAP,
    )
    with phase_scope("resolve"):
        record = resolver.resolve()

    logger.info(
        "Package %s: %d interfaces with implementations, %d methods",
        package_dir,
        len(record.interface_implementations),
        len(record.method_to_interface),
    )
    return record
