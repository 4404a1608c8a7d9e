"""
Command verbs understood by the analyzer entry point.

Each verb names its positional arguments and the function that runs the
query and shapes its result for the wire.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from core.analyzer_config import AnalyzerConfig
from navigator import protocol
from navigator.queries import (
    analyze_package_interfaces,
    find_all_interfaces,
    find_file_implementations,
    find_file_interfaces,
    find_implementations,
    find_interfaces,
)

Runner = Callable[..., Dict[str, Any]]


@dataclass(frozen=True)
class Command:
    """A verb, its positional arguments and its runner."""

    verb: str
    arguments: Tuple[str, ...]
    help: str
    run: Runner


def _find_implementations(config: AnalyzerConfig, root: str, method_name: str) -> Dict[str, Any]:
    return protocol.implementations_result(find_implementations(root, method_name, config))


def _find_interfaces(config: AnalyzerConfig, root: str, method_name: str) -> Dict[str, Any]:
    return protocol.interfaces_result(find_interfaces(root, method_name, config))


def _find_file_interfaces(config: AnalyzerConfig, file: str) -> Dict[str, Any]:
    return protocol.interfaces_result(find_file_interfaces(file, config), include_end=True)


def _find_file_implementations(config: AnalyzerConfig, file: str) -> Dict[str, Any]:
    return protocol.implementations_result(
        find_file_implementations(file, config), include_end=True
    )


def _analyze_package_interfaces(config: AnalyzerConfig, directory: str) -> Dict[str, Any]:
    return protocol.package_result(analyze_package_interfaces(directory, config))


def _find_all_interfaces(config: AnalyzerConfig, root: str) -> Dict[str, Any]:
    return protocol.interfaces_result(find_all_interfaces(root, config), include_end=True)


COMMANDS: Dict[str, Command] = {
    command.verb: command
    for command in (
        Command(
            "find-implementations",
            ("root", "method_name"),
            "Methods named METHOD_NAME on types implementing the first interface that declares it.",
            _find_implementations,
        ),
        Command(
            "find-interfaces",
            ("root", "method_name"),
            "Interface methods named METHOD_NAME anywhere under ROOT.",
            _find_interfaces,
        ),
        Command(
            "find-file-interfaces",
            ("file",),
            "Interface methods declared in FILE.",
            _find_file_interfaces,
        ),
        Command(
            "find-file-implementations",
            ("file",),
            "Methods in FILE whose type implements an interface of its directory.",
            _find_file_implementations,
        ),
        Command(
            "analyze-package-interfaces",
            ("directory",),
            "Interface/method relations of the package in DIRECTORY.",
            _analyze_package_interfaces,
        ),
        Command(
            "find-all-interfaces",
            ("root",),
            "Every interface method anywhere under ROOT.",
            _find_all_interfaces,
        ),
    )
}


def run_command(verb: str, config: AnalyzerConfig, *arguments: str) -> Dict[str, Any]:
    """Run ``verb`` with positional ``arguments`` and return the wire payload.

    Raises:
        KeyError: If the verb is unknown.
        UsageError: If an argument is empty.
    """
    command = COMMANDS[verb]
    return command.run(config, *arguments)
