"""
Directory traversal for Go source trees.

Files are produced lazily in lexical depth-first order, the order Go's
``filepath.Walk`` uses. Vendored and hidden sub-directories and ``_test.go``
files are never visited. A traversal error stops the recursive walk and the
root is rescanned non-recursively instead, so a query always gets whatever
could be read.
"""

import logging
import os
from typing import Dict, Iterator, List, Optional, Set

from core.analyzer_config import AnalyzerConfig
from goast.parser import ParsedSource, load_source

logger = logging.getLogger(__name__)


class ScanStats:
    """Statistics for one scan."""

    def __init__(self):
        self.files_seen = 0
        self.files_parsed = 0
        self.files_skipped = 0
        self.fallback_used = False

    def to_dict(self) -> Dict[str, int]:
        """Convert stats to dictionary."""
        return {
            "files_seen": self.files_seen,
            "files_parsed": self.files_parsed,
            "files_skipped": self.files_skipped,
            "fallback_used": int(self.fallback_used),
        }

    def __str__(self) -> str:
        return (
            f"ScanStats(seen={self.files_seen}, parsed={self.files_parsed}, "
            f"skipped={self.files_skipped}, fallback={self.fallback_used})"
        )


def is_excluded_dir(name: str, config: AnalyzerConfig) -> bool:
    """Check whether a sub-directory must not be descended into."""
    if name.startswith("."):
        return True
    return any(token and token in name for token in config.excluded_dir_tokens)


def is_candidate_file(name: str, config: AnalyzerConfig) -> bool:
    """Check whether a file name denotes a non-test Go source file."""
    return name.endswith(config.source_suffix) and not name.endswith(config.test_suffix)


def _sorted_entries(directory: str) -> List[os.DirEntry]:
    with os.scandir(directory) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def _walk(directory: str, config: AnalyzerConfig) -> Iterator[str]:
    for entry in _sorted_entries(directory):
        path = os.path.join(directory, entry.name)
        if entry.is_dir(follow_symlinks=False):
            if is_excluded_dir(entry.name, config):
                logger.debug("Skipping directory: %s", path)
                continue
            yield from _walk(path, config)
        elif is_candidate_file(entry.name, config):
            yield path


def _flat_scan(directory: str, config: AnalyzerConfig) -> Iterator[str]:
    for entry in _sorted_entries(directory):
        if entry.is_dir(follow_symlinks=False):
            continue
        if is_candidate_file(entry.name, config):
            yield os.path.join(directory, entry.name)


def iter_source_files(
    root: str,
    config: Optional[AnalyzerConfig] = None,
    recursive: bool = True,
    stats: Optional[ScanStats] = None,
) -> Iterator[str]:
    """Lazily enumerate Go source files under ``root``.

    Args:
        root: Directory to scan. A single Go file is yielded as-is.
        config: Analyzer settings; defaults apply when omitted.
        recursive: Descend into sub-directories. When False only the root's
            immediate files are listed.
        stats: Optional counter updated as files are produced.

    Yields:
        File paths joined onto ``root``.
    """
    config = config or AnalyzerConfig()
    stats = stats if stats is not None else ScanStats()

    if os.path.isfile(root):
        if is_candidate_file(os.path.basename(root), config):
            stats.files_seen += 1
            yield root
        return

    yielded: Set[str] = set()
    if recursive:
        try:
            for path in _walk(root, config):
                yielded.add(path)
                stats.files_seen += 1
                yield path
            return
        except OSError as e:
            logger.warning(
                "Directory walk of %s failed (%s); falling back to a flat scan",
                root,
                e,
            )
            stats.fallback_used = True

    try:
        for path in _flat_scan(root, config):
            if path in yielded:
                continue
            stats.files_seen += 1
            yield path
    except OSError as e:
        logger.warning("Cannot list %s: %s", root, e)


def iter_parsed_sources(
    root: str,
    config: Optional[AnalyzerConfig] = None,
    recursive: bool = True,
    stats: Optional[ScanStats] = None,
) -> Iterator[ParsedSource]:
    """Yield every parsable Go file under ``root``; unparsable ones are skipped."""
    config = config or AnalyzerConfig()
    stats = stats if stats is not None else ScanStats()

    for path in iter_source_files(root, config, recursive=recursive, stats=stats):
        parsed = load_source(path, config)
        if parsed is None:
            stats.files_skipped += 1
            continue
        stats.files_parsed += 1
        yield parsed
