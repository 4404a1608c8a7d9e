"""
Go interface navigation

Matching policies, satisfaction resolution and the navigation queries built
on the ``goast`` indexes.
"""

from navigator.policies import MatchPolicy, satisfies
from navigator.resolver import SatisfactionRecord, SatisfactionResolver, ScopeIndex
from navigator.queries import (
    UsageError,
    analyze_package_interfaces,
    find_all_interfaces,
    find_file_implementations,
    find_file_interfaces,
    find_implementations,
    find_interfaces,
)
from navigator.commands import COMMANDS, run_command

__all__ = [
    # Policies and resolution
    "MatchPolicy",
    "satisfies",
    "SatisfactionRecord",
    "SatisfactionResolver",
    "ScopeIndex",
    # Queries
    "UsageError",
    "analyze_package_interfaces",
    "find_all_interfaces",
    "find_file_implementations",
    "find_file_interfaces",
    "find_implementations",
    "find_interfaces",
    # Command verbs
    "COMMANDS",
    "run_command",
]
