"""
Matching policies between a type's method names and an interface's.

Only method names are compared; signatures are ignored.
"""

from enum import Enum
from typing import Callable, Dict, Iterable


class MatchPolicy(str, Enum):
    """How a type (or one of its methods) is tied to an interface.

    SUBSET: the type declares at least every interface method.
    EXACT: the type's method names equal the interface's, no more, no less.
    NAME_OVERLAP: the type shares at least one method name with the
        interface. Unrelated interfaces with common names such as ``Close``
        or ``String`` all match.
    """

    SUBSET = "subset"
    EXACT = "exact"
    NAME_OVERLAP = "name-overlap"


def is_subset_match(type_methods: Iterable[str], interface_methods: Iterable[str]) -> bool:
    available = set(type_methods)
    return all(name in available for name in interface_methods)


def is_exact_match(type_methods: Iterable[str], interface_methods: Iterable[str]) -> bool:
    return set(type_methods) == set(interface_methods)


def has_name_overlap(type_methods: Iterable[str], interface_methods: Iterable[str]) -> bool:
    return not set(type_methods).isdisjoint(interface_methods)


_MATCHERS: Dict[MatchPolicy, Callable[[Iterable[str], Iterable[str]], bool]] = {
    MatchPolicy.SUBSET: is_subset_match,
    MatchPolicy.EXACT: is_exact_match,
    MatchPolicy.NAME_OVERLAP: has_name_overlap,
}


def satisfies(
    policy: MatchPolicy,
    type_methods: Iterable[str],
    interface_methods: Iterable[str],
) -> bool:
    """Apply ``policy`` to one type/interface pair."""
    return _MATCHERS[MatchPolicy(policy)](list(type_methods), list(interface_methods))
