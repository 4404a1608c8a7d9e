"""
Satisfaction resolution between types and interfaces.

A ``ScopeIndex`` holds every interface and method declaration found in one
scope (a file, a directory, or a tree). ``SatisfactionResolver`` applies a
``MatchPolicy`` to it and derives the interface -> methods and
method -> interface relations. Everything here is rebuilt per query.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from goast.interfaces import extract_interfaces
from goast.methods import extract_methods
from goast.models import InterfaceDeclaration, MethodDeclaration, TypeMethodSet
from goast.parser import ParsedSource
from navigator.policies import MatchPolicy, satisfies

logger = logging.getLogger(__name__)


@dataclass
class SatisfactionRecord:
    """Derived relations for one scope.

    Attributes:
        interface_implementations: Interface name -> implementing method
            names, one entry per matching method (repeats allowed).
        method_to_interface: Method name -> interface name. When several
            interfaces match, the last one evaluated wins.
    """

    interface_implementations: Dict[str, List[str]] = field(default_factory=dict)
    method_to_interface: Dict[str, str] = field(default_factory=dict)

    def add(self, interface_name: str, method_name: str) -> None:
        self.interface_implementations.setdefault(interface_name, []).append(method_name)
        self.method_to_interface[method_name] = interface_name


@dataclass
class ScopeIndex:
    """Interface and method declarations of a scope, in encounter order."""

    interfaces: List[InterfaceDeclaration] = field(default_factory=list)
    methods: List[MethodDeclaration] = field(default_factory=list)

    @classmethod
    def from_sources(cls, sources: Iterable[ParsedSource]) -> "ScopeIndex":
        index = cls()
        for parsed in sources:
            index.add_source(parsed)
        return index

    def add_source(self, parsed: ParsedSource) -> None:
        self.interfaces.extend(extract_interfaces(parsed))
        self.methods.extend(extract_methods(parsed))

    @property
    def type_methods(self) -> TypeMethodSet:
        return TypeMethodSet.from_declarations(self.methods)

    def interfaces_declaring(self, method_name: str) -> List[InterfaceDeclaration]:
        return [iface for iface in self.interfaces if iface.declares(method_name)]


def group_interface_methods(interfaces: Iterable[InterfaceDeclaration]) -> Dict[str, List[str]]:
    """Interface name -> method names, concatenating same-named interfaces."""
    grouped: Dict[str, List[str]] = {}
    for iface in interfaces:
        grouped.setdefault(iface.name, []).extend(iface.method_names)
    return grouped


class SatisfactionResolver:
    """Compute which types satisfy which interfaces under one policy.

    Ties are not broken: a type satisfying several interfaces is reported
    against each of them, in the order the interfaces were encountered.
    """

    def __init__(
        self,
        interfaces: Iterable[InterfaceDeclaration],
        type_methods: TypeMethodSet,
        policy: MatchPolicy = MatchPolicy.SUBSET,
    ):
        self.interfaces = list(interfaces)
        self.type_methods = type_methods
        self.policy = MatchPolicy(policy)

    def satisfies(self, type_name: str, interface: InterfaceDeclaration) -> bool:
        if type_name not in self.type_methods:
            return False
        return satisfies(
            self.policy,
            self.type_methods.method_names(type_name),
            interface.method_names,
        )

    def satisfied_interfaces(self, type_name: str) -> List[InterfaceDeclaration]:
        return [iface for iface in self.interfaces if self.satisfies(type_name, iface)]

    def first_satisfied_interface(self, type_name: str) -> Optional[InterfaceDeclaration]:
        for iface in self.interfaces:
            if self.satisfies(type_name, iface):
                return iface
        return None

    def satisfying_types(self, interface: InterfaceDeclaration) -> List[str]:
        return [
            type_name for type_name in self.type_methods.types()
            if self.satisfies(type_name, interface)
        ]

    def resolve(self) -> SatisfactionRecord:
        """Build the interface/method relations for the whole scope."""
        if self.policy is MatchPolicy.NAME_OVERLAP:
            record = self._resolve_by_name()
        else:
            record = self._resolve_by_type()
        logger.debug(
            "Resolved %d interfaces and %d methods with %s policy",
            len(record.interface_implementations),
            len(record.method_to_interface),
            self.policy.value,
        )
        return record

    def _resolve_by_name(self) -> SatisfactionRecord:
        # A method is tied to an interface by name alone; the owning type's
        # method set is never compared with that interface.
        record = SatisfactionRecord()
        for interface_name, method_names in group_interface_methods(self.interfaces).items():
            for method_name in method_names:
                for _, type_method_names in self.type_methods.items():
                    for candidate in type_method_names:
                        if candidate == method_name:
                            record.add(interface_name, candidate)
        return record

    def _resolve_by_type(self) -> SatisfactionRecord:
        record = SatisfactionRecord()
        for iface in self.interfaces:
            required = list(dict.fromkeys(iface.method_names))
            for type_name in self.satisfying_types(iface):
                available = set(self.type_methods.method_names(type_name))
                for method_name in required:
                    if method_name in available:
                        record.add(iface.name, method_name)
        return record
