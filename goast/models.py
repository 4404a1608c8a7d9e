"""
Data models for indexed Go declarations.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Iterable, Iterator, List, Optional


@dataclass(frozen=True)
class SourceLocation:
    """Zero-based position of a token start.

    Attributes:
        file: Path of the file as it was handed to the loader.
        line: Zero-based line.
        column: Zero-based byte column.
    """

    file: str
    line: int
    column: int

    @classmethod
    def from_point(cls, file: str, point: Any) -> "SourceLocation":
        """Build a location from a tree-sitter point (already zero-based)."""
        return cls(file=file, line=point.row, column=point.column)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InterfaceMethod:
    """One named method entry of an interface declaration.

    ``end_location`` is not a syntactic end: it is the start of the line after
    the method's own line, where an editor can anchor an annotation.
    """

    name: str
    interface_name: str
    location: SourceLocation
    end_location: SourceLocation


@dataclass
class InterfaceDeclaration:
    """An interface type declared in one file.

    Attributes:
        name: Declared interface name.
        file: Declaring file. Identity is file-scoped.
        location: Position of the interface name.
        methods: Method entries in declaration order.
    """

    name: str
    file: str
    location: SourceLocation
    methods: List[InterfaceMethod] = field(default_factory=list)

    @property
    def method_names(self) -> List[str]:
        return [method.name for method in self.methods]

    def declares(self, method_name: str) -> bool:
        return any(method.name == method_name for method in self.methods)


@dataclass(frozen=True)
class MethodDeclaration:
    """A function declaration with a receiver.

    ``receiver_type_name`` is ``*T`` for pointer receivers and ``T`` for value
    receivers. Unsupported receiver shapes leave it empty.
    """

    receiver_type_name: str
    method_name: str
    file: str
    start_location: SourceLocation
    end_location: SourceLocation

    @property
    def is_pointer_receiver(self) -> bool:
        return self.receiver_type_name.startswith("*")


class TypeMethodSet:
    """Receiver type name -> methods declared for it, across a whole scope.

    Method names keep first-seen order; a repeated declaration of the same
    method replaces the stored declaration. Declarations without a receiver
    type name are not indexed.
    """

    def __init__(self) -> None:
        self._methods: Dict[str, Dict[str, MethodDeclaration]] = {}

    @classmethod
    def from_declarations(cls, declarations: Iterable[MethodDeclaration]) -> "TypeMethodSet":
        method_set = cls()
        for declaration in declarations:
            method_set.add(declaration)
        return method_set

    def add(self, declaration: MethodDeclaration) -> bool:
        """Index a declaration. Returns False when it has no usable receiver."""
        if not declaration.receiver_type_name:
            return False
        by_name = self._methods.setdefault(declaration.receiver_type_name, {})
        by_name[declaration.method_name] = declaration
        return True

    def types(self) -> List[str]:
        return list(self._methods)

    def method_names(self, type_name: str) -> List[str]:
        return list(self._methods.get(type_name, {}))

    def declaration(self, type_name: str, method_name: str) -> Optional[MethodDeclaration]:
        return self._methods.get(type_name, {}).get(method_name)

    def declarations(self, type_name: str) -> List[MethodDeclaration]:
        return list(self._methods.get(type_name, {}).values())

    def items(self) -> Iterator[tuple[str, List[str]]]:
        for type_name, by_name in self._methods.items():
            yield type_name, list(by_name)

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._methods

    def __len__(self) -> int:
        return len(self._methods)

    def __repr__(self) -> str:
        return f"TypeMethodSet({dict(self.items())!r})"
