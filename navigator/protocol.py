"""
Wire format of query results.

The editor side parses these shapes directly, so field names and nesting are
fixed. Locations are zero-based ``{file, line, column}`` objects.
"""

import json
from typing import Any, Dict, Iterable, List

from goast.models import InterfaceMethod, MethodDeclaration
from navigator.resolver import SatisfactionRecord


def interface_entry(method: InterfaceMethod, include_end: bool = False) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "name": method.name,
        "interfaceName": method.interface_name,
        "location": method.location.to_dict(),
    }
    if include_end:
        entry["endLocation"] = method.end_location.to_dict()
    return entry


def implementation_entry(declaration: MethodDeclaration, include_end: bool = False) -> Dict[str, Any]:
    entry: Dict[str, Any] = {
        "methodName": declaration.method_name,
        "receiverType": declaration.receiver_type_name,
        "location": declaration.start_location.to_dict(),
    }
    if include_end:
        entry["endLocation"] = declaration.end_location.to_dict()
    return entry


def interfaces_result(methods: Iterable[InterfaceMethod], include_end: bool = False) -> Dict[str, List[Dict[str, Any]]]:
    return {"interfaces": [interface_entry(m, include_end) for m in methods]}


def implementations_result(
    declarations: Iterable[MethodDeclaration],
    include_end: bool = False,
) -> Dict[str, List[Dict[str, Any]]]:
    return {"implementations": [implementation_entry(d, include_end) for d in declarations]}


def package_result(record: SatisfactionRecord) -> Dict[str, Dict[str, Any]]:
    """Package summary with map keys sorted, as Go's JSON encoder emits them."""
    return {
        "interfaceImplementations": {
            name: list(record.interface_implementations[name])
            for name in sorted(record.interface_implementations)
        },
        "methodToInterface": {
            name: record.method_to_interface[name]
            for name in sorted(record.method_to_interface)
        },
    }


def encode_result(payload: Dict[str, Any]) -> str:
    """Serialize a result as one compact JSON line."""
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
