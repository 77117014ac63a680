"""Collect component references from an arbitrary document fragment."""

from typing import Any

from .base import ComponentKind, ComponentReference, ReferenceSet
from .refs import parse_ref

REF_KEY = "$ref"
SECURITY_KEY = "security"


def scan_references(node: Any, refs: ReferenceSet, visited: set[int] | None = None) -> None:
    """Walk ``node`` depth-first and add every reference found to ``refs``.

    References come from ``$ref`` strings and from the keys of security
    requirement objects, wherever they appear. ``visited`` holds the ids of
    containers already walked; pass the same set to several calls to share it.
    """
    if visited is None:
        visited = set()
    _visit(node, refs, visited)


def _visit(node: Any, refs: ReferenceSet, visited: set[int]) -> None:
    if not isinstance(node, (dict, list, tuple)):
        return
    if id(node) in visited:
        return
    visited.add(id(node))

    if isinstance(node, dict):
        for key, value in node.items():
            if key == REF_KEY and isinstance(value, str):
                ref = parse_ref(value)
                if ref is not None:
                    refs.add(ref)
            elif key == SECURITY_KEY and isinstance(value, list):
                _add_security_requirements(value, refs)
            else:
                _visit(value, refs, visited)
    else:
        for item in node:
            _visit(item, refs, visited)


def _add_security_requirements(requirements: list, refs: ReferenceSet) -> None:
    for requirement in requirements:
        if not isinstance(requirement, dict):
            continue
        for scheme in requirement:
            name = str(scheme)
            if name:
                refs.add(ComponentReference(kind=ComponentKind.SECURITY_SCHEME, name=name))
