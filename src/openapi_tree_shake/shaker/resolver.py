"""Compute the set of components reachable from a set of kept paths."""

import logging
from collections import deque
from typing import Any

from openapi_tree_shake.parser.base import ComponentKind, ComponentReference, ReferenceSet
from openapi_tree_shake.parser.detect import SpecVersion, detect_version
from openapi_tree_shake.parser.scanner import scan_references

logger = logging.getLogger(__name__)

# Swagger 2.0 keeps only these kinds, each in its own top-level container.
V2_CONTAINERS = {
    ComponentKind.SCHEMA: "definitions",
    ComponentKind.SECURITY_SCHEME: "securityDefinitions",
}

# Swagger 2.0 reusable sections that are copied to the output as they are.
V2_PASSTHROUGH_SECTIONS = ("parameters", "responses")

_KIND_VALUES = {kind.value for kind in ComponentKind}


def component_body(doc: dict[str, Any], version: SpecVersion, ref: ComponentReference) -> Any | None:
    """Look up the body a reference points to, or None if it is not defined."""
    if version is SpecVersion.V2:
        container_name = V2_CONTAINERS.get(ref.kind)
        if container_name is None:
            return None
        container = doc.get(container_name)
    else:
        components = doc.get("components")
        if not isinstance(components, dict):
            return None
        container = components.get(ref.kind.value)

    if not isinstance(container, dict):
        return None
    if ref.name in container:
        return container[ref.name]
    # YAML may load names such as 404 as non-string keys.
    return next((body for name, body in container.items() if str(name) == ref.name), None)


def passthrough_sections(doc: dict[str, Any], version: SpecVersion) -> list[Any]:
    """Return the reusable sections the projector keeps without pruning."""
    if version is SpecVersion.V2:
        return [doc[name] for name in V2_PASSTHROUGH_SECTIONS if name in doc]

    components = doc.get("components")
    if not isinstance(components, dict):
        return []
    return [section for name, section in components.items() if name not in _KIND_VALUES]


def find_reachable(doc: dict[str, Any], paths: dict[str, Any]) -> ReferenceSet:
    """Return every component reachable from ``paths`` and the global security.

    ``paths`` is the already-filtered paths mapping, not the whole document.
    Sections copied to the output unpruned (``components.headers``, Swagger
    2.0 ``parameters``, ...) are seeds as well. The result iterates in
    discovery order.
    """
    version = detect_version(doc)
    refs = ReferenceSet()
    visited: set[int] = set()

    scan_references(paths, refs, visited)
    global_security = doc.get("security")
    if isinstance(global_security, list):
        scan_references({"security": global_security}, refs, visited)
    for section in passthrough_sections(doc, version):
        scan_references(section, refs, visited)

    processed: set[str] = set()
    queued: set[str] = set()
    queue: deque[ComponentReference] = deque()

    def enqueue(ref: ComponentReference) -> None:
        if ref.key not in processed and ref.key not in queued:
            queue.append(ref)
            queued.add(ref.key)

    for ref in refs:
        enqueue(ref)

    while queue:
        ref = queue.popleft()
        queued.discard(ref.key)
        if ref.key in processed:
            continue
        processed.add(ref.key)

        body = component_body(doc, version, ref)
        if body is None:
            logger.warning("Reference %s points to a component that is not defined", ref)
            continue

        seen = len(refs)
        scan_references(body, refs, visited)
        for new_ref in refs.added_since(seen):
            enqueue(new_ref)

    logger.debug("Resolved %d reachable components (%s document)", len(refs), version.value)
    return refs
