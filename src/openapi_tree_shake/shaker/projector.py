"""Rebuild an OpenAPI document from the kept paths and reachable components."""

import logging
import re
from typing import Any, Iterable

from openapi_tree_shake.parser.base import ComponentKind, ReferenceSet, ShakeResult, Summary
from openapi_tree_shake.parser.detect import SpecVersion, detect_version
from openapi_tree_shake.shaker.resolver import V2_CONTAINERS, find_reachable

logger = logging.getLogger(__name__)

DEFAULT_PATTERNS = [".*"]


def tree_shake(doc: dict[str, Any], patterns: Iterable[str] | None = None) -> ShakeResult:
    """Keep the paths matching any of ``patterns`` and the components they need.

    Args:
        doc: A parsed Swagger 2.0 or OpenAPI 3.x document. It is not modified.
        patterns: Regular expressions searched in each path key. None or an
            empty list keeps every path.

    Returns:
        The projected document and a summary of everything removed.
    """
    patterns = list(patterns or []) or DEFAULT_PATTERNS

    paths = doc.get("paths")
    if not isinstance(paths, dict):
        paths = {}

    filtered_paths, removed_paths = filter_paths(paths, patterns)
    reachable = find_reachable(doc, filtered_paths)
    return project(doc, filtered_paths, removed_paths, reachable)


def filter_paths(paths: dict[str, Any], patterns: Iterable[str]) -> tuple[dict[str, Any], list[str]]:
    """Split ``paths`` into the entries matching any pattern and the keys that don't."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ValueError(f"Invalid endpoint pattern {pattern!r}: {e}") from e

    kept: dict[str, Any] = {}
    removed: list[str] = []
    for path, path_item in paths.items():
        if any(regex.search(str(path)) for regex in compiled):
            kept[path] = path_item
        else:
            removed.append(path)

    logger.debug("Kept %d of %d paths", len(kept), len(paths))
    return kept, removed


def project(
    doc: dict[str, Any],
    filtered_paths: dict[str, Any],
    removed_paths: list[str],
    reachable: ReferenceSet,
) -> ShakeResult:
    """Build the reduced document, keeping only components in ``reachable``."""
    new_doc = dict(doc)
    new_doc["paths"] = filtered_paths
    summary = Summary(removed_paths=[str(p) for p in removed_paths])

    if detect_version(doc) is SpecVersion.V2:
        for kind, container_name in V2_CONTAINERS.items():
            container = doc.get(container_name)
            if isinstance(container, dict):
                new_doc[container_name] = _keep_reachable(container, kind, reachable, summary)
    else:
        components = doc.get("components")
        if isinstance(components, dict):
            new_components = _project_components(components, reachable, summary)
            if new_components:
                new_doc["components"] = new_components
            else:
                del new_doc["components"]

    for kind in ComponentKind:
        if summary.removed_for(kind):
            logger.debug("Removed %d %s", len(summary.removed_for(kind)), kind.value)
    return ShakeResult(document=new_doc, summary=summary)


def _project_components(components: dict[str, Any], reachable: ReferenceSet, summary: Summary) -> dict[str, Any]:
    new_components = dict(components)
    for kind in ComponentKind:
        container = components.get(kind.value)
        if not isinstance(container, dict):
            continue
        kept = _keep_reachable(container, kind, reachable, summary)
        if kept:
            new_components[kind.value] = kept
        else:
            del new_components[kind.value]

    # Sections we do not prune (headers, examples, ...) seed the resolver; empty ones are dropped.
    return {key: value for key, value in new_components.items() if value != {}}


def _keep_reachable(
    container: dict[str, Any], kind: ComponentKind, reachable: ReferenceSet, summary: Summary
) -> dict[str, Any]:
    kept: dict[str, Any] = {}
    for name, body in container.items():
        if reachable.has(kind, str(name)):
            kept[name] = body
        else:
            summary.removed_for(kind).append(str(name))
    return kept
