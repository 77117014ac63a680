"""Detect the OpenAPI version of a document and load documents from disk or URL."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Any

import httpx
import yaml

logger = logging.getLogger(__name__)

FETCH_TIMEOUT = 60


class SpecVersion(str, Enum):
    """Document shape: flat ``definitions`` (V2) or nested ``components`` (V3)."""

    V2 = "2.x"
    V3 = "3.x"


def detect_version(doc: dict[str, Any]) -> SpecVersion:
    """Return the shape of a document.

    The ``swagger``/``openapi`` marker wins; a document carrying neither is
    judged by its containers.
    """
    if "swagger" in doc:
        return SpecVersion.V2
    if "openapi" in doc:
        return SpecVersion.V3
    if "definitions" in doc or "securityDefinitions" in doc:
        return SpecVersion.V2
    return SpecVersion.V3


def version_markers(doc: dict[str, Any]) -> list[str]:
    """Return the version marker fields present in ``doc``."""
    return [key for key in ("swagger", "openapi") if key in doc]


def load_document(source: str | Path) -> dict[str, Any]:
    """Load an OpenAPI document from a local file or an http(s) URL.

    JSON is tried first, then YAML.
    """
    source = str(source)
    if source.startswith(("http://", "https://")):
        logger.debug("Fetching %s", source)
        response = httpx.get(source, timeout=FETCH_TIMEOUT, follow_redirects=True)
        response.raise_for_status()
        text = response.text
    else:
        text = Path(source).read_text(encoding="utf-8")

    doc = parse_document(text, name=source)
    if not isinstance(doc, dict):
        raise ValueError(f"Invalid specification format in {source}: expected a mapping at the top level")
    return doc


def parse_document(text: str, name: str = "<input>") -> Any:
    """Parse JSON or YAML text."""
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse {name} as JSON or YAML") from e
