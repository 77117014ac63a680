"""List the operations of an OpenAPI / Swagger document.

Works on both OpenAPI 3.x and Swagger 2.0 documents, since ``paths`` has
the same shape in both.
"""

import re
from typing import Any

from .base import Endpoint

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")

_TEMPLATE_RE = re.compile(r"\{[^}]+\}")


def list_endpoints(doc: dict[str, Any]) -> list[Endpoint]:
    """Return one Endpoint per operation, in document order."""
    endpoints = []
    paths = doc.get("paths") or {}
    if not isinstance(paths, dict):
        return endpoints

    for path, methods in paths.items():
        if not isinstance(methods, dict):
            continue
        for method, operation in methods.items():
            if str(method).lower() not in HTTP_METHODS or not isinstance(operation, dict):
                continue

            endpoints.append(
                Endpoint(
                    method=str(method).upper(),
                    path=path,
                    summary=operation.get("summary") or "",
                    operation_id=operation.get("operationId"),
                    tags=[str(t) for t in operation.get("tags") or []],
                )
            )

    return endpoints


def path_to_pattern(path: str) -> str:
    """Turn a path template into an anchored regex matching exactly that path.

    ``/users/{id}`` becomes ``^/users/[^/]+$``.
    """
    literals = _TEMPLATE_RE.split(path)
    return "^" + "[^/]+".join(re.escape(part) for part in literals) + "$"
