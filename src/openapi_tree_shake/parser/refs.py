"""Parse ``$ref`` pointers into component references."""

import re

from .base import ComponentKind, ComponentReference

_V2_POINTERS = {
    "definitions": ComponentKind.SCHEMA,
    "securityDefinitions": ComponentKind.SECURITY_SCHEME,
}

_V2_RE = re.compile(r"#/(definitions|securityDefinitions)/(.+)", re.DOTALL)
_V3_RE = re.compile(r"#/components/(\w+)/(.+)", re.DOTALL)

_KINDS = {kind.value: kind for kind in ComponentKind}


def parse_ref(pointer: object) -> ComponentReference | None:
    """Classify a pointer string, or return None if it is not a component pointer.

    Recognized forms are ``#/definitions/NAME``, ``#/securityDefinitions/NAME``
    and ``#/components/KIND/NAME``. NAME may contain slashes. Anything else,
    including external pointers, yields None.
    """
    if not isinstance(pointer, str):
        return None

    m = _V2_RE.fullmatch(pointer)
    if m:
        return ComponentReference(kind=_V2_POINTERS[m.group(1)], name=m.group(2))

    m = _V3_RE.fullmatch(pointer)
    if m:
        kind = _KINDS.get(m.group(1))
        if kind is None:
            return None
        return ComponentReference(kind=kind, name=m.group(2))

    return None
