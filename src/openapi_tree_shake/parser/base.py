"""Shared data models for tree-shaking OpenAPI documents.

The reachability engine and the projector exchange these models; the
document itself stays a plain dict as parsed from JSON/YAML.
"""

from enum import Enum
from typing import Any, Iterator

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ComponentKind(str, Enum):
    """Reusable component kinds, valued by their OpenAPI 3 container name."""

    SCHEMA = "schemas"
    PARAMETER = "parameters"
    RESPONSE = "responses"
    REQUEST_BODY = "requestBodies"
    SECURITY_SCHEME = "securitySchemes"


class ComponentReference(BaseModel):
    """A pointer to one reusable component, compared by value."""

    model_config = ConfigDict(frozen=True)

    kind: ComponentKind
    name: str = Field(min_length=1)

    @property
    def key(self) -> str:
        return f"{self.kind.value}:{self.name}"

    def __str__(self) -> str:
        return self.key


class ReferenceSet:
    """Insertion-ordered set of references keyed by ``kind:name``."""

    def __init__(self, refs=()):
        self._refs: dict[str, ComponentReference] = {}
        self._order: list[ComponentReference] = []
        for ref in refs:
            self.add(ref)

    def add(self, ref: ComponentReference) -> bool:
        """Add a reference. Returns True only if it was not already present."""
        if ref.key in self._refs:
            return False
        self._refs[ref.key] = ref
        self._order.append(ref)
        return True

    def added_since(self, count: int) -> list[ComponentReference]:
        """Return the references added after the first ``count``, in order."""
        return self._order[count:]

    def has(self, kind: ComponentKind, name: str) -> bool:
        return f"{kind.value}:{name}" in self._refs

    def __contains__(self, ref: object) -> bool:
        return isinstance(ref, ComponentReference) and ref.key in self._refs

    def __iter__(self) -> Iterator[ComponentReference]:
        return iter(self._order[:])

    def __len__(self) -> int:
        return len(self._refs)

    def __repr__(self) -> str:
        return f"ReferenceSet([{', '.join(self._refs)}])"


class Endpoint(BaseModel):
    """A single operation listed from a document's paths."""

    method: str  # GET / POST / PUT / DELETE / PATCH ...
    path: str  # /api/users/{id}
    summary: str = ""
    operation_id: str | None = None
    tags: list[str] = []


class Summary(BaseModel):
    """Names removed from the document, one list per category."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    removed_paths: list[str] = []
    removed_schemas: list[str] = []
    removed_parameters: list[str] = []
    removed_responses: list[str] = []
    removed_request_bodies: list[str] = []
    removed_security_schemes: list[str] = []

    def removed_for(self, kind: ComponentKind) -> list[str]:
        """Return the removed-name list that records components of ``kind``."""
        return getattr(self, _SUMMARY_FIELDS[kind])

    def total_removed(self) -> int:
        return sum(len(v) for v in self.model_dump().values())


_SUMMARY_FIELDS = {
    ComponentKind.SCHEMA: "removed_schemas",
    ComponentKind.PARAMETER: "removed_parameters",
    ComponentKind.RESPONSE: "removed_responses",
    ComponentKind.REQUEST_BODY: "removed_request_bodies",
    ComponentKind.SECURITY_SCHEME: "removed_security_schemes",
}


class ShakeResult(BaseModel):
    """The projected document together with what was removed from it."""

    document: dict[str, Any]
    summary: Summary

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": self.document,
            "summary": self.summary.model_dump(by_alias=True),
        }
