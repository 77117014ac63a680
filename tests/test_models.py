import pytest
from pydantic import ValidationError

from openapi_tree_shake.parser.base import (
    ComponentKind,
    ComponentReference,
    Endpoint,
    ReferenceSet,
    ShakeResult,
    Summary,
)


def _schema(name: str) -> ComponentReference:
    return ComponentReference(kind=ComponentKind.SCHEMA, name=name)


class TestComponentReference:
    def test_equal_by_value(self):
        assert _schema("User") == _schema("User")
        assert hash(_schema("User")) == hash(_schema("User"))

    def test_kind_distinguishes(self):
        param = ComponentReference(kind=ComponentKind.PARAMETER, name="User")
        assert param != _schema("User")

    def test_kind_from_container_name(self):
        ref = ComponentReference(kind="requestBodies", name="NewPet")
        assert ref.kind is ComponentKind.REQUEST_BODY
        assert ref.key == "requestBodies:NewPet"

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            ComponentReference(kind=ComponentKind.SCHEMA, name="")

    def test_frozen(self):
        ref = _schema("User")
        with pytest.raises(ValidationError):
            ref.name = "Other"


class TestReferenceSet:
    def test_add_reports_new(self):
        refs = ReferenceSet()
        assert refs.add(_schema("A")) is True
        assert refs.add(_schema("A")) is False
        assert len(refs) == 1

    def test_keeps_insertion_order(self):
        refs = ReferenceSet([_schema("B"), _schema("A"), _schema("C"), _schema("A")])
        assert [r.name for r in refs] == ["B", "A", "C"]

    def test_membership(self):
        refs = ReferenceSet([_schema("A")])
        assert _schema("A") in refs
        assert _schema("B") not in refs
        assert "schemas:A" not in refs
        assert refs.has(ComponentKind.SCHEMA, "A")
        assert not refs.has(ComponentKind.SECURITY_SCHEME, "A")

    def test_added_since(self):
        refs = ReferenceSet([_schema("A"), _schema("B")])
        refs.add(_schema("C"))
        refs.add(_schema("A"))
        assert [r.name for r in refs.added_since(2)] == ["C"]
        assert refs.added_since(3) == []
        assert [r.name for r in refs.added_since(0)] == ["A", "B", "C"]


class TestSummary:
    def test_defaults_are_empty(self):
        summary = Summary()
        assert summary.model_dump(by_alias=True) == {
            "removedPaths": [],
            "removedSchemas": [],
            "removedParameters": [],
            "removedResponses": [],
            "removedRequestBodies": [],
            "removedSecuritySchemes": [],
        }
        assert summary.total_removed() == 0

    def test_removed_for_kind(self):
        summary = Summary()
        summary.removed_for(ComponentKind.SECURITY_SCHEME).append("basicAuth")
        assert summary.removed_security_schemes == ["basicAuth"]
        assert summary.total_removed() == 1

    def test_lists_not_shared(self):
        a, b = Summary(), Summary()
        a.removed_schemas.append("X")
        assert b.removed_schemas == []


class TestShakeResult:
    def test_to_dict_shape(self):
        result = ShakeResult(document={"openapi": "3.0.0"}, summary=Summary(removed_paths=["/posts"]))
        data = result.to_dict()
        assert data["document"] == {"openapi": "3.0.0"}
        assert data["summary"]["removedPaths"] == ["/posts"]
        assert data["summary"]["removedSecuritySchemes"] == []


class TestEndpoint:
    def test_create_minimal_endpoint(self):
        ep = Endpoint(method="GET", path="/api/users")
        assert ep.summary == ""
        assert ep.operation_id is None
        assert ep.tags == []
