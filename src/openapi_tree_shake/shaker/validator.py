"""Validates OpenAPI documents for structural correctness.

Uses ``openapi-spec-validator`` for the version the document declares.
"""

import logging
from typing import Any

from openapi_spec_validator import OpenAPIV2SpecValidator, OpenAPIV30SpecValidator, OpenAPIV31SpecValidator

from openapi_tree_shake.parser.detect import version_markers

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Invalid OpenAPI specification"


class InvalidSpecError(ValueError):
    """Raised with every validation problem found in a document."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        if len(errors) == 1:
            message = f"{ERROR_PREFIX}: {errors[0]}"
        else:
            message = f"{ERROR_PREFIX}:\n" + "\n".join(errors)
        super().__init__(message)


def check_required_fields(doc: Any) -> list[str]:
    """Check the fields every document needs before schema validation can run.

    Returns a list of error messages, empty when all are present.
    """
    if not isinstance(doc, dict):
        return ["Input must be an object"]

    errors = []
    if not isinstance(doc.get("info"), dict):
        errors.append("Missing or invalid info object")
    if not isinstance(doc.get("paths"), dict):
        errors.append("Missing or invalid paths object")

    markers = version_markers(doc)
    if not markers:
        errors.append("Missing openapi or swagger version")
    elif len(markers) > 1:
        errors.append("Both openapi and swagger versions are set")
    return errors


def check_schema(doc: dict[str, Any]) -> list[str]:
    """Run the full schema validation for the document's declared version."""
    if "swagger" in doc:
        validator_cls = OpenAPIV2SpecValidator
    elif str(doc["openapi"]).startswith("3.1"):
        validator_cls = OpenAPIV31SpecValidator
    else:
        validator_cls = OpenAPIV30SpecValidator

    logger.debug("Validating with %s", validator_cls.__name__)
    return [error.message for error in validator_cls(doc).iter_errors()]


def collect_errors(doc: Any) -> list[str]:
    """Return every problem found in ``doc``.

    Schema validation runs only when the required fields pass.
    """
    errors = check_required_fields(doc)
    if not errors:
        errors = check_schema(doc)
    return errors


def validate_document(doc: Any) -> dict[str, Any]:
    """Return ``doc`` unchanged if it is valid, else raise InvalidSpecError."""
    errors = collect_errors(doc)
    if errors:
        raise InvalidSpecError(errors)
    return doc
