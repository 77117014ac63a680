"""End-to-end tests: load, shake, validate, and write documents."""

import textwrap
from pathlib import Path

import yaml
from click.testing import CliRunner

from openapi_tree_shake.cli import main
from openapi_tree_shake.parser.detect import load_document
from openapi_tree_shake.shaker.output import dump_document
from openapi_tree_shake.shaker.projector import tree_shake
from openapi_tree_shake.shaker.validator import validate_document

FIXTURES = Path(__file__).parent / "fixtures"

CATALOG_YAML = textwrap.dedent(
    """
    openapi: "3.0.3"
    info:
      title: Catalog
      version: "2.0.0"
    paths:
      /categories/{id}:
        get:
          parameters:
            - $ref: "#/components/parameters/idParam"
          responses:
            "200":
              description: A category
              content:
                application/json:
                  schema: &category
                    $ref: "#/components/schemas/Category"
      /categories/{id}/copy:
        get:
          parameters:
            - $ref: "#/components/parameters/idParam"
          responses:
            "200":
              description: Same category again
              content:
                application/json:
                  schema: *category
      /health:
        get:
          responses:
            "204":
              description: Healthy
    components:
      parameters:
        idParam:
          name: id
          in: path
          required: true
          schema:
            type: string
      schemas:
        Category:
          type: object
          properties:
            parent:
              $ref: "#/components/schemas/Category"
            products:
              type: array
              items:
                $ref: "#/components/schemas/Product"
        Product:
          type: object
          properties:
            category:
              $ref: "#/components/schemas/Category"
        Unused:
          type: object
    """
)


class TestCatalogPipeline:
    def test_shake_and_validate(self, tmp_path):
        source = tmp_path / "catalog.yaml"
        source.write_text(CATALOG_YAML, encoding="utf-8")
        doc = validate_document(load_document(source))

        result = tree_shake(doc, ["^/categories"])

        assert result.summary.removed_paths == ["/health"]
        assert result.summary.removed_schemas == ["Unused"]
        assert list(result.document["components"]["schemas"]) == ["Category", "Product"]
        assert list(result.document["components"]["parameters"]) == ["idParam"]

        reloaded = yaml.safe_load(dump_document(result.document, "yaml"))
        assert validate_document(reloaded) == result.document

    def test_only_health_drops_components(self, tmp_path):
        source = tmp_path / "catalog.yaml"
        source.write_text(CATALOG_YAML, encoding="utf-8")

        result = tree_shake(load_document(source), ["^/health$"])

        assert "components" not in result.document
        assert result.summary.removed_parameters == ["idParam"]
        assert result.summary.removed_schemas == ["Category", "Product", "Unused"]
        validate_document(result.document)


class TestCliPipeline:
    def test_endpoints_then_shake(self, tmp_path):
        runner = CliRunner()
        listing = runner.invoke(main, ["endpoints", str(FIXTURES / "petstore.yaml")])
        assert listing.exit_code == 0

        output_file = tmp_path / "pets.yaml"
        result = runner.invoke(main, [
            "shake", str(FIXTURES / "petstore.yaml"),
            "-e", "/pets",
            "--format", "yaml",
            "-o", str(output_file),
        ])
        assert result.exit_code == 0, result.output

        reduced = load_document(output_file)
        assert list(reduced["paths"]) == ["/pets"]
        assert list(reduced["components"]["schemas"]) == ["Pet", "Owner", "Error"]
        assert list(reduced["components"]["securitySchemes"]) == ["apiKeyAuth", "bearerAuth"]

        again = tree_shake(reduced, ["^/pets$"])
        assert again.summary.total_removed() == 0
