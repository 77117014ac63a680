"""Tree-shake OpenAPI documents down to selected paths and the components they reach."""

__version__ = "0.1.0"
