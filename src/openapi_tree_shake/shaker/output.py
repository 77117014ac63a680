"""Render documents as JSON or YAML."""

import json
from typing import Any

import yaml

OUTPUT_FORMATS = ("json", "yaml")


class _NoAliasDumper(yaml.SafeDumper):
    """Write shared nodes out in full instead of as YAML anchors."""

    def ignore_aliases(self, data):
        return True


def dump_document(data: Any, fmt: str = "json") -> str:
    if fmt == "json":
        return json.dumps(data, indent=2, ensure_ascii=False, default=str) + "\n"
    if fmt == "yaml":
        return yaml.dump(data, Dumper=_NoAliasDumper, sort_keys=False, allow_unicode=True)
    raise ValueError(f"Unknown output format: {fmt}")
