from __future__ import annotations

from importlib import resources
import json
import sys
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator

SCHEMA_FILE = "resource-monitor.schema.json"
PAYLOAD_KINDS = {"static": "staticData", "dynamic": "dynamicData"}


def _get_schema_path() -> Any:
    """Get the path to the schema file, handling frozen executables."""
    if getattr(sys, "frozen", False) and hasattr(sys, "_MEIPASS"):
        return Path(sys._MEIPASS) / "resource_monitor" / "schemas" / SCHEMA_FILE
    return resources.files("resource_monitor").joinpath(f"schemas/{SCHEMA_FILE}")


def load_schema() -> dict[str, Any]:
    return json.loads(_get_schema_path().read_text(encoding="utf-8"))


def get_validator(kind: str) -> Draft202012Validator:
    if kind not in PAYLOAD_KINDS:
        raise ValueError(f"Unknown payload kind: {kind}")
    schema = load_schema()
    # Validate against one definition while keeping $defs resolvable
    schema["$ref"] = f"#/$defs/{PAYLOAD_KINDS[kind]}"
    return Draft202012Validator(schema=schema)


def validate_payload(payload: dict[str, Any], kind: str) -> list[str]:
    validator = get_validator(kind)
    errors = sorted(validator.iter_errors(payload), key=lambda e: [str(p) for p in e.path])
    return [error.message for error in errors]
