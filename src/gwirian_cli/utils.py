"""CLI utility functions."""

import json
from pathlib import Path
from typing import Any

import yaml


def load_input_file(input_file: str) -> dict[str, Any]:
    """Load resource fields from a JSON or YAML file.

    Args:
        input_file: Path to a .json, .yaml or .yml file

    Returns:
        Mapping of field names to values

    Raises:
        ValueError: Unsupported extension, unparsable content, or content
            that is not a mapping
    """
    file_path = Path(input_file)
    with file_path.open(encoding="utf-8") as f:
        if file_path.suffix in [".yaml", ".yml"]:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {input_file}: {e}")
        elif file_path.suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported input file format: {file_path.suffix}")

    if not isinstance(data, dict):
        raise ValueError(f"Input file must contain a mapping of fields: {input_file}")
    return data


def build_fields(
    options: dict[str, Any],
    input_file: str | None = None,
) -> dict[str, Any]:
    """Build a create/update body from flags and an optional file.

    Flags override file values; flags left unset are omitted.

    Args:
        options: Field name -> flag value (None when not given)
        input_file: Path to JSON/YAML file with fields

    Returns:
        Fields to send under the resource key
    """
    fields: dict[str, Any] = {}

    if input_file:
        fields.update(load_input_file(input_file))

    for key, value in options.items():
        if value is not None:
            fields[key] = value

    return fields
