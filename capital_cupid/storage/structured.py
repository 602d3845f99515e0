"""JSON/YAML documents on disk, format picked by file extension."""

import json
from pathlib import Path
from typing import Any, Union

import yaml

JSON_SUFFIXES = frozenset({".json"})
YAML_SUFFIXES = frozenset({".yaml", ".yml"})


def _format_of(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        return "json"
    if suffix in YAML_SUFFIXES:
        return "yaml"
    raise ValueError(f"Unsupported file format '{path.suffix}' for {path.name}; expected .json, .yaml or .yml")


def read_structured(filepath: Union[str, Path], label: str = "Data") -> Any:
    """Parse a JSON or YAML document.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the extension is not a supported format
    """
    path = Path(filepath)
    fmt = _format_of(path)
    if not path.is_file():
        raise FileNotFoundError(f"{label} file not found: {filepath}")

    text = path.read_text(encoding="utf-8")
    return json.loads(text) if fmt == "json" else yaml.safe_load(text)


def write_structured(data: Any, filepath: Union[str, Path]) -> None:
    """Write `data` as JSON or YAML according to the extension of `filepath`."""
    path = Path(filepath)
    if _format_of(path) == "json":
        text = json.dumps(data, indent=2)
    else:
        text = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    path.write_text(text, encoding="utf-8")
