"""Configuration file helpers."""

from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR = Path(__file__).parent


def load_yaml_config(filename: str) -> dict[str, Any]:
    """Read a YAML file shipped in config/ and return its top-level mapping.

    Raises:
        FileNotFoundError: If the file is not present in config/.
        ValueError: If the document is not a mapping.
    """
    data = yaml.safe_load((CONFIG_DIR / filename).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{filename}: expected a mapping at the top level")
    return data
