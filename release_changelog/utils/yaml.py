"""Contains utility functions for working with YAML documents."""

from typing import Any

from ruamel.yaml import YAML

yaml = YAML(typ="safe")


def load_yaml_string(content: str) -> Any:
    """Loads a YAML document from a string."""
    return yaml.load(content)
