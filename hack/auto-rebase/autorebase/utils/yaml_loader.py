import os
from typing import Any

from ruamel.yaml import YAML


def get_yaml_instance() -> YAML:
    # configuration files are only read, never written back
    return YAML(typ="safe", pure=True)


def load_yaml_file(file_path: str) -> Any | None:
    """Returns the parsed content of file_path, or None if the file does not exist."""
    if not os.path.isfile(file_path):
        return None
    with open(file_path, "r") as f:
        return get_yaml_instance().load(f)
