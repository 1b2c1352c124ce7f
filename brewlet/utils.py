from __future__ import annotations

import hashlib
import os
import re
from io import StringIO
from pathlib import Path
from typing import Any, Dict, List

from ruamel.yaml import YAML

from brewlet.constants import BIN_DIR, CHUNK_SIZE, HOME_ENV_VAR, PROJECT_NAME


def camel_to_kebab(name: str) -> str:
    """
    Converts a camel case string to kebab case.

    Args:
        name (str): The camel case string to be converted.

    Returns:
        str: The kebab case string.

    Example:
        >>> camel_to_kebab("camelCaseString")
        'camel-case-string'
    """
    name = re.sub("(.)([A-Z][a-z]+)", r"\1-\2", name)
    return re.sub("([a-z0-9])([A-Z])", r"\1-\2", name).lower()


def get_project_data_dir() -> str:
    """
    Get the project data directory.

    If the environment variable HOME_ENV_VAR is set, its value is returned.
    Otherwise, it returns the home directory appended with the kebab-case project name.

    Returns:
        str: The absolute path of the project data directory.
    """
    return os.environ.get(
        HOME_ENV_VAR, str(Path.home() / f".{camel_to_kebab(PROJECT_NAME)}")
    )


def get_default_bin_dir() -> str:
    """Return the directory binaries are installed into when none is given."""
    return os.path.join(get_project_data_dir(), BIN_DIR)


def to_yaml(obj: Dict[Any, Any]) -> str:
    """
    Converts an dictionary to a YAML string.

    Args:
        obj (dict): The dictionary to be converted.

    Returns:
        str: The YAML string.
    """
    yaml = YAML()
    yaml.indent(mapping=2, sequence=4, offset=2)
    buf = StringIO()
    yaml.dump(obj, buf)
    return buf.getvalue()


def read_yaml_file(path: str) -> Dict[str, Any]:
    """
    Reads a YAML file and returns its contents as a dictionary.

    If the file does not exist, it returns an empty dictionary.

    Args:
        path (str): The path to the YAML file.

    Returns:
        Dict[str, Any]: The contents of the YAML file as a dictionary, or an empty dictionary if the file does not exist.
    """
    yaml = YAML()
    try:
        with open(path, "r") as file:
            data = yaml.load(file)
    except FileNotFoundError:
        data = {}
    return data or {}


def calculate_sha256(file_path: str) -> str:
    """
    Calculate the SHA-256 hash of a file.

    Args:
        file_path (str): The path to the file for which the SHA-256 hash is to be calculated.

    Returns:
        str: The SHA-256 hash of the file, as a hexadecimal string.
    """
    sha256_hash = hashlib.sha256()

    with open(file_path, "rb") as f:
        for byte_block in iter(lambda: f.read(CHUNK_SIZE), b""):
            sha256_hash.update(byte_block)

    return sha256_hash.hexdigest()


def parse_version(version: str) -> List[int]:
    """
    Split a dotted version string into its numeric components.

    Raises:
        ValueError: If a component is not a number.
    """
    if not re.match(r"^\d+(\.\d+)*$", version):
        raise ValueError(f"Invalid version: {version}")
    return [int(part) for part in version.split(".")]


def compare_versions(a: str, b: str) -> int:
    """
    Compare two dotted version strings.

    Missing components count as 0, so "1.2" and "1.2.0" are equal.

    Returns:
        int: -1 if a < b, 0 if a == b and 1 if a > b.
    """
    va, vb = parse_version(a), parse_version(b)
    length = max(len(va), len(vb))
    va += [0] * (length - len(va))
    vb += [0] * (length - len(vb))
    return (va > vb) - (va < vb)
