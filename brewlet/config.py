from __future__ import annotations

import os

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from brewlet.errors import ManifestError
from brewlet.manifest import PackageManifest
from brewlet.utils import read_yaml_file, to_yaml


def generate_yaml(manifest: PackageManifest) -> str:
    """
    Generate a YAML string representation of the given manifest.

    Args:
        manifest (PackageManifest): The manifest to generate YAML from.

    Returns:
        str: The YAML string representation of the manifest.
    """
    return to_yaml(manifest.model_dump(exclude_none=True))


def parse_yaml(yaml_str: str) -> PackageManifest:
    """
    Parse a YAML string and return a PackageManifest object.

    Args:
        yaml_str (str): The YAML string to parse.

    Returns:
        PackageManifest: The parsed manifest.

    Raises:
        ManifestError: If the YAML is malformed or does not describe a valid manifest.
    """
    yaml = YAML()
    try:
        data = yaml.load(yaml_str)
    except YAMLError as e:
        raise ManifestError(f"Invalid manifest YAML: {e}")

    if not isinstance(data, dict):
        raise ManifestError("Invalid manifest: expected a mapping at the top level.")

    return _validate(data)


def load_manifest(path: str) -> PackageManifest:
    """
    Load a manifest from a YAML file.

    Args:
        path (str): The path of the manifest file.

    Returns:
        PackageManifest: The loaded manifest.

    Raises:
        ManifestError: If the file does not exist or is not a valid manifest.
    """
    if not os.path.isfile(path):
        raise ManifestError(f"Manifest file {path} does not exist.")

    try:
        data = read_yaml_file(path)
    except YAMLError as e:
        raise ManifestError(f"Invalid manifest YAML in {path}: {e}")

    return _validate(data)


def _validate(data: dict) -> PackageManifest:
    try:
        return PackageManifest.model_validate(data)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest: {e}")
