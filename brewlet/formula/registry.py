from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, List

from brewlet.config import load_manifest
from brewlet.constants import FORMULA_DIR, FORMULA_EXT
from brewlet.errors import ManifestError
from brewlet.formula.bub import bub
from brewlet.logger import logger
from brewlet.manifest import PackageManifest
from brewlet.utils import get_project_data_dir

formula_registry: Dict[str, PackageManifest] = {
    bub.name: bub,
}


def get_formula_dir() -> Path:
    """Return the directory user supplied formula files are read from."""
    return Path(get_project_data_dir()) / FORMULA_DIR


def get_formula(name: str) -> PackageManifest:
    """
    Look up a formula by name.

    Built-in formulas take precedence over files in the formula directory.

    Args:
        name (str): The package name.

    Returns:
        PackageManifest: The manifest of the package.

    Raises:
        ManifestError: If no formula with the given name exists.
    """
    if name in formula_registry:
        return formula_registry[name]

    path = get_formula_dir() / f"{name}{FORMULA_EXT}"
    if not path.is_file():
        raise ManifestError(f"No formula named {name}.")

    logger.debug(f"Loading formula {name} from {path}")
    manifest = load_manifest(str(path))
    if manifest.name != name:
        raise ManifestError(
            f"Formula file {path} declares package {manifest.name}, expected {name}."
        )
    return manifest


def list_formulas() -> List[str]:
    """Return the sorted names of all built-in and on-disk formulas."""
    names = set(formula_registry)

    formula_dir = get_formula_dir()
    if formula_dir.is_dir():
        for entry in os.listdir(formula_dir):
            if entry.endswith(FORMULA_EXT):
                names.add(entry[: -len(FORMULA_EXT)])

    return sorted(names)
