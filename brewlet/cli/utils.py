from __future__ import annotations

import functools
import os
from typing import Any, Optional

import typer

from brewlet.config import load_manifest
from brewlet.errors import BrewletError, ManifestError
from brewlet.formula.registry import get_formula
from brewlet.logger import logger
from brewlet.manifest import PackageManifest


def exit_on_error(func: Any) -> Any:
    """
    Decorator that turns brewlet errors into a logged message and exit code 1.

    Args:
        func (Any): The command function to decorate.

    Returns:
        Any: The decorated function.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except BrewletError as e:
            logger.error(str(e))
            raise typer.Exit(1)

    return wrapper


def resolve_formula(name: str, formula_file: Optional[str] = None) -> PackageManifest:
    """
    Load the manifest of a package.

    If a formula file is given, the manifest is read from it instead of the
    formula registry.

    Args:
        name (str): The package name.
        formula_file (str, optional): The path to a manifest YAML file.

    Returns:
        PackageManifest: The manifest of the package.
    """
    if formula_file:
        manifest = load_manifest(os.path.abspath(os.path.expanduser(formula_file)))
        if manifest.name != name:
            raise ManifestError(
                f"Formula file {formula_file} declares package {manifest.name}, expected {name}."
            )
        return manifest

    return get_formula(name)


def formula_file_option() -> Any:
    return typer.Option(
        None,
        "--file",
        "-f",
        help="Read the manifest from a YAML file instead of the formula registry.",
    )
