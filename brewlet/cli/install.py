from __future__ import annotations

import os
from typing import Optional

import typer

from brewlet.cli.utils import exit_on_error, formula_file_option, resolve_formula
from brewlet.install import install as install_package
from brewlet.install import verify_artifact
from brewlet.logger import logger
from brewlet.utils import get_default_bin_dir


@exit_on_error
def install(
    name: str = typer.Argument(..., help="The package name."),
    staged_file: str = typer.Argument(
        ..., help="The downloaded and decompressed release file."
    ),
    bin_dir: Optional[str] = typer.Option(
        None,
        "--bin-dir",
        "-b",
        help="The directory to install the binary into. Defaults to $BREWLET_HOME/bin.",
    ),
    formula_file: Optional[str] = formula_file_option(),
) -> None:
    """
    Install a downloaded release file into a binary directory.

    The file must already be fetched, verified and decompressed. Its directory
    is used as the staging directory for the install steps.
    """
    manifest = resolve_formula(name, formula_file)

    if not bin_dir:
        bin_dir = get_default_bin_dir()
        os.makedirs(bin_dir, exist_ok=True)

    installed = install_package(
        manifest,
        os.path.abspath(os.path.expanduser(staged_file)),
        os.path.abspath(os.path.expanduser(bin_dir)),
    )
    typer.echo(str(installed))


@exit_on_error
def verify(
    name: str = typer.Argument(..., help="The package name."),
    artifact: str = typer.Argument(..., help="The downloaded release artifact."),
    formula_file: Optional[str] = formula_file_option(),
) -> None:
    """
    Verify a downloaded artifact against the manifest checksum.
    """
    manifest = resolve_formula(name, formula_file)
    verify_artifact(manifest, os.path.abspath(os.path.expanduser(artifact)))
    logger.info(f"{artifact}: OK")
