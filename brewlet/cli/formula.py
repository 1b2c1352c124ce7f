from __future__ import annotations

from typing import Optional

import typer
from tabulate import tabulate

from brewlet.cli.utils import exit_on_error, formula_file_option, resolve_formula
from brewlet.config import generate_yaml
from brewlet.errors import ManifestError
from brewlet.formula.registry import get_formula, list_formulas
from brewlet.logger import logger
from brewlet.release import check_upgrade

formula_app = typer.Typer()


@formula_app.command()
@exit_on_error
def info(
    name: str = typer.Argument(..., help="The package name."),
    formula_file: Optional[str] = formula_file_option(),
) -> None:
    """
    Print the manifest of a package as YAML.
    """
    manifest = resolve_formula(name, formula_file)
    typer.echo(generate_yaml(manifest), nl=False)


@formula_app.command()
@exit_on_error
def url(
    name: str = typer.Argument(..., help="The package name."),
    version: Optional[str] = typer.Option(
        None,
        "--version",
        help="Resolve the url for this version instead of the manifest version.",
    ),
    formula_file: Optional[str] = formula_file_option(),
) -> None:
    """
    Print the download url of a package release.
    """
    manifest = resolve_formula(name, formula_file)
    typer.echo(manifest.resolve_source_url(version))


@formula_app.command("list")
@exit_on_error
def list_command() -> None:
    """
    List the available formulas.
    """
    table = []
    for name in list_formulas():
        try:
            manifest = get_formula(name)
        except ManifestError as e:
            logger.warning(f"Skipping formula {name}: {e}")
            continue
        table.append((manifest.name, manifest.version, manifest.description))

    typer.echo(tabulate(table, headers=["Name", "Version", "Description"]))


@formula_app.command()
@exit_on_error
def outdated(
    name: str = typer.Argument(..., help="The package name."),
    installed_version: str = typer.Argument(
        ..., help="The version that is currently installed."
    ),
    formula_file: Optional[str] = formula_file_option(),
) -> None:
    """
    Check whether the manifest describes a newer release than the installed one.

    Exits with code 1 if an upgrade is available.
    """
    manifest = resolve_formula(name, formula_file)
    try:
        available = check_upgrade(manifest, installed_version)
    except ValueError as e:
        typer.echo(str(e), err=True)
        raise typer.Exit(2)

    typer.echo(f"{manifest.name} {installed_version} -> {manifest.version}")
    if available:
        raise typer.Exit(1)
