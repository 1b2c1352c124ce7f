import typer

from brewlet import __version__
from brewlet.cli.formula import formula_app
from brewlet.cli.install import install, verify
from brewlet.cli.release import release_app
from brewlet.logger import setup_logger


def version_callback(version: bool) -> None:
    if version:
        typer.echo(f"Brewlet CLI Version: {__version__}")
        raise typer.Exit()


cli = typer.Typer(context_settings={"help_option_names": ["-h", "--help"]})


@cli.callback()
def main_options(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable verbose output"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    setup_logger(verbose)


cli.command(help="Install a downloaded release file.")(install)

cli.command(help="Verify a downloaded artifact checksum.")(verify)

cli.add_typer(formula_app, name="formula", help="Inspect formulas.")

cli.add_typer(release_app, name="release", help="Query published releases.")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
