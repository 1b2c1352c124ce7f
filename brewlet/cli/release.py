from __future__ import annotations

import os
from typing import Optional

import typer

from brewlet.cli.utils import exit_on_error
from brewlet.release import latest_release

release_app = typer.Typer()


@release_app.command()
@exit_on_error
def latest(
    bucket: str = typer.Option(
        ..., "--bucket", help="The S3 bucket the releases are published to."
    ),
    prefix: str = typer.Option("", "--prefix", help="The key prefix of the releases."),
    system: Optional[str] = typer.Option(
        None,
        "--system",
        help="The operating system to look for. Defaults to the current one.",
    ),
    region: Optional[str] = typer.Option(
        os.getenv("AWS_REGION"),
        "--region",
        help="The region of the bucket.",
    ),
) -> None:
    """
    Show the newest release published to an S3 prefix.
    """
    release = latest_release(bucket, prefix, system=system, region=region)
    if release is None:
        typer.echo("No release found.", err=True)
        raise typer.Exit(1)

    typer.echo(f"{release.version}\ts3://{bucket}/{release.key}")
