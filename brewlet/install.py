from __future__ import annotations

import errno
import os
import shutil
from pathlib import Path
from typing import List, Optional, Tuple, Union, cast

from brewlet.errors import ChecksumMismatch, InstallIOError, ManifestError
from brewlet.logger import logger
from brewlet.manifest import BinInstallStep, PackageManifest, RenameStep
from brewlet.utils import calculate_sha256

PathLike = Union[str, os.PathLike]


def verify_artifact(manifest: PackageManifest, artifact_path: PathLike) -> None:
    """
    Check that a downloaded artifact matches the manifest's checksum.

    Args:
        manifest (PackageManifest): The manifest the artifact was downloaded for.
        artifact_path (str): The path of the downloaded artifact.

    Raises:
        InstallIOError: If the artifact does not exist.
        ChecksumMismatch: If the SHA256 hash of the artifact does not match the expected value.
    """
    path = str(artifact_path)
    if not os.path.isfile(path):
        raise InstallIOError(f"Artifact {path} does not exist.")

    actual = calculate_sha256(path)
    if actual != manifest.checksum:
        # Log the mismatch so that users know why the installation was aborted
        logger.error(
            f"SHA256 hash of {path} does not match the expected value for {manifest.name}"
        )
        raise ChecksumMismatch(path, manifest.checksum, actual)

    logger.debug(f"Checksum of {path} verified.")


def install(
    manifest: PackageManifest, downloaded_path: PathLike, bin_dir: PathLike
) -> Path:
    """
    Run the manifest's install steps on a downloaded (and decompressed) file.

    The directory holding the downloaded file is used as the staging directory.
    The first step acts on the downloaded file itself, whatever its name. Later
    rename steps operate inside the staging directory and bin_install steps move
    files from it into bin_dir. If a step fails, completed renames are undone so
    the downloaded file is left where it was. An existing binary in bin_dir is
    replaced, so installing the same release twice leaves the same single
    binary behind.

    Args:
        manifest (PackageManifest): The manifest of the package.
        downloaded_path (str): The path of the file handed over by the host.
        bin_dir (str): The directory the binary is installed into. It must already exist.

    Returns:
        Path: The path of the installed binary.

    Raises:
        ManifestError: If the manifest has no bin_install step.
        InstallIOError: If the downloaded file is missing, bin_dir is not a directory,
            or a rename or move fails.
    """
    downloaded = Path(downloaded_path)
    bin_path = Path(bin_dir)

    if not any(isinstance(s, BinInstallStep) for s in manifest.install_steps):
        raise ManifestError(f"Manifest {manifest.name} has no bin_install step.")

    if not downloaded.is_file():
        raise InstallIOError(f"Downloaded file {downloaded} does not exist.")

    if not bin_path.is_dir():
        raise InstallIOError(f"Binary directory {bin_path} does not exist.")

    staging_dir = downloaded.parent
    renamed: List[Tuple[Path, Path]] = []
    installed: Optional[Path] = None

    try:
        for index, step in enumerate(manifest.install_steps):
            if isinstance(step, RenameStep):
                # The first step always acts on the file handed over by the host
                source = (
                    downloaded
                    if index == 0
                    else staging_dir / manifest.render(step.source)
                )
                target = staging_dir / manifest.render(step.target)
                _rename(source, target)
                renamed.append((source, target))
            elif isinstance(step, BinInstallStep):
                name = manifest.render(step.file)
                source = downloaded if index == 0 else staging_dir / name
                installed = _bin_install(source, bin_path / name, step.mode)
    except InstallIOError:
        _undo_renames(renamed)
        raise

    logger.info(f"{manifest.name} {manifest.version} installed to {installed}")
    return cast(Path, installed)


def _rename(source: Path, target: Path) -> None:
    if source == target:
        return

    logger.debug(f"Renaming {source} to {target}")
    try:
        os.replace(source, target)
    except OSError as e:
        raise InstallIOError(f"Failed to rename {source} to {target}: {e}") from e


def _undo_renames(renamed: List[Tuple[Path, Path]]) -> None:
    for source, target in reversed(renamed):
        if source == target:
            continue
        try:
            os.replace(target, source)
        except OSError as e:
            logger.error(f"Failed to restore {source} from {target}: {e}")


def _bin_install(source: Path, target: Path, mode: int) -> Path:
    logger.debug(f"Installing {source} to {target}")
    try:
        try:
            os.replace(source, target)
        except OSError as e:
            if e.errno != errno.EXDEV:
                raise
            # The staging directory lives on another filesystem
            shutil.copy2(source, target)
            source.unlink()
        target.chmod(mode)
    except OSError as e:
        raise InstallIOError(
            f"Failed to install {source} to {target.parent}: {e}"
        ) from e

    return target
