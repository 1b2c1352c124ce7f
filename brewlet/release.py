from __future__ import annotations

import platform
import re
from typing import NamedTuple, Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from brewlet.errors import DownloadFailure
from brewlet.logger import logger
from brewlet.manifest import PackageManifest
from brewlet.utils import compare_versions

# Matches the version number embedded in a release key, e.g. bub-0.7.1-darwin-amd64.gz
VERSION_PATTERN = re.compile(r"(?<![A-Za-z0-9])v?([0-9]+(?:\.[0-9]+)*)")


class Release(NamedTuple):
    version: str
    key: str


def latest_release(
    bucket: str,
    prefix: str,
    system: Optional[str] = None,
    region: Optional[str] = None,
) -> Optional[Release]:
    """
    Find the newest release published under an S3 prefix.

    Only keys containing the operating system name are considered. The version
    is the first dotted number found in the file name of the key.

    Args:
        bucket (str): The S3 bucket the releases are published to.
        prefix (str): The key prefix of the releases.
        system (str, optional): The operating system name. Defaults to the current one.
        region (str, optional): The region of the bucket.

    Returns:
        Optional[Release]: The newest release, or None if no release matches.

    Raises:
        DownloadFailure: If the bucket cannot be listed.
    """
    system = (system or platform.system()).lower()
    s3 = boto3.client(
        "s3", region_name=region, config=Config(signature_version="s3v4")
    )

    newest: Optional[Release] = None
    try:
        paginator = s3.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
            for obj in page.get("Contents", []):
                key = obj["Key"]
                if system not in key:
                    continue

                match = VERSION_PATTERN.search(key.split("/")[-1])
                if match is None:
                    continue

                version = match.group(1)
                if newest is None or compare_versions(version, newest.version) > 0:
                    newest = Release(version=version, key=key)
    except (BotoCoreError, ClientError) as e:
        raise DownloadFailure(f"Failed to list s3://{bucket}/{prefix}: {e}") from e

    if newest is None:
        logger.debug(f"No release for {system} found under s3://{bucket}/{prefix}")
    return newest


def check_upgrade(manifest: PackageManifest, installed_version: str) -> bool:
    """
    Report whether the manifest describes a newer release than the installed one.

    Args:
        manifest (PackageManifest): The manifest of the package.
        installed_version (str): The version currently installed.

    Returns:
        bool: True if an upgrade is available.
    """
    if manifest.is_upgrade(installed_version):
        logger.info(
            f"{manifest.name} {installed_version} is outdated, {manifest.version} is available."
        )
        return True

    logger.info(f"{manifest.name} {installed_version} is up to date.")
    return False
