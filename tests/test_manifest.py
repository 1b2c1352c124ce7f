import re

import pytest
from pydantic import ValidationError

from brewlet.errors import ManifestError
from brewlet.formula.bub import bub
from brewlet.manifest import BinInstallStep, PackageManifest, RenameStep

SHA256 = "9929f95055c00d3146bc4e0ff0beb5429fbf3914786f0f59ac3f6d9924b3bda8"


def make_manifest(**kwargs) -> PackageManifest:
    fields = dict(
        name="tool",
        description="A tool",
        homepage="https://example.com/tool",
        version="1.2.3",
        url="https://example.com/releases/{name}-{version}-linux-amd64.gz",
        sha256=SHA256,
    )
    fields.update(kwargs)
    return PackageManifest(**fields)


def test_bub_resolve_source_url() -> None:
    assert (
        bub.resolve_source_url("0.7.1")
        == "https://s3bucket/contrib/bub-0.7.1-darwin-amd64.gz"
    )
    assert bub.source_url == "https://s3bucket/contrib/bub-0.7.1-darwin-amd64.gz"
    assert (
        bub.resolve_source_url("0.8.0")
        == "https://s3bucket/contrib/bub-0.8.0-darwin-amd64.gz"
    )


def test_bub_fields() -> None:
    assert bub.name == "bub"
    assert bub.version == "0.7.1"
    assert bub.homepage == "https://github.com/benchlabs/bub"
    assert bub.binary_name == "bub"
    assert bub.artifact_name() == "bub-0.7.1-darwin-amd64.gz"
    assert bub.staged_name() == "bub-0.7.1-darwin-amd64"


def test_bub_checksum_format() -> None:
    assert bub.checksum_algorithm == "sha256"
    assert bub.checksum == SHA256
    assert len(bub.checksum) == 64
    assert re.match(r"^[0-9a-f]{64}$", bub.checksum)


def test_bub_install_steps() -> None:
    rename, bin_install = bub.install_steps
    assert isinstance(rename, RenameStep)
    assert bub.render(rename.source) == "bub-0.7.1-darwin-amd64"
    assert bub.render(rename.target) == "bub"
    assert isinstance(bin_install, BinInstallStep)
    assert bin_install.file == "bub"
    assert bin_install.mode == 0o755


def test_sha256_is_normalised() -> None:
    manifest = make_manifest(sha256=SHA256.upper())
    assert manifest.sha256 == SHA256


@pytest.mark.parametrize(
    "sha256", ["", "abc", SHA256[:-1], SHA256 + "0", "z" * 64, 1234]
)
def test_invalid_sha256(sha256) -> None:
    with pytest.raises(ValidationError, match="Invalid sha256 format"):
        make_manifest(sha256=sha256)


def test_invalid_name_and_version() -> None:
    with pytest.raises(ValidationError, match="Invalid package name"):
        make_manifest(name="Bad Name")

    with pytest.raises(ValidationError, match="Invalid version"):
        make_manifest(version="1.x")


def test_unknown_placeholder() -> None:
    with pytest.raises(ValidationError, match="Invalid template"):
        make_manifest(url="https://example.com/{arch}/tool.gz")

    with pytest.raises(ValidationError, match="Invalid template"):
        make_manifest(install_steps=[BinInstallStep(file="{bogus}")])


def test_bin_install_step_required() -> None:
    with pytest.raises(ValidationError, match="bin_install"):
        make_manifest(install_steps=[RenameStep(source="a", target="b")])


def test_extra_fields_forbidden() -> None:
    with pytest.raises(ValidationError):
        make_manifest(sha1="abc")


def test_default_install_steps() -> None:
    manifest = make_manifest()
    rename, bin_install = manifest.install_steps
    assert manifest.render(rename.source) == "tool-1.2.3-linux-amd64"
    assert manifest.render(rename.target) == "tool"
    assert manifest.binary_name == "tool"


def test_uncompressed_artifact_is_staged_as_is() -> None:
    manifest = make_manifest(url="https://example.com/{name}-{version}")
    assert manifest.staged_name() == "tool-1.2.3"
    assert manifest.staged_name("2.0.0") == "tool-2.0.0"


def test_render_rejects_unknown_placeholder() -> None:
    with pytest.raises(ManifestError):
        bub.render("{arch}")


def test_is_upgrade() -> None:
    assert bub.is_upgrade("0.7.0")
    assert bub.is_upgrade("0.6.10")
    assert not bub.is_upgrade("0.7.1")
    assert not bub.is_upgrade("0.7.1.0")
    assert not bub.is_upgrade("0.10.0")


@pytest.mark.parametrize(
    "url",
    [
        "https://example.com/{version.major}/tool.gz",
        "https://example.com/{version[x]}/tool.gz",
        "https://example.com/{version[0]}/tool.gz",
        "https://example.com/{}/tool.gz",
        "https://example.com/{version/tool.gz",
    ],
)
def test_placeholder_lookups_rejected(url: str) -> None:
    with pytest.raises(ValidationError, match="Invalid template"):
        make_manifest(url=url)


def test_render_rejects_placeholder_lookups() -> None:
    with pytest.raises(ManifestError, match="unknown placeholder"):
        bub.render("{name.upper}")
