from __future__ import annotations

import re
from string import Formatter
from typing import Any, ClassVar, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing_extensions import Annotated, Literal

from brewlet.errors import ManifestError
from brewlet.utils import compare_versions, parse_version

# Single-file compression the host strips before handing the file over
COMPRESSION_SUFFIXES = (".gz", ".bz2", ".xz")


class BrewletBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


class RenameStep(BrewletBaseModel):
    """
    Renames a file inside the staging directory.

    Attributes:
        source (str): The file to rename. May use the {name}, {version} and {artifact} placeholders.
        target (str): The new name of the file. Same placeholders as source.
    """

    action: Literal["mv"] = "mv"
    source: str = Field(..., description="The file to rename.")
    target: str = Field(..., description="The new file name.")


class BinInstallStep(BrewletBaseModel):
    """
    Moves a file from the staging directory into the binary directory.

    Attributes:
        file (str): The staged file to register. May use the same placeholders as RenameStep.
        mode (int): The permission bits set on the installed file.
    """

    action: Literal["bin_install"] = "bin_install"
    file: str = Field(..., description="The staged file to install.")
    mode: int = Field(0o755, description="Permission bits of the installed file.")


InstallStep = Annotated[
    Union[RenameStep, BinInstallStep], Field(discriminator="action")
]


def default_install_steps() -> List[Union[RenameStep, BinInstallStep]]:
    return [
        RenameStep(source="{artifact}", target="{name}"),
        BinInstallStep(file="{name}"),
    ]


class PackageManifest(BrewletBaseModel):
    """
    A manifest describing one release of a prebuilt binary.

    Attributes:
        name (str): The package identifier.
        description (str): A human-readable summary.
        homepage (str): The project homepage. Informational only.
        version (str): The release version. Used to template the url and to detect upgrades.
        url (str): The download location template. {version} and {name} are substituted.
        sha256 (str): The expected SHA256 hash of the artifact at the resolved url.
        install_steps (List[InstallStep]): The ordered steps that place the binary into a bin directory.
    """

    checksum_algorithm: ClassVar[str] = "sha256"

    name: str = Field(..., description="The package identifier.")
    description: str = Field("", description="A human-readable summary.")
    homepage: str = Field("", description="The project homepage.")
    version: str = Field(..., description="The release version.")
    url: str = Field(..., description="The download location template.")
    sha256: str = Field(..., description="The SHA256 hash of the artifact.")
    install_steps: List[InstallStep] = Field(
        default_factory=default_install_steps,
        description="The ordered install steps.",
    )

    @field_validator("name")
    def validate_name(cls, v: str) -> str:
        if not re.match(r"^[a-z0-9][a-z0-9._-]*$", v):
            raise ValueError("Invalid package name")
        return v

    @field_validator("version")
    def validate_version(cls, v: str) -> str:
        parse_version(v)
        return v

    @field_validator("sha256", mode="before")
    def validate_sha256(cls, v: Any) -> Any:
        if not isinstance(v, str) or not re.match(r"^[0-9a-fA-F]{64}$", v):
            raise ValueError("Invalid sha256 format")
        return v.lower()

    @model_validator(mode="after")
    def validate_templates(self) -> "PackageManifest":
        try:
            self.resolve_source_url()
            for step in self.install_steps:
                for template in _step_templates(step):
                    self.render(template)
        except ManifestError as e:
            raise ValueError(str(e))

        if not any(isinstance(step, BinInstallStep) for step in self.install_steps):
            raise ValueError("At least one bin_install step is required")
        return self

    @property
    def checksum(self) -> str:
        return self.sha256

    @property
    def source_url(self) -> str:
        return self.resolve_source_url()

    @property
    def binary_name(self) -> str:
        """The name of the file that ends up in the bin directory."""
        bin_steps = [s for s in self.install_steps if isinstance(s, BinInstallStep)]
        return self.render(bin_steps[-1].file)

    def resolve_source_url(self, version: Optional[str] = None) -> str:
        """
        Substitute the version (and name) into the url template.

        No check is made that the resulting url is reachable.

        Args:
            version (str, optional): The version to resolve. Defaults to the manifest version.

        Returns:
            str: The download url of the artifact.

        Raises:
            ManifestError: If the template references an unknown placeholder.
        """
        return _format(self.url, name=self.name, version=version or self.version)

    def artifact_name(self, version: Optional[str] = None) -> str:
        """Return the file name of the artifact at the resolved url."""
        return self.resolve_source_url(version).rstrip("/").split("/")[-1]

    def staged_name(self, version: Optional[str] = None) -> str:
        """
        Return the name of the artifact once the host has decompressed it.

        Example:
            bub-0.7.1-darwin-amd64.gz is staged as bub-0.7.1-darwin-amd64.
        """
        artifact = self.artifact_name(version)
        for suffix in COMPRESSION_SUFFIXES:
            if artifact.endswith(suffix):
                return artifact[: -len(suffix)]
        return artifact

    def render(self, template: str, version: Optional[str] = None) -> str:
        """Render an install step template for the given version."""
        return _format(
            template,
            name=self.name,
            version=version or self.version,
            artifact=self.staged_name(version),
        )

    def is_upgrade(self, installed_version: str) -> bool:
        """Return True if this manifest is newer than the installed version."""
        return compare_versions(self.version, installed_version) > 0


def _step_templates(step: Union[RenameStep, BinInstallStep]) -> List[str]:
    if isinstance(step, RenameStep):
        return [step.source, step.target]
    return [step.file]


def _format(template: str, **values: str) -> str:
    # Only bare placeholders are allowed, no attribute or index lookups
    try:
        fields = [f for _, f, _, _ in Formatter().parse(template) if f is not None]
    except ValueError as e:
        raise ManifestError(f"Invalid template {template!r}: {e}")

    for field in fields:
        if field not in values:
            raise ManifestError(
                f"Invalid template {template!r}: unknown placeholder {{{field}}}"
            )

    try:
        return template.format(**values)
    except (KeyError, IndexError, ValueError, TypeError, AttributeError) as e:
        raise ManifestError(f"Invalid template {template!r}: {e}")
