"""Workspace metadata models for ``scarb metadata --format-version 1`` output.

These models are the typed, read-only view of the document Scarb produces
for a workspace. Only the fields snforge needs are declared; anything else
Scarb emits is ignored so newer Scarb releases keep validating.

Core library components are tagged once, here, while the document is
ingested (``ComponentMetadata.is_corelib``), instead of being re-derived by
path inspection at every call site.
"""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Scarb lays the bundled core library out as <cache>/core/src/lib.cairo
CORELIB_PATH_MARKER = "core/src"

# The only metadata format version this package understands
METADATA_FORMAT_VERSION = 1

TARGET_KIND_STARKNET_CONTRACT = "starknet-contract"
TARGET_KIND_LIB = "lib"


def is_corelib_source_path(source_path: Path | str) -> bool:
    """Return True if a component source path points into the core library."""
    return CORELIB_PATH_MARKER in Path(source_path).as_posix()


class ComponentMetadata(BaseModel):
    """A single source unit contributing to a compilation unit.

    Attributes:
        package: Id of the package the component comes from.
        name: Crate name of the component.
        source_path: Path to the component's root ``.cairo`` file.
        is_corelib: True if this component is the Cairo core library.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    package: str = Field(..., description="Id of the package providing the component")
    name: str = Field(..., min_length=1, description="Crate name")
    source_path: Path = Field(..., description="Path to the component's lib.cairo")
    is_corelib: bool = Field(
        default=False,
        description="Whether this component is the Cairo core library",
    )

    @model_validator(mode="before")
    @classmethod
    def tag_corelib(cls, data: Any) -> Any:
        """Tag core library components from their source path if not set explicitly."""
        if isinstance(data, dict) and "is_corelib" not in data and "source_path" in data:
            return {**data, "is_corelib": is_corelib_source_path(data["source_path"])}
        return data

    @property
    def source_root(self) -> Path:
        """Directory containing the component's root source file."""
        return self.source_path.parent


class TargetMetadata(BaseModel):
    """Build target of a compilation unit (e.g. ``lib`` or ``starknet-contract``)."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    kind: str = Field(..., min_length=1, description="Target kind")
    name: str = Field(..., min_length=1, description="Target name")
    source_path: Path = Field(..., description="Entry source file of the target")


class CompilationUnitMetadata(BaseModel):
    """A buildable target of a package together with its components.

    Component order is significant: it is the include-search order of the
    compiler.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., description="Compilation unit id")
    package: str = Field(..., description="Id of the owning package")
    target: TargetMetadata
    components: tuple[ComponentMetadata, ...] = Field(default_factory=tuple)


class ManifestMetadata(BaseModel):
    """Subset of a package's ``Scarb.toml`` that Scarb reports back."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    tool: dict[str, Any] | None = Field(
        default=None,
        description="Contents of the [tool] table, keyed by tool name",
    )


class PackageMetadata(BaseModel):
    """A package of the workspace.

    Attributes:
        id: Unique package id (e.g. "simple_package 0.1.0 (path+file:///...)").
        name: Package name.
        version: Package version.
        root: Package root directory.
        manifest_path: Path to the package's Scarb.toml.
        manifest_metadata: Reported manifest fields, including [tool].
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    name: str
    version: str
    root: Path
    manifest_path: Path
    manifest_metadata: ManifestMetadata = Field(default_factory=ManifestMetadata)

    def tool_metadata(self, tool_name: str) -> Any | None:
        """Return a copy of the raw ``[tool.<tool_name>]`` document, or None if absent.

        Example:
            >>> package.tool_metadata("snforge")
            {'exit_first': True}
        """
        tool = self.manifest_metadata.tool
        if tool is None:
            return None
        return copy.deepcopy(tool.get(tool_name))


class WorkspaceInfo(BaseModel):
    """Workspace root and member package ids."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    root: Path
    manifest_path: Path | None = None
    members: tuple[str, ...] = Field(default_factory=tuple)


class WorkspaceMetadata(BaseModel):
    """Full ``scarb metadata`` snapshot for one workspace.

    Produced once per invocation and treated as read-only by every
    resolution function.

    Example:
        >>> metadata = WorkspaceMetadata.from_json(stdout)
        >>> package = metadata.get_package(metadata.workspace.members[0])
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    version: int = Field(..., description="Metadata format version")
    workspace: WorkspaceInfo
    packages: tuple[PackageMetadata, ...] = Field(default_factory=tuple)
    compilation_units: tuple[CompilationUnitMetadata, ...] = Field(default_factory=tuple)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: int) -> int:
        """Reject metadata formats other than the supported one."""
        if v != METADATA_FORMAT_VERSION:
            msg = f"unsupported metadata format version {v}, expected {METADATA_FORMAT_VERSION}"
            raise ValueError(msg)
        return v

    @classmethod
    def from_json(cls, content: str | bytes) -> WorkspaceMetadata:
        """Validate a JSON metadata document.

        Raises:
            pydantic.ValidationError: If the document does not match the schema.
        """
        return cls.model_validate_json(content)

    def get_package(self, package_id: str) -> PackageMetadata | None:
        """Return the package with the given id, or None."""
        for package in self.packages:
            if package.id == package_id:
                return package
        return None

    def package_ids(self) -> list[str]:
        """Return ids of all packages in the metadata."""
        return [package.id for package in self.packages]
