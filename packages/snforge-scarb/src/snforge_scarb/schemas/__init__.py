"""Pydantic schemas for Scarb metadata, artifact indexes and snforge config."""

from __future__ import annotations

from snforge_scarb.schemas.artifacts import (
    ARTIFACTS_INDEX_SUFFIX,
    StarknetArtifacts,
    StarknetContract,
    StarknetContractArtifactPaths,
    StarknetContractArtifacts,
)
from snforge_scarb.schemas.forge_config import FORGE_TOOL_NAME, ForgeConfig
from snforge_scarb.schemas.metadata import (
    CORELIB_PATH_MARKER,
    METADATA_FORMAT_VERSION,
    TARGET_KIND_LIB,
    TARGET_KIND_STARKNET_CONTRACT,
    CompilationUnitMetadata,
    ComponentMetadata,
    ManifestMetadata,
    PackageMetadata,
    TargetMetadata,
    WorkspaceInfo,
    WorkspaceMetadata,
    is_corelib_source_path,
)

__all__ = [
    # Artifact index
    "ARTIFACTS_INDEX_SUFFIX",
    "StarknetArtifacts",
    "StarknetContract",
    "StarknetContractArtifactPaths",
    "StarknetContractArtifacts",
    # Tool configuration
    "FORGE_TOOL_NAME",
    "ForgeConfig",
    # Workspace metadata
    "CORELIB_PATH_MARKER",
    "METADATA_FORMAT_VERSION",
    "TARGET_KIND_LIB",
    "TARGET_KIND_STARKNET_CONTRACT",
    "CompilationUnitMetadata",
    "ComponentMetadata",
    "ManifestMetadata",
    "PackageMetadata",
    "TargetMetadata",
    "WorkspaceInfo",
    "WorkspaceMetadata",
    "is_corelib_source_path",
]
