"""snforge-scarb: Scarb build metadata resolution for snforge.

This package provides:
- WorkspaceMetadata: Pydantic schema for ``scarb metadata`` output
- dependencies_for_package: Compilation unit, linked libraries and corelib
- get_contracts_map: Compiled contract classes from starknet_artifacts.json
- config_from_scarb_for_package: [tool.snforge] configuration
"""

from __future__ import annotations

__version__ = "0.1.0"

# Error types
from snforge_scarb.errors import (
    ArtifactParseError,
    ArtifactReadError,
    CorelibNotFoundError,
    FileReadError,
    MetadataCommandError,
    MetadataParseError,
    PackageNotFoundError,
    ParseError,
    ScarbResolutionError,
    ToolConfigError,
)

# Logging
from snforge_scarb.observability import configure_logging

# Resolution
from snforge_scarb.resolver import (
    LinkedLibrary,
    PackageDependencies,
    ScarbMetadataCommand,
    UnitDependencies,
    artifacts_for_package,
    build_dependencies,
    config_from_scarb_for_package,
    dependencies_for_package,
    get_contracts_map,
    load_metadata,
    select_compilation_unit,
    try_get_starknet_artifacts_path,
)

# Schema models
from snforge_scarb.schemas import (
    CompilationUnitMetadata,
    ComponentMetadata,
    ForgeConfig,
    PackageMetadata,
    StarknetArtifacts,
    StarknetContract,
    StarknetContractArtifactPaths,
    StarknetContractArtifacts,
    TargetMetadata,
    WorkspaceMetadata,
)

__all__ = [
    "__version__",
    # Resolution
    "select_compilation_unit",
    "build_dependencies",
    "dependencies_for_package",
    "LinkedLibrary",
    "UnitDependencies",
    "PackageDependencies",
    "try_get_starknet_artifacts_path",
    "artifacts_for_package",
    "get_contracts_map",
    "config_from_scarb_for_package",
    "ScarbMetadataCommand",
    "load_metadata",
    # Errors
    "ScarbResolutionError",
    "PackageNotFoundError",
    "CorelibNotFoundError",
    "FileReadError",
    "ArtifactReadError",
    "ParseError",
    "ArtifactParseError",
    "ToolConfigError",
    "MetadataParseError",
    "MetadataCommandError",
    # Logging
    "configure_logging",
    # Schema models
    "WorkspaceMetadata",
    "PackageMetadata",
    "CompilationUnitMetadata",
    "TargetMetadata",
    "ComponentMetadata",
    "StarknetArtifacts",
    "StarknetContract",
    "StarknetContractArtifactPaths",
    "StarknetContractArtifacts",
    "ForgeConfig",
]
