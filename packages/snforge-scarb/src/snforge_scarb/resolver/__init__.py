"""Resolver module for snforge-scarb.

This module exports the resolution functions:
- select_compilation_unit: Pick the unit to compile for a package
- build_dependencies / dependencies_for_package: Linked libraries and corelib
- try_get_starknet_artifacts_path: Locate the artifacts index
- artifacts_for_package: Parse the artifacts index
- get_contracts_map: Load contract classes listed in the index
- config_from_scarb_for_package: Resolve [tool.snforge]
- ScarbMetadataCommand / load_metadata: Obtain workspace metadata
"""

from __future__ import annotations

from snforge_scarb.resolver.artifacts import (
    TARGET_DEV_DIR,
    artifacts_for_package,
    artifacts_index_file_name,
    get_contracts_map,
    try_get_starknet_artifacts_path,
)
from snforge_scarb.resolver.compilation_unit import (
    TARGET_KIND_PRIORITY,
    select_compilation_unit,
    target_kind_sort_key,
)
from snforge_scarb.resolver.dependencies import (
    LinkedLibrary,
    PackageDependencies,
    UnitDependencies,
    build_dependencies,
    dependencies_for_package,
)
from snforge_scarb.resolver.forge_config import config_from_scarb_for_package
from snforge_scarb.resolver.metadata import (
    SCARB_ENV_VAR,
    ScarbMetadataCommand,
    get_scarb_executable,
    load_metadata,
    parse_metadata_output,
)

__all__: list[str] = [
    # Compilation unit selection
    "select_compilation_unit",
    "target_kind_sort_key",
    "TARGET_KIND_PRIORITY",
    # Dependencies
    "LinkedLibrary",
    "PackageDependencies",
    "UnitDependencies",
    "build_dependencies",
    "dependencies_for_package",
    # Artifacts
    "TARGET_DEV_DIR",
    "artifacts_index_file_name",
    "try_get_starknet_artifacts_path",
    "artifacts_for_package",
    "get_contracts_map",
    # Tool configuration
    "config_from_scarb_for_package",
    # Metadata
    "ScarbMetadataCommand",
    "SCARB_ENV_VAR",
    "get_scarb_executable",
    "load_metadata",
    "parse_metadata_output",
]
