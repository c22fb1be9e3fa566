"""Discovery and loading of Scarb's ``starknet_artifacts.json`` index.

``scarb build`` writes ``target/dev/<target_name>.starknet_artifacts.json``
for packages with a ``starknet-contract`` target. This module:
- Locates the index (a never-built project is not an error)
- Parses it into StarknetArtifacts
- Reads every referenced Sierra/CASM file into a contract name keyed map
"""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import ValidationError

from snforge_scarb.errors import (
    ArtifactParseError,
    ArtifactReadError,
    field_path_from_validation_error,
)
from snforge_scarb.observability import span
from snforge_scarb.schemas.artifacts import (
    ARTIFACTS_INDEX_SUFFIX,
    StarknetArtifacts,
    StarknetContractArtifacts,
)

logger = structlog.get_logger(__name__)

# Scarb's output directory for the dev profile, relative to the project root
TARGET_DEV_DIR = Path("target") / "dev"


def artifacts_index_file_name(target_name: str) -> str:
    """Return the index file name Scarb generates for a target."""
    return f"{target_name}{ARTIFACTS_INDEX_SUFFIX}"


def try_get_starknet_artifacts_path(
    project_root: Path | str,
    target_name: str,
) -> Path | None:
    """Find the artifacts index of a target, if the project has been built.

    Args:
        project_root: Package root directory (the one holding Scarb.toml).
        target_name: Target name, which may differ from the package name.

    Returns:
        Path to ``target/dev/<target_name>.starknet_artifacts.json``, or None
        if ``target/dev`` does not exist or contains no such file.

    Raises:
        OSError: For listing failures other than a missing directory
            (e.g. ``PermissionError``).
    """
    dev_dir = Path(project_root) / TARGET_DEV_DIR
    try:
        entries = list(dev_dir.iterdir())
    except FileNotFoundError:
        logger.debug("target_dir_missing", path=str(dev_dir))
        return None

    expected = artifacts_index_file_name(target_name)
    for entry in entries:
        if entry.name == expected:
            logger.debug("artifacts_index_found", path=str(entry))
            return entry

    logger.debug("artifacts_index_missing", path=str(dev_dir), expected=expected)
    return None


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ArtifactReadError(path, internal_details=str(e)) from e


def artifacts_for_package(path: Path | str) -> StarknetArtifacts:
    """Get deserialized contents of a ``starknet_artifacts.json`` file.

    Args:
        path: Path to the index file.

    Returns:
        Parsed StarknetArtifacts.

    Raises:
        ArtifactReadError: If the file cannot be read.
        ArtifactParseError: If the content does not match the index schema.
    """
    path = Path(path)
    content = _read_text(path)
    try:
        return StarknetArtifacts.model_validate_json(content)
    except ValidationError as e:
        raise ArtifactParseError(
            path,
            field_path=field_path_from_validation_error(e),
            internal_details=str(e),
        ) from e


def get_contracts_map(path: Path | str) -> dict[str, StarknetContractArtifacts]:
    """Load every contract listed in an artifacts index.

    Artifact paths are resolved against the index file's directory. The map
    follows index order; a later record with the same contract name
    replaces an earlier one.

    Args:
        path: Path to the index file.

    Returns:
        Mapping of contract name to its Sierra and CASM contents.

    Raises:
        ArtifactReadError: If the index or any referenced file cannot be read.
        ArtifactParseError: If the index does not match its schema.

    Example:
        >>> contracts = get_contracts_map(Path("target/dev/simple_package.starknet_artifacts.json"))
        >>> contracts["ERC20"].casm is not None
        True
    """
    path = Path(path)
    base_path = path.parent

    with span("get_contracts_map", attributes={"scarb.artifacts_index": str(path)}):
        artifacts = artifacts_for_package(path)

        contracts: dict[str, StarknetContractArtifacts] = {}
        for contract in artifacts.contracts:
            sierra = _read_text(base_path / contract.artifacts.sierra)
            casm = None
            if contract.artifacts.casm is not None:
                casm = _read_text(base_path / contract.artifacts.casm)

            if contract.contract_name in contracts:
                logger.debug(
                    "contract_artifacts_overwritten",
                    contract_name=contract.contract_name,
                    contract_id=contract.id,
                )
            contracts[contract.contract_name] = StarknetContractArtifacts(sierra=sierra, casm=casm)

        logger.info(
            "contracts_loaded",
            index=str(path),
            index_version=artifacts.version,
            contracts=len(contracts),
        )
        return contracts
