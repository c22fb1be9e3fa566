"""Resolve snforge's configuration from a package's Scarb.toml."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from pydantic import ValidationError

from snforge_scarb.errors import (
    PackageNotFoundError,
    ToolConfigError,
    field_path_from_validation_error,
)
from snforge_scarb.schemas.forge_config import FORGE_TOOL_NAME, ForgeConfig

if TYPE_CHECKING:
    from snforge_scarb.schemas.metadata import WorkspaceMetadata

logger = structlog.get_logger(__name__)


def config_from_scarb_for_package(
    metadata: WorkspaceMetadata,
    package_id: str,
    tool_name: str = FORGE_TOOL_NAME,
) -> ForgeConfig:
    """Read ``[tool.<tool_name>]`` of a package into a ForgeConfig.

    Args:
        metadata: Workspace metadata produced by ``scarb metadata``.
        package_id: Id of the package whose manifest is read.
        tool_name: Key under ``[tool]``. Defaults to "snforge".

    Returns:
        The validated configuration, or ``ForgeConfig()`` if the package has
        no such table.

    Raises:
        PackageNotFoundError: If the package is not in the metadata.
        ToolConfigError: If the table does not match ForgeConfig.
    """
    package = metadata.get_package(package_id)
    if package is None:
        raise PackageNotFoundError(
            package_id,
            available_packages=metadata.package_ids(),
        )

    raw_config = package.tool_metadata(tool_name)
    if raw_config is None:
        logger.debug("tool_config_missing", package_id=package_id, tool=tool_name)
        return ForgeConfig()

    try:
        config = ForgeConfig.model_validate(raw_config)
    except ValidationError as e:
        raise ToolConfigError(
            tool_name,
            package_id,
            field_path=field_path_from_validation_error(e),
            internal_details=str(e),
        ) from e

    logger.debug("tool_config_resolved", package_id=package_id, tool=tool_name, **config.model_dump())
    return config
