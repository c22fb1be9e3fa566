"""Compilation unit selection.

A Scarb package can produce several compilation units (one per target).
snforge compiles tests against exactly one of them, chosen by target kind:
``starknet-contract`` first, then ``lib``, then anything else.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from snforge_scarb.errors import PackageNotFoundError
from snforge_scarb.schemas.metadata import TARGET_KIND_LIB, TARGET_KIND_STARKNET_CONTRACT

if TYPE_CHECKING:
    from snforge_scarb.schemas.metadata import CompilationUnitMetadata, WorkspaceMetadata

logger = structlog.get_logger(__name__)

TARGET_KIND_PRIORITY: dict[str, int] = {
    TARGET_KIND_STARKNET_CONTRACT: 0,
    TARGET_KIND_LIB: 1,
}
OTHER_TARGET_KIND_PRIORITY = 2


def target_kind_sort_key(kind: str) -> tuple[int, str]:
    """Return the ordering key for a target kind.

    The kind string breaks ties between non-priority kinds, so the minimum
    over any set of units is unique.

    Example:
        >>> target_kind_sort_key("lib")
        (1, 'lib')
    """
    return (TARGET_KIND_PRIORITY.get(kind, OTHER_TARGET_KIND_PRIORITY), kind)


def select_compilation_unit(
    metadata: WorkspaceMetadata,
    package_id: str,
) -> CompilationUnitMetadata:
    """Pick the compilation unit snforge should build for a package.

    Args:
        metadata: Workspace metadata produced by ``scarb metadata``.
        package_id: Id of the package to resolve.

    Returns:
        The unit of ``package_id`` with the highest-priority target kind.

    Raises:
        PackageNotFoundError: If no compilation unit belongs to the package.
    """
    candidates = [unit for unit in metadata.compilation_units if unit.package == package_id]
    if not candidates:
        raise PackageNotFoundError(
            package_id,
            available_packages=metadata.package_ids(),
        )

    unit = min(candidates, key=lambda candidate: target_kind_sort_key(candidate.target.kind))
    logger.debug(
        "compilation_unit_selected",
        package_id=package_id,
        compilation_unit=unit.id,
        target_kind=unit.target.kind,
        candidates=len(candidates),
    )
    return unit
