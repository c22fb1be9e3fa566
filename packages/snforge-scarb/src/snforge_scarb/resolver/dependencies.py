"""Linked library and core library resolution for a compilation unit.

This module turns the components of a selected compilation unit into the
inputs of the Cairo compiler:
- LinkedLibrary: A named crate root passed to the compiler
- PackageDependencies: Everything needed to compile a package's tests
- build_dependencies: Split components into linked libraries and corelib
- dependencies_for_package: Full resolution starting from a package id
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from snforge_scarb.errors import CorelibNotFoundError, PackageNotFoundError
from snforge_scarb.observability import span
from snforge_scarb.resolver.compilation_unit import select_compilation_unit

if TYPE_CHECKING:
    from snforge_scarb.schemas.metadata import CompilationUnitMetadata, WorkspaceMetadata

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class LinkedLibrary:
    """A crate the compiler links against.

    Attributes:
        name: Crate name.
        path: Crate source root directory.
    """

    name: str
    path: Path


@dataclass(frozen=True)
class UnitDependencies:
    """Compiler inputs derived from a single compilation unit.

    Attributes:
        lib_path: Entry source file of the unit's target.
        corelib_path: Source root of the core library.
        linked_libraries: Non-core components in compiler include-search order.
        target_name: Name of the unit's target.
    """

    lib_path: Path
    corelib_path: Path
    linked_libraries: tuple[LinkedLibrary, ...]
    target_name: str


@dataclass(frozen=True)
class PackageDependencies:
    """Everything needed to compile a package's tests.

    Attributes:
        package_root: Root directory of the package.
        lib_path: Entry source file of the selected target.
        corelib_path: Source root of the core library.
        linked_libraries: Non-core components in compiler include-search order.
        target_name: Name of the selected target.
    """

    package_root: Path
    lib_path: Path
    corelib_path: Path
    linked_libraries: tuple[LinkedLibrary, ...]
    target_name: str


def build_dependencies(unit: CompilationUnitMetadata) -> UnitDependencies:
    """Split a unit's components into linked libraries and the core library.

    Component order is preserved. If several components are tagged as the
    core library the first one is used and a warning is logged.

    Args:
        unit: The selected compilation unit.

    Returns:
        UnitDependencies for the unit.

    Raises:
        CorelibNotFoundError: If no component is the core library.
    """
    linked_libraries = tuple(
        LinkedLibrary(name=component.name, path=component.source_root)
        for component in unit.components
        if not component.is_corelib
    )

    corelibs = [component for component in unit.components if component.is_corelib]
    if not corelibs:
        raise CorelibNotFoundError(
            unit.id,
            internal_details=f"components: {[c.name for c in unit.components]}",
        )
    if len(corelibs) > 1:
        logger.warning(
            "multiple_corelib_components",
            compilation_unit=unit.id,
            components=[str(c.source_path) for c in corelibs],
            using=str(corelibs[0].source_path),
        )

    return UnitDependencies(
        lib_path=unit.target.source_path,
        corelib_path=corelibs[0].source_root,
        linked_libraries=linked_libraries,
        target_name=unit.target.name,
    )


def dependencies_for_package(
    metadata: WorkspaceMetadata,
    package_id: str,
) -> PackageDependencies:
    """Resolve compiler inputs for a package.

    Args:
        metadata: Workspace metadata produced by ``scarb metadata``.
        package_id: Id of the package to resolve.

    Returns:
        PackageDependencies. Partial results are never returned.

    Raises:
        PackageNotFoundError: If the package or its compilation unit is missing.
        CorelibNotFoundError: If the selected unit has no core library.

    Example:
        >>> deps = dependencies_for_package(metadata, metadata.workspace.members[0])
        >>> deps.lib_path
        PosixPath('/work/simple_package/src/lib.cairo')
    """
    with span("dependencies_for_package", attributes={"scarb.package_id": package_id}):
        unit = select_compilation_unit(metadata, package_id)

        package = metadata.get_package(package_id)
        if package is None:
            raise PackageNotFoundError(
                package_id,
                available_packages=metadata.package_ids(),
            )

        unit_dependencies = build_dependencies(unit)

        logger.info(
            "package_dependencies_resolved",
            package_id=package_id,
            target_name=unit_dependencies.target_name,
            linked_libraries=[library.name for library in unit_dependencies.linked_libraries],
        )

        return PackageDependencies(
            package_root=package.root,
            lib_path=unit_dependencies.lib_path,
            corelib_path=unit_dependencies.corelib_path,
            linked_libraries=unit_dependencies.linked_libraries,
            target_name=unit_dependencies.target_name,
        )
