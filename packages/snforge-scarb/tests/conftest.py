"""Shared pytest fixtures for snforge-scarb tests.

This module provides a Scarb-shaped workspace: a ``scarb metadata``
document pointing at real directories under ``tmp_path`` and a built
``target/dev`` with a starknet_artifacts.json index.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
import structlog

from snforge_scarb.schemas import WorkspaceMetadata

PACKAGE_NAME = "simple_package"
STARKNET_ARTIFACTS_INDEX = f"{PACKAGE_NAME}.starknet_artifacts.json"


def pytest_configure(config: pytest.Config) -> None:
    """Register the traceability markers."""
    config.addinivalue_line("markers", "requirement(id): link a test to a requirement id")
    config.addinivalue_line("markers", "requirements(ids): link a test to requirement ids")


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture.

    capsys can then assert on logged internal details.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


def package_id(name: str, root: Path) -> str:
    """Return a Scarb-style package id for a path package."""
    return f"{name} 0.1.0 (path+file://{root.as_posix()}/Scarb.toml)"


def component(name: str, package: str, source_path: Path) -> dict[str, Any]:
    """Return a compilation unit component as Scarb reports it."""
    return {"package": package, "name": name, "source_path": str(source_path), "cfg": []}


def compilation_unit(
    package: str,
    kind: str,
    components: list[dict[str, Any]],
    *,
    name: str = PACKAGE_NAME,
    source_path: Path | None = None,
) -> dict[str, Any]:
    """Return a compilation unit as Scarb reports it."""
    return {
        "id": f"{package}-{kind}",
        "package": package,
        "target": {
            "kind": kind,
            "name": name,
            "source_path": str(source_path or Path("/src/lib.cairo")),
            "params": {},
        },
        "compiler_config": {},
        "components": components,
    }


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Create the package sources of ``simple_package``.

    Returns:
        Package root directory (holding Scarb.toml).
    """
    root = tmp_path / PACKAGE_NAME
    (root / "src").mkdir(parents=True)
    (root / "Scarb.toml").write_text(
        '[package]\nname = "simple_package"\nversion = "0.1.0"\n'
    )
    (root / "src" / "lib.cairo").write_text("mod contract;\n")
    return root


@pytest.fixture
def corelib_root(tmp_path: Path) -> Path:
    """Create a core library checkout laid out like Scarb's cache."""
    source = tmp_path / "registry" / "core" / "src"
    source.mkdir(parents=True)
    (source / "lib.cairo").write_text("mod traits;\n")
    return source


@pytest.fixture
def dependency_root(tmp_path: Path) -> Path:
    """Create a non-core dependency (snforge_std) source root."""
    source = tmp_path / "git" / "snforge_std" / "src"
    source.mkdir(parents=True)
    (source / "lib.cairo").write_text("mod cheatcodes;\n")
    return source


@pytest.fixture
def sample_metadata_dict(
    project_root: Path,
    corelib_root: Path,
    dependency_root: Path,
) -> dict[str, Any]:
    """Return a ``scarb metadata --format-version 1`` document.

    The package has a ``lib`` and a ``starknet-contract`` unit, each with
    the core library, the package itself and snforge_std as components.
    """
    pkg_id = package_id(PACKAGE_NAME, project_root)
    core_id = "core 2.0.1 (std)"
    std_id = "snforge_std 0.1.0 (git+https://github.com/foundry-rs/starknet-foundry)"
    lib_path = project_root / "src" / "lib.cairo"

    components = [
        component("core", core_id, corelib_root / "lib.cairo"),
        component(PACKAGE_NAME, pkg_id, lib_path),
        component("snforge_std", std_id, dependency_root / "lib.cairo"),
    ]

    return {
        "version": 1,
        "app_exe": "/usr/local/bin/scarb",
        "app_version_info": {"version": "0.5.1"},
        "target_dir": str(project_root / "target"),
        "workspace": {
            "manifest_path": str(project_root / "Scarb.toml"),
            "root": str(project_root),
            "members": [pkg_id],
        },
        "packages": [
            {
                "id": pkg_id,
                "name": PACKAGE_NAME,
                "version": "0.1.0",
                "source": "path+file:///",
                "root": str(project_root),
                "manifest_path": str(project_root / "Scarb.toml"),
                "dependencies": [],
                "targets": [],
                "manifest_metadata": {"authors": None, "tool": None},
            },
            {
                "id": core_id,
                "name": "core",
                "version": "2.0.1",
                "source": "std",
                "root": str(corelib_root.parent),
                "manifest_path": str(corelib_root.parent / "Scarb.toml"),
                "dependencies": [],
                "targets": [],
                "manifest_metadata": {},
            },
        ],
        "compilation_units": [
            compilation_unit(pkg_id, "lib", components, source_path=lib_path),
            compilation_unit(pkg_id, "starknet-contract", components, source_path=lib_path),
        ],
    }


@pytest.fixture
def workspace_metadata(sample_metadata_dict: dict[str, Any]) -> WorkspaceMetadata:
    """Return the sample metadata validated into WorkspaceMetadata."""
    return WorkspaceMetadata.model_validate(sample_metadata_dict)


@pytest.fixture
def member_id(workspace_metadata: WorkspaceMetadata) -> str:
    """Return the id of the workspace's only member."""
    return workspace_metadata.workspace.members[0]


@pytest.fixture
def write_artifacts_index() -> Callable[..., Path]:
    """Return a factory that writes an artifacts index and its class files.

    The factory takes the ``target/dev`` directory and a list of
    ``(contract_name, sierra_body, casm_body | None)`` tuples.
    """

    def _write(
        dev_dir: Path,
        contracts: list[tuple[str, str, str | None]],
        *,
        target_name: str = PACKAGE_NAME,
    ) -> Path:
        dev_dir.mkdir(parents=True, exist_ok=True)
        records = []
        for index, (name, sierra, casm) in enumerate(contracts, start=1):
            sierra_file = f"{target_name}_{name}.sierra.json"
            (dev_dir / sierra_file).write_text(sierra)
            artifacts: dict[str, str] = {"sierra": sierra_file}
            if casm is not None:
                casm_file = f"{target_name}_{name}.casm.json"
                (dev_dir / casm_file).write_text(casm)
                artifacts["casm"] = casm_file
            records.append(
                {
                    "id": str(index),
                    "package_name": target_name,
                    "contract_name": name,
                    "artifacts": artifacts,
                }
            )

        index_path = dev_dir / f"{target_name}.starknet_artifacts.json"
        index_path.write_text(json.dumps({"version": 1, "contracts": records}))
        return index_path

    return _write
