"""Workspace metadata loading for snforge-scarb.

This module obtains and validates ``scarb metadata`` output:
- ScarbMetadataCommand: Run ``scarb metadata --format-version 1``
- parse_metadata_output: Validate the command's stdout
- load_metadata: Validate a metadata document saved to disk
- get_scarb_executable: Scarb binary from the SCARB environment variable
"""

from __future__ import annotations

import os
import subprocess
from pathlib import Path

import structlog
from pydantic import ValidationError

from snforge_scarb.errors import (
    FileReadError,
    MetadataCommandError,
    MetadataParseError,
    field_path_from_validation_error,
)
from snforge_scarb.observability import span
from snforge_scarb.schemas.metadata import METADATA_FORMAT_VERSION, WorkspaceMetadata

logger = structlog.get_logger(__name__)

# Environment variable Scarb itself sets for subcommands and extensions
SCARB_ENV_VAR = "SCARB"

DEFAULT_SCARB_EXECUTABLE = "scarb"

DEFAULT_METADATA_TIMEOUT_SECONDS = 60.0


def get_scarb_executable() -> str:
    """Get the scarb executable from the environment.

    Returns:
        Value of SCARB, or "scarb" to look it up on PATH.
    """
    return os.environ.get(SCARB_ENV_VAR) or DEFAULT_SCARB_EXECUTABLE


def parse_metadata_output(stdout: str) -> WorkspaceMetadata:
    """Validate ``scarb metadata`` output.

    Scarb may print diagnostics before the JSON document, so the document
    is taken from the first line that starts with ``{``.

    Args:
        stdout: Captured standard output of the command.

    Returns:
        Validated WorkspaceMetadata.

    Raises:
        MetadataParseError: If no line holds a valid metadata document.
    """
    last_error: ValidationError | None = None
    for line in stdout.splitlines():
        if not line.lstrip().startswith("{"):
            continue
        try:
            return WorkspaceMetadata.from_json(line)
        except ValidationError as e:
            last_error = e

    if last_error is None:
        raise MetadataParseError(
            "Failed to parse scarb metadata output",
            internal_details="no JSON document found in output",
        )

    raise MetadataParseError(
        "Failed to parse scarb metadata output",
        field_path=field_path_from_validation_error(last_error),
        internal_details=str(last_error),
    ) from last_error


def load_metadata(path: Path | str) -> WorkspaceMetadata:
    """Load a metadata document previously saved to disk.

    Raises:
        FileReadError: If the file cannot be read or is not valid UTF-8.
        MetadataParseError: If the document does not match the schema.
    """
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FileReadError(path, internal_details=str(e)) from e

    try:
        return WorkspaceMetadata.from_json(content)
    except ValidationError as e:
        raise MetadataParseError(
            "Failed to parse scarb metadata",
            file_path=path,
            field_path=field_path_from_validation_error(e),
            internal_details=str(e),
        ) from e


class ScarbMetadataCommand:
    """Runs ``scarb metadata`` and returns validated workspace metadata.

    Attributes:
        manifest_path: Optional Scarb.toml to pass via ``--manifest-path``.
        current_dir: Working directory of the command.
        scarb: Scarb executable.
        timeout_seconds: Upper bound on command run time.
        no_deps: Pass ``--no-deps`` to skip dependency resolution.

    Example:
        >>> metadata = ScarbMetadataCommand(current_dir=Path("simple_package")).exec()
        >>> metadata.workspace.members
        ('simple_package 0.1.0 (path+file:///.../Scarb.toml)',)
    """

    def __init__(
        self,
        *,
        manifest_path: Path | str | None = None,
        current_dir: Path | str | None = None,
        scarb: str | None = None,
        timeout_seconds: float = DEFAULT_METADATA_TIMEOUT_SECONDS,
        no_deps: bool = False,
    ) -> None:
        """Initialize the command.

        Args:
            manifest_path: Scarb.toml to read. Scarb searches from
                ``current_dir`` upwards if not set.
            current_dir: Working directory. Defaults to the process cwd.
            scarb: Scarb executable. Defaults to ``get_scarb_executable()``.
            timeout_seconds: Upper bound on command run time.
            no_deps: Skip resolving dependencies.
        """
        self.manifest_path = Path(manifest_path) if manifest_path else None
        self.current_dir = Path(current_dir) if current_dir else None
        self.scarb = scarb or get_scarb_executable()
        self.timeout_seconds = timeout_seconds
        self.no_deps = no_deps

    def command(self) -> list[str]:
        """Return the command line that ``exec()`` runs."""
        command = [self.scarb]
        if self.manifest_path is not None:
            command += ["--manifest-path", str(self.manifest_path)]
        command += ["metadata", "--format-version", str(METADATA_FORMAT_VERSION)]
        if self.no_deps:
            command.append("--no-deps")
        return command

    def exec(self) -> WorkspaceMetadata:
        """Run the command and validate its output.

        Raises:
            MetadataCommandError: If scarb is missing, times out or fails.
            MetadataParseError: If the output is not valid metadata.
        """
        command = self.command()
        with span("scarb_metadata", attributes={"scarb.command": " ".join(command)}):
            try:
                completed = subprocess.run(
                    command,
                    cwd=self.current_dir,
                    check=False,
                    capture_output=True,
                    text=True,
                    timeout=self.timeout_seconds,
                )
            except FileNotFoundError as e:
                raise MetadataCommandError(
                    command,
                    reason=f"executable {self.scarb!r} not found",
                ) from e
            except subprocess.TimeoutExpired as e:
                raise MetadataCommandError(
                    command,
                    reason=f"timed out after {self.timeout_seconds} seconds",
                ) from e

            if completed.returncode != 0:
                raise MetadataCommandError(
                    command,
                    returncode=completed.returncode,
                    stderr=completed.stderr or "",
                )

            metadata = parse_metadata_output(completed.stdout)
            logger.info(
                "scarb_metadata_loaded",
                workspace_root=str(metadata.workspace.root),
                packages=len(metadata.packages),
                compilation_units=len(metadata.compilation_units),
            )
            return metadata
