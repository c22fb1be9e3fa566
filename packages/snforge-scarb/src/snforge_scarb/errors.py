"""Custom exception hierarchy for snforge-scarb.

This module defines the exception classes raised while resolving Scarb
build metadata:
- ScarbResolutionError: Base exception for all resolution errors
- PackageNotFoundError: No package/compilation unit matches an identifier
- CorelibNotFoundError: Compilation unit has no core library component
- FileReadError: A file cannot be read or is not valid UTF-8
- ArtifactReadError: A build artifact cannot be read
- ParseError: Content does not match the expected schema

User-facing messages always name the offending identifier or path.
Technical details (the underlying pydantic or OS error) are logged via
structlog when passed as ``internal_details``.
"""

from __future__ import annotations

from pathlib import Path

import structlog
from pydantic import ValidationError as PydanticValidationError

logger = structlog.get_logger(__name__)

SIERRA_CODEGEN_HINT = "Make sure you have enabled sierra code generation in Scarb.toml"


class ScarbResolutionError(Exception):
    """Base exception for snforge-scarb.

    All snforge-scarb exceptions inherit from this class.

    Args:
        user_message: Message to display to the user.
        internal_details: Optional technical details. Logged, never part
            of ``str(error)``.

    Example:
        >>> raise ScarbResolutionError(
        ...     "Failed to resolve package",
        ...     internal_details="compilation_units is empty",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ScarbResolutionError with user message and optional internal details.

        Args:
            user_message: Message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "scarb_resolution_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class PackageNotFoundError(ScarbResolutionError):
    """Raised when workspace metadata has nothing for a package id.

    Used both when no compilation unit belongs to the package and when the
    package itself is missing from the metadata.

    Attributes:
        package_id: The requested package identifier.
        available_packages: Package ids present in the metadata.

    Example:
        >>> raise PackageNotFoundError(
        ...     "12345679",
        ...     available_packages=["simple_package 0.1.0 (path+file:///tmp/p/Scarb.toml)"],
        ... )
        # User sees: "Failed to find metadata for package = 12345679"
    """

    def __init__(
        self,
        package_id: str,
        *,
        available_packages: list[str] | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize PackageNotFoundError.

        Args:
            package_id: The requested package identifier.
            available_packages: Package ids present in the metadata.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(
            f"Failed to find metadata for package = {package_id}",
            internal_details=internal_details,
        )
        self.package_id = package_id
        self.available_packages = available_packages or []


class CorelibNotFoundError(ScarbResolutionError):
    """Raised when a compilation unit has no core library component.

    Attributes:
        compilation_unit_id: Id of the unit that was searched.
    """

    def __init__(
        self,
        compilation_unit_id: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(
            f"corelib could not be found in compilation unit = {compilation_unit_id}",
            internal_details=internal_details,
        )
        self.compilation_unit_id = compilation_unit_id


class FileReadError(ScarbResolutionError):
    """Raised when a file cannot be read or is not valid UTF-8.

    Always raised ``from`` the underlying ``OSError`` or ``UnicodeDecodeError``.

    Attributes:
        path: Path of the unreadable file.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(
            f"Failed to read {str(path)!r} contents",
            internal_details=internal_details,
        )
        self.path = Path(path)


class ArtifactReadError(FileReadError):
    """Raised when a build artifact (index, Sierra or CASM file) cannot be read."""


class ParseError(ScarbResolutionError):
    """Raised when content does not match its expected schema.

    Provides file path, field and remediation context for actionable
    error messages.

    Attributes:
        file_path: Path to the file being parsed (if known).
        field_path: Dot-separated path to the invalid field (e.g., "contracts.0.artifacts").
        hint: Remediation guidance appended to the message (if any).

    Example:
        >>> raise ParseError(
        ...     "Failed to parse tool configuration",
        ...     field_path="exit_first",
        ...     internal_details="Input should be a valid boolean",
        ... )
        # User sees: "Failed to parse tool configuration (field 'exit_first')"
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: Path | str | None = None,
        field_path: str | None = None,
        hint: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        """Initialize ParseError with context.

        Args:
            user_message: Message to display to the user.
            file_path: Path to the file being parsed (optional).
            field_path: Dot-separated path to the field (optional).
            hint: Remediation guidance (optional).
            internal_details: Technical details for internal logging only.
        """
        context_parts: list[str] = []
        if file_path:
            context_parts.append(f"in {file_path}")
        if field_path:
            context_parts.append(f"field '{field_path}'")

        full_message = user_message
        if context_parts:
            full_message = f"{full_message} ({', '.join(context_parts)})"
        if hint:
            full_message = f"{full_message}. {hint}"

        super().__init__(full_message, internal_details=internal_details)

        self.file_path = Path(file_path) if file_path else None
        self.field_path = field_path
        self.hint = hint


class ArtifactParseError(ParseError):
    """Raised when a ``starknet_artifacts.json`` index does not match its schema.

    The most common cause is building without sierra code generation, so the
    message always carries that hint.

    Example:
        >>> raise ArtifactParseError(Path("target/dev/p.starknet_artifacts.json"))
        # User sees: "Failed to parse 'target/dev/p.starknet_artifacts.json' contents.
        #            Make sure you have enabled sierra code generation in Scarb.toml"
    """

    def __init__(
        self,
        path: Path | str,
        *,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(
            f"Failed to parse {str(path)!r} contents",
            field_path=field_path,
            hint=SIERRA_CODEGEN_HINT,
            internal_details=internal_details,
        )
        self.file_path = Path(path)


class ToolConfigError(ParseError):
    """Raised when a package's ``[tool.<name>]`` section is invalid.

    Attributes:
        tool_name: Name of the tool section (e.g., "snforge").
        package_id: Package whose manifest carries the section.
    """

    def __init__(
        self,
        tool_name: str,
        package_id: str,
        *,
        field_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(
            f"Failed to parse [tool.{tool_name}] configuration for package = {package_id}",
            field_path=field_path,
            internal_details=internal_details,
        )
        self.tool_name = tool_name
        self.package_id = package_id


class MetadataParseError(ParseError):
    """Raised when ``scarb metadata`` output does not match the metadata schema."""


class MetadataCommandError(ScarbResolutionError):
    """Raised when ``scarb metadata`` cannot be run or exits unsuccessfully.

    Attributes:
        command: The command line that was executed.
        returncode: Process exit code (None if the process never completed).
        stderr: Captured standard error output.
    """

    def __init__(
        self,
        command: list[str],
        *,
        returncode: int | None = None,
        stderr: str = "",
        reason: str | None = None,
    ) -> None:
        rendered = " ".join(command)
        if reason:
            message = f"`{rendered}` failed: {reason}"
        else:
            message = f"`{rendered}` exited with code {returncode}"

        super().__init__(message, internal_details=stderr.strip() or None)

        self.command = command
        self.returncode = returncode
        self.stderr = stderr


def field_path_from_validation_error(error: PydanticValidationError) -> str | None:
    """Return the dot-separated location of the first pydantic error, if any.

    Example:
        >>> field_path_from_validation_error(exc)
        'contracts.0.artifacts.sierra'
    """
    errors = error.errors()
    if not errors:
        return None
    location = errors[0].get("loc", ())
    return ".".join(str(part) for part in location) or None
