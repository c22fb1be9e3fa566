"""Unit tests for the snforge-scarb exception hierarchy."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import BaseModel, ValidationError

from snforge_scarb.errors import (
    SIERRA_CODEGEN_HINT,
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
    field_path_from_validation_error,
)


class TestScarbResolutionError:
    """Tests for the base ScarbResolutionError exception."""

    def test_stores_user_message(self) -> None:
        """ScarbResolutionError should store and expose user_message."""
        error = ScarbResolutionError("Something went wrong")
        assert error.user_message == "Something went wrong"
        assert str(error) == "Something went wrong"

    def test_logs_internal_details(self, capsys: pytest.CaptureFixture[str]) -> None:
        """internal_details should be logged, not added to the message."""
        error = ScarbResolutionError(
            "User sees this",
            internal_details="validation error at contracts.0",
        )

        assert "contracts.0" not in str(error)
        captured = capsys.readouterr()
        assert "validation error at contracts.0" in captured.out
        assert "User sees this" in captured.out

    def test_no_log_without_internal_details(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Nothing should be logged without internal_details."""
        ScarbResolutionError("Just a user message")

        captured = capsys.readouterr()
        assert "scarb_resolution_error" not in captured.out


class TestPackageNotFoundError:
    """Tests for PackageNotFoundError."""

    def test_message_names_package(self) -> None:
        """Message should match the wording callers grep for."""
        error = PackageNotFoundError("12345679")

        assert "Failed to find metadata for package" in str(error)
        assert "12345679" in str(error)
        assert error.package_id == "12345679"
        assert error.available_packages == []

    def test_stores_available_packages(self) -> None:
        """available_packages should be kept for diagnostics."""
        error = PackageNotFoundError("missing", available_packages=["a", "b"])
        assert error.available_packages == ["a", "b"]

    def test_is_resolution_error(self) -> None:
        """PackageNotFoundError should be catchable as ScarbResolutionError."""
        with pytest.raises(ScarbResolutionError):
            raise PackageNotFoundError("missing")


class TestCorelibNotFoundError:
    """Tests for CorelibNotFoundError."""

    def test_message_names_unit(self) -> None:
        error = CorelibNotFoundError("unit-1")

        assert "corelib could not be found" in str(error)
        assert "unit-1" in str(error)
        assert error.compilation_unit_id == "unit-1"


class TestArtifactReadError:
    """Tests for ArtifactReadError."""

    def test_message_contains_path(self) -> None:
        """The offending path should be part of the message."""
        error = ArtifactReadError(Path("/work/target/dev/a.sierra.json"))

        assert "/work/target/dev/a.sierra.json" in str(error)
        assert error.path == Path("/work/target/dev/a.sierra.json")


class TestFileReadError:
    """Tests for FileReadError."""

    def test_message_contains_path(self) -> None:
        error = FileReadError("/work/metadata.json")

        assert str(error) == "Failed to read '/work/metadata.json' contents"
        assert error.path == Path("/work/metadata.json")

    def test_artifact_read_error_is_file_read_error(self) -> None:
        assert issubclass(ArtifactReadError, FileReadError)
        assert issubclass(FileReadError, ScarbResolutionError)


class TestParseError:
    """Tests for ParseError context formatting."""

    def test_message_without_context(self) -> None:
        error = ParseError("Bad content")
        assert str(error) == "Bad content"
        assert error.file_path is None
        assert error.field_path is None

    def test_message_with_file_and_field(self) -> None:
        """File and field context should be appended in parentheses."""
        error = ParseError("Bad content", file_path="x.json", field_path="contracts.0")

        assert str(error) == "Bad content (in x.json, field 'contracts.0')"
        assert error.file_path == Path("x.json")

    def test_message_with_hint(self) -> None:
        """The hint should follow the context."""
        error = ParseError("Bad content", file_path="x.json", hint="Rebuild the project")
        assert str(error) == "Bad content (in x.json). Rebuild the project"


class TestArtifactParseError:
    """Tests for ArtifactParseError."""

    def test_message_contains_path_and_sierra_hint(self) -> None:
        """Index parse errors should explain how to enable sierra output."""
        path = Path("/work/target/dev/p.starknet_artifacts.json")
        error = ArtifactParseError(path)

        assert f"Failed to parse {str(path)!r} contents" in str(error)
        assert SIERRA_CODEGEN_HINT in str(error)
        assert error.file_path == path
        assert isinstance(error, ParseError)


class TestToolConfigError:
    """Tests for ToolConfigError."""

    def test_message_names_tool_and_package(self) -> None:
        error = ToolConfigError("snforge", "pkg 0.1.0", field_path="exit_first")

        assert "[tool.snforge]" in str(error)
        assert "pkg 0.1.0" in str(error)
        assert "field 'exit_first'" in str(error)
        assert isinstance(error, ParseError)


class TestMetadataErrors:
    """Tests for metadata related errors."""

    def test_metadata_parse_error_is_parse_error(self) -> None:
        assert issubclass(MetadataParseError, ParseError)

    def test_command_error_with_returncode(self) -> None:
        error = MetadataCommandError(["scarb", "metadata"], returncode=1, stderr="error: boom")

        assert str(error) == "`scarb metadata` exited with code 1"
        assert error.returncode == 1
        assert error.stderr == "error: boom"

    def test_command_error_with_reason(self) -> None:
        error = MetadataCommandError(["scarb", "metadata"], reason="executable 'scarb' not found")
        assert str(error) == "`scarb metadata` failed: executable 'scarb' not found"
        assert error.returncode is None


class TestFieldPathFromValidationError:
    """Tests for field_path_from_validation_error."""

    def test_nested_location(self) -> None:
        """Nested locations should be joined with dots."""

        class Inner(BaseModel):
            flag: bool

        class Outer(BaseModel):
            items: list[Inner]

        with pytest.raises(ValidationError) as exc_info:
            Outer.model_validate({"items": [{"flag": "not-a-bool"}]})

        assert field_path_from_validation_error(exc_info.value) == "items.0.flag"
