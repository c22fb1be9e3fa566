"""snforge configuration read from a package's ``[tool.snforge]`` table.

Example Scarb.toml:
    [tool.snforge]
    exit_first = true
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Key of the snforge table under [tool] in Scarb.toml
FORGE_TOOL_NAME = "snforge"


class ForgeConfig(BaseModel):
    """Run policy for snforge, resolved from Scarb.toml.

    Every field has a default, so a package without a ``[tool.snforge]``
    table resolves to ``ForgeConfig()``.

    Attributes:
        exit_first: Stop the test run after the first failing test.

    Example:
        >>> ForgeConfig.model_validate({"exit_first": True}).exit_first
        True
    """

    model_config = ConfigDict(frozen=True, extra="forbid", strict=True)

    exit_first: bool = Field(
        default=False,
        description="Stop executing tests after the first failure",
    )
