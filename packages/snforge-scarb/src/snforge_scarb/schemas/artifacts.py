"""Models for the ``starknet_artifacts.json`` index generated by Scarb.

The index lives next to the compiled contract classes in ``target/dev`` and
lists, per contract, the relative paths to its Sierra and (optionally) CASM
representations:

    {
        "version": 1,
        "contracts": [
            {
                "id": "1",
                "package_name": "simple_package",
                "contract_name": "ERC20",
                "artifacts": {
                    "sierra": "simple_package_ERC20.sierra.json",
                    "casm": "simple_package_ERC20.casm.json"
                }
            }
        ]
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

ARTIFACTS_INDEX_SUFFIX = ".starknet_artifacts.json"


class StarknetContractArtifactPaths(BaseModel):
    """Artifact paths of one contract, relative to the index directory."""

    model_config = ConfigDict(frozen=True)

    sierra: Path = Field(..., description="Relative path to the Sierra class")
    casm: Path | None = Field(default=None, description="Relative path to the CASM class")


class StarknetContract(BaseModel):
    """One contract record of the artifacts index."""

    model_config = ConfigDict(frozen=True)

    id: str
    package_name: str
    contract_name: str
    artifacts: StarknetContractArtifactPaths


class StarknetArtifacts(BaseModel):
    """Deserialized ``starknet_artifacts.json``.

    ``version`` is read but not constrained; compatibility across index
    versions is left to the caller.
    """

    model_config = ConfigDict(frozen=True)

    version: int
    contracts: tuple[StarknetContract, ...]


@dataclass(frozen=True)
class StarknetContractArtifacts:
    """In-memory contents of a contract's compiled classes.

    Attributes:
        sierra: Full text of the Sierra class file.
        casm: Full text of the CASM class file, if the index references one.
    """

    sierra: str
    casm: str | None = None
