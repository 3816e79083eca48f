import json
import logging
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from core.exceptions import ContractArtifactException

BUNDLED_ARTIFACTS_DIR = Path(__file__).parent / "artifacts"


class TokenStandard(str, Enum):
    """Token standards served by the gateway."""

    ERC20 = "erc20"
    ERC721 = "erc721"
    ERC1155 = "erc1155"

    @property
    def artifact_name(self) -> str:
        return self.value.upper()


class ContractArtifact(BaseModel):
    """
    Compiled contract as produced by Hardhat/Foundry.

    Attributes
    ----------
    contract_name : str
        Contract name
    abi : list[dict]
        Contract ABI
    bytecode : str
        Creation bytecode, empty when the artifact can only be used for calls
    """
    contract_name: str = Field(default="", alias="contractName")
    abi: list[dict]
    bytecode: str = ""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("bytecode", mode="before")
    @classmethod
    def unwrap_bytecode(cls, v):
        # Foundry nests creation code as {"object": "0x..."}
        if isinstance(v, dict):
            return v.get("object", "")
        return v or ""

    @property
    def deployable(self) -> bool:
        return self.bytecode not in ("", "0x")


class ContractRegistry:
    """
    Registry of compiled token contracts.

    Artifacts are read from an optional override directory first and from
    the bundled artifacts otherwise.

    Parameters
    ----------
    logger : logging.Logger
        Logger instance
    artifacts_dir : str | None
        Directory with `ERC20.json`, `ERC721.json` and `ERC1155.json`
    """

    def __init__(self, logger: logging.Logger, artifacts_dir: str | None = None):
        self.logger = logger
        self.search_path = [BUNDLED_ARTIFACTS_DIR]
        if artifacts_dir:
            self.search_path.insert(0, Path(artifacts_dir))
        self._artifacts: dict[TokenStandard, ContractArtifact] = {}

    def get(self, standard: TokenStandard) -> ContractArtifact:
        """
        Get the artifact for a token standard.

        Parameters
        ----------
        standard : TokenStandard
            Token standard

        Returns
        -------
        ContractArtifact
            Loaded artifact

        Raises
        ------
        ContractArtifactException
            If no readable artifact exists for the standard
        """
        if standard not in self._artifacts:
            self._artifacts[standard] = self._load(standard)
        return self._artifacts[standard]

    def abi(self, standard: TokenStandard) -> list[dict]:
        return self.get(standard).abi

    def deployable(self, standard: TokenStandard) -> ContractArtifact:
        """
        Get an artifact that carries creation bytecode.

        Raises
        ------
        ContractArtifactException
            If the artifact has no bytecode
        """
        artifact = self.get(standard)
        if not artifact.deployable:
            raise ContractArtifactException(
                f"No bytecode available for {standard.artifact_name}; "
                f"provide {standard.artifact_name}.json in CONTRACT_ARTIFACTS_DIR"
            )
        return artifact

    def _load(self, standard: TokenStandard) -> ContractArtifact:
        for directory in self.search_path:
            path = directory / f"{standard.artifact_name}.json"
            if not path.is_file():
                continue
            try:
                artifact = ContractArtifact(**json.loads(path.read_text(encoding="utf-8")))
            except (ValueError, ValidationError) as e:
                raise ContractArtifactException(f"Invalid contract artifact {path}: {e}") from e
            self.logger.info(
                f"Loaded {standard.artifact_name} artifact from {path} "
                f"({len(artifact.abi)} ABI items, deployable={artifact.deployable})"
            )
            return artifact

        raise ContractArtifactException(f"No artifact found for {standard.artifact_name}")
