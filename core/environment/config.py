import os
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from web3 import Web3

SEPOLIA_CHAIN_ID = 11155111


class Settings(BaseSettings):
    """
    Application settings using Pydantic Settings.

    Attributes
    ----------
    sepolia_rpc_url : str
        JSON-RPC endpoint of the chain node
    wallet_private_key : SecretStr
        Hex private key used to sign every write transaction
    chain_id : int
        Chain id used for signing (Sepolia by default)
    erc20_contract_address : str | None
        Default ERC-20 contract for mint/burn requests
    erc721_contract_address : str | None
        Default ERC-721 contract for mint/burn requests
    erc1155_contract_address : str | None
        Default ERC-1155 contract for mint/burn requests
    gas_limit : int
        Gas limit for mint/burn transactions
    deploy_gas_limit : int
        Gas limit for contract deployments
    receipt_timeout : float
        Seconds to wait for a deployment receipt
    erc20_default_decimals : int
        Decimals used to scale the initial supply of a new ERC-20
    erc1155_scan_start : int
        First ERC-1155 token id inspected by the balance scan
    erc1155_scan_size : int
        Number of ERC-1155 token ids inspected by the balance scan
    scan_batch_size : int
        Concurrent RPC reads per scan batch
    contract_artifacts_dir : str | None
        Directory with compiled contract artifacts overriding the bundled ones
    redis_host : str
        Redis host for caching
    redis_port : int
        Redis port
    redis_db : int
        Redis database number
    redis_password : str
        Redis password (optional)
    metadata_cache_ttl : int
        Seconds token name/symbol/decimals stay cached
    log_level : str
        Root log level
    """

    sepolia_rpc_url: str
    wallet_private_key: SecretStr
    chain_id: int = SEPOLIA_CHAIN_ID

    erc20_contract_address: str | None = None
    erc721_contract_address: str | None = None
    erc1155_contract_address: str | None = None

    gas_limit: int = 300_000
    deploy_gas_limit: int = 5_000_000
    receipt_timeout: float = 120
    erc20_default_decimals: int = 18

    erc1155_scan_start: int = 0
    erc1155_scan_size: int = 100
    scan_batch_size: int = 20

    contract_artifacts_dir: str | None = None

    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: str = ""
    metadata_cache_ttl: int = 86400

    log_level: str = "INFO"

    @field_validator(
        "erc20_contract_address", "erc721_contract_address", "erc1155_contract_address"
    )
    @classmethod
    def validate_contract_address(cls, v: str | None) -> str | None:
        if not v:
            return None
        if not Web3.is_address(v):
            raise ValueError("Invalid contract address format")
        return Web3.to_checksum_address(v)

    model_config = SettingsConfigDict(
        env_file=os.getenv("ENV_FILE", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    def get_default_contract(self, standard: str) -> str | None:
        """
        Get the pre-deployed contract address for a token standard.

        Parameters
        ----------
        standard : str
            Token standard (erc20, erc721, erc1155)

        Returns
        -------
        str | None
            Configured contract address or None
        """
        defaults = {
            "erc20": self.erc20_contract_address,
            "erc721": self.erc721_contract_address,
            "erc1155": self.erc1155_contract_address
        }
        return defaults.get(standard) or None

    def get_erc1155_scan_range(self) -> range:
        """Token ids inspected by the ERC-1155 balance scan."""
        return range(self.erc1155_scan_start, self.erc1155_scan_start + self.erc1155_scan_size)
