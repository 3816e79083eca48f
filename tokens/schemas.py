from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Literal

from tokens.validators import Amount, EthAddress, TokenId


class CamelModel(BaseModel):
    """Base schema exchanged with clients in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True
    )


class DeployERC20Request(CamelModel):
    """
    Request schema for deploying an ERC-20 token.

    Attributes
    ----------
    token_name : str
        Token name
    token_symbol : str
        Token symbol
    initial_supply : int
        Initial supply in whole tokens, minted to the deployer
    """
    token_name: str = Field(..., min_length=1, description="Token name")
    token_symbol: str = Field(..., min_length=1, description="Token symbol")
    initial_supply: Amount = Field(..., description="Initial supply in whole tokens")


class DeployNFTRequest(CamelModel):
    """
    Request schema for deploying an ERC-721 or ERC-1155 collection.

    Attributes
    ----------
    token_name : str
        Collection name
    token_symbol : str
        Collection symbol
    """
    token_name: str = Field(..., min_length=1, description="Collection name")
    token_symbol: str = Field(..., min_length=1, description="Collection symbol")


class MintERC20Request(CamelModel):
    """
    Request schema for minting ERC-20 tokens.

    Attributes
    ----------
    contract_address : str | None
        Token contract, defaults to the configured ERC-20 contract
    to : str
        Recipient address
    amount : int
        Amount in whole tokens
    """
    contract_address: EthAddress | None = None
    to: EthAddress
    amount: Amount


class MintERC721Request(CamelModel):
    """
    Request schema for minting an ERC-721 token to the signer.

    Attributes
    ----------
    contract_address : str | None
        Collection contract, defaults to the configured ERC-721 contract
    token_uri : str
        Metadata URI of the new token
    """
    contract_address: EthAddress | None = None
    token_uri: str = Field(..., alias="tokenURI")


class MintERC1155Request(CamelModel):
    """
    Request schema for minting ERC-1155 tokens.

    Attributes
    ----------
    contract_address : str | None
        Collection contract, defaults to the configured ERC-1155 contract
    to : str
        Recipient address
    amount : int
        Number of copies
    token_uri : str
        Metadata URI of the new token
    """
    contract_address: EthAddress | None = None
    to: EthAddress
    amount: Amount
    token_uri: str = Field(..., alias="tokenURI")


class BurnERC20Request(CamelModel):
    """Request schema for burning the signer's ERC-20 tokens."""
    contract_address: EthAddress | None = None
    amount: Amount


class BurnERC721Request(CamelModel):
    """Request schema for burning an ERC-721 token."""
    contract_address: EthAddress | None = None
    token_id: TokenId


class BurnERC1155Request(CamelModel):
    """Request schema for burning the signer's ERC-1155 tokens."""
    contract_address: EthAddress | None = None
    token_id: TokenId
    amount: Amount


class ERC20BalanceResponse(CamelModel):
    """
    Response schema for ERC-20 balance query.

    Attributes
    ----------
    token_name : str
        Token name
    token_symbol : str
        Token symbol
    address : str
        Token contract address
    balance : str
        Human-readable balance
    """
    token_name: str
    token_symbol: str
    address: str
    balance: str


class NFTItemResponse(CamelModel):
    """
    Response schema for a single held NFT.

    Attributes
    ----------
    token_id : str
        Token id
    token_uri : str
        Metadata URI
    amount : str
        Held amount
    """
    token_id: str
    token_uri: str = Field(..., alias="tokenURI")
    amount: str


class NFTBalanceResponse(CamelModel):
    """
    Response schema for ERC-721 and ERC-1155 balance queries.

    Attributes
    ----------
    token_name : str
        Collection name
    token_symbol : str
        Collection symbol
    address : str
        Collection contract address
    total_tokens : str
        Number of listed items
    nft_items : list[NFTItemResponse]
        Held tokens in ascending id order
    skipped_tokens : int
        Token ids left out because a read failed
    """
    token_name: str
    token_symbol: str
    address: str
    total_tokens: str
    nft_items: list[NFTItemResponse]
    skipped_tokens: int = 0


class ERC20DeployResponse(CamelModel):
    """
    Response schema for ERC-20 deployment.

    Attributes
    ----------
    token_name : str
        On-chain token name
    token_symbol : str
        On-chain token symbol
    address : str
        Contract address
    total_supply : str
        Human-readable total supply
    transaction_hash : str
        Deployment transaction hash
    """
    token_name: str
    token_symbol: str
    address: str
    total_supply: str
    transaction_hash: str


class NFTDeployResponse(CamelModel):
    """Response schema for ERC-721 and ERC-1155 deployment."""
    contract_address: str
    transaction_hash: str


class TransactionResponse(CamelModel):
    """
    Response schema for mint and burn requests.

    Attributes
    ----------
    transaction_hash : str
        Submitted transaction hash
    status : Literal["minted", "burned"]
        Performed action
    """
    transaction_hash: str
    status: Literal["minted", "burned"]
