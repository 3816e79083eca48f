from pydantic import BaseModel, ConfigDict


class TokenMetadataEntity(BaseModel):
    """
    Entity representing immutable ERC-20 metadata.

    Attributes
    ----------
    name : str
        Token name
    symbol : str
        Token symbol
    decimals : int
        Token decimals
    """
    name: str
    symbol: str
    decimals: int

    model_config = ConfigDict(from_attributes=True)


class TokenBalanceEntity(BaseModel):
    """
    Entity representing an ERC-20 balance of a wallet.

    Attributes
    ----------
    token_name : str
        Token name
    token_symbol : str
        Token symbol
    contract_address : str
        Token contract address
    balance : str
        Human-readable balance
    """
    token_name: str
    token_symbol: str
    contract_address: str
    balance: str

    model_config = ConfigDict(from_attributes=True)


class TokenDeploymentEntity(BaseModel):
    """
    Entity representing a freshly deployed ERC-20 contract.

    Attributes
    ----------
    token_name : str
        On-chain token name
    token_symbol : str
        On-chain token symbol
    contract_address : str
        Contract address
    total_supply : str
        Human-readable total supply
    transaction_hash : str
        Deployment transaction hash
    """
    token_name: str
    token_symbol: str
    contract_address: str
    total_supply: str
    transaction_hash: str

    model_config = ConfigDict(from_attributes=True)


class NFTItemEntity(BaseModel):
    """
    Entity representing one NFT held by a wallet.

    Attributes
    ----------
    token_id : int
        Token id
    token_uri : str
        Metadata URI
    amount : int
        Held amount (always 1 for ERC-721)
    """
    token_id: int
    token_uri: str
    amount: int

    model_config = ConfigDict(from_attributes=True)


class NFTCollectionEntity(BaseModel):
    """
    Entity representing the NFTs of one collection held by a wallet.

    Attributes
    ----------
    token_name : str
        Collection name
    token_symbol : str
        Collection symbol
    contract_address : str
        Collection contract address
    items : list[NFTItemEntity]
        Held tokens in ascending id order
    skipped : int
        Token ids whose owner, balance or URI could not be read
    """
    token_name: str
    token_symbol: str
    contract_address: str
    items: list[NFTItemEntity]
    skipped: int = 0

    model_config = ConfigDict(from_attributes=True)
