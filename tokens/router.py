from fastapi import APIRouter, Query
from dishka.integrations.fastapi import inject
from dishka import FromComponent
from typing import Annotated
from tokens.schemas import (
    BurnERC1155Request,
    BurnERC20Request,
    BurnERC721Request,
    DeployERC20Request,
    DeployNFTRequest,
    ERC20BalanceResponse,
    ERC20DeployResponse,
    MintERC1155Request,
    MintERC20Request,
    MintERC721Request,
    NFTBalanceResponse,
    NFTDeployResponse,
    TransactionResponse
)
from tokens.usecases import (
    BurnTokenUseCase,
    DeployTokenUseCase,
    GetBalanceUseCase,
    MintTokenUseCase
)
from tokens.validators import EthAddress

router = APIRouter(
    prefix="/api",
    tags=["Tokens"]
)

WalletAddress = Annotated[
    EthAddress, Query(alias="walletAddress", description="Wallet to inspect")
]
ContractAddress = Annotated[
    EthAddress, Query(alias="contractAddress", description="Token contract address")
]


@router.get("/balance/erc20", response_model=ERC20BalanceResponse)
@inject
async def get_erc20_balance(
    wallet_address: WalletAddress,
    contract_address: ContractAddress,
    use_case: Annotated[GetBalanceUseCase, FromComponent("tokens")]
) -> ERC20BalanceResponse:
    """
    Get ERC-20 balance of a wallet.

    Parameters
    ----------
    wallet_address : str
        Wallet address
    contract_address : str
        Token contract address
    use_case : GetBalanceUseCase
        Use case for reading balances

    Returns
    -------
    ERC20BalanceResponse
        Token name, symbol, contract and human-readable balance
    """
    return await use_case.erc20(wallet_address, contract_address)


@router.get("/balance/erc721", response_model=NFTBalanceResponse)
@inject
async def get_erc721_balance(
    wallet_address: WalletAddress,
    contract_address: ContractAddress,
    use_case: Annotated[GetBalanceUseCase, FromComponent("tokens")]
) -> NFTBalanceResponse:
    """
    List ERC-721 tokens owned by a wallet.

    Returns
    -------
    NFTBalanceResponse
        Owned token ids with their metadata URIs
    """
    return await use_case.erc721(wallet_address, contract_address)


@router.get("/balance/erc1155", response_model=NFTBalanceResponse)
@inject
async def get_erc1155_balance(
    wallet_address: WalletAddress,
    contract_address: ContractAddress,
    use_case: Annotated[GetBalanceUseCase, FromComponent("tokens")]
) -> NFTBalanceResponse:
    """
    List ERC-1155 tokens held by a wallet.

    Returns
    -------
    NFTBalanceResponse
        Held token ids with amounts and metadata URIs
    """
    return await use_case.erc1155(wallet_address, contract_address)


@router.post("/deploy/erc20", response_model=ERC20DeployResponse)
@inject
async def deploy_erc20(
    request: DeployERC20Request,
    use_case: Annotated[DeployTokenUseCase, FromComponent("tokens")]
) -> ERC20DeployResponse:
    """
    Deploy an ERC-20 token with an initial supply.

    Parameters
    ----------
    request : DeployERC20Request
        Name, symbol and initial supply in whole tokens
    use_case : DeployTokenUseCase
        Use case for deployments

    Returns
    -------
    ERC20DeployResponse
        Deployed token information
    """
    return await use_case.erc20(
        name=request.token_name,
        symbol=request.token_symbol,
        initial_supply=request.initial_supply
    )


@router.post("/deploy/erc721", response_model=NFTDeployResponse)
@inject
async def deploy_erc721(
    request: DeployNFTRequest,
    use_case: Annotated[DeployTokenUseCase, FromComponent("tokens")]
) -> NFTDeployResponse:
    return await use_case.erc721(name=request.token_name, symbol=request.token_symbol)


@router.post("/deploy/erc1155", response_model=NFTDeployResponse)
@inject
async def deploy_erc1155(
    request: DeployNFTRequest,
    use_case: Annotated[DeployTokenUseCase, FromComponent("tokens")]
) -> NFTDeployResponse:
    return await use_case.erc1155(name=request.token_name, symbol=request.token_symbol)


@router.post("/mint/erc20", response_model=TransactionResponse)
@inject
async def mint_erc20(
    request: MintERC20Request,
    use_case: Annotated[MintTokenUseCase, FromComponent("tokens")]
) -> TransactionResponse:
    """
    Mint ERC-20 tokens to a recipient.

    Parameters
    ----------
    request : MintERC20Request
        Contract, recipient and amount in whole tokens
    use_case : MintTokenUseCase
        Use case for minting

    Returns
    -------
    TransactionResponse
        Submitted transaction hash
    """
    return await use_case.erc20(
        contract_address=request.contract_address,
        to=request.to,
        amount=request.amount
    )


@router.post("/mint/erc721", response_model=TransactionResponse)
@inject
async def mint_erc721(
    request: MintERC721Request,
    use_case: Annotated[MintTokenUseCase, FromComponent("tokens")]
) -> TransactionResponse:
    return await use_case.erc721(
        contract_address=request.contract_address,
        token_uri=request.token_uri
    )


@router.post("/mint/erc1155", response_model=TransactionResponse)
@inject
async def mint_erc1155(
    request: MintERC1155Request,
    use_case: Annotated[MintTokenUseCase, FromComponent("tokens")]
) -> TransactionResponse:
    return await use_case.erc1155(
        contract_address=request.contract_address,
        to=request.to,
        amount=request.amount,
        token_uri=request.token_uri
    )


@router.post("/burn/erc20", response_model=TransactionResponse)
@inject
async def burn_erc20(
    request: BurnERC20Request,
    use_case: Annotated[BurnTokenUseCase, FromComponent("tokens")]
) -> TransactionResponse:
    """
    Burn ERC-20 tokens held by the service wallet.

    Parameters
    ----------
    request : BurnERC20Request
        Contract and amount in whole tokens
    use_case : BurnTokenUseCase
        Use case for burning

    Returns
    -------
    TransactionResponse
        Submitted transaction hash
    """
    return await use_case.erc20(
        contract_address=request.contract_address,
        amount=request.amount
    )


@router.post("/burn/erc721", response_model=TransactionResponse)
@inject
async def burn_erc721(
    request: BurnERC721Request,
    use_case: Annotated[BurnTokenUseCase, FromComponent("tokens")]
) -> TransactionResponse:
    return await use_case.erc721(
        contract_address=request.contract_address,
        token_id=request.token_id
    )


@router.post("/burn/erc1155", response_model=TransactionResponse)
@inject
async def burn_erc1155(
    request: BurnERC1155Request,
    use_case: Annotated[BurnTokenUseCase, FromComponent("tokens")]
) -> TransactionResponse:
    return await use_case.erc1155(
        contract_address=request.contract_address,
        token_id=request.token_id,
        amount=request.amount
    )
