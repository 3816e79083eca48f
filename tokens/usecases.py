from chain.contracts import TokenStandard
from core.environment.config import Settings
from core.exceptions import MissingContractAddressException
from tokens.entities import NFTCollectionEntity
from tokens.schemas import (
    ERC20BalanceResponse,
    ERC20DeployResponse,
    NFTBalanceResponse,
    NFTDeployResponse,
    NFTItemResponse,
    TransactionResponse
)
from tokens.services import NFTService, TokenService


def _to_nft_balance_response(collection: NFTCollectionEntity) -> NFTBalanceResponse:
    return NFTBalanceResponse(
        token_name=collection.token_name,
        token_symbol=collection.token_symbol,
        address=collection.contract_address,
        total_tokens=str(len(collection.items)),
        nft_items=[
            NFTItemResponse(
                token_id=str(item.token_id),
                token_uri=item.token_uri,
                amount=str(item.amount)
            )
            for item in collection.items
        ],
        skipped_tokens=collection.skipped
    )


class GetBalanceUseCase:
    """
    Use case for reading token holdings of a wallet.

    Parameters
    ----------
    token_service : TokenService
        ERC-20 service
    nft_service : NFTService
        ERC-721/ERC-1155 service
    """

    def __init__(self, token_service: TokenService, nft_service: NFTService):
        self.token_service = token_service
        self.nft_service = nft_service

    async def erc20(self, wallet_address: str, contract_address: str) -> ERC20BalanceResponse:
        """
        Get ERC-20 balance.

        Parameters
        ----------
        wallet_address : str
            Wallet address
        contract_address : str
            Token contract address

        Returns
        -------
        ERC20BalanceResponse
            Balance response
        """
        balance = await self.token_service.get_details(wallet_address, contract_address)
        return ERC20BalanceResponse(
            token_name=balance.token_name,
            token_symbol=balance.token_symbol,
            address=balance.contract_address,
            balance=balance.balance
        )

    async def erc721(self, wallet_address: str, contract_address: str) -> NFTBalanceResponse:
        collection = await self.nft_service.get_erc721_details(wallet_address, contract_address)
        return _to_nft_balance_response(collection)

    async def erc1155(self, wallet_address: str, contract_address: str) -> NFTBalanceResponse:
        collection = await self.nft_service.get_erc1155_details(wallet_address, contract_address)
        return _to_nft_balance_response(collection)


class DeployTokenUseCase:
    """
    Use case for deploying token contracts.

    Parameters
    ----------
    token_service : TokenService
        ERC-20 service
    nft_service : NFTService
        ERC-721/ERC-1155 service
    """

    def __init__(self, token_service: TokenService, nft_service: NFTService):
        self.token_service = token_service
        self.nft_service = nft_service

    async def erc20(self, name: str, symbol: str, initial_supply: int) -> ERC20DeployResponse:
        """
        Deploy an ERC-20 token.

        Parameters
        ----------
        name : str
            Token name
        symbol : str
            Token symbol
        initial_supply : int
            Initial supply in whole tokens

        Returns
        -------
        ERC20DeployResponse
            Deployed token information
        """
        deployment = await self.token_service.deploy(name, symbol, initial_supply)
        return ERC20DeployResponse(
            token_name=deployment.token_name,
            token_symbol=deployment.token_symbol,
            address=deployment.contract_address,
            total_supply=deployment.total_supply,
            transaction_hash=deployment.transaction_hash
        )

    async def erc721(self, name: str, symbol: str) -> NFTDeployResponse:
        deployed = await self.nft_service.deploy_erc721(name, symbol)
        return NFTDeployResponse(
            contract_address=deployed.address,
            transaction_hash=deployed.transaction_hash
        )

    async def erc1155(self, name: str, symbol: str) -> NFTDeployResponse:
        deployed = await self.nft_service.deploy_erc1155(name, symbol)
        return NFTDeployResponse(
            contract_address=deployed.address,
            transaction_hash=deployed.transaction_hash
        )


class TransactTokenUseCase:
    """
    Base for use cases that submit a transaction to an existing contract.

    Parameters
    ----------
    token_service : TokenService
        ERC-20 service
    nft_service : NFTService
        ERC-721/ERC-1155 service
    settings : Settings
        Application settings holding the default contracts
    """

    def __init__(self, token_service: TokenService, nft_service: NFTService, settings: Settings):
        self.token_service = token_service
        self.nft_service = nft_service
        self.settings = settings

    def _resolve_contract(self, standard: TokenStandard, contract_address: str | None) -> str:
        """
        Pick the requested contract or the configured default.

        Raises
        ------
        MissingContractAddressException
            If neither is available
        """
        if contract_address:
            return contract_address
        default = self.settings.get_default_contract(standard.value)
        if not default:
            raise MissingContractAddressException("contractAddress is required")
        return default


class MintTokenUseCase(TransactTokenUseCase):
    """Use case for minting tokens."""

    async def erc20(self, contract_address: str | None, to: str, amount: int) -> TransactionResponse:
        contract = self._resolve_contract(TokenStandard.ERC20, contract_address)
        tx_hash = await self.token_service.mint(contract, to, amount)
        return TransactionResponse(transaction_hash=tx_hash, status="minted")

    async def erc721(self, contract_address: str | None, token_uri: str) -> TransactionResponse:
        contract = self._resolve_contract(TokenStandard.ERC721, contract_address)
        tx_hash = await self.nft_service.mint_erc721(contract, token_uri)
        return TransactionResponse(transaction_hash=tx_hash, status="minted")

    async def erc1155(
        self,
        contract_address: str | None,
        to: str,
        amount: int,
        token_uri: str
    ) -> TransactionResponse:
        contract = self._resolve_contract(TokenStandard.ERC1155, contract_address)
        tx_hash = await self.nft_service.mint_erc1155(contract, to, amount, token_uri)
        return TransactionResponse(transaction_hash=tx_hash, status="minted")


class BurnTokenUseCase(TransactTokenUseCase):
    """Use case for burning tokens held by the signer."""

    async def erc20(self, contract_address: str | None, amount: int) -> TransactionResponse:
        contract = self._resolve_contract(TokenStandard.ERC20, contract_address)
        tx_hash = await self.token_service.burn(contract, amount)
        return TransactionResponse(transaction_hash=tx_hash, status="burned")

    async def erc721(self, contract_address: str | None, token_id: int) -> TransactionResponse:
        contract = self._resolve_contract(TokenStandard.ERC721, contract_address)
        tx_hash = await self.nft_service.burn_erc721(contract, token_id)
        return TransactionResponse(transaction_hash=tx_hash, status="burned")

    async def erc1155(self, contract_address: str | None, token_id: int, amount: int) -> TransactionResponse:
        contract = self._resolve_contract(TokenStandard.ERC1155, contract_address)
        tx_hash = await self.nft_service.burn_erc1155(contract, token_id, amount)
        return TransactionResponse(transaction_hash=tx_hash, status="burned")
