import asyncio
import logging
from typing import Awaitable, Callable

from pydantic import ValidationError
from web3 import Web3
from web3.contract import AsyncContract

from chain.client import ChainClient, DeployedContract
from chain.contracts import TokenStandard
from core.redis.providers import CacheService
from tokens.entities import (
    NFTCollectionEntity,
    NFTItemEntity,
    TokenBalanceEntity,
    TokenDeploymentEntity,
    TokenMetadataEntity
)
from tokens.units import format_amount, from_base_units, to_base_units


class TokenService:
    """
    Service for ERC-20 balance queries, deployment, minting and burning.

    Parameters
    ----------
    chain_client : ChainClient
        Chain client instance
    cache_service : CacheService
        Cache for immutable token metadata
    logger : logging.Logger
        Logger instance
    metadata_ttl : int
        Seconds token metadata stays cached
    default_decimals : int
        Decimals used to scale the initial supply of new tokens
    """

    def __init__(
        self,
        chain_client: ChainClient,
        cache_service: CacheService,
        logger: logging.Logger,
        metadata_ttl: int = 86400,
        default_decimals: int = 18
    ):
        self.chain = chain_client
        self.cache = cache_service
        self.logger = logger
        self.metadata_ttl = metadata_ttl
        self.default_decimals = default_decimals

    def _contract(self, contract_address: str) -> AsyncContract:
        return self.chain.contract(TokenStandard.ERC20, contract_address)

    async def get_metadata(self, contract_address: str) -> TokenMetadataEntity:
        """
        Get token name, symbol and decimals, cached per contract.

        Parameters
        ----------
        contract_address : str
            Token contract address

        Returns
        -------
        TokenMetadataEntity
            Token metadata
        """
        cache_key = f"erc20:metadata:{contract_address.lower()}"

        cached = await self.cache.get(cache_key)
        if cached:
            try:
                return TokenMetadataEntity.model_validate(cached)
            except ValidationError:
                self.logger.debug(f"Ignoring malformed cached metadata for {contract_address}")

        contract = self._contract(contract_address)
        name, symbol, decimals = await asyncio.gather(
            self.chain.call(contract.functions.name()),
            self.chain.call(contract.functions.symbol()),
            self.chain.call(contract.functions.decimals())
        )

        metadata = TokenMetadataEntity(name=name, symbol=symbol, decimals=decimals)
        await self.cache.set(cache_key, metadata.model_dump(), ttl=self.metadata_ttl)
        return metadata

    async def get_details(self, wallet_address: str, contract_address: str) -> TokenBalanceEntity:
        """
        Get the human-readable balance of a wallet.

        Parameters
        ----------
        wallet_address : str
            Wallet address (checksummed)
        contract_address : str
            Token contract address (checksummed)

        Returns
        -------
        TokenBalanceEntity
            Token balance entity
        """
        metadata = await self.get_metadata(contract_address)
        contract = self._contract(contract_address)
        balance = await self.chain.call(contract.functions.balanceOf(wallet_address))

        converted_balance = format_amount(from_base_units(balance, metadata.decimals))
        self.logger.info(
            f"Balance of {wallet_address} in {metadata.symbol} ({contract_address}): {converted_balance}"
        )

        return TokenBalanceEntity(
            token_name=metadata.name,
            token_symbol=metadata.symbol,
            contract_address=contract_address,
            balance=converted_balance
        )

    async def deploy(self, name: str, symbol: str, initial_supply: int) -> TokenDeploymentEntity:
        """
        Deploy a new ERC-20 token and read back its on-chain state.

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
        TokenDeploymentEntity
            Deployed token information
        """
        scaled_supply = to_base_units(initial_supply, self.default_decimals)
        deployed = await self.chain.deploy(TokenStandard.ERC20, name, symbol, scaled_supply)

        metadata = await self.get_metadata(deployed.address)
        contract = self._contract(deployed.address)
        total_supply = await self.chain.call(contract.functions.totalSupply())

        return TokenDeploymentEntity(
            token_name=metadata.name,
            token_symbol=metadata.symbol,
            contract_address=deployed.address,
            total_supply=format_amount(from_base_units(total_supply, metadata.decimals)),
            transaction_hash=deployed.transaction_hash
        )

    async def mint(self, contract_address: str, to: str, amount: int) -> str:
        """
        Mint whole tokens to a recipient.

        Parameters
        ----------
        contract_address : str
            Token contract address
        to : str
            Recipient address
        amount : int
            Amount in whole tokens

        Returns
        -------
        str
            Transaction hash
        """
        metadata = await self.get_metadata(contract_address)
        scaled_amount = to_base_units(amount, metadata.decimals)

        contract = self._contract(contract_address)
        tx_hash = await self.chain.transact(contract.functions.mint(to, scaled_amount))
        self.logger.info(f"Minted ERC20 token: {tx_hash}")
        return tx_hash

    async def burn(self, contract_address: str, amount: int) -> str:
        """
        Burn whole tokens held by the signer.

        Parameters
        ----------
        contract_address : str
            Token contract address
        amount : int
            Amount in whole tokens

        Returns
        -------
        str
            Transaction hash
        """
        metadata = await self.get_metadata(contract_address)
        scaled_amount = to_base_units(amount, metadata.decimals)

        contract = self._contract(contract_address)
        tx_hash = await self.chain.transact(contract.functions.burn(scaled_amount))
        self.logger.info(f"Burned ERC20: {tx_hash}")
        return tx_hash


class NFTService:
    """
    Service for ERC-721 and ERC-1155 collections.

    Holdings are found by scanning token ids, since neither contract
    enumerates tokens per owner. A token whose reads fail is skipped and
    counted rather than failing the whole listing.

    Parameters
    ----------
    chain_client : ChainClient
        Chain client instance
    logger : logging.Logger
        Logger instance
    erc1155_scan_range : range
        Token ids inspected on ERC-1155 collections
    scan_batch_size : int
        Concurrent RPC reads per scan batch
    """

    def __init__(
        self,
        chain_client: ChainClient,
        logger: logging.Logger,
        erc1155_scan_range: range = range(0, 100),
        scan_batch_size: int = 20
    ):
        self.chain = chain_client
        self.logger = logger
        self.erc1155_scan_range = erc1155_scan_range
        self.scan_batch_size = max(scan_batch_size, 1)

    async def _scan(
        self,
        token_ids: range,
        resolve: Callable[[int], Awaitable[NFTItemEntity | None]]
    ) -> tuple[list[NFTItemEntity], int]:
        """
        Resolve token ids in batches, keeping ascending id order.

        Parameters
        ----------
        token_ids : range
            Token ids to inspect
        resolve : Callable[[int], Awaitable[NFTItemEntity | None]]
            Returns the held item or None when the wallet holds nothing

        Returns
        -------
        tuple[list[NFTItemEntity], int]
            Held items and the number of skipped token ids
        """
        items = []
        skipped = 0

        for start in range(0, len(token_ids), self.scan_batch_size):
            batch = token_ids[start:start + self.scan_batch_size]
            results = await asyncio.gather(
                *(resolve(token_id) for token_id in batch),
                return_exceptions=True
            )

            for token_id, result in zip(batch, results):
                if isinstance(result, BaseException):
                    skipped += 1
                    self.logger.warning(f"Skipping token {token_id}: {result}")
                    continue
                if result is not None:
                    items.append(result)

        return items, skipped

    async def get_erc721_details(self, wallet_address: str, contract_address: str) -> NFTCollectionEntity:
        """
        List the ERC-721 tokens owned by a wallet.

        Every id from 1 to the contract's current token id is checked.

        Parameters
        ----------
        wallet_address : str
            Wallet address (checksummed)
        contract_address : str
            Collection contract address (checksummed)

        Returns
        -------
        NFTCollectionEntity
            Owned tokens
        """
        contract = self.chain.contract(TokenStandard.ERC721, contract_address)

        name, symbol, current_token_id = await asyncio.gather(
            self.chain.call(contract.functions.name()),
            self.chain.call(contract.functions.symbol()),
            self.chain.call(contract.functions.getCurrentTokenId())
        )

        async def resolve(token_id: int) -> NFTItemEntity | None:
            owner = await self.chain.call(contract.functions.ownerOf(token_id))
            if Web3.to_checksum_address(owner) != wallet_address:
                return None
            token_uri = await self.chain.call(contract.functions.tokenURI(token_id))
            return NFTItemEntity(token_id=token_id, token_uri=token_uri, amount=1)

        items, skipped = await self._scan(range(1, current_token_id + 1), resolve)
        self.logger.info(
            f"{wallet_address} owns {len(items)} of {current_token_id} {symbol} tokens "
            f"({skipped} skipped)"
        )

        return NFTCollectionEntity(
            token_name=name,
            token_symbol=symbol,
            contract_address=contract_address,
            items=items,
            skipped=skipped
        )

    async def get_erc1155_details(self, wallet_address: str, contract_address: str) -> NFTCollectionEntity:
        """
        List the ERC-1155 tokens held by a wallet within the scan range.

        Token ids outside the configured range are never inspected.

        Parameters
        ----------
        wallet_address : str
            Wallet address (checksummed)
        contract_address : str
            Collection contract address (checksummed)

        Returns
        -------
        NFTCollectionEntity
            Held tokens with amounts
        """
        contract = self.chain.contract(TokenStandard.ERC1155, contract_address)

        name, symbol = await asyncio.gather(
            self.chain.call(contract.functions.name()),
            self.chain.call(contract.functions.symbol())
        )

        async def resolve(token_id: int) -> NFTItemEntity | None:
            balance = await self.chain.call(contract.functions.balanceOf(wallet_address, token_id))
            if balance <= 0:
                return None
            token_uri = await self.chain.call(contract.functions.uri(token_id))
            return NFTItemEntity(token_id=token_id, token_uri=token_uri, amount=balance)

        items, skipped = await self._scan(self.erc1155_scan_range, resolve)
        self.logger.info(
            f"{wallet_address} holds {len(items)} {symbol} token ids "
            f"in [{self.erc1155_scan_range.start}, {self.erc1155_scan_range.stop}) ({skipped} skipped)"
        )

        return NFTCollectionEntity(
            token_name=name,
            token_symbol=symbol,
            contract_address=contract_address,
            items=items,
            skipped=skipped
        )

    async def deploy_erc721(self, name: str, symbol: str) -> DeployedContract:
        return await self.chain.deploy(TokenStandard.ERC721, name, symbol)

    async def deploy_erc1155(self, name: str, symbol: str) -> DeployedContract:
        return await self.chain.deploy(TokenStandard.ERC1155, name, symbol)

    async def mint_erc721(self, contract_address: str, token_uri: str) -> str:
        """Mint the next ERC-721 token to the signer."""
        contract = self.chain.contract(TokenStandard.ERC721, contract_address)
        tx_hash = await self.chain.transact(contract.functions.mintNFT(token_uri))
        self.logger.info(f"Minted ERC721 NFT with tx: {tx_hash}")
        return tx_hash

    async def burn_erc721(self, contract_address: str, token_id: int) -> str:
        contract = self.chain.contract(TokenStandard.ERC721, contract_address)
        tx_hash = await self.chain.transact(contract.functions.burnNFT(token_id))
        self.logger.info(f"Burned ERC721 token {token_id}: {tx_hash}")
        return tx_hash

    async def mint_erc1155(self, contract_address: str, to: str, amount: int, token_uri: str) -> str:
        """Mint copies of a new ERC-1155 token id to a recipient."""
        contract = self.chain.contract(TokenStandard.ERC1155, contract_address)
        tx_hash = await self.chain.transact(contract.functions.mint(to, amount, token_uri))
        self.logger.info(f"Minted ERC1155 with tx: {tx_hash}")
        return tx_hash

    async def burn_erc1155(self, contract_address: str, token_id: int, amount: int) -> str:
        """Burn copies of an ERC-1155 token held by the signer."""
        contract = self.chain.contract(TokenStandard.ERC1155, contract_address)
        tx_hash = await self.chain.transact(
            contract.functions.burn(self.chain.sender, token_id, amount)
        )
        self.logger.info(f"Burned ERC1155 token {token_id}: {tx_hash}")
        return tx_hash
