from dishka import Provider, Scope, provide, FromComponent
from typing import Annotated
from chain.client import ChainClient
from core.environment.config import Settings
from core.redis.providers import CacheService
from tokens.services import NFTService, TokenService
from tokens.usecases import (
    BurnTokenUseCase,
    DeployTokenUseCase,
    GetBalanceUseCase,
    MintTokenUseCase
)
import logging


class TokensProvider(Provider):
    """
    Provider for token services and use cases.
    """

    component = "tokens"

    @provide(scope=Scope.APP)
    def get_token_service(
        self,
        chain_client: Annotated[ChainClient, FromComponent("chain")],
        cache_service: Annotated[CacheService, FromComponent("cache")],
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> TokenService:
        """
        Provide ERC-20 service.

        Parameters
        ----------
        chain_client : ChainClient
            Chain client instance
        cache_service : CacheService
            Cache service for token metadata
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Returns
        -------
        TokenService
            ERC-20 service instance
        """
        return TokenService(
            chain_client=chain_client,
            cache_service=cache_service,
            logger=logger,
            metadata_ttl=settings.metadata_cache_ttl,
            default_decimals=settings.erc20_default_decimals
        )

    @provide(scope=Scope.APP)
    def get_nft_service(
        self,
        chain_client: Annotated[ChainClient, FromComponent("chain")],
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> NFTService:
        """
        Provide NFT service.

        Parameters
        ----------
        chain_client : ChainClient
            Chain client instance
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Returns
        -------
        NFTService
            NFT service instance
        """
        return NFTService(
            chain_client=chain_client,
            logger=logger,
            erc1155_scan_range=settings.get_erc1155_scan_range(),
            scan_batch_size=settings.scan_batch_size
        )

    @provide(scope=Scope.REQUEST)
    def get_balance_use_case(
        self,
        token_service: TokenService,
        nft_service: NFTService
    ) -> GetBalanceUseCase:
        return GetBalanceUseCase(token_service=token_service, nft_service=nft_service)

    @provide(scope=Scope.REQUEST)
    def get_deploy_use_case(
        self,
        token_service: TokenService,
        nft_service: NFTService
    ) -> DeployTokenUseCase:
        return DeployTokenUseCase(token_service=token_service, nft_service=nft_service)

    @provide(scope=Scope.REQUEST)
    def get_mint_use_case(
        self,
        token_service: TokenService,
        nft_service: NFTService,
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> MintTokenUseCase:
        return MintTokenUseCase(
            token_service=token_service,
            nft_service=nft_service,
            settings=settings
        )

    @provide(scope=Scope.REQUEST)
    def get_burn_use_case(
        self,
        token_service: TokenService,
        nft_service: NFTService,
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> BurnTokenUseCase:
        return BurnTokenUseCase(
            token_service=token_service,
            nft_service=nft_service,
            settings=settings
        )
