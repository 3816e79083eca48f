from dishka import Provider, Scope, provide, FromComponent
from typing import Annotated
from web3 import AsyncWeb3
from chain.client import ChainClient, Signer
from chain.contracts import ContractRegistry
from core.environment.config import Settings
import logging


class ChainProvider(Provider):
    """
    Provider for the chain connection, signing context and contract bindings.
    """

    component = "chain"

    @provide(scope=Scope.APP)
    def get_web3_client(
        self,
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> AsyncWeb3:
        """
        Provide the Web3 client for the configured RPC endpoint.

        Parameters
        ----------
        settings : Settings
            Application settings

        Returns
        -------
        AsyncWeb3
            Web3 client
        """
        return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(settings.sepolia_rpc_url))

    @provide(scope=Scope.APP)
    def get_signer(
        self,
        settings: Annotated[Settings, FromComponent("environment")]
    ) -> Signer:
        """
        Provide the signing context.

        Parameters
        ----------
        settings : Settings
            Application settings

        Returns
        -------
        Signer
            Signer for the configured private key and chain id
        """
        return Signer(
            private_key=settings.wallet_private_key.get_secret_value(),
            chain_id=settings.chain_id
        )

    @provide(scope=Scope.APP)
    def get_contract_registry(
        self,
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> ContractRegistry:
        """
        Provide the compiled contract registry.

        Parameters
        ----------
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Returns
        -------
        ContractRegistry
            Contract registry
        """
        return ContractRegistry(logger=logger, artifacts_dir=settings.contract_artifacts_dir)

    @provide(scope=Scope.APP)
    def get_chain_client(
        self,
        web3: AsyncWeb3,
        signer: Signer,
        registry: ContractRegistry,
        settings: Annotated[Settings, FromComponent("environment")],
        logger: Annotated[logging.Logger, FromComponent("logger")]
    ) -> ChainClient:
        """
        Provide the chain client.

        Parameters
        ----------
        web3 : AsyncWeb3
            Web3 client
        signer : Signer
            Signing context
        registry : ContractRegistry
            Compiled contract registry
        settings : Settings
            Application settings
        logger : logging.Logger
            Logger instance

        Returns
        -------
        ChainClient
            Chain client instance
        """
        return ChainClient(
            web3=web3,
            signer=signer,
            registry=registry,
            logger=logger,
            gas_limit=settings.gas_limit,
            deploy_gas_limit=settings.deploy_gas_limit,
            receipt_timeout=settings.receipt_timeout
        )
