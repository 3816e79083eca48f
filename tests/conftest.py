import json
import logging
import os
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from dishka import Provider, Scope, make_async_container, provide
from dishka.integrations.fastapi import FastapiProvider
from httpx import AsyncClient, ASGITransport
from redis.asyncio import Redis

from chain.client import ChainClient, Signer
from chain.contracts import ContractRegistry, TokenStandard
from core.environment.config import Settings
from core.logging.providers import LoggerProvider
from core.redis.providers import CacheProvider, CacheService
from tokens.providers import TokensProvider


TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"
TEST_RPC_URL = "http://localhost:8545"
WALLET = "0x1111111111111111111111111111111111111111"
OTHER_WALLET = "0x2222222222222222222222222222222222222222"
ERC20_ADDRESS = "0x3333333333333333333333333333333333333333"
ERC721_ADDRESS = "0x4444444444444444444444444444444444444444"
ERC1155_ADDRESS = "0x5555555555555555555555555555555555555555"
DEPLOYED_ADDRESS = "0x6666666666666666666666666666666666666666"
TX_HASH_BYTES = bytes.fromhex("ab" * 32)
TX_HASH = "0x" + "ab" * 32

# Keep Settings() away from a developer .env
os.environ['SEPOLIA_RPC_URL'] = TEST_RPC_URL
os.environ['WALLET_PRIVATE_KEY'] = TEST_PRIVATE_KEY
os.environ['REDIS_HOST'] = 'localhost'
os.environ['REDIS_PORT'] = '6379'
os.environ['REDIS_DB'] = '0'
os.environ['REDIS_PASSWORD'] = ''  # No password for mock


class FakeFunction:
    """Bound contract function recording how it was used."""

    def __init__(self, contract, name, args, handler):
        self.contract = contract
        self.name = name
        self.args = args
        self.handler = handler

    async def call(self):
        self.contract.calls.append((self.name, self.args))
        result = self.handler(*self.args) if callable(self.handler) else self.handler
        if isinstance(result, Exception):
            raise result
        return result

    async def build_transaction(self, params):
        self.contract.transactions.append((self.name, self.args, params))
        return {**params, "to": self.contract.address, "data": "0x"}


class FakeFunctions:
    def __init__(self, contract):
        self._contract = contract

    def __getattr__(self, name):
        def bind(*args):
            return FakeFunction(self._contract, name, args, self._contract.handlers.get(name))
        return bind


class FakeContract:
    """
    Contract binding answering calls from plain values or callables.

    A handler may be a value, an exception instance, or a callable taking
    the call arguments and returning either.
    """

    def __init__(self, address: str, **handlers):
        self.address = address
        self.handlers = handlers
        self.calls = []
        self.transactions = []
        self.functions = FakeFunctions(self)

    def constructor(self, *args):
        return FakeFunction(self, "constructor", args, None)


class FakeEth:
    """Stand-in for `AsyncWeb3.eth` with registered contracts."""

    def __init__(self):
        self.contracts: dict[str, FakeContract] = {}
        self.factories: list[FakeContract] = []
        self.chain_id_value = 11155111
        self.gas_price_value = 2_000_000_000
        self.get_transaction_count = AsyncMock(return_value=0)
        self.send_raw_transaction = AsyncMock(return_value=TX_HASH_BYTES)
        self.wait_for_transaction_receipt = AsyncMock(
            return_value={"status": 1, "contractAddress": DEPLOYED_ADDRESS}
        )

    @property
    async def gas_price(self):
        return self.gas_price_value

    @property
    async def chain_id(self):
        return self.chain_id_value

    def contract(self, address=None, abi=None, bytecode=None):
        if bytecode is not None:
            factory = FakeContract(DEPLOYED_ADDRESS)
            self.factories.append(factory)
            return factory
        return self.contracts[address]

    def add_contract(self, address: str, **handlers) -> FakeContract:
        contract = FakeContract(address, **handlers)
        self.contracts[address] = contract
        return contract


class FakeEnvironmentProvider(Provider):
    component = "environment"

    def __init__(self, settings):
        super().__init__()
        self.settings = settings

    @provide(scope=Scope.APP)
    def get_environment(self) -> Settings:
        return self.settings


class FakeRedisProvider(Provider):
    component = "redis"

    def __init__(self, redis_client):
        super().__init__()
        self.redis_client = redis_client

    @provide(scope=Scope.APP)
    def get_redis(self) -> Redis:
        return self.redis_client


class FakeChainProvider(Provider):
    component = "chain"

    def __init__(self, chain_client):
        super().__init__()
        self.chain_client = chain_client

    @provide(scope=Scope.APP)
    def get_chain_client(self) -> ChainClient:
        return self.chain_client

    @provide(scope=Scope.APP)
    def get_contract_registry(self) -> ContractRegistry:
        return self.chain_client.registry


@pytest.fixture
def logger():
    return logging.getLogger("tokenhub_api.tests")


@pytest.fixture
def settings():
    """Settings independent of the developer's environment."""
    return Settings(
        _env_file=None,
        sepolia_rpc_url=TEST_RPC_URL,
        wallet_private_key=TEST_PRIVATE_KEY
    )


@pytest.fixture
def mock_redis():
    """Mock Redis client for testing."""
    mock = AsyncMock()
    mock.ping = AsyncMock(return_value=True)
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.aclose = AsyncMock()
    return mock


@pytest.fixture
def cache_service(mock_redis, logger):
    return CacheService(mock_redis, logger)


@pytest.fixture
def fake_eth():
    return FakeEth()


@pytest.fixture
def signer():
    return Signer(private_key=TEST_PRIVATE_KEY, chain_id=11155111)


@pytest.fixture
def chain_client(fake_eth, signer, logger):
    """
    Real chain client over a fake node.

    Parameters
    ----------
    fake_eth : FakeEth
        Fake `eth` namespace
    signer : Signer
        Signer with the test key

    Returns
    -------
    ChainClient
        Chain client instance
    """
    web3 = SimpleNamespace(eth=fake_eth, is_connected=AsyncMock(return_value=True))
    return ChainClient(
        web3=web3,
        signer=signer,
        registry=ContractRegistry(logger=logger),
        logger=logger
    )


@pytest.fixture
def erc20_contract(fake_eth):
    return fake_eth.add_contract(
        ERC20_ADDRESS,
        name="Test Token",
        symbol="TT",
        decimals=18,
        totalSupply=1_000 * 10 ** 18,
        balanceOf=lambda wallet: 1_500_000_000_000_000_000 if wallet == WALLET else 0
    )


@pytest.fixture
def erc721_contract(fake_eth):
    owners = {1: WALLET, 2: OTHER_WALLET, 3: WALLET}
    return fake_eth.add_contract(
        ERC721_ADDRESS,
        name="Test NFT",
        symbol="TNFT",
        getCurrentTokenId=3,
        ownerOf=lambda token_id: owners[token_id],
        tokenURI=lambda token_id: f"ipfs://nft/{token_id}"
    )


@pytest.fixture
def erc1155_contract(fake_eth):
    balances = {0: 5, 7: 1, 99: 2, 150: 9}
    return fake_eth.add_contract(
        ERC1155_ADDRESS,
        name="Test Multi",
        symbol="TMT",
        balanceOf=lambda wallet, token_id: balances.get(token_id, 0) if wallet == WALLET else 0,
        uri=lambda token_id: f"ipfs://multi/{token_id}"
    )


@pytest_asyncio.fixture
async def client(settings, mock_redis, chain_client):
    """
    Fixture for async test client with mocked Redis and chain node.

    Parameters
    ----------
    settings : Settings
        Test settings
    mock_redis : AsyncMock
        Mocked Redis client
    chain_client : ChainClient
        Chain client over the fake node

    Yields
    ------
    AsyncClient
        Async HTTP client for testing
    """
    from main import create_app

    container = make_async_container(
        FastapiProvider(),
        FakeEnvironmentProvider(settings),
        LoggerProvider(),
        FakeRedisProvider(mock_redis),
        CacheProvider(),
        FakeChainProvider(chain_client),
        TokensProvider()
    )
    app = create_app(container)

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    await container.close()


@pytest.fixture
def deployable_registry(tmp_path, logger):
    """
    Registry whose ERC-20 and ERC-1155 artifacts carry creation bytecode.

    Parameters
    ----------
    tmp_path : Path
        Pytest temporary directory used as the override directory
    logger : logging.Logger
        Logger instance

    Returns
    -------
    ContractRegistry
        Registry reading the override directory first
    """
    bundled = ContractRegistry(logger=logger)
    for standard in (TokenStandard.ERC20, TokenStandard.ERC1155):
        artifact = {
            "contractName": standard.artifact_name,
            "abi": bundled.abi(standard),
            "bytecode": {"object": "0x6080604052"}
        }
        (tmp_path / f"{standard.artifact_name}.json").write_text(json.dumps(artifact))
    return ContractRegistry(logger=logger, artifacts_dir=str(tmp_path))
