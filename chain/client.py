import asyncio
import logging
from typing import Any

from eth_account import Account
from eth_account.signers.local import LocalAccount
from pydantic import BaseModel
from web3 import AsyncWeb3, Web3
from web3.contract import AsyncContract

from chain.contracts import ContractRegistry, TokenStandard
from core.exceptions import BaseCustomException, RPCException, TransactionFailedException


class Signer:
    """
    Signing context for write transactions.

    Only the key and chain id are held here. The nonce is fetched from the
    node for every transaction while `lock` is held, so concurrent writes
    from the same key are serialized instead of racing on a cached nonce.

    Parameters
    ----------
    private_key : str
        Hex private key, with or without 0x prefix
    chain_id : int
        Chain id included in every signature

    Raises
    ------
    ValueError
        If the private key is malformed
    """

    def __init__(self, private_key: str, chain_id: int):
        self.account: LocalAccount = Account.from_key(private_key)
        self.chain_id = chain_id
        self.lock = asyncio.Lock()

    @property
    def address(self) -> str:
        return self.account.address

    def sign(self, transaction: dict) -> bytes:
        """
        Sign a fully built transaction.

        Parameters
        ----------
        transaction : dict
            Transaction fields including nonce, gas and chainId

        Returns
        -------
        bytes
            Raw signed transaction ready for eth_sendRawTransaction
        """
        return self.account.sign_transaction(transaction).raw_transaction


class DeployedContract(BaseModel):
    """
    Result of a mined contract deployment.

    Attributes
    ----------
    address : str
        Checksummed contract address
    transaction_hash : str
        Deployment transaction hash
    """
    address: str
    transaction_hash: str


class ChainClient:
    """
    Client for reading token contracts and submitting signed transactions.

    Parameters
    ----------
    web3 : AsyncWeb3
        Web3 client connected to the chain node
    signer : Signer
        Signing context for write transactions
    registry : ContractRegistry
        Compiled token contracts
    logger : logging.Logger
        Logger instance
    gas_limit : int
        Gas limit for contract calls
    deploy_gas_limit : int
        Gas limit for deployments
    receipt_timeout : float
        Seconds to wait for a deployment receipt
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        signer: Signer,
        registry: ContractRegistry,
        logger: logging.Logger,
        gas_limit: int = 300_000,
        deploy_gas_limit: int = 5_000_000,
        receipt_timeout: float = 120
    ):
        self.web3 = web3
        self.signer = signer
        self.registry = registry
        self.logger = logger
        self.gas_limit = gas_limit
        self.deploy_gas_limit = deploy_gas_limit
        self.receipt_timeout = receipt_timeout

    @property
    def sender(self) -> str:
        return self.signer.address

    async def ping(self) -> int:
        """
        Check that the node is reachable and serves the signer's chain.

        Returns
        -------
        int
            Chain id reported by the node

        Raises
        ------
        RPCException
            If the node is unreachable or reports another chain
        """
        if not await self.web3.is_connected():
            raise RPCException("Chain node is not reachable")

        chain_id = await self.web3.eth.chain_id
        if chain_id != self.signer.chain_id:
            raise RPCException(
                f"Chain node reports chain id {chain_id}, expected {self.signer.chain_id}"
            )

        self.logger.info(f"Connected to chain {chain_id} as {self.sender}")
        return chain_id

    def contract(self, standard: TokenStandard, address: str) -> AsyncContract:
        """
        Bind a deployed token contract.

        Parameters
        ----------
        standard : TokenStandard
            Token standard of the contract
        address : str
            Contract address

        Returns
        -------
        AsyncContract
            Contract binding
        """
        return self.web3.eth.contract(
            address=Web3.to_checksum_address(address),
            abi=self.registry.abi(standard)
        )

    async def call(self, function) -> Any:
        """
        Execute a read-only contract function.

        Parameters
        ----------
        function : AsyncContractFunction
            Bound contract function with its arguments

        Returns
        -------
        Any
            Decoded return value
        """
        try:
            return await function.call()
        except BaseCustomException:
            raise
        except Exception as e:
            raise RPCException(str(e) or e.__class__.__name__) from e

    async def transact(self, function) -> str:
        """
        Sign and submit a state-changing contract function.

        Parameters
        ----------
        function : AsyncContractFunction
            Bound contract function with its arguments

        Returns
        -------
        str
            Transaction hash
        """
        tx_hash = await self._send(function, self.gas_limit)
        return Web3.to_hex(tx_hash)

    async def deploy(self, standard: TokenStandard, *args) -> DeployedContract:
        """
        Deploy a token contract and wait until it is mined.

        Parameters
        ----------
        standard : TokenStandard
            Token standard to deploy
        *args
            Constructor arguments

        Returns
        -------
        DeployedContract
            Address and transaction hash of the new contract

        Raises
        ------
        TransactionFailedException
            If the deployment transaction reverted
        """
        artifact = self.registry.deployable(standard)
        factory = self.web3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)

        tx_hash = await self._send(factory.constructor(*args), self.deploy_gas_limit)
        tx_hash_hex = Web3.to_hex(tx_hash)
        self.logger.info(f"{standard.artifact_name} deployment sent (tx: {tx_hash_hex})")

        try:
            receipt = await self.web3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.receipt_timeout
            )
        except Exception as e:
            raise RPCException(str(e) or e.__class__.__name__) from e

        if receipt["status"] != 1:
            raise TransactionFailedException(f"deployment tx failed: {tx_hash_hex}")

        address = Web3.to_checksum_address(receipt["contractAddress"])
        self.logger.info(f"{standard.artifact_name} deployed at: {address} (tx: {tx_hash_hex})")
        return DeployedContract(address=address, transaction_hash=tx_hash_hex)

    async def _send(self, builder, gas: int):
        """
        Build, sign and broadcast a transaction with a fresh nonce.

        Parameters
        ----------
        builder : AsyncContractFunction | AsyncContractConstructor
            Anything exposing `build_transaction`
        gas : int
            Gas limit

        Returns
        -------
        HexBytes
            Transaction hash
        """
        try:
            async with self.signer.lock:
                nonce = await self.web3.eth.get_transaction_count(self.sender, "pending")
                gas_price = await self.web3.eth.gas_price
                transaction = await builder.build_transaction({
                    "from": self.sender,
                    "nonce": nonce,
                    "gas": gas,
                    "gasPrice": gas_price,
                    "chainId": self.signer.chain_id,
                    "value": 0
                })
                raw_transaction = self.signer.sign(transaction)
                tx_hash = await self.web3.eth.send_raw_transaction(raw_transaction)
        except BaseCustomException:
            raise
        except Exception as e:
            raise RPCException(str(e) or e.__class__.__name__) from e

        self.logger.debug(f"Sent transaction nonce={nonce} gas={gas} gasPrice={gas_price}")
        return tx_hash
