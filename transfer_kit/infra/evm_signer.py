"""
EVM node access and local signing using web3.py

Provides:
- EvmRpc: per-chain Web3 instances from the configured RPC URL map,
  used for the current gas price
- EVMTransactionSender: the signing collaborator seam
- LocalEVMSigner: reference sender signing with a local private key
"""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Dict, Optional, Protocol, runtime_checkable

from web3 import Web3, HTTPProvider
from web3.middleware import ExtraDataToPOAMiddleware
from eth_account import Account
from eth_account.signers.local import LocalAccount

from ..config import config as global_config
from ..errors import ConfigurationError, SignerError
from ..types.common import Wallet
from ..types.payload import EVMTransaction

logger = logging.getLogger(__name__)

# Chains that need the PoA extraData middleware (BSC mainnet / testnet)
POA_CHAIN_IDS = (56, 97)


def create_web3(
    rpc_url: str,
    chain_id: Optional[int] = None,
    timeout: int = 30,
) -> Web3:
    """
    Create Web3 instance for a chain

    Args:
        rpc_url: RPC endpoint URL
        chain_id: Chain ID, used to decide on PoA middleware
        timeout: Request timeout in seconds

    Returns:
        Configured Web3 instance
    """
    provider = HTTPProvider(
        rpc_url,
        request_kwargs={"timeout": timeout},
    )
    web3 = Web3(provider)

    if chain_id in POA_CHAIN_IDS:
        web3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    return web3


@runtime_checkable
class GasPriceSource(Protocol):
    """Anything that can quote the current gas price of a chain"""

    def gas_price(self, chain_id: int) -> int:
        """Current gas price in wei"""
        ...


class EvmRpc:
    """
    Lazily created Web3 instances keyed by chain id

    Usage:
        rpc = EvmRpc({1: "https://eth.llamarpc.com"})
        wei = rpc.gas_price(1)
    """

    def __init__(
        self,
        rpc_urls: Optional[Dict[int, str]] = None,
        timeout: Optional[int] = None,
    ):
        self._rpc_urls = dict(rpc_urls if rpc_urls is not None else global_config.evm.rpc_urls)
        self._timeout = timeout or global_config.evm.timeout
        self._web3: Dict[int, Web3] = {}
        self._lock = threading.Lock()

    def rpc_url(self, chain_id: int) -> str:
        url = self._rpc_urls.get(chain_id)
        if not url:
            raise ConfigurationError.missing(f"EVM RPC URL for chain {chain_id} (EVM_RPC_URLS)")
        return url

    def web3(self, chain_id: int) -> Web3:
        """Get or create the Web3 instance for a chain (thread-safe)"""
        with self._lock:
            if chain_id not in self._web3:
                self._web3[chain_id] = create_web3(self.rpc_url(chain_id), chain_id, self._timeout)
            return self._web3[chain_id]

    def gas_price(self, chain_id: int) -> int:
        price = self.web3(chain_id).eth.gas_price
        logger.debug(f"Gas price on chain {chain_id}: {price} wei")
        return int(price)


@runtime_checkable
class EVMTransactionSender(Protocol):
    """
    Signing collaborator for EVM wallets

    Implementations sign the descriptor for the given chain, broadcast it
    and return the transaction hash.
    """

    def send_transaction(self, wallet: Wallet, transaction: EVMTransaction, chain_id: int) -> str:
        ...


class LocalEVMSigner:
    """
    Local EVM signer using eth-account

    Usage:
        signer = LocalEVMSigner.from_private_key("0x...", EvmRpc())
        tx_hash = signer.send_transaction(wallet, tx, chain_id=1)
    """

    def __init__(self, account: LocalAccount, rpc: EvmRpc):
        self._account = account
        self._rpc = rpc

    @property
    def address(self) -> str:
        """Wallet address (checksummed)"""
        return self._account.address

    def build_tx_dict(self, web3: Web3, transaction: EVMTransaction, chain_id: int) -> Dict[str, Any]:
        """
        Fill nonce, chain id and type into the descriptor

        The nonce comes from the pending transaction count on every call;
        nothing is tracked locally between sends.
        """
        tx = transaction.to_dict()
        tx.pop("from")
        tx["to"] = Web3.to_checksum_address(tx["to"])
        tx["nonce"] = web3.eth.get_transaction_count(self.address, "pending")
        tx["chainId"] = chain_id
        tx["type"] = 2
        return tx

    def send_transaction(self, wallet: Wallet, transaction: EVMTransaction, chain_id: int) -> str:
        """
        Sign and broadcast an EVM transaction descriptor

        Returns:
            Transaction hash (0x-prefixed hex)

        Raises:
            SignerError: Wallet does not belong to this key
        """
        if wallet.address.lower() != self.address.lower():
            raise SignerError.wallet_mismatch(wallet.address, self.address)

        web3 = self._rpc.web3(chain_id)
        tx = self.build_tx_dict(web3, transaction, chain_id)

        signed = self._account.sign_transaction(tx)
        tx_hash = web3.eth.send_raw_transaction(signed.raw_transaction)
        tx_hash_hex = Web3.to_hex(tx_hash)

        logger.info(f"Sent EVM transaction {tx_hash_hex} on chain {chain_id} (nonce {tx['nonce']})")
        return tx_hash_hex

    @classmethod
    def from_private_key(cls, private_key: str, rpc: Optional[EvmRpc] = None) -> "LocalEVMSigner":
        """
        Create signer from private key

        Args:
            private_key: Hex-encoded private key (with or without 0x prefix)
            rpc: Node access (defaults to the configured EVM_RPC_URLS)
        """
        if not private_key.startswith("0x"):
            private_key = "0x" + private_key

        account = Account.from_key(private_key)
        return cls(account, rpc or EvmRpc())

    @classmethod
    def from_env(cls, env_var: str = "EVM_PRIVATE_KEY", rpc: Optional[EvmRpc] = None) -> "LocalEVMSigner":
        """
        Create signer from environment variable

        Raises:
            SignerError: If environment variable is not set
        """
        private_key = os.getenv(env_var, "")
        if not private_key:
            raise SignerError.not_configured("EVM")

        return cls.from_private_key(private_key, rpc)

    def __repr__(self) -> str:
        return f"LocalEVMSigner(address={self.address})"
