"""
Solana signing collaborator

Provides the sender seam used by the Solana wire encoder plus a local
keypair implementation that signs the legacy transaction and broadcasts
it through RpcClient.
"""

from __future__ import annotations

import base64
import json
import logging
import os
from typing import Protocol, runtime_checkable

import base58
from solders.keypair import Keypair
from solders.transaction import Transaction

from ..errors import ConfigurationError, SignerError
from ..types.common import Wallet
from .rpc import RpcClient

logger = logging.getLogger(__name__)


@runtime_checkable
class SolanaTransactionSender(Protocol):
    """
    Signing collaborator for Solana wallets

    Implementations fill in the fee payer signature of the base64 wire
    transaction, broadcast it and return the signature (base58).
    """

    def sign_and_send(self, wallet: Wallet, base64_transaction: str) -> str:
        ...


class LocalSolanaSigner:
    """
    Local signer using a Solana keypair

    Usage:
        signer = LocalSolanaSigner(Keypair(), RpcClient(cluster.endpoint))
        signature = signer.sign_and_send(wallet, payload.base64_transaction)
    """

    def __init__(self, keypair: Keypair, rpc: RpcClient):
        self._keypair = keypair
        self._rpc = rpc

    @property
    def pubkey(self) -> str:
        """Public key as base58 string"""
        return str(self._keypair.pubkey())

    def sign(self, base64_transaction: str) -> bytes:
        """
        Sign an unsigned legacy transaction

        Args:
            base64_transaction: Wire transaction with a zeroed signature slot

        Returns:
            Signed transaction bytes
        """
        tx = Transaction.from_bytes(base64.b64decode(base64_transaction))
        message = tx.message

        fee_payer = message.account_keys[0]
        if fee_payer != self._keypair.pubkey():
            raise SignerError.wallet_mismatch(str(fee_payer), self.pubkey)
        if message.header.num_required_signatures != 1:
            raise SignerError.failed(
                f"expected 1 required signature, got {message.header.num_required_signatures}"
            )

        signature = self._keypair.sign_message(bytes(message))
        signed = Transaction.populate(message, [signature])
        return bytes(signed)

    def sign_and_send(self, wallet: Wallet, base64_transaction: str) -> str:
        """
        Sign and broadcast (single attempt)

        Returns:
            Transaction signature (base58)
        """
        if wallet.address != self.pubkey:
            raise SignerError.wallet_mismatch(wallet.address, self.pubkey)

        signed = self.sign(base64_transaction)
        signature = self._rpc.send_transaction(signed)
        logger.info(f"Sent Solana transaction {signature}")
        return signature

    @classmethod
    def from_bytes(cls, secret_key: bytes, rpc: RpcClient) -> "LocalSolanaSigner":
        """Create signer from secret key bytes (64 bytes)"""
        return cls(Keypair.from_bytes(secret_key), rpc)

    @classmethod
    def from_base58(cls, secret_key: str, rpc: RpcClient) -> "LocalSolanaSigner":
        """Create signer from base58 secret key"""
        return cls.from_bytes(base58.b58decode(secret_key), rpc)

    @classmethod
    def from_file(cls, path: str, rpc: RpcClient) -> "LocalSolanaSigner":
        """
        Create signer from keypair file

        Supports:
        - JSON array format (Solana CLI): [1,2,3,...]
        - Raw bytes file (64 bytes)
        """
        with open(path, "rb") as f:
            content = f.read()

        try:
            data = json.loads(content.decode("utf-8"))
            if isinstance(data, list):
                return cls.from_bytes(bytes(data), rpc)
        except (json.JSONDecodeError, UnicodeDecodeError):
            pass

        if len(content) == 64:
            return cls.from_bytes(content, rpc)

        raise ConfigurationError.invalid("keypair_file", f"Cannot parse keypair file: {path}")

    @classmethod
    def from_env(cls, rpc: RpcClient, env_var: str = "SOLANA_PRIVATE_KEY") -> "LocalSolanaSigner":
        """
        Create signer from a base58 secret key in the environment

        Raises:
            SignerError: If environment variable is not set
        """
        secret = os.getenv(env_var, "")
        if not secret:
            raise SignerError.not_configured("SOL")
        return cls.from_base58(secret, rpc)

    def __repr__(self) -> str:
        return f"LocalSolanaSigner(pubkey={self.pubkey})"
