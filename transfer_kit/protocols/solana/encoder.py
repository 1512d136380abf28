"""
Solana wire encoder
"""

import logging
from typing import Callable, Optional

from ...codec import base58
from ...config import config as global_config
from ...errors import TransactionFailed
from ...infra.rpc import ClusterRpcPool, RpcClient
from ...infra.solana_signer import SolanaTransactionSender
from ...types import (
    SolanaCluster,
    SolanaNetwork,
    SolanaToken,
    SolanaTransaction,
    TransferRequest,
)
from ..base import WireEncoder
from .wire import (
    U64_MAX,
    build_native_transfer,
    build_spl_transfer,
    decode_pubkey,
    get_associated_token_address,
)

logger = logging.getLogger(__name__)


class SolanaWireEncoder(WireEncoder):
    """
    Builds legacy transactions for native SOL and SPL transfers

    A fresh blockhash is fetched for every build.

    Usage:
        encoder = SolanaWireEncoder(signer)
        tx = encoder.build(request)
        signature = encoder.submit(request, tx)
    """

    name = "solana"
    max_amount = U64_MAX

    def __init__(
        self,
        sender: Optional[SolanaTransactionSender] = None,
        rpc_for_cluster: Optional[Callable[[SolanaCluster], RpcClient]] = None,
    ):
        """
        Args:
            sender: Signing collaborator (build-only when None)
            rpc_for_cluster: RpcClient lookup per cluster (defaults to one
                client per configured cluster endpoint)
        """
        self._sender = sender
        self._rpc_for_cluster = rpc_for_cluster or ClusterRpcPool()

    def fetch_blockhash(self, cluster: SolanaCluster) -> bytes:
        """Fetch and decode a fresh blockhash (never cached)"""
        rpc = self._rpc_for_cluster(cluster)
        latest = rpc.get_latest_blockhash(global_config.solana.blockhash_commitment)
        logger.debug(f"Fetched blockhash {latest.blockhash} from {cluster.value}")
        return base58.decode(latest.blockhash)

    def _check_request(self, request: TransferRequest) -> SolanaToken:
        if not isinstance(request.selector, SolanaNetwork):
            raise TransactionFailed(f"Solana encoder cannot handle {type(request.selector).__name__}")
        if not isinstance(request.token, SolanaToken):
            raise TransactionFailed(f"Token {request.token} is not a Solana token")
        return request.token

    def build(self, request: TransferRequest) -> SolanaTransaction:
        token = self._check_request(request)

        owner = decode_pubkey(request.wallet.address)
        recipient = decode_pubkey(request.recipient)
        mint = None if token.is_native else decode_pubkey(token.mint_address)
        amount = self.parse_amount(request)

        if mint is None:
            blockhash = self.fetch_blockhash(request.selector.cluster)
            raw = build_native_transfer(owner, recipient, amount, blockhash)
        else:
            source_ata = get_associated_token_address(owner, mint)
            dest_ata = get_associated_token_address(recipient, mint)
            blockhash = self.fetch_blockhash(request.selector.cluster)
            raw = build_spl_transfer(owner, source_ata, dest_ata, amount, blockhash)

        return SolanaTransaction.from_bytes(raw)

    def submit(self, request: TransferRequest, payload: SolanaTransaction) -> str:
        logger.debug(f"Submitting Solana transaction ({len(payload.raw_bytes)} bytes)")
        return self._sender.sign_and_send(request.wallet, payload.base64_transaction)
