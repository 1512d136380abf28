"""
TransferClient - Unified entry point for balances and transfers

Holds the external collaborators (session, signers, node endpoints) and
hands them to the functional modules. There is no global instance.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, TYPE_CHECKING

from .config import config as global_config
from .errors import TransferKitError
from .infra import (
    BalancesApiClient,
    ClusterRpcPool,
    EVMTransactionSender,
    EvmRpc,
    RpcClientConfig,
    Session,
    SolanaTransactionSender,
)
from .protocols import EncoderRegistry, EvmWireEncoder, SolanaWireEncoder
from .types import EvmNetwork, SolanaCluster, SolanaNetwork, SolanaToken, Token, Wallet

logger = logging.getLogger(__name__)


class TransferClient:
    """
    Unified transfer client

    Provides access to operations through functional modules:
    - balances: Token balances (balances API, Solana RPC fallback)
    - transfer: Build and send native / token transfers

    Usage:
        client = TransferClient(
            session=StaticSession(token),
            evm_sender=LocalEVMSigner.from_env(),
            environment_id="env-123",
        )

        tokens = client.evm_balances_or_native(wallet, chain_id=1)
        tx_hash = client.transfer.send(TransferRequest(...))
    """

    def __init__(
        self,
        session: Session,
        evm_sender: Optional[EVMTransactionSender] = None,
        solana_sender: Optional[SolanaTransactionSender] = None,
        environment_id: Optional[str] = None,
        evm_rpc_urls: Optional[Dict[int, str]] = None,
        rpc_config: Optional[RpcClientConfig] = None,
    ):
        """
        Initialize TransferClient

        Args:
            session: Bearer token source for the balances API
            evm_sender: EVM signing collaborator (transfers are build-only without it)
            solana_sender: Solana signing collaborator (likewise)
            environment_id: Balances API environment id (default from config)
            evm_rpc_urls: Chain id -> RPC URL (default from EVM_RPC_URLS)
            rpc_config: Solana RPC overrides
        """
        self._session = session
        self._api = BalancesApiClient(session, environment_id=environment_id)
        self._solana_rpc = ClusterRpcPool(rpc_config)
        self._evm_rpc = EvmRpc(evm_rpc_urls)

        self._registry = EncoderRegistry()
        self._registry.register(EvmNetwork, EvmWireEncoder(self._evm_rpc, evm_sender))
        self._registry.register(SolanaNetwork, SolanaWireEncoder(solana_sender, self._solana_rpc))

        # Lazy-loaded modules
        self._balances: Optional["BalanceResolver"] = None
        self._transfer: Optional["TransferOrchestrator"] = None

    @property
    def registry(self) -> EncoderRegistry:
        """Access to the wire encoder registry"""
        return self._registry

    @property
    def balances(self) -> "BalanceResolver":
        """
        Balance module

        Provides:
        - get_balances(wallet, network_id, ...): EVM balances
        - get_solana_balances(wallet, cluster): Solana balances with fallback
        """
        if self._balances is None:
            from .modules.balances import BalanceResolver
            self._balances = BalanceResolver(self._api, self._solana_rpc)
        return self._balances

    @property
    def transfer(self) -> "TransferOrchestrator":
        """
        Transfer module

        Provides:
        - build(request): Unsigned payload
        - send(request): Build and submit
        """
        if self._transfer is None:
            from .modules.transfer import TransferOrchestrator
            self._transfer = TransferOrchestrator(self._registry)
        return self._transfer

    def evm_balances_or_native(
        self,
        wallet: Wallet,
        chain_id: int,
        include_prices: bool = False,
    ) -> List[Token]:
        """
        EVM balances, or a single zero-balance native entry if the lookup fails

        Returns:
            Tokens from the balances API, or [Token.native(chain_id)]
        """
        try:
            return self.balances.get_balances(
                wallet,
                network_id=chain_id,
                include_native=True,
                include_prices=include_prices,
            )
        except TransferKitError as e:
            logger.warning(f"Failed to load balances for {wallet.address[:8]}... on chain {chain_id}: {e}")
            return [Token.native(chain_id)]

    def solana_balances_or_native(
        self,
        wallet: Wallet,
        cluster: Optional[SolanaCluster] = None,
    ) -> List[SolanaToken]:
        """
        Solana balances, or a single zero-balance SOL entry if the lookup fails
        """
        try:
            return self.balances.get_solana_balances(wallet, cluster)
        except TransferKitError as e:
            logger.warning(f"Failed to load Solana balances for {wallet.address[:8]}...: {e}")
            return [SolanaToken.native_sol()]

    def close(self):
        """Close client connections and release resources"""
        self._api.close()
        self._solana_rpc.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

    def __repr__(self) -> str:
        return f"TransferClient(session={self._session!r}, default_cluster={global_config.solana.default_cluster})"


# Type hints for modules (resolved at runtime)
if TYPE_CHECKING:
    from .modules.balances import BalanceResolver
    from .modules.transfer import TransferOrchestrator
