"""
Balance Module

Resolves token balances for a wallet.

Supports:
- EVM: indexed balances API only
- Solana: indexed balances API, falling back to direct JSON-RPC queries
  and a static mint table when the API is unavailable
"""

import logging
from typing import Callable, List, Optional

from ..config import config as global_config
from ..errors import ConfigurationError, MalformedResponse, RpcError, TransactionFailed
from ..infra.balances_api import BalancesApiClient
from ..infra.rpc import ClusterRpcPool, RpcClient, parse_token_accounts
from ..types import (
    BalanceRecord,
    ChainFamily,
    SolanaCluster,
    SolanaToken,
    Token,
    Wallet,
)
from ..types.solana_tokens import TOKEN_PROGRAM_ID, get_token_metadata

logger = logging.getLogger(__name__)


def token_from_record(record: BalanceRecord, network_id: Optional[int] = None) -> Token:
    """Map a balances API record to an EVM Token"""
    return Token(
        id=record.address,
        symbol=record.symbol,
        name=record.name,
        decimals=record.decimals,
        contract_address=None if record.is_native else record.address,
        chain_id=record.network_id or network_id or 1,
        balance=record.raw_balance,
        logo=record.logo_uri,
        price=record.price,
        market_value=record.market_value,
    )


def solana_token_from_record(record: BalanceRecord) -> SolanaToken:
    """Map a balances API record to a SolanaToken"""
    return SolanaToken(
        mint_address=record.address,
        symbol=record.symbol,
        name=record.name,
        decimals=record.decimals,
        balance=record.raw_balance,
        logo=record.logo_uri,
        is_native=bool(record.is_native),
    )


class BalanceResolver:
    """
    Token balance resolution

    Usage:
        resolver = BalanceResolver(api)

        tokens = resolver.get_balances(evm_wallet, network_id=1)
        sol_tokens = resolver.get_solana_balances(sol_wallet, SolanaCluster.DEVNET)
    """

    def __init__(
        self,
        api: BalancesApiClient,
        rpc_for_cluster: Optional[Callable[[SolanaCluster], RpcClient]] = None,
    ):
        """
        Args:
            api: Balances API client
            rpc_for_cluster: RpcClient lookup used by the Solana fallback
                (defaults to one client per configured cluster endpoint)
        """
        self._api = api
        self._rpc_for_cluster = rpc_for_cluster or ClusterRpcPool()

    def get_balances(
        self,
        wallet: Wallet,
        network_id: Optional[int] = None,
        include_native: bool = True,
        include_prices: bool = False,
    ) -> List[Token]:
        """
        Get balances from the balances API (no fallback)

        Args:
            wallet: Wallet to query
            network_id: Chain id filter (omitted when None)
            include_native: Include the chain's native asset
            include_prices: Include USD prices

        Returns:
            List of tokens with base-unit balances

        Raises:
            NotAuthenticated: No bearer token
            TransactionFailed: API answered with a non-200 status
            RpcError: Transport failure
            MalformedResponse: Response body did not parse
        """
        chain = ChainFamily.SOL if wallet.chain == ChainFamily.SOL else ChainFamily.EVM
        records = self._api.fetch_balances(
            chain,
            wallet.address,
            network_id=network_id,
            include_native=include_native,
            include_prices=include_prices,
        )
        return [token_from_record(record, network_id) for record in records]

    def get_solana_balances(
        self,
        wallet: Wallet,
        cluster: Optional[SolanaCluster] = None,
    ) -> List[SolanaToken]:
        """
        Get Solana balances, degrading to direct RPC queries

        The API is tried first. A missing environment id, a non-200 status,
        a transport failure or an unparseable body switches to the RPC
        fallback, which always returns at least the native SOL entry.

        Raises:
            NotAuthenticated: No bearer token (no fallback)
        """
        if cluster is None:
            cluster = SolanaCluster.from_string(global_config.solana.default_cluster)

        try:
            records = self._api.fetch_balances(
                ChainFamily.SOL,
                wallet.address,
                network_id=cluster.network_id,
                include_native=True,
                include_prices=False,
            )
            return [solana_token_from_record(record) for record in records]
        except (ConfigurationError, TransactionFailed, RpcError, MalformedResponse) as e:
            logger.warning(f"Balances API unavailable for {wallet.address[:8]}... ({e}), using RPC fallback")

        return self.get_solana_balances_from_rpc(wallet.address, cluster)

    def get_solana_balances_from_rpc(self, address: str, cluster: SolanaCluster) -> List[SolanaToken]:
        """
        Native balance plus non-empty SPL token accounts via JSON-RPC

        Never raises on transport or RPC errors: a failed getBalance reports
        0 lamports and a failed getTokenAccountsByOwner reports no SPL tokens.
        """
        rpc = self._rpc_for_cluster(cluster)

        lamports = 0
        try:
            lamports = rpc.get_balance(address)
        except (RpcError, MalformedResponse) as e:
            logger.warning(f"getBalance failed for {address[:8]}...: {e}")

        tokens = [SolanaToken.native_sol(str(lamports))]
        tokens.extend(self._spl_tokens(rpc, address))

        logger.debug(f"RPC fallback found {len(tokens)} tokens for {address[:8]}... on {cluster.value}")
        return tokens

    def _spl_tokens(self, rpc: RpcClient, address: str) -> List[SolanaToken]:
        try:
            entries = rpc.get_token_accounts_by_owner(address, TOKEN_PROGRAM_ID)
        except (RpcError, MalformedResponse) as e:
            logger.warning(f"getTokenAccountsByOwner failed for {address[:8]}...: {e}")
            return []

        tokens = []
        for account in parse_token_accounts(entries):
            if account.is_empty:
                continue
            symbol, name = get_token_metadata(account.mint)
            tokens.append(SolanaToken(
                mint_address=account.mint,
                symbol=symbol,
                name=name,
                decimals=account.decimals,
                balance=account.amount,
            ))
        return tokens
