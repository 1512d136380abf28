"""
RPC Client for Solana

Provides JSON-RPC interface with:
- Multiple endpoint fallback
- Retry logic for reads
- Rate limit handling
- Typed results for the methods the transfer and balance paths use
"""

from __future__ import annotations

import base64
import logging
import time
import threading
from typing import Any, Dict, List, Optional, Union
from dataclasses import dataclass

import httpx

from ..errors import RpcError, ConfigurationError, MalformedResponse
from ..config import config as global_config
from ..types.responses import LatestBlockhash, ParsedTokenAccount, balance_from_rpc
from ..types.solana_tokens import TOKEN_PROGRAM_ID

logger = logging.getLogger(__name__)


@dataclass
class RpcClientConfig:
    """
    RPC client runtime configuration

    Allows per-client overrides while pulling defaults from the global
    config (transfer_kit.config.RpcConfig).

    Usage:
        config = RpcClientConfig(timeout_seconds=60, max_retries=5)
        client = RpcClient(endpoint, config=config)
    """
    timeout_seconds: float = None
    max_retries: int = None
    retry_delay_seconds: float = None
    commitment: str = None

    def __post_init__(self):
        """Apply defaults from global config for any unset values"""
        if self.timeout_seconds is None:
            self.timeout_seconds = global_config.rpc.timeout_seconds
        if self.max_retries is None:
            self.max_retries = global_config.rpc.max_retries
        if self.retry_delay_seconds is None:
            self.retry_delay_seconds = global_config.rpc.retry_delay_seconds
        if self.commitment is None:
            self.commitment = global_config.rpc.commitment


class RpcClient:
    """
    Solana JSON-RPC client

    Usage:
        rpc = RpcClient("https://api.devnet.solana.com")

        blockhash = rpc.get_latest_blockhash("finalized").blockhash
        lamports = rpc.get_balance("Wallet...")
    """

    def __init__(
        self,
        endpoint: Union[str, List[str]],
        config: Optional[RpcClientConfig] = None,
    ):
        """
        Initialize RPC client

        Args:
            endpoint: RPC endpoint URL or list of URLs (for fallback)
            config: RPC configuration options
        """
        self._endpoints = [endpoint] if isinstance(endpoint, str) else list(endpoint)
        if not self._endpoints:
            raise ConfigurationError.missing("RPC endpoint")

        self._config = config or RpcClientConfig()
        self._current_endpoint_idx = 0
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    @property
    def endpoint(self) -> str:
        """Current active endpoint"""
        return self._endpoints[self._current_endpoint_idx]

    @property
    def commitment(self) -> str:
        """Default commitment level"""
        return self._config.commitment

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client (thread-safe)"""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = httpx.Client(
                        timeout=self._config.timeout_seconds,
                        headers={"Content-Type": "application/json"},
                    )
        return self._client

    def _rotate_endpoint(self):
        """Rotate to next endpoint on failure"""
        if len(self._endpoints) > 1:
            self._current_endpoint_idx = (self._current_endpoint_idx + 1) % len(self._endpoints)
            logger.info(f"Rotating to RPC endpoint: {self.endpoint}")

    def call(
        self,
        method: str,
        params: List[Any],
        timeout: Optional[float] = None,
        retry: bool = True,
    ) -> Any:
        """
        Make JSON-RPC call

        Args:
            method: RPC method name
            params: RPC parameters
            timeout: Optional timeout override
            retry: Retry transient failures and rotate endpoints.
                Disabled for broadcasts, which are never repeated.

        Returns:
            RPC result

        Raises:
            RpcError: On RPC failure
        """
        client = self._get_client()
        body = {
            "jsonrpc": "2.0",
            "id": 1,
            "method": method,
            "params": params,
        }

        max_attempts = self._config.max_retries if retry else 1
        max_endpoints = len(self._endpoints) if retry else 1
        timeout_val = timeout or self._config.timeout_seconds

        last_error: Optional[Exception] = None
        endpoints_tried = 0

        while endpoints_tried < max_endpoints:
            for attempt in range(max_attempts):
                try:
                    response = client.post(
                        self.endpoint,
                        json=body,
                        timeout=timeout_val,
                    )

                    if response.status_code == 429:
                        logger.warning(f"Rate limited by {self.endpoint}")
                        last_error = RpcError.rate_limited(self.endpoint)
                        if attempt < max_attempts - 1:
                            time.sleep(self._config.retry_delay_seconds * (attempt + 1))
                        continue

                    response.raise_for_status()
                    result = response.json()

                    if "error" in result:
                        error = result["error"]
                        error_msg = error.get("message", str(error))
                        rpc_error = RpcError(
                            f"RPC error: {error_msg}",
                            endpoint=self.endpoint,
                        )
                        rpc_error.details["rpc_error_code"] = error.get("code")
                        rpc_error.details["rpc_error_data"] = error.get("data")
                        raise rpc_error

                    return result.get("result")

                except httpx.TimeoutException:
                    last_error = RpcError.timeout(self.endpoint, timeout_val)
                    logger.warning(f"RPC timeout (attempt {attempt + 1}): {method} @ {self.endpoint}")

                except httpx.HTTPStatusError as e:
                    last_error = RpcError(
                        f"HTTP error {e.response.status_code}",
                        endpoint=self.endpoint,
                        original_error=e,
                    )
                    logger.warning(f"RPC HTTP error (attempt {attempt + 1}): {e}")

                except httpx.RequestError as e:
                    last_error = RpcError.connection_failed(self.endpoint, e)
                    logger.warning(f"RPC connection error (attempt {attempt + 1}): {e}")

                except ValueError as e:
                    # Body was not JSON
                    last_error = RpcError(
                        f"Invalid JSON from {method}: {e}",
                        endpoint=self.endpoint,
                        original_error=e,
                    )
                    logger.warning(f"RPC invalid response (attempt {attempt + 1}): {e}")

                if attempt < max_attempts - 1:
                    time.sleep(self._config.retry_delay_seconds * (attempt + 1))

            self._rotate_endpoint()
            endpoints_tried += 1

        raise last_error or RpcError("All RPC endpoints failed")

    def get_latest_blockhash(
        self,
        commitment: Optional[str] = None,
    ) -> LatestBlockhash:
        """
        Get latest blockhash

        Never cached: every transaction build asks again.

        Raises:
            RpcError: On transport failure
            MalformedResponse: If the result has no blockhash
        """
        params = [{"commitment": commitment or global_config.solana.blockhash_commitment}]
        result = self.call("getLatestBlockhash", params)
        return LatestBlockhash.from_rpc(result)

    def get_balance(
        self,
        address: str,
        commitment: Optional[str] = None,
    ) -> int:
        """
        Get SOL balance in lamports

        Args:
            address: Account address

        Returns:
            Balance in lamports
        """
        params = [address, {"commitment": commitment or self.commitment}]
        result = self.call("getBalance", params)
        return balance_from_rpc(result)

    def get_token_accounts_by_owner(
        self,
        owner: str,
        program_id: str = TOKEN_PROGRAM_ID,
        commitment: Optional[str] = None,
    ) -> List[Any]:
        """
        Get raw jsonParsed token accounts owned by address

        Entries are returned unparsed so callers decide how to treat
        malformed ones (see parse_token_accounts).

        Args:
            owner: Owner address
            program_id: Token program filter (defaults to SPL Token)

        Returns:
            List of raw account entries
        """
        params = [
            owner,
            {"programId": program_id},
            {
                "encoding": "jsonParsed",
                "commitment": commitment or self.commitment,
            },
        ]
        result = self.call("getTokenAccountsByOwner", params)
        if not isinstance(result, dict) or not isinstance(result.get("value"), list):
            raise MalformedResponse.missing_field("getTokenAccountsByOwner", "value")
        return result["value"]

    def send_transaction(
        self,
        transaction: bytes,
        skip_preflight: bool = False,
        preflight_commitment: Optional[str] = None,
    ) -> str:
        """
        Send signed transaction (single attempt)

        Args:
            transaction: Signed transaction bytes
            skip_preflight: Skip preflight simulation
            preflight_commitment: Preflight commitment level

        Returns:
            Transaction signature (base58)
        """
        tx_data = base64.b64encode(transaction).decode("ascii")

        params = [
            tx_data,
            {
                "skipPreflight": skip_preflight,
                "preflightCommitment": preflight_commitment or self.commitment,
                "encoding": "base64",
            },
        ]
        signature = self.call("sendTransaction", params, retry=False)
        if not isinstance(signature, str):
            raise MalformedResponse.missing_field("sendTransaction", "result")
        return signature

    def close(self):
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def parse_token_accounts(entries: List[Any]) -> List[ParsedTokenAccount]:
    """
    Parse token account entries, skipping malformed ones

    Args:
        entries: Raw entries from get_token_accounts_by_owner

    Returns:
        Parsed accounts (malformed entries dropped with a warning)
    """

    accounts: List[ParsedTokenAccount] = []
    for entry in entries:
        try:
            accounts.append(ParsedTokenAccount.from_rpc(entry))
        except MalformedResponse as e:
            pubkey = entry.get("pubkey", "unknown") if isinstance(entry, dict) else "unknown"
            logger.warning(f"Skipping token account {pubkey}: {e.message}")
    return accounts


class ClusterRpcPool:
    """
    One RpcClient per Solana cluster, created on first use

    Callable, so it can be passed wherever an rpc_for_cluster lookup is
    expected.

    Usage:
        pool = ClusterRpcPool()
        rpc = pool(SolanaCluster.DEVNET)
    """

    def __init__(self, config: Optional[RpcClientConfig] = None):
        self._config = config
        self._clients: Dict[Any, RpcClient] = {}
        self._lock = threading.Lock()

    def __call__(self, cluster) -> RpcClient:
        with self._lock:
            if cluster not in self._clients:
                self._clients[cluster] = RpcClient(cluster.endpoint, config=self._config)
            return self._clients[cluster]

    def close(self):
        """Close all clients"""
        with self._lock:
            for client in self._clients.values():
                client.close()
            self._clients.clear()
