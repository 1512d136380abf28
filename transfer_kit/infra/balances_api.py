"""
Indexed balances API client

GET {base}/sdk/{environmentId}/chains/{EVM|SOL}/balances, bearer-token
authenticated. Responses are parsed into BalanceRecord at this boundary.
"""

import logging
import threading
from typing import List, Optional

import httpx

from ..config import config as global_config
from ..errors import (
    ConfigurationError,
    MalformedResponse,
    NotAuthenticated,
    RpcError,
    TransactionFailed,
)
from ..types.common import ChainFamily
from ..types.responses import BalanceRecord
from .session import Session

logger = logging.getLogger(__name__)


class BalancesApiClient:
    """
    Balances API client

    Usage:
        api = BalancesApiClient(session, environment_id="env-123")
        records = api.fetch_balances(ChainFamily.SOL, "Wallet...", network_id=102)
    """

    def __init__(
        self,
        session: Session,
        environment_id: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self._session = session
        self._environment_id = environment_id or global_config.balances_api.environment_id
        self._base_url = (base_url or global_config.balances_api.base_url).rstrip("/")
        self._timeout = timeout or global_config.balances_api.timeout
        self._client: Optional[httpx.Client] = None
        self._client_lock = threading.Lock()

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client (thread-safe)"""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = httpx.Client(timeout=self._timeout)
        return self._client

    def balances_url(self, chain: ChainFamily) -> str:
        if not self._environment_id:
            raise ConfigurationError.missing("BALANCES_API_ENVIRONMENT_ID")
        return f"{self._base_url}/sdk/{self._environment_id}/chains/{chain.value}/balances"

    def fetch_balances(
        self,
        chain: ChainFamily,
        account_address: str,
        network_id: Optional[int] = None,
        include_native: bool = True,
        include_prices: bool = False,
    ) -> List[BalanceRecord]:
        """
        Fetch balance records for an account

        Args:
            chain: Chain family path segment (EVM or SOL)
            account_address: Wallet address
            network_id: Chain id / cluster network id (omitted when None)
            include_native: Include the native asset balance
            include_prices: Include USD prices

        Returns:
            Parsed balance records

        Raises:
            NotAuthenticated: No bearer token on the session
            TransactionFailed: Non-200 status
            RpcError: Transport failure
            MalformedResponse: Body is not a list of balance records
        """
        token = self._session.token
        if not token:
            raise NotAuthenticated()

        url = self.balances_url(chain)
        params = {"accountAddress": account_address}
        if network_id is not None:
            params["networkId"] = str(network_id)
        params["includeNative"] = "true" if include_native else "false"
        params["includePrices"] = "true" if include_prices else "false"
        params["filterSpamTokens"] = "true"

        try:
            response = self._get_client().get(
                url,
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.TimeoutException:
            raise RpcError.timeout(url, self._timeout)
        except httpx.RequestError as e:
            raise RpcError.connection_failed(url, e)

        if response.status_code != 200:
            logger.warning(f"Balances API returned {response.status_code} for {chain.value} {account_address[:8]}...")
            raise TransactionFailed.api_error(response.status_code, response.text)

        try:
            body = response.json()
        except ValueError:
            raise MalformedResponse("Balances API returned invalid JSON", source="balances API")
        if not isinstance(body, list):
            raise MalformedResponse("Balances API response is not a list", source="balances API")

        records = [BalanceRecord.from_dict(item) for item in body]
        logger.debug(f"Balances API returned {len(records)} records for {account_address[:8]}...")
        return records

    def close(self):
        """Close HTTP client"""
        if self._client:
            self._client.close()
            self._client = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
