"""
Test RPC Client with Mocks

Tests RpcClient retry, endpoint rotation and typed results without
network access.
"""

import base64
import sys
from pathlib import Path
from unittest.mock import Mock, patch

import httpx
import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from transfer_kit.errors import ConfigurationError, ErrorCode, MalformedResponse, RpcError
from transfer_kit.infra.rpc import ClusterRpcPool, RpcClient, RpcClientConfig, parse_token_accounts
from transfer_kit.types import SolanaCluster


def rpc_response(result=None, error=None, status_code=200):
    response = Mock()
    response.status_code = status_code
    body = {"jsonrpc": "2.0", "id": 1}
    if error is not None:
        body["error"] = error
    else:
        body["result"] = result
    response.json.return_value = body
    response.raise_for_status.return_value = None
    return response


@pytest.fixture
def rpc_config():
    return RpcClientConfig(timeout_seconds=5, max_retries=3, retry_delay_seconds=0, commitment="confirmed")


@pytest.fixture
def rpc(rpc_config):
    client = RpcClient(["https://primary.example", "https://backup.example"], config=rpc_config)
    yield client
    client.close()


class TestRpcClientConfig:
    """Tests for RpcClientConfig defaults"""

    def test_explicit_values(self, rpc_config):
        assert rpc_config.timeout_seconds == 5
        assert rpc_config.max_retries == 3
        assert rpc_config.retry_delay_seconds == 0

    def test_defaults_from_global_config(self):
        from transfer_kit.config import config

        cfg = RpcClientConfig()
        assert cfg.timeout_seconds == config.rpc.timeout_seconds
        assert cfg.max_retries == config.rpc.max_retries

    def test_no_endpoint(self):
        with pytest.raises(ConfigurationError):
            RpcClient([])


class TestCall:
    """Tests for RpcClient.call"""

    def test_success(self, rpc):
        with patch.object(httpx.Client, "post", return_value=rpc_response(result=42)) as mock_post:
            assert rpc.call("getSlot", []) == 42

        assert mock_post.call_args[0][0] == "https://primary.example"
        body = mock_post.call_args[1]["json"]
        assert body["method"] == "getSlot"
        assert body["jsonrpc"] == "2.0"

    def test_rpc_error_not_retried(self, rpc):
        error = {"code": -32602, "message": "Invalid params", "data": {"x": 1}}
        with patch.object(httpx.Client, "post", return_value=rpc_response(error=error)) as mock_post:
            with pytest.raises(RpcError) as exc_info:
                rpc.call("getBalance", ["bad"])

        assert mock_post.call_count == 1
        assert "Invalid params" in exc_info.value.message
        assert exc_info.value.details["rpc_error_code"] == -32602
        assert exc_info.value.details["rpc_error_data"] == {"x": 1}

    def test_retry_then_success(self, rpc):
        responses = [httpx.ConnectError("refused"), rpc_response(result="ok")]
        with patch.object(httpx.Client, "post", side_effect=responses) as mock_post:
            with patch("transfer_kit.infra.rpc.time.sleep"):
                assert rpc.call("getHealth", []) == "ok"

        assert mock_post.call_count == 2

    def test_rotates_after_retries_exhausted(self, rpc):
        responses = [httpx.ReadTimeout("slow")] * 3 + [rpc_response(result="ok")]
        with patch.object(httpx.Client, "post", side_effect=responses) as mock_post:
            with patch("transfer_kit.infra.rpc.time.sleep"):
                assert rpc.call("getHealth", []) == "ok"

        assert mock_post.call_args_list[0][0][0] == "https://primary.example"
        assert mock_post.call_args_list[3][0][0] == "https://backup.example"
        assert rpc.endpoint == "https://backup.example"

    def test_all_endpoints_fail(self, rpc):
        with patch.object(httpx.Client, "post", side_effect=httpx.ReadTimeout("slow")) as mock_post:
            with patch("transfer_kit.infra.rpc.time.sleep"):
                with pytest.raises(RpcError) as exc_info:
                    rpc.call("getHealth", [])

        assert mock_post.call_count == 6
        assert exc_info.value.code == ErrorCode.RPC_TIMEOUT

    def test_rate_limited(self, rpc):
        with patch.object(httpx.Client, "post", return_value=rpc_response(status_code=429)):
            with patch("transfer_kit.infra.rpc.time.sleep"):
                with pytest.raises(RpcError) as exc_info:
                    rpc.call("getHealth", [])

        assert exc_info.value.code == ErrorCode.RPC_RATE_LIMITED

    def test_no_retry(self, rpc):
        with patch.object(httpx.Client, "post", side_effect=httpx.ConnectError("refused")) as mock_post:
            with pytest.raises(RpcError):
                rpc.call("sendTransaction", [], retry=False)

        assert mock_post.call_count == 1


class TestTypedMethods:
    """Tests for the typed RPC helpers"""

    def test_get_latest_blockhash(self, rpc):
        result = {"context": {"slot": 1}, "value": {"blockhash": "abc", "lastValidBlockHeight": 99}}
        with patch.object(httpx.Client, "post", return_value=rpc_response(result=result)) as mock_post:
            latest = rpc.get_latest_blockhash("finalized")

        assert latest.blockhash == "abc"
        assert latest.last_valid_block_height == 99
        assert mock_post.call_args[1]["json"]["params"] == [{"commitment": "finalized"}]

    def test_get_latest_blockhash_malformed(self, rpc):
        with patch.object(httpx.Client, "post", return_value=rpc_response(result={"value": {}})):
            with pytest.raises(MalformedResponse):
                rpc.get_latest_blockhash()

    def test_get_balance(self, rpc):
        result = {"context": {"slot": 1}, "value": 1_000_000_000}
        with patch.object(httpx.Client, "post", return_value=rpc_response(result=result)) as mock_post:
            assert rpc.get_balance("Wallet111") == 1_000_000_000

        assert mock_post.call_args[1]["json"]["params"] == ["Wallet111", {"commitment": "confirmed"}]

    def test_get_balance_malformed(self, rpc):
        with patch.object(httpx.Client, "post", return_value=rpc_response(result={"value": "lots"})):
            with pytest.raises(MalformedResponse):
                rpc.get_balance("Wallet111")

    def test_get_token_accounts_by_owner(self, rpc):
        result = {"context": {"slot": 1}, "value": [{"pubkey": "A"}]}
        with patch.object(httpx.Client, "post", return_value=rpc_response(result=result)) as mock_post:
            assert rpc.get_token_accounts_by_owner("Owner111") == [{"pubkey": "A"}]

        params = mock_post.call_args[1]["json"]["params"]
        assert params[0] == "Owner111"
        assert params[1] == {"programId": "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"}
        assert params[2]["encoding"] == "jsonParsed"

    def test_send_transaction_single_attempt(self, rpc):
        with patch.object(httpx.Client, "post", side_effect=httpx.ConnectError("refused")) as mock_post:
            with pytest.raises(RpcError):
                rpc.send_transaction(b"\x01\x02")

        assert mock_post.call_count == 1

    def test_send_transaction(self, rpc):
        with patch.object(httpx.Client, "post", return_value=rpc_response(result="Sig111")) as mock_post:
            assert rpc.send_transaction(b"\x01\x02") == "Sig111"

        params = mock_post.call_args[1]["json"]["params"]
        assert params[0] == base64.b64encode(b"\x01\x02").decode()
        assert params[1]["encoding"] == "base64"


class TestParseTokenAccounts:
    """Tests for parse_token_accounts"""

    def entry(self, amount="100", decimals=6):
        return {
            "pubkey": "Account111",
            "account": {
                "data": {
                    "parsed": {
                        "info": {
                            "mint": "Mint111",
                            "owner": "Owner111",
                            "tokenAmount": {"amount": amount, "decimals": decimals},
                        }
                    }
                }
            },
        }

    def test_parses(self):
        accounts = parse_token_accounts([self.entry()])

        assert len(accounts) == 1
        assert accounts[0].mint == "Mint111"
        assert accounts[0].amount == "100"
        assert accounts[0].decimals == 6
        assert not accounts[0].is_empty

    def test_skips_malformed(self):
        entries = [
            self.entry(),
            {"pubkey": "Bad1"},
            self.entry(amount="-5"),
            self.entry(decimals="6"),
            "not even a dict",
        ]

        assert len(parse_token_accounts(entries)) == 1


class TestClusterRpcPool:
    """Tests for ClusterRpcPool"""

    def test_one_client_per_cluster(self):
        pool = ClusterRpcPool()

        devnet = pool(SolanaCluster.DEVNET)
        assert pool(SolanaCluster.DEVNET) is devnet
        assert pool(SolanaCluster.MAINNET) is not devnet
        assert devnet.endpoint == SolanaCluster.DEVNET.endpoint

        pool.close()

    def test_config_passed_to_clients(self, rpc_config):
        pool = ClusterRpcPool(rpc_config)
        assert pool(SolanaCluster.TESTNET).commitment == "confirmed"
