"""
EVM chain constants

Native asset naming per chain id and the fixed ERC-20 transfer parameters.
"""

from typing import Dict, Tuple


NATIVE_DECIMALS = 18

# keccak256("transfer(address,uint256)")[:4]
ERC20_TRANSFER_SELECTOR = "a9059cbb"

NATIVE_TRANSFER_GAS_LIMIT = 21_000
ERC20_TRANSFER_GAS_LIMIT = 100_000

UINT256_MAX = 2 ** 256 - 1

_ETHEREUM = ("ETH", "Ethereum")
_POLYGON = ("MATIC", "Polygon")

# Chain id -> (symbol, name)
NATIVE_TOKEN_INFO: Dict[int, Tuple[str, str]] = {
    1: _ETHEREUM,          # Ethereum mainnet
    11_155_111: _ETHEREUM,  # Sepolia
    8453: _ETHEREUM,       # Base
    84532: _ETHEREUM,      # Base Sepolia
    42161: _ETHEREUM,      # Arbitrum One
    10: _ETHEREUM,         # Optimism
    137: _POLYGON,         # Polygon PoS
    80002: _POLYGON,       # Polygon Amoy
}


def get_native_token_info(chain_id: int) -> Tuple[str, str]:
    """Get (symbol, name) of a chain's native asset"""
    return NATIVE_TOKEN_INFO.get(chain_id, ("ETH", "Native Token"))
