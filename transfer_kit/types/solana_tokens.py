"""
Solana program ids and well-known mint metadata

Single source of truth for the constants used by the wire encoder and the
balance resolver's RPC fallback.
"""

from typing import Dict, Tuple


SYSTEM_PROGRAM_ID = "11111111111111111111111111111111"
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
ASSOCIATED_TOKEN_PROGRAM_ID = "ATokenGPvbdGVxr1b2hvZbsiqW5xWH25efTNsLJA8knL"

# Pseudo-mint identifying native SOL (also the wrapped SOL mint)
NATIVE_SOL_MINT = "So11111111111111111111111111111111111111112"
SOL_DECIMALS = 9

# Mint address -> (symbol, name)
KNOWN_SOLANA_MINTS: Dict[str, Tuple[str, str]] = {
    "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v": ("USDC", "USD Coin"),
    "Es9vMFrzaCERmJfrF4H2FYD4KCoNkY11McCe8BenwNYB": ("USDT", "Tether USD"),
    "So11111111111111111111111111111111111111112": ("SOL", "Wrapped SOL"),
    "mSoLzYCxHdYgdzU16g5QSh3i5K3z3KZK7ytfqcJm7So": ("mSOL", "Marinade staked SOL"),
    "7dHbWXmci3dT8UFYWYZweBLXgycu7Y3iL6trKn1Y7ARj": ("stSOL", "Lido Staked SOL"),
    "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263": ("BONK", "Bonk"),
    "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYbKedZNsDvCN": ("JUP", "Jupiter"),
    "4k3Dyjzvzp8eMZWUXbBCjEvwSkkk59S5iCNLY3QrkX6R": ("RAY", "Raydium"),
    "orcaEKTdK7LKz57vaAYr9QeNsVEPfiu6QeMU1kektZE": ("ORCA", "Orca"),
}


def get_token_metadata(mint: str) -> Tuple[str, str]:
    """
    Resolve a mint address to (symbol, name)

    Unknown mints get a short label built from the first and last
    four characters of the address.

    Args:
        mint: Token mint address (base58)

    Returns:
        (symbol, name)
    """
    known = KNOWN_SOLANA_MINTS.get(mint)
    if known is not None:
        return known
    return f"{mint[:4]}...{mint[-4:]}", "SPL Token"
