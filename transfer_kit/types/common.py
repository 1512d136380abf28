"""
Common type definitions

Tokens, wallets, chain selectors and transfer requests.
"""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Optional, Union

from .evm_tokens import NATIVE_DECIMALS, get_native_token_info
from .solana_tokens import NATIVE_SOL_MINT, SOL_DECIMALS


def format_ui_balance(balance: str, decimals: int) -> str:
    """
    Human-readable balance for display

    Args:
        balance: Balance in base units (decimal string)
        decimals: Token decimals

    Returns:
        "0", "<0.0001", or the amount with 4 / 2 / 0 decimal places
        depending on magnitude
    """
    try:
        value = Decimal(balance) / Decimal(10 ** decimals)
    except ArithmeticError:
        return "0"

    if value == 0:
        return "0"
    if value < Decimal("0.0001"):
        return "<0.0001"
    if value < 1:
        return f"{value:.4f}"
    if value < 1000:
        return f"{value:.2f}"
    return f"{value:.0f}"


class ChainFamily(Enum):
    """Chain family tag carried by a wallet"""
    EVM = "EVM"
    SOL = "SOL"

    @classmethod
    def from_string(cls, value: str) -> "ChainFamily":
        """Convert string to ChainFamily (case-insensitive)"""
        upper = value.strip().upper()
        if upper in ("SOL", "SOLANA"):
            return cls.SOL
        elif upper == "EVM":
            return cls.EVM
        else:
            from ..errors import ConfigurationError
            raise ConfigurationError.invalid("chain", f"Unknown chain family: {value}. Supported: EVM, SOL")


class SolanaCluster(Enum):
    """Solana clusters with their balances-API network ids"""
    MAINNET = "mainnet-beta"
    DEVNET = "devnet"
    TESTNET = "testnet"

    @classmethod
    def from_string(cls, value: str) -> "SolanaCluster":
        """Convert string to SolanaCluster (case-insensitive)"""
        lower = value.strip().lower()
        if lower in ("mainnet", "mainnet-beta", "101"):
            return cls.MAINNET
        elif lower in ("devnet", "102"):
            return cls.DEVNET
        elif lower in ("testnet", "103"):
            return cls.TESTNET
        else:
            from ..errors import ConfigurationError
            raise ConfigurationError.invalid("cluster", f"Unknown cluster: {value}. Supported: mainnet, devnet, testnet")

    @property
    def network_id(self) -> int:
        """Network id used by the balances API"""
        if self == SolanaCluster.MAINNET:
            return 101
        elif self == SolanaCluster.DEVNET:
            return 102
        return 103

    @property
    def endpoint(self) -> str:
        """JSON-RPC endpoint (configurable, defaults to the public cluster URL)"""
        from ..config import config
        if self == SolanaCluster.MAINNET:
            return config.solana.mainnet_rpc_url
        elif self == SolanaCluster.DEVNET:
            return config.solana.devnet_rpc_url
        return config.solana.testnet_rpc_url


@dataclass(frozen=True)
class EvmNetwork:
    """EVM variant of the chain selector"""
    chain_id: int

    @property
    def family(self) -> ChainFamily:
        return ChainFamily.EVM


@dataclass(frozen=True)
class SolanaNetwork:
    """Solana variant of the chain selector"""
    cluster: SolanaCluster = SolanaCluster.DEVNET

    @property
    def family(self) -> ChainFamily:
        return ChainFamily.SOL


ChainSelector = Union[EvmNetwork, SolanaNetwork]


@dataclass(frozen=True)
class Wallet:
    """
    Wallet handle owned by the external wallet SDK

    Only `address` and `chain` are read by this package.

    Attributes:
        address: Chain-native address string (0x... or base58)
        chain: Chain family tag
        id: Opaque SDK identifier (optional)
    """
    address: str
    chain: ChainFamily
    id: Optional[str] = None

    def __post_init__(self):
        if isinstance(self.chain, str):
            object.__setattr__(self, "chain", ChainFamily.from_string(self.chain))

    def __repr__(self) -> str:
        return f"Wallet({self.chain.value}, {self.address[:8]}...)"


@dataclass(frozen=True)
class Token:
    """
    EVM token with balance

    Attributes:
        id: Token identity (contract address, or native-<chainId>)
        symbol: Token symbol (e.g., "ETH", "USDC")
        name: Full token name
        decimals: Number of decimal places
        contract_address: ERC-20 contract, None for the chain's native asset
        chain_id: EVM chain id
        balance: Balance in base units as a decimal string
        logo: Logo URL (optional)
        price: USD price when prices were requested (optional)
        market_value: USD value of the balance (optional)
    """
    id: str
    symbol: str
    name: str
    decimals: int
    contract_address: Optional[str]
    chain_id: int
    balance: str = "0"
    logo: Optional[str] = None
    price: Optional[Decimal] = None
    market_value: Optional[Decimal] = None

    def __str__(self) -> str:
        return self.symbol

    @property
    def is_native(self) -> bool:
        return self.contract_address is None

    @property
    def ui_balance(self) -> Decimal:
        """Balance in token units with full precision"""
        return Decimal(self.balance) / Decimal(10 ** self.decimals)

    @property
    def formatted_balance(self) -> str:
        return format_ui_balance(self.balance, self.decimals)

    @classmethod
    def native(cls, chain_id: int, balance: str = "0") -> "Token":
        """Synthetic native-asset entry for a chain"""
        symbol, name = get_native_token_info(chain_id)
        return cls(
            id=f"native-{chain_id}",
            symbol=symbol,
            name=name,
            decimals=NATIVE_DECIMALS,
            contract_address=None,
            chain_id=chain_id,
            balance=balance,
        )


@dataclass(frozen=True)
class SolanaToken:
    """
    Solana token (native SOL or SPL) with balance

    Attributes:
        mint_address: Mint address (base58), identity of the token
        symbol: Token symbol
        name: Full token name
        decimals: Number of decimal places
        balance: Balance in base units as a decimal string
        logo: Logo URL (optional)
        is_native: True for native SOL
    """
    mint_address: str
    symbol: str
    name: str
    decimals: int
    balance: str = "0"
    logo: Optional[str] = None
    is_native: bool = False

    def __str__(self) -> str:
        return self.symbol

    def __repr__(self) -> str:
        return f"SolanaToken({self.symbol}, {self.mint_address[:8]}...)"

    @property
    def id(self) -> str:
        return self.mint_address

    @property
    def ui_balance(self) -> Decimal:
        """Balance in token units with full precision"""
        return Decimal(self.balance) / Decimal(10 ** self.decimals)

    @property
    def formatted_balance(self) -> str:
        return format_ui_balance(self.balance, self.decimals)

    @classmethod
    def native_sol(cls, balance: str = "0") -> "SolanaToken":
        """Native SOL entry"""
        return cls(
            mint_address=NATIVE_SOL_MINT,
            symbol="SOL",
            name="Solana",
            decimals=SOL_DECIMALS,
            balance=balance,
            is_native=True,
        )


AnyToken = Union[Token, SolanaToken]


@dataclass(frozen=True)
class TransferRequest:
    """
    A single user transfer intent

    Attributes:
        wallet: Sending wallet
        token: Token to send (native or fungible)
        recipient: Recipient address in the chain's encoding
        amount: Human-entered decimal amount, e.g. "1.5"
        selector: Target network (EvmNetwork or SolanaNetwork)
    """
    wallet: Wallet
    token: AnyToken
    recipient: str
    amount: str
    selector: ChainSelector
