"""
Typed response structures for the JSON-RPC node and the balances API

Every structure is built through a from_* constructor that validates the
fields it needs and raises MalformedResponse instead of defaulting.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN, localcontext
from typing import Any, Dict, Optional, Tuple, Type, Union

from ..errors import MalformedResponse

_Number = (int, float)


def _require(data: Any, key: str, types: Union[Type, Tuple[Type, ...]], source: str) -> Any:
    """Fetch data[key], checking its type (bool is never accepted as a number)"""
    if not isinstance(data, dict):
        raise MalformedResponse.missing_field(source, key)
    value = data.get(key)
    if value is None or isinstance(value, bool) and bool not in _as_tuple(types):
        raise MalformedResponse.missing_field(source, key)
    if not isinstance(value, types):
        raise MalformedResponse.missing_field(source, key)
    return value


def _optional(data: Dict[str, Any], key: str, types: Union[Type, Tuple[Type, ...]], source: str) -> Any:
    if data.get(key) is None:
        return None
    return _require(data, key, types, source)


def _as_tuple(types: Union[Type, Tuple[Type, ...]]) -> Tuple[Type, ...]:
    return types if isinstance(types, tuple) else (types,)


def _to_decimal(value: Any, source: str, key: str) -> Decimal:
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise MalformedResponse.missing_field(source, key)
    if not result.is_finite():
        raise MalformedResponse.missing_field(source, key)
    return result


def format_raw_balance(value: Union[int, float, str]) -> str:
    """
    Render a raw balance with zero decimal places

    The API may send base units as a JSON integer, a float or a string;
    ints pass through untouched so large balances keep every digit.
    """
    if isinstance(value, int):
        return str(value)
    with localcontext() as ctx:
        # 1e77 covers uint256; the default 28 digits would reject large balances
        ctx.prec = 100
        quantized = _to_decimal(value, "balances API", "rawBalance").quantize(
            Decimal(1), rounding=ROUND_HALF_EVEN
        )
    return format(quantized, "f")


@dataclass(frozen=True)
class LatestBlockhash:
    """Result of getLatestBlockhash"""
    blockhash: str
    last_valid_block_height: Optional[int] = None

    @classmethod
    def from_rpc(cls, result: Any) -> "LatestBlockhash":
        source = "getLatestBlockhash"
        value = _require(result, "value", dict, source)
        return cls(
            blockhash=_require(value, "blockhash", str, source),
            last_valid_block_height=_optional(value, "lastValidBlockHeight", int, source),
        )


def balance_from_rpc(result: Any) -> int:
    """Lamport count from a getBalance result"""
    return _require(result, "value", int, "getBalance")


@dataclass(frozen=True)
class ParsedTokenAccount:
    """One entry of getTokenAccountsByOwner with jsonParsed encoding"""
    pubkey: str
    mint: str
    owner: Optional[str]
    amount: str
    decimals: int

    @classmethod
    def from_rpc(cls, entry: Any) -> "ParsedTokenAccount":
        source = "getTokenAccountsByOwner"
        account = _require(entry, "account", dict, source)
        data = _require(account, "data", dict, source)
        parsed = _require(data, "parsed", dict, source)
        info = _require(parsed, "info", dict, source)
        token_amount = _require(info, "tokenAmount", dict, source)

        amount = _require(token_amount, "amount", str, source)
        if not amount.isdigit():
            raise MalformedResponse.missing_field(source, "amount")

        return cls(
            pubkey=_require(entry, "pubkey", str, source),
            mint=_require(info, "mint", str, source),
            owner=_optional(info, "owner", str, source),
            amount=amount,
            decimals=_require(token_amount, "decimals", int, source),
        )

    @property
    def is_empty(self) -> bool:
        return int(self.amount) == 0


@dataclass(frozen=True)
class BalanceRecord:
    """
    One balance entry returned by the balances API

    Attributes mirror the API's camelCase fields.
    """
    address: str
    name: str
    symbol: str
    decimals: int
    balance: Decimal
    raw_balance: str
    network_id: Optional[int] = None
    logo_uri: Optional[str] = None
    price: Optional[Decimal] = None
    market_value: Optional[Decimal] = None
    is_native: Optional[bool] = None

    @classmethod
    def from_dict(cls, data: Any) -> "BalanceRecord":
        source = "balances API"
        raw = _require(data, "rawBalance", _Number + (str,), source)
        price = _optional(data, "price", _Number, source)
        market_value = _optional(data, "marketValue", _Number, source)
        return cls(
            address=_require(data, "address", str, source),
            name=_require(data, "name", str, source),
            symbol=_require(data, "symbol", str, source),
            decimals=_require(data, "decimals", int, source),
            balance=_to_decimal(_require(data, "balance", _Number + (str,), source), source, "balance"),
            raw_balance=format_raw_balance(raw),
            network_id=_optional(data, "networkId", int, source),
            logo_uri=_optional(data, "logoURI", str, source),
            price=_to_decimal(price, source, "price") if price is not None else None,
            market_value=_to_decimal(market_value, source, "marketValue") if market_value is not None else None,
            is_native=_optional(data, "isNative", bool, source),
        )
