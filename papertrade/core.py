"""
Core types and pure functions for the paper-trading engine.

This module provides the foundational data structures and protocols:
1. Protocols: PriceView and InstrumentLookup for read-only market access
2. Data structures: Instrument, Trade, TradeResult
3. Exceptions: TradingError and the caller-input error types
4. Constants: price floor, walk bounds, starting cash, seed instruments
5. Money helpers: Decimal conversion and display rounding

Nothing in this module holds session state. Market, Portfolio and Account
build on these types.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_EVEN, getcontext
from enum import Enum
from typing import Optional, Protocol, Tuple, Type, Union, runtime_checkable


# ============================================================================
# DECIMAL CONTEXT CONFIGURATION
# ============================================================================
#
# Prices compound multiplicatively under the random walk, so intermediate
# values need more digits than a display currency.
#
# PRECONDITION: No other code should modify the global Decimal context.
#
#   - prec=50: enough for a thousand compounded walk steps
#   - rounding=ROUND_HALF_EVEN: banker's rounding
#
_PAPERTRADE_DECIMAL_CONTEXT = getcontext()
_PAPERTRADE_DECIMAL_CONTEXT.prec = 50
_PAPERTRADE_DECIMAL_CONTEXT.rounding = ROUND_HALF_EVEN


# ============================================================================
# CONSTANTS
# ============================================================================

# No instrument price may fall below this after a walk update.
PRICE_FLOOR = Decimal("1.00")

# Smallest price accepted when an instrument is created.
MIN_PRICE = Decimal("0.01")

# Half-width of the uniform percentage draw: changes fall in [-5%, +5%).
MAX_PRICE_CHANGE = Decimal("0.05")

DEFAULT_STARTING_CASH = Decimal("10000.00")

# Display precision for money. Never applied before a trade is finalised.
CASH_DECIMAL_PLACES = 2

# Seed universe: (symbol, name, price).
DEFAULT_INSTRUMENTS: Tuple[Tuple[str, str, str], ...] = (
    ("AAPL", "Apple Inc.", "170.00"),
    ("GOOGL", "Alphabet Inc.", "2800.00"),
    ("MSFT", "Microsoft Corp.", "320.00"),
    ("TSLA", "Tesla Inc.", "700.00"),
)

Numeric = Union[Decimal, int, float, str]


# ============================================================================
# MONEY HELPERS
# ============================================================================

def to_decimal(value: Numeric) -> Decimal:
    """
    Convert a numeric value to Decimal.

    Floats go through str() so that 170.0 becomes Decimal("170.0") and not
    its binary expansion.

    Raises:
        ValueError: If the value cannot be represented as a finite Decimal.
    """
    if isinstance(value, bool):
        raise ValueError(f"Cannot convert bool to Decimal: {value!r}")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Cannot convert {value!r} to Decimal") from None
    if result.is_nan() or result.is_infinite():
        raise ValueError(f"Value must be finite, got {value!r}")
    return result


def round_money(value: Decimal) -> Decimal:
    """Round a money amount half-even to CASH_DECIMAL_PLACES for display."""
    quantizer = Decimal(10) ** -CASH_DECIMAL_PLACES
    return to_decimal(value).quantize(quantizer, rounding=ROUND_HALF_EVEN)


def format_money(value: Decimal) -> str:
    """Format a money amount as '$1,234.56'."""
    return f"${round_money(value):,.2f}"


def canonical_symbol(symbol: str) -> str:
    """Lookup key for a symbol: case-insensitive, otherwise exact (no trimming)."""
    return symbol.upper()


# ============================================================================
# PROTOCOLS
# ============================================================================

@runtime_checkable
class PriceView(Protocol):
    """
    Read-only interface to current prices.

    Valuation functions accept a PriceView so they can be handed a Market
    without being able to move its prices.
    """

    def get_price(self, symbol: str) -> Optional[Decimal]:
        """Return the current price, or None if the symbol does not resolve."""
        ...


@runtime_checkable
class InstrumentLookup(Protocol):
    """
    Read-only symbol resolution.

    Display helpers need instrument names as well as prices; Market
    satisfies this.
    """

    def lookup(self, symbol: str) -> Optional[Instrument]:
        """Return the instrument for a symbol, or None."""
        ...


# ============================================================================
# ENUMS
# ============================================================================

class TradeSide(Enum):
    """Direction of an executed trade."""
    BUY = "BUY"
    SELL = "SELL"


class TradeStatus(Enum):
    """
    Outcome of a buy or sell attempt.

    FILLED: Trade was validated and applied to cash, holdings and history.
    REJECTED: Trade failed validation; nothing was changed.
    """
    FILLED = "filled"
    REJECTED = "rejected"


class RejectReason(Enum):
    """Why a trade was rejected."""
    INVALID_QUANTITY = "invalid_quantity"
    UNKNOWN_SYMBOL = "unknown_symbol"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INSUFFICIENT_SHARES = "insufficient_shares"


# ============================================================================
# EXCEPTIONS
# ============================================================================

class TradingError(Exception):
    """Base exception for all trading engine errors."""
    reason: Optional[RejectReason] = None


class InvalidQuantity(TradingError):
    """Raised when a trade quantity is not a positive integer."""
    reason = RejectReason.INVALID_QUANTITY


class UnknownSymbol(TradingError):
    """Raised when a symbol does not resolve to an instrument in the market."""
    reason = RejectReason.UNKNOWN_SYMBOL


class InsufficientFunds(TradingError):
    """Raised when the cost of a buy exceeds available cash."""
    reason = RejectReason.INSUFFICIENT_FUNDS


class InsufficientShares(TradingError):
    """Raised when a sell asks for more shares than are held."""
    reason = RejectReason.INSUFFICIENT_SHARES


class SessionClosed(TradingError):
    """Raised when an operation is attempted on a terminated session."""
    pass


_ERRORS_BY_REASON = {
    RejectReason.INVALID_QUANTITY: InvalidQuantity,
    RejectReason.UNKNOWN_SYMBOL: UnknownSymbol,
    RejectReason.INSUFFICIENT_FUNDS: InsufficientFunds,
    RejectReason.INSUFFICIENT_SHARES: InsufficientShares,
}


def error_for(reason: RejectReason) -> Type[TradingError]:
    """Return the exception class that corresponds to a reject reason."""
    return _ERRORS_BY_REASON[reason]


# ============================================================================
# CORE DATA STRUCTURES
# ============================================================================

class Instrument:
    """
    A tradable synthetic security.

    Attributes:
        symbol: Unique identifier (e.g., "AAPL"); read-only after creation.
        name: Human-readable name (e.g., "Apple Inc."); read-only after creation.
        price: Current price. Mutated in place by the market's price walk only.

    Instruments compare by identity: the market hands out the same object
    for every casing of a symbol.
    """

    __slots__ = ('_symbol', '_name', 'price')

    def __init__(self, symbol: str, name: str, price: Numeric):
        if not symbol or not symbol.strip():
            raise ValueError("Instrument symbol cannot be empty")
        price = to_decimal(price)
        if price < MIN_PRICE:
            raise ValueError(f"Instrument price must be >= {MIN_PRICE}, got {price}")
        self._symbol = symbol.strip()
        self._name = name
        self.price = price

    @property
    def symbol(self) -> str:
        return self._symbol

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"Instrument({self._symbol}, {self._name!r}, {self.price})"

    def __str__(self) -> str:
        return f"{self._symbol} ({self._name}) - {format_money(self.price)}"


@dataclass(frozen=True, slots=True)
class Trade:
    """
    An executed, immutable record of one buy or sell.

    Attributes:
        side: BUY or SELL
        symbol: Canonical symbol of the instrument traded
        quantity: Number of shares (positive)
        unit_price: Instrument price at execution time
        timestamp: When the trade executed
        sequence_number: Monotonic position in the owning account's history
        trade_id: Unique identifier within the account
    """
    side: TradeSide
    symbol: str
    quantity: int
    unit_price: Decimal
    timestamp: datetime
    sequence_number: int = 0
    trade_id: str = ""

    def __post_init__(self):
        if not self.symbol or not self.symbol.strip():
            raise ValueError("Trade symbol cannot be empty")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError(f"Trade quantity must be int, got {type(self.quantity)}")
        if self.quantity <= 0:
            raise ValueError(f"Trade quantity must be positive, got {self.quantity}")
        if not isinstance(self.unit_price, Decimal):
            raise ValueError(f"Trade unit_price must be Decimal, got {type(self.unit_price)}")
        if not self.trade_id:
            object.__setattr__(self, 'trade_id', f"trade:{self.sequence_number:06d}")

    @property
    def notional(self) -> Decimal:
        """Cash exchanged by this trade (unit_price * quantity)."""
        return self.unit_price * self.quantity

    def __str__(self) -> str:
        return (
            f"{self.timestamp:%Y-%m-%d %H:%M:%S}: {self.side.value} {self.quantity} "
            f"shares of {self.symbol} at {format_money(self.unit_price)}"
        )


@dataclass(frozen=True, slots=True)
class TradeResult:
    """
    Outcome of Account.buy() / Account.sell().

    Truthy only when the trade was filled, so callers that want the plain
    success/fail signal can write ``if account.buy(...):``.

    Attributes:
        status: FILLED or REJECTED
        trade: The recorded Trade when filled, else None
        reason: Why the trade was rejected, else None
        message: Human-readable description of the outcome
    """
    status: TradeStatus
    trade: Optional[Trade] = None
    reason: Optional[RejectReason] = None
    message: str = field(default="")

    @classmethod
    def filled(cls, trade: Trade) -> TradeResult:
        return cls(
            status=TradeStatus.FILLED,
            trade=trade,
            message=(
                f"{trade.side.value} {trade.quantity} {trade.symbol} "
                f"@ {format_money(trade.unit_price)}"
            ),
        )

    @classmethod
    def rejected(cls, error: TradingError) -> TradeResult:
        return cls(status=TradeStatus.REJECTED, reason=error.reason, message=str(error))

    @property
    def ok(self) -> bool:
        return self.status is TradeStatus.FILLED

    def __bool__(self) -> bool:
        return self.ok

    def raise_for_status(self) -> None:
        """Raise the typed TradingError for a rejected result; no-op when filled."""
        if self.ok:
            return
        raise error_for(self.reason)(self.message)
