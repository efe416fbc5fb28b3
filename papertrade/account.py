"""
account.py - Cash Account with Atomic Buy/Sell

The Account is the only object that moves cash and shares.

Key responsibilities:
    - Validates every trade against the market and its own cash/holdings
    - Applies cash, holdings and history changes together or not at all
    - Keeps an append-only trade history in execution order
    - Produces snapshots and valued summaries for callers to display
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from numbers import Integral
from typing import Callable, Dict, List, Tuple

from .core import (
    Instrument, Numeric, PriceView, Trade, TradeResult, TradeSide,
    TradingError, InvalidQuantity, InsufficientFunds, InsufficientShares,
    DEFAULT_STARTING_CASH, format_money, to_decimal,
)
from .market import Market
from .portfolio import Holding, Portfolio


@dataclass(frozen=True, slots=True)
class AccountSnapshot:
    """Point-in-time copy of an account's mutable state."""
    cash: Decimal
    holdings: Tuple[Tuple[str, int], ...]
    trades: Tuple[Trade, ...]

    def holdings_dict(self) -> Dict[str, int]:
        return dict(self.holdings)


@dataclass(frozen=True, slots=True)
class AccountSummary:
    """
    Holdings, valuation and trade history of an account at current prices.

    Attributes:
        name: Account owner
        cash: Cash balance
        holdings: Valued rows for every holding that resolves in the market
        holdings_value: Market value of all holdings
        trades: Trade history in execution order
    """
    name: str
    cash: Decimal
    holdings: Tuple[Holding, ...]
    holdings_value: Decimal
    trades: Tuple[Trade, ...]

    @property
    def total_value(self) -> Decimal:
        return self.cash + self.holdings_value


class Account:
    """
    A single user's cash, holdings and trade history.

    buy() and sell() never raise for bad input. They return a TradeResult
    that is truthy on success and carries a RejectReason on failure; a
    rejected trade leaves cash, holdings and history untouched.

    Thread Safety:
        Not thread-safe. Concurrent callers need one lock per account around
        buy() and sell().

    Example:
        market = create_default_market(seed=1, verbose=False)
        account = Account("alice", verbose=False)
        if account.buy(market, "AAPL", 10):
            print(account.cash_balance())      # 8300.00
    """

    def __init__(
        self,
        name: str,
        starting_cash: Numeric = DEFAULT_STARTING_CASH,
        clock: Callable[[], datetime] = datetime.now,
        verbose: bool = True,
    ):
        """
        Create an account.

        Args:
            name: Display name of the account owner
            starting_cash: Opening cash balance (default: 10000.00)
            clock: Source of trade timestamps (default: datetime.now)
            verbose: Print a line per applied or rejected trade (default: True)

        Raises:
            ValueError: If starting_cash is negative or not numeric
        """
        cash = to_decimal(starting_cash)
        if cash < 0:
            raise ValueError(f"Starting cash cannot be negative, got {cash}")
        self.name = name
        self._cash: Decimal = cash
        self.portfolio = Portfolio()
        self._trades: List[Trade] = []
        self._clock = clock
        self.verbose = verbose

    # ========================================================================
    # READ-ONLY ACCESS
    # ========================================================================

    @property
    def cash(self) -> Decimal:
        return self._cash

    def cash_balance(self) -> Decimal:
        """Current cash balance."""
        return self._cash

    def history(self) -> List[Trade]:
        """Copy of the trade history in execution order."""
        return list(self._trades)

    def shares_of(self, symbol: str) -> int:
        return self.portfolio.shares_of(symbol)

    def snapshot(self) -> AccountSnapshot:
        """Copy of cash, holdings and trades, for comparison before/after a call."""
        return AccountSnapshot(
            cash=self._cash,
            holdings=tuple(self.portfolio.holdings().items()),
            trades=tuple(self._trades),
        )

    def total_value(self, prices: PriceView) -> Decimal:
        """Cash plus market value of holdings."""
        return self._cash + self.portfolio.valuation(prices)

    def summary(self, market: Market) -> AccountSummary:
        """Holdings, valuation and trade history at the market's current prices."""
        return AccountSummary(
            name=self.name,
            cash=self._cash,
            holdings=tuple(self.portfolio.positions(market)),
            holdings_value=self.portfolio.valuation(market),
            trades=tuple(self._trades),
        )

    # ========================================================================
    # TRADING (Mutating)
    # ========================================================================

    def buy(self, market: Market, symbol: str, quantity: int) -> TradeResult:
        """
        Buy shares at the market's current price.

        Rejected (no mutation) if quantity is not a positive integer, the
        symbol does not resolve, or cash is below price * quantity.

        Args:
            market: Market to price against (not mutated)
            symbol: Instrument symbol, any case
            quantity: Number of shares

        Returns:
            TradeResult; FILLED with the recorded Trade, or REJECTED with a reason.
        """
        try:
            instrument, quantity = self._resolve(market, symbol, quantity)
            cost = instrument.price * quantity
            if self._cash < cost:
                raise InsufficientFunds(
                    f"Insufficient cash to buy {quantity} {instrument.symbol} "
                    f"(cost {format_money(cost)}, available {format_money(self._cash)})"
                )
        except TradingError as e:
            return self._reject(e)

        trade = self._build_trade(TradeSide.BUY, instrument, quantity)
        self._cash -= cost
        self.portfolio.add_shares(instrument.symbol, quantity)
        return self._commit(trade)

    def sell(self, market: Market, symbol: str, quantity: int) -> TradeResult:
        """
        Sell shares at the market's current price.

        Rejected (no mutation) if quantity is not a positive integer, the
        symbol does not resolve, or fewer than quantity shares are held.
        Selling the whole position removes the symbol from holdings.

        Returns:
            TradeResult; FILLED with the recorded Trade, or REJECTED with a reason.
        """
        try:
            instrument, quantity = self._resolve(market, symbol, quantity)
            held = self.portfolio.shares_of(instrument.symbol)
            if held < quantity:
                raise InsufficientShares(
                    f"Cannot sell {quantity} {instrument.symbol}, only {held} held"
                )
        except TradingError as e:
            return self._reject(e)

        trade = self._build_trade(TradeSide.SELL, instrument, quantity)
        self._cash += trade.notional
        self.portfolio.remove_shares(instrument.symbol, quantity)
        return self._commit(trade)

    # ========================================================================
    # INTERNAL HELPERS
    # ========================================================================

    @staticmethod
    def _resolve(market: Market, symbol: str, quantity: int) -> Tuple[Instrument, int]:
        """
        Check quantity and symbol; raises InvalidQuantity or UnknownSymbol.

        Any integral type except bool is accepted (numpy integers included)
        and normalised to a plain int.
        """
        if isinstance(quantity, bool) or not isinstance(quantity, Integral) or quantity <= 0:
            raise InvalidQuantity(f"Quantity must be a positive integer, got {quantity!r}")
        return market.get_instrument(symbol), int(quantity)

    def _build_trade(self, side: TradeSide, instrument: Instrument, quantity: int) -> Trade:
        # Built before any mutation so a failure here leaves the account untouched.
        sequence = len(self._trades)
        return Trade(
            side=side,
            symbol=instrument.symbol,
            quantity=quantity,
            unit_price=instrument.price,
            timestamp=self._clock(),
            sequence_number=sequence,
            trade_id=f"trade:{self.name}:{sequence:06d}",
        )

    def _commit(self, trade: Trade) -> TradeResult:
        self._trades.append(trade)
        result = TradeResult.filled(trade)
        if self.verbose:
            print(f"✓ APPLIED: {result.message} | cash {format_money(self._cash)}")
        return result

    def _reject(self, error: TradingError) -> TradeResult:
        if self.verbose:
            print(f"✗ REJECTED: {error}")
        return TradeResult.rejected(error)

    def __repr__(self) -> str:
        return (
            f"Account({self.name!r}, cash={self._cash}, "
            f"holdings={len(self.portfolio)}, trades={len(self._trades)})"
        )
