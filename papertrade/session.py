"""
session.py - One Market, One Account

TradingSession bundles the market and the account for a single run and
exposes the operations an interactive front end needs: list instruments,
view the account, buy, sell, advance prices by one tick, and terminate.

The session adds no trading rules of its own; everything is delegated to
Market and Account.
"""

from __future__ import annotations
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from .account import Account, AccountSummary
from .core import DEFAULT_STARTING_CASH, Instrument, Numeric, SessionClosed, TradeResult
from .market import Market, create_default_market
from .walk import PriceGenerator


class TradingSession:
    """
    A running paper-trading session.

    The session owns the Market; the Account only ever receives it as an
    argument. After close() every operation raises SessionClosed.
    """

    def __init__(self, market: Market, account: Account):
        self.market = market
        self.account = account
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise SessionClosed(f"Session for {self.account.name} is closed")

    def list_instruments(self) -> List[Instrument]:
        self._check_open()
        return self.market.list_instruments()

    def view_account(self) -> AccountSummary:
        self._check_open()
        return self.account.summary(self.market)

    def buy(self, symbol: str, quantity: int) -> TradeResult:
        self._check_open()
        return self.account.buy(self.market, symbol, quantity)

    def sell(self, symbol: str, quantity: int) -> TradeResult:
        self._check_open()
        return self.account.sell(self.market, symbol, quantity)

    def tick(self) -> Dict[str, Decimal]:
        """Apply one random-walk step to the market."""
        self._check_open()
        return self.market.apply_random_walk()

    def close(self) -> AccountSummary:
        """Terminate the session and return the final account summary."""
        self._check_open()
        summary = self.account.summary(self.market)
        self._closed = True
        return summary

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"TradingSession({self.account!r}, {self.market!r}, {state})"


def create_session(
    name: str,
    starting_cash: Numeric = DEFAULT_STARTING_CASH,
    seed: Optional[int] = None,
    rng: Optional[PriceGenerator] = None,
    clock: Callable[[], datetime] = datetime.now,
    verbose: bool = True,
) -> TradingSession:
    """
    Create a session over the default market.

    Args:
        name: Account owner
        starting_cash: Opening cash (default: 10000.00)
        seed: Seed for the market's random walk
        rng: Explicit random source (takes precedence over seed)
        clock: Trade timestamp source
        verbose: Passed to both Market and Account
    """
    market = create_default_market(rng=rng, seed=seed, verbose=verbose)
    account = Account(name, starting_cash=starting_cash, clock=clock, verbose=verbose)
    return TradingSession(market, account)
