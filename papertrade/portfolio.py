"""
portfolio.py - Holdings Ledger

Per-account mapping of symbol to share count.

The Portfolio does no validation of its own: Account checks a trade before
touching it. Its only rule is that a count never sits at zero. Selling the
whole position (or more) deletes the entry, so presence in the mapping
always means a positive holding.
"""

from __future__ import annotations
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, Iterator, List

from .core import InstrumentLookup, PriceView


@dataclass(frozen=True, slots=True)
class Holding:
    """One valued holdings row: shares of a symbol at the current price."""
    symbol: str
    name: str
    shares: int
    price: Decimal

    @property
    def market_value(self) -> Decimal:
        return self.price * self.shares


class Portfolio:
    """
    Symbol -> positive share count.

    Symbols are stored exactly as given; Account always passes the
    instrument's canonical symbol.
    """

    def __init__(self):
        self._holdings: Dict[str, int] = {}

    def add_shares(self, symbol: str, quantity: int) -> None:
        """Add shares to a position, creating it if absent."""
        self._holdings[symbol] = self._holdings.get(symbol, 0) + quantity

    def remove_shares(self, symbol: str, quantity: int) -> None:
        """
        Remove shares from a position.

        If quantity >= the current count the entry is deleted entirely,
        never left at zero or negative.
        """
        current = self._holdings.get(symbol, 0)
        if current <= quantity:
            self._holdings.pop(symbol, None)
        else:
            self._holdings[symbol] = current - quantity

    def shares_of(self, symbol: str) -> int:
        """Shares held of a symbol; 0 if absent."""
        return self._holdings.get(symbol, 0)

    def holdings(self) -> Dict[str, int]:
        """Copy of the symbol -> shares mapping."""
        return dict(self._holdings)

    def symbols(self) -> List[str]:
        return list(self._holdings)

    def is_empty(self) -> bool:
        return not self._holdings

    def valuation(self, prices: PriceView) -> Decimal:
        """
        Market value of all holdings at current prices.

        A symbol that no longer resolves in the price view contributes
        nothing; valuation never fails on a stale holding.

        Args:
            prices: Anything implementing PriceView (normally the Market)

        Returns:
            Sum of shares * price over resolvable holdings.
        """
        total = Decimal("0")
        for symbol, shares in self._holdings.items():
            price = prices.get_price(symbol)
            if price is not None:
                total += price * shares
        return total

    def positions(self, market: InstrumentLookup) -> List[Holding]:
        """
        Valued holdings rows for display, in acquisition order.

        Args:
            market: Anything implementing InstrumentLookup (normally the
                    Market); names come from the resolved instruments.

        Unresolvable symbols are skipped.
        """
        rows = []
        for symbol, shares in self._holdings.items():
            instrument = market.lookup(symbol)
            if instrument is None:
                continue
            rows.append(Holding(
                symbol=instrument.symbol,
                name=instrument.name,
                shares=shares,
                price=instrument.price,
            ))
        return rows

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._holdings

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._holdings))

    def __len__(self) -> int:
        return len(self._holdings)

    def __repr__(self) -> str:
        return f"Portfolio({self._holdings})"
