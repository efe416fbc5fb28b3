"""
market.py - Synthetic Market of Priced Instruments

The Market owns the instrument universe and is the only object that moves
prices.

Key responsibilities:
    - Registers instruments, at most one per symbol (case-insensitive)
    - Case-insensitive lookup that always returns the same Instrument object
    - Implements the PriceView protocol for valuation
    - Applies the random walk with an injected random source
"""

from __future__ import annotations
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Tuple

from .core import (
    Instrument, Numeric, UnknownSymbol,
    DEFAULT_INSTRUMENTS, MAX_PRICE_CHANGE, PRICE_FLOOR,
    canonical_symbol, format_money,
)
from .walk import PriceGenerator, compute_walk, default_generator


class Market:
    """
    Registry of instruments with a synthetic price walk.

    Implements the PriceView protocol, so a Market can be passed to
    Portfolio.valuation() and Account.summary() directly.

    Thread Safety:
        Not thread-safe. A multi-caller deployment must serialise
        apply_random_walk() against lookups.

    Example:
        market = Market(seed=7, verbose=False)
        market.register_instrument(Instrument("AAPL", "Apple Inc.", "170.00"))
        market.lookup("aapl").price        # Decimal('170.00')
        market.apply_random_walk()
    """

    def __init__(
        self,
        instruments: Optional[Iterable[Instrument]] = None,
        rng: Optional[PriceGenerator] = None,
        seed: Optional[int] = None,
        verbose: bool = True,
    ):
        """
        Create a market.

        Args:
            instruments: Initial instruments, registered in order
            rng: Random source for the price walk. Takes precedence over seed.
            seed: Seed for the default numpy generator when rng is not given
            verbose: Print a line per price walk (default: True)
        """
        self._instruments: Dict[str, Instrument] = {}
        self.rng: PriceGenerator = rng if rng is not None else default_generator(seed)
        self.verbose = verbose
        self.tick_count: int = 0
        for instrument in instruments or ():
            self.register_instrument(instrument)

    # ========================================================================
    # PriceView PROTOCOL IMPLEMENTATION (read-only methods)
    # ========================================================================

    def get_price(self, symbol: str) -> Optional[Decimal]:
        """Current price of a symbol, or None if it does not resolve."""
        instrument = self.lookup(symbol)
        return instrument.price if instrument is not None else None

    # ========================================================================
    # LOOKUP
    # ========================================================================

    def lookup(self, symbol: str) -> Optional[Instrument]:
        """
        Find an instrument by symbol, ignoring case.

        Returns:
            The registered Instrument (same object for any casing), or None.
        """
        if not isinstance(symbol, str):
            return None
        return self._instruments.get(canonical_symbol(symbol))

    def get_instrument(self, symbol: str) -> Instrument:
        """
        Find an instrument by symbol, ignoring case.

        Raises:
            UnknownSymbol: If no instrument matches
        """
        instrument = self.lookup(symbol)
        if instrument is None:
            raise UnknownSymbol(f"Unknown symbol: {symbol}")
        return instrument

    def list_instruments(self) -> List[Instrument]:
        """All instruments in registration order."""
        return list(self._instruments.values())

    def prices(self) -> Dict[str, Decimal]:
        """Snapshot of symbol -> current price."""
        return {inst.symbol: inst.price for inst in self._instruments.values()}

    def __contains__(self, symbol: object) -> bool:
        return isinstance(symbol, str) and self.lookup(symbol) is not None

    def __len__(self) -> int:
        return len(self._instruments)

    # ========================================================================
    # REGISTRATION (Mutating)
    # ========================================================================

    def register_instrument(self, instrument: Instrument) -> Instrument:
        """
        Add an instrument to the market.

        Raises:
            ValueError: If an instrument with the same symbol (any case) exists
        """
        key = canonical_symbol(instrument.symbol)
        if key in self._instruments:
            raise ValueError(f"Instrument {instrument.symbol} already registered")
        self._instruments[key] = instrument
        return instrument

    # ========================================================================
    # PRICE WALK (Mutating)
    # ========================================================================

    def apply_random_walk(self) -> Dict[str, Decimal]:
        """
        Move every price by an independent uniform change in [-5%, +5%).

        New prices are computed for the whole market first and committed
        afterwards, so a lookup never sees a half-updated market. Prices are
        clamped to the floor (1.00). Both bounds are fixed.

        Returns:
            Dictionary mapping symbol to its new price.
        """
        new_prices = compute_walk(self._instruments.values(), self.rng, MAX_PRICE_CHANGE, PRICE_FLOOR)
        for instrument in self._instruments.values():
            instrument.price = new_prices[instrument.symbol]
        self.tick_count += 1
        if self.verbose:
            moves = ", ".join(f"{sym} {format_money(p)}" for sym, p in new_prices.items())
            print(f"~ TICK {self.tick_count}: {moves}")
        return new_prices

    def __repr__(self) -> str:
        return f"Market({len(self._instruments)} instruments, tick={self.tick_count})"


def create_default_market(
    rng: Optional[PriceGenerator] = None,
    seed: Optional[int] = None,
    instruments: Iterable[Tuple[str, str, Numeric]] = DEFAULT_INSTRUMENTS,
    verbose: bool = True,
) -> Market:
    """
    Create a market seeded with the default instrument universe.

    Args:
        rng: Random source for the walk (takes precedence over seed)
        seed: Seed for the default generator
        instruments: (symbol, name, price) tuples; defaults to
                     AAPL, GOOGL, MSFT and TSLA
        verbose: Passed through to Market

    Returns:
        A new Market with fresh Instrument objects.
    """
    return Market(
        instruments=[Instrument(symbol, name, price) for symbol, name, price in instruments],
        rng=rng,
        seed=seed,
        verbose=verbose,
    )
