"""
walk.py - Synthetic random-walk price evolution

Provides the injectable random source and the pure functions behind
Market.apply_random_walk():

- PriceGenerator: Protocol for the random source (numpy Generator compatible)
- default_generator(): seeded numpy Generator
- draw_change(): one uniform percentage draw in [-5%, +5%)
- next_price(): apply a change and clamp to the price floor
- compute_walk(): new prices for a whole market, without mutating it

Every instrument gets its own independent draw; there is no correlation
between instruments and no drift.
"""

from __future__ import annotations
from decimal import Decimal
from typing import Dict, Iterable, Optional, Protocol, runtime_checkable

import numpy as np

from .core import Instrument, MAX_PRICE_CHANGE, PRICE_FLOOR, to_decimal


@runtime_checkable
class PriceGenerator(Protocol):
    """
    Protocol for the random source used by the price walk.

    ``numpy.random.Generator`` satisfies it. Tests inject deterministic
    implementations so walk sequences are reproducible.
    """

    def uniform(self, low: float, high: float) -> float:
        """Draw from the half-open interval [low, high)."""
        ...


def default_generator(seed: Optional[int] = None) -> PriceGenerator:
    """
    Create the default random source.

    Args:
        seed: Optional seed. Two generators built with the same seed produce
              the same walk.

    Returns:
        A numpy Generator (PCG64).
    """
    return np.random.default_rng(seed)


def draw_change(rng: PriceGenerator, max_change: Decimal = MAX_PRICE_CHANGE) -> Decimal:
    """Draw one percentage change in [-max_change, +max_change) as a Decimal."""
    bound = float(max_change)
    return to_decimal(float(rng.uniform(-bound, bound)))


def next_price(price: Decimal, change: Decimal, floor: Decimal = PRICE_FLOOR) -> Decimal:
    """
    Apply a percentage change to a price.

    Args:
        price: Current price
        change: Fractional change (0.05 means +5%)
        floor: Minimum resulting price

    Returns:
        max(floor, price * (1 + change))
    """
    return max(floor, price * (Decimal(1) + change))


def compute_walk(
    instruments: Iterable[Instrument],
    rng: PriceGenerator,
    max_change: Decimal = MAX_PRICE_CHANGE,
    floor: Decimal = PRICE_FLOOR,
) -> Dict[str, Decimal]:
    """
    Compute one walk step for every instrument without mutating any of them.

    Draws happen in iteration order, so for a seeded generator the result
    depends only on the seed and the instrument order.

    Returns:
        Dictionary mapping instrument symbol to its new price.
    """
    return {
        inst.symbol: next_price(inst.price, draw_change(rng, max_change), floor)
        for inst in instruments
    }
