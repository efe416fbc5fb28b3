"""
Atomicity Conformance Tests

INVARIANT: Trades are all-or-nothing.

    ∀ trade T:
        T filled ⟹ cash, holdings and history all reflect T
        T rejected ⟹ cash, holdings and history are unchanged

Partial application is impossible by construction.
"""

from decimal import Decimal

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from papertrade import RejectReason, TradeStatus

from tests.conftest import frozen_market, new_account


class TestAtomicityProperties:

    @given(
        st.sampled_from(["buy", "sell"]),
        st.sampled_from(["AAPL", "MSFT"]),
        st.integers(max_value=0),
    )
    @settings(max_examples=50)
    def test_invalid_quantity_changes_nothing(self, side, symbol, quantity):
        market = frozen_market()
        account = new_account()
        account.buy(market, "AAPL", 5)
        before = account.snapshot()

        result = getattr(account, side)(market, symbol, quantity)

        assert result.reason is RejectReason.INVALID_QUANTITY
        assert account.snapshot() == before

    @given(
        st.sampled_from(["buy", "sell"]),
        st.text(min_size=1, max_size=6).filter(
            lambda s: s.upper() not in {"AAPL", "GOOGL", "MSFT", "TSLA"}
        ),
        st.integers(min_value=1, max_value=100),
    )
    @settings(max_examples=50)
    def test_unknown_symbol_changes_nothing(self, side, symbol, quantity):
        market = frozen_market()
        account = new_account()
        account.buy(market, "AAPL", 5)
        before = account.snapshot()

        result = getattr(account, side)(market, symbol, quantity)

        assert result.reason is RejectReason.UNKNOWN_SYMBOL
        assert account.snapshot() == before

    @given(st.integers(min_value=59, max_value=10_000))
    @settings(max_examples=50)
    def test_unaffordable_buy_changes_nothing(self, quantity):
        market = frozen_market()
        account = new_account()
        before = account.snapshot()

        result = account.buy(market, "AAPL", quantity)

        assert result.reason is RejectReason.INSUFFICIENT_FUNDS
        assert account.snapshot() == before

    @given(st.integers(min_value=0, max_value=20), st.integers(min_value=1, max_value=50))
    @settings(max_examples=50)
    def test_oversized_sell_changes_nothing(self, held, extra):
        market = frozen_market()
        account = new_account()
        if held:
            account.buy(market, "MSFT", held)
        before = account.snapshot()

        result = account.sell(market, "MSFT", held + extra)

        assert result.reason is RejectReason.INSUFFICIENT_SHARES
        assert account.snapshot() == before

    @given(st.sampled_from(["AAPL", "GOOGL", "MSFT", "TSLA"]), st.integers(min_value=1, max_value=3))
    @settings(max_examples=50)
    def test_filled_trade_touches_all_three(self, symbol, quantity):
        market = frozen_market()
        account = new_account()
        before = account.snapshot()

        result = account.buy(market, symbol, quantity)

        assert result.status is TradeStatus.FILLED
        after = account.snapshot()
        assert after.cash == before.cash - result.trade.notional
        assert after.holdings_dict() == {symbol: quantity}
        assert after.trades == before.trades + (result.trade,)


class TestAtomicityExamples:

    @pytest.mark.parametrize("side, symbol, quantity, reason", [
        ("buy", "AAPL", 0, RejectReason.INVALID_QUANTITY),
        ("buy", "AAPL", -3, RejectReason.INVALID_QUANTITY),
        ("buy", "NOPE", 1, RejectReason.UNKNOWN_SYMBOL),
        ("buy", "GOOGL", 3, RejectReason.INSUFFICIENT_FUNDS),
        ("sell", "AAPL", 11, RejectReason.INSUFFICIENT_SHARES),
        ("sell", "TSLA", 1, RejectReason.INSUFFICIENT_SHARES),
        ("sell", "NOPE", 1, RejectReason.UNKNOWN_SYMBOL),
    ])
    def test_every_reject_reason_is_atomic(self, side, symbol, quantity, reason):
        market = frozen_market()
        account = new_account()
        account.buy(market, "AAPL", 10)
        before = account.snapshot()
        assert before.cash == Decimal("8300.00")

        result = getattr(account, side)(market, symbol, quantity)

        assert result.reason is reason
        assert account.snapshot() == before
