"""
Conservation Conformance Tests

INVARIANT: Trades exchange cash for shares at the trade price; they never
create or destroy value.

    At fixed prices, for any sequence of buys and sells:
        cash + Σ shares(s) * price(s) = starting cash

    At any prices:
        cash = starting cash - Σ buy notionals + Σ sell notionals
        shares(s) = Σ bought(s) - Σ sold(s)
"""

from collections import defaultdict
from decimal import Decimal

from hypothesis import given, settings
from hypothesis import strategies as st

from papertrade import TradeSide, create_default_market

from tests.conftest import frozen_market, new_account


SYMBOLS = ["AAPL", "GOOGL", "MSFT", "TSLA", "aapl", "ZZZZ"]

trade_op = st.tuples(
    st.sampled_from(["buy", "sell"]),
    st.sampled_from(SYMBOLS),
    st.integers(min_value=-2, max_value=40),
)

walk_op = st.just(("tick", None, None))


def _apply(account, market, op):
    side, symbol, quantity = op
    if side == "tick":
        market.apply_random_walk()
    elif side == "buy":
        account.buy(market, symbol, quantity)
    else:
        account.sell(market, symbol, quantity)


class TestConservationProperties:

    @given(st.lists(trade_op, max_size=60))
    @settings(max_examples=100, deadline=None)
    def test_equity_constant_at_fixed_prices(self, ops):
        """
        PROPERTY: With prices frozen, cash plus holdings at those prices
        never changes.
        """
        market = frozen_market()
        account = new_account()
        start = account.cash

        for op in ops:
            _apply(account, market, op)
            assert account.total_value(market) == start

    @given(
        st.lists(st.one_of(trade_op, walk_op), max_size=60),
        st.integers(min_value=0, max_value=2**32 - 1),
    )
    @settings(max_examples=100, deadline=None)
    def test_cash_and_shares_reconcile_with_history(self, ops, seed):
        """
        PROPERTY: Cash and holdings always equal what the trade history
        says they should be, even while prices move.
        """
        market = create_default_market(seed=seed, verbose=False)
        account = new_account()
        start = account.cash

        for op in ops:
            _apply(account, market, op)

        expected_cash = start
        expected_shares = defaultdict(int)
        for trade in account.history():
            if trade.side is TradeSide.BUY:
                expected_cash -= trade.notional
                expected_shares[trade.symbol] += trade.quantity
            else:
                expected_cash += trade.notional
                expected_shares[trade.symbol] -= trade.quantity

        assert abs(account.cash - expected_cash) < Decimal("1e-30")
        assert account.portfolio.holdings() == {
            symbol: qty for symbol, qty in expected_shares.items() if qty
        }


class TestConservationExamples:

    @given(
        st.sampled_from(["AAPL", "GOOGL", "MSFT", "TSLA"]),
        st.integers(min_value=1, max_value=3),
    )
    @settings(max_examples=50, deadline=None)
    def test_buy_then_sell_restores_cash_exactly(self, symbol, quantity):
        market = frozen_market()
        account = new_account()
        assert account.buy(market, symbol, quantity)
        assert account.sell(market, symbol, quantity)
        assert account.cash == Decimal("10000.00")
        assert account.portfolio.is_empty()

    def test_buy_debits_exactly_notional(self):
        market = frozen_market()
        account = new_account()
        trade = account.buy(market, "TSLA", 7).trade
        assert account.cash == Decimal("10000.00") - trade.notional
