"""
conftest.py - Shared pytest fixtures for papertrade tests

Provides common fixtures used across unit, functional and conformance tests:
- Markets with frozen prices (walk draws 0%)
- Accounts with a fixed clock
- Sessions wiring the two together
"""

import pytest
from datetime import datetime
from decimal import Decimal

from papertrade import (
    Account, Market, TradingSession,
    create_default_market,
)

from tests.fake_generator import FixedGenerator


FIXED_TIME = datetime(2025, 1, 2, 9, 30)


def fixed_clock() -> datetime:
    return FIXED_TIME


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def frozen_market() -> Market:
    """Default market whose walk leaves every price unchanged."""
    return create_default_market(rng=FixedGenerator(0.0), verbose=False)


def new_account(name: str = "tester", cash: str = "10000.00") -> Account:
    return Account(name, starting_cash=Decimal(cash), clock=fixed_clock, verbose=False)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def market() -> Market:
    return frozen_market()


@pytest.fixture
def account() -> Account:
    return new_account()


@pytest.fixture
def funded_account(market, account) -> Account:
    """Account that already holds 10 AAPL bought at 170.00 (cash 8300.00)."""
    assert account.buy(market, "AAPL", 10)
    return account


@pytest.fixture
def session(market, account) -> TradingSession:
    return TradingSession(market, account)
