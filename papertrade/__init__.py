"""
papertrade - Paper-Trading Engine

A single-user trading simulator: a synthetic market of priced instruments,
an account holding cash and shares, and a ledger of executed trades.

Usage:
    from papertrade import create_default_market, Account

    market = create_default_market(seed=42)
    account = Account("alice")               # 10000.00 starting cash

    result = account.buy(market, "AAPL", 10)
    if result:
        print(result.trade)
    else:
        print(result.reason, result.message)

    market.apply_random_walk()               # every price moves by [-5%, +5%)
    summary = account.summary(market)
    print(summary.holdings_value, summary.total_value)
"""

# Core types
from .core import (
    PriceView,
    InstrumentLookup,
    Instrument,
    Trade,
    TradeResult,
    TradeSide,
    TradeStatus,
    RejectReason,
    TradingError,
    InvalidQuantity,
    UnknownSymbol,
    InsufficientFunds,
    InsufficientShares,
    SessionClosed,
    error_for,
    to_decimal,
    round_money,
    format_money,
    canonical_symbol,
    PRICE_FLOOR,
    MIN_PRICE,
    MAX_PRICE_CHANGE,
    DEFAULT_STARTING_CASH,
    CASH_DECIMAL_PLACES,
    DEFAULT_INSTRUMENTS,
)

# Price walk
from .walk import (
    PriceGenerator,
    default_generator,
    draw_change,
    next_price,
    compute_walk,
)

# Market
from .market import Market, create_default_market

# Holdings
from .portfolio import Portfolio, Holding

# Account
from .account import Account, AccountSnapshot, AccountSummary

# Session
from .session import TradingSession, create_session

__all__ = [
    # Core
    'PriceView', 'InstrumentLookup', 'Instrument', 'Trade', 'TradeResult',
    'TradeSide', 'TradeStatus', 'RejectReason',
    'TradingError', 'InvalidQuantity', 'UnknownSymbol',
    'InsufficientFunds', 'InsufficientShares', 'SessionClosed', 'error_for',
    'to_decimal', 'round_money', 'format_money', 'canonical_symbol',
    'PRICE_FLOOR', 'MIN_PRICE', 'MAX_PRICE_CHANGE', 'DEFAULT_STARTING_CASH',
    'CASH_DECIMAL_PLACES', 'DEFAULT_INSTRUMENTS',
    # Price walk
    'PriceGenerator', 'default_generator', 'draw_change', 'next_price', 'compute_walk',
    # Market
    'Market', 'create_default_market',
    # Holdings
    'Portfolio', 'Holding',
    # Account
    'Account', 'AccountSnapshot', 'AccountSummary',
    # Session
    'TradingSession', 'create_session',
]

__version__ = '1.0.0'
