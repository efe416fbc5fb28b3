#!/usr/bin/env python3
"""
demo.py - Interactive Paper-Trading Menu

A thin text front end over papertrade.TradingSession. It parses what the
user types, calls the engine, and prints what comes back. All state lives
in the session.

MENU:
  1  View market data
  2  View portfolio (cash, holdings, valuation, trade history)
  3  Buy stock
  4  Sell stock
  5  Update market prices (one random-walk tick)
  6  Exit

Run:
    python demo.py                         # Prompts for a name
    python demo.py --name alice --seed 42  # Reproducible prices
    python demo.py --cash 25000
"""

import argparse
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, List, Optional

from papertrade import (
    AccountSummary, Instrument, TradingSession,
    DEFAULT_STARTING_CASH,
    create_session, format_money, to_decimal,
)


# ============================================================================
# CONFIGURATION
# ============================================================================

@dataclass
class DemoConfig:
    """Options for one run. Filled from the command line."""
    name: Optional[str] = None
    starting_cash: Decimal = DEFAULT_STARTING_CASH
    seed: Optional[int] = None


MENU = """
-----------------------------
1. View Market Data
2. View Portfolio
3. Buy Stock
4. Sell Stock
5. Update Market Prices
6. Exit"""


# ============================================================================
# INPUT PARSING
# ============================================================================

def parse_quantity(text: str) -> Optional[int]:
    """Parse a share count typed by the user; None unless it is a positive integer."""
    try:
        quantity = int(text.strip())
    except (ValueError, AttributeError):
        return None
    return quantity if quantity > 0 else None


def parse_choice(text: str) -> Optional[int]:
    try:
        return int(text.strip())
    except ValueError:
        return None


# ============================================================================
# RENDERING
# ============================================================================

def render_market(instruments: List[Instrument], write: Callable[[str], None]) -> None:
    write("\n--- Market Data ---")
    for instrument in instruments:
        write(str(instrument))


def render_holdings(summary: AccountSummary, write: Callable[[str], None]) -> None:
    write("\n--- Portfolio ---")
    if not summary.holdings:
        write("No holdings.")
        return
    for row in summary.holdings:
        write(f"{row.symbol} ({row.name}) - {format_money(row.price)}, Shares: {row.shares}")
    write(f"Total Portfolio Value: {format_money(summary.holdings_value)}")


def render_account(summary: AccountSummary, write: Callable[[str], None]) -> None:
    write(f"\nUser: {summary.name}")
    write(f"Cash Balance: {format_money(summary.cash)}")
    render_holdings(summary, write)
    write("\n--- Transaction History ---")
    if not summary.trades:
        write("No transactions yet.")
    for trade in summary.trades:
        write(str(trade))


# ============================================================================
# MENU LOOP
# ============================================================================

def _trade(session: TradingSession, side: str, read: Callable[[str], str],
           write: Callable[[str], None]) -> None:
    symbol = read(f"Enter stock symbol to {side}: ").strip().upper()
    quantity = parse_quantity(read("Enter number of shares: "))
    if quantity is None:
        write("Invalid number of shares.")
        return
    action = session.buy if side == "buy" else session.sell
    result = action(symbol, quantity)
    if result:
        verb = "bought" if side == "buy" else "sold"
        write(f"Successfully {verb} {quantity} shares of {symbol}")
    else:
        write(f"{side.capitalize()} failed: {result.message}")


def run(
    session: TradingSession,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> AccountSummary:
    """
    Drive a session from the menu until the user exits.

    Args:
        session: Session to operate on
        read: Prompt-and-read function (input() by default)
        write: Output function (print() by default)

    Returns:
        The final account summary from session.close().
    """
    write(f"\nWelcome to the Stock Trading Platform, {session.account.name}!")
    while True:
        write(MENU)
        choice = parse_choice(read("Enter your choice: "))
        if choice == 1:
            render_market(session.list_instruments(), write)
        elif choice == 2:
            render_account(session.view_account(), write)
        elif choice == 3:
            render_market(session.list_instruments(), write)
            _trade(session, "buy", read, write)
        elif choice == 4:
            render_holdings(session.view_account(), write)
            _trade(session, "sell", read, write)
        elif choice == 5:
            session.tick()
            write("Market prices updated!")
        elif choice == 6:
            write("Thank you for using the Stock Trading Platform. Goodbye!")
            return session.close()
        else:
            write("Invalid choice. Try again.")


def _parse_args(argv: Optional[List[str]] = None) -> DemoConfig:
    parser = argparse.ArgumentParser(description="Interactive paper-trading simulator.")
    parser.add_argument("--name", default=None, help="Account name (prompted if omitted).")
    parser.add_argument("--cash", default=str(DEFAULT_STARTING_CASH),
                        help="Starting cash (default: 10000.00).")
    parser.add_argument("--seed", default=None, type=int,
                        help="Seed for the price walk (default: unseeded).")
    args = parser.parse_args(argv)
    try:
        cash = to_decimal(args.cash)
    except ValueError:
        parser.error(f"invalid --cash value: {args.cash}")
    if cash < 0:
        parser.error(f"--cash cannot be negative: {args.cash}")
    return DemoConfig(name=args.name, starting_cash=cash, seed=args.seed)


def main(argv: Optional[List[str]] = None) -> None:
    config = _parse_args(argv)
    name = config.name or input("Enter your name: ").strip() or "trader"
    session = create_session(name, starting_cash=config.starting_cash,
                             seed=config.seed, verbose=False)
    run(session)


if __name__ == "__main__":
    main()
