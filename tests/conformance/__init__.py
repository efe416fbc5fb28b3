"""
Conformance Test Suite

Property-based checks of the invariants every trade must preserve:
1. test_conservation.py - cash and shares are neither created nor destroyed
2. test_atomicity.py - rejected trades change nothing
3. test_holdings.py - stored share counts are always positive
4. test_price_floor.py - no price falls below 1.00
5. test_determinism.py - seeded walks replay identically

These tests use hypothesis for property-based testing.
"""
