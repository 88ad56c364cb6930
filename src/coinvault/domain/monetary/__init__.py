"""Monetary domain package.

This package contains the denomination registry of an item-based currency: denomination
value types, stack valuation with container unwrapping, and the denomination-breakdown
formatter. All amounts are integer cents internally.
"""
