"""Inventory tracking backend with a consistent stock ledger."""

__version__ = "1.0.0"
