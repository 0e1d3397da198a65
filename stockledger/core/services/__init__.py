"""Pure domain services."""

from stockledger.core.services import ledger, reporting, row_import

__all__ = ["ledger", "reporting", "row_import"]
