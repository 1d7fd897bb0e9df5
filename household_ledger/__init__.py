"""Household ledger reconciliation and forecasting engine"""

__version__ = "0.1.0"
