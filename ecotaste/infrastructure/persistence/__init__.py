"""Persistence adapters for the ledger and the menu catalog."""
