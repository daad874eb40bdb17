"""CLI commands for TradeJournal.

This package provides the command-line interface for TradeJournal,
including authentication, the monthly journal, insights and settings.
"""

from tradejournal.cli.main import cli, main

__all__ = ["cli", "main"]
