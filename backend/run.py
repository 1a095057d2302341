#!/usr/bin/env python3
"""
Entry point for running the Expense Tracker server from a checkout.

Usage:
    python run.py [--port PORT] [--host HOST] [--db PATH]
"""

from expense_tracker.cli import main


if __name__ == "__main__":
    main()
