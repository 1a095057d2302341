"""Personal expense tracker: categories, monthly budgets and spending reports."""

__version__ = "0.1.0"
