"""Market Scout: opportunity and profitability scoring for product categories."""

__version__ = "1.0.0"
