"""rocketcart - stock-aware shopping cart store."""

__version__ = "1.0.0"
