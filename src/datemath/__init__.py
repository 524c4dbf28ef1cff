"""datemath — natural-language date arithmetic."""

__version__ = "0.1.0"
