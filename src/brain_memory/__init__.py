"""Brain Memory: a tiered, decaying pattern store for autonomous agents."""

__version__ = "1.0.0"
