"""BANKRANK: where Aave's net deposits would rank among U.S. banks."""

__version__ = "0.1.0"
