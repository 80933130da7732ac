"""lineproto - session engine for line-oriented control channel protocols."""

__version__ = "0.1.0"
