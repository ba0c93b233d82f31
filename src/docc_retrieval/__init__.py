"""Resolve documentation URLs to DocC JSON and decode them."""

__version__ = "0.1.0"
