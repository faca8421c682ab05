"""Pico POS: a terminal point-of-sale for a small café."""

__version__ = "0.1.0"
