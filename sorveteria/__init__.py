"""Sorveteria profile API and display page."""

__version__ = "0.1.0"
