"""Storefront support chatbot."""

__version__ = "0.1.0"
