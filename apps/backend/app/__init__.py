"""Storefront support chat backend."""
