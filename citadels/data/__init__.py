"""Bundled card data."""
