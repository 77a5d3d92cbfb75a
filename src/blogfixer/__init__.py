"""Blogfixer: scan and repair Shopify blog article HTML."""

__version__ = "0.1.0"
