"""Supplier aggregation and hotel normalisation."""

__version__ = "0.1.0"
