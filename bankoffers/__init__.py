"""Flipkart bank offer ingestion and best-discount lookup."""

__version__ = "1.0.0"
