"""Afriscan Property Finder: listing scraper, normalizer and feasibility screen."""

__version__ = "0.2.0"
