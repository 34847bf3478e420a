from .query import filter_listings, override_listing, summarize_listings

__all__ = ["filter_listings", "summarize_listings", "override_listing"]
