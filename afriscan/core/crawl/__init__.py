from .crawler import PageFetcher, crawl_source, parse_listings_page

__all__ = ["PageFetcher", "crawl_source", "parse_listings_page"]
