from .run import SourceCrawler, build_store, run_scrape

__all__ = ["SourceCrawler", "build_store", "run_scrape"]
