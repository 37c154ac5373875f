"""Personal search engine building blocks: scraping, indexing and URL importers."""

__version__ = "0.1.0"