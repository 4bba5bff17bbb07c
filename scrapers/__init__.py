"""
Scrapers Module
"""
from .base import BaseScraper
from .youtube_scraper import YouTubeScraper
from .reddit_scraper import RedditScraper

__all__ = [
    "BaseScraper",
    "YouTubeScraper",
    "RedditScraper",
]
