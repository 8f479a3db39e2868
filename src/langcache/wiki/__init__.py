"""Wikipedia multilingual article pipeline."""

from langcache.wiki.client import ApiPayload, WikiClient, api_url
from langcache.wiki.fetcher import WikiFetcher, validate_title

__all__ = ["ApiPayload", "WikiClient", "WikiFetcher", "api_url", "validate_title"]
