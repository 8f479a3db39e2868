"""TED talk transcript pipeline."""

from langcache.transcripts.fetcher import TranscriptFetcher, transcript_url

__all__ = ["TranscriptFetcher", "transcript_url"]
