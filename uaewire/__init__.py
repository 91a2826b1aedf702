"""uaewire - UAE news and place photography ingestion pipeline."""

__version__ = "0.1.0"
