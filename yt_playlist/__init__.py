"""Add or remove videos on a YouTube playlist through the Data API."""

__version__ = "1.0.0"
