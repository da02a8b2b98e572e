"""Read-only gateway in front of The Odds API with local parlay pricing."""

__version__ = "0.1.0"
